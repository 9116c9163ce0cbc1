from oid4vc_verifier_frontend.adapter.output.device.is_mobile import default_is_mobile

__all__ = ["default_is_mobile"]
