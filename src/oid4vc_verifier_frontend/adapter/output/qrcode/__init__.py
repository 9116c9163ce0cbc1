from oid4vc_verifier_frontend.adapter.output.qrcode.qrcode_service_impl import QrCodeServiceImpl

__all__ = ["QrCodeServiceImpl"]
