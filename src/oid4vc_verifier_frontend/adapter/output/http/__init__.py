from oid4vc_verifier_frontend.adapter.output.http.httpx_client import HttpxClient

__all__ = ["HttpxClient"]
