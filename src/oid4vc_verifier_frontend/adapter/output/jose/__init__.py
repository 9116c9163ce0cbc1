from oid4vc_verifier_frontend.adapter.output.jose.jose_service_impl import (
    JoserfcEphemeralKeyGenerator,
    JoserfcJarmVerifier,
)

__all__ = ["JoserfcEphemeralKeyGenerator", "JoserfcJarmVerifier"]
