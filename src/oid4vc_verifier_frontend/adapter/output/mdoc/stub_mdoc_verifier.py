"""Placeholder MDOC verifier"""

import logging

from oid4vc_verifier_frontend.domain import MdocVerifyResult
from oid4vc_verifier_frontend.port.output import MdocVerificationError, MdocVerifier

log = logging.getLogger(__name__)


class StubMdocVerifier(MdocVerifier):
    """
    MDOC verifier that accepts nothing.

    Every well-formed token is reported as valid=False with no documents.
    Replace with a real ISO 18013-5 verifier in deployments.
    """

    async def verify(self, vp_token: str) -> MdocVerifyResult:
        if not isinstance(vp_token, str) or not vp_token.strip():
            raise MdocVerificationError("VP token cannot be blank")
        log.warning("No MDOC verifier configured, reporting presentation as not verified")
        return MdocVerifyResult(valid=False, documents=[])
