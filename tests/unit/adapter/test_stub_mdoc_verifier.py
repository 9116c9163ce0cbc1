"""Tests for StubMdocVerifier"""

import pytest

from oid4vc_verifier_frontend.adapter.output.mdoc import StubMdocVerifier
from oid4vc_verifier_frontend.port.output import MdocVerificationError


class TestStubMdocVerifier:
    @pytest.mark.asyncio
    async def test_fails_closed(self):
        result = await StubMdocVerifier().verify("o2d2ZXJzaW9u")
        assert result.valid is False
        assert result.documents == []

    @pytest.mark.asyncio
    async def test_blank_token_is_technical_failure(self):
        with pytest.raises(MdocVerificationError):
            await StubMdocVerifier().verify("")
