"""Common test fixtures"""

import pytest

from oid4vc_verifier_frontend.config import create_test_config
from oid4vc_verifier_frontend.domain import FrontendConfig, Nonce

from tests.fakes import RecordingSession


@pytest.fixture
def config() -> FrontendConfig:
    """Test configuration"""
    return create_test_config()


@pytest.fixture
def fixed_nonce() -> Nonce:
    return Nonce(value="n-1")


@pytest.fixture
def session() -> RecordingSession:
    return RecordingSession()
