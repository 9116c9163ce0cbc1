"""Tests for InitTransactionImpl"""

import json
from urllib.parse import parse_qs, urlsplit

import pytest
from returns.result import Failure, Success

from oid4vc_verifier_frontend.adapter.output.cfg import (
    default_generate_wallet_redirect_uri,
    default_generate_wallet_response_redirect_uri_template,
)
from oid4vc_verifier_frontend.adapter.output.device import default_is_mobile
from oid4vc_verifier_frontend.adapter.output.prex import mdl_presentation_definition
from oid4vc_verifier_frontend.application import InitTransactionImpl
from oid4vc_verifier_frontend.application.init_transaction_impl import generate_request
from oid4vc_verifier_frontend.config import create_test_config
from oid4vc_verifier_frontend.domain import EphemeralECDHPrivateJwk, Nonce, PresentationId
from oid4vc_verifier_frontend.port.input import (
    GetWalletResponseError,
    GetWalletResponseErrorType,
    InitTransactionError,
    InitTransactionErrorType,
    InitTransactionRequest,
    ServiceError,
)
from oid4vc_verifier_frontend.port.output import SessionKey

from tests.fakes import (
    DESKTOP_UA,
    FAKE_PRIVATE_JWK,
    IPHONE_UA,
    FakeKeyGenerator,
    RecordingHttpClient,
    RecordingSession,
    http_error,
)

BACKEND_RESPONSE = {
    "presentation_id": "pid-1",
    "client_id": "c",
    "request_uri": "https://backend.example/r/1",
}


def make_use_case(config, http_client, key_generator=None, nonce="n-1") -> InitTransactionImpl:
    return InitTransactionImpl(
        config=config,
        http_client=http_client,
        ephemeral_key_generator=key_generator or FakeKeyGenerator(),
        generate_nonce=lambda: Nonce(value=nonce),
        generate_presentation_definition=mdl_presentation_definition,
        generate_wallet_response_redirect_uri_template=default_generate_wallet_response_redirect_uri_template,
        generate_wallet_redirect_uri=default_generate_wallet_redirect_uri,
        is_mobile=default_is_mobile,
    )


class TestGenerateRequest:
    """Tests for request body construction"""

    def public_jwk(self):
        return EphemeralECDHPrivateJwk.from_dict(FAKE_PRIVATE_JWK).derive_public()

    def test_nonce_is_propagated(self, config):
        """The generated nonce is sent unchanged"""
        body = generate_request(
            config,
            False,
            Nonce(value="n-42"),
            self.public_jwk(),
            mdl_presentation_definition,
            default_generate_wallet_response_redirect_uri_template,
        )
        assert body.nonce == "n-42"

    def test_template_only_for_mobile(self, config):
        """Mobile requests carry the redirect template, desktop requests do not"""
        args = (Nonce(value="n-1"), self.public_jwk(), mdl_presentation_definition,
                default_generate_wallet_response_redirect_uri_template)

        mobile = generate_request(config, True, *args)
        desktop = generate_request(config, False, *args)

        assert mobile.wallet_response_redirect_uri_template == (
            "http://localhost:3000/result?response_code={RESPONSE_CODE}"
        )
        assert desktop.wallet_response_redirect_uri_template is None
        assert "wallet_response_redirect_uri_template" not in desktop.to_wire()

    def test_wire_format(self, config):
        body = generate_request(
            config,
            False,
            Nonce(value="n-1"),
            self.public_jwk(),
            mdl_presentation_definition,
            default_generate_wallet_response_redirect_uri_template,
        ).to_wire()

        assert body["type"] == "vp_token"
        assert body["presentation_definition"]["input_descriptors"][0]["id"] == "org.iso.18013.5.1.mDL"
        assert "d" not in json.loads(body["ephemeral_ecdh_public_jwk"])
        assert "response_mode" not in body


class TestInitTransactionImpl:
    """Tests for the init transaction use case"""

    @pytest.mark.asyncio
    async def test_mobile_happy_path(self, config):
        """Backend answer is stored in session and turned into a wallet redirect"""
        http_client = RecordingHttpClient(post_body=BACKEND_RESPONSE)
        session = RecordingSession()

        result = await make_use_case(config, http_client).execute(
            InitTransactionRequest(headers={"User-Agent": IPHONE_UA}, session=session)
        )

        assert isinstance(result, Success)
        init_result = result.unwrap()
        assert init_result.is_mobile is True
        assert init_result.wallet_redirect_uri.startswith(config.wallet_url)
        query = parse_qs(urlsplit(init_result.wallet_redirect_uri).query)
        assert query == {"client_id": ["c"], "request_uri": ["https://backend.example/r/1"]}

        base_url, path, body = http_client.posts[0]
        assert (base_url, path) == (config.api_base_url, config.init_transaction_api_path)
        assert body["nonce"] == "n-1"
        assert "wallet_response_redirect_uri_template" in body

    @pytest.mark.asyncio
    async def test_session_writes_in_order(self, config):
        """Presentation id, nonce and private key are written in that order"""
        session = RecordingSession()

        await make_use_case(config, RecordingHttpClient(post_body=BACKEND_RESPONSE)).execute(
            InitTransactionRequest(headers={"user-agent": DESKTOP_UA}, session=session)
        )

        assert [key for key, _ in session.writes] == [
            SessionKey.PRESENTATION_ID,
            SessionKey.NONCE,
            SessionKey.EPHEMERAL_ECDH_PRIVATE_JWK,
        ]
        stored = session.snapshot()
        assert stored[SessionKey.PRESENTATION_ID] == PresentationId(value="pid-1")
        assert stored[SessionKey.NONCE] == Nonce(value="n-1")
        assert json.loads(stored[SessionKey.EPHEMERAL_ECDH_PRIVATE_JWK])["d"] == FAKE_PRIVATE_JWK["d"]

    @pytest.mark.asyncio
    async def test_desktop_omits_template(self, config):
        http_client = RecordingHttpClient(post_body=BACKEND_RESPONSE)

        result = await make_use_case(config, http_client).execute(
            InitTransactionRequest(headers={"User-Agent": DESKTOP_UA}, session=RecordingSession())
        )

        assert result.unwrap().is_mobile is False
        assert "wallet_response_redirect_uri_template" not in http_client.posts[0][2]

    @pytest.mark.asyncio
    async def test_missing_user_agent(self, config):
        """No user agent fails before any collaborator is used"""
        http_client = RecordingHttpClient(post_body=BACKEND_RESPONSE)
        key_generator = FakeKeyGenerator()
        session = RecordingSession()

        result = await make_use_case(config, http_client, key_generator).execute(
            InitTransactionRequest(headers={}, session=session)
        )

        assert isinstance(result, Failure)
        assert result.failure().error_type == InitTransactionErrorType.MISSING_USER_AGENT
        assert http_client.call_count == 0
        assert key_generator.calls == 0
        assert session.writes == []

    @pytest.mark.asyncio
    async def test_backend_failure(self, config):
        """Transport failure maps to API_REQUEST_FAILED and leaves the session untouched"""
        session = RecordingSession()

        result = await make_use_case(config, RecordingHttpClient(post_error=http_error())).execute(
            InitTransactionRequest(headers={"User-Agent": IPHONE_UA}, session=session)
        )

        error = result.failure()
        assert error.error_type == InitTransactionErrorType.API_REQUEST_FAILED
        assert str(error).startswith("InitTransaction Service Error (API_REQUEST_FAILED):")
        assert session.writes == []

    @pytest.mark.asyncio
    async def test_key_generation_failure(self, config):
        http_client = RecordingHttpClient(post_body=BACKEND_RESPONSE)

        result = await make_use_case(config, http_client, FakeKeyGenerator(fail=True)).execute(
            InitTransactionRequest(headers={"User-Agent": IPHONE_UA}, session=RecordingSession())
        )

        assert result.failure().error_type == InitTransactionErrorType.API_REQUEST_FAILED
        assert http_client.call_count == 0

    @pytest.mark.asyncio
    async def test_invalid_backend_response(self, config):
        """A blank presentation id is rejected"""
        http_client = RecordingHttpClient(post_body={**BACKEND_RESPONSE, "presentation_id": ""})
        session = RecordingSession()

        result = await make_use_case(config, http_client).execute(
            InitTransactionRequest(headers={"User-Agent": IPHONE_UA}, session=session)
        )

        assert result.failure().error_type == InitTransactionErrorType.INVALID_RESPONSE
        assert session.writes == []

    @pytest.mark.asyncio
    async def test_session_failure_rolls_back(self, config):
        """A failed write removes the slots already written"""
        session = RecordingSession(fail_on=SessionKey.NONCE)

        result = await make_use_case(config, RecordingHttpClient(post_body=BACKEND_RESPONSE)).execute(
            InitTransactionRequest(headers={"User-Agent": IPHONE_UA}, session=session)
        )

        error = result.failure()
        assert error.error_type == InitTransactionErrorType.SESSION_ERROR
        assert session.snapshot() == {}

    @pytest.mark.asyncio
    async def test_session_failure_restores_previous_transaction(self, config):
        """A failed write on a reused session leaves the earlier transaction intact"""
        session = RecordingSession(fail_on=SessionKey.NONCE)
        previous = {
            SessionKey.PRESENTATION_ID: PresentationId(value="pid-old"),
            SessionKey.NONCE: Nonce(value="n-old"),
            SessionKey.EPHEMERAL_ECDH_PRIVATE_JWK: '{"kty":"EC","d":"old-d"}',
        }
        await session.set_batch(previous)

        result = await make_use_case(config, RecordingHttpClient(post_body=BACKEND_RESPONSE)).execute(
            InitTransactionRequest(headers={"User-Agent": IPHONE_UA}, session=session)
        )

        assert result.failure().error_type == InitTransactionErrorType.SESSION_ERROR
        assert session.snapshot() == previous

    @pytest.mark.asyncio
    async def test_each_call_generates_fresh_state(self, config):
        """Two transactions get independent nonces and keys"""
        nonces = iter(["n-1", "n-2"])
        use_case = make_use_case(config, RecordingHttpClient(post_body=BACKEND_RESPONSE))
        use_case.generate_nonce = lambda: Nonce(value=next(nonces))
        first, second = RecordingSession(), RecordingSession()

        await use_case.execute(InitTransactionRequest(headers={"User-Agent": IPHONE_UA}, session=first))
        await use_case.execute(InitTransactionRequest(headers={"User-Agent": IPHONE_UA}, session=second))

        assert first.snapshot()[SessionKey.NONCE] == Nonce(value="n-1")
        assert second.snapshot()[SessionKey.NONCE] == Nonce(value="n-2")


class TestInitTransactionError:
    def test_wrap_keeps_own_errors(self):
        error = InitTransactionError(InitTransactionErrorType.SESSION_ERROR, "boom")
        assert InitTransactionError.wrap(error, "other") is error

    def test_wrap_classifies_value_errors(self):
        wrapped = InitTransactionError.wrap(ValueError("bad"), "parse failed")
        assert wrapped.error_type == InitTransactionErrorType.INVALID_RESPONSE
        assert wrapped.__cause__ is not None

    def test_wrap_defaults_to_api_failure(self):
        wrapped = InitTransactionError.wrap(RuntimeError("?"), "unexpected")
        assert wrapped.error_type == InitTransactionErrorType.API_REQUEST_FAILED


@pytest.mark.asyncio
async def test_custom_backend_location():
    """The configured base URL and path are used for the backend call"""
    config = create_test_config(api_base_url="https://api.example.com", init_transaction_api_path="/v1/tx")
    http_client = RecordingHttpClient(post_body=BACKEND_RESPONSE)
    session = RecordingSession()

    result = await make_use_case(config, http_client).execute(
        InitTransactionRequest(headers={"User-Agent": IPHONE_UA}, session=session)
    )

    assert http_client.posts[0][:2] == ("https://api.example.com", "/v1/tx")
    assert [key for key, _ in session.writes].count(SessionKey.PRESENTATION_ID) == 1
    assert session.snapshot()[SessionKey.PRESENTATION_ID] == PresentationId(value="pid-1")
    assert result.unwrap().wallet_redirect_uri.startswith(config.wallet_url)


class TestServiceError:
    def test_classification_is_left_to_each_service(self):
        assert "kind_for" in ServiceError.__abstractmethods__
        assert not InitTransactionError.__abstractmethods__
        assert not GetWalletResponseError.__abstractmethods__

    def test_each_service_names_itself(self):
        init_error = InitTransactionError(InitTransactionErrorType.SESSION_ERROR, "boom")
        get_error = GetWalletResponseError(GetWalletResponseErrorType.SESSION_ERROR, "boom")

        assert str(init_error) == "InitTransaction Service Error (SESSION_ERROR): boom"
        assert str(get_error) == "GetWalletResponse Service Error (SESSION_ERROR): boom"
