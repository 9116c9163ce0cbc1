"""In-test fakes for output ports"""

from typing import Any, Dict, List, Mapping, Optional, Tuple, Type

from pydantic import BaseModel
from returns.result import Failure, Result, Success

from oid4vc_verifier_frontend.adapter.output.persistence import InMemorySession
from oid4vc_verifier_frontend.domain import (
    AuthorizationResponse,
    EphemeralECDHPrivateJwk,
    JarmOption,
    MdocVerifyResult,
)
from oid4vc_verifier_frontend.port.output import (
    EphemeralKeyGenerator,
    HttpClient,
    HttpError,
    HttpErrorType,
    HttpResponse,
    HttpResponseMetadata,
    JarmVerificationError,
    JarmVerifier,
    KeyGenerationError,
    MdocVerifier,
    SessionError,
    SessionKey,
)

IPHONE_UA = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.0 Mobile/15E148 Safari/604.1"
)
DESKTOP_UA = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

# Structurally valid, not a usable key
FAKE_PRIVATE_JWK = {"kty": "EC", "crv": "P-256", "x": "x-coord", "y": "y-coord", "d": "secret-d"}


class RecordingHttpClient(HttpClient):
    """HttpClient answering with canned bodies and recording every call"""

    def __init__(
        self,
        post_body: Optional[Dict[str, Any]] = None,
        get_body: Optional[Dict[str, Any]] = None,
        post_error: Optional[HttpError] = None,
        get_error: Optional[HttpError] = None,
    ):
        self.post_body = post_body
        self.get_body = get_body
        self.post_error = post_error
        self.get_error = get_error
        self.posts: List[Tuple[str, str, Dict[str, Any]]] = []
        self.gets: List[Tuple[str, str, Dict[str, str]]] = []

    @property
    def call_count(self) -> int:
        return len(self.posts) + len(self.gets)

    async def post(
        self, base_url: str, path: str, json_body: Mapping[str, Any], response_model: Type[BaseModel]
    ) -> Result[HttpResponse, HttpError]:
        self.posts.append((base_url, path, dict(json_body)))
        if self.post_error is not None:
            return Failure(self.post_error)
        return Success(self._response(base_url + path, response_model, self.post_body))

    async def get(
        self, base_url: str, path: str, query: Mapping[str, str], response_model: Type[BaseModel]
    ) -> Result[HttpResponse, HttpError]:
        self.gets.append((base_url, path, dict(query)))
        if self.get_error is not None:
            return Failure(self.get_error)
        return Success(self._response(base_url + path, response_model, self.get_body))

    @staticmethod
    def _response(url: str, response_model: Type[BaseModel], body: Optional[Dict[str, Any]]) -> HttpResponse:
        # raw body, left for the use case to validate
        return HttpResponse(
            data=dict(body or {}),
            metadata=HttpResponseMetadata(status=200, url=url),
        )


class RecordingSession(InMemorySession):
    """InMemorySession that records writes and can fail on a chosen slot"""

    def __init__(self, fail_on: Optional[SessionKey] = None, fail_reads: bool = False):
        super().__init__()
        self.fail_on = fail_on
        self.fail_reads = fail_reads
        self.writes: List[Tuple[SessionKey, Any]] = []

    async def set(self, key: SessionKey, value: Any) -> Result[None, SessionError]:
        if key == self.fail_on:
            return Failure(SessionError("storage unavailable", key=key))
        self.writes.append((key, value))
        return await super().set(key, value)

    async def get(self, key: SessionKey) -> Result[Optional[Any], SessionError]:
        if self.fail_reads:
            return Failure(SessionError("storage unavailable", key=key))
        return await super().get(key)

    async def get_batch(self, *keys: SessionKey) -> Result[Dict[SessionKey, Any], SessionError]:
        if self.fail_reads:
            return Failure(SessionError("storage unavailable"))
        return await super().get_batch(*keys)

    def snapshot(self) -> Dict[SessionKey, Any]:
        return dict(self._data)


class FakeKeyGenerator(EphemeralKeyGenerator):
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls = 0

    async def generate(self) -> Result[EphemeralECDHPrivateJwk, KeyGenerationError]:
        self.calls += 1
        if self.fail:
            return Failure(KeyGenerationError("no entropy"))
        return Success(EphemeralECDHPrivateJwk.from_dict(FAKE_PRIVATE_JWK))


class FakeJarmVerifier(JarmVerifier):
    """Returns the configured claims, or a failure when claims is None"""

    def __init__(self, claims: Optional[Dict[str, Any]] = None):
        self.claims = claims
        self.calls: List[Tuple[JarmOption, EphemeralECDHPrivateJwk, str]] = []

    async def verify(
        self, jarm_option: JarmOption, private_jwk: EphemeralECDHPrivateJwk, response: str
    ) -> Result[AuthorizationResponse, JarmVerificationError]:
        self.calls.append((jarm_option, private_jwk, response))
        if self.claims is None:
            return Failure(JarmVerificationError("decryption failed"))
        return Success(AuthorizationResponse.from_claims(self.claims))


class FakeMdocVerifier(MdocVerifier):
    def __init__(self, result: Optional[MdocVerifyResult] = None, error: Optional[Exception] = None):
        self.result = result or MdocVerifyResult(valid=True, documents=[])
        self.error = error
        self.tokens: List[str] = []

    async def verify(self, vp_token: str) -> MdocVerifyResult:
        self.tokens.append(vp_token)
        if self.error is not None:
            raise self.error
        return self.result


def http_error(error_type: HttpErrorType = HttpErrorType.HTTP_ERROR, status: Optional[int] = 500) -> HttpError:
    return HttpError(error_type, "backend unavailable", "http://localhost:8080/ui/presentations", status=status)
