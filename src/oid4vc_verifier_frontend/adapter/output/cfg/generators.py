"""Default nonce and URL generators"""

from typing import Mapping
from urllib.parse import urlencode, urlsplit, urlunsplit

from oid4vc_verifier_frontend.domain import Nonce
from oid4vc_verifier_frontend.port.output import UrlGenerationError, UrlGenerationErrorType

RESPONSE_CODE_PARAM = "response_code"


def default_generate_nonce() -> Nonce:
    """Random UUID4 nonce"""
    return Nonce.generate()


def default_generate_wallet_redirect_uri(wallet_url: str, query: Mapping[str, str]) -> str:
    """
    Build the URI that opens the wallet.

    Any query already present on wallet_url is replaced by the given
    parameters. Scheme, host, path and fragment are kept.

    Raises:
        UrlGenerationError: If wallet_url is not absolute or query holds non-string values
    """
    parts = _split(wallet_url)
    if any(not isinstance(k, str) or not isinstance(v, str) for k, v in query.items()):
        raise UrlGenerationError(
            UrlGenerationErrorType.INVALID_QUERY_PARAMS, "Query parameters must be strings", wallet_url
        )
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(dict(query)), parts.fragment))


def default_generate_wallet_response_redirect_uri_template(base_url: str, path: str, placeholder: str) -> str:
    """
    Build the URI the wallet redirects to once the user has responded.

    The result is base_url with its path set to path and a single
    response_code query parameter holding the placeholder verbatim, e.g.
    https://verifier.example/result?response_code={RESPONSE_CODE}. The backend
    substitutes the placeholder, so it is not percent-encoded.

    Raises:
        UrlGenerationError: On an invalid base URL, path or placeholder
    """
    parts = _split(base_url)
    if not path or not path.startswith("/"):
        raise UrlGenerationError(UrlGenerationErrorType.INVALID_PATH, f"Path must start with '/': {path!r}", base_url)
    if not placeholder or not placeholder.strip():
        raise UrlGenerationError(UrlGenerationErrorType.MISSING_PLACEHOLDER, "Placeholder cannot be blank", base_url)
    return urlunsplit((parts.scheme, parts.netloc, path, f"{RESPONSE_CODE_PARAM}={placeholder}", ""))


def _split(url: str):
    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise UrlGenerationError(UrlGenerationErrorType.MALFORMED_URL, str(e), url) from e
    if not parts.scheme or not (parts.netloc or parts.path):
        raise UrlGenerationError(UrlGenerationErrorType.INVALID_BASE_URL, f"URL must be absolute: {url!r}", url)
    return parts
