"""Generator ports - Nonce, presentation definition, URLs and device classification

These collaborators are plain callables.
"""

from enum import Enum
from typing import Any, Callable, Dict, Final, Mapping, Optional

from oid4vc_verifier_frontend.domain import Nonce

GenerateNonce = Callable[[], Nonce]
"""Returns a fresh, non-blank nonce"""

GeneratePresentationDefinition = Callable[[], Dict[str, Any]]
"""Returns the presentation definition sent to the backend"""

GenerateWalletResponseRedirectUriTemplate = Callable[[str, str, str], str]
"""(base_url, path, placeholder) -> redirect URI template containing placeholder"""

GenerateWalletRedirectUri = Callable[[str, Mapping[str, str]], str]
"""(wallet_url, query) -> wallet redirect URI"""

IsMobile = Callable[[str], bool]
"""(user_agent) -> whether the client is a mobile phone"""


class UrlGenerationErrorType(str, Enum):
    INVALID_BASE_URL: Final[str] = "INVALID_BASE_URL"
    INVALID_PATH: Final[str] = "INVALID_PATH"
    MISSING_PLACEHOLDER: Final[str] = "MISSING_PLACEHOLDER"
    INVALID_QUERY_PARAMS: Final[str] = "INVALID_QUERY_PARAMS"
    MALFORMED_URL: Final[str] = "MALFORMED_URL"


class UrlGenerationError(ValueError):
    """URL could not be generated"""

    def __init__(self, error_type: UrlGenerationErrorType, details: str, original_url: Optional[str] = None):
        self.error_type = error_type
        self.details = details
        self.original_url = original_url
        super().__init__(f"URL Generation Error ({error_type.value}): {details}")
