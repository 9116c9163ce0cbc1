"""Value objects for the domain layer"""

import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Final


@dataclass(frozen=True)
class Nonce:
    """Cryptographic nonce binding a presentation request to its response"""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError("Nonce cannot be blank")

    def __str__(self) -> str:
        return self.value

    @staticmethod
    def generate() -> "Nonce":
        """Generate a random UUID4 nonce"""
        return Nonce(value=str(uuid.uuid4()))


@dataclass(frozen=True)
class PresentationId:
    """
    Identifier assigned by the verifier backend when a transaction is initialized.
    Correlates the init transaction phase with the wallet response phase.
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError("PresentationId cannot be blank")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ResponseCode:
    """Response code substituted by the wallet into the redirect URI template"""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError("ResponseCode cannot be blank")

    def __str__(self) -> str:
        return self.value


class PresentationType(str, Enum):
    """Kind of token requested from the wallet"""

    VP_TOKEN: Final[str] = "vp_token"
    ID_TOKEN: Final[str] = "id_token"
    VP_AND_ID_TOKEN: Final[str] = "vp_token id_token"

    def __str__(self) -> str:
        return self.value


class ResponseMode(str, Enum):
    """Response mode options for wallet responses"""

    DIRECT_POST: Final[str] = "direct_post"
    DIRECT_POST_JWT: Final[str] = "direct_post.jwt"


class JarMode(str, Enum):
    """How the backend hands the request object to the wallet"""

    BY_VALUE: Final[str] = "by_value"
    BY_REFERENCE: Final[str] = "by_reference"


class PresentationDefinitionMode(str, Enum):
    """How the presentation definition is embedded in the request object"""

    BY_VALUE: Final[str] = "by_value"
    BY_REFERENCE: Final[str] = "by_reference"
