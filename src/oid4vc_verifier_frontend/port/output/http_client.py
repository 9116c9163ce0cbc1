"""HTTP client port - Interface for calls to the verifier backend"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Final, Generic, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel
from returns.result import Result

ModelT = TypeVar("ModelT", bound=BaseModel)


class HttpErrorType(str, Enum):
    """Kinds of HTTP failure"""

    NETWORK_ERROR: Final[str] = "NETWORK_ERROR"
    TIMEOUT_ERROR: Final[str] = "TIMEOUT_ERROR"
    HTTP_ERROR: Final[str] = "HTTP_ERROR"
    VALIDATION_ERROR: Final[str] = "VALIDATION_ERROR"


class HttpError(Exception):
    """
    Failure of an HTTP exchange.

    Attributes:
        error_type: Kind of failure
        url: Requested URL
        status: HTTP status, when a response was received
        response_body: Raw response body, when available
        cause: Underlying exception
    """

    def __init__(
        self,
        error_type: HttpErrorType,
        message: str,
        url: str,
        status: Optional[int] = None,
        response_body: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        self.error_type = error_type
        self.url = url
        self.status = status
        self.response_body = response_body
        self.cause = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause


@dataclass(frozen=True)
class HttpResponseMetadata:
    status: int
    url: str
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


@dataclass(frozen=True)
class HttpResponse(Generic[ModelT]):
    """Validated response body and transport metadata"""

    data: ModelT
    metadata: HttpResponseMetadata


class HttpClient(ABC):
    """
    Client for JSON calls to the verifier backend.

    Responses are validated against a pydantic model before being returned.
    No retries are performed; retry policy belongs to the caller.
    """

    @abstractmethod
    async def post(
        self, base_url: str, path: str, json_body: Mapping[str, Any], response_model: Type[ModelT]
    ) -> Result[HttpResponse[ModelT], HttpError]:
        """
        POST a JSON body.

        Args:
            base_url: Base URL of the backend
            path: Request path
            json_body: Body serialized as JSON
            response_model: Model the response body must satisfy

        Returns:
            Success(HttpResponse) or Failure(HttpError)
        """
        pass

    @abstractmethod
    async def get(
        self, base_url: str, path: str, query: Mapping[str, str], response_model: Type[ModelT]
    ) -> Result[HttpResponse[ModelT], HttpError]:
        """
        GET a JSON resource.

        Args:
            base_url: Base URL of the backend
            path: Request path
            query: Query parameters
            response_model: Model the response body must satisfy

        Returns:
            Success(HttpResponse) or Failure(HttpError)
        """
        pass
