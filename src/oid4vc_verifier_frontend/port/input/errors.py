"""Service error taxonomy shared by both use cases

Each use case owns a closed set of error kinds. An error of the use case's own
type passes through unchanged; any other exception is classified into one of
the kinds, keeping the original exception as cause.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import ClassVar, Generic, Optional, Type, TypeVar

from oid4vc_verifier_frontend.port.output import HttpError, SessionError

KindT = TypeVar("KindT", bound=Enum)
ErrorT = TypeVar("ErrorT", bound="ServiceError")


class ServiceError(Exception, ABC, Generic[KindT]):
    """
    Base class for use case errors.

    Subclasses name their service and classify foreign exceptions.

    Attributes:
        error_type: Error kind
        details: Human-readable description
        cause: Wrapped exception, if any
    """

    service_name: ClassVar[str]

    def __init__(self, error_type: KindT, details: str, cause: Optional[BaseException] = None):
        self.error_type = error_type
        self.details = details
        self.cause = cause
        super().__init__(f"{self.service_name} Service Error ({error_type.value}): {details}")
        if cause is not None:
            self.__cause__ = cause

    @classmethod
    @abstractmethod
    def kind_for(cls, error: BaseException) -> KindT:
        """Kind used for an exception this service did not raise itself"""

    @classmethod
    def wrap(cls: Type[ErrorT], error: BaseException, details: str) -> ErrorT:
        """
        Return error unchanged if it already is this service's error, else classify and wrap it.

        Args:
            error: Exception to classify
            details: Description used when wrapping

        Returns:
            An instance of this error class
        """
        if isinstance(error, cls):
            return error
        return cls(cls.kind_for(error), details, error)


def is_session_failure(error: BaseException) -> bool:
    return isinstance(error, SessionError)


def is_transport_failure(error: BaseException) -> bool:
    return isinstance(error, HttpError)


def is_malformed_data(error: BaseException) -> bool:
    # pydantic.ValidationError and UrlGenerationError both derive from ValueError
    return isinstance(error, ValueError) and not isinstance(error, (HttpError, SessionError))
