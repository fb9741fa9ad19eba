from typing import Any, Dict, List, Optional, Union

import httpx


class APIException(Exception):
    """
    Base exception for adaptor errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        status_code: int = httpx.codes.INTERNAL_SERVER_ERROR,
        detail: str = "An unexpected error occurred",
        code: str = "internal_error",
        context: Optional[Dict[str, Any]] = None
    ):
        self.status_code = int(status_code)
        self.detail = detail
        self.code = code
        self.context = context or {}
        super().__init__(self.detail)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a dictionary for consistent error reporting."""
        return {
            "error": {
                "code": self.code,
                "message": self.detail,
                "status_code": self.status_code,
                "context": self.context
            }
        }


class ConfigurationError(APIException):
    """Exception raised when the adaptor cannot be built from its settings."""

    def __init__(
        self,
        detail: str = "Invalid adaptor configuration",
        code: str = "configuration_error",
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            status_code=httpx.codes.INTERNAL_SERVER_ERROR,
            detail=detail,
            code=code,
            context=context
        )


class ValidationException(APIException):
    """Exception raised when a request cannot be built from the given data."""

    def __init__(
        self,
        detail: str = "Validation error",
        code: str = "validation_error",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        merged_context = {"field": field} if field else {}
        if context:
            merged_context.update(context)

        super().__init__(
            status_code=httpx.codes.UNPROCESSABLE_ENTITY,
            detail=detail,
            code=code,
            context=merged_context
        )


class IntegrationException(APIException):
    """Exception raised when the request never produced a response."""

    def __init__(
        self,
        detail: str = "External API integration error",
        code: str = "integration_error",
        status_code: int = httpx.codes.BAD_GATEWAY,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        super().__init__(status_code=status_code, detail=detail, code=code, context=context)
        self.original_exception = original_exception

        if original_exception and self.context is not None:
            self.context["original_error"] = str(original_exception)


class ResponseError(APIException):
    """Exception raised when the platform answers with a non-2xx status."""

    def __init__(
        self,
        status_code: int,
        detail: str = "Unexpected response from external API",
        code: str = "response_error",
        errors: Optional[Union[List[str], Dict[str, Any]]] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, code=code, context=context)
        self.errors = errors if errors is not None else []


class AuthenticationError(ResponseError):
    """Exception raised when the access token is rejected."""

    def __init__(
        self,
        status_code: int = httpx.codes.UNAUTHORIZED,
        detail: str = "Authentication failed",
        code: str = "authentication_error",
        errors: Optional[Union[List[str], Dict[str, Any]]] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            status_code=status_code,
            detail=detail,
            code=code,
            errors=errors,
            context=context
        )


class NotFoundError(ResponseError):
    """Exception raised when a requested resource is not found."""

    def __init__(
        self,
        detail: str = "Not Found",
        code: str = "not_found_error",
        errors: Optional[Union[List[str], Dict[str, Any]]] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            status_code=httpx.codes.NOT_FOUND,
            detail=detail,
            code=code,
            errors=errors,
            context=context
        )


class RateLimitError(ResponseError):
    """Exception raised when the platform throttles the caller."""

    def __init__(
        self,
        detail: str = "Rate limit exceeded",
        code: str = "rate_limit_error",
        retry_after: Optional[float] = None,
        errors: Optional[Union[List[str], Dict[str, Any]]] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        merged_context = {}
        if retry_after is not None:
            merged_context["retry_after"] = retry_after

        if context:
            merged_context.update(context)

        super().__init__(
            status_code=httpx.codes.TOO_MANY_REQUESTS,
            detail=detail,
            code=code,
            errors=errors,
            context=merged_context
        )
        self.retry_after = retry_after


class ResponseDecodingError(APIException):
    """Exception raised when a successful response cannot be decoded."""

    def __init__(
        self,
        detail: str = "Could not decode response",
        code: str = "response_decoding_error",
        body: Optional[str] = None,
        status_code: int = httpx.codes.BAD_GATEWAY,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, code=code, context=context)
        self.body = body


class PaginationError(ResponseDecodingError):
    """Exception raised when the Link header holds unreadable page cursors."""

    def __init__(
        self,
        detail: str = "Could not extract pagination link header",
        code: str = "pagination_error",
        body: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(detail=detail, code=code, body=body, context=context)
