from typing import Any, Dict, Optional


class ApiError(Exception):
    """
    Base class for errors surfaced to callers as a JSON envelope.
    Subclasses fix the HTTP status and the `error` label; `message` is
    caller-facing, `details` is optional extra context.
    """
    status_code = 500
    error = "Internal server error"

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_body(self, include_details: bool = True) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.error, "message": self.message}
        if include_details and self.details is not None:
            body["details"] = self.details
        return body


class MethodNotAllowed(ApiError):
    status_code = 405
    error = "Method not allowed"

    def __init__(self, message: str = "This endpoint only accepts GET requests"):
        super().__init__(message)


class ServerConfigurationError(ApiError):
    status_code = 500
    error = "Server configuration error"

    def __init__(self, message: str = "API authentication is not properly configured"):
        super().__init__(message)


class MissingParameter(ApiError):
    status_code = 400
    error = "Missing parameter"


class InvalidParameter(ApiError):
    status_code = 400
    error = "Invalid parameter"


class UpstreamNotFound(ApiError):
    status_code = 404
    error = "Not found"


class UpstreamFailure(ApiError):
    status_code = 500
    error = "Internal server error"


class AllFetchesFailed(ApiError):
    # details (the per-ticker results) are always part of the body
    status_code = 503
    error = "Service unavailable"

    def __init__(self, details: Any,
                 message: str = "Unable to fetch any stock data at this time. Please try again later."):
        super().__init__(message, details=details)


class InternalError(ApiError):
    status_code = 500
    error = "Internal server error"


# Errors whose details are internal and only echoed in development
SENSITIVE_DETAIL_ERRORS = (UpstreamNotFound, UpstreamFailure, InternalError)


def should_include_details(exc: ApiError, expose_error_details: bool) -> bool:
    if isinstance(exc, SENSITIVE_DETAIL_ERRORS):
        return expose_error_details
    return True
