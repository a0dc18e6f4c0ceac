from typing import Optional, Dict, Any


class NewsFeedError(Exception):
    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details
        }


class UpstreamError(NewsFeedError):
    """Base for failures of a NewsAPI call.

    ``status_code`` and ``public_error`` describe how the failure is surfaced
    when no cached copy can stand in for the live response.
    """
    status_code: int = 500
    public_error: str = "Failed to fetch news"


class UpstreamAuthError(UpstreamError):
    status_code = 502
    public_error = "News API authentication failed"


class UpstreamRateLimitedError(UpstreamError):
    status_code = 502
    public_error = "News API rate limit exceeded"


class UpstreamServerError(UpstreamError):
    status_code = 502
    public_error = "News API server error"


class UpstreamRequestError(UpstreamError):
    status_code = 502
    public_error = "News API request failed"


class UpstreamTimeoutError(UpstreamError):
    status_code = 502
    public_error = "News API request timeout"


class UpstreamMalformedError(UpstreamError):
    pass


class NoCacheAvailableError(NewsFeedError):
    def __init__(self, country: str, category: str, cause: UpstreamError):
        self.cause = cause
        self.status_code = cause.status_code
        self.public_error = cause.public_error
        super().__init__(
            message=f"No cached articles for {country}_{category} and upstream fetch failed: {cause.message}",
            error_code="NO_CACHE_AVAILABLE",
            details={"country": country, "category": category, "upstream_error": cause.error_code}
        )


class UserAlreadyExistsError(NewsFeedError):
    def __init__(self, email: str):
        super().__init__(
            message="User already exists",
            error_code="USER_ALREADY_EXISTS",
            details={"email": email}
        )


class UserNotFoundError(NewsFeedError):
    def __init__(self, user_id: int):
        super().__init__(
            message=f"User {user_id} not found",
            error_code="USER_NOT_FOUND",
            details={"user_id": user_id}
        )


class AuthenticationError(NewsFeedError):
    pass
