"""Exception classes for the SR P3 MCP server.

Every exception carries a ``message`` that is safe to show to the calling
assistant. Nothing in these messages includes URLs, file paths or tracebacks.
"""

from typing import Optional


class SRP3Error(Exception):
    """Base exception for all SR P3 MCP errors.

    Attributes:
        message: Human-readable, user-facing error message
    """

    default_message = "An unexpected error occurred while fetching data from Sveriges Radio. Please try again."

    def __init__(self, message: Optional[str] = None):
        """Initialize error.

        Args:
            message: User-facing message (falls back to the class default)
        """
        self.message = message or self.default_message
        super().__init__(self.message)


# Date range errors


class DateRangeError(SRP3Error):
    """Date input could not be resolved into a valid search window."""

    pass


class InvalidDateFormatError(DateRangeError):
    """Date input (or one side of a range) could not be parsed."""

    default_message = (
        'Invalid date format. Please use ISO 8601 format (e.g., "2024-12-15") or '
        'date range format (e.g., "2024-12-01 to 2024-12-31")'
    )


class FutureDateRejectedError(DateRangeError):
    """Start or end of the resolved range lies in the future."""

    default_message = "Future dates are not allowed. Please provide a date within the last 90 days."


class DateTooOldError(DateRangeError):
    """Start of the resolved range is older than the 90-day history window."""

    default_message = "Date is too far in the past. Please provide a date within the last 90 days."


class RangeOrderInvalidError(DateRangeError):
    """Start of the range falls after its end."""

    default_message = "Start date must be before or equal to end date."


# Upstream API errors


class SRApiError(SRP3Error):
    """Base class for failures talking to the Sveriges Radio API."""

    pass


class RateLimitedError(SRApiError):
    """Client-side rate limit rejected the request before it was sent.

    Attributes:
        wait_seconds: Seconds until the next request will be admitted
        max_requests: Configured requests per minute
    """

    def __init__(self, wait_seconds: int, max_requests: int = 10):
        self.wait_seconds = wait_seconds
        self.max_requests = max_requests
        super().__init__(
            f"Rate limit exceeded. Please wait {wait_seconds} seconds before trying again. "
            f"(Limit: {max_requests} requests per minute)"
        )


class SRTimeoutError(SRApiError):
    """Connect or read timeout against the API."""

    default_message = "Request to Sveriges Radio API timed out. Please try again in a moment."


class SRUpstreamError(SRApiError):
    """API answered with a non-2xx HTTP status.

    Attributes:
        status_code: HTTP status returned by the API
    """

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(
            f"Sveriges Radio API returned an error (status {status_code}). "
            "The service may be temporarily unavailable. Please try again later."
        )


class SRUnreachableError(SRApiError):
    """No response was received from the API."""

    default_message = (
        "Unable to reach Sveriges Radio API. Please check your internet connection and try again."
    )


class SRUnknownError(SRApiError):
    """Any other failure, including an undecodable payload."""

    pass


class EmptyUpstreamPayloadError(SRApiError):
    """API response did not contain a playlist node."""

    default_message = "No playlist data returned from Sveriges Radio API"
