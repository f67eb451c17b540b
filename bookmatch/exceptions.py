"""
Error taxonomy for BookMatch.

Errors raised by the metadata API client:
- Transient errors are retried with backoff
- Client errors and empty results end a strategy immediately
- Malformed payloads are logged and treated as no result

None of these escape BookSearchService.resolve().
"""

from typing import Optional


class BookMatchError(Exception):
    """Base exception for BookMatch errors."""
    
    retryable = False
    
    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        status_code: Optional[int] = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        super().__init__(message)


class TransientAPIError(BookMatchError):
    """Rate limiting, server error or network failure."""
    
    retryable = True
    
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(
            message=message,
            code="TRANSIENT",
            status_code=status_code,
        )


class ClientAPIError(BookMatchError):
    """Non-retryable HTTP error status."""
    
    def __init__(self, message: str, status_code: int):
        super().__init__(
            message=message,
            code="CLIENT_ERROR",
            status_code=status_code,
        )


class MalformedResponseError(BookMatchError):
    """Payload could not be parsed."""
    
    def __init__(self, message: str):
        super().__init__(message=message, code="MALFORMED_RESPONSE")


class EmptyResultError(BookMatchError):
    """Well-formed response with no items."""
    
    def __init__(self, message: str = "No items in response"):
        super().__init__(message=message, code="EMPTY_RESULT")
