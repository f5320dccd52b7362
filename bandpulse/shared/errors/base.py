"""
Base error type for expected, user-facing failures.

Raised from domain and route code with the HTTP status the client
should see. No framework imports allowed.
"""

DEFAULT_STATUS_CODE = 500


class AppError(Exception):
    """An operational error: an expected failure with a known status.

    Attributes:
        message: Human-readable message, returned verbatim to clients.
        status_code: HTTP status code of the response.
        is_operational: Always True. Distinguishes expected failures
            from defects when the error reaches the error middleware.
    """

    is_operational = True

    def __init__(self, message: str, status_code: int = DEFAULT_STATUS_CODE) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)
