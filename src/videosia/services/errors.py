"""Errors raised by application services."""


class ServiceError(Exception):
    """A failure that maps onto an HTTP error response."""

    def __init__(
        self, status_code: int, error: str, details: str | None = None
    ) -> None:
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.details = details

    def to_payload(self) -> dict[str, str]:
        """Return the JSON error body."""
        payload = {"error": self.error}
        if self.details is not None:
            payload["details"] = self.details
        return payload
