"""Error taxonomy of the dashboard client."""


class DashboardError(Exception):
    """Base class for dashboard client failures."""


class ValidationError(DashboardError):
    """Required input is missing."""


class AuthError(DashboardError):
    """Credentials were rejected or the session expired."""


class NetworkError(DashboardError):
    """The backend could not be reached."""


class ServerError(DashboardError):
    """The backend answered with an error status."""

    def __init__(
        self, status_code: int, error: str | None = None, details: str | None = None
    ) -> None:
        super().__init__(details or error or f"HTTP {status_code}")
        self.status_code = status_code
        self.error = error
        self.details = details
