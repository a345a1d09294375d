"""Exceptions shared by the client and the drivers."""


class WebflowAPIError(Exception):
    """Non-2xx response from the Webflow API."""

    def __init__(self, status_code: int, body: str = "", method: str = "", path: str = ""):
        self.status_code = status_code
        self.body = body
        self.method = method
        self.path = path
        super().__init__(f"API error {status_code}: {body}")


class AbortException(Exception):
    """Raised when a driver must stop before finishing (prerequisite failed)."""
    pass
