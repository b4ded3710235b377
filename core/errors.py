from typing import Optional


class RelayError(Exception):
    """Failure surfaced to the caller as ``{"error": ..., "detail": ...}``."""

    status_code = 500
    error = "Server error"

    def __init__(self, detail: Optional[str] = None) -> None:
        super().__init__(detail or self.error)
        self.detail = detail

    def to_body(self) -> dict:
        body = {"error": self.error}
        if self.detail is not None:
            body["detail"] = self.detail
        return body


class MissingCredentialError(RelayError):
    status_code = 500

    def __init__(self, variable: str) -> None:
        self.error = f"Missing {variable}"
        super().__init__(None)
        self.variable = variable


class UpstreamError(RelayError):
    status_code = 502
    error = "OpenAI error"


class ServerError(RelayError):
    status_code = 500
    error = "Server error"


class InvalidPayloadError(RelayError):
    status_code = 400
    error = "Invalid JSON payload"


def describe_exception(exc: BaseException) -> str:
    message = str(exc)
    if not message:
        return type(exc).__name__
    return f"{type(exc).__name__}: {message}"
