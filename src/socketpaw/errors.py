"""
Receiver error types.
Created: 2026-10-12
"""


class ReceiverError(Exception):
    """Base class for socketpaw errors."""


class CustomRouteInitializationError(ReceiverError):
    """One or more custom routes are missing a path, method or handler.

    Raised while the receiver is being constructed, before any HTTP server
    exists, so a malformed route never shows up later as a silent 404.
    """

    def __init__(self, problems: list[str]):
        self.problems = problems
        super().__init__(
            "Custom routes are missing required keys:\n" + "\n".join(f"  {p}" for p in problems)
        )


class HTTPServerListenError(ReceiverError):
    """The HTTP server could not bind to its port."""

    def __init__(self, port: int, reason: str = ""):
        self.port = port
        message = f"HTTP server failed to listen on port {port}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class OAuthCallbackError(ReceiverError):
    """The OAuth redirect could not be completed (denied, bad state, no code)."""

    def __init__(self, code: str, message: str = ""):
        self.code = code
        super().__init__(f"{code}: {message}" if message else code)
