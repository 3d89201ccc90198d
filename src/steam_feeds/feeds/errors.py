"""Exceptions raised while resolving and verifying feeds."""


class FeedResolutionError(Exception):
    """Base exception for feed resolution errors."""

    def __init__(
        self,
        message: str,
        *,
        raw_input: str | None = None,
        endpoint: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.raw_input = raw_input
        self.endpoint = endpoint
        self.status_code = status_code

    @property
    def kind(self) -> str:
        """Short error kind used in diagnostics."""
        return self.__class__.__name__


class InvalidIdentifier(FeedResolutionError):
    """Raised when an App ID or profile handle is not well formed."""

    pass


class UnparseableUrl(FeedResolutionError):
    """Raised when a URL does not contain the expected identifier."""

    pass


class ProfilePrivate(FeedResolutionError):
    """Raised when a profile's game details are not public."""

    pass


class ProfileNotFound(FeedResolutionError):
    """Raised when Steam reports that a profile does not exist."""

    pass


class NetworkError(FeedResolutionError):
    """Raised when a request cannot be completed."""

    pass


class VerificationFailed(FeedResolutionError):
    """Raised when a candidate URL does not serve a feed."""

    pass
