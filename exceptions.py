"""
Error types shared by the store, the remote client and the sync pass.

Remote failures and local write failures are recoverable per comic during a
sync pass; only the bootstrap fetch of the latest comic is fatal.
"""


class XkcdRankError(Exception):
    """Base class for all xkcd-rank errors."""


class RemoteUnavailable(XkcdRankError):
    """Network failure, non-success status, or malformed response from xkcd."""


class ParseFailure(XkcdRankError):
    """Malformed comic record or persisted state document."""


class InvalidIndex(XkcdRankError):
    """Requested comic number does not exist (0 or negative)."""


class IOFailure(XkcdRankError):
    """Local filesystem read/write failure."""
