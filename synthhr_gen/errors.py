from __future__ import annotations


class LengthMismatch(ValueError):
    """A session's sample count does not match the expected duration."""


class DivisibilityError(ValueError):
    """The exercise window cannot be split into whole stages of the requested width."""


class RemoteIOError(RuntimeError):
    """Listing, downloading or uploading against the file store failed."""
