"""Exception types shared across haru.

The pure core (dates, calendar index, renderer) only ever raises
``InvalidArgumentError``; everything else it meets is degraded into a
displayable value instead.  The store adds not-found and limit errors.
"""


class HaruError(Exception):
    """Base error for haru."""


class InvalidArgumentError(HaruError, ValueError):
    """Raised when a caller passes an argument outside its documented range."""


class EntryNotFoundError(HaruError, KeyError):
    """Raised when an entry id does not exist (or was soft-deleted)."""

    def __str__(self) -> str:
        return f"Entry not found: {self.args[0]}" if self.args else "Entry not found"


class EntryLimitError(HaruError):
    """Raised when creating an entry would exceed the per-day limit."""
