"""
Validation errors raised by the bracket engine.

All of them are recoverable: the caller fixes the input and tries again.
"""


class BracketError(ValueError):
    """Base class for bracket engine validation failures."""


class InvalidSizeError(BracketError):
    """Seeding order requested for a size that is not a power of two >= 2."""


class InsufficientRoundsError(BracketError):
    """Fewer rounds requested than the entry count needs."""

    def __init__(self, entry_count, round_count, required):
        self.entry_count = entry_count
        self.round_count = round_count
        self.required = required
        super().__init__(f"You need at least {required} rounds for {entry_count} teams (got {round_count})")


class UnsupportedBracketSizeError(BracketError):
    """Entry count is neither a power of two nor a supported bye layout."""


class InvalidSeedAssignment(BracketError):
    """Manual seed edit outside 1..N."""


class NotEnoughEntriesError(BracketError):
    """The source list holds fewer entries than the bracket asks for."""


class InvalidEntriesError(BracketError):
    """Entry data is not a list of entry mappings."""
