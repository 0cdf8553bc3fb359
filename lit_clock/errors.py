"""Exception types raised by the literary clock."""


class LitClockError(Exception):
    """Base class for literary clock failures."""


class InvalidTime(LitClockError, ValueError):
    """Hour or minute outside the 12-hour clock."""


class FetchFailure(LitClockError):
    """A book text or metadata lookup could not be completed."""


class IndexFailure(LitClockError):
    """The full-text index or the clock table is unusable."""


class NoMatch(LitClockError):
    """The clock table holds no entry to show."""


class KeyFormatError(LitClockError, ValueError):
    """A composite paragraph key could not be decoded."""
