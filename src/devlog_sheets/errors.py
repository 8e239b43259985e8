from __future__ import annotations


class DevlogError(Exception):
    """Base class for devlog-sheets errors."""


class ClockParseError(DevlogError):
    """The current timestamp could not be formatted into a row stamp."""


class MalformedRowError(DevlogError):
    """A stored row is missing its date/time cells or they don't parse."""
