"""
Exceptions raised by the robots.txt library.

Per-line problems never surface as exceptions; they are recorded as
issues on the parsed document. Only document-level failures raise.
"""


class RobotsError(Exception):
    """Base class for all robots.txt errors."""


class InvalidRobotsError(RobotsError):
    """The document could not be turned into rules at all."""


class RobotsUrlError(RobotsError, ValueError):
    """A URL cannot be mapped to a robots.txt location."""
