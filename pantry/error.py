"""
The exceptions raised by pantry. Every error signals malformed input or a
missing piece of the environment, never a transient condition, so none of them
is worth retrying. Errors about bad input also are `ValueError`s, which keeps
pantry's value objects interchangeable with code that only expects the latter.
"""

__all__ = (
    'PantryError',
    'InvalidSpecError',
    'InvalidVersionError',
    'UnknownPerlVersionError',
    'UnparsablePathError',
    'InvalidNameError',
    'UndeterminedIdentityError',
)


class PantryError(Exception):
    """The base class of all pantry errors."""


class InvalidSpecError(PantryError, ValueError):
    """A package or stack spec is malformed or lacks a required field."""


class InvalidVersionError(PantryError, ValueError):
    """A version is not a dotted or decimal numeric version."""


class UnknownPerlVersionError(PantryError, ValueError):
    """The core module table has no entry for a perl version."""


class UnparsablePathError(PantryError, ValueError):
    """A distribution path is too short to name an author and archive."""


class InvalidNameError(PantryError, ValueError):
    """A stack, property, or author name uses forbidden characters."""


class UndeterminedIdentityError(PantryError, LookupError):
    """Neither an override nor the environment names the current user."""
