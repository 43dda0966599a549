"""
Queries about the environment pantry runs in: the current time, the current
user and their author id, and whether a person is at the keyboard.

Each query has exactly one override slot. While a slot holds a value, the
query answers with that value instead of consulting the clock, the environment
variables, or the terminal. Slots exist so that tests and embedding tools can
fix the answers. They should be set during process or test setup only, either
with `set_override()` and `clear_override()` or, preferably, for the extent of
a `with overrides(...)` block.
"""

from collections.abc import Iterator
from contextlib import contextmanager
import datetime
import os
import sys
import time
import uuid as _uuid

from .error import UndeterminedIdentityError


__all__ = (
    'clear_override',
    'current_author_id',
    'current_time_offset',
    'current_username',
    'current_utc_time',
    'is_interactive',
    'overrides',
    'set_override',
    'uuid',
)

SLOTS = frozenset(('time', 'time_offset', 'username', 'author_id', 'interactive'))

USERNAME_VARIABLES = ('PANTRY_USERNAME', 'USER', 'LOGIN', 'USERNAME', 'LOGNAME')
AUTHOR_ID_VARIABLE = 'PANTRY_AUTHOR_ID'

_overrides: dict[str, object] = {}


def _check_slot(slot: str) -> None:
    if slot not in SLOTS:
        raise KeyError(f'unknown override slot "{slot}"')


def set_override(slot: str, value: object) -> None:
    """Fix the answer for a query. A `None` value clears the slot."""
    _check_slot(slot)
    if value is None:
        _overrides.pop(slot, None)
    else:
        _overrides[slot] = value


def clear_override(slot: None | str = None) -> None:
    """Clear one slot or, if no slot is given, all of them."""
    if slot is None:
        _overrides.clear()
        return
    _check_slot(slot)
    _overrides.pop(slot, None)


@contextmanager
def overrides(**values: object) -> Iterator[None]:
    """Override the given slots for the extent of a with statement."""
    for slot in values:
        _check_slot(slot)
    saved = dict(_overrides)
    try:
        for slot, value in values.items():
            set_override(slot, value)
        yield
    finally:
        _overrides.clear()
        _overrides.update(saved)


# --------------------------------------------------------------------------------------


def current_utc_time() -> int:
    """Return the current time in seconds since the epoch."""
    if 'time' in _overrides:
        return int(_overrides['time'])  # type: ignore[call-overload]
    return int(time.time())


def current_time_offset() -> int:
    """Return the offset between local time and UTC in seconds."""
    if 'time_offset' in _overrides:
        return int(_overrides['time_offset'])  # type: ignore[call-overload]

    now = datetime.datetime.fromtimestamp(current_utc_time()).astimezone()
    offset = now.utcoffset()
    return 0 if offset is None else int(offset.total_seconds())


def current_username() -> str:
    """
    Return the current user's name, taken from the first of `PANTRY_USERNAME`,
    `USER`, `LOGIN`, `USERNAME`, and `LOGNAME` that is set.
    """
    if 'username' in _overrides:
        return str(_overrides['username'])

    for variable in USERNAME_VARIABLES:
        if (username := os.environ.get(variable)):
            return username

    raise UndeterminedIdentityError(
        'unable to determine your username; please set PANTRY_USERNAME')


def current_author_id() -> str:
    """
    Return the current user's author id, taken from `PANTRY_AUTHOR_ID` and
    otherwise the upper-cased username.
    """
    if 'author_id' in _overrides:
        return str(_overrides['author_id'])
    if (author_id := os.environ.get(AUTHOR_ID_VARIABLE)):
        return author_id
    return current_username().upper()


def is_interactive() -> bool:
    """Determine whether standard input and output are connected to a terminal."""
    if 'interactive' in _overrides:
        return bool(_overrides['interactive'])
    return all(
        stream is not None and stream.isatty() for stream in (sys.stdin, sys.stdout)
    )


def uuid() -> str:
    """Return a random UUID."""
    return str(_uuid.uuid4())
