"""
Support for the numeric version identifiers used by CPAN distributions and
their packages.

CPAN versions come in two notations, decimal (`1.05`) and dotted (`v1.2.3` or
`1.2.3`), optionally followed by a trial suffix (`1.23_01`) that marks a
developer release. This module treats both notations the same way: A version
is a sequence of non-negative integer components, compared component by
component. Consequently, `1.9` is smaller than `1.10`, and, because trailing
zero components have no impact on equality and ordering, `2.0`, `2.00`, and
`2` are all the same version.

Like packaging's version module, this module represents each version with two
tuples, `Data` and `Key`. `Data` retains the segments as parsed and determines
the canonical string representation. `Key` implements the total order. The
`Version` class combines the two into a coherent interface.

Parsing does not retain the original notation. Instead, each component is
rendered as a plain integer, so that `1.0` and `1.00` have the same canonical
representation `1.0`. The only exception is the trial segment, which retains
its digits as written.
"""

import itertools as it
import re
from typing import NamedTuple

from .error import InvalidVersionError


__all__ = ("Data", "Key", "Version")

SYNTAX = re.compile(
    r"""
        [v]?
        (?P<release> [0-9]+ (?: [.][0-9]+ )* )
        (?: [_] (?P<trial> [0-9]+ ) )?
    """,
    re.X,
)


class Key(NamedTuple):
    """A version key for implementing a total order of version identifiers."""

    release: tuple[int, ...]
    trial: int


class Data(NamedTuple):
    """
    The individual segments of a version identifier. A `None` trial indicates
    a regular release. The trial segment is kept as text so that the canonical
    representation preserves leading zeros such as those in `1.23_01`.
    """

    release: tuple[int, ...]
    trial: None | str

    @classmethod
    def from_string(cls, version: str) -> 'Data':
        """Parse the given version identifier."""
        text = version.strip()
        if text == '':
            return cls((0,), None)

        segments = SYNTAX.fullmatch(text)
        if segments is None:
            raise InvalidVersionError(f'not a version string "{version}"')

        try:
            release = tuple(int(p) for p in segments.group("release").split("."))
            trial = segments.group("trial")
            if trial is not None:
                int(trial)
        except ValueError as x:
            # int() limits the number of digits it converts.
            raise InvalidVersionError(f'version component too long "{version}"') from x
        return cls(release, trial)

    def release_text(self) -> str:
        """Return the release components as a string."""
        return '.'.join(str(n) for n in self.release)

    def is_trial(self) -> bool:
        return self.trial is not None

    def to_key(self) -> Key:
        """Compute the key for this version."""
        release = tuple(
            reversed(list(it.dropwhile(lambda v: v == 0, reversed(self.release))))
        )
        # Trials order after the release they extend and before any longer one.
        trial = -1 if self.trial is None else int(self.trial)
        return Key(release, trial)

    def __repr__(self) -> str:
        return f"VersionData({', '.join(f'{f!r}' for f in self)})"

    def __str__(self) -> str:
        if self.trial is None:
            return self.release_text()
        return f'{self.release_text()}_{self.trial}'


class Version:
    """
    A parsed version identifier.

    Instances can be created from strings, integers, floats, and other
    versions. `None` and the empty string both denote version `0`, which is
    the version of packages that do not declare one.
    """

    __slots__ = ('_data', '_key')

    def __init__(self, version: 'None | int | float | str | Data | Version' = None) -> None:
        if isinstance(version, Version):
            data = version._data
        elif isinstance(version, Data):
            data = version
        elif version is None:
            data = Data((0,), None)
        elif isinstance(version, bool):
            raise InvalidVersionError(f'not a version "{version!r}"')
        elif isinstance(version, (int, float)):
            if version < 0:
                raise InvalidVersionError(f'negative version "{version!r}"')
            data = Data.from_string(str(version))
        elif isinstance(version, str):
            data = Data.from_string(version)
        else:
            raise InvalidVersionError(f'not a version "{version!r}"')

        self._data = data
        self._key = data.to_key()

    @property
    def data(self) -> Data:
        """Return the version data."""
        return self._data

    @property
    def key(self) -> Key:
        return self._key

    @property
    def release(self) -> tuple[int, ...]:
        return self._data.release

    @property
    def trial(self) -> None | str:
        return self._data.trial

    def is_trial(self) -> bool:
        """Determine whether this version denotes a developer release."""
        return self._data.is_trial()

    def is_zero(self) -> bool:
        """Determine whether this version is equal to version `0`."""
        return self._key == Key((), -1)

    def __lt__(self, other: object) -> bool:
        if isinstance(other, Version):
            return self._key < other._key
        return NotImplemented

    def __le__(self, other: object) -> bool:
        if isinstance(other, Version):
            return self._key <= other._key
        return NotImplemented

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Version):
            return self._key == other._key
        return NotImplemented

    def __ge__(self, other: object) -> bool:
        if isinstance(other, Version):
            return self._key >= other._key
        return NotImplemented

    def __gt__(self, other: object) -> bool:
        if isinstance(other, Version):
            return self._key > other._key
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._key)

    def __repr__(self) -> str:
        return f"Version('{self._data}')"

    def __str__(self) -> str:
        return str(self._data)
