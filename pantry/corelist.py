"""
Classification of packages as core modules, i.e., modules that ship with a
particular perl release.

The classification is driven by a static table that maps perl versions to the
modules bundled with that release and their versions. Lookups are by exact perl
version only. There is no interpolation between known releases, since a module
bundled with 5.30.3 need not be bundled with 5.30.2.

Perl versions appear in two notations, dotted (`5.10.1`) and decimal
(`5.010001`). `perl_version_key()` maps both onto the decimal notation with six
fractional digits, which is the notation used for the table's keys.

Module versions, in contrast, are compared as `Version`s, i.e., component by
component. That does not always agree with perl, which reads most module
versions as decimal numbers. Perl 5.10.1 bundles Data::Dumper 2.124, which perl
considers older than 2.13, yet `2.124` has the larger second component. Hence
`is_core('Data::Dumper', '2.13', '5.10.1')` is true. By the same token, the
canonical text of `1.05` is `1.5`.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
import functools
import os
from pathlib import Path
import re
import tomllib
from typing import cast

from .error import InvalidVersionError, UnknownPerlVersionError
from .version import Version


__all__ = (
    "CoreList",
    "default_corelist",
    "is_core",
    "perl_version_key",
    "running_perl_version",
)

PERL_VERSION_VARIABLE = 'PANTRY_PERL_VERSION'
TABLE_PATH = Path(__file__).with_name('corelist.toml')

DECIMAL = re.compile(r'(?P<major>[0-9]+)(?:[.](?P<fraction>[0-9_]*))?')
DOTTED = re.compile(r'v?(?P<major>[0-9]+)(?:[.][0-9]+)*')


def perl_version_key(version: str | int | float) -> str:
    """
    Convert a perl version into the decimal key used by the core module table.
    Versions with a leading `v` or more than one dot are dotted, all others
    decimal. So `5.10.1`, `v5.10.1`, `5.010001`, and `5.0100010` all map to
    `5.010001`, while `5.01` and `5.010` map to `5.010000`.
    """
    # Version objects drop leading zeros, which are significant in decimals.
    if isinstance(version, (bool, Version)) or not isinstance(version, (str, int, float)):
        raise InvalidVersionError(f'not a perl version "{version!r}"')

    text = str(version).strip()
    if text.startswith('v') or text.count('.') > 1:
        if DOTTED.fullmatch(text) is None:
            raise InvalidVersionError(f'not a perl version "{version}"')
        try:
            components = tuple(int(p) for p in text.lstrip('v').split('.'))
        except ValueError as x:
            raise InvalidVersionError(f'not a perl version "{version}"') from x
        return _dotted_key(components)

    if (decimal := DECIMAL.fullmatch(text)) is None:
        raise InvalidVersionError(f'not a perl version "{version}"')
    fraction = (decimal.group('fraction') or '').replace('_', '').rstrip('0')
    width = max(6, -(-len(fraction) // 3) * 3)
    try:
        major = int(decimal.group('major'))
    except ValueError as x:
        raise InvalidVersionError(f'not a perl version "{version}"') from x
    return f"{major}.{fraction.ljust(width, '0')}"


def _dotted_key(components: tuple[int, ...]) -> str:
    major, *rest = components
    rest = (rest + [0, 0])[: max(2, len(rest))]
    for component in rest:
        if component > 999:
            raise InvalidVersionError(
                f'perl version component {component} exceeds 999')
    return f"{major}.{''.join(f'{c:03d}' for c in rest)}"


@dataclass(frozen=True, slots=True)
class CoreList:
    """A table of the modules bundled with each known perl release."""

    table: Mapping[str, Mapping[str, Version]]

    @classmethod
    def from_toml(cls, path: str | Path = TABLE_PATH) -> 'CoreList':
        with open(path, mode='rb') as file:
            data = cast(dict[str, object], tomllib.load(file))

        table: dict[str, dict[str, Version]] = {}
        for perl, modules in data.items():
            if not isinstance(modules, dict):
                raise ValueError(f'"{path}" has non-table entry for perl "{perl}"')
            table[perl_version_key(perl)] = {
                name: Version(bundled) for name, bundled in modules.items()
            }
        return cls(table)

    @classmethod
    def from_mapping(
        cls, table: Mapping[str, Mapping[str, 'None | int | float | str | Version']]
    ) -> 'CoreList':
        return cls({
            perl_version_key(perl): {
                name: Version(bundled) for name, bundled in modules.items()
            }
            for perl, modules in table.items()
        })

    def perls(self) -> list[str]:
        """Return the known perl versions, oldest first."""
        return sorted(self.table, key=_numeric_key)

    def latest_perl(self) -> str:
        return max(self.table, key=_numeric_key)

    def modules(self, at: str | int | float) -> Mapping[str, Version]:
        """Return the modules bundled with the given perl release."""
        key = perl_version_key(at)
        if (modules := self.table.get(key)) is None:
            raise UnknownPerlVersionError(f'unknown perl version "{at}"')
        return modules

    def is_core(
        self,
        name: str,
        version: 'None | str | int | float | Version' = None,
        at: None | str | int | float = None,
    ) -> bool:
        """
        Determine whether the given version of the named package is bundled
        with the given perl release, which defaults to the running perl.
        Modules bundled without a version never count as core.
        """
        if at is None:
            at = running_perl_version(self)
        bundled = self.modules(at).get(name)
        if bundled is None or bundled.is_zero():
            return False
        return Version(version) <= bundled

    def first_release(
        self, name: str, version: 'None | str | int | float | Version' = None
    ) -> None | str:
        """
        Return the oldest known perl release that bundles at least the given
        version of the named package.
        """
        for perl in self.perls():
            if self.is_core(name, version, perl):
                return perl
        return None

    def __iter__(self) -> Iterator[str]:
        return iter(self.perls())


def _numeric_key(perl: str) -> tuple[int, str]:
    major, _, fraction = perl.partition('.')
    return int(major), fraction


@functools.cache
def default_corelist() -> CoreList:
    """Load the table shipped with pantry."""
    return CoreList.from_toml(TABLE_PATH)


def running_perl_version(corelist: None | CoreList = None) -> str:
    """
    Determine the version of the running perl. Pantry does not run perl, so
    the version comes from the `PANTRY_PERL_VERSION` environment variable and
    otherwise defaults to the newest release in the table.
    """
    if (configured := os.environ.get(PERL_VERSION_VARIABLE)):
        return perl_version_key(configured)
    return (corelist or default_corelist()).latest_perl()


def is_core(
    name: str,
    version: 'None | str | int | float | Version' = None,
    at: None | str | int | float = None,
    corelist: None | CoreList = None,
) -> bool:
    return (corelist or default_corelist()).is_core(name, version, at)
