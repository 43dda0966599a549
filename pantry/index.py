"""
Support for reading the package index of CPAN and its mirrors.

The index, `modules/02packages.details.txt.gz`, lists every indexed package
with its version and the path of the distribution that provides it. The file
starts with a block of mail-style headers, separated from the package rows by
an empty line:

    File:         02packages.details.txt
    Line-Count:   2
    Last-Updated: Sat, 17 Oct 2026 10:29:02 GMT

    Acme::Spam    1.05  S/SP/SPAMMER/Acme-Spam-1.05.tar.gz
    Acme::Spam::Can undef S/SP/SPAMMER/Acme-Spam-1.05.tar.gz

A version of `undef` means that the package does not declare a version and
becomes version `0`.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
import gzip
import logging
from pathlib import Path
from typing import NamedTuple

import requests

from .distpath import DistPath
from .error import PantryError
from .package import PackageSpec


__all__ = ('IndexEntry', 'PackageIndex', 'parse_index', 'read_index', 'retrieve_index')

logger = logging.getLogger("pantry.index")


CPAN_MIRROR = "https://www.cpan.org"
INDEX_PATH = "modules/02packages.details.txt.gz"

HEADERS = {
    "user-agent": "Pantry (CPAN-style repository tools)",
    "accept": "application/x-gzip, application/octet-stream;q=0.5",
}

UNDEF = 'undef'


class IndexEntry(NamedTuple):
    """A package and the distribution providing it."""

    package: PackageSpec
    author: str
    archive: str
    path: str

    @classmethod
    def from_line(cls, line: str) -> 'IndexEntry':
        fields = line.split()
        if len(fields) != 3:
            raise ValueError(f'index row has {len(fields)} instead of 3 fields')

        name, version, path = fields
        package = PackageSpec.of(name, None if version == UNDEF else version)
        author, archive = DistPath.from_string(path)
        return cls(package, author, archive, path)


@dataclass(frozen=True, slots=True)
class PackageIndex:
    headers: dict[str, str]
    entries: list[IndexEntry]

    def __len__(self) -> int:
        return len(self.entries)

    def by_author(self, author: str) -> list[IndexEntry]:
        author = author.upper()
        return [e for e in self.entries if e.author == author]

    def lookup(self, name: str) -> None | IndexEntry:
        for entry in self.entries:
            if entry.package.name == name:
                return entry
        return None


# --------------------------------------------------------------------------------------


def _parse_headers(lines: Iterator[str]) -> dict[str, str]:
    headers: dict[str, str] = {}
    for line in lines:
        line = line.rstrip('\r\n')
        if line.strip() == '':
            break
        key, colon, value = line.partition(':')
        if not colon:
            logger.warning('Ignoring malformed index header "%s"', line)
            continue
        headers[key.strip()] = value.strip()
    return headers


def parse_index(lines: Iterable[str]) -> PackageIndex:
    """Parse the lines of a package index."""
    cursor = iter(lines)
    headers = _parse_headers(cursor)

    entries = []
    for number, line in enumerate(cursor, start=1):
        if line.strip() == '':
            continue
        try:
            entries.append(IndexEntry.from_line(line))
        except (PantryError, ValueError) as x:
            logger.warning('Skipping index row %d "%s": %s', number, line.strip(), x)

    expected = headers.get('Line-Count')
    if expected is not None and expected.isdigit() and int(expected) != len(entries):
        logger.info('Index claims %s rows but has %d', expected, len(entries))
    return PackageIndex(headers, entries)


def retrieve_index(mirror: str = CPAN_MIRROR) -> PackageIndex:
    """Download and parse a mirror's package index."""
    url = f'{mirror.rstrip("/")}/{INDEX_PATH}'
    logger.debug('fetching package index "%s"', url)
    response = requests.get(url, headers=HEADERS, timeout=60)
    response.raise_for_status()

    text = gzip.decompress(response.content).decode('utf8')
    index = parse_index(text.splitlines())
    logger.info('Read %d packages from "%s"', len(index.entries), url)
    return index


def read_index(path: str | Path) -> PackageIndex:
    """Read a package index from a local file, which may be gzipped."""
    if str(path).endswith('.gz'):
        with gzip.open(path, mode='rt', encoding='utf8') as file:
            return parse_index(file)
    with open(path, mode='rt', encoding='utf8') as file:
        return parse_index(file)
