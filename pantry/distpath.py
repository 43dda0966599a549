"""
Support for the paths of distributions in a CPAN-style repository.

A repository stores each author's distributions below `authors/id/`, sharded
into three directory levels by the author id's first letter, first two letters,
and the full id. For example, the distributions of author `MIKE` live in
`authors/id/M/MI/MIKE/`. Some mirrors add further subdirectories below the
author's directory. Pantry ignores them, so that a distribution is identified
by author id and archive name alone.
"""

from pathlib import PurePath, PurePosixPath
import re
from typing import NamedTuple

from .error import InvalidNameError, UnparsablePathError


__all__ = (
    'DistPath',
    'author_dir',
    'isa_perl',
    'is_vcs_file',
    'parse_dist_path',
    'shard',
)

AUTHORS_ID = '/authors/id/'
PERL_RELEASE = re.compile(r'/perl-[0-9.]+\.tar\.(?:gz|bz2)$')
VCS_FILES = frozenset(('.svn', '.git', '.gitignore', 'CVS'))


class DistPath(NamedTuple):
    """The author id and archive name extracted from a distribution path."""

    author: str
    archive: str

    @classmethod
    def from_string(cls, path: str) -> 'DistPath':
        # e.g. http://host/yadda/authors/id/A/AU/AUTHOR/subdir/Foo-1.0.tar.gz
        #   or A/AU/AUTHOR/Foo-1.0.tar.gz
        relative = path.rpartition(AUTHORS_ID)[2]
        parts = relative.split('/')
        if len(parts) < 3:
            raise UnparsablePathError(f'unable to parse path "{path}"')

        author, archive = parts[2], parts[-1]
        if author == '' or archive == '':
            raise UnparsablePathError(f'unable to parse path "{path}"')
        return cls(author, archive)

    def to_path(self, *base: str | PurePath) -> PurePosixPath:
        """Return the canonical location of this distribution."""
        return author_dir(*base, self.author) / self.archive


def parse_dist_path(path: str) -> tuple[str, str]:
    """
    Parse a path to a distribution, as it appears in a full URL, a path within
    a repository, or an index, and return the author id and archive name.
    """
    return tuple(DistPath.from_string(path))  # type: ignore[return-value]


def shard(author: str) -> tuple[str, str, str]:
    """Return the three directory levels for the author id."""
    author = author.strip().upper()
    if author == '' or '/' in author:
        raise InvalidNameError(f'invalid author id "{author}"')
    return author[:1], author[:2], author


def author_dir(*parts: str | PurePath) -> PurePosixPath:
    """
    Return the directory for an author's distributions. The last argument is
    the author id. Any preceding arguments are base directories that are
    prepended to the result.
    """
    if len(parts) == 0:
        raise TypeError('author_dir() requires an author id')
    *base, author = parts
    return PurePosixPath(*base, *shard(str(author)))


def isa_perl(path_or_url: str) -> bool:
    """Determine whether the path appears to point to a release of perl itself."""
    return PERL_RELEASE.search(path_or_url) is not None


def is_vcs_file(path: str | PurePath) -> bool:
    """Determine whether the path names a version control system's file."""
    return PurePosixPath(path).name in VCS_FILES
