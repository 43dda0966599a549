"""Names, parses, and classifies the packages, distributions, and stacks of a
CPAN-style repository."""

from .corelist import CoreList, is_core, perl_version_key
from .distpath import DistPath, author_dir, parse_dist_path, shard
from .error import (
    InvalidNameError,
    InvalidSpecError,
    InvalidVersionError,
    PantryError,
    UndeterminedIdentityError,
    UnknownPerlVersionError,
    UnparsablePathError,
)
from .package import PackageSpec
from .stack import StackSpec, validate_property_name, validate_stack_name
from .version import Version

__version__ = '0.1.0'

__all__ = (
    'CoreList',
    'DistPath',
    'InvalidNameError',
    'InvalidSpecError',
    'InvalidVersionError',
    'PackageSpec',
    'PantryError',
    'StackSpec',
    'UndeterminedIdentityError',
    'UnknownPerlVersionError',
    'UnparsablePathError',
    'Version',
    'author_dir',
    'is_core',
    'parse_dist_path',
    'perl_version_key',
    'shard',
    'validate_property_name',
    'validate_stack_name',
)
