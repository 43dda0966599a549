from dataclasses import dataclass

from .corelist import CoreList, is_core
from .error import InvalidSpecError
from .version import Version


__all__ = ('PackageSpec',)


@dataclass(frozen=True, slots=True)
class PackageSpec:
    """
    A package identified by name and version. The compact textual form is
    `name~version`, with a missing version standing for version `0`. Since the
    version is rendered in its canonical form, `Foo~1.0` and `Foo~1.00` have
    the same textual form.

    Construction validates the name and coerces the version, so that
    `PackageSpec('Foo', '1.00')` and `PackageSpec.from_string('Foo~1.00')` are
    the same spec. Names must not be empty, must not contain a tilde, and must
    not start or end with whitespace.
    """

    name: str
    version: Version = Version()

    def __post_init__(self) -> None:
        name = self.name
        if not isinstance(name, str) or name.strip() == '':
            raise InvalidSpecError(f'package spec without name "{name!r}"')
        if '~' in name or name != name.strip():
            raise InvalidSpecError(f'invalid package name "{name!r}"')
        object.__setattr__(self, 'version', Version(self.version))

    @classmethod
    def of(
        cls, name: str, version: 'None | int | float | str | Version' = None
    ) -> 'PackageSpec':
        return cls(name, Version(version))

    @classmethod
    def from_string(cls, spec: str) -> 'PackageSpec':
        name, _, version = spec.partition('~')
        if name == '':
            raise InvalidSpecError(f'package spec without name "{spec}"')
        return cls.of(name, version or None)

    def is_perl(self) -> bool:
        """Determine whether this spec names perl itself."""
        return self.name == 'perl'

    def is_core(
        self,
        at: None | str | int | float = None,
        corelist: None | CoreList = None,
    ) -> bool:
        """
        Determine whether this package is bundled with the given perl release,
        which defaults to the running perl.
        """
        return is_core(self.name, self.version, at, corelist)

    def to_string(self) -> str:
        return f'{self.name}~{self.version}'

    def __str__(self) -> str:
        return self.to_string()
