from dataclasses import dataclass
import re

from .error import InvalidNameError, InvalidSpecError


__all__ = (
    'StackSpec',
    'is_stack_all',
    'validate_property_name',
    'validate_stack_name',
)

DEFAULT_STACK = 'DEFAULT'
HEAD_COMMIT = 'HEAD'
STACK_ALL = '%'

NAME = re.compile(r'[A-Za-z0-9_-]+')


@dataclass(frozen=True, slots=True)
class StackSpec:
    """
    A stack identified by name and commit. The compact textual form is
    `name@commit`. Either part may be omitted, with `None` standing for the
    default stack and the head commit, respectively. The textual form renders
    omitted parts as `DEFAULT` and `HEAD`. So an omitted name and a stack
    explicitly named `DEFAULT` serialize the same way, even though they compare
    as different specs.

    Empty parts count as omitted. A name must not contain `@`, since the
    textual form could not be parsed back.
    """

    name: None | str = None
    commit: None | str = None

    def __post_init__(self) -> None:
        for field in ('name', 'commit'):
            value = getattr(self, field)
            if value is not None and not isinstance(value, str):
                raise InvalidSpecError(f'stack spec with invalid {field} "{value!r}"')
            if value == '':
                object.__setattr__(self, field, None)
        if self.name is not None and '@' in self.name:
            raise InvalidSpecError(f'invalid stack name "{self.name}"')

    @classmethod
    def from_string(cls, spec: str) -> 'StackSpec':
        if '@' in spec:
            name, _, commit = spec.partition('@')
        else:
            name, commit = spec, ''
        return cls(name, commit)

    def is_default(self) -> bool:
        return self.name is None

    def is_head(self) -> bool:
        return self.commit is None

    def to_string(self) -> str:
        return f'{self.name or DEFAULT_STACK}@{self.commit or HEAD_COMMIT}'

    def __str__(self) -> str:
        return self.to_string()


def validate_stack_name(name: str) -> str:
    """
    Ensure that the stack name consists of letters, digits, underscores, and
    hyphens only. Return the name.
    """
    if not isinstance(name, str) or NAME.fullmatch(name) is None:
        raise InvalidNameError(f'invalid stack name "{name}"')
    return name


def validate_property_name(name: str) -> str:
    """
    Ensure that the property name consists of letters, digits, underscores,
    and hyphens only. Return the name.
    """
    if not isinstance(name, str) or NAME.fullmatch(name) is None:
        raise InvalidNameError(f'invalid property name "{name}"')
    return name


def is_stack_all(name: None | str) -> bool:
    """Determine whether the name is the magic name for all stacks."""
    return name == STACK_ALL
