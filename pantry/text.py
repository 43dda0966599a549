"""Small string transformations for messages and names."""

import re
import textwrap
from typing import overload


__all__ = ('body_text', 'decamelize', 'indent', 'title_text', 'trim')

_ASCII_WHITESPACE = ' \t\n\r\f\v'
_CAMEL_HUMP = re.compile(r'([a-z])([A-Z])')


def trim(text: str) -> str:
    """Remove leading and trailing whitespace."""
    return text.strip(_ASCII_WHITESPACE)


def title_text(text: str) -> str:
    """Return the text before the first newline or all text if there is none."""
    return text.partition('\n')[0]


def body_text(text: str) -> str:
    """Return the text after the first newline or nothing if there is none."""
    return text.partition('\n')[2]


@overload
def decamelize(text: str) -> str:
    ...

@overload
def decamelize(text: None) -> None:
    ...

def decamelize(text: None | str) -> None | str:
    """Convert `FooBar` into `foo_bar`. `None` passes through unchanged."""
    if text is None:
        return None
    return _CAMEL_HUMP.sub(r'\1_\2', text).lower()


def indent(text: str, spaces: None | int = None) -> str:
    """Return a copy of the text with every line indented by so many spaces."""
    if not spaces or not text:
        return text
    return textwrap.indent(text, ' ' * spaces, lambda _: True)
