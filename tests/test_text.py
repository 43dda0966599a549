from .console import Console
from pantry.text import body_text, decamelize, indent, title_text, trim


def test_trim(console: Console) -> None:
    for input, expected in (
        ('  x  ', 'x'),
        ('\t\nfoo bar \r\n', 'foo bar'),
        ('', ''),
        ('x', 'x'),
    ):
        console.assert_eq(trim(input), expected)


def test_decamelize(console: Console) -> None:
    for input, expected in (
        ('FooBar', 'foo_bar'),
        ('fooBarBaz', 'foo_bar_baz'),
        ('Foo', 'foo'),
        ('HTTPServer', 'httpserver'),
        ('already_snake', 'already_snake'),
        (None, None),
    ):
        console.assert_eq(decamelize(input), expected)


def test_title_and_body(console: Console) -> None:
    for input, title, body in (
        ('Title\nBody text\nmore', 'Title', 'Body text\nmore'),
        ('Only a title', 'Only a title', ''),
        ('Title\n', 'Title', ''),
        ('\nBody', '', 'Body'),
        ('', '', ''),
    ):
        console.assert_eq(title_text(input), title)
        console.assert_eq(body_text(input), body)


def test_indent(console: Console) -> None:
    for input, spaces, expected in (
        ('a\nb', 2, '  a\n  b'),
        ('a\nb\n', 4, '    a\n    b\n'),
        ('a\n\nb', 1, ' a\n \n b'),
        ('a\nb', 0, 'a\nb'),
        ('a\nb', None, 'a\nb'),
        ('', 3, ''),
    ):
        console.assert_eq(indent(input, spaces), expected)

    original = 'x\ny'
    indent(original, 2)
    console.assert_eq(original, 'x\ny')
