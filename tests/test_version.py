from .console import Console
from pantry.error import InvalidVersionError
from pantry.version import Version


def test_parse_version(console: Console) -> None:
    for input, output_text, output_data in (
        ('1.2.3', '1.2.3', ((1, 2, 3), None)),
        ('v1.2.3', '1.2.3', ((1, 2, 3), None)),
        ('1.00', '1.0', ((1, 0), None)),
        ('1.05', '1.5', ((1, 5), None)),
        ('  2.14 ', '2.14', ((2, 14), None)),
        ('1.23_01', '1.23_01', ((1, 23), '01')),
        ('', '0', ((0,), None)),
        (None, '0', ((0,), None)),
        (7, '7', ((7,), None)),
        (1.5, '1.5', ((1, 5), None)),
    ):
        actual = Version(input)
        console.assert_eq(str(actual), output_text)
        console.assert_eq(actual.data, output_data)


def test_compare_versions(console: Console) -> None:
    for s1, op, s2 in (
        ('1.9', 'lt', '1.10'),
        ('2.0', 'eq', '2.00'),
        ('2', 'eq', '2.0.0'),
        ('0', 'eq', None),
        ('1.2.3', 'ne', '1.2.2'),
        ('1.23', 'lt', '1.23_01'),
        ('1.23_01', 'lt', '1.23_02'),
        ('1.23_01', 'lt', '1.23.1'),
        ('v1.2.3', 'eq', '1.2.3'),
    ):
        v1, v2 = Version(s1), Version(s2)
        console.assert_op(op, v1, v2)
        if op in ('eq', 'ne'):
            console.assert_op(op, v2, v1)
        elif op == 'lt':
            console.assert_op('gt', v2, v1)


def test_hash_agrees_with_equality(console: Console) -> None:
    console.assert_eq(hash(Version('2.0')), hash(Version('2.00')))
    console.assert_eq(len({Version('1'), Version('1.0'), Version('1.0.0')}), 1)


def test_zero_and_trial(console: Console) -> None:
    console.assert_true(Version().is_zero())
    console.assert_true(Version('0.0').is_zero())
    console.assert_false(Version('0.01').is_zero())
    console.assert_true(Version('1.23_01').is_trial())
    console.assert_false(Version('1.23').is_trial())


def test_reject_invalid_versions(console: Console) -> None:
    for input in ('abc', '1.2a', '1..2', '1.', '-1', '1.2-TRIAL', '1_2_3', -3, True, []):
        console.assert_raises(InvalidVersionError, Version, input)
    console.assert_raises(ValueError, Version, 'x.y')


def test_reject_oversized_components(console: Console) -> None:
    digits = '9' * 5000
    for input in (digits, f'1.{digits}', f'v1.2.{digits}', f'1.2_{digits}'):
        console.assert_raises(InvalidVersionError, Version, input)
