from collections.abc import Iterator
from contextlib import contextmanager
import itertools as it
import operator
import traceback
from typing import Callable, overload, Self, TextIO


def textify(v: object) -> str:
    for render in (str, repr, object.__str__):
        try:
            return render(v)
        except Exception:
            pass
    return '??'


class Console:
    """
    Styled output for the test runner plus assertions that are counted rather
    than raised. A strict console additionally raises `AssertionError` after
    reporting a failed assertion, which is what pytest expects.
    """

    _CSI = '\x1b['
    _BOLD = '1'
    _GREY = '38;5;240'
    _GREEN = '1;32'
    _RED = '1;31'
    _RESET = '39;0'

    def __init__(self, stream: TextIO, verbose: bool = False, strict: bool = False) -> None:
        self._is_tty = stream.isatty()
        self._stream = stream
        self.verbose = verbose
        self.strict = strict
        self._prefix_value = ''
        self._failed_assertions = 0

    def _sgr(self, code: str) -> str:
        return f'{self._CSI}{code}m' if self._is_tty else ''

    # ----------------------------------------------------------------------------------

    @contextmanager
    def new_prefix(self, prefix: str) -> Iterator['Console']:
        old_prefix = self._prefix_value
        try:
            self._prefix_value = prefix
            yield self
        finally:
            self._prefix_value = old_prefix

    def _line(self, message: str, style: None | str = None) -> Self:
        self._stream.write(self._prefix_value)
        if style is None:
            self._stream.write(message)
        else:
            self._stream.write(f'{self._sgr(style)}{message}{self._sgr(self._RESET)}')
        self._stream.write('\n')
        return self

    # ----------------------------------------------------------------------------------

    def trace(self, message: str) -> None:
        if self.verbose:
            self._line(message, self._GREY)

    def detail(self, message: str) -> None:
        self._line(message)

    def info(self, message: str) -> None:
        self._line(message, self._BOLD)

    def success(self, message: str) -> None:
        self._line(message, self._GREEN)

    def error(self, message: str) -> None:
        self._line(message, self._RED)

    def exception(self, x: BaseException) -> None:
        for line in it.chain(*(f.splitlines() for f in traceback.format_exception(x))):
            if (
                line == ''
                or line.startswith(' ')
                or line.startswith('During handling')
                or line == 'Traceback (most recent call last):'
            ):
                self._line(line)
            else:
                self._line(line, self._RED)

    # ----------------------------------------------------------------------------------

    @property
    def failed_assertions(self) -> int:
        return self._failed_assertions

    def _fail(self, display: str, cause: None | BaseException = None) -> None:
        self._failed_assertions += 1
        self.error(f'FAIL: {display}')
        if cause is not None:
            self.exception(cause)
        if self.strict:
            raise AssertionError(display) from cause

    def assert_eq(self, left: object, right: object) -> None:
        self.assert_op(operator.eq, left, right)

    def assert_true(self, value: object) -> None:
        self.assert_op(bool, value)

    def assert_false(self, value: object) -> None:
        self.assert_op(bool, value, expected=False)

    @overload
    def assert_op(
        self,
        op: Callable[[object], bool],
        arg: object,
        /,
        *,
        expected: bool = ...,
    ) -> None:
        ...

    @overload
    def assert_op(
        self,
        op: str | Callable[[object, object], bool],
        arg1: object,
        arg2: object,
        /,
        *,
        expected: bool = ...,
    ) -> None:
        ...

    def assert_op(
        self,
        op: str | Callable[[object], bool] | Callable[[object, object], bool],
        /,
        *args: object,
        expected: bool = True,
    ) -> None:
        fn = getattr(operator, op) if isinstance(op, str) else op
        fn_name = getattr(fn, '__name__', str(fn))

        prefix = '' if expected else 'not '
        display = f'{prefix}{fn_name}｟ {",  ".join(textify(a) for a in args)} ｠'

        try:
            result = bool(fn(*args))
        except Exception as x:
            self._fail(display, x)
            return

        if result != expected:
            self._fail(display)
            return
        self.trace(f'PASS: {display}')

    def assert_raises(
        self,
        exception: type[BaseException],
        fn: Callable[..., object],
        /,
        *args: object,
    ) -> None:
        display = (
            f'raises {exception.__name__}｟ {getattr(fn, "__name__", fn)}'
            f'({", ".join(repr(a) for a in args)}) ｠'
        )
        try:
            result = fn(*args)
        except exception:
            self.trace(f'PASS: {display}')
            return
        except Exception as x:
            self._fail(display, x)
            return
        self._fail(f'{display} returned {textify(result)}')
