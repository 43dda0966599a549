#!.venv/bin/python

# mypy: disallow_any_expr = false

from dataclasses import dataclass
import doctest
from importlib import import_module
from pathlib import Path
import subprocess
import sys

from tests.console import Console


TEST_MODULES = (
    'tests.test_version',
    'tests.test_package',
    'tests.test_corelist',
    'tests.test_stack',
    'tests.test_distpath',
    'tests.test_text',
    'tests.test_environment',
    'tests.test_index',
    'tests.test_cli',
)

# ======================================================================================


@dataclass
class Options:
    test_runner: str
    console: Console
    module_name: str = ''
    verbose: bool = False

    def make_verbose(self) -> None:
        self.verbose = True
        self.console.verbose = True

    def test_command(self) -> list[str]:
        command = [sys.executable, self.test_runner]
        if self.verbose:
            command.append('-v')
        return command


def run_tests(options: Options) -> int:
    console = options.console
    console.info("Getting started with pantry's test suite...")
    console.detail(f'Running "{sys.executable}"')
    console.detail(f' - Python {sys.version}')

    try:
        import pantry
    except ImportError:
        console.error('Unable to import pantry')
        sys.exit(1)

    console.detail(f'Testing pantry {pantry.__version__}')

    # ----------------------------------------------------------------------------------

    console.info('Running unit tests...')

    failed_modules = 0
    for module in TEST_MODULES:
        console.detail(f'╭──── {module}')
        completion = subprocess.run([*options.test_command(), 'run-test-module', module])
        if completion.returncode != 0:
            failed_modules += 1
        console.detail('╰─╼')

    if failed_modules > 0:
        console.error(f'{failed_modules}/{len(TEST_MODULES)} test modules failed!')
        sys.exit(1)

    # ----------------------------------------------------------------------------------

    console.info('Running documentation tests...')

    try:
        sys.argv.remove('-v')
    except ValueError:
        pass

    doc_failures, doc_tests = doctest.testfile(
        'README.md', optionflags=doctest.REPORT_NDIFF)

    if doc_failures != 0:
        console.error(f'{doc_failures}/{doc_tests} documentation tests failed!')
        sys.exit(1)

    console.detail(f'All {doc_tests} documentation tests passed')

    # ----------------------------------------------------------------------------------

    console.success('W00t! All tests passed!')
    return 0

# ======================================================================================

def run_module_test(options: Options) -> int:
    console = options.console
    module = import_module(options.module_name)

    errors = 0
    for key in dir(module):
        if not key.startswith('test_'):
            continue
        value = getattr(module, key)
        if not callable(value):
            continue

        console.detail(f'├─ {value.__name__}')
        with console.new_prefix('│   '):
            try:
                value(options.console)
            except Exception as x:
                console.exception(x)
                errors += 1

    return bool(errors + console.failed_assertions)

# --------------------------------------------------------------------------------------

if __name__ == '__main__':
    options = Options(sys.argv[0], Console(sys.stdout))
    console = options.console

    try:
        fn = run_tests
        for arg in sys.argv[1:]:
            if arg == '-v':
                options.make_verbose()
            elif arg == 'run-test-module':
                fn = run_module_test
            elif fn == run_module_test and options.module_name == '':
                options.module_name = arg
            else:
                raise SystemExit(f'unrecognized command line argument "{arg}"')

        if fn == run_module_test and options.module_name == '':
            raise SystemExit('can\'t "run-test-module" without module name')

        sys.exit(fn(options))

    except SystemExit as x:
        code = x.args[0] if x.args else 0
        if isinstance(code, str):
            console.error(code)
            code = 1
        sys.exit(code)

    except subprocess.CalledProcessError as x:
        cmd = list(x.cmd)
        if Path(cmd[0]).name.startswith('python'):
            cmd[0] = 'python'
        console.info(
            f'command "{" ".join(cmd)}" failed with exit status {x.returncode}')
        sys.exit(1)

    except Exception as x:
        console.exception(x)
        sys.exit(1)
