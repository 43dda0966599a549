from argparse import ArgumentParser, HelpFormatter, RawTextHelpFormatter
from dataclasses import dataclass, field
import logging
import os
import sys
from textwrap import dedent
import traceback

from .corelist import default_corelist, running_perl_version
from .distpath import DistPath, author_dir
from .environment import current_author_id, current_username
from .index import read_index, retrieve_index
from .package import PackageSpec
from .stack import StackSpec, validate_stack_name


LOG_FORMAT = '[%(levelname)s] %(message)s'

logger = logging.getLogger("pantry")


def parser() -> ArgumentParser:
    try:
        width = min(os.get_terminal_size()[0], 70)
    except OSError:
        width = 70

    def width_limited_formatter(prog: str) -> HelpFormatter:
        return RawTextHelpFormatter(prog, width=width)

    parser = ArgumentParser('pantry',
        description=dedent("""
            Name, parse, and classify the packages, distributions, and stacks of
            a CPAN-style repository.

            Package specs have the form NAME~VERSION, with the version
            defaulting to 0. Stack specs have the form NAME@COMMIT, with the
            name defaulting to DEFAULT and the commit defaulting to HEAD. Both
            are printed in their canonical form. Distribution paths may be full
            URLs, paths containing "authors/id/", or paths relative to that
            directory; they are reduced to author id and archive name.
        """),
        formatter_class=width_limited_formatter)
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='enable debug logging and show tracebacks')

    commands = parser.add_subparsers(dest='command', metavar='COMMAND', required=True)

    package = commands.add_parser('package', help='canonicalize package specs')
    package.add_argument('specs', metavar='SPEC', nargs='+')

    stack = commands.add_parser('stack', help='canonicalize stack specs')
    stack.add_argument(
        '--validate',
        action='store_true',
        help='also check that stack names use letters,\ndigits, "_", and "-" only')
    stack.add_argument('specs', metavar='SPEC', nargs='+')

    path = commands.add_parser('path', help='extract author and archive from paths')
    path.add_argument('specs', metavar='PATH', nargs='+')

    shard = commands.add_parser('shard', help="print an author's directory")
    shard.add_argument(
        '-b', '--base',
        metavar='DIR',
        default=None,
        help='prepend this directory')
    shard.add_argument('specs', metavar='AUTHOR', nargs='+')

    core = commands.add_parser('core', help='classify packages as core modules')
    core.add_argument(
        '-p', '--perl',
        metavar='VERSION',
        default=None,
        help='use this perl release instead of the running one')
    core.add_argument('specs', metavar='SPEC', nargs='+')

    index = commands.add_parser('index', help='list the packages in an index')
    index.add_argument(
        '-a', '--author',
        metavar='AUTHOR',
        default=None,
        help="list only this author's packages")
    index.add_argument(
        'specs', metavar='FILE_OR_MIRROR', nargs=1,
        help='a local index file or the URL of a mirror')

    commands.add_parser('whoami', help='print the current username and author id')
    return parser


@dataclass
class ToolOptions:
    command: str = ''
    verbose: bool = False
    validate: bool = False
    base: 'None | str' = None
    perl: 'None | str' = None
    author: 'None | str' = None
    specs: 'list[str]' = field(default_factory=list)


def run(options: ToolOptions) -> None:
    match options.command:
        case 'package':
            for spec in options.specs:
                print(PackageSpec.from_string(spec))
        case 'stack':
            for spec in options.specs:
                stack = StackSpec.from_string(spec)
                if options.validate and stack.name is not None:
                    validate_stack_name(stack.name)
                print(stack)
        case 'path':
            for spec in options.specs:
                author, archive = DistPath.from_string(spec)
                print(f'{author}\t{archive}')
        case 'shard':
            base = () if options.base is None else (options.base,)
            for spec in options.specs:
                print(author_dir(*base, spec))
        case 'core':
            corelist = default_corelist()
            perl = options.perl or running_perl_version(corelist)
            for spec in options.specs:
                package = PackageSpec.from_string(spec)
                verdict = 'is' if package.is_core(perl, corelist) else 'is not'
                print(f'{package} {verdict} core in perl {perl}')
        case 'index':
            source = options.specs[0]
            if source.startswith(('http://', 'https://')):
                index = retrieve_index(source)
            else:
                index = read_index(source)
            entries = (
                index.entries if options.author is None
                else index.by_author(options.author)
            )
            for entry in entries:
                print(f'{entry.package}\t{entry.path}')
        case 'whoami':
            print(f'{current_username()}\t{current_author_id()}')
        case _:
            raise ValueError(f'unknown command "{options.command}"')


def main() -> None:
    options = parser().parse_args(namespace=ToolOptions())
    logging.basicConfig(
        format=LOG_FORMAT,
        level=logging.DEBUG if options.verbose else logging.WARNING,
    )
    logger.debug('running "%s" with %d argument(s)', options.command, len(options.specs))

    try:
        run(options)
    except Exception as x:
        if options.verbose:
            traceback.print_exception(x)
        else:
            print(f'Error: {x}', file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
