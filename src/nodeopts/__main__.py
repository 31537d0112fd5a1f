## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# nodeopts — Inspect and rewrite Node.js interpreter options before relaunching a child.
#

import sys
from dataclasses import dataclass

import click

from .errors import NodeOptionsError
from .parser import parse_node_args
from .formatting import write_without_ansi, format_parsed
from .options import (OptionsSource, DebugAddress, RESTART_EXIT_CODE, format_node_options, format_debug_address, format_number,
                      get_parsed_debug_address, get_formatted_debug_address, get_node_options_args,
                      get_parsed_node_options_without_inspect, get_formatted_node_options_without_inspect,
                      get_node_debug_type, get_max_old_space_size, parse_non_negative_integer)


@dataclass(frozen=True)
class CliConfig:
    plain: bool
    variable: str
    exec_argv: tuple[str, ...]

    def source(self) -> OptionsSource:
        return OptionsSource.current(exec_argv=self.exec_argv, variable=self.variable)


def print_and_exit(message: str, code: int = 1):
    if code == 0:
        print(message)
    else:
        print(message, file=sys.stderr)
    sys.exit(code)


def _non_negative_integer(ctx: click.Context, param: click.Parameter, value: str | None) -> int | None:
    return None if value is None else parse_non_negative_integer(value)


@click.group(context_settings={'help_option_names': ['-h', '--help']})
@click.option('--plain', '-p', is_flag=True, help='Strip ANSI color codes from the output.')
@click.option('--variable', default='NODE_OPTIONS', show_default=True, help='Environment variable holding the options.')
@click.option('--exec-arg', 'exec_argv', multiple=True, help='Interpreter argument already active in the process.')
@click.pass_context
def cli(ctx: click.Context, plain: bool, variable: str, exec_argv: tuple[str, ...]) -> None:
    ctx.ensure_object(dict)
    ctx.obj['config'] = CliConfig(plain=plain, variable=variable, exec_argv=exec_argv)

    if plain:
        sys.stdout.write = write_without_ansi(sys.stdout.write)
        sys.stderr.write = write_without_ansi(sys.stderr.write)


@cli.command('parse', context_settings={'ignore_unknown_options': True})
@click.argument('args', nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def parse(ctx: click.Context, args: tuple[str, ...]) -> None:
    source = ctx.obj['config'].source()
    parsed = parse_node_args(list(args) if args else get_node_options_args(source))
    for line in format_parsed(parsed):
        click.echo(line)


@cli.command('debug-address')
@click.pass_context
def debug_address(ctx: click.Context) -> None:
    click.echo(get_formatted_debug_address(ctx.obj['config'].source()))


@cli.command('debug-kind')
@click.pass_context
def debug_kind(ctx: click.Context) -> None:
    kind = get_node_debug_type(ctx.obj['config'].source())
    if kind is None: ctx.exit(1)
    click.echo(kind)


@cli.command('strip-inspect')
@click.pass_context
def strip_inspect(ctx: click.Context) -> None:
    click.echo(get_formatted_node_options_without_inspect(ctx.obj['config'].source()))


@cli.command('max-old-space-size')
@click.pass_context
def max_old_space_size(ctx: click.Context) -> None:
    size = get_max_old_space_size(ctx.obj['config'].source())
    if size is None: ctx.exit(1)
    click.echo(format_number(size))


@cli.command('child-options')
@click.option('--max-old-space-size', 'heap_size', callback=_non_negative_integer, help='Heap limit in megabytes for the child.')
@click.option('--inspect-port', callback=_non_negative_integer, help='Debug port for the child; defaults to the parent port plus one.')
@click.pass_context
def child_options(ctx: click.Context, heap_size: int | None, inspect_port: int | None) -> None:
    source = ctx.obj['config'].source()
    options = get_parsed_node_options_without_inspect(source)
    if heap_size is not None:
        options.pop('max_old_space_size', None)
        options['max-old-space-size'] = str(heap_size)

    kind = get_node_debug_type(source)
    if kind is not None or inspect_port is not None:
        parent = get_parsed_debug_address(source)
        port = inspect_port if inspect_port is not None else parent.port + 1
        options[kind or 'inspect'] = format_debug_address(DebugAddress(parent.host, port))

    click.echo(format_node_options(options))


@cli.command('should-restart')
@click.argument('status', callback=_non_negative_integer)
def should_restart(status: int) -> None:
    if status == RESTART_EXIT_CODE:
        print_and_exit('restart', 0)
    print_and_exit(f'\033[30;43m EXITED. \033[0m Child process exited with status \033[97m{status}\033[0m.', status)


def main(argv: list[str] | None = None) -> None:
    try:
        cli.main(args=argv, prog_name='nodeopts')
    except NodeOptionsError as exc:
        print_and_exit(f'\033[30;43m ERROR. \033[0m {exc}', 1)


if __name__ == "__main__":
    main()
