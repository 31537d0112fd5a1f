## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# nodeopts — Inspect and rewrite Node.js interpreter options before relaunching a child.
#

import os
import re
import sys
import math
from typing import Literal, Mapping
from dataclasses import dataclass

from .parser import ParsedOptions, parse_node_args
from .errors import InvalidArgumentError


RESTART_EXIT_CODE = 77
DEFAULT_DEBUG_PORT = 9229

INSPECT_KEYS = ('inspect', 'inspect-brk', 'inspect_brk')
MAX_OLD_SPACE_SIZE_KEYS = ('max-old-space-size', 'max_old_space_size')

_LEADING_INT_RE = re.compile(r'\s*([+-]?)([0-9]+)')
_MAX_DOUBLE_DIGITS = len(str(int(sys.float_info.max)))


@dataclass(frozen=True)
class OptionsSource:
    """Snapshot of where interpreter options come from; pass one in to avoid reading `os.environ`."""
    environ: Mapping[str, str]
    exec_argv: tuple[str, ...] = ()
    variable: str = 'NODE_OPTIONS'

    @classmethod
    def current(cls, exec_argv=(), variable='NODE_OPTIONS') -> 'OptionsSource':
        return cls(dict(os.environ), tuple(exec_argv), variable)


@dataclass(frozen=True)
class DebugAddress:
    """The debug address is in the form of `[host:]port`; the host is optional."""
    host: str | None = None
    port: int | float = DEFAULT_DEBUG_PORT


def parse_int(value: str) -> int | float:
    """Base-10 integer from the leading ASCII digits of `value`, or NaN when there are none.

    Digit runs too large for a double overflow to a signed infinity.
    """
    match = _LEADING_INT_RE.match(value)
    if match is None: return float('nan')
    sign, digits = match.groups()
    digits = digits.lstrip('0') or '0'
    if len(digits) > _MAX_DOUBLE_DIGITS or int(digits) > sys.float_info.max:
        return float('-inf') if sign == '-' else float('inf')
    return -int(digits) if sign == '-' else int(digits)


def format_number(value: int | float) -> str:
    """Render a parsed number, spelling NaN and infinities the way Node prints them."""
    if isinstance(value, float) and math.isnan(value): return 'NaN'
    if isinstance(value, float) and math.isinf(value): return 'Infinity' if value > 0 else '-Infinity'
    return str(value)


def get_node_options_args(source: OptionsSource | None = None) -> list[str]:
    source = source or OptionsSource.current()
    options = source.environ.get(source.variable)
    if options is None: return []
    return [arg.strip() for arg in options.split(' ')]


def format_debug_address(address: DebugAddress) -> str:
    if address.host: return f"{address.host}:{format_number(address.port)}"
    return format_number(address.port)


def get_parsed_debug_address(source: OptionsSource | None = None) -> DebugAddress:
    """Debug address from the first inspect flag in the options, else the default port."""
    args = get_node_options_args(source)
    if len(args) == 0: return DebugAddress()

    parsed = parse_node_args(args)
    address = next((parsed[key] for key in INSPECT_KEYS if key in parsed), None)
    if not address or not isinstance(address, str):
        return DebugAddress()

    # Ports are not validated here; malformed text becomes NaN.
    if ':' in address:
        host, _, port = address.partition(':')
        return DebugAddress(host, parse_int(port))
    return DebugAddress(None, parse_int(address))


def get_formatted_debug_address(source: OptionsSource | None = None) -> str:
    return format_debug_address(get_parsed_debug_address(source))


def format_node_options(args: Mapping[str, str | bool | None]) -> str:
    """Stringify options for a command line, dropping entries without a value."""
    formatted = []
    for key, value in args.items():
        if value is True:
            formatted.append(f"--{key}")
        elif value:
            formatted.append(f"--{key}={value}")
    return ' '.join(formatted)


def get_parsed_node_options_without_inspect(source: OptionsSource | None = None) -> ParsedOptions:
    args = get_node_options_args(source)
    if len(args) == 0: return {}

    parsed = parse_node_args(args)
    for key in INSPECT_KEYS:
        parsed.pop(key, None)
    return parsed


def get_formatted_node_options_without_inspect(source: OptionsSource | None = None) -> str:
    args = get_parsed_node_options_without_inspect(source)
    if len(args) == 0: return ''
    return format_node_options(args)


def parse_non_negative_integer(value: str) -> int:
    parsed = parse_int(value)
    if math.isnan(parsed) or math.isinf(parsed) or parsed < 0:
        raise InvalidArgumentError(f"'{value}' is not a non-negative number.", value=value)
    return parsed


def get_node_debug_type(source: OptionsSource | None = None) -> Literal['inspect', 'inspect-brk'] | None:
    """Debugger mode from the active execution arguments and the options variable together."""
    source = source or OptionsSource.current()
    args = [*source.exec_argv, *get_node_options_args(source)]
    if len(args) == 0: return None

    parsed = parse_node_args(args)
    if parsed.get('inspect'): return 'inspect'
    if parsed.get('inspect-brk') or parsed.get('inspect_brk'): return 'inspect-brk'
    return None


def get_max_old_space_size(source: OptionsSource | None = None) -> int | float | None:
    """Heap limit in megabytes from `--max-old-space-size`, parsed without validation."""
    args = get_node_options_args(source)
    if len(args) == 0: return None

    parsed = parse_node_args(args)
    size = parsed.get('max-old-space-size') or parsed.get('max_old_space_size')
    if not size or not isinstance(size, str): return None
    return parse_int(size)
