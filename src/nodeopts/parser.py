## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import os
import sys
from typing import Literal
from dataclasses import dataclass


_DEBUG = bool(os.environ.get('NODEOPTS_DEBUG'))

TokenKind = Literal['option', 'positional', 'option-terminator']
ParsedOptions = dict[str, str | bool]


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    index: int
    name: str | None = None
    raw_name: str | None = None
    value: str | None = None
    inline_value: bool | None = None


def _option(index: int, name: str, raw_name: str, value: str | None = None) -> Token:
    return Token('option', index, name=name, raw_name=raw_name, value=value, inline_value=value is not None)


def _is_short_option_group(arg: str) -> bool:
    return len(arg) > 2 and arg[0] == '-' and arg[1] != '-'


def tokenize_args(args: list[str]) -> tuple[ParsedOptions, list[Token]]:
    """Classify each argument without knowing which flags expect values.

    Unknown flags are accepted and never consume the following argument, so
    `--inspect 9230` produces a boolean `inspect` and an orphaned positional.
    """
    tokens: list[Token] = []
    terminated = False
    for index, arg in enumerate(args):
        if terminated:
            tokens.append(Token('positional', index, value=arg))
        elif arg == '--':
            tokens.append(Token('option-terminator', index))
            terminated = True
        elif arg.startswith('--') and '=' in arg[3:]:
            # A value is split off only when an `=` follows the first name character.
            name, _, value = arg[2:].partition('=')
            tokens.append(_option(index, name, '--' + name, value))
        elif arg.startswith('--'):
            tokens.append(_option(index, arg[2:], arg))
        elif _is_short_option_group(arg):
            tokens.extend(_option(index, ch, '-' + ch) for ch in arg[1:])
        elif len(arg) == 2 and arg[0] == '-':
            tokens.append(_option(index, arg[1], arg))
        else:  # Lone dash, empty string and bare words.
            tokens.append(Token('positional', index, value=arg))

    values: ParsedOptions = {}
    for token in tokens:
        if token.kind == 'option':
            values[token.name] = True if token.value is None else token.value
    return values, tokens


def parse_node_args(args: list[str]) -> ParsedOptions:
    """Parse interpreter flags, attaching values written without the `=` sign."""
    values, tokens = tokenize_args(args)

    found = None
    for token in tokens:
        if token.kind == 'option-terminator':
            break

        # Look for an option that may have lost its value to the next token.
        if found is None:
            if token.kind == 'option' and token.value is None:
                found = token
            continue

        # Anything but a non-empty positional leaves the option as a flag.
        if token.kind != 'positional' or not token.value:
            found = None
            continue

        values[found.name] = token.value
        if _DEBUG: print(f"nodeopts: reattached `{token.value}` to `{found.raw_name}`", file=sys.stderr)
        found = None

    return values
