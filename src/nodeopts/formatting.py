## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re

from .options import DebugAddress, format_debug_address, format_number


def write_without_ansi(write_fn):
    """Wrapper function that strips ANSI codes before calling the original writer."""
    ansi_re = re.compile(r'\033\[[0-9;]*m')
    return lambda text: write_fn(ansi_re.sub('', text))

def format_item(it) -> str:
    if isinstance(it, DebugAddress): return format_debug_address(it)
    if isinstance(it, str): return '"' + it.replace('"', '\\"') + '"'
    if isinstance(it, bool): return str(it).lower()
    if it is None: return 'none'
    if isinstance(it, float): return format_number(it)
    return str(it)

def format_parsed(parsed: dict, sep='\t') -> list[str]:
    return [f"{key}{sep}{format_item(value)}" for key, value in parsed.items()]
