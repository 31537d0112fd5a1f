## nodeopts — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from .parser import Token, ParsedOptions, tokenize_args, parse_node_args
from .errors import *
from .options import *
