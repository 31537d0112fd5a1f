## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import click


class NodeOptionsError(Exception):
    def __init__(self, message: str = ""):
        """Base class for all errors raised while handling interpreter options."""
        super().__init__(message)

class InvalidArgumentError(NodeOptionsError, click.BadParameter):
    """Numeric option text that is not a non-negative integer; click reports it as a usage error."""
    def __init__(self, message, *, value=None):
        super().__init__(message)
        self.value = value
