"""Adapters — bindings for external tools.

Public re-exports for convenient access.
"""

from lemonade_dev.adapters.formatter import (
    Formatter,
    FormatterAdapter,
    FormatterError,
    identity_formatter,
)

__all__ = [
    "Formatter",
    "FormatterAdapter",
    "FormatterError",
    "identity_formatter",
]
