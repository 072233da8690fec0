"""
Formatter adapter — pretty-print generated source through an external tool.

The formatter is a plain ``text -> text`` callable.  The default binding
runs ``deno fmt -``: the generated text goes to stdin, the formatted
text comes back on stdout.  Any spawn failure or non-zero exit is fatal
for the current generation; there is no fallback to unformatted output.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from typing import Callable, Sequence

logger = logging.getLogger(__name__)

Formatter = Callable[[str], str]

DEFAULT_FORMATTER_COMMAND = ("deno", "fmt", "-")


class FormatterError(Exception):
    """Raised when the external formatter cannot run or fails."""

    def __init__(self, message: str, returncode: int | None = None) -> None:
        super().__init__(message)
        self.returncode = returncode


class FormatterAdapter:
    """Run a stdin → stdout formatter command.

    No timeout is applied: a hung formatter blocks the caller.
    """

    def __init__(
        self,
        command: Sequence[str] = DEFAULT_FORMATTER_COMMAND,
        cwd: str | None = None,
    ) -> None:
        if not command:
            raise ValueError("Formatter command must not be empty")
        self.command = list(command)
        self.cwd = cwd

    @property
    def name(self) -> str:
        return self.command[0]

    def is_available(self) -> bool:
        return shutil.which(self.command[0]) is not None

    def __call__(self, text: str) -> str:
        return self.format(text)

    def format(self, text: str) -> str:
        """Format ``text`` and return the tool's stdout.

        Raises:
            FormatterError: If the command cannot be started or exits non-zero.
        """
        logger.debug("Formatting %d chars with %s", len(text), " ".join(self.command))

        # subprocess.run closes both pipes and reaps the child on every path
        try:
            result = subprocess.run(
                self.command,
                input=text.encode("utf-8"),
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                cwd=self.cwd,
                check=False,
            )
        except OSError as e:
            raise FormatterError(f"Cannot run formatter '{self.name}': {e}") from e

        if result.returncode != 0:
            raise FormatterError(
                f"Formatter '{self.name}' exited with code {result.returncode}",
                returncode=result.returncode,
            )

        return result.stdout.decode("utf-8")


def identity_formatter(text: str) -> str:
    """Formatter that leaves the text unchanged."""
    return text
