"""The exception raised for every user-facing failure."""

from __future__ import annotations


class GlanceError(Exception):
    """A failure reported on stderr that ends the command with status 1.

    ``prefix`` names the command that failed ("glance", "glance show", ...),
    or is ``None`` for messages such as usage lines that are shown bare.
    ``hint`` is an optional second line of advice.
    """

    def __init__(
        self,
        message: str,
        *,
        prefix: str | None = "glance",
        hint: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.prefix = prefix
        self.hint = hint

    def render(self) -> str:
        """Return the text to write to stderr, newline-terminated."""
        first = f"{self.prefix}: {self.message}" if self.prefix else self.message
        text = first + "\n"
        if self.hint:
            text += self.hint + "\n"
        return text