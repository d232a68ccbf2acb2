"""Interactive prompts used by the delete flow.

The use cases only depend on the ``Prompter`` protocol, so tests can hand in
a scripted implementation instead of driving a terminal.
"""

from __future__ import annotations

from typing import Protocol, Sequence

import click
from rich.console import Console

from rit.core.services.error_codes import ErrorCode, RitError


class Prompter(Protocol):
    def choose(self, prompt: str, options: Sequence[str]) -> str: ...

    def confirm(self, question: str, choices: Sequence[str]) -> bool: ...

    def text(self, prompt: str, required: bool = True) -> str: ...


class ClickPrompter:
    """Prompter backed by click, rendering option lists with rich."""

    def __init__(self, console: Console | None = None):
        self._console = console or Console()

    def choose(self, prompt: str, options: Sequence[str]) -> str:
        if not options:
            raise RitError(
                code=ErrorCode.PROMPT_ERROR,
                message=f"No options available for: {prompt.strip()}",
            )
        self._console.print(f"[bold]{prompt.strip()}[/bold]")
        for number, option in enumerate(options, start=1):
            self._console.print(f"  {number}. {option}", markup=False, highlight=False)
        try:
            number = click.prompt(
                "Option", type=click.IntRange(1, len(options)), err=True
            )
        except click.Abort as exc:
            raise RitError(code=ErrorCode.PROMPT_ERROR, message="Selection aborted") from exc
        return options[number - 1]

    def confirm(self, question: str, choices: Sequence[str]) -> bool:
        """Ask a yes/no style question; choices[0] is the negative answer."""
        try:
            answer = click.prompt(
                question,
                type=click.Choice(list(choices), case_sensitive=False),
                default=choices[0],
                err=True,
            )
        except click.Abort as exc:
            raise RitError(code=ErrorCode.PROMPT_ERROR, message="Confirmation aborted") from exc
        return answer.lower() != choices[0].lower()

    def text(self, prompt: str, required: bool = True) -> str:
        try:
            value = click.prompt(prompt, default="" if not required else None, err=True)
        except click.Abort as exc:
            raise RitError(code=ErrorCode.PROMPT_ERROR, message="Input aborted") from exc
        value = value.strip()
        if required and not value:
            raise RitError(
                code=ErrorCode.VALIDATION_ERROR,
                message=f"A value is required for: {prompt}",
            )
        return value
