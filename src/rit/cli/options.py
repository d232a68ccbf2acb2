"""Click options shared by the rit commands."""

import contextlib
import functools
import os

import click

from rit.core.services.observability import is_debug_enabled

stdin_flag = click.option(
    "--stdin",
    "use_stdin",
    is_flag=True,
    default=False,
    help="Read the inputs as JSON from stdin instead of prompting.",
)

_format_option = click.option(
    "--format",
    "format",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    help="Output format (text|json).",
)

_output_option = click.option(
    "--output",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write output to this file path instead of stdout.",
)


@contextlib.contextmanager
def _muted_events(mute: bool):
    previous = os.environ.get("RIT_LOG_SILENT")
    if not mute or previous == "1":
        yield
        return
    os.environ["RIT_LOG_SILENT"] = "1"
    try:
        yield
    finally:
        if previous is None:
            os.environ.pop("RIT_LOG_SILENT", None)
        else:
            os.environ["RIT_LOG_SILENT"] = previous


def output_flags(f):
    """Add --format and --output.

    Log events are muted while the command writes JSON or a file, unless
    --verbose / RIT_DEBUG asked for them.
    """

    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        machine_output = kwargs.get("format") == "json" or bool(kwargs.get("output"))
        mute = machine_output and not is_debug_enabled()
        with _muted_events(mute):
            return f(*args, **kwargs)

    return _format_option(_output_option(wrapper))
