"""GitHub Actions runner protocol: annotations, log groups and step outputs.

Everything is printed with click so the same messages read fine in a local
terminal; outside a runner the ``::`` commands are plain text.
"""

import os
import uuid

import click


def info(message: str) -> None:
    click.echo(message)


def warning(message: str) -> None:
    click.echo(f"::warning::{_escape(message)}", err=True)


def error(message: str) -> None:
    click.echo(f"::error::{_escape(message)}", err=True)


def start_group(title: str) -> None:
    click.echo(f"::group::{title}")


def end_group() -> None:
    click.echo("::endgroup::")


def set_output(name: str, value: str) -> None:
    """Expose a step output through the file named by ``GITHUB_OUTPUT``.

    Values are written as heredoc blocks, so multi-line JSON needs no escaping.
    Without ``GITHUB_OUTPUT`` (local runs) nothing is written.
    """
    output_file = os.getenv("GITHUB_OUTPUT")
    if not output_file:
        return

    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    with open(output_file, "a", encoding="utf-8") as fh:
        fh.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")


def _escape(message: str) -> str:
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
