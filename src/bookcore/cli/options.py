# ABOUTME: Shared Click options and file loading for bookcore CLI commands.
# ABOUTME: The CLI is the file-access layer: it reads bytes and picks the declared format.

from pathlib import Path

import click

from bookcore.core.dispatch import BookFormat, detect_format

type_option = click.option(
    "--type",
    "declared_type",
    type=click.Choice([fmt.value for fmt in BookFormat], case_sensitive=False),
    default=None,
    help="Book format (default: detected from the file extension).",
)


def resolve_format(path: Path, declared_type: str | None) -> str:
    """Return the explicit format, or the one implied by the file name."""
    if declared_type:
        return declared_type.lower()
    detected = detect_format(path.name)
    if detected is None:
        raise click.UsageError(
            f"Cannot tell the format of {path.name}; pass --type."
        )
    return detected.value
