"""Main entry point for pathux."""

from __future__ import annotations

import sys

import click

from .cli import cli


def main(args: list[str] | None = None) -> int:
    """Run the CLI and return its exit code instead of exiting.

    Args:
        args: List of arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 on success)
    """
    if args is None:
        args = sys.argv[1:]
    try:
        result = cli.main(args=args, prog_name="pathux", standalone_mode=False)
    except click.ClickException as e:
        e.show()
        return e.exit_code
    except click.Abort:
        click.echo("Aborted!", err=True)
        return 1
    # --help and --version come back as their exit code
    return result if isinstance(result, int) else 0


if __name__ == "__main__":
    sys.exit(main())
