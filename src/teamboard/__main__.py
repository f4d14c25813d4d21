"""CLI entry point for teamboard."""

from __future__ import annotations

from teamboard.cli import cli


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
