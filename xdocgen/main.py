"""Entry point for the VBA Documentation Extractor.

Delegates to the 'xdoc' command group, which loads configuration and
sets up logging before running a subcommand.
"""

from xdocgen.cli.commands import xdoc


def main() -> None:
    """Launch the CLI."""
    xdoc()


if __name__ == "__main__":
    main()
