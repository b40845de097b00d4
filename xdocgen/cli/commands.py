"""CLI commands for the VBA documentation extractor.

Provides the Click-based command group 'xdoc' with subcommands for
writing documentation for a tree of VBA files and for printing the
document of a single file.
"""

import logging
from pathlib import Path
from typing import Optional

import click

from xdocgen import __version__
from xdocgen.output.markdown import MarkdownWriter
from xdocgen.parsers.errors import XDocGenError
from xdocgen.parsers.structure import Document
from xdocgen.parsers.vba_parser import VBAParser
from xdocgen.utils.config import AppConfig, load_config
from xdocgen.utils.logging import setup_logging_from_config

logger = logging.getLogger(__name__)


def _collect_files(path: str, config: AppConfig) -> list[Path]:
    """Collect all VBA source files from a path.

    Extensions are compared case-insensitively, so ``Module1.BAS`` is
    collected alongside ``Module2.bas``.

    Args:
        path: File or directory path to scan.
        config: Application configuration with extensions and excludes.

    Returns:
        List of source file paths.
    """
    root = Path(path)
    if root.is_file():
        return [root]

    extensions = {ext.lower() for ext in config.parser.extensions}
    exclude = set(config.parser.exclude_patterns)
    return [
        f
        for f in sorted(root.rglob("*"))
        if f.is_file()
        and f.suffix.lower() in extensions
        and not any(part in exclude for part in f.parts)
    ]


def _module_name(file_path: Path, root: Path) -> str:
    """Derive a unique output name from a file's path under the scanned root.

    Args:
        file_path: Path to the source file.
        root: File or directory passed on the command line.

    Returns:
        The relative path with separators replaced, extension kept
        (e.g. ``forms_Main.frm``).
    """
    relative = file_path.relative_to(root) if root.is_dir() else Path(file_path.name)
    return relative.as_posix().replace("/", "_")


def _parse_file(file_path: Path, parser: VBAParser) -> Optional[Document]:
    """Parse a VBA file, skipping it when it cannot be documented.

    Args:
        file_path: Path to the source file.
        parser: Parser to use.

    Returns:
        The extracted Document, or None on error.
    """
    try:
        return parser.parse_file(str(file_path))
    except (XDocGenError, UnicodeDecodeError) as e:
        logger.warning("Skipping %s: %s", file_path, e)
    return None


@click.group()
@click.version_option(version=__version__, prog_name="xdocgen")
def xdoc() -> None:
    """VBA Documentation Extractor - turn '@Tag comments into structured docs."""
    config = load_config()
    setup_logging_from_config(config.logging)


@xdoc.command()
@click.argument("path", type=click.Path(exists=True))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "md"]),
    default=None,
    help="Output format (defaults to the configured format).",
)
@click.option("--output-dir", type=click.Path(), default=None, help="Output directory.")
@click.option(
    "--dry-run",
    is_flag=True,
    help="List the files that would be documented without writing anything.",
)
def generate(
    path: str, output_format: Optional[str], output_dir: Optional[str], dry_run: bool
) -> None:
    """Generate documentation for VBA source files.

    Parses every module under PATH and writes one JSON or Markdown
    document per module.
    """
    config = load_config()
    files = _collect_files(path, config)
    click.echo(f"Found {len(files)} VBA source files")

    if dry_run:
        for f in files:
            click.echo(f"  Would process: {f}")
        click.echo("Dry run complete. Nothing written.")
        return

    parser = VBAParser(encoding=config.parser.encoding)
    root = Path(path)
    documents: dict[str, Document] = {}
    skipped = 0
    with click.progressbar(files, label="Parsing files") as bar:
        for file_path in bar:
            document = _parse_file(file_path, parser)
            if document is None:
                skipped += 1
                continue
            documents[_module_name(file_path, root)] = document

    out_dir = Path(output_dir or config.output.output_dir)
    output_format = output_format or config.output.default_format

    if output_format == "md":
        writer = MarkdownWriter(output_dir=str(out_dir))
        for name, document in documents.items():
            writer.write_module_doc(document, name)
        writer.write_index(list(documents))
        click.echo(f"Markdown documentation written to {out_dir}")
    else:
        out_dir.mkdir(parents=True, exist_ok=True)
        for name, document in documents.items():
            json_path = out_dir / f"{name}.json"
            json_path.write_text(
                document.to_json(indent=config.output.indent), encoding="utf-8"
            )
            logger.info("Wrote %s", json_path)
        click.echo(f"JSON documentation written to {out_dir}")

    if skipped:
        click.echo(f"Skipped {skipped} files with errors")


@xdoc.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
def show(file: str) -> None:
    """Print the JSON document for a single VBA file."""
    config = load_config()
    parser = VBAParser(encoding=config.parser.encoding)
    try:
        document = parser.parse_file(file)
    except (XDocGenError, UnicodeDecodeError) as e:
        raise click.ClickException(str(e)) from e
    click.echo(document.to_json(indent=config.output.indent))
