"""Markdown output generation for VBA module documentation.

Generates one Markdown file per documented module and an index page
linking them together.
"""

import logging
from pathlib import Path
from typing import Optional

from xdocgen.parsers.reconciler import PARAM_TAG
from xdocgen.parsers.structure import (
    ArgumentRecord,
    Document,
    ProcedureDoc,
    TagMapping,
)

logger = logging.getLogger(__name__)


class MarkdownWriter:
    """Writes extracted documentation as Markdown files."""

    def __init__(self, output_dir: str = "docs/generated") -> None:
        """Initialize the Markdown writer.

        Args:
            output_dir: Directory where Markdown files will be written.
        """
        self.output_dir = Path(output_dir)

    def write_module_doc(self, document: Document, name: str) -> Path:
        """Write documentation for a single module to a .md file.

        Args:
            document: The extracted module documentation.
            name: Module name, used for the title and file name.

        Returns:
            Path to the written Markdown file.
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        md_path = self.output_dir / f"{name}.md"
        md_path.write_text(self.render(document, name), encoding="utf-8")

        logger.info("Wrote module documentation: %s", md_path)
        return md_path

    def write_index(self, names: list[str], title: str = "VBA Reference") -> Path:
        """Generate an index page linking all module pages.

        Args:
            names: Names of the documented modules.
            title: Title for the index page.

        Returns:
            Path to the written index file.
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        index_path = self.output_dir / "index.md"

        lines = [f"# {title}\n"]
        if names:
            lines.append("## Modules\n")
            for name in sorted(names):
                lines.append(f"- [{name}]({name}.md)")

        lines.append("")
        index_path.write_text("\n".join(lines), encoding="utf-8")

        logger.info("Wrote index: %s (%d modules)", index_path, len(names))
        return index_path

    def render(self, document: Document, name: str) -> str:
        """Render a module's documentation as Markdown.

        Args:
            document: The extracted module documentation.
            name: Module name used as the page title.

        Returns:
            Markdown string for the module.
        """
        lines = [f"# `{name}`\n"]

        if document.module:
            lines.append(self._render_tags(document.module))

        if document.procedures:
            lines.append("## Procedures\n")
            for procedure in document.procedures:
                lines.append(self._render_procedure(procedure))

        return "\n".join(lines)

    def _render_procedure(self, procedure: ProcedureDoc) -> str:
        lines: list[str] = []

        static = "Static " if procedure.static else ""
        lines.append(
            f"### `{procedure.scope.value} {static}{procedure.procedure.value} "
            f"{procedure.name}`\n"
        )
        lines.append(f"**Returns:** `{procedure.type}`\n")

        tags = {k: v for k, v in procedure.tags.items() if k != PARAM_TAG}
        if tags:
            lines.append(self._render_tags(tags))

        if procedure.params:
            lines.append("| Name | Type | Passing | Optional | Default | Description |")
            lines.append("|------|------|---------|----------|---------|-------------|")
            for param in procedure.params:
                lines.append(self._render_param(param))
            lines.append("")

        return "\n".join(lines)

    def _render_param(self, param: ArgumentRecord) -> str:
        name = f"{param.name}()" if param.array else param.name
        if param.param_array:
            name = f"ParamArray {name}"
        return (
            f"| `{name}` | `{param.type}` | {param.passing.value} | "
            f"{'Yes' if param.optional else 'No'} | "
            f"{self._cell(param.default)} | {self._cell(param.description)} |"
        )

    def _render_tags(self, tags: TagMapping) -> str:
        """Render annotation tags as a bullet list.

        Args:
            tags: Tag mapping to render.

        Returns:
            Markdown list, one bullet per tag value.
        """
        lines = []
        for tag, value in tags.items():
            for item in value.values:
                lines.append(f"- **{tag}:** {item}")
        lines.append("")
        return "\n".join(lines)

    def _cell(self, value: Optional[str]) -> str:
        if not value:
            return ""
        return value.replace("|", "\\|")
