"""Tests for the Markdown output generator."""

from pathlib import Path

import pytest

from xdocgen.output.markdown import MarkdownWriter
from xdocgen.parsers.structure import (
    ArgumentRecord,
    Document,
    Passing,
    ProcedureDoc,
    ProcedureKind,
    PropertyAccessor,
    Scope,
    TagValue,
)


@pytest.fixture
def writer(tmp_path: Path) -> MarkdownWriter:
    """Create a MarkdownWriter with a temp output directory."""
    return MarkdownWriter(output_dir=str(tmp_path / "docs"))


def _sample_document() -> Document:
    """Create a sample document for testing."""
    return Document(
        module={
            "Author": TagValue(values=("Jane Doe",)),
            "Todo": TagValue(values=("tests", "docs")),
        },
        procedures=[
            ProcedureDoc(
                name="Add",
                procedure=ProcedureKind.FUNCTION,
                type="Integer",
                tags={
                    "Description": TagValue(values=("Adds numbers",)),
                    "Param": TagValue(values=("a first", "b second")),
                },
                params=[
                    ArgumentRecord(name="a", type="Integer", description="first"),
                    ArgumentRecord(
                        name="b",
                        type="Integer",
                        passing=Passing.BY_VAL,
                        optional=True,
                        default="0",
                        description="second | last",
                    ),
                ],
            ),
            ProcedureDoc(
                name="Name(Get)",
                procedure=ProcedureKind.PROPERTY,
                property=PropertyAccessor.GET,
                scope=Scope.PRIVATE,
                static=True,
                type="String",
            ),
        ],
    )


class TestRender:
    """Tests for rendering a document to Markdown."""

    def test_title(self, writer: MarkdownWriter) -> None:
        content = writer.render(Document(), "Module1")
        assert content.startswith("# `Module1`")

    def test_module_tags(self, writer: MarkdownWriter) -> None:
        content = writer.render(_sample_document(), "Module1")
        assert "- **Author:** Jane Doe" in content
        assert "- **Todo:** tests" in content
        assert "- **Todo:** docs" in content

    def test_procedure_headings(self, writer: MarkdownWriter) -> None:
        content = writer.render(_sample_document(), "Module1")
        assert "### `Public Function Add`" in content
        assert "### `Private Static Property Name(Get)`" in content
        assert "**Returns:** `Integer`" in content

    def test_param_table(self, writer: MarkdownWriter) -> None:
        content = writer.render(_sample_document(), "Module1")
        assert "| `a` | `Integer` | ByRef | No |  | first |" in content
        assert "| `b` | `Integer` | ByVal | Yes | 0 | second \\| last |" in content

    def test_param_tag_not_listed_as_tag(self, writer: MarkdownWriter) -> None:
        content = writer.render(_sample_document(), "Module1")
        assert "**Param:**" not in content
        assert "- **Description:** Adds numbers" in content

    def test_no_table_without_params(self, writer: MarkdownWriter) -> None:
        document = Document(
            procedures=[ProcedureDoc(name="Run", procedure=ProcedureKind.SUB)]
        )
        assert "| Name |" not in writer.render(document, "Module1")

    def test_array_and_param_array_names(self, writer: MarkdownWriter) -> None:
        document = Document(
            procedures=[
                ProcedureDoc(
                    name="Sum",
                    procedure=ProcedureKind.FUNCTION,
                    params=[ArgumentRecord(name="items", array=True, param_array=True)],
                )
            ]
        )
        assert "`ParamArray items()`" in writer.render(document, "Module1")


class TestWriteFiles:
    """Tests for writing Markdown files to disk."""

    def test_write_module_doc(self, writer: MarkdownWriter) -> None:
        path = writer.write_module_doc(_sample_document(), "Person")
        assert path.name == "Person.md"
        assert path.exists()
        assert "Public Function Add" in path.read_text(encoding="utf-8")

    def test_write_index(self, writer: MarkdownWriter) -> None:
        path = writer.write_index(["Zeta", "Alpha"])
        content = path.read_text(encoding="utf-8")
        assert content.startswith("# VBA Reference")
        assert content.index("[Alpha](Alpha.md)") < content.index("[Zeta](Zeta.md)")

    def test_write_index_empty(self, writer: MarkdownWriter) -> None:
        content = writer.write_index([]).read_text(encoding="utf-8")
        assert "## Modules" not in content
