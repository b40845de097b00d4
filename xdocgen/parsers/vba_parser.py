"""VBA module parser.

Runs the full extraction pipeline over one module: segments the
procedures, parses each declaration and parameter list, reconciles
parameters with their @Param tags, and collects the module-level tags
from the text outside any procedure.
"""

import logging
from pathlib import Path

from xdocgen.parsers.arguments import ArgumentParser
from xdocgen.parsers.declaration import DeclarationParser
from xdocgen.parsers.reconciler import reconcile
from xdocgen.parsers.segmenter import segment_procedures, strip_procedures
from xdocgen.parsers.structure import Document, ProcedureDoc
from xdocgen.parsers.tags import extract_tags

logger = logging.getLogger(__name__)


class VBAParser:
    """Parses VBA module source into a Document.

    The parser holds no state between calls; each call to
    parse_source builds a new Document in source order.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        """Initialize the parser.

        Args:
            encoding: Text encoding used by parse_file.
        """
        self.encoding = encoding
        self._declarations = DeclarationParser()
        self._arguments = ArgumentParser()

    def parse_file(self, file_path: str) -> Document:
        """Parse a VBA source file.

        Args:
            file_path: Path to a .bas, .cls or .frm file.

        Returns:
            The extracted Document.

        Raises:
            FileNotFoundError: If the file does not exist.
            XDocGenError: If a procedure cannot be documented.
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        source = path.read_text(encoding=self.encoding)
        logger.debug("Parsing %s", path)
        return self.parse_source(source)

    def parse_source(self, source: str) -> Document:
        """Parse VBA module source.

        Args:
            source: Full text of one module or class.

        Returns:
            The extracted Document.

        Raises:
            ArgumentNotFoundError: If an @Param tag names an unknown
                argument.
            DeclarationMalformedError: If a procedure lacks a parameter
                list.
        """
        procedures = [
            self.parse_procedure(procedure) for procedure in segment_procedures(source)
        ]
        document = Document(
            module=extract_tags(strip_procedures(source)),
            procedures=procedures,
        )

        logger.debug(
            "Parsed module: %d module tags, %d procedures",
            len(document.module),
            len(document.procedures),
        )
        return document

    def parse_procedure(self, procedure: str) -> ProcedureDoc:
        """Document a single procedure.

        Args:
            procedure: Source text of one procedure.

        Returns:
            The reconciled ProcedureDoc.
        """
        doc = self._declarations.parse(procedure)
        arguments = self._arguments.parse(procedure)
        return reconcile(doc, arguments)


def generate_document_json(source: str, indent: int = 2) -> str:
    """Extract documentation from VBA source and render it as JSON.

    Args:
        source: Full text of one module or class.
        indent: JSON indentation width.

    Returns:
        JSON text with ``Module`` first and ``Procedures`` second.
    """
    return VBAParser().parse_source(source).to_json(indent=indent)
