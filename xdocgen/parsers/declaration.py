"""Procedure declaration parsing.

Derives name, visibility, modifiers, kind, and return type from a
single procedure's source text, and merges in the annotation tags found
inside the procedure.
"""

import logging
import re

from xdocgen.parsers.errors import DeclarationMalformedError
from xdocgen.parsers.segmenter import parameter_list_span
from xdocgen.parsers.structure import (
    ProcedureDoc,
    ProcedureKind,
    PropertyAccessor,
    Scope,
)
from xdocgen.parsers.tags import extract_tags

logger = logging.getLogger(__name__)

_DEFAULT_TYPE = "Variant"

# Field names a tag can overwrite in the serialized record.
RESERVED_FIELDS = frozenset(
    {"Name", "Scope", "Static", "Procedure", "Property", "Type", "Source"}
)

_CONTINUATION_RE = re.compile(r"\s_\s*$")
_AS_CLAUSE_RE = re.compile(r"(?:^|\s)As\s+(?P<type>\S.*)$", re.IGNORECASE)


class DeclarationParser:
    """Parses the declaration of one VBA procedure.

    The header is everything before the first ``(``; its last token is
    the procedure name and the tokens before it are modifiers. The
    return type comes from the text following the parameter list.
    """

    def parse(self, procedure: str) -> ProcedureDoc:
        """Parse a procedure's declaration into a documentation record.

        Args:
            procedure: Source text of a single procedure.

        Returns:
            A ProcedureDoc without reconciled parameters.

        Raises:
            DeclarationMalformedError: If the parameter list, the
                declaration keyword, or a property accessor is missing.
        """
        open_index, close_index = parameter_list_span(procedure)

        tokens = procedure[:open_index].split()
        if not tokens:
            raise DeclarationMalformedError(procedure, "missing procedure name")
        name = tokens[-1]
        modifiers = [token.lower() for token in tokens[:-1]]

        kind = self._kind(procedure, modifiers)
        accessor = None
        if kind is ProcedureKind.PROPERTY:
            accessor = self._accessor(procedure, modifiers)
            name = f"{name}({accessor.value})"

        tags = extract_tags(procedure)
        collisions = RESERVED_FIELDS.intersection(tags)
        if collisions:
            logger.warning(
                "Tags %s in %s overwrite declared fields",
                sorted(collisions),
                name,
            )

        return ProcedureDoc(
            name=name,
            scope=self._scope(modifiers),
            static="static" in modifiers,
            procedure=kind,
            property=accessor,
            type=self._return_type(procedure, close_index),
            source=procedure,
            tags=tags,
        )

    def _scope(self, modifiers: list[str]) -> Scope:
        """Resolve visibility from the header modifiers.

        Args:
            modifiers: Lower-cased header tokens.

        Returns:
            The declared Scope, Public when none is given.
        """
        if "public" in modifiers:
            return Scope.PUBLIC
        if "private" in modifiers:
            return Scope.PRIVATE
        if "friend" in modifiers:
            return Scope.FRIEND
        return Scope.PUBLIC

    def _kind(self, procedure: str, modifiers: list[str]) -> ProcedureKind:
        if "function" in modifiers:
            return ProcedureKind.FUNCTION
        if "sub" in modifiers:
            return ProcedureKind.SUB
        if "property" in modifiers:
            return ProcedureKind.PROPERTY
        raise DeclarationMalformedError(procedure, "missing declaration keyword")

    def _accessor(self, procedure: str, modifiers: list[str]) -> PropertyAccessor:
        """Read the Get/Let/Set keyword that follows ``Property``.

        Args:
            procedure: Source text, used for error reporting.
            modifiers: Lower-cased header tokens.

        Returns:
            The property accessor kind.

        Raises:
            DeclarationMalformedError: If no valid accessor precedes the
                procedure name.
        """
        position = modifiers.index("property") + 1
        if position >= len(modifiers):
            raise DeclarationMalformedError(procedure, "missing property accessor")
        try:
            return PropertyAccessor(modifiers[position].capitalize())
        except ValueError:
            raise DeclarationMalformedError(
                procedure, f"unknown property accessor {modifiers[position]!r}"
            ) from None

    def _return_type(self, procedure: str, close_index: int) -> str:
        """Read the return type from the text after the parameter list.

        Line continuations are followed so a type clause pushed onto the
        next line, or split across two continuation lines, is still
        found.

        Args:
            procedure: Source text of a single procedure.
            close_index: Offset of the parameter list's closing ``)``.

        Returns:
            The declared type, or "Variant" without an As clause.
        """
        lines = procedure[close_index + 1 :].split("\n")
        clause = lines[0].rstrip()
        next_line = 1
        while _CONTINUATION_RE.search(clause) and next_line < len(lines):
            clause = _CONTINUATION_RE.sub(" ", clause) + lines[next_line].rstrip()
            next_line += 1

        # Drop a trailing comment and any statements after a ":" separator
        clause = clause.split("'", 1)[0].split(":", 1)[0]

        match = _AS_CLAUSE_RE.search(clause)
        if not match:
            return _DEFAULT_TYPE
        return match.group("type").strip()


def parse_declaration(procedure: str) -> ProcedureDoc:
    """Parse a procedure's declaration with a default DeclarationParser."""
    return DeclarationParser().parse(procedure)
