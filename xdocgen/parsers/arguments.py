"""Parameter list parsing.

Turns the parameter list of one VBA procedure into ArgumentRecord
objects keyed by argument name.
"""

import logging
import re
from typing import Optional

from xdocgen.parsers.segmenter import parameter_list_span
from xdocgen.parsers.structure import ArgumentRecord, Passing

logger = logging.getLogger(__name__)

_CONTINUATION_RE = re.compile(r"[ \t]+_[ \t]*(?:\r?\n|$)")
_AS_RE = re.compile(r"\s+As\s+", re.IGNORECASE)


def _split_top_level(text: str, separator: str, maxsplit: int = -1) -> list[str]:
    """Split on a separator that is not inside quotes or parentheses.

    Args:
        text: Text to split.
        separator: Single separator character.
        maxsplit: Maximum number of splits, unlimited when negative.

    Returns:
        The split pieces, untrimmed.
    """
    pieces: list[str] = []
    depth = 0
    in_string = False
    start = 0
    for index, char in enumerate(text):
        if char == '"':
            in_string = not in_string
        elif in_string:
            continue
        elif char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        elif char == separator and depth == 0:
            if 0 <= maxsplit <= len(pieces):
                break
            pieces.append(text[start:index])
            start = index + 1
    pieces.append(text[start:])
    return pieces


class ArgumentParser:
    """Parses a VBA parameter list into argument records.

    A procedure without parameters yields a single record under the
    empty-string key so callers can tell "no parameters" apart from
    "undocumented parameters".
    """

    def parse(self, procedure: str) -> dict[str, ArgumentRecord]:
        """Parse the parameter list of a procedure.

        Args:
            procedure: Source text of a single procedure.

        Returns:
            Mapping of argument name to record, in declaration order.

        Raises:
            DeclarationMalformedError: If the procedure has no
                parameter list.
        """
        open_index, close_index = parameter_list_span(procedure)
        parameter_list = _CONTINUATION_RE.sub(
            " ", procedure[open_index + 1 : close_index]
        )

        if not parameter_list.strip():
            return {"": ArgumentRecord(name="")}

        arguments: dict[str, ArgumentRecord] = {}
        for clause in _split_top_level(parameter_list, ","):
            record = self.parse_clause(clause.strip())
            if record.name in arguments:
                logger.warning(
                    "Duplicate argument %r; the later declaration wins", record.name
                )
            arguments[record.name] = record

        logger.debug("Parsed %d arguments", len(arguments))
        return arguments

    def parse_clause(self, clause: str) -> ArgumentRecord:
        """Parse a single parameter clause such as ``ByVal x As Long``.

        Args:
            clause: One trimmed parameter declaration.

        Returns:
            The ArgumentRecord for the clause.
        """
        declaration, *default_part = _split_top_level(clause, "=", maxsplit=1)
        default: Optional[str] = default_part[0].strip() if default_part else None

        before_as, *type_part = _AS_RE.split(declaration, maxsplit=1)
        modifiers = before_as.split()
        lowered = [modifier.lower() for modifier in modifiers]

        raw_name = modifiers[-1] if modifiers else ""
        # The type runs to the end of the clause, default included ("Integer = 5")
        arg_type = _AS_RE.split(clause, maxsplit=1)[1].strip() if type_part else ""

        return ArgumentRecord(
            name=raw_name.replace("(", "").replace(")", ""),
            optional="optional" in lowered,
            passing=Passing.BY_VAL if "byval" in lowered else Passing.BY_REF,
            param_array="paramarray" in lowered,
            type=arg_type or "Variant",
            array="(" in raw_name,
            default=default,
        )


def parse_arguments(procedure: str) -> dict[str, ArgumentRecord]:
    """Parse a procedure's parameter list with a default ArgumentParser."""
    return ArgumentParser().parse(procedure)
