"""Procedure segmentation for VBA module source.

Locates Function, Sub, and Property procedures with a pattern match
rather than a full grammar, and provides helpers to strip procedures
from a module and to locate a procedure's parameter list.
"""

import logging
import re

from xdocgen.parsers.errors import DeclarationMalformedError

logger = logging.getLogger(__name__)

# Closing keyword must repeat the opening kind; all accessors close with End Property.
# External "Declare" statements have no body and are never procedures.
_PROCEDURE_RE = re.compile(
    r"\b(?:(?:Public|Private|Friend)\s+)?"
    r"(?:Static\s+)?"
    r"(?<!Declare )(?<!PtrSafe )"
    r"(?P<kind>Function|Sub|Property(?=\s+(?:Get|Let|Set)\s))"
    r"(?:\s+(?:Get|Let|Set))?"
    r"\s+[A-Za-z0-9_]+\s*\("
    r"[\s\S]*?"
    r"\bEnd\s+(?P=kind)\b",
    re.IGNORECASE,
)


def procedure_spans(source: str) -> list[tuple[int, int]]:
    """Find the start and end offsets of every procedure in a module.

    Args:
        source: Full VBA module source.

    Returns:
        List of (start, end) offsets in source order.
    """
    return [match.span() for match in _PROCEDURE_RE.finditer(source)]


def segment_procedures(source: str) -> list[str]:
    """Split a module into the source text of its procedures.

    Args:
        source: Full VBA module source.

    Returns:
        Procedure substrings in source order; empty when the module
        declares no procedures.
    """
    procedures = [source[start:end] for start, end in procedure_spans(source)]
    logger.debug("Segmented %d procedures", len(procedures))
    return procedures


def strip_procedures(source: str) -> str:
    """Return the module text with every procedure removed.

    Args:
        source: Full VBA module source.

    Returns:
        The text outside all procedure spans, in order.
    """
    parts: list[str] = []
    position = 0
    for start, end in procedure_spans(source):
        parts.append(source[position:start])
        position = end
    parts.append(source[position:])
    return "".join(parts)


def parameter_list_span(procedure: str) -> tuple[int, int]:
    """Locate the parameter list of a procedure.

    Parentheses are matched by depth so array parameters such as
    ``values() As Long`` stay inside the list. Parentheses inside
    double-quoted string literals are ignored.

    Args:
        procedure: Source text of a single procedure.

    Returns:
        Offsets of the opening ``(`` and its matching ``)``.

    Raises:
        DeclarationMalformedError: If there is no ``(`` or it is never
            closed.
    """
    open_index = procedure.find("(")
    if open_index == -1:
        raise DeclarationMalformedError(procedure, "missing parameter list")

    depth = 0
    in_string = False
    for index in range(open_index, len(procedure)):
        char = procedure[index]
        if char == '"':
            in_string = not in_string
        elif in_string:
            continue
        elif char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return open_index, index

    raise DeclarationMalformedError(procedure, "unterminated parameter list")
