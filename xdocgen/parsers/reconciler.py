"""Merging of parsed arguments with @Param annotation tags."""

import logging
from dataclasses import replace

from xdocgen.parsers.errors import ArgumentNotFoundError
from xdocgen.parsers.structure import ArgumentRecord, ProcedureDoc

logger = logging.getLogger(__name__)

PARAM_TAG = "Param"


def _split_param_entry(entry: str) -> tuple[str, str]:
    """Split an @Param value into argument name and description.

    Args:
        entry: Tag value such as ``values() the numbers to add``.

    Returns:
        The argument name without subscript parentheses, and the
        remaining description text.
    """
    parts = entry.split(None, 1)
    if not parts:
        return "", ""
    name = parts[0].replace("(", "").replace(")", "")
    description = parts[1].strip() if len(parts) > 1 else ""
    return name, description


def reconcile(
    doc: ProcedureDoc, arguments: dict[str, ArgumentRecord]
) -> ProcedureDoc:
    """Attach parameter documentation to a procedure record.

    With @Param tags, only the documented arguments are listed, in tag
    order, each carrying its description. Without them, every parsed
    argument is listed undocumented, and a procedure without
    parameters gets none.

    Args:
        doc: Procedure record from the declaration parser.
        arguments: Argument records from the argument parser.

    Returns:
        A copy of ``doc`` with ``params`` filled in.

    Raises:
        ArgumentNotFoundError: If an @Param tag names an argument that
            the procedure does not declare.
    """
    param_tag = doc.tags.get(PARAM_TAG)

    if param_tag is None:
        if "" in arguments:
            params: list[ArgumentRecord] = []
        else:
            params = list(arguments.values())
        return replace(doc, params=params)

    params = []
    for entry in param_tag.values:
        name, description = _split_param_entry(entry)
        if name not in arguments:
            raise ArgumentNotFoundError(name, arguments.keys())
        params.append(replace(arguments[name], description=description))

    logger.debug(
        "Documented %d of %d arguments in %s", len(params), len(arguments), doc.name
    )
    return replace(doc, params=params)
