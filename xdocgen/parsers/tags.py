"""Annotation tag extraction.

Scans VBA text for comment lines of the form ``'@Name: value`` and
collects them into a tag mapping. Used on individual procedures and on
the module text left over once procedures are removed.
"""

import logging
import re

from xdocgen.parsers.structure import TagMapping, TagValue

logger = logging.getLogger(__name__)

_TAG_RE = re.compile(r"'@(?P<name>[A-Za-z0-9_]+):(?P<value>[^\n]*)(?:\n|$)")


def extract_tags(fragment: str) -> TagMapping:
    """Collect annotation tags from a fragment of VBA source.

    Values are left-trimmed and stripped of line-break characters.
    Repeated tags keep every value in order of appearance.

    Args:
        fragment: Procedure source or procedure-free module text.

    Returns:
        Mapping of tag name to its values; empty when nothing matches.
    """
    collected: dict[str, list[str]] = {}
    for match in _TAG_RE.finditer(fragment):
        value = match.group("value").lstrip().replace("\r", "").replace("\n", "")
        collected.setdefault(match.group("name"), []).append(value)

    logger.debug("Extracted %d distinct tags", len(collected))
    return {name: TagValue(values=tuple(values)) for name, values in collected.items()}
