"""Exceptions raised by the VBA documentation pipeline."""

from typing import Iterable


class XDocGenError(Exception):
    """Base class for documentation extraction errors."""


class ArgumentNotFoundError(XDocGenError):
    """An @Param tag names an argument the procedure does not declare.

    Attributes:
        argument_name: The name taken from the @Param tag.
        known_names: Argument names parsed from the parameter list.
    """

    def __init__(self, argument_name: str, known_names: Iterable[str]) -> None:
        self.argument_name = argument_name
        self.known_names = list(known_names)
        super().__init__(
            "Argument not found. Check that the @Param tags match the "
            f"argument names. Argument name: {argument_name!r}; "
            f"argument list: [{', '.join(self.known_names)}]"
        )


class DeclarationMalformedError(XDocGenError):
    """A procedure declaration could not be parsed.

    Attributes:
        declaration: First line of the offending procedure text.
        reason: What was missing or unexpected.
    """

    def __init__(self, procedure: str, reason: str) -> None:
        lines = procedure.strip().splitlines()
        self.declaration = lines[0] if lines else ""
        self.reason = reason
        super().__init__(f"Malformed declaration {self.declaration!r}: {reason}")
