"""Data models for representing extracted VBA documentation.

Defines dataclasses for annotation tags, procedure arguments, procedure
documentation records, and the top-level document. These models form
the shared vocabulary between the parsing pipeline and the output
writers.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union


class Scope(str, Enum):
    """Procedure visibility."""

    PUBLIC = "Public"
    PRIVATE = "Private"
    FRIEND = "Friend"


class ProcedureKind(str, Enum):
    """Supported procedure declaration kinds."""

    FUNCTION = "Function"
    SUB = "Sub"
    PROPERTY = "Property"


class PropertyAccessor(str, Enum):
    """Property procedure accessor forms."""

    GET = "Get"
    LET = "Let"
    SET = "Set"


class Passing(str, Enum):
    """Argument passing mechanism."""

    BY_VAL = "ByVal"
    BY_REF = "ByRef"


@dataclass
class TagValue:
    """One or more values collected for a single annotation tag.

    The model always holds the full ordered sequence. Collapsing a
    single value to a bare string only happens in the wire format.

    Attributes:
        values: Tag values in order of appearance.
    """

    values: tuple[str, ...]

    @property
    def is_many(self) -> bool:
        """Whether the tag occurred more than once."""
        return len(self.values) > 1

    @property
    def first(self) -> str:
        """The first value recorded for the tag."""
        return self.values[0]

    def to_wire(self) -> Union[str, list[str]]:
        """Serialize to the legacy output shape.

        Returns:
            The single string when the tag occurred once, otherwise a
            list of all values.
        """
        if self.is_many:
            return list(self.values)
        return self.values[0]

    @classmethod
    def from_wire(cls, data: Union[str, list[str]]) -> TagValue:
        """Deserialize from the legacy output shape.

        Args:
            data: A single string or a list of strings.

        Returns:
            A new TagValue instance.
        """
        if isinstance(data, str):
            return cls(values=(data,))
        return cls(values=tuple(data))


TagMapping = dict[str, TagValue]


def tags_to_wire(tags: TagMapping) -> dict[str, Union[str, list[str]]]:
    """Serialize a tag mapping, preserving first-occurrence order."""
    return {name: value.to_wire() for name, value in tags.items()}


@dataclass
class ArgumentRecord:
    """Represents a single procedure parameter.

    Attributes:
        name: Parameter name with any array subscript removed.
        optional: Whether the parameter is declared Optional.
        passing: ByVal or ByRef (ByRef when unspecified).
        param_array: Whether the parameter is a ParamArray.
        type: Declared type, "Variant" when no As clause is given.
        array: Whether the declared name carries array subscripts.
        default: Default value text for optional parameters.
        description: Text from the matching @Param tag, once reconciled.
    """

    name: str
    optional: bool = False
    passing: Passing = Passing.BY_REF
    param_array: bool = False
    type: str = "Variant"
    array: bool = False
    default: Optional[str] = None
    description: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary.

        Returns:
            Dictionary representation of this argument.
        """
        data: dict[str, Any] = {
            "Name": self.name,
            "Optional": self.optional,
            "Passing": self.passing.value,
            "ParamArray": self.param_array,
            "Type": self.type,
            "Array": self.array,
            "Default": self.default,
        }
        if self.description is not None:
            data["Description"] = self.description
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ArgumentRecord:
        """Deserialize from a dictionary.

        Args:
            data: Dictionary with argument fields.

        Returns:
            A new ArgumentRecord instance.
        """
        return cls(
            name=data["Name"],
            optional=data.get("Optional", False),
            passing=Passing(data.get("Passing", "ByRef")),
            param_array=data.get("ParamArray", False),
            type=data.get("Type", "Variant"),
            array=data.get("Array", False),
            default=data.get("Default"),
            description=data.get("Description"),
        )


@dataclass
class ProcedureDoc:
    """Documentation extracted for one procedure.

    Attributes:
        name: Procedure name, suffixed with the accessor for properties
            (e.g. ``Value(Get)``).
        scope: Declared visibility.
        static: Whether the procedure is declared Static.
        procedure: Declaration kind.
        property: Accessor kind, only set for Property procedures.
        type: Declared return type, "Variant" when omitted.
        source: Unmodified procedure source text.
        tags: Annotation tags found inside the procedure.
        params: Reconciled parameter documentation.
    """

    name: str
    procedure: ProcedureKind
    scope: Scope = Scope.PUBLIC
    static: bool = False
    property: Optional[PropertyAccessor] = None
    type: str = "Variant"
    source: str = ""
    tags: TagMapping = field(default_factory=dict)
    params: list[ArgumentRecord] = field(default_factory=list)

    def param_to_wire(self) -> Union[None, dict[str, Any], list[dict[str, Any]]]:
        """Serialize the reconciled parameters to the legacy output shape.

        Returns:
            None when there are no parameters, the single record when
            there is exactly one, otherwise a list of records.
        """
        if not self.params:
            return None
        if len(self.params) == 1:
            return self.params[0].to_dict()
        return [p.to_dict() for p in self.params]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary.

        Tags are assigned after the declared fields, so a tag sharing a
        declared field's name replaces that field's value.

        Returns:
            Dictionary representation of this procedure.
        """
        data: dict[str, Any] = {
            "Name": self.name,
            "Scope": self.scope.value,
            "Static": self.static,
            "Procedure": self.procedure.value,
        }
        if self.property is not None:
            data["Property"] = self.property.value
        data["Type"] = self.type
        data["Source"] = self.source
        data.update(tags_to_wire(self.tags))
        data["Param"] = self.param_to_wire()
        return data


@dataclass
class Document:
    """Top-level extraction result for one VBA module.

    Attributes:
        module: Module-level annotation tags.
        procedures: Procedure records in order of appearance.
    """

    module: TagMapping = field(default_factory=dict)
    procedures: list[ProcedureDoc] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary.

        Returns:
            Dictionary with ``Module`` first, then ``Procedures``.
        """
        return {
            "Module": tags_to_wire(self.module),
            "Procedures": [p.to_dict() for p in self.procedures],
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Render the document as JSON.

        Args:
            indent: Indentation width passed to json.dumps.

        Returns:
            JSON text with keys in construction order.
        """
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
