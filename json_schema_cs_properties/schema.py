"""
In-memory JSON Schema model.

These nodes represent a parsed schema with local references already
linked, ready for property-level decisions and type resolution.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Flag
from typing import Any


class JsonObjectType(Flag):
    """Set of JSON value kinds accepted by a schema."""

    NONE = 0
    ARRAY = 1
    BOOLEAN = 2
    INTEGER = 4
    NULL = 8
    NUMBER = 16
    OBJECT = 32
    STRING = 64
    FILE = 128

    @classmethod
    def from_name(cls, name: str) -> JsonObjectType:
        """Map a JSON Schema type name (e.g. "string") to its flag."""
        if name == "none":
            raise KeyError(name)
        return cls[name.upper()]


@dataclass(eq=False)
class JsonSchema:
    """A schema node.

    Compared by identity: schema graphs can be cyclic through references.
    """

    type: JsonObjectType = JsonObjectType.NONE
    title: str | None = None
    description: str | None = None
    format: str | None = None

    # Target of a $ref (the reference node itself carries no type)
    reference: JsonSchema | None = None

    # Name of the definition this schema was declared under
    definition_name: str | None = None

    properties: dict[str, JsonProperty] = field(default_factory=dict)
    items: JsonSchema | None = None
    additional_properties_schema: JsonSchema | None = None

    one_of: list[JsonSchema] = field(default_factory=list)
    any_of: list[JsonSchema] = field(default_factory=list)
    all_of: list[JsonSchema] = field(default_factory=list)

    enumeration: list[Any] = field(default_factory=list)
    enumeration_names: list[str] = field(default_factory=list)

    # Validation constraints
    minimum: float | None = None
    maximum: float | None = None
    min_length: int | None = None
    max_length: int | None = None
    pattern: str | None = None

    # Explicit "nullable" / "x-nullable" marker, None when absent
    is_nullable_raw: bool | None = None

    default: Any = None
    has_default: bool = False

    @property
    def actual_schema(self) -> JsonSchema:
        """Follow $ref chains and single-entry reference wrappers."""
        schema = self
        seen: set[int] = set()
        while id(schema) not in seen:
            seen.add(id(schema))
            if schema.reference is not None:
                schema = schema.reference
            elif len(schema.all_of) == 1 and schema.all_of[0].reference is not None and not schema.properties:
                schema = schema.all_of[0].reference
            elif len(schema.one_of) == 1 and schema.one_of[0].reference is not None and not schema.properties:
                schema = schema.one_of[0].reference
            else:
                break
        return schema

    @property
    def is_enumeration(self) -> bool:
        return len(self.enumeration) > 0

    @property
    def is_dictionary(self) -> bool:
        """An object without properties whose values follow one schema."""
        return (
            (JsonObjectType.OBJECT in self.type or self.type == JsonObjectType.NONE)
            and not self.properties
            and self.additional_properties_schema is not None
        )

    @property
    def is_array(self) -> bool:
        return JsonObjectType.ARRAY in self.type

    @property
    def is_any_type(self) -> bool:
        """True when the schema places no constraint on the value's shape."""
        return (
            (JsonObjectType.OBJECT in self.type or self.type == JsonObjectType.NONE)
            and self.reference is None
            and not self.all_of
            and not self.any_of
            and not self.one_of
            and not self.properties
            and self.additional_properties_schema is None
            and not self.is_enumeration
        )


@dataclass(eq=False)
class JsonProperty(JsonSchema):
    """A named member of an object schema."""

    name: str = ""
    is_required: bool = False

    # The object schema declaring this property
    parent: JsonSchema | None = None

    @property
    def actual_property_schema(self) -> JsonSchema:
        return self.actual_schema
