"""
C# default value literals for generated properties.
"""

from __future__ import annotations

from typing import Any

from .schema import JsonObjectType, JsonProperty, JsonSchema
from .settings import CSharpGeneratorSettings
from .utils import snake_to_pascal_case

INT64_MIN_VALUE = -(2**63)
INT64_MAX_VALUE = 2**63 - 1


def format_number(value: float | int) -> str:
    """Culture-invariant number text.

    Integral values that fit in a long are written without a fraction;
    larger magnitudes use exponent notation (e.g. 1e+20).
    """
    if isinstance(value, float) and not value.is_integer():
        return repr(value)
    if INT64_MIN_VALUE <= value <= INT64_MAX_VALUE:
        return str(int(value))
    return repr(float(value))


def string_literal(value: str) -> str:
    """Quote and escape text as a regular C# string literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _base_member_name(value: Any) -> str:
    text = str(value)
    if text.startswith("-"):
        return "Minus" + snake_to_pascal_case(text[1:])
    name = snake_to_pascal_case(text)
    if not name or name[0].isdigit():
        name = "_" + name
    return name


def enum_members(schema: JsonSchema) -> list[tuple[str, Any]]:
    """(member_name, value) of each non-null enumeration value, names made unique."""
    members = []
    used: set[str] = set()
    for i, value in enumerate(schema.enumeration):
        if value is None:
            continue
        if i < len(schema.enumeration_names):
            candidate = snake_to_pascal_case(schema.enumeration_names[i]) or _base_member_name(value)
        else:
            candidate = _base_member_name(value)

        name = candidate
        counter = 2
        while name in used:
            name = f"{candidate}{counter}"
            counter += 1
        used.add(name)
        members.append((name, value))
    return members


def enum_member_name(schema: JsonSchema, value: Any) -> str:
    """C# member name of an enumeration value."""
    for name, member_value in enum_members(schema):
        if member_value == value and type(member_value) is type(value):
            return name
    return _base_member_name(value)


class CSharpDefaultValueGenerator:
    """Builds the initializer literal of a property, if any."""

    NUMBER_SUFFIXES = {"long": "L", "float": "f", "decimal": "m", "double": "D"}

    def __init__(self, settings: CSharpGeneratorSettings):
        self.settings = settings

    def get_default_value(self, schema: JsonSchema, allows_null: bool, target_type: str) -> str | None:
        """
        Get the C# initializer for a property.

        Args:
            schema: The property schema
            allows_null: Whether the property accepts null
            target_type: The resolved C# type of the property

        Returns:
            Initializer expression, or None when the property gets none
        """
        if not self.settings.generate_default_values:
            return None

        actual = schema.actual_schema
        if schema.has_default or actual.has_default:
            value = schema.default if schema.has_default else actual.default
            return self.format_default_value(value, actual, target_type)

        is_required = not isinstance(schema, JsonProperty) or schema.is_required
        if allows_null or not is_required:
            return None

        if JsonObjectType.ARRAY in actual.type:
            return f"new {self.settings.array_instance_type}<{self._type_arguments(target_type)}>()"
        if actual.is_dictionary:
            return f"new {self.settings.dictionary_instance_type}<{self._type_arguments(target_type)}>()"
        if JsonObjectType.OBJECT in actual.type and not actual.is_any_type and not actual.is_enumeration:
            return f"new {target_type}()"
        return None

    def format_default_value(self, value: Any, schema: JsonSchema, target_type: str) -> str | None:
        """Format a schema default for C#."""
        if value is None:
            return None

        base_type = target_type.rstrip("?")

        if schema.is_enumeration:
            if value not in schema.enumeration:
                return None
            return f"{base_type}.{enum_member_name(schema, value)}"

        if isinstance(value, bool):
            return "true" if value else "false"

        if isinstance(value, str):
            if base_type != "string":
                return None
            return string_literal(value)

        if isinstance(value, (int, float)):
            return format_number(value) + self.NUMBER_SUFFIXES.get(base_type, "")

        if isinstance(value, list) and JsonObjectType.ARRAY in schema.type:
            return self._format_list_default(value, schema, target_type)

        return None

    def _format_list_default(self, value: list, schema: JsonSchema, target_type: str) -> str:
        """Format a list default value for C#."""
        item_type = self._type_arguments(target_type)
        item_schema = schema.items.actual_schema if schema.items is not None else JsonSchema()
        type_name = f"{self.settings.array_instance_type}<{item_type}>"

        if len(value) == 0:
            return f"new {type_name}()"

        items = []
        for item in value:
            formatted = self.format_default_value(item, item_schema, item_type)
            if item is None:
                formatted = "null"
            elif formatted is None:
                # Untyped items
                formatted = string_literal(item) if isinstance(item, str) else str(item)
            items.append(formatted)

        return f"new {type_name} {{ {', '.join(items)} }}"

    def _type_arguments(self, target_type: str) -> str:
        """Generic arguments of a type name: ICollection<Foo> -> Foo."""
        start = target_type.find("<")
        if start == -1:
            return self.settings.any_type
        return target_type[start + 1 : target_type.rfind(">")]
