"""
JSON Schema parser.

Builds the in-memory schema graph from a JSON Schema dictionary and
links local $ref targets. Malformed input is rejected here so that the
property model can assume a consistent schema.
"""

from __future__ import annotations

import logging
from typing import Any

from .schema import JsonObjectType, JsonProperty, JsonSchema

logger = logging.getLogger(__name__)


class SchemaParseError(ValueError):
    """Raised when a schema cannot be turned into a consistent model.

    This can happen when:
    - A "type" names an unknown JSON value kind
    - An "enum" lists no values
    - A $ref points outside the document or to a missing definition
    """

    pass


class SchemaParser:
    """Parses a JSON Schema dictionary into a JsonSchema graph."""

    DEFINITION_KEYS = ("definitions", "$defs")

    def __init__(self):
        self._root: JsonSchema | None = None
        self._definitions: dict[str, JsonSchema] = {}
        self._pending_refs: list[tuple[JsonSchema, str, str]] = []

    def parse(self, schema: dict[str, Any]) -> JsonSchema:
        """
        Parse a JSON Schema.

        Args:
            schema: The JSON Schema dictionary

        Returns:
            The root JsonSchema; definitions are reachable via $ref links
            and `definitions`.
        """
        self._root = JsonSchema()
        self._definitions = {}
        self._pending_refs = []

        # Create every definition up front so references can target them
        # regardless of declaration order
        raw_definitions: dict[str, dict[str, Any]] = {}
        for key in self.DEFINITION_KEYS:
            for name, def_schema in (schema.get(key) or {}).items():
                # Skip comment fields (strings) and _comment prefixed keys
                if not isinstance(def_schema, dict) or name.startswith("_comment"):
                    continue
                raw_definitions[name] = def_schema
                self._definitions[name] = JsonSchema(definition_name=name)

        for name, def_schema in raw_definitions.items():
            self._fill(self._definitions[name], def_schema, f"#/definitions/{name}")

        self._fill(self._root, schema, "#")
        self._link_references()

        logger.debug("Parsed schema with %d definitions", len(self._definitions))
        return self._root

    @property
    def definitions(self) -> dict[str, JsonSchema]:
        """Definitions of the last parsed schema, by original key."""
        return dict(self._definitions)

    def _parse_node(self, schema: Any, path: str) -> JsonSchema:
        node = JsonSchema()
        if isinstance(schema, dict):
            self._fill(node, schema, path)
        return node

    def _fill(self, node: JsonSchema, schema: dict[str, Any], path: str) -> None:
        """Populate `node` in place from a schema dictionary."""
        if "$ref" in schema:
            self._pending_refs.append((node, schema["$ref"], path))

        node.type = self._parse_type(schema.get("type"), path)
        node.title = schema.get("title")
        node.description = schema.get("description")
        node.format = schema.get("format")

        if "enum" in schema:
            values = schema["enum"]
            if not isinstance(values, list) or not values:
                raise SchemaParseError(f"Empty enumeration at {path}")
            node.enumeration = list(values)
            node.enumeration_names = self._parse_enum_names(schema, values)

        node.minimum = schema.get("minimum")
        node.maximum = schema.get("maximum")
        node.min_length = schema.get("minLength")
        node.max_length = schema.get("maxLength")
        node.pattern = schema.get("pattern")

        if "x-nullable" in schema:
            node.is_nullable_raw = bool(schema["x-nullable"])
        elif "nullable" in schema:
            node.is_nullable_raw = bool(schema["nullable"])

        if "default" in schema:
            node.default = schema["default"]
            node.has_default = True

        items = schema.get("items")
        if isinstance(items, dict):
            node.items = self._parse_node(items, f"{path}/items")
        elif isinstance(items, list) and len(items) == 1:
            node.items = self._parse_node(items[0], f"{path}/items/0")

        additional = schema.get("additionalProperties")
        if isinstance(additional, dict):
            node.additional_properties_schema = self._parse_node(additional, f"{path}/additionalProperties")

        for key in ("oneOf", "anyOf", "allOf"):
            variants = [self._parse_node(v, f"{path}/{key}/{i}") for i, v in enumerate(schema.get(key, []))]
            setattr(node, {"oneOf": "one_of", "anyOf": "any_of", "allOf": "all_of"}[key], variants)

        required = schema.get("required", [])
        for prop_name, prop_schema in (schema.get("properties") or {}).items():
            prop = JsonProperty(name=prop_name, is_required=prop_name in required, parent=node)
            if isinstance(prop_schema, dict):
                self._fill(prop, prop_schema, f"{path}/properties/{prop_name}")
            node.properties[prop_name] = prop

        # Object with properties but no type
        if node.properties and node.type == JsonObjectType.NONE:
            node.type = JsonObjectType.OBJECT

    def _parse_type(self, type_value: Any, path: str) -> JsonObjectType:
        if type_value is None:
            return JsonObjectType.NONE
        names = type_value if isinstance(type_value, list) else [type_value]
        result = JsonObjectType.NONE
        for name in names:
            try:
                result |= JsonObjectType.from_name(name)
            except (KeyError, AttributeError):
                raise SchemaParseError(f"Unknown type {name!r} at {path}") from None
        return result

    def _parse_enum_names(self, schema: dict[str, Any], values: list[Any]) -> list[str]:
        """Custom member names from x-enumNames (list) or x-enum-members (value -> name)."""
        names = schema.get("x-enumNames")
        if isinstance(names, list) and len(names) == len(values):
            return [str(n) for n in names]
        members = schema.get("x-enum-members")
        if isinstance(members, dict):
            return [str(members.get(str(v), v)) for v in values]
        return []

    def _link_references(self) -> None:
        for node, ref_path, path in self._pending_refs:
            node.reference = self._resolve_ref(ref_path, path)

    def _resolve_ref(self, ref_path: str, path: str) -> JsonSchema:
        if not ref_path.startswith("#"):
            raise SchemaParseError(f"External reference {ref_path!r} at {path} is not supported")
        if ref_path == "#":
            return self._root

        # e.g., "#/definitions/MyClass" or "#/$defs/MyClass"
        parts = ref_path.split("/")
        if len(parts) == 3 and parts[1] in self.DEFINITION_KEYS and parts[2] in self._definitions:
            return self._definitions[parts[2]]
        raise SchemaParseError(f"Unresolvable reference {ref_path!r} at {path}")
