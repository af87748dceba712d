"""
C# type resolution.

Maps a schema (and its nullability) to a C# type name, generating and
remembering class and enum names for object and enumeration schemas.
"""

from __future__ import annotations

import logging

from .nullability import is_nullable
from .schema import JsonObjectType, JsonSchema
from .settings import CSharpGeneratorSettings
from .utils import snake_to_pascal_case

logger = logging.getLogger(__name__)

# C# reserved keywords that cannot be used as type names
CS_RESERVED_KEYWORDS = {
    "abstract", "as", "base", "bool", "break", "byte", "case", "catch", "char",
    "checked", "class", "const", "continue", "decimal", "default", "delegate",
    "do", "double", "else", "enum", "event", "explicit", "extern", "false",
    "finally", "fixed", "float", "for", "foreach", "goto", "if", "implicit",
    "in", "int", "interface", "internal", "is", "lock", "long", "namespace",
    "new", "null", "object", "operator", "out", "override", "params", "private",
    "protected", "public", "readonly", "ref", "return", "sbyte", "sealed",
    "short", "sizeof", "stackalloc", "static", "string", "struct", "switch",
    "this", "throw", "true", "try", "typeof", "uint", "ulong", "unchecked",
    "unsafe", "ushort", "using", "virtual", "void", "volatile", "while",
}  # fmt: skip

ANONYMOUS_TYPE_NAME = "Anonymous"


class CSharpTypeResolver:
    """Resolves schemas to C# type names."""

    STRING_FORMATS = {
        "date-time": None,  # settings.date_time_type
        "date": None,
        "uuid": "System.Guid",
        "guid": "System.Guid",
        "duration": "System.TimeSpan",
        "time-span": "System.TimeSpan",
    }

    def __init__(self, settings: CSharpGeneratorSettings):
        """
        Initialize the resolver.

        Args:
            settings: Generator settings (type mapping, null handling)
        """
        self.settings = settings
        self._type_names: dict[int, str] = {}
        self._used_names: set[str] = set()

        # Generated name -> schema, in registration order
        self.types: dict[str, JsonSchema] = {}

    def resolve(self, schema: JsonSchema, is_nullable: bool, type_name_hint: str | None) -> str:
        """
        Resolve a schema to a C# type name.

        Args:
            schema: The schema to resolve
            is_nullable: Whether null is an accepted value
            type_name_hint: Name to use when a class or enum name must be generated

        Returns:
            The C# type name
        """
        schema = schema.actual_schema
        kind = schema.type & ~JsonObjectType.NULL

        if schema.is_any_type:
            return self.settings.any_type

        if JsonObjectType.ARRAY in kind:
            return self._resolve_array(schema, type_name_hint)

        if schema.is_dictionary:
            value_type = self._resolve_item(schema.additional_properties_schema, type_name_hint)
            return f"{self.settings.dictionary_type}<string, {value_type}>"

        if schema.is_enumeration:
            return self._nullable(self.get_or_generate_type_name(schema, type_name_hint), is_nullable)

        if JsonObjectType.NUMBER in kind:
            number_type = {"float": "float", "decimal": "decimal", "double": "double"}.get(schema.format or "", self.settings.number_type)
            return self._nullable(number_type, is_nullable)

        if JsonObjectType.INTEGER in kind:
            integer_type = "long" if schema.format in ("int64", "long") else self.settings.integer_type
            return self._nullable(integer_type, is_nullable)

        if JsonObjectType.BOOLEAN in kind:
            return self._nullable("bool", is_nullable)

        if JsonObjectType.STRING in kind:
            return self._resolve_string(schema, is_nullable)

        if JsonObjectType.FILE in kind:
            return "byte[]"

        if JsonObjectType.OBJECT in kind or schema.properties:
            return self.get_or_generate_type_name(schema, type_name_hint)

        return self.settings.any_type

    def _resolve_array(self, schema: JsonSchema, type_name_hint: str | None) -> str:
        if schema.items is None:
            return f"{self.settings.array_type}<{self.settings.any_type}>"
        return f"{self.settings.array_type}<{self._resolve_item(schema.items, type_name_hint)}>"

    def _resolve_item(self, schema: JsonSchema, type_name_hint: str | None) -> str:
        return self.resolve(schema, is_nullable(schema, self.settings.null_handling), type_name_hint)

    def _resolve_string(self, schema: JsonSchema, is_nullable: bool) -> str:
        if schema.format in ("byte", "binary"):
            return "byte[]"
        if schema.format in self.STRING_FORMATS:
            return self._nullable(self.STRING_FORMATS[schema.format] or self.settings.date_time_type, is_nullable)
        return "string"

    def _nullable(self, type_name: str, is_nullable: bool) -> str:
        """Append "?" to value types accepting null."""
        return f"{type_name}?" if is_nullable else type_name

    def register_type_name(self, schema: JsonSchema, name: str) -> str:
        """Name a schema explicitly (e.g. the root class); returns the name used."""
        if id(schema) in self._type_names:
            return self._type_names[id(schema)]
        return self._register(schema, snake_to_pascal_case(name) or ANONYMOUS_TYPE_NAME)

    def get_or_generate_type_name(self, schema: JsonSchema, type_name_hint: str | None) -> str:
        """
        Get the generated name of a class or enum schema.

        Names come from the definition key, then the title, then the hint.
        The same schema object always gets the same name.
        """
        key = id(schema)
        if key in self._type_names:
            return self._type_names[key]

        candidate = snake_to_pascal_case(schema.definition_name or schema.title or type_name_hint or "") or ANONYMOUS_TYPE_NAME
        logger.debug("Generating type name for hint %r", type_name_hint)
        return self._register(schema, candidate)

    def _register(self, schema: JsonSchema, candidate: str) -> str:
        if candidate.lower() in CS_RESERVED_KEYWORDS:
            candidate = candidate + "Type"

        name = candidate
        counter = 2
        while name in self._used_names:
            name = f"{candidate}{counter}"
            counter += 1

        logger.debug("Registered type %s", name)
        self._type_names[id(schema)] = name
        self._used_names.add(name)
        self.types[name] = schema
        return name
