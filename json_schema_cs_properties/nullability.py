"""
Nullability policies.

Whether a property accepts null depends on the schema dialect: plain
JSON Schema expresses it through the "null" type, Swagger 2 through an
explicit marker. Each dialect is a separate resolver.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from .schema import JsonObjectType, JsonProperty, JsonSchema
from .settings import NullHandling


class NullabilityResolver(ABC):
    """Answers whether a schema or property accepts null."""

    @abstractmethod
    def is_nullable(self, schema: JsonSchema) -> bool:
        """
        Decide nullability.

        Args:
            schema: The property (or plain schema) to inspect

        Returns:
            True if null is an accepted value
        """


class JsonSchemaNullability(NullabilityResolver):
    """Nullability from the "null" type flag, null enum values and oneOf members."""

    def is_nullable(self, schema: JsonSchema) -> bool:
        return self._is_nullable(schema, set())

    def _is_nullable(self, schema: JsonSchema, seen: set[int]) -> bool:
        if id(schema) in seen:
            return False
        seen.add(id(schema))

        if JsonObjectType.NULL in schema.type:
            return True

        if schema.type in (JsonObjectType.NONE, JsonObjectType.NULL) and None in schema.enumeration:
            return True

        if any(self._is_nullable(s, seen) for s in schema.one_of):
            return True

        actual = schema.actual_schema
        if actual is not schema:
            return self._is_nullable(actual, seen)
        return False


class SwaggerNullability(NullabilityResolver):
    """Nullability from the explicit marker.

    Unmarked optional properties are nullable. Unmarked schemas that are
    not properties (array items, dictionary values) follow the type flags.
    """

    def is_nullable(self, schema: JsonSchema) -> bool:
        if schema.is_nullable_raw is not None:
            return schema.is_nullable_raw
        if isinstance(schema, JsonProperty):
            return not schema.is_required
        return _JSON_SCHEMA_NULLABILITY.is_nullable(schema)


_JSON_SCHEMA_NULLABILITY = JsonSchemaNullability()


_RESOLVERS: dict[NullHandling, NullabilityResolver] = {
    NullHandling.JSON_SCHEMA: _JSON_SCHEMA_NULLABILITY,
    NullHandling.SWAGGER: SwaggerNullability(),
}


def get_nullability_resolver(null_handling: NullHandling) -> NullabilityResolver:
    """Get the resolver implementing a null-handling policy."""
    return _RESOLVERS[null_handling]


def is_nullable(schema: JsonSchema, null_handling: NullHandling) -> bool:
    """Whether the schema accepts null under the given policy."""
    return get_nullability_resolver(null_handling).is_nullable(schema)
