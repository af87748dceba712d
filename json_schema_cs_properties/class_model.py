"""
Class and enum template models.

Collect the property models of an object schema (or the members of an
enumeration) in the shape the jinja2 templates read.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .default_values import enum_members
from .property_model import PropertyModel
from .schema import JsonObjectType, JsonProperty, JsonSchema
from .settings import ClassStyle, CSharpGeneratorSettings
from .type_resolver import CSharpTypeResolver


@dataclass
class ClassTemplateModel:
    """A C# class to render."""

    class_name: str = ""
    description: str | None = None
    base_class: str | None = None
    properties: list[PropertyModel] = field(default_factory=list)
    inpc: bool = False

    @property
    def has_description(self) -> bool:
        return bool(self.description)

    @staticmethod
    def build(
        class_name: str,
        schema: JsonSchema,
        resolver: CSharpTypeResolver,
        settings: CSharpGeneratorSettings,
    ) -> ClassTemplateModel:
        """
        Build the model of an object schema.

        allOf members that are references become the base class; the
        properties of the other members are merged into this class.
        """
        base_class = None
        declared: dict[str, JsonProperty] = dict(schema.properties)

        for member in schema.all_of:
            if member.reference is not None and base_class is None:
                base_class = resolver.get_or_generate_type_name(member.actual_schema, None)
            else:
                declared.update(member.actual_schema.properties)

        properties = [PropertyModel(prop, resolver, settings, class_name=class_name) for prop in declared.values()]

        return ClassTemplateModel(
            class_name=class_name,
            description=schema.description,
            base_class=base_class,
            properties=properties,
            inpc=settings.class_style == ClassStyle.INPC,
        )


@dataclass
class EnumTemplateModel:
    """A C# enum to render."""

    name: str = ""
    description: str | None = None
    is_string_enum: bool = True

    # (member_name, json_value)
    members: list[tuple[str, Any]] = field(default_factory=list)

    @property
    def has_description(self) -> bool:
        return bool(self.description)

    @staticmethod
    def build(name: str, schema: JsonSchema) -> EnumTemplateModel:
        values = [v for v in schema.enumeration if v is not None]
        is_integer = JsonObjectType.INTEGER in schema.type or all(isinstance(v, int) and not isinstance(v, bool) for v in values)
        return EnumTemplateModel(
            name=name,
            description=schema.description,
            is_string_enum=not is_integer,
            members=enum_members(schema),
        )
