"""
Property template model.

Decides, for one schema property, everything the C# class template needs
to declare it: type, required/null handling and which data annotations
(Required, Range, StringLength, RegularExpression) to render.

Every decision is a pure function of the property facts, the nullability
of the property and the settings, so each branch can be checked on its
own. PropertyModel binds those inputs together and exposes the results.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Any

from .default_values import CSharpDefaultValueGenerator, format_number
from .nullability import NullabilityResolver, get_nullability_resolver
from .schema import JsonObjectType, JsonProperty
from .settings import CSharpGeneratorSettings
from .type_resolver import ANONYMOUS_TYPE_NAME, CSharpTypeResolver
from .utils import convert_to_lower_camel_case, convert_to_upper_camel_case, generate_property_name

INT_MAX_VALUE = 2147483647
DOUBLE_MAX_VALUE = sys.float_info.max

# Types that need an explicit [Required] when non-nullable
REQUIRED_ATTRIBUTE_TYPES = JsonObjectType.OBJECT | JsonObjectType.STRING | JsonObjectType.ARRAY
RANGE_TYPES = JsonObjectType.NUMBER | JsonObjectType.INTEGER


@dataclass(frozen=True)
class PropertyFacts:
    """Normalized view of the raw constraints of a property.

    Type flags come from the resolved (actual) schema, constraints from the
    property declaration itself.
    """

    name: str
    description: str | None
    type: JsonObjectType
    is_any_type: bool
    is_required: bool
    is_enumeration: bool
    minimum: float | None = None
    maximum: float | None = None
    min_length: int | None = None
    max_length: int | None = None
    pattern: str | None = None

    @staticmethod
    def from_property(prop: JsonProperty) -> PropertyFacts:
        actual = prop.actual_property_schema
        return PropertyFacts(
            name=prop.name,
            description=prop.description,
            type=actual.type,
            is_any_type=actual.is_any_type,
            is_required=prop.is_required,
            is_enumeration=actual.is_enumeration,
            minimum=prop.minimum,
            maximum=prop.maximum,
            min_length=prop.min_length,
            max_length=prop.max_length,
            pattern=prop.pattern,
        )


@dataclass(frozen=True)
class RequiredSelection:
    """Newtonsoft.Json Required / NullValueHandling pair."""

    required: str
    null_value_handling: str | None = None

    def to_csharp(self) -> str:
        result = f"Newtonsoft.Json.Required.{self.required}"
        if self.null_value_handling:
            result += f", NullValueHandling = Newtonsoft.Json.NullValueHandling.{self.null_value_handling}"
        return result


# (required_properties_must_be_defined and is_required, is_nullable) -> selection
REQUIRED_SELECTIONS: dict[tuple[bool, bool], RequiredSelection] = {
    (True, False): RequiredSelection("Always"),
    (True, True): RequiredSelection("AllowNull"),
    (False, False): RequiredSelection("DisallowNull", "Ignore"),
    (False, True): RequiredSelection("Default", "Ignore"),
}


@dataclass(frozen=True)
class RangeAnnotation:
    """[Range(minimum, maximum)] decision; open sides use the double limits."""

    applicable: bool
    minimum: float | None = None
    maximum: float | None = None

    @property
    def minimum_literal(self) -> str:
        if self.minimum is None or self.minimum == -DOUBLE_MAX_VALUE:
            return "double.MinValue"
        return format_number(self.minimum)

    @property
    def maximum_literal(self) -> str:
        if self.maximum is None or self.maximum == DOUBLE_MAX_VALUE:
            return "double.MaxValue"
        return format_number(self.maximum)


@dataclass(frozen=True)
class StringLengthAnnotation:
    """[StringLength(maximum, MinimumLength = minimum)] decision."""

    applicable: bool
    minimum: int = 0
    maximum: int = INT_MAX_VALUE

    @property
    def maximum_literal(self) -> str:
        return "int.MaxValue" if self.maximum == INT_MAX_VALUE else str(self.maximum)


@dataclass(frozen=True)
class PatternAnnotation:
    """[RegularExpression(pattern)] decision."""

    applicable: bool
    pattern: str | None = None


def select_required(facts: PropertyFacts, nullable: bool, settings: CSharpGeneratorSettings) -> RequiredSelection:
    must_be_defined = settings.required_properties_must_be_defined and facts.is_required
    return REQUIRED_SELECTIONS[(must_be_defined, nullable)]


def required_attribute_applies(facts: PropertyFacts, nullable: bool, settings: CSharpGeneratorSettings) -> bool:
    """Only non-nullable required objects, strings, arrays and "any" get [Required]."""
    if not settings.generate_data_annotations or not facts.is_required or nullable:
        return False
    return facts.is_any_type or bool(facts.type & REQUIRED_ATTRIBUTE_TYPES)


def select_range(facts: PropertyFacts, settings: CSharpGeneratorSettings) -> RangeAnnotation:
    if not settings.generate_data_annotations or not facts.type & RANGE_TYPES:
        return RangeAnnotation(applicable=False)
    if facts.minimum is None and facts.maximum is None:
        return RangeAnnotation(applicable=False)
    return RangeAnnotation(
        applicable=True,
        minimum=facts.minimum if facts.minimum is not None else -DOUBLE_MAX_VALUE,
        maximum=facts.maximum if facts.maximum is not None else DOUBLE_MAX_VALUE,
    )


def select_string_length(facts: PropertyFacts, settings: CSharpGeneratorSettings) -> StringLengthAnnotation:
    if not settings.generate_data_annotations or JsonObjectType.STRING not in facts.type:
        return StringLengthAnnotation(applicable=False)
    if facts.min_length is None and facts.max_length is None:
        return StringLengthAnnotation(applicable=False)
    return StringLengthAnnotation(
        applicable=True,
        minimum=facts.min_length if facts.min_length is not None else 0,
        maximum=facts.max_length if facts.max_length is not None else INT_MAX_VALUE,
    )


def select_pattern(facts: PropertyFacts, settings: CSharpGeneratorSettings) -> PatternAnnotation:
    if not settings.generate_data_annotations or JsonObjectType.STRING not in facts.type or not facts.pattern:
        return PatternAnnotation(applicable=False)
    return PatternAnnotation(applicable=True, pattern=facts.pattern)


def is_string_enum(facts: PropertyFacts) -> bool:
    return facts.is_enumeration and facts.type == JsonObjectType.STRING


def type_name_hint(property_name: str, is_enumeration: bool, class_name: str | None = None) -> str:
    """Name offered to the resolver when it must name an inline type.

    Enumerations are prefixed with the owning class name so that two classes
    can each declare e.g. a "Status" enum.
    """
    if not is_enumeration or not class_name or ANONYMOUS_TYPE_NAME in class_name:
        return property_name
    if property_name.lower().startswith(class_name.lower()):
        return property_name
    return class_name + convert_to_upper_camel_case(property_name, False)


class PropertyModel:
    """The C# property template model."""

    def __init__(
        self,
        prop: JsonProperty,
        resolver: CSharpTypeResolver,
        settings: CSharpGeneratorSettings,
        class_name: str | None = None,
        nullability: NullabilityResolver | None = None,
    ):
        """
        Initialize the model.

        Args:
            prop: The schema property
            resolver: Type resolver shared by the generation run
            settings: Settings snapshot of the generation run
            class_name: Name of the class declaring the property, if known
            nullability: Nullability policy, defaults to the one selected by settings
        """
        self._property = prop
        self._resolver = resolver
        self._settings = settings
        self._class_name = class_name
        self._nullability = nullability or get_nullability_resolver(settings.null_handling)
        self._default_value_generator = CSharpDefaultValueGenerator(settings)
        self.facts = PropertyFacts.from_property(prop)

    @property
    def name(self) -> str:
        """The JSON property name."""
        return self._property.name

    @property
    def property_name(self) -> str:
        """The C# property identifier."""
        return generate_property_name(self._property.name)

    @property
    def field_name(self) -> str:
        """The backing field identifier."""
        return "_" + convert_to_lower_camel_case(self.property_name, True)

    @property
    def is_nullable(self) -> bool:
        return self._nullability.is_nullable(self._property)

    @property
    def type_name_hint(self) -> str:
        return type_name_hint(self.property_name, self.facts.is_enumeration, self._class_name)

    @property
    def type(self) -> str:
        return self._resolver.resolve(self._property.actual_property_schema, self.is_nullable, self.type_name_hint)

    @property
    def has_description(self) -> bool:
        return bool(self.facts.description)

    @property
    def description(self) -> str | None:
        return self.facts.description

    @property
    def default_value(self) -> str | None:
        return self._default_value_generator.get_default_value(self._property, self.is_nullable, self.type)

    @property
    def has_default_value(self) -> bool:
        return bool(self.default_value)

    @property
    def required_selection(self) -> RequiredSelection:
        return select_required(self.facts, self.is_nullable, self._settings)

    @property
    def json_property_required(self) -> str:
        return self.required_selection.to_csharp()

    @property
    def render_required_attribute(self) -> bool:
        return required_attribute_applies(self.facts, self.is_nullable, self._settings)

    @property
    def allow_empty_strings(self) -> bool:
        """Whether a rendered [Required] must still accept ""."""
        return JsonObjectType.STRING in self.facts.type and not self.facts.min_length

    @property
    def range_annotation(self) -> RangeAnnotation:
        return select_range(self.facts, self._settings)

    @property
    def render_range_attribute(self) -> bool:
        return self.range_annotation.applicable

    @property
    def range_minimum_value(self) -> str:
        return self.range_annotation.minimum_literal

    @property
    def range_maximum_value(self) -> str:
        return self.range_annotation.maximum_literal

    @property
    def string_length_annotation(self) -> StringLengthAnnotation:
        return select_string_length(self.facts, self._settings)

    @property
    def render_string_length_attribute(self) -> bool:
        return self.string_length_annotation.applicable

    @property
    def string_length_minimum_value(self) -> int:
        return self.string_length_annotation.minimum

    @property
    def string_length_maximum_value(self) -> str:
        return self.string_length_annotation.maximum_literal

    @property
    def pattern_annotation(self) -> PatternAnnotation:
        return select_pattern(self.facts, self._settings)

    @property
    def render_regular_expression_attribute(self) -> bool:
        return self.pattern_annotation.applicable

    @property
    def regular_expression_value(self) -> str | None:
        return self.facts.pattern

    @property
    def is_string_enum(self) -> bool:
        return is_string_enum(self.facts)

    def to_dict(self) -> dict[str, Any]:
        """All facts as plain key/value pairs."""
        selection = self.required_selection
        return {
            "name": self.name,
            "property_name": self.property_name,
            "field_name": self.field_name,
            "type": self.type,
            "type_name_hint": self.type_name_hint,
            "is_nullable": self.is_nullable,
            "has_description": self.has_description,
            "description": self.description,
            "has_default_value": self.has_default_value,
            "default_value": self.default_value,
            "json_property_required": self.json_property_required,
            "required": selection.required,
            "null_value_handling": selection.null_value_handling,
            "render_required_attribute": self.render_required_attribute,
            "allow_empty_strings": self.allow_empty_strings,
            "render_range_attribute": self.render_range_attribute,
            "range_minimum_value": self.range_minimum_value,
            "range_maximum_value": self.range_maximum_value,
            "render_string_length_attribute": self.render_string_length_attribute,
            "string_length_minimum_value": self.string_length_minimum_value,
            "string_length_maximum_value": self.string_length_maximum_value,
            "render_regular_expression_attribute": self.render_regular_expression_attribute,
            "regular_expression_value": self.regular_expression_value,
            "is_string_enum": self.is_string_enum,
        }
