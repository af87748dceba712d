"""
Unit tests for the annotation decision functions.
"""

import sys

import pytest

from json_schema_cs_properties.property_model import (
    INT_MAX_VALUE,
    REQUIRED_SELECTIONS,
    PropertyFacts,
    RangeAnnotation,
    RequiredSelection,
    StringLengthAnnotation,
    is_string_enum,
    required_attribute_applies,
    select_pattern,
    select_range,
    select_required,
    select_string_length,
    type_name_hint,
)
from json_schema_cs_properties.schema import JsonObjectType
from json_schema_cs_properties.settings import CSharpGeneratorSettings

ENABLED = CSharpGeneratorSettings()
DISABLED = CSharpGeneratorSettings(generate_data_annotations=False)


def facts(**kwargs):
    values = {
        "name": "value",
        "description": None,
        "type": JsonObjectType.STRING,
        "is_any_type": False,
        "is_required": False,
        "is_enumeration": False,
    }
    values.update(kwargs)
    return PropertyFacts(**values)


class TestRequiredSelection:
    def test_table_is_exhaustive(self):
        assert set(REQUIRED_SELECTIONS) == {(True, True), (True, False), (False, True), (False, False)}
        assert len({s.required for s in REQUIRED_SELECTIONS.values()}) == 4

    def test_always(self):
        assert select_required(facts(is_required=True), False, ENABLED) == RequiredSelection("Always")

    def test_allow_null(self):
        assert select_required(facts(is_required=True), True, ENABLED) == RequiredSelection("AllowNull")

    def test_optional_properties_ignore_null(self):
        assert select_required(facts(), False, ENABLED) == RequiredSelection("DisallowNull", "Ignore")
        assert select_required(facts(), True, ENABLED) == RequiredSelection("Default", "Ignore")

    def test_required_not_enforced(self):
        settings = CSharpGeneratorSettings(required_properties_must_be_defined=False)
        assert select_required(facts(is_required=True), False, settings).required == "DisallowNull"

    def test_csharp_spelling(self):
        assert RequiredSelection("Always").to_csharp() == "Newtonsoft.Json.Required.Always"
        assert (
            RequiredSelection("Default", "Ignore").to_csharp()
            == "Newtonsoft.Json.Required.Default, NullValueHandling = Newtonsoft.Json.NullValueHandling.Ignore"
        )


class TestRequiredAttribute:
    def test_string(self):
        assert required_attribute_applies(facts(is_required=True), False, ENABLED)

    def test_union_with_string(self):
        flags = JsonObjectType.STRING | JsonObjectType.INTEGER
        assert required_attribute_applies(facts(type=flags, is_required=True), False, ENABLED)

    def test_any_type(self):
        assert required_attribute_applies(facts(type=JsonObjectType.NONE, is_any_type=True, is_required=True), False, ENABLED)

    def test_boolean(self):
        assert not required_attribute_applies(facts(type=JsonObjectType.BOOLEAN, is_required=True), False, ENABLED)

    def test_not_required(self):
        assert not required_attribute_applies(facts(), False, ENABLED)

    def test_nullable(self):
        assert not required_attribute_applies(facts(is_required=True), True, ENABLED)

    def test_disabled(self):
        assert not required_attribute_applies(facts(is_required=True), False, DISABLED)


class TestRange:
    def test_both_bounds(self):
        result = select_range(facts(type=JsonObjectType.INTEGER, minimum=1, maximum=5), ENABLED)
        assert result == RangeAnnotation(True, 1, 5)
        assert (result.minimum_literal, result.maximum_literal) == ("1", "5")

    def test_minimum_only(self):
        result = select_range(facts(type=JsonObjectType.NUMBER, minimum=2.5), ENABLED)
        assert result.applicable
        assert result.maximum == sys.float_info.max
        assert (result.minimum_literal, result.maximum_literal) == ("2.5", "double.MaxValue")

    def test_integral_float_drops_fraction(self):
        result = select_range(facts(type=JsonObjectType.NUMBER, minimum=0.0, maximum=150.0), ENABLED)
        assert (result.minimum_literal, result.maximum_literal) == ("0", "150")

    def test_large_bound_uses_exponent_notation(self):
        result = select_range(facts(type=JsonObjectType.NUMBER, maximum=1e20), ENABLED)
        assert (result.minimum_literal, result.maximum_literal) == ("double.MinValue", "1e+20")

    def test_large_integer_bound_uses_exponent_notation(self):
        result = select_range(facts(type=JsonObjectType.INTEGER, minimum=-(10**20)), ENABLED)
        assert result.minimum_literal == "-1e+20"

    def test_long_bound_stays_integral(self):
        result = select_range(facts(type=JsonObjectType.INTEGER, maximum=9007199254740992.0), ENABLED)
        assert result.maximum_literal == "9007199254740992"

    def test_no_bounds(self):
        assert not select_range(facts(type=JsonObjectType.NUMBER), ENABLED).applicable

    def test_string_with_bounds(self):
        assert not select_range(facts(type=JsonObjectType.STRING, minimum=1), ENABLED).applicable

    def test_disabled(self):
        assert not select_range(facts(type=JsonObjectType.INTEGER, minimum=1), DISABLED).applicable


class TestStringLength:
    def test_max_length_only(self):
        assert select_string_length(facts(max_length=10), ENABLED) == StringLengthAnnotation(True, 0, 10)

    def test_min_length_only(self):
        result = select_string_length(facts(min_length=3), ENABLED)
        assert (result.minimum, result.maximum) == (3, INT_MAX_VALUE)
        assert result.maximum_literal == "int.MaxValue"

    def test_zero_max_length_is_a_bound(self):
        assert select_string_length(facts(max_length=0), ENABLED) == StringLengthAnnotation(True, 0, 0)

    def test_no_bounds(self):
        assert not select_string_length(facts(), ENABLED).applicable

    def test_not_a_string(self):
        assert not select_string_length(facts(type=JsonObjectType.ARRAY, max_length=3), ENABLED).applicable

    def test_disabled(self):
        assert not select_string_length(facts(max_length=3), DISABLED).applicable


class TestPattern:
    def test_pattern(self):
        result = select_pattern(facts(pattern="^[A-Z]{3}$"), ENABLED)
        assert result.applicable
        assert result.pattern == "^[A-Z]{3}$"

    def test_pattern_kept_verbatim(self):
        assert select_pattern(facts(pattern='\\d+"x'), ENABLED).pattern == '\\d+"x'

    @pytest.mark.parametrize("pattern", [None, ""])
    def test_missing_pattern(self, pattern):
        assert not select_pattern(facts(pattern=pattern), ENABLED).applicable

    def test_not_a_string(self):
        assert not select_pattern(facts(type=JsonObjectType.INTEGER, pattern="^1$"), ENABLED).applicable

    def test_disabled(self):
        assert not select_pattern(facts(pattern="^a$"), DISABLED).applicable


@pytest.mark.parametrize(
    "flags,is_enumeration,expected",
    [
        (JsonObjectType.STRING, True, True),
        (JsonObjectType.STRING | JsonObjectType.NULL, True, False),
        (JsonObjectType.INTEGER, True, False),
        (JsonObjectType.STRING, False, False),
    ],
)
def test_is_string_enum(flags, is_enumeration, expected):
    assert is_string_enum(facts(type=flags, is_enumeration=is_enumeration)) is expected


@pytest.mark.parametrize(
    "property_name,is_enumeration,class_name,expected",
    [
        ("Status", True, "Person", "PersonStatus"),
        ("PersonStatus", True, "Person", "PersonStatus"),
        ("personKind", True, "Person", "personKind"),
        ("Status", False, "Person", "Status"),
        ("Status", True, "Anonymous2", "Status"),
        ("Status", True, None, "Status"),
    ],
)
def test_type_name_hint(property_name, is_enumeration, class_name, expected):
    assert type_name_hint(property_name, is_enumeration, class_name) == expected
