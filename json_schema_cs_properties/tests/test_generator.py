import unittest

from json_schema_cs_properties.generator import CSharpGenerator, is_generated_type
from json_schema_cs_properties.parser import SchemaParseError
from json_schema_cs_properties.schema import JsonObjectType, JsonSchema
from json_schema_cs_properties.settings import ClassStyle, CSharpGeneratorSettings

PERSON_SCHEMA = {
    "title": "Person",
    "type": "object",
    "description": "A person",
    "required": ["name", "age", "tags"],
    "properties": {
        "name": {"type": "string", "minLength": 1, "maxLength": 50},
        "age": {"type": "integer", "minimum": 0, "maximum": 150},
        "nickname": {"type": ["string", "null"]},
        "status": {"type": "string", "enum": ["active", "inactive"]},
        "tags": {"type": "array", "items": {"type": "string"}},
        "address": {"$ref": "#/definitions/address"},
        "zip": {"type": "string", "pattern": '^"[0-9]{5}"$'},
    },
    "definitions": {
        "address": {"type": "object", "properties": {"street": {"type": "string"}}},
    },
}


def generate(schema=PERSON_SCHEMA, **settings):
    settings.setdefault("add_generation_comment", False)
    return CSharpGenerator("Person", schema, CSharpGeneratorSettings(**settings)).generate()


class TestGenerate(unittest.TestCase):
    """Rendered C# for a small schema"""

    @classmethod
    def setUpClass(cls):
        cls.output = generate()

    def test_file_layout(self):
        self.assertTrue(self.output.startswith("namespace MyNamespace\n{\n"))
        self.assertTrue(self.output.endswith("}\n"))

    def test_classes(self):
        self.assertIn("public partial class Person\n", self.output)
        self.assertIn("public partial class Address\n", self.output)
        self.assertIn("/// A person", self.output)

    def test_required_integer(self):
        self.assertIn('[Newtonsoft.Json.JsonProperty("age", Required = Newtonsoft.Json.Required.Always)]', self.output)
        self.assertIn("[System.ComponentModel.DataAnnotations.Range(0, 150)]", self.output)
        self.assertIn("public int Age { get; set; }", self.output)

    def test_required_string(self):
        self.assertIn("[System.ComponentModel.DataAnnotations.Required]", self.output)
        self.assertIn("[System.ComponentModel.DataAnnotations.StringLength(50, MinimumLength = 1)]", self.output)

    def test_optional_nullable_string(self):
        expected = (
            '[Newtonsoft.Json.JsonProperty("nickname", Required = Newtonsoft.Json.Required.Default, '
            "NullValueHandling = Newtonsoft.Json.NullValueHandling.Ignore)]"
        )
        self.assertIn(expected, self.output)
        self.assertIn("public string Nickname { get; set; }", self.output)

    def test_string_enum(self):
        self.assertIn("public enum PersonStatus", self.output)
        self.assertIn('[System.Runtime.Serialization.EnumMember(Value = @"active")]', self.output)
        self.assertIn("Active = 0,", self.output)
        self.assertIn("Inactive = 1,", self.output)
        self.assertIn("[Newtonsoft.Json.JsonConverter(typeof(Newtonsoft.Json.Converters.StringEnumConverter))]", self.output)
        self.assertIn("public PersonStatus Status { get; set; }", self.output)

    def test_required_array_gets_initializer(self):
        self.assertIn(
            "public System.Collections.Generic.ICollection<string> Tags { get; set; } = "
            "new System.Collections.ObjectModel.Collection<string>();",
            self.output,
        )

    def test_pattern_is_a_verbatim_string(self):
        self.assertIn('[System.ComponentModel.DataAnnotations.RegularExpression(@"^""[0-9]{5}""$")]', self.output)

    def test_reference_property(self):
        self.assertIn("public Address Address { get; set; }", self.output)


class TestGenerateOptions(unittest.TestCase):
    def test_without_data_annotations(self):
        output = generate(generate_data_annotations=False)
        self.assertNotIn("System.ComponentModel.DataAnnotations", output)
        self.assertIn("Required = Newtonsoft.Json.Required.Always", output)

    def test_namespace(self):
        self.assertIn("namespace Acme.Models\n", generate(namespace="Acme.Models"))

    def test_inpc(self):
        output = generate(class_style=ClassStyle.INPC)
        self.assertIn("public partial class Person : System.ComponentModel.INotifyPropertyChanged", output)
        self.assertIn("private int _age;", output)
        self.assertIn("RaisePropertyChanged();", output)
        self.assertIn("public event System.ComponentModel.PropertyChangedEventHandler PropertyChanged;", output)

    def test_generation_comment(self):
        output = generate(add_generation_comment=True)
        self.assertTrue(output.startswith("// Generated by json_schema_cs_properties v0.1.0 : json_schema_cs_properties\n"))

    def test_inheritance(self):
        schema = {
            "allOf": [
                {"$ref": "#/definitions/entity"},
                {"properties": {"extra": {"type": "boolean"}}},
            ],
            "definitions": {"entity": {"type": "object", "properties": {"id": {"type": "integer"}}}},
        }
        output = generate(schema)
        self.assertIn("public partial class Person : Entity", output)
        self.assertIn("public partial class Entity\n", output)
        self.assertIn("public bool Extra { get; set; }", output)
        self.assertIn("public int Id { get; set; }", output)

    def test_integer_enum(self):
        schema = {"properties": {"level": {"type": "integer", "enum": [1, 5]}}}
        output = generate(schema)
        self.assertIn("public enum PersonLevel", output)
        self.assertIn("_1 = 1,", output)
        self.assertIn("_5 = 5,", output)

    def test_signed_enum_members_are_distinct(self):
        schema = {"properties": {"offset": {"type": "integer", "enum": [-1, 1]}}}
        output = generate(schema)
        self.assertIn("Minus1 = -1,", output)
        self.assertIn("_1 = 1,", output)
        self.assertEqual(output.count("_1 = "), 1)

    def test_multiline_descriptions(self):
        schema = {
            "description": "First line\nsecond line",
            "properties": {"a": {"type": "string", "description": "line one\r\nline two"}},
        }
        output = generate(schema)
        self.assertIn("    /// First line\n    /// second line\n", output)
        self.assertIn("        /// line one\n        /// line two\n", output)

    def test_descriptions_are_xml_escaped(self):
        schema = {"properties": {"a": {"type": "integer", "description": "a < b & c > d"}}}
        self.assertIn("/// a &lt; b &amp; c &gt; d\n", generate(schema))

    def test_invalid_schema(self):
        with self.assertRaises(SchemaParseError):
            generate({"properties": {"a": {"type": "decimal"}}})


class TestPropertyFacts(unittest.TestCase):
    def test_facts_per_class(self):
        facts = CSharpGenerator("Person", PERSON_SCHEMA, CSharpGeneratorSettings()).generate_property_facts()

        self.assertEqual(list(facts), ["Person", "Address"])
        age = next(f for f in facts["Person"] if f["name"] == "age")
        self.assertEqual(age["type"], "int")
        self.assertEqual(age["required"], "Always")
        self.assertTrue(age["render_range_attribute"])
        self.assertEqual(age["range_maximum_value"], "150")

        status = next(f for f in facts["Person"] if f["name"] == "status")
        self.assertTrue(status["is_string_enum"])
        self.assertEqual(status["type_name_hint"], "PersonStatus")


class TestIsGeneratedType(unittest.TestCase):
    def test_kinds(self):
        self.assertTrue(is_generated_type(JsonSchema(type=JsonObjectType.STRING, enumeration=["a"])))
        self.assertTrue(is_generated_type(JsonSchema(type=JsonObjectType.OBJECT, properties={"a": JsonSchema()})))
        self.assertFalse(is_generated_type(JsonSchema(type=JsonObjectType.OBJECT)))
        self.assertFalse(is_generated_type(JsonSchema(type=JsonObjectType.STRING)))
