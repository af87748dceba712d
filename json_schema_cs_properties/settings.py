"""
Configuration for C# property generation.

One settings snapshot is created per generation run and shared
read-only by every property model in that run.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum


class NullHandling(str, Enum):
    """How the nullability of a property is derived."""

    JSON_SCHEMA = "JsonSchema"  # From the null type flag / oneOf members
    SWAGGER = "Swagger"  # From the explicit nullable marker


class ClassStyle(str, Enum):
    """Shape of the generated classes."""

    POCO = "Poco"  # Auto-properties
    INPC = "Inpc"  # Backing fields with INotifyPropertyChanged


@dataclass(frozen=True)
class CSharpGeneratorSettings:
    """Configuration options for C# generation."""

    # How nullability is inferred from the schema
    null_handling: NullHandling = NullHandling.JSON_SCHEMA

    # Whether required properties must be present in the JSON
    required_properties_must_be_defined: bool = True

    # Whether to render System.ComponentModel.DataAnnotations attributes
    generate_data_annotations: bool = True

    # Namespace wrapping all generated types
    namespace: str = "MyNamespace"

    class_style: ClassStyle = ClassStyle.POCO

    # Generic types used for arrays and dictionaries
    array_type: str = "System.Collections.Generic.ICollection"
    array_instance_type: str = "System.Collections.ObjectModel.Collection"
    dictionary_type: str = "System.Collections.Generic.IDictionary"
    dictionary_instance_type: str = "System.Collections.Generic.Dictionary"

    # Primitive type mapping
    number_type: str = "double"
    integer_type: str = "int"
    date_time_type: str = "System.DateTimeOffset"
    any_type: str = "object"

    # Whether to initialize properties with their schema default
    generate_default_values: bool = True

    # Add generation comment at top of file
    add_generation_comment: bool = True

    @staticmethod
    def from_dict(d: dict) -> CSharpGeneratorSettings:
        """Create settings from a dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(CSharpGeneratorSettings)}
        values = {k: v for k, v in d.items() if k in known}
        if isinstance(values.get("null_handling"), str):
            values["null_handling"] = NullHandling(values["null_handling"])
        if isinstance(values.get("class_style"), str):
            values["class_style"] = ClassStyle(values["class_style"])
        return CSharpGeneratorSettings(**values)

    def to_dict(self) -> dict:
        """Convert settings to a dictionary."""
        return {
            "null_handling": self.null_handling.value,
            "required_properties_must_be_defined": self.required_properties_must_be_defined,
            "generate_data_annotations": self.generate_data_annotations,
            "namespace": self.namespace,
            "class_style": self.class_style.value,
            "array_type": self.array_type,
            "array_instance_type": self.array_instance_type,
            "dictionary_type": self.dictionary_type,
            "dictionary_instance_type": self.dictionary_instance_type,
            "number_type": self.number_type,
            "integer_type": self.integer_type,
            "date_time_type": self.date_time_type,
            "any_type": self.any_type,
            "generate_default_values": self.generate_default_values,
            "add_generation_comment": self.add_generation_comment,
        }
