"""JSON Schema to C# property models

Decides, per JSON Schema property, the C# type, required/null handling
and data annotations of the generated member, and renders C# classes
from those decisions.
"""

__version__ = "0.1.0"
__author__ = "François Lagunas"

from .generator import CSharpGenerator
from .nullability import NullabilityResolver, is_nullable
from .parser import SchemaParseError, SchemaParser
from .property_model import PropertyModel
from .schema import JsonObjectType, JsonProperty, JsonSchema
from .settings import ClassStyle, CSharpGeneratorSettings, NullHandling
from .type_resolver import CSharpTypeResolver

__all__ = [
    "CSharpGenerator",
    "CSharpGeneratorSettings",
    "CSharpTypeResolver",
    "ClassStyle",
    "JsonObjectType",
    "JsonProperty",
    "JsonSchema",
    "NullHandling",
    "NullabilityResolver",
    "PropertyModel",
    "SchemaParseError",
    "SchemaParser",
    "is_nullable",
]
