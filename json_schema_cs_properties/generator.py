"""
C# file generator.

Parses the schema, names the classes and enums to emit and renders them
with jinja2 templates that read only template-model facts.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any
from xml.sax.saxutils import escape as xml_escape

import jinja2

from . import __version__
from .class_model import ClassTemplateModel, EnumTemplateModel
from .cli_utils import reconstruct_command_line
from .parser import SchemaParser
from .schema import JsonObjectType, JsonSchema
from .settings import CSharpGeneratorSettings
from .type_resolver import CSharpTypeResolver

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent.resolve() / "templates"


def is_generated_type(schema: JsonSchema) -> bool:
    """Whether a schema is emitted as its own class or enum rather than inlined."""
    if schema.is_enumeration:
        return True
    if schema.properties or schema.all_of:
        return True
    return JsonObjectType.OBJECT in schema.type and not schema.is_any_type and not schema.is_dictionary


class CSharpGenerator:
    """Generates a C# file from a JSON Schema."""

    def __init__(
        self,
        name: str,
        schema: dict[str, Any],
        settings: CSharpGeneratorSettings | None = None,
    ):
        """
        Initialize the generator.

        Args:
            name: Name of the root class
            schema: The JSON Schema dictionary
            settings: Generation settings
        """
        self.name = name
        self.schema = schema
        self.settings = settings or CSharpGeneratorSettings()
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
            lstrip_blocks=True,
            trim_blocks=True,
            keep_trailing_newline=True,
        )
        self.jinja_env.filters["verbatim_string"] = self._verbatim_string
        self.jinja_env.filters["csharp_docs"] = self._csharp_docs

        self.prefix_template = self.jinja_env.get_template("prefix.cs.jinja2")
        self.class_template = self.jinja_env.get_template("class.cs.jinja2")
        self.enum_template = self.jinja_env.get_template("enum.cs.jinja2")
        self.suffix_template = self.jinja_env.get_template("suffix.cs.jinja2")

    @staticmethod
    def _verbatim_string(text: Any) -> str:
        """Escape text for a C# verbatim string (@"...")."""
        return str(text).replace('"', '""')

    @staticmethod
    def _csharp_docs(text: Any, indent: int = 8) -> str:
        """Escape text for an XML doc comment; continuation lines get their own "///"."""
        lines = xml_escape(str(text)).replace("\r\n", "\n").split("\n")
        return ("\n" + " " * indent + "/// ").join(lines)

    def _prepare(self) -> CSharpTypeResolver:
        """Parse the schema and register the root and definition types."""
        parser = SchemaParser()
        root = parser.parse(self.schema)
        resolver = CSharpTypeResolver(self.settings)

        if root.properties or root.all_of:
            resolver.register_type_name(root, self.name)
        for definition in parser.definitions.values():
            if is_generated_type(definition):
                resolver.get_or_generate_type_name(definition, None)

        return resolver

    def _iter_models(self, resolver: CSharpTypeResolver):
        """Yield a template model for each registered type.

        Resolving property types registers nested types, so the loop runs
        until no new type shows up.
        """
        done: set[str] = set()
        while True:
            pending = [name for name in resolver.types if name not in done]
            if not pending:
                return
            for name in pending:
                done.add(name)
                schema = resolver.types[name]
                if schema.is_enumeration:
                    yield EnumTemplateModel.build(name, schema)
                else:
                    yield ClassTemplateModel.build(name, schema, resolver, self.settings)

    def generate(self) -> str:
        """Generate the C# source."""
        resolver = self._prepare()

        content = ""
        for model in self._iter_models(resolver):
            if isinstance(model, EnumTemplateModel):
                content += self.enum_template.render(model=model)
            else:
                content += self.class_template.render(model=model)
                logger.debug("Rendered class %s with %d properties", model.class_name, len(model.properties))

        prefix = self.prefix_template.render(
            generation_comment=self._generate_command_comment(),
            namespace=self.settings.namespace,
        )
        return prefix + content + self.suffix_template.render()

    def generate_property_facts(self) -> dict[str, list[dict[str, Any]]]:
        """Per class, the facts of each property as plain dicts."""
        resolver = self._prepare()
        facts = {}
        for model in self._iter_models(resolver):
            if isinstance(model, ClassTemplateModel):
                facts[model.class_name] = [prop.to_dict() for prop in model.properties]
        return facts

    def _generate_command_comment(self) -> str:
        """Generate a simplified command line comment for the generated file"""
        if not self.settings.add_generation_comment:
            return ""

        try:
            from .json_schema_cs_properties import json_schema_cs_properties as click_command  # noqa

            command_line = reconstruct_command_line(click_command)
        except (ImportError, AttributeError):
            command_line = "json_schema_cs_properties"

        return f"// Generated by json_schema_cs_properties v{__version__} : {command_line}"
