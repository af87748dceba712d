"""
Naming utilities for C# identifiers.
"""

import re

# Regex pattern to split text into words, handling camelCase boundaries
_WORD_PATTERN = re.compile(r"[a-z]+|[A-Z][a-z]*|[0-9]+")


def _normalize_separators(text: str) -> str:
    """Normalize separators (underscores, hyphens) to spaces."""
    return text.replace("_", " ").replace("-", " ")


def _split_into_words(text: str) -> list[str]:
    """Split text into words, handling camelCase boundaries."""
    return _WORD_PATTERN.findall(text)


def _capitalize_and_join(words: list[str]) -> str:
    """Capitalize each word and join them together."""
    return "".join(word.capitalize() for word in words if word)


def snake_to_pascal_case(text: str) -> str:
    """Convert snake_case, camelCase, or space-separated text to PascalCase.

    Examples:
        "first_name" -> "FirstName"
        "in-progress" -> "InProgress"
        "first 3 rows" -> "First3Rows"

    Args:
        text: The text to convert

    Returns:
        PascalCase string
    """
    if not text:
        return ""
    normalized = _normalize_separators(str(text))
    words = _split_into_words(normalized)
    return _capitalize_and_join(words)


def _convert_dashes_to_camel_case(text: str) -> str:
    """Drop dashes and upper-case the character following each one."""
    result = []
    upper_next = False
    for c in text:
        if c == "-":
            upper_next = True
        elif upper_next:
            result.append(c.upper())
            upper_next = False
        else:
            result.append(c)
    return "".join(result)


def _convert_case(text: str, first: str, first_character_must_be_alpha: bool) -> str:
    if not text:
        return ""
    text = _convert_dashes_to_camel_case((first + text[1:]).replace(" ", "_").replace("/", "_"))
    if first_character_must_be_alpha and text and text[0].isdigit():
        return "_" + text
    return text


def convert_to_lower_camel_case(text: str, first_character_must_be_alpha: bool) -> str:
    """Lower the first character, keep the rest as is.

    Examples:
        "FirstName" -> "firstName"
        "URLValue" -> "uRLValue"
        "my-value" -> "myValue"
    """
    if not text:
        return ""
    return _convert_case(text, text[0].lower(), first_character_must_be_alpha)


def convert_to_upper_camel_case(text: str, first_character_must_be_alpha: bool) -> str:
    """Upper the first character, keep the rest as is.

    Examples:
        "firstName" -> "FirstName"
        "content-type" -> "ContentType"
        "3d" -> "_3d" (when first_character_must_be_alpha)
    """
    if not text:
        return ""
    return _convert_case(text, text[0].upper(), first_character_must_be_alpha)


def generate_property_name(name: str) -> str:
    """Build the C# property identifier for a JSON property name."""
    cleaned = name.replace('"', "").replace("@", "").replace(".", "-").replace("=", "-").replace("+", "plus")
    return convert_to_upper_camel_case(cleaned, True).replace("*", "Star").replace(":", "_").replace("-", "_").replace("#", "_")
