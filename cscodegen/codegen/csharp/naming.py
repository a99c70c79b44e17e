"""
C#-specific naming utilities.

Handles C# keywords, identifier validation and camel casing of names
taken from external sources.
"""

import unicodedata

from ..core.naming import NameSanitizer


# Reserved keywords
CSHARP_RESERVED_WORDS = {
    "abstract", "as", "base", "bool", "break", "byte", "case", "catch",
    "char", "checked", "class", "const", "continue", "decimal", "default",
    "delegate", "do", "double", "else", "enum", "event", "explicit",
    "extern", "false", "finally", "fixed", "float", "for", "foreach",
    "goto", "if", "implicit", "in", "int", "interface", "internal", "is",
    "lock", "long", "namespace", "new", "null", "object", "operator",
    "out", "override", "params", "private", "protected", "public",
    "readonly", "ref", "return", "sbyte", "sealed", "short", "sizeof",
    "stackalloc", "static", "string", "struct", "switch", "this", "throw",
    "true", "try", "typeof", "uint", "ulong", "unchecked", "unsafe",
    "ushort", "using", "virtual", "void", "volatile", "while",
}

# Contextual keywords
CSHARP_CONTEXTUAL_KEYWORDS = {
    "add", "alias", "ascending", "async", "await", "descending", "dynamic",
    "from", "get", "global", "group", "into", "join", "let", "orderby",
    "partial", "remove", "select", "set", "value", "var", "where", "yield",
}

CSHARP_KEYWORDS = CSHARP_RESERVED_WORDS | CSHARP_CONTEXTUAL_KEYWORDS

_FIRST_LETTER_CATEGORIES = {"Lu", "Ll", "Lt", "Lm", "Lo"}
_OTHER_LETTER_CATEGORIES = _FIRST_LETTER_CATEGORIES | {
    "Nl", "Mn", "Nd", "Mc", "Pc", "Cf",
}


def is_identifier_first_letter(letter: str) -> bool:
    """Check whether a character can start a C# identifier."""
    return unicodedata.category(letter) in _FIRST_LETTER_CATEGORIES


def is_identifier_letter(letter: str) -> bool:
    """Check whether a character can appear after the first in a C# identifier."""
    return unicodedata.category(letter) in _OTHER_LETTER_CATEGORIES


def is_valid_identifier(name: str) -> bool:
    """
    Check whether a name is a valid C# identifier.

    Keywords (including contextual ones) are rejected.
    """
    if not name:
        return False
    if not is_identifier_first_letter(name[0]):
        return False
    if not all(is_identifier_letter(c) for c in name[1:]):
        return False
    return name not in CSHARP_KEYWORDS


def _camel_case(name: str, lower_first: bool) -> str:
    if name is None:
        raise TypeError("name must be a string, not None")
    if not name:
        raise ValueError("name is an empty string.")

    chars = []
    cap_next = False
    for letter in name:
        if not chars:
            # Skip anything that cannot start an identifier
            if is_identifier_first_letter(letter):
                chars.append(letter.lower() if lower_first else letter.upper())
        elif letter == "_" or not is_identifier_letter(letter):
            cap_next = True
        elif cap_next:
            chars.append(letter.upper())
            cap_next = False
        else:
            chars.append(letter)

    return "".join(chars)


def get_lower_camel_case(name: str, rename_keywords: bool = True) -> str:
    """
    Convert a name to lowerCamelCase.

    Invalid characters and underscores are dropped and the character after
    them capitalized. When rename_keywords is set, a result that is a C#
    keyword gets a "Value" suffix.
    """
    value = _camel_case(name, lower_first=True)
    if rename_keywords and value in CSHARP_KEYWORDS:
        value = f"{value}Value"
    return value


def get_upper_camel_case(name: str) -> str:
    """Convert a name to UpperCamelCase."""
    return _camel_case(name, lower_first=False)


def create_csharp_sanitizer() -> NameSanitizer:
    """Create a name sanitizer configured for C#."""
    return NameSanitizer(CSHARP_RESERVED_WORDS, CSHARP_CONTEXTUAL_KEYWORDS)
