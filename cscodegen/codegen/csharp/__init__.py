"""
C# code generator module.

Generates documented C# classes and enumerations from the object model.
"""

from .generator import CSharpGenerator
from .naming import (
    CSHARP_KEYWORDS,
    create_csharp_sanitizer,
    get_lower_camel_case,
    get_upper_camel_case,
    is_valid_identifier,
)

__all__ = [
    "CSharpGenerator",
    "CSHARP_KEYWORDS",
    "create_csharp_sanitizer",
    "get_lower_camel_case",
    "get_upper_camel_case",
    "is_valid_identifier",
]
