"""
Naming utilities for safe code generation.

Handles name sanitization, case conversions and keyword conflicts for
names taken from external sources.
"""

import re
from typing import Set, Dict
from enum import Enum


class NamingCase(Enum):
    """Naming case styles used in generated code."""
    CAMEL_CASE = "camel"      # userName
    PASCAL_CASE = "pascal"    # UserName


class NameSanitizer:
    """Turns arbitrary text into unique identifiers."""

    def __init__(self, reserved_words: Set[str] = None, contextual_words: Set[str] = None):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Words that can never be used as identifiers
            contextual_words: Words that are keywords only in some contexts
        """
        self.reserved_words = reserved_words or set()
        self.contextual_words = contextual_words or set()
        self._name_cache: Dict[str, str] = {}
        self._used_names: Set[str] = set()

    def sanitize_name(self, name: str, target_case: NamingCase = NamingCase.PASCAL_CASE,
                      suffix_on_conflict: str = "Value") -> str:
        """
        Sanitize a name for use as an identifier.

        Args:
            name: Original name to sanitize
            target_case: Desired case style
            suffix_on_conflict: Suffix added to keywords

        Returns:
            Sanitized name, unique among the names this sanitizer produced
        """
        cache_key = f"{name}_{target_case.value}_{suffix_on_conflict}"
        if cache_key in self._name_cache:
            return self._name_cache[cache_key]

        cleaned = self._clean_basic(name)
        converted = self._convert_case(cleaned, target_case)
        final_name = self._resolve_conflicts(converted, suffix_on_conflict)

        self._name_cache[cache_key] = final_name
        self._used_names.add(final_name)

        return final_name

    def _clean_basic(self, name: str) -> str:
        """Basic name cleanup - replace characters that are not word characters."""
        cleaned = re.sub(r'\W', '_', name)
        cleaned = cleaned.strip('_')

        # Identifiers cannot start with a digit
        if cleaned and cleaned[0].isdigit():
            cleaned = f"N{cleaned}"

        if not cleaned:
            cleaned = "item"

        return cleaned

    def _convert_case(self, name: str, target_case: NamingCase) -> str:
        """Convert name to target case style."""
        # Keep existing interior capitals: "userID" -> "UserID"
        parts = [part for part in name.split('_') if part]
        if not parts:
            return name

        pascal = ''.join(part[0].upper() + part[1:] for part in parts)
        if target_case == NamingCase.CAMEL_CASE:
            return pascal[0].lower() + pascal[1:]
        return pascal

    def _resolve_conflicts(self, name: str, suffix: str) -> str:
        """Resolve conflicts with keywords and previously produced names."""
        if name in self.reserved_words or name in self.contextual_words:
            name = f"{name}{suffix}"

        original_name = name
        counter = 2
        while name in self._used_names:
            name = f"{original_name}{counter}"
            counter += 1

        return name

    def reset_used_names(self):
        """Forget the names produced so far."""
        self._used_names.clear()
        self._name_cache.clear()
