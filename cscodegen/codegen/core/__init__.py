"""
Core code generation components.

Provides the documentation formatter, settings, model and base generator
used by the C# generator.
"""

from .generator import CodeGenerator, GeneratorError, GenerationResult, generate_code
from .model import (
    ModelError,
    ParameterInfo,
    ExceptionInfo,
    FieldInfo,
    PropertyInfo,
    MethodInfo,
    ConstructorInfo,
    EnumValueInfo,
    EnumInfo,
    ClassInfo,
    CSharpFile,
    build_file_model,
    build_type,
)
from .naming import NameSanitizer, NamingCase
from .config import (
    CodeGenSettings,
    WrapConfiguration,
    ConfigManager,
    ConfigError,
    load_settings,
)
from .docformat import DocFormatter, create_doc_formatter
from .writer import CodeWriter
from .templates import TemplateEngine, TemplateError, render_header_lines

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratorError",
    "GenerationResult",
    "generate_code",
    # Model
    "ModelError",
    "ParameterInfo",
    "ExceptionInfo",
    "FieldInfo",
    "PropertyInfo",
    "MethodInfo",
    "ConstructorInfo",
    "EnumValueInfo",
    "EnumInfo",
    "ClassInfo",
    "CSharpFile",
    "build_file_model",
    "build_type",
    # Naming utilities
    "NameSanitizer",
    "NamingCase",
    # Configuration system
    "CodeGenSettings",
    "WrapConfiguration",
    "ConfigManager",
    "ConfigError",
    "load_settings",
    # Formatting and output
    "DocFormatter",
    "create_doc_formatter",
    "CodeWriter",
    "TemplateEngine",
    "TemplateError",
    "render_header_lines",
]
