"""
cscodegen - documented C# source generation.

Wraps documentation text to a column budget and writes classes and
enumerations as commented, region-organized C# files.
"""

__version__ = "0.1.0"

from .codegen import (
    CSharpGenerator,
    CSharpFile,
    CodeGenSettings,
    DocFormatter,
    build_file_model,
    generate_file,
    load_settings,
    wrap_text,
    write_files,
)

__all__ = [
    "__version__",
    "CSharpGenerator",
    "CSharpFile",
    "CodeGenSettings",
    "DocFormatter",
    "build_file_model",
    "generate_file",
    "load_settings",
    "wrap_text",
    "write_files",
]
