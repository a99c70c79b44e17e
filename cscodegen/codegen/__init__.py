"""
cscodegen Code Generation Module

Generates documented C# source files from an in-memory model.
"""

from pathlib import Path
from typing import Iterable, List, Optional, Union

from .core.generator import CodeGenerator, GenerationResult, generate_code
from .core.model import CSharpFile, build_file_model
from .core.config import CodeGenSettings, ConfigManager, load_settings
from .core.docformat import DocFormatter, create_doc_formatter
from .csharp.generator import CSharpGenerator


# Convenience functions
def generate_file(
    source_file: CSharpFile, settings: Optional[CodeGenSettings] = None
) -> GenerationResult:
    """
    Generate the text of one C# file.

    Args:
        source_file: File model to generate
        settings: Generation settings (defaults when None)

    Returns:
        GenerationResult with generated code
    """
    return generate_code(CSharpGenerator(settings), source_file)


def write_files(
    source_files: Iterable[CSharpFile],
    root_folder: Union[str, Path],
    settings: Optional[CodeGenSettings] = None,
) -> List[Path]:
    """
    Write C# files below a root folder.

    Returns:
        Paths of the written files
    """
    generator = CSharpGenerator(settings)
    return [generator.write_file(source_file, root_folder) for source_file in source_files]


def wrap_text(
    text: str,
    indent: int = 0,
    prefix: str = "",
    settings: Optional[CodeGenSettings] = None,
) -> List[str]:
    """
    Wrap text to the configured line width.

    Args:
        text: Text to wrap
        indent: Number of indentations before each line
        prefix: Text placed after the indentation of every line
        settings: Settings providing the width and indentation

    Returns:
        Wrapped lines
    """
    formatter = create_doc_formatter(settings)
    return formatter.emit_wrapped_block(text, indent, prefix, first_line_prefix=prefix)


# Export main interfaces
__all__ = [
    "CodeGenerator",
    "CSharpGenerator",
    "GenerationResult",
    "CSharpFile",
    "CodeGenSettings",
    "ConfigManager",
    "DocFormatter",
    "build_file_model",
    "load_settings",
    "generate_code",
    "generate_file",
    "write_files",
    "wrap_text",
]
