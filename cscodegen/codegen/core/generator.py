"""
Base generator interface for source file generation.

Defines the contract a generator implements and the error-tolerant
generate_code() entry point.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Any, Optional

from .config import CodeGenSettings, load_settings
from .docformat import DocFormatter, create_doc_formatter
from .model import CSharpFile, ClassInfo, EnumInfo
from .templates import TemplateEngine
from ...logging_config import get_logger

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class CodeGenerator(ABC):
    """Abstract base class for source file generators."""

    def __init__(self, settings: Optional[CodeGenSettings] = None):
        """Initialize generator with optional settings."""
        self.settings = settings or load_settings()
        self.formatter: DocFormatter = create_doc_formatter(self.settings)
        self._template_engine = None

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files."""
        pass

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the header template engine for this generator."""
        if self._template_engine is None:
            self._template_engine = TemplateEngine()
        return self._template_engine

    @abstractmethod
    def generate(self, source_file: CSharpFile) -> str:
        """
        Generate the complete text of a source file.

        Args:
            source_file: File model to generate

        Returns:
            Generated code as a string
        """
        pass

    def validate_file(self, source_file: CSharpFile) -> List[str]:
        """
        Check a file model for issues that do not prevent generation.

        Language generators should override this to add language-specific validation.

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        type_info = source_file.type
        if isinstance(type_info, ClassInfo):
            if not (
                type_info.fields
                or type_info.properties
                or type_info.methods
                or type_info.constructors
                or type_info.enums
                or type_info.child_classes
            ):
                warnings.append(f"Class '{type_info.name}' has no members")
        elif isinstance(type_info, EnumInfo):
            if not type_info.values:
                warnings.append(f"Enumeration '{type_info.name}' has no values")

        return warnings


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self, code: str, warnings: List[str] = None, metadata: Dict[str, Any] = None
    ):
        """
        Initialize generation result.

        Args:
            code: Generated code
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(code="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(
    generator: CodeGenerator, source_file: CSharpFile
) -> GenerationResult:
    """
    Generate code using the specified generator with error handling.

    Args:
        generator: Code generator instance
        source_file: File model to generate

    Returns:
        GenerationResult with code, warnings, and metadata
    """
    try:
        warnings = generator.validate_file(source_file)
        for warning in warnings:
            logger.warning("%s: %s", source_file.file_name, warning)

        code = generator.generate(source_file)

        metadata = {
            "language": generator.language_name,
            "file_extension": generator.file_extension,
            "file_name": source_file.file_name,
            "namespace": source_file.namespace,
            "relative_path": source_file.relative_path,
            "line_count": code.count("\n"),
            "characters_per_line": generator.settings.num_characters_per_line,
        }

        logger.info("Generated %s (%d lines)", source_file.file_name, metadata["line_count"])
        return GenerationResult(code, warnings, metadata)

    except Exception as e:
        logger.error("Code generation failed for %s: %s", source_file.file_name, e)
        return GenerationResult.error(f"Code generation failed: {str(e)}", exception=e)
