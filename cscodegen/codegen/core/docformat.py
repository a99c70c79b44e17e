"""
Documentation formatting for generated C# code.

Wraps descriptive text to the configured column budget and renders the
XML documentation comments placed above every generated component.
"""

from typing import Iterable, List, Optional, Tuple

from .config import WrapConfiguration
from .model import ExceptionInfo, ParameterInfo
from ...logging_config import get_logger

logger = get_logger(__name__)

DOC_PREFIX = "///"
CONTINUATION_PREFIX = "///   "

# Fixed characters of the single-line forms:
#   '/// <></>'
#   '/// <param name=""></param>'
#   '/// <exception cref=""></exception>'
GENERAL_ELEMENT_OVERHEAD = 9
PARAM_ELEMENT_OVERHEAD = 27
EXCEPTION_ELEMENT_OVERHEAD = 35


class DocFormatter:
    """Line-width aware formatter for comments and XML documentation."""

    def __init__(
        self,
        config: Optional[WrapConfiguration] = None,
        flower_box_character: Optional[str] = "*",
    ):
        """
        Initialize formatter.

        Args:
            config: Column budget and indentation style
            flower_box_character: Character repeated in flower box lines, or
                None to suppress them
        """
        self.config = config or WrapConfiguration()
        self.flower_box_character = flower_box_character

    @property
    def max_line_width(self) -> int:
        return self.config.num_characters_per_line

    def leading_whitespace(self, indents: int) -> Tuple[str, int]:
        """
        Generate the whitespace for a number of indentations.

        Args:
            indents: Number of indentations

        Returns:
            Tuple of (whitespace, number of columns it occupies). A tab counts
            as tab_size columns.
        """
        indents = max(indents, 0)
        columns = indents * self.config.tab_size
        if self.config.use_tabs:
            return "\t" * indents, columns
        return " " * columns, columns

    def wrap(self, text: str, line_offset: int) -> Tuple[str, Optional[str]]:
        """
        Split text at the end of a line.

        Breaks on the last space that fits, or hyphenates a word when no
        space is available.

        Args:
            text: Text to place on the line
            line_offset: Columns already used on the line

        Returns:
            Tuple of (text for this line, remaining text). The line text is
            empty when nothing fits; the remainder is None when all text fit.
        """
        if text is None:
            raise TypeError("text must be a string, not None")
        if line_offset < 0:
            raise ValueError(f"line_offset cannot be negative: {line_offset}")

        text = text.strip()
        if not text:
            return "", None

        remaining_space = self.max_line_width - line_offset - 1
        if len(text) <= remaining_space:
            return text, None

        if remaining_space < 1:
            return "", text

        if remaining_space == 1:
            # One column left: only a single-letter word fits without a hyphen.
            if text[1] == " ":
                return text[0], text[2:]
            return "", text

        split_index = text.rfind(" ", 0, remaining_space)
        if split_index == -1:
            return (
                f"{text[:remaining_space - 1]}-",
                text[remaining_space - 1:],
            )

        return text[:split_index], text[split_index + 1:]

    def emit_wrapped_block(
        self,
        text: str,
        indent_level: int,
        continuation_prefix: str,
        first_line_prefix: str = "",
    ) -> List[str]:
        """
        Wrap text into indented, prefixed lines.

        Args:
            text: Text to wrap
            indent_level: Number of indentations before each line
            continuation_prefix: Text placed after the indentation of every
                continuation line
            first_line_prefix: Text placed after the indentation of the first line

        Returns:
            Output lines. If the text cannot be placed at all (the line is
            narrower than its indentation and prefix) the rest of it is
            emitted unbroken.
        """
        if text is None:
            raise TypeError("text must be a string, not None")

        whitespace, ws_columns = self.leading_whitespace(indent_level)
        continuation_offset = ws_columns + len(continuation_prefix)

        lines: List[str] = []
        current = whitespace + first_line_prefix
        offset = ws_columns + len(first_line_prefix)
        remaining: Optional[str] = text.strip() or None
        stalled = False

        while remaining is not None:
            line_text, rest = self.wrap(remaining, offset)
            if not line_text and rest is None:
                break

            if not line_text:
                if stalled:
                    logger.debug(
                        "No room to wrap text at offset %d; emitting unbroken", offset
                    )
                    lines.append(current + remaining)
                    break
                stalled = True
                if not lines and first_line_prefix and first_line_prefix != continuation_prefix:
                    # The started first line is kept, holding only its prefix
                    lines.append(current.rstrip())
                current = whitespace + continuation_prefix
                offset = continuation_offset
                continue

            stalled = False
            lines.append(current + line_text)
            current = whitespace + continuation_prefix
            offset = continuation_offset
            remaining = rest

        return lines

    def flower_line(self, indent: int) -> Optional[str]:
        """
        Build a flower box line.

        Returns:
            The line, or None when no flower box character is configured.
        """
        if self.flower_box_character is None:
            return None

        whitespace, ws_columns = self.leading_whitespace(indent)
        num_flowers = self.max_line_width - 2 - ws_columns
        if num_flowers <= 0:
            return whitespace
        return f"{whitespace}//{self.flower_box_character * num_flowers}"

    def documentation_element(self, tag: str, text: str, indent: int) -> List[str]:
        """Render a general XML documentation element such as <summary>."""
        text = text.strip()
        whitespace, ws_columns = self.leading_whitespace(indent)

        width = len(text) + ws_columns + 2 * len(tag) + GENERAL_ELEMENT_OVERHEAD
        if width > self.max_line_width:
            return self._block_element(
                f"<{tag}>", f"</{tag}>", text, whitespace, indent
            )
        return [f"{whitespace}{DOC_PREFIX} <{tag}>{text}</{tag}>"]

    def param_element(self, name: str, description: str, indent: int) -> List[str]:
        """Render a <param> documentation element."""
        name = name.strip()
        description = description.strip()
        whitespace, ws_columns = self.leading_whitespace(indent)

        width = len(description) + ws_columns + PARAM_ELEMENT_OVERHEAD + len(name)
        if width > self.max_line_width:
            return self._block_element(
                f'<param name="{name}">', "</param>", description, whitespace, indent
            )
        return [f'{whitespace}{DOC_PREFIX} <param name="{name}">{description}</param>']

    def exception_element(self, cref: str, description: str, indent: int) -> List[str]:
        """Render an <exception> documentation element."""
        cref = cref.strip()
        description = description.strip()
        whitespace, ws_columns = self.leading_whitespace(indent)

        width = len(description) + ws_columns + EXCEPTION_ELEMENT_OVERHEAD + len(cref)
        if width > self.max_line_width:
            return self._block_element(
                f'<exception cref="{cref}">',
                "</exception>",
                description,
                whitespace,
                indent,
            )
        return [
            f'{whitespace}{DOC_PREFIX} <exception cref="{cref}">{description}</exception>'
        ]

    def _block_element(
        self, open_tag: str, close_tag: str, text: str, whitespace: str, indent: int
    ) -> List[str]:
        lines = [f"{whitespace}{DOC_PREFIX} {open_tag}"]
        lines.extend(
            self.emit_wrapped_block(
                text, indent, CONTINUATION_PREFIX, first_line_prefix=CONTINUATION_PREFIX
            )
        )
        lines.append(f"{whitespace}{DOC_PREFIX} {close_tag}")
        return lines

    def component_header(
        self,
        summary: str,
        indent: int,
        remarks: Optional[str] = None,
        returns: Optional[str] = None,
        parameters: Optional[Iterable[ParameterInfo]] = None,
        exceptions: Optional[Iterable[ExceptionInfo]] = None,
        overloads: Optional[str] = None,
    ) -> List[str]:
        """
        Render the documentation header of a component.

        Args:
            summary: Summary of the component
            indent: Number of indentations before the documentation
            remarks: Additional remarks, omitted when empty
            returns: Description of the return value, omitted when empty
            parameters: Parameters of the component
            exceptions: Exceptions thrown by the component
            overloads: Summary shared by all overloads of a method

        Returns:
            Header lines, framed by flower lines when configured.

        Raises:
            ValueError: If summary is empty
        """
        if summary is None:
            raise TypeError("summary must be a string, not None")
        summary = summary.strip()
        if not summary:
            raise ValueError("summary is an empty string")
        indent = max(indent, 0)
        parameters = list(parameters or [])
        exceptions = list(exceptions or [])

        whitespace, _ = self.leading_whitespace(indent)
        separator = f"{whitespace}{DOC_PREFIX}"

        lines: List[str] = []
        flower = self.flower_line(indent)
        if flower is not None:
            lines.append(flower)

        lines.extend(self.documentation_element("summary", summary, indent))

        if overloads:
            lines.extend(self.documentation_element("overloads", overloads, indent))

        if parameters:
            lines.append(separator)
            for param in parameters:
                lines.extend(
                    self.param_element(param.name, param.full_description(), indent)
                )

        if returns:
            lines.append(separator)
            lines.extend(self.documentation_element("returns", returns, indent))

        if remarks:
            lines.append(separator)
            lines.extend(self.documentation_element("remarks", remarks, indent))

        null_names = [p.name for p in parameters if p.can_be_null is False]
        empty_names = [p.name for p in parameters if p.can_be_empty is False]

        if null_names or empty_names or exceptions:
            lines.append(separator)

        if null_names:
            lines.extend(
                self.exception_element(
                    "ArgumentNullException",
                    f"{join_parameter_names(null_names)} is a null reference.",
                    indent,
                )
            )

        if empty_names:
            lines.extend(
                self.exception_element(
                    "ArgumentException",
                    f"{join_parameter_names(empty_names)} is an empty array.",
                    indent,
                )
            )

        for exception in exceptions:
            lines.extend(
                self.exception_element(exception.type, exception.description, indent)
            )

        if flower is not None:
            lines.append(flower)

        return lines


def join_parameter_names(names: List[str]) -> str:
    """
    Join parameter names for an exception description.

    >>> join_parameter_names(["a", "b", "c"])
    '<i>a</i>, <i>b</i>, or <i>c</i>'
    """
    italic = [f"<i>{name}</i>" for name in names]
    if len(italic) == 1:
        return italic[0]
    if len(italic) == 2:
        return f"{italic[0]}, or {italic[1]}"
    return ", ".join(italic[:-1]) + f", or {italic[-1]}"


def create_doc_formatter(settings=None) -> DocFormatter:
    """Create a formatter from CodeGenSettings (defaults when None)."""
    if settings is None:
        return DocFormatter()
    return DocFormatter(
        settings.wrap_configuration(), settings.flower_box_character
    )
