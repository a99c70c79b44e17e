"""
Line-oriented output buffer for generated source files.
"""

from pathlib import Path
from typing import Iterable, List, Union

from .docformat import DocFormatter
from ...logging_config import get_logger

logger = get_logger(__name__)


class CodeWriter:
    """Collects indented output lines for one generated file."""

    def __init__(self, formatter: DocFormatter, line_ending: str = "\n"):
        self.formatter = formatter
        self.line_ending = line_ending
        self._lines: List[str] = []

    @property
    def lines(self) -> List[str]:
        return list(self._lines)

    def write_line(self, line: str = "", indent: int = 0) -> int:
        """
        Write a line with leading indentation.

        Args:
            line: Text of the line. Trailing whitespace is removed and blank
                text produces an empty line without indentation.
            indent: Number of indentations before the text

        Returns:
            Number of columns written.
        """
        if line is None:
            raise TypeError("line must be a string, not None")

        line = line.rstrip()
        if not line:
            self._lines.append("")
            return 0

        whitespace, ws_columns = self.formatter.leading_whitespace(indent)
        self._lines.append(f"{whitespace}{line}")
        return ws_columns + len(line)

    def write_lines(self, lines: Iterable[str]) -> None:
        """Append already formatted lines."""
        for line in lines:
            self._lines.append(line.rstrip())

    def write_region_start(self, name: str, indent: int) -> None:
        """Write '#region name' followed by a blank line."""
        self._check_region_name(name)
        self.write_line(f"#region {name}", indent)
        self.write_line()

    def write_region_end(self, name: str, indent: int) -> None:
        """Write a blank line followed by '#endregion name'."""
        self._check_region_name(name)
        self.write_line()
        self.write_line(f"#endregion {name}", indent)

    def write_flower_line(self, indent: int) -> bool:
        """
        Write a flower box line.

        Returns:
            True if a line was written, False when no flower box character is set.
        """
        line = self.formatter.flower_line(indent)
        if line is None:
            return False
        self.write_line(line)
        return True

    @staticmethod
    def _check_region_name(name: str) -> None:
        if name is None:
            raise TypeError("region name must be a string, not None")
        if not name:
            raise ValueError("region name is an empty string")

    def getvalue(self) -> str:
        """Return the accumulated text, terminated by a line ending."""
        if not self._lines:
            return ""
        return self.line_ending.join(self._lines) + self.line_ending

    def save(self, path: Union[str, Path]) -> Path:
        """Write the accumulated text to a UTF-8 file."""
        path = Path(path)
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(self.getvalue())
        logger.debug("Wrote %d lines to %s", len(self._lines), path)
        return path
