"""
Template engine wrapper for file header generation.

Header templates use <%name%> tokens (e.g. "Copyright <%company%> <%year%>"),
rendered through Jinja2 with matching delimiters.
"""

from datetime import datetime
from typing import Dict, Any, List, Optional

from jinja2 import Environment, select_autoescape

from .config import CodeGenSettings
from .docformat import DocFormatter
from ...logging_config import get_logger

logger = get_logger(__name__)


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


class TemplateEngine:
    """Wrapper for Jinja2 configured for <%name%> header tokens."""

    def __init__(self):
        """Initialize template engine."""
        self._env = None
        self._setup_environment()

    def _setup_environment(self):
        """Setup Jinja2 environment with header token delimiters."""
        self._env = Environment(
            # Headers are plain text; string templates must not be escaped.
            autoescape=select_autoescape(["html", "xml"], default_for_string=False),
            variable_start_string="<%",
            variable_end_string="%>",
            # Block and comment syntax is unused in headers; keep it out of
            # the way of license text containing braces.
            block_start_string="<%@",
            block_end_string="@%>",
            comment_start_string="<%#",
            comment_end_string="#%>",
            keep_trailing_newline=False,
        )

    def render_string(self, template_string: str, context: Dict[str, Any]) -> str:
        """
        Render a template string with the given context.

        Args:
            template_string: Template content as string
            context: Variables to pass to template

        Returns:
            Rendered content
        """
        if not template_string:
            return ""
        try:
            template = self._env.from_string(template_string)
            return template.render(**context)
        except Exception as e:
            raise TemplateError(f"Failed to render template string: {str(e)}")

    def render_lines(self, lines: List[str], context: Dict[str, Any]) -> List[str]:
        """Render every line of a multi-line template."""
        rendered = []
        for line in lines:
            rendered.extend(self.render_string(line, context).split("\n"))
        return rendered


def header_context(
    engine: TemplateEngine,
    settings: CodeGenSettings,
    file_name: Optional[str] = None,
    description: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Build the values available to header templates.

    The copyright and license texts are themselves templates; each is
    rendered with its own token blanked so they cannot include themselves.
    """
    now = now or datetime.now()
    context = {
        "year": str(now.year),
        "date": now.strftime("%x"),
        "time": now.strftime("%X"),
        "datetime": now.strftime("%x %X"),
        "developer": settings.developer,
        "company": settings.company_name,
        "appname": settings.application_name,
        "appversion": settings.application_version,
        "libraryname": settings.library_name,
        "libraryversion": settings.library_version,
        "filename": file_name or "",
        "description": description or "",
        "copyright": "",
        "license": "",
    }

    copyright_text = "\n".join(
        engine.render_lines(settings.copyright_template, context)
    )
    license_text = "\n".join(
        engine.render_lines(
            settings.license_template, {**context, "copyright": copyright_text}
        )
    )
    # Copyright may reference the license; render it again with the license known.
    copyright_text = "\n".join(
        engine.render_lines(
            settings.copyright_template, {**context, "license": license_text}
        )
    )

    context["copyright"] = copyright_text
    context["license"] = license_text
    return context


def render_header_lines(
    engine: TemplateEngine,
    formatter: DocFormatter,
    settings: CodeGenSettings,
    file_name: str,
    description: Optional[str] = None,
    now: Optional[datetime] = None,
) -> List[str]:
    """
    Render the comment header placed at the top of a generated file.

    Args:
        engine: Template engine
        formatter: Formatter providing the flower box lines
        settings: Settings holding the templates
        file_name: Name of the generated file
        description: Description of the file
        now: Timestamp used for date tokens

    Returns:
        Comment lines (without trailing whitespace)
    """
    if not file_name:
        raise ValueError("file_name is an empty string")

    context = header_context(engine, settings, file_name, description, now)

    sections = []
    if settings.file_info_template:
        sections.append(engine.render_lines(settings.file_info_template, context))

    notice = []
    if settings.copyright_template:
        notice.extend(context["copyright"].split("\n"))
    if settings.license_template:
        if notice:
            notice.append("")
        notice.extend(context["license"].split("\n"))
    if notice:
        sections.append(notice)

    flower = formatter.flower_line(0)
    lines: List[str] = []
    for section in sections:
        if flower is not None:
            lines.append(flower)
        lines.extend(f"// {line}".rstrip() for line in section)
    if sections and flower is not None:
        lines.append(flower)

    logger.debug("Rendered %d header lines for %s", len(lines), file_name)
    return lines
