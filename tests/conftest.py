# tests/conftest.py
"""
Common test fixtures for cscodegen.
"""
import pytest

from cscodegen.codegen.core.config import CodeGenSettings, WrapConfiguration
from cscodegen.codegen.core.docformat import DocFormatter
from cscodegen.codegen.core.model import (
    ClassInfo,
    CSharpFile,
    EnumInfo,
    EnumValueInfo,
    FieldInfo,
    MethodInfo,
    ParameterInfo,
)
from cscodegen.codegen.csharp.generator import CSharpGenerator


def make_formatter(width=130, use_tabs=False, tab_size=4, flower="*"):
    """Create a formatter with an explicit column budget."""
    config = WrapConfiguration(
        use_tabs=use_tabs, tab_size=tab_size, num_characters_per_line=width
    )
    return DocFormatter(config, flower)


@pytest.fixture
def formatter():
    """Space-indented formatter, 130 columns, no flower boxes."""
    return make_formatter(flower=None)


@pytest.fixture
def settings():
    """Settings with a short, predictable header and space indentation."""
    return CodeGenSettings(
        developer="dev",
        company_name="Acme",
        use_tabs=False,
        tab_size=4,
        num_characters_per_line=60,
        file_info_template=["File: <%filename%>"],
        copyright_template=[],
        license_template=[],
        include_sub_header=False,
    )


@pytest.fixture
def generator(settings):
    """C# generator using the test settings."""
    return CSharpGenerator(settings)


@pytest.fixture
def plain_generator():
    """C# generator without flower boxes, headers or outline."""
    return CSharpGenerator(
        CodeGenSettings(
            developer="dev",
            use_tabs=False,
            tab_size=4,
            flower_box_character=None,
            file_info_template=[],
            copyright_template=[],
            license_template=[],
            include_sub_header=False,
        )
    )


@pytest.fixture
def widget_class():
    """A class with a field, two overloads and a nested enumeration."""
    widget = ClassInfo(access="public", name="Widget", summary="A widget.")
    widget.fields.append(
        FieldInfo(access="private", name="count", summary="Count.", type="int")
    )
    widget.methods.append(
        MethodInfo(
            access="public",
            name="Run",
            summary="Runs the widget.",
            parameters=[ParameterInfo("int", "times", "Number of runs.")],
        )
    )
    widget.methods.append(
        MethodInfo(access="public", name="Run", summary="Runs the widget once.")
    )
    widget.enums.append(
        EnumInfo(
            access="public",
            name="Kind",
            summary="Widget kinds.",
            values=[EnumValueInfo("A", "First."), EnumValueInfo("B", "Second.")],
        )
    )
    return widget


@pytest.fixture
def widget_file(widget_class):
    """File holding the widget class."""
    return CSharpFile(
        namespace="Acme", type=widget_class, relative_path="Models", description="Widgets."
    )
