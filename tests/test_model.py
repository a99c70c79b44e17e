"""
Tests for the C# object model and its dictionary builders.
"""

import pytest

from cscodegen.codegen.core.model import (
    DEFAULT_USINGS,
    ClassInfo,
    ConstructorInfo,
    CSharpFile,
    EnumInfo,
    ExceptionInfo,
    FieldInfo,
    MethodInfo,
    ModelError,
    ParameterInfo,
    PropertyInfo,
    build_file_model,
    build_type,
)


def _class(name="Widget", **kwargs):
    return ClassInfo(access="public", name=name, summary="A class.", **kwargs)


def _method(name, *types):
    parameters = [ParameterInfo(t, f"p{i}", "A parameter.") for i, t in enumerate(types)]
    return MethodInfo(access="public", name=name, summary="A method.", parameters=parameters)


class TestInfoValidation:
    """Tests for constructor-time validation."""

    def test_empty_string_raises(self):
        with pytest.raises(ValueError):
            ParameterInfo("int", "", "Count.")

    def test_none_raises(self):
        with pytest.raises(TypeError):
            ExceptionInfo(None, "Failed.")

    def test_field_requires_type(self):
        with pytest.raises(ValueError):
            FieldInfo(access="private", name="x", summary="X.")

    def test_method_return_type(self):
        assert _method("Run").return_type == "void"
        with pytest.raises(ValueError):
            MethodInfo(access="public", name="Run", summary="Runs.", return_type="")


class TestParameterInfo:
    """Tests for ParameterInfo."""

    def test_full_description(self):
        param = ParameterInfo("string", "s", "Text.", can_be_null=True, can_be_empty=True)
        assert param.full_description() == "Text. Can be null. Can be empty."

    def test_full_description_ignores_false_flags(self):
        param = ParameterInfo("string", "s", "Text.", can_be_null=False, can_be_empty=False)
        assert param.full_description() == "Text."

    def test_declaration(self):
        assert ParameterInfo("int", "n", "N.").declaration() == "int n"
        assert ParameterInfo("int", "n", "N.", default="5").declaration() == "int n = 5"


class TestClassInfo:
    """Tests for ClassInfo."""

    def test_default_usings(self):
        assert _class().usings == DEFAULT_USINGS

    def test_explicit_usings(self):
        assert _class(usings=["System.IO"]).usings == ["System.IO"]

    def test_add_using_ignores_duplicates(self):
        info = _class()
        info.add_using("System")
        info.add_using("System.IO")

        assert info.usings == DEFAULT_USINGS + ["System.IO"]

    def test_add_child_class(self):
        parent = _class("Parent")
        child = _class("Child", usings=["System.Xml"])
        parent.add_child_class(child)
        parent.add_child_class(child)

        assert parent.child_classes == [child]
        assert "System.Xml" in parent.usings

    def test_validate_accepts_overloads(self):
        info = _class()
        info.methods.extend([_method("Run"), _method("Run", "int"), _method("Run", "string")])
        info.validate()

    def test_validate_rejects_duplicate_signature(self):
        info = _class()
        first = _method("Run", "int")
        second = MethodInfo(
            access="private",
            name="Run",
            summary="Other.",
            parameters=[ParameterInfo("int", "other", "Other.")],
        )
        info.methods.extend([first, _method("Stop"), second])

        with pytest.raises(ModelError, match="duplicate parameter types"):
            info.validate()

    def test_validate_rejects_duplicate_constructors(self):
        info = _class()
        info.constructors.extend(
            [
                ConstructorInfo(access="public", name="Widget", summary="Creates."),
                ConstructorInfo(access="private", name="Widget", summary="Creates."),
            ]
        )

        with pytest.raises(ModelError):
            info.validate()

    def test_validate_rejects_duplicate_fields(self):
        info = _class()
        info.fields.extend(
            [
                FieldInfo(access="private", name="x", summary="X.", type="int"),
                FieldInfo(access="private", name="x", summary="X.", type="long"),
            ]
        )

        with pytest.raises(ModelError, match="same name"):
            info.validate()

    def test_validate_recurses(self):
        child = _class("Child")
        child.properties.extend(
            [
                PropertyInfo(access="public", name="P", summary="P.", type="int"),
                PropertyInfo(access="public", name="P", summary="P.", type="int"),
            ]
        )
        parent = _class("Parent")
        parent.add_child_class(child)

        with pytest.raises(ModelError):
            parent.validate()

    def test_method_sort_order(self):
        methods = [_method("Run", "int", "int"), _method("Run", "int"), _method("Alpha"), _method("Run")]
        ordered = sorted(methods, key=lambda m: m.sort_key())

        assert [len(m.parameters) for m in ordered] == [0, 0, 1, 2]
        assert ordered[0].name == "Alpha"


class TestConstructorInfo:
    """Tests for ConstructorInfo."""

    def test_ordered_base_parameters(self):
        a = ParameterInfo("int", "a", "A.")
        b = ParameterInfo("int", "b", "B.")
        ctor = ConstructorInfo(
            access="public", name="Widget", summary="Creates.", base_parameters={1: a, 0: b}
        )

        assert ctor.ordered_base_parameters() == [b, a]


class TestCSharpFile:
    """Tests for CSharpFile."""

    def test_file_name(self):
        assert CSharpFile("Acme", _class()).file_name == "Widget.cs"
        assert CSharpFile("Acme", _class(), extension="Designer").file_name == "Widget.Designer.cs"

    @pytest.mark.parametrize("path", ["/abs/path", "C:\\code", "\\\\server\\share"])
    def test_rooted_path_raises(self, path):
        with pytest.raises(ValueError, match="rooted"):
            CSharpFile("Acme", _class(), relative_path=path)

    def test_relative_path(self):
        assert CSharpFile("Acme", _class(), relative_path="Models/Core").relative_path == "Models/Core"

    def test_type_must_be_class_or_enum(self):
        with pytest.raises(TypeError):
            CSharpFile("Acme", _method("Run"))

    def test_namespace_required(self):
        with pytest.raises(ValueError):
            CSharpFile("", _class())


class TestBuilders:
    """Tests for building the model from dictionaries."""

    def test_build_file_model(self):
        source = build_file_model(
            {
                "namespace": "Acme",
                "relative_path": "Models",
                "description": "Widgets.",
                "type": {
                    "name": "Widget",
                    "summary": "A widget.",
                    "base": "Component",
                    "fields": [{"access": "private", "type": "int", "name": "count", "summary": "Count."}],
                    "properties": [
                        {"type": "string", "name": "Name", "summary": "Name.", "setter_lines": None}
                    ],
                    "methods": [
                        {
                            "name": "Run",
                            "summary": "Runs.",
                            "return_type": "bool",
                            "parameters": [{"type": "int", "name": "times", "description": "Times."}],
                            "exceptions": [{"type": "IOException", "description": "Failed."}],
                            "code_lines": ["return true;"],
                        }
                    ],
                    "constructors": [
                        {
                            "summary": "Creates.",
                            "parameters": [{"type": "string", "name": "id", "description": "Id."}],
                            "base_parameters": ["id"],
                        }
                    ],
                    "enums": [{"name": "Kind", "summary": "Kinds.", "values": [{"name": "A", "summary": "A."}]}],
                    "classes": [{"name": "Part", "summary": "A part.", "usings": ["System.IO"]}],
                },
            }
        )
        widget = source.type

        assert source.file_name == "Widget.cs"
        assert isinstance(widget, ClassInfo)
        assert widget.access == "public"
        assert widget.base == "Component"
        assert widget.fields[0].type == "int"
        assert widget.properties[0].setter_lines is None
        assert widget.properties[0].getter_lines == []
        assert widget.methods[0].exceptions[0].type == "IOException"
        assert widget.constructors[0].name == "Widget"
        assert widget.constructors[0].ordered_base_parameters()[0].name == "id"
        assert widget.enums[0].values[0].name == "A"
        assert widget.child_classes[0].name == "Part"
        assert "System.IO" in widget.usings

    def test_build_class_default_usings(self):
        assert build_type({"name": "W", "summary": "W."}).usings == DEFAULT_USINGS

    def test_build_class_without_usings(self):
        info = build_type({"name": "W", "summary": "W.", "usings": []})

        assert info.usings == []

    def test_build_class_explicit_usings(self):
        info = build_type({"name": "W", "summary": "W.", "usings": ["System.IO", "System.IO"]})

        assert info.usings == ["System.IO"]

    def test_build_enum(self):
        info = build_type({"kind": "enum", "name": "Color", "summary": "Colors.", "base": "byte"})

        assert isinstance(info, EnumInfo)
        assert info.base == "byte"
        assert info.usings == []

    def test_unknown_kind(self):
        with pytest.raises(ModelError, match="Unknown type kind"):
            build_type({"kind": "struct", "name": "S", "summary": "S."})

    def test_missing_type(self):
        with pytest.raises(ModelError):
            build_file_model({"namespace": "Acme"})

    def test_unknown_base_parameter(self):
        with pytest.raises(ModelError, match="not one of its parameters"):
            build_type(
                {
                    "name": "Widget",
                    "summary": "A widget.",
                    "constructors": [{"summary": "Creates.", "base_parameters": ["missing"]}],
                }
            )
