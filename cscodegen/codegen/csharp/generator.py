"""
C# code generator implementation.

Serializes the class/enumeration model into a documented C# source file:
file header, outline sub-header, using directives and a namespace block.
"""

from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from ..core.config import CodeGenSettings
from ..core.generator import CodeGenerator, GeneratorError
from ..core.model import (
    BaseTypeInfo,
    ClassInfo,
    ConstructorInfo,
    CSharpFile,
    EnumInfo,
    EnumValueInfo,
    FieldInfo,
    MethodInfo,
    ModelError,
    ParameterInfo,
    PropertyInfo,
)
from ..core.naming import NamingCase
from ..core.templates import render_header_lines
from ..core.writer import CodeWriter
from .naming import create_csharp_sanitizer, is_valid_identifier
from ...logging_config import get_logger

logger = get_logger(__name__)

# One outline block: title, access string and grouped (name, access) rows
OutlineGroups = Dict[str, List[Tuple[str, Optional[str]]]]
OutlineBlock = Tuple[str, str, OutlineGroups]


def access_string(access: str) -> str:
    """
    Format an access modifier for the outline.

    >>> access_string("public static")
    '(public, static)'
    """
    return "(" + ", ".join(access.split()) + ")"


def coalesce_names(members: List[BaseTypeInfo]) -> List[Tuple[str, str]]:
    """Collapse consecutive members sharing a name and access into 'Name(count)'."""
    rows = []
    index = 0
    while index < len(members):
        current = members[index]
        count = 1
        while (
            index + count < len(members)
            and members[index + count].name == current.name
            and members[index + count].access == current.access
        ):
            count += 1

        name = f"{current.name}({count})" if count > 1 else current.name
        rows.append((name, access_string(current.access)))
        index += count
    return rows


def _sorted(items: List[BaseTypeInfo]) -> List[BaseTypeInfo]:
    return sorted(items, key=lambda item: item.sort_key())


class CSharpGenerator(CodeGenerator):
    """Code generator for documented C# classes and enumerations."""

    def __init__(self, settings: Optional[CodeGenSettings] = None):
        """Initialize C# generator with settings."""
        super().__init__(settings)
        self.sanitizer = create_csharp_sanitizer()

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "csharp"

    @property
    def file_extension(self) -> str:
        """Return C# file extension."""
        return ".cs"

    def generate(self, source_file: CSharpFile) -> str:
        """Generate the complete text of a C# source file."""
        return self._render(source_file).getvalue()

    def write_file(self, source_file: CSharpFile, root_folder: Union[str, Path]) -> Path:
        """
        Write a source file below a root folder.

        The file is placed at root_folder/relative_path/file_name; missing
        directories are created.

        Args:
            source_file: File model to write
            root_folder: Folder the relative path of the file is based on

        Returns:
            Path of the written file

        Raises:
            ModelError: If the class has conflicting members
            GeneratorError: If the file could not be written
        """
        if root_folder is None:
            raise TypeError("root_folder must be a path, not None")
        if not str(root_folder):
            raise ValueError("root_folder is an empty string")

        folder = Path(root_folder).resolve()
        if source_file.relative_path:
            folder = folder / source_file.relative_path
        full_path = folder / source_file.file_name

        writer = self._render(source_file, self.settings.line_ending)

        try:
            folder.mkdir(parents=True, exist_ok=True)
            writer.save(full_path)
        except OSError as e:
            raise GeneratorError(f"Failed to write {full_path}: {e}") from e

        logger.info("Wrote %s", full_path)
        return full_path

    def validate_file(self, source_file: CSharpFile) -> List[str]:
        """Add C# identifier checks to the common validation."""
        warnings = super().validate_file(source_file)
        self.sanitizer.reset_used_names()

        for kind, name in self._identifiers(source_file.type):
            if not is_valid_identifier(name):
                suggestion = self.sanitizer.sanitize_name(
                    name,
                    NamingCase.CAMEL_CASE if kind == "parameter" else NamingCase.PASCAL_CASE,
                )
                warnings.append(
                    f"{kind.capitalize()} name '{name}' is not a valid C# identifier "
                    f"(suggested: {suggestion})"
                )

        return warnings

    def _identifiers(self, info: Union[ClassInfo, EnumInfo]) -> List[Tuple[str, str]]:
        """Collect (kind, name) pairs of every named item below a type."""
        if isinstance(info, EnumInfo):
            items = [("enumeration", info.name)]
            items.extend(("enumeration value", value.name) for value in info.values)
            return items

        items = [("class", info.name)]
        items.extend(("field", f.name) for f in info.fields)
        items.extend(("property", p.name) for p in info.properties)
        for member in list(info.methods) + list(info.constructors):
            kind = "method" if isinstance(member, MethodInfo) else "constructor"
            items.append((kind, member.name))
            items.extend(("parameter", p.name) for p in member.parameters)
        for enum in info.enums:
            items.extend(self._identifiers(enum))
        for child in info.child_classes:
            items.extend(self._identifiers(child))
        return items

    # File

    def _render(self, source_file: CSharpFile, line_ending: str = "\n") -> CodeWriter:
        """Write the whole file into a new CodeWriter."""
        type_info = source_file.type
        if isinstance(type_info, ClassInfo):
            type_info.validate()

        writer = CodeWriter(self.formatter, line_ending)
        writer.write_lines(
            render_header_lines(
                self.template_engine,
                self.formatter,
                self.settings,
                source_file.file_name,
                source_file.description,
            )
        )

        if self.settings.include_sub_header:
            self.write_sub_header(writer, source_file)

        if type_info.usings:
            for using in type_info.usings:
                writer.write_line(f"using {using};")
            writer.write_line()

        writer.write_line(f"namespace {source_file.namespace}")
        writer.write_line("{")
        if isinstance(type_info, EnumInfo):
            self.write_enum(writer, type_info, 1)
        else:
            self.write_class(writer, type_info, 1)
        writer.write_line("}")

        logger.debug("Rendered %s (%d lines)", source_file.file_name, len(writer.lines))
        return writer

    # Outline sub-header

    def outline(self, source_file: CSharpFile) -> List[OutlineBlock]:
        """
        Build the outline of the types declared in a file.

        Returns:
            One (title, access, groups) block per class or enumeration,
            nested types included.
        """
        type_info = source_file.type
        if isinstance(type_info, EnumInfo):
            return [self._enum_block(source_file.namespace, type_info)]
        return self._class_blocks(source_file.namespace, type_info)

    def _class_blocks(self, parent_name: str, info: ClassInfo) -> List[OutlineBlock]:
        full_name = f"{parent_name}.{info.name}"
        blocks = [(f"{full_name} (class)", access_string(info.access), self._class_groups(info))]

        for child in _sorted(info.child_classes):
            blocks.extend(self._class_blocks(full_name, child))
        for enum in _sorted(info.enums):
            blocks.append(self._enum_block(full_name, enum))

        return blocks

    def _enum_block(self, parent_name: str, info: EnumInfo) -> OutlineBlock:
        groups: OutlineGroups = {"Names:": [(value.name, None) for value in info.values]}
        return (f"{parent_name}.{info.name} (enum)", access_string(info.access), groups)

    def _class_groups(self, info: ClassInfo) -> OutlineGroups:
        groups: OutlineGroups = {}

        for title, members in (
            ("Classes:", info.child_classes),
            ("Enumerations:", info.enums),
            ("Fields:", info.fields),
            ("Properties:", info.properties),
        ):
            if members:
                groups[title] = [
                    (member.name, access_string(member.access)) for member in _sorted(members)
                ]

        if info.constructors or info.methods:
            groups["Methods:"] = coalesce_names(_sorted(info.constructors)) + coalesce_names(
                _sorted(info.methods)
            )

        return groups

    def write_sub_header(self, writer: CodeWriter, source_file: CSharpFile) -> None:
        """Write the outline of the file as aligned comment columns."""
        blocks = self.outline(source_file)

        max_types = max(len(title) for title, _, _ in blocks)
        max_regions = 0
        max_names = 0
        for _, _, groups in blocks:
            for group, rows in groups.items():
                max_regions = max(max_regions, len(group))
                for name, _ in rows:
                    max_names = max(max_names, len(name))

        # "//   " plus a space before the names; "// " plus a space before the access
        col1 = max_regions + 6
        col2 = max(max_types + 4, col1 + max_names + 1)

        for title, access, groups in blocks:
            writer.write_line(f"// {title}".ljust(col2) + access)
            for index, (group, rows) in enumerate(groups.items()):
                writer.write_line(f"//   {group}")
                for name, member_access in rows:
                    writer.write_line(("//".ljust(col1) + name).ljust(col2) + (member_access or ""))
                if index != len(groups) - 1:
                    writer.write_line("//")
            writer.write_flower_line(0)

    # Types

    def write_class(self, writer: CodeWriter, info: ClassInfo, indent: int) -> None:
        """Write a class with its members grouped into regions."""
        writer.write_lines(self.formatter.component_header(info.summary, indent, info.remarks))
        declaration = f"{info.access} class {info.name}"
        if info.base:
            declaration += f" : {info.base}"
        writer.write_line(declaration, indent)
        writer.write_line("{", indent)

        inner = indent + 1
        sections = [
            ("Classes", _sorted(info.child_classes), self.write_class),
            ("Enumerations", _sorted(info.enums), self.write_enum),
            ("Fields", _sorted(info.fields), self.write_field),
            ("Properties", _sorted(info.properties), self.write_property),
        ]
        methods = _sorted(info.constructors) + _sorted(info.methods)

        previous = False
        for region, members, write_member in sections:
            if not members:
                continue
            if previous:
                writer.write_line()
            writer.write_region_start(region, inner)
            for index, member in enumerate(members):
                write_member(writer, member, inner)
                if index != len(members) - 1:
                    writer.write_line()
            writer.write_region_end(region, inner)
            previous = True

        if methods:
            if previous:
                writer.write_line()
            writer.write_region_start("Methods", inner)
            for index, member in enumerate(methods):
                if isinstance(member, ConstructorInfo):
                    self.write_constructor(writer, member, inner)
                else:
                    self.write_method(writer, member, inner)
                if index != len(methods) - 1:
                    writer.write_line()
            writer.write_region_end("Methods", inner)

        writer.write_line("}", indent)

    def write_enum(self, writer: CodeWriter, info: EnumInfo, indent: int) -> None:
        """Write an enumeration."""
        if not info.values:
            raise ModelError(
                f"Enumeration {info.name} cannot be written because no values were specified."
            )

        indent = max(indent, 0)
        writer.write_lines(self.formatter.component_header(info.summary, indent, info.remarks))
        declaration = f"{info.access} enum {info.name}"
        if info.base:
            declaration += f" : {info.base}"
        writer.write_line(declaration, indent)
        writer.write_line("{", indent)
        writer.write_region_start("Enumerations", indent + 1)

        for index, value in enumerate(info.values):
            self.write_enum_value(writer, value, indent + 1)
            if index != len(info.values) - 1:
                writer.write_line()

        writer.write_region_end("Enumerations", indent + 1)
        writer.write_line("}", indent)

    def write_enum_value(self, writer: CodeWriter, value: EnumValueInfo, indent: int) -> None:
        writer.write_lines(self.formatter.component_header(value.summary, indent, value.remarks))
        if value.value:
            writer.write_line(f"{value.name} = {value.value},", indent)
        else:
            writer.write_line(f"{value.name},", indent)

    # Members

    def write_field(self, writer: CodeWriter, info: FieldInfo, indent: int) -> None:
        writer.write_lines(self.formatter.component_header(info.summary, indent, info.remarks))
        if info.default_value:
            writer.write_line(
                f"{info.access} {info.type} {info.name} = {info.default_value};", indent
            )
        else:
            writer.write_line(f"{info.access} {info.type} {info.name};", indent)

    def write_property(self, writer: CodeWriter, info: PropertyInfo, indent: int) -> None:
        """
        Write a property.

        Auto-implemented accessors are written on a single line; accessors
        with a body use the block form.
        """
        getter, setter = info.getter_lines, info.setter_lines
        if getter is None and setter is None:
            raise ModelError(
                f"Property {info.name} has neither a getter nor a setter."
            )

        writer.write_lines(
            self.formatter.component_header(
                info.summary, indent, info.remarks, exceptions=info.exceptions
            )
        )
        get_access = f"{info.get_access} " if info.get_access else ""
        set_access = f"{info.set_access} " if info.set_access else ""
        declaration = f"{info.access} {info.type} {info.name}"

        if getter == [] and setter is None:
            writer.write_line(f"{declaration} {{ {get_access}get; }}", indent)
            return
        if getter is None and setter == []:
            writer.write_line(f"{declaration} {{ {set_access}set; }}", indent)
            return
        if getter == [] and setter == []:
            writer.write_line(f"{declaration} {{ {get_access}get; {set_access}set; }}", indent)
            return

        writer.write_line(declaration, indent)
        writer.write_line("{", indent)
        for keyword, access, lines in (
            ("get", get_access, getter),
            ("set", set_access, setter),
        ):
            if lines is None:
                continue
            if not lines:
                writer.write_line(f"{access}{keyword};", indent + 1)
                continue
            writer.write_line(f"{access}{keyword}", indent + 1)
            writer.write_line("{", indent + 1)
            for line in lines:
                writer.write_line(line, indent + 2)
            writer.write_line("}", indent + 1)
        writer.write_line("}", indent)

    def write_method(self, writer: CodeWriter, info: MethodInfo, indent: int) -> None:
        indent = max(indent, 0)
        writer.write_lines(
            self.formatter.component_header(
                info.summary,
                indent,
                info.remarks,
                returns=info.return_description,
                parameters=info.parameters,
                exceptions=info.exceptions,
                overloads=info.overloaded_summary,
            )
        )
        writer.write_line(
            f"{info.access} {info.return_type} {info.name}({self._parameter_list(info.parameters)})",
            indent,
        )
        self._write_body(writer, info.parameters, info.code_lines, indent)

    def write_constructor(self, writer: CodeWriter, info: ConstructorInfo, indent: int) -> None:
        indent = max(indent, 0)
        writer.write_lines(
            self.formatter.component_header(
                info.summary,
                indent,
                info.remarks,
                parameters=info.parameters,
                exceptions=info.exceptions,
                overloads=info.overloaded_summary,
            )
        )
        signature = f"{info.access} {info.name}({self._parameter_list(info.parameters)})"
        base_parameters = info.ordered_base_parameters()
        if base_parameters:
            signature += " : base(" + ", ".join(p.name for p in base_parameters) + ")"
        writer.write_line(signature, indent)
        self._write_body(writer, info.parameters, info.code_lines, indent)

    @staticmethod
    def _parameter_list(parameters: List[ParameterInfo]) -> str:
        return ", ".join(p.declaration() for p in parameters)

    def _write_body(
        self,
        writer: CodeWriter,
        parameters: List[ParameterInfo],
        code_lines: List[str],
        indent: int,
    ) -> None:
        """Write the braces, argument checks and code of a method or constructor."""
        writer.write_line("{", indent)
        inner = indent + 1

        for param in parameters:
            if param.can_be_null is False:
                writer.write_line(f"if ({param.name} == null)", inner)
                writer.write_line(f'throw new ArgumentNullException("{param.name}");', inner + 1)
                if param.can_be_empty is False:
                    writer.write_line(f"if ({param.name}.Length == 0)", inner)
                    writer.write_line(
                        f'throw new ArgumentException("{param.name} is empty");', inner + 1
                    )
            elif param.can_be_empty is False:
                writer.write_line(f"if ({param.name} != null && {param.name}.Length == 0)", inner)
                writer.write_line(
                    f'throw new ArgumentException("{param.name} is empty");', inner + 1
                )

        for line in code_lines:
            writer.write_line(line, inner)

        writer.write_line("}", indent)
