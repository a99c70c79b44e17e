"""
In-memory model of the C# constructs that can be generated.

Classes, enumerations and their members are plain dataclasses; the
C# generator walks this tree to produce source files.
"""

from dataclasses import dataclass, field
from pathlib import PurePosixPath, PureWindowsPath
from typing import Any, Dict, List, Optional, Tuple, Union


class ModelError(Exception):
    """Exception raised when the model cannot be written as requested."""

    pass


DEFAULT_USINGS = [
    "System",
    "System.Collections.Generic",
    "System.Linq",
    "System.Text",
    "System.Threading.Tasks",
]


def _require(value: Optional[str], name: str) -> None:
    if value is None:
        raise TypeError(f"{name} must be a string, not None")
    if not value:
        raise ValueError(f"{name} is an empty string")


@dataclass
class ParameterInfo:
    """A parameter of a method or constructor."""

    type: str
    name: str
    description: str
    can_be_null: Optional[bool] = None
    can_be_empty: Optional[bool] = None
    default: Optional[str] = None

    def __post_init__(self):
        _require(self.type, "type")
        _require(self.name, "name")
        _require(self.description, "description")

    def full_description(self) -> str:
        """Description with the null/empty notes used in documentation."""
        parts = [self.description.strip()]
        if self.can_be_null:
            parts.append("Can be null.")
        if self.can_be_empty:
            parts.append("Can be empty.")
        return " ".join(parts)

    def declaration(self) -> str:
        """Parameter as written in a signature."""
        if self.default:
            return f"{self.type} {self.name} = {self.default}"
        return f"{self.type} {self.name}"


@dataclass
class ExceptionInfo:
    """An exception documented as thrown by a member."""

    type: str
    description: str

    def __post_init__(self):
        _require(self.type, "type")
        _require(self.description, "description")


@dataclass
class BaseTypeInfo:
    """Common information of every documented C# component."""

    access: str
    name: str
    summary: str
    remarks: Optional[str] = None
    overloaded_summary: Optional[str] = None

    def __post_init__(self):
        _require(self.access, "access")
        _require(self.name, "name")
        _require(self.summary, "summary")

    def sort_key(self) -> Tuple:
        return (self.name,)


@dataclass
class NamespaceTypeInfo(BaseTypeInfo):
    """A type that can be declared directly inside a namespace."""

    base: Optional[str] = None
    usings: List[str] = field(default_factory=list)

    def add_using(self, name: str) -> None:
        """Add a using directive, ignoring duplicates."""
        _require(name, "name")
        if name not in self.usings:
            self.usings.append(name)

    def add_usings(self, names: List[str]) -> None:
        for name in names:
            self.add_using(name)


@dataclass
class FieldInfo(BaseTypeInfo):
    """A field of a class."""

    type: str = ""
    default_value: Optional[str] = None

    def __post_init__(self):
        super().__post_init__()
        _require(self.type, "type")


@dataclass
class PropertyInfo(BaseTypeInfo):
    """
    A property of a class.

    getter_lines and setter_lines hold accessor bodies: an empty list
    produces an auto-implemented accessor and None omits the accessor.
    """

    type: str = ""
    get_access: Optional[str] = None
    set_access: Optional[str] = None
    getter_lines: Optional[List[str]] = field(default_factory=list)
    setter_lines: Optional[List[str]] = field(default_factory=list)
    exceptions: List[ExceptionInfo] = field(default_factory=list)

    def __post_init__(self):
        super().__post_init__()
        _require(self.type, "type")


def _signature_key(parameters: List[ParameterInfo]) -> Tuple[str, ...]:
    return tuple(p.type for p in parameters)


def _parameter_sort_key(name: str, parameters: List[ParameterInfo]) -> Tuple:
    # Name first, then (type, name) of each parameter; a shorter
    # parameter list sorts before a longer one sharing its prefix.
    return (name, [(p.type, p.name) for p in parameters])


@dataclass
class MethodInfo(BaseTypeInfo):
    """A method of a class."""

    return_type: str = "void"
    return_description: Optional[str] = None
    parameters: List[ParameterInfo] = field(default_factory=list)
    exceptions: List[ExceptionInfo] = field(default_factory=list)
    code_lines: List[str] = field(default_factory=list)

    def __post_init__(self):
        super().__post_init__()
        _require(self.return_type, "return_type")

    def sort_key(self) -> Tuple:
        return _parameter_sort_key(self.name, self.parameters)

    def signature_key(self) -> Tuple[str, ...]:
        return _signature_key(self.parameters)


@dataclass
class ConstructorInfo(BaseTypeInfo):
    """
    A constructor of a class.

    base_parameters maps an ordinal to the parameter passed to the base
    constructor at that position.
    """

    parameters: List[ParameterInfo] = field(default_factory=list)
    base_parameters: Dict[int, ParameterInfo] = field(default_factory=dict)
    exceptions: List[ExceptionInfo] = field(default_factory=list)
    code_lines: List[str] = field(default_factory=list)

    def sort_key(self) -> Tuple:
        return _parameter_sort_key(self.name, self.parameters)

    def signature_key(self) -> Tuple[str, ...]:
        return _signature_key(self.parameters)

    def ordered_base_parameters(self) -> List[ParameterInfo]:
        return [self.base_parameters[k] for k in sorted(self.base_parameters)]


@dataclass
class EnumValueInfo:
    """A single named value of an enumeration."""

    name: str
    summary: str
    value: Optional[str] = None
    remarks: Optional[str] = None

    def __post_init__(self):
        _require(self.name, "name")
        _require(self.summary, "summary")


@dataclass
class EnumInfo(NamespaceTypeInfo):
    """An enumeration."""

    values: List[EnumValueInfo] = field(default_factory=list)


@dataclass
class ClassInfo(NamespaceTypeInfo):
    """A class and its members."""

    child_classes: List["ClassInfo"] = field(default_factory=list)
    enums: List[EnumInfo] = field(default_factory=list)
    fields: List[FieldInfo] = field(default_factory=list)
    properties: List[PropertyInfo] = field(default_factory=list)
    methods: List[MethodInfo] = field(default_factory=list)
    constructors: List[ConstructorInfo] = field(default_factory=list)

    def __post_init__(self):
        super().__post_init__()
        if not self.usings:
            self.add_usings(DEFAULT_USINGS)

    def add_child_class(self, child: "ClassInfo") -> None:
        """Nest a class, merging its using directives into this one."""
        if any(existing is child for existing in self.child_classes):
            return
        self.child_classes.append(child)
        self.add_usings(child.usings)

    def validate(self) -> None:
        """
        Check the class for members that would not compile.

        Raises:
            ModelError: If members share a name (or, for methods and
                constructors, a name and parameter types)
        """
        _check_unique_names(self.enums, "EnumInfo")
        _check_unique_names(self.fields, "FieldInfo")
        _check_unique_names(self.properties, "PropertyInfo")
        _check_unique_signatures(self.methods, "MethodInfo")
        _check_unique_signatures(self.constructors, "ConstructorInfo")
        _check_unique_names(self.child_classes, "ClassInfo")
        for child in self.child_classes:
            child.validate()


def _check_unique_names(items: List[Any], kind: str) -> None:
    seen = set()
    for item in items:
        if item is None:
            raise ModelError(f"A null {kind} was added to the model")
        if item.name in seen:
            raise ModelError(
                f"One or more {kind} objects contained the same name ({item.name})"
            )
        seen.add(item.name)


def _check_unique_signatures(items: List[Any], kind: str) -> None:
    seen = set()
    for item in items:
        if item is None:
            raise ModelError(f"A null {kind} was added to the model")
        key = (item.name, item.signature_key())
        if key in seen:
            raise ModelError(
                f"One or more {kind} objects contained the same name ({item.name}) "
                "and duplicate parameter types."
            )
        seen.add(key)


@dataclass
class CSharpFile:
    """A C# source file holding a single namespace-level type."""

    namespace: str
    type: Union[ClassInfo, EnumInfo]
    relative_path: str = ""
    description: Optional[str] = None
    extension: Optional[str] = None

    def __post_init__(self):
        _require(self.namespace, "namespace")
        if self.type is None:
            raise TypeError("type must be a ClassInfo or EnumInfo, not None")
        if not isinstance(self.type, (ClassInfo, EnumInfo)):
            raise TypeError(
                f"type must be a ClassInfo or EnumInfo, not {type(self.type).__name__}"
            )
        self.relative_path = self.relative_path or ""
        if self.relative_path and (
            PurePosixPath(self.relative_path).is_absolute()
            or PureWindowsPath(self.relative_path).is_absolute()
        ):
            raise ValueError("relative_path is rooted. It must be a relative path.")

    @property
    def file_name(self) -> str:
        if self.extension:
            return f"{self.type.name}.{self.extension}.cs"
        return f"{self.type.name}.cs"


def _build_parameters(items: Optional[List[Dict[str, Any]]]) -> List[ParameterInfo]:
    return [ParameterInfo(**item) for item in items or []]


def _build_exceptions(items: Optional[List[Dict[str, Any]]]) -> List[ExceptionInfo]:
    return [ExceptionInfo(**item) for item in items or []]


def _base_kwargs(data: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "access": data.get("access", "public"),
        "name": data.get("name"),
        "summary": data.get("summary"),
        "remarks": data.get("remarks"),
        "overloaded_summary": data.get("overloaded_summary"),
    }


def build_enum(data: Dict[str, Any]) -> EnumInfo:
    """Convert a dictionary description of an enumeration to an EnumInfo."""
    info = EnumInfo(**_base_kwargs(data), base=data.get("base"))
    info.add_usings(data.get("usings", []))
    for value in data.get("values", []):
        info.values.append(EnumValueInfo(**value))
    return info


def build_class(data: Dict[str, Any]) -> ClassInfo:
    """Convert a dictionary description of a class to a ClassInfo."""
    info = ClassInfo(**_base_kwargs(data), base=data.get("base"))
    if "usings" in data:
        # An explicit list, even an empty one, replaces the default usings
        info.usings = []
        info.add_usings(data["usings"] or [])

    for item in data.get("fields", []):
        info.fields.append(
            FieldInfo(
                **_base_kwargs(item),
                type=item.get("type"),
                default_value=item.get("default_value"),
            )
        )

    for item in data.get("properties", []):
        info.properties.append(
            PropertyInfo(
                **_base_kwargs(item),
                type=item.get("type"),
                get_access=item.get("get_access"),
                set_access=item.get("set_access"),
                getter_lines=item.get("getter_lines", []),
                setter_lines=item.get("setter_lines", []),
                exceptions=_build_exceptions(item.get("exceptions")),
            )
        )

    for item in data.get("methods", []):
        info.methods.append(
            MethodInfo(
                **_base_kwargs(item),
                return_type=item.get("return_type", "void"),
                return_description=item.get("return_description"),
                parameters=_build_parameters(item.get("parameters")),
                exceptions=_build_exceptions(item.get("exceptions")),
                code_lines=list(item.get("code_lines", [])),
            )
        )

    for item in data.get("constructors", []):
        kwargs = _base_kwargs(item)
        kwargs["name"] = item.get("name", info.name)
        parameters = _build_parameters(item.get("parameters"))
        by_name = {p.name: p for p in parameters}
        base_parameters = {}
        for ordinal, name in enumerate(item.get("base_parameters", [])):
            if name not in by_name:
                raise ModelError(
                    f"Base parameter '{name}' of constructor {kwargs['name']} "
                    "is not one of its parameters"
                )
            base_parameters[ordinal] = by_name[name]
        info.constructors.append(
            ConstructorInfo(
                **kwargs,
                parameters=parameters,
                base_parameters=base_parameters,
                exceptions=_build_exceptions(item.get("exceptions")),
                code_lines=list(item.get("code_lines", [])),
            )
        )

    for item in data.get("enums", []):
        info.enums.append(build_enum(item))

    for item in data.get("classes", []):
        info.add_child_class(build_class(item))

    return info


def build_type(data: Dict[str, Any]) -> Union[ClassInfo, EnumInfo]:
    """
    Convert a dictionary description of a namespace-level type.

    The "kind" key selects "class" (default) or "enum".
    """
    if not isinstance(data, dict):
        raise ModelError(f"Type description must be an object, got {type(data).__name__}")

    kind = data.get("kind", "class")
    if kind == "class":
        return build_class(data)
    if kind == "enum":
        return build_enum(data)
    raise ModelError(f"Unknown type kind: {kind}")


def build_file_model(data: Dict[str, Any]) -> CSharpFile:
    """
    Convert a dictionary description of a source file to a CSharpFile.

    Example:
        {
            "namespace": "Acme.Models",
            "relative_path": "Models",
            "description": "Widget model.",
            "type": {"kind": "class", "name": "Widget", "summary": "A widget."}
        }
    """
    if not isinstance(data, dict):
        raise ModelError(f"File description must be an object, got {type(data).__name__}")
    if "type" not in data:
        raise ModelError("File description has no 'type'")

    return CSharpFile(
        namespace=data.get("namespace"),
        type=build_type(data["type"]),
        relative_path=data.get("relative_path", ""),
        description=data.get("description"),
        extension=data.get("extension"),
    )
