"""tealgen: build typed module declarations for an embedded scripting runtime."""

from __future__ import annotations

from . import errors, snapshot
from ._version import __version__
from .docs import HELP_NOT_FOUND, DocLedger
from .events import (
    Document,
    DocumentType,
    GenerateHelp,
    MemberKind,
    MetaMethod,
    Registration,
)
from .generator import EnumGenerator, RecordGenerator, TypeGenerator
from .host import to_typename, to_typenames
from .render import RenderOptions, render_module
from .signature import ExportedFunction, Field, build_signature
from .typename import (
    ArrayType,
    FunctionParam,
    FunctionType,
    KindOfType,
    MapType,
    NamePart,
    Symbol,
    TealType,
    TypeDescriptor,
    UnionType,
    VariadicType,
    builtin,
    external,
    generic,
    parts_to_str,
)
from .walker import ExtraPage, GlobalInstance, InstanceCollector, TypeBody, TypeWalker

__all__ = [
    "ArrayType",
    "DocLedger",
    "Document",
    "DocumentType",
    "EnumGenerator",
    "ExportedFunction",
    "ExtraPage",
    "Field",
    "FunctionParam",
    "FunctionType",
    "GenerateHelp",
    "GlobalInstance",
    "HELP_NOT_FOUND",
    "InstanceCollector",
    "KindOfType",
    "MapType",
    "MemberKind",
    "MetaMethod",
    "NamePart",
    "RecordGenerator",
    "Registration",
    "RenderOptions",
    "Symbol",
    "TealType",
    "TypeBody",
    "TypeDescriptor",
    "TypeGenerator",
    "TypeWalker",
    "UnionType",
    "VariadicType",
    "__version__",
    "build_signature",
    "builtin",
    "errors",
    "external",
    "generic",
    "parts_to_str",
    "render_module",
    "snapshot",
    "to_typename",
    "to_typenames",
]
