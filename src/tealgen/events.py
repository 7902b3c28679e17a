"""Registration events emitted by a binding layer while it installs members."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class MemberKind(str, Enum):
    FIELD_GET = "field_get"
    FIELD_SET = "field_set"
    STATIC_FIELD = "static_field"
    METHOD = "method"
    METHOD_MUT = "method_mut"
    FUNCTION = "function"
    FUNCTION_MUT = "function_mut"
    META_METHOD = "meta_method"
    META_METHOD_MUT = "meta_method_mut"
    META_FUNCTION = "meta_function"
    META_FUNCTION_MUT = "meta_function_mut"

    def is_field(self) -> bool:
        return self in (MemberKind.FIELD_GET, MemberKind.FIELD_SET, MemberKind.STATIC_FIELD)

    def is_meta(self) -> bool:
        return self.name.startswith("META_")


class MetaMethod(str, Enum):
    """Operators and their reserved names."""

    ADD = "__add"
    SUB = "__sub"
    MUL = "__mul"
    DIV = "__div"
    MOD = "__mod"
    POW = "__pow"
    UNM = "__unm"
    IDIV = "__idiv"
    BAND = "__band"
    BOR = "__bor"
    BXOR = "__bxor"
    BNOT = "__bnot"
    SHL = "__shl"
    SHR = "__shr"
    CONCAT = "__concat"
    LEN = "__len"
    EQ = "__eq"
    LT = "__lt"
    LE = "__le"
    INDEX = "__index"
    NEW_INDEX = "__newindex"
    CALL = "__call"
    TO_STRING = "__tostring"
    PAIRS = "__pairs"
    IPAIRS = "__ipairs"
    CLOSE = "__close"
    ITER = "__iter"

    @classmethod
    def resolve(cls, value: "MetaMethod | str") -> "MetaMethod":
        """Accept a member, its reserved name (``"__add"``) or its member name (``"ADD"``)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            pass
        try:
            return cls[str(value).upper()]
        except KeyError:
            raise ValueError(f"unknown meta method: {value!r}") from None


@dataclass(frozen=True)
class Registration:
    """One member the binding layer just installed.

    ``params``/``returns`` hold host annotations or type descriptors. A field
    takes its type from ``returns`` (getter) or ``params`` (setter),
    whichever is set. For meta kinds ``name`` is a ``MetaMethod`` (or
    anything ``MetaMethod.resolve`` accepts).
    """

    kind: MemberKind
    name: Any
    params: Any = ()
    returns: Any = ()
    doc: str | None = None


@dataclass(frozen=True)
class Document:
    """Documentation for the next registered member."""

    text: str


@dataclass(frozen=True)
class DocumentType:
    """Documentation for the type itself."""

    text: str


@dataclass(frozen=True)
class GenerateHelp:
    """Request a ``help`` function on the type."""


Event = Union[Registration, Document, DocumentType, GenerateHelp]
