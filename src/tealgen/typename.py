"""Type descriptors and the name parts they render to."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence, Union

from ._logging import scoped_logger
from .errors import UnsupportedTypeError

log = scoped_logger("typename")


class KindOfType(str, Enum):
    """How a type is treated when it shows up in a declaration."""

    # Part of the language, never needs qualification.
    BUILTIN = "Builtin"
    # Declared by a module (possibly this one).
    EXTERNAL = "External"
    # A type parameter; turns the enclosing signature into a generic one.
    GENERIC = "Generic"

    def is_builtin(self) -> bool:
        return self is KindOfType.BUILTIN

    def is_external(self) -> bool:
        return self is KindOfType.EXTERNAL

    def is_generic(self) -> bool:
        return self is KindOfType.GENERIC


class TypeDescriptor(ABC):
    """Common interface of every type descriptor."""

    __slots__ = ()

    @abstractmethod
    def to_parts(self, nested: bool = False) -> list["NamePart"]: ...

    @abstractmethod
    def generic_types(self) -> list["TealType"]: ...

    def __str__(self) -> str:
        return parts_to_str(self.to_parts())


@dataclass(frozen=True)
class Symbol:
    """A piece of literal syntax, e.g. the ``function(`` in ``function(integer):(string)``."""

    text: str


@dataclass(frozen=True)
class TealType(TypeDescriptor):
    name: str
    kind: KindOfType = KindOfType.EXTERNAL
    generics: tuple[TypeDescriptor, ...] | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.kind, KindOfType):
            object.__setattr__(self, "kind", KindOfType(self.kind))
        if self.generics is not None and not isinstance(self.generics, tuple):
            object.__setattr__(self, "generics", tuple(self.generics))

    def to_parts(self, nested: bool = False) -> list[NamePart]:
        parts: list[NamePart] = [self]
        if self.generics:
            parts.append(Symbol("<"))
            for i, g in enumerate(self.generics):
                if i:
                    parts.append(Symbol(","))
                parts.extend(g.to_parts(nested=True))
            parts.append(Symbol(">"))
        return parts

    def generic_types(self) -> list[TealType]:
        found: list[TealType] = []
        if self.kind.is_generic():
            found.append(self)
        for g in self.generics or ():
            found.extend(g.generic_types())
        return unique(found)


@dataclass(frozen=True)
class ArrayType(TypeDescriptor):
    element: TypeDescriptor

    def to_parts(self, nested: bool = False) -> list[NamePart]:
        return [Symbol("{"), *self.element.to_parts(nested=True), Symbol("}")]

    def generic_types(self) -> list[TealType]:
        return self.element.generic_types()


@dataclass(frozen=True)
class MapType(TypeDescriptor):
    key: TypeDescriptor
    value: TypeDescriptor

    def to_parts(self, nested: bool = False) -> list[NamePart]:
        return [
            Symbol("{"),
            *self.key.to_parts(nested=True),
            Symbol(":"),
            *self.value.to_parts(nested=True),
            Symbol("}"),
        ]

    def generic_types(self) -> list[TealType]:
        return unique([*self.key.generic_types(), *self.value.generic_types()])


@dataclass(frozen=True)
class UnionType(TypeDescriptor):
    variants: tuple[TypeDescriptor, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.variants, tuple):
            object.__setattr__(self, "variants", tuple(self.variants))

    def to_parts(self, nested: bool = False) -> list[NamePart]:
        if not self.variants:
            log.warning("empty union type found, skipping")
            return []
        parts: list[NamePart] = [Symbol("(")]
        for i, variant in enumerate(self.variants):
            if i:
                parts.append(Symbol(" | "))
            parts.extend(variant.to_parts(nested=True))
        parts.append(Symbol(")"))
        return parts

    def generic_types(self) -> list[TealType]:
        return collect_generics(self.variants)


@dataclass(frozen=True)
class FunctionType(TypeDescriptor):
    params: tuple[Param, ...] = ()
    returns: tuple[TypeDescriptor, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.params, tuple):
            object.__setattr__(self, "params", tuple(self.params))
        if not isinstance(self.returns, tuple):
            object.__setattr__(self, "returns", tuple(self.returns))

    def to_parts(self, nested: bool = False) -> list[NamePart]:
        # The outermost signature declares every generic, callbacks reuse them.
        return signature_parts(
            self_type=None,
            params=self.params,
            returns=self.returns,
            declare_generics=not nested,
        )

    def generic_types(self) -> list[TealType]:
        return collect_generics(self.params, self.returns)


@dataclass(frozen=True)
class VariadicType(TypeDescriptor):
    """Any number of values of ``element``.

    Only meaningful as a parameter (``...:T``) or a return (``T...``).
    """

    element: TypeDescriptor

    def to_parts(self, nested: bool = False) -> list[NamePart]:
        log.warning("variadic type %s used outside of a parameter or return list", self.element)
        return self.element.to_parts(nested=nested)

    def generic_types(self) -> list[TealType]:
        return self.element.generic_types()


@dataclass(frozen=True)
class FunctionParam:
    """A parameter with an optional name, rendered as ``name:type``."""

    name: str | None
    ty: TypeDescriptor

    def generic_types(self) -> list[TealType]:
        return self.ty.generic_types()


NamePart = Union[Symbol, TealType]
Param = Union[TypeDescriptor, FunctionParam]


def builtin(name: str) -> TealType:
    return TealType(name, KindOfType.BUILTIN)


def external(name: str) -> TealType:
    return TealType(name, KindOfType.EXTERNAL)


def generic(name: str) -> TealType:
    return TealType(name, KindOfType.GENERIC)


def part_text(part: NamePart) -> str:
    if isinstance(part, Symbol):
        return part.text
    return part.name


def parts_to_str(parts: Iterable[NamePart]) -> str:
    return "".join(part_text(p) for p in parts)


def unique(items: Iterable[TealType]) -> list[TealType]:
    """Deduplicate by structural equality, keeping first-encounter order."""
    seen: set[TealType] = set()
    out: list[TealType] = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        out.append(item)
    return out


def collect_generics(*groups: Iterable[Param]) -> list[TealType]:
    found: list[TealType] = []
    for group in groups:
        for ty in group:
            found.extend(ty.generic_types())
    return unique(found)


def signature_parts(
    *,
    self_type: TypeDescriptor | None,
    params: Sequence[Param],
    returns: Sequence[TypeDescriptor],
    declare_generics: bool = True,
) -> list[NamePart]:
    """Lay out ``function<G>(self,params):(returns)`` as name parts.

    The self type is always unnamed. A variadic parameter is written
    ``...:T`` and a variadic return ``T...``.
    """
    args: list[Param] = [self_type, *params] if self_type is not None else list(params)

    parts: list[NamePart] = [Symbol("function")]
    generics = collect_generics(args, returns) if declare_generics else []
    if generics:
        parts.append(Symbol("<"))
        for i, g in enumerate(generics):
            if i:
                parts.append(Symbol(","))
            parts.append(g)
        parts.append(Symbol(">"))

    parts.append(Symbol("("))
    for i, arg in enumerate(args):
        if i:
            parts.append(Symbol(","))
        parts.extend(_param_parts(arg))
    parts.append(Symbol("):("))
    for i, ret in enumerate(returns):
        if i:
            parts.append(Symbol(","))
        if isinstance(ret, FunctionParam):
            raise UnsupportedTypeError(f"return values cannot be named: {ret.name!r}")
        if isinstance(ret, VariadicType):
            parts.extend(ret.element.to_parts(nested=True))
            parts.append(Symbol("..."))
        else:
            parts.extend(ret.to_parts(nested=True))
    parts.append(Symbol(")"))
    return parts


def _param_parts(arg: Param) -> list[NamePart]:
    name, ty = (arg.name, arg.ty) if isinstance(arg, FunctionParam) else (None, arg)
    if isinstance(ty, VariadicType):
        name, ty = "...", ty.element
    parts: list[NamePart] = []
    if name is not None:
        parts.extend((Symbol(name), Symbol(":")))
    parts.extend(ty.to_parts(nested=True))
    return parts
