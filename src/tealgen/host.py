from __future__ import annotations

import collections.abc
import pathlib
import types
import typing
from typing import Any, TypeVar

from .errors import UnsupportedTypeError
from .typename import (
    ArrayType,
    FunctionParam,
    FunctionType,
    MapType,
    Param,
    TealType,
    TypeDescriptor,
    UnionType,
    VariadicType,
    builtin,
    external,
    generic,
)

# Every width collapses onto one declared type.
_SCALARS: dict[Any, str] = {
    bool: "boolean",
    int: "integer",
    float: "number",
    str: "string",
    bytes: "string",
    bytearray: "string",
    type(None): "nil",
    object: "any",
}

_ARRAY_ORIGINS = {
    list,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
    collections.abc.Iterable,
}

_MAP_ORIGINS = {
    dict,
    collections.abc.Mapping,
    collections.abc.MutableMapping,
}


def to_typename(tp: Any) -> TypeDescriptor:
    """Describe a Python annotation as a declaration-language type."""
    if isinstance(tp, VariadicType):
        return VariadicType(to_typename(tp.element))
    if isinstance(tp, TypeDescriptor):
        return tp
    if tp is None:
        return builtin("nil")
    if tp is Any:
        return builtin("any")
    if isinstance(tp, TypeVar):
        return generic(tp.__name__)

    origin = typing.get_origin(tp)
    if origin is not None:
        return _from_alias(tp, origin)

    if isinstance(tp, type):
        name = _SCALARS.get(tp)
        if name is not None:
            return builtin(name)
        if issubclass(tp, pathlib.PurePath):
            return builtin("string")
        if tp in _ARRAY_ORIGINS or tp is tuple:
            return ArrayType(builtin("any"))
        if tp in _MAP_ORIGINS:
            return MapType(builtin("any"), builtin("any"))
        if tp is collections.abc.Callable:
            return builtin("function")
        hook = getattr(tp, "to_typename", None)
        if callable(hook):
            return hook()
        return external(tp.__name__)

    raise UnsupportedTypeError(f"cannot describe {tp!r}")


def to_typenames(values: Any) -> list[Param]:
    """Normalize a parameter or return list: None, one annotation, or a list/tuple of them.

    ``FunctionParam`` entries keep their name and get their type mapped.
    """
    if values is None:
        return []
    if not isinstance(values, (list, tuple)):
        values = [values]
    return [_to_param(v) for v in values]


def _to_param(v: Any) -> Param:
    if isinstance(v, FunctionParam):
        return FunctionParam(v.name, to_typename(v.ty))
    return to_typename(v)


def _from_alias(tp: Any, origin: Any) -> TypeDescriptor:
    args = typing.get_args(tp)

    if origin is typing.Annotated:
        return to_typename(args[0])

    if origin is typing.Union or origin is types.UnionType:
        variants = [a for a in args if a is not type(None)]
        # Optional[T] is just T.
        if len(variants) == 1:
            return to_typename(variants[0])
        return UnionType(tuple(to_typename(a) for a in variants))

    if origin in _ARRAY_ORIGINS:
        return ArrayType(to_typename(args[0]) if args else builtin("any"))

    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return ArrayType(to_typename(args[0]))
        raise UnsupportedTypeError(
            f"fixed-size tuples are not supported ({tp!r}); pass a list of types for multiple values"
        )

    if origin in _MAP_ORIGINS:
        if not args:
            return MapType(builtin("any"), builtin("any"))
        return MapType(to_typename(args[0]), to_typename(args[1]))

    if origin is collections.abc.Callable:
        if not args or args[0] is Ellipsis:
            return builtin("function")
        params, ret = args
        returns = [] if ret is None or ret is type(None) else [to_typename(ret)]
        return FunctionType(tuple(to_typename(p) for p in params), tuple(returns))

    if isinstance(origin, type):
        # User generic class, e.g. Stack[T].
        base = to_typename(origin)
        if isinstance(base, TealType):
            return TealType(base.name, base.kind, tuple(to_typename(a) for a in args))
        return base

    raise UnsupportedTypeError(f"cannot describe {tp!r}")
