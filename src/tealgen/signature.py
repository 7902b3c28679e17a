from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from .docs import render_doc
from .errors import NameEncodingError
from .host import to_typename
from .typename import NamePart, Param, TypeDescriptor, parts_to_str, signature_parts


def host_name(name: str | bytes) -> str:
    """Accept a name as text or as raw host bytes.

    Invalid byte sequences are kept as surrogate escapes so the failure shows
    up when the name is rendered, not when it is registered.
    """
    if isinstance(name, (bytes, bytearray)):
        return bytes(name).decode("utf-8", errors="surrogateescape")
    return str(name)


def ensure_text(name: str) -> str:
    try:
        name.encode("utf-8")
    except UnicodeEncodeError as e:
        raise NameEncodingError(f"name {name!r} is not valid UTF-8: {e.reason}") from e
    return name


@dataclass(frozen=True)
class ExportedFunction:
    name: str
    signature: tuple[NamePart, ...]
    is_meta_method: bool = False

    def generate(self, documentation: Mapping[str, str]) -> str:
        name = ensure_text(self.name)
        doc = render_doc(documentation.get(self.name))
        prefix = "metamethod " if self.is_meta_method else ""
        return f"{doc}{prefix}{name}: {parts_to_str(self.signature)}"


@dataclass(frozen=True)
class Field:
    name: str
    signature: tuple[NamePart, ...]
    type: TypeDescriptor

    @classmethod
    def new(cls, name: str | bytes, tp: Any) -> "Field":
        ty = to_typename(tp)
        return cls(name=host_name(name), signature=tuple(ty.to_parts()), type=ty)

    def generate(self, documentation: Mapping[str, str]) -> str:
        name = ensure_text(self.name)
        doc = render_doc(documentation.get(self.name))
        return f"{doc}{name} : {parts_to_str(self.signature)}"


def build_signature(
    name: str | bytes,
    is_meta_method: bool = False,
    self_type: TypeDescriptor | None = None,
    params: Sequence[Param] = (),
    returns: Sequence[TypeDescriptor] = (),
) -> ExportedFunction:
    """Build the callable signature of a method or function.

    Methods pass the enclosing type as ``self_type`` so it becomes the first
    parameter; functions pass None.
    """
    parts = signature_parts(self_type=self_type, params=params, returns=returns)
    return ExportedFunction(
        name=host_name(name),
        signature=tuple(parts),
        is_meta_method=is_meta_method,
    )
