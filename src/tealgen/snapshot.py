"""Structured snapshots of a TypeWalker (JSON and MessagePack)."""

from __future__ import annotations

import json
from typing import Any

import msgpack

from .docs import DocLedger
from .errors import SnapshotDecodeError, SnapshotEncodeError
from .generator import EnumGenerator, RecordGenerator, TypeGenerator
from .signature import ExportedFunction, Field
from .typename import (
    ArrayType,
    FunctionParam,
    FunctionType,
    KindOfType,
    MapType,
    NamePart,
    Param,
    Symbol,
    TealType,
    TypeDescriptor,
    UnionType,
    VariadicType,
)
from .walker import ExtraPage, GlobalInstance, TypeWalker

SNAPSHOT_VERSION = 1

_FUNCTION_BUCKETS = (
    "methods",
    "mut_methods",
    "functions",
    "mut_functions",
    "meta_method",
    "meta_method_mut",
    "meta_function",
    "meta_function_mut",
)


# Encoding


def _teal_type(t: TealType) -> dict[str, Any]:
    return {
        "name": t.name,
        "kind": t.kind.value,
        "generics": None if t.generics is None else [descriptor_to_dict(g) for g in t.generics],
    }


def descriptor_to_dict(ty: TypeDescriptor) -> dict[str, Any]:
    if isinstance(ty, TealType):
        return {"single": _teal_type(ty)}
    if isinstance(ty, ArrayType):
        return {"array": descriptor_to_dict(ty.element)}
    if isinstance(ty, MapType):
        return {"map": {"key": descriptor_to_dict(ty.key), "value": descriptor_to_dict(ty.value)}}
    if isinstance(ty, UnionType):
        return {"union": [descriptor_to_dict(v) for v in ty.variants]}
    if isinstance(ty, FunctionType):
        return {
            "function": {
                "params": [param_to_dict(p) for p in ty.params],
                "returns": [descriptor_to_dict(r) for r in ty.returns],
            }
        }
    if isinstance(ty, VariadicType):
        return {"variadic": descriptor_to_dict(ty.element)}
    raise SnapshotEncodeError(f"unknown type descriptor: {ty!r}")


def param_to_dict(p: Param) -> dict[str, Any]:
    if isinstance(p, FunctionParam):
        return {"param": {"name": p.name, "ty": descriptor_to_dict(p.ty)}}
    return descriptor_to_dict(p)


def parts_to_list(parts: tuple[NamePart, ...]) -> list[dict[str, Any]]:
    out: list[dict[str, Any]] = []
    for p in parts:
        if isinstance(p, Symbol):
            out.append({"symbol": p.text})
        elif isinstance(p, TealType):
            out.append({"type": _teal_type(p)})
        else:
            raise SnapshotEncodeError(f"unknown name part: {p!r}")
    return out


def _function(f: ExportedFunction) -> dict[str, Any]:
    return {
        "name": f.name,
        "signature": parts_to_list(f.signature),
        "is_meta_method": f.is_meta_method,
    }


def _field(f: Field) -> dict[str, Any]:
    return {
        "name": f.name,
        "signature": parts_to_list(f.signature),
        "type": descriptor_to_dict(f.type),
    }


def generator_to_dict(gen: TypeGenerator) -> dict[str, Any]:
    if gen.consumed:
        raise SnapshotEncodeError(f"{gen.ty} was already generated")
    if isinstance(gen, RecordGenerator):
        record: dict[str, Any] = {
            "ty": descriptor_to_dict(gen.ty),
            "type_name": parts_to_list(gen.type_name),
            "should_be_inlined": gen.should_be_inlined,
            "is_user_data": gen.is_user_data,
            "fields": [_field(f) for f in gen.fields],
            "static_fields": [_field(f) for f in gen.static_fields],
        }
        for bucket in _FUNCTION_BUCKETS:
            record[bucket] = [_function(f) for f in getattr(gen, bucket)]
        record["documentation"] = dict(gen.documentation)
        record["type_doc"] = gen.type_doc
        record["pending_doc"] = gen.pending_doc
        record["should_generate_help_method"] = gen.should_generate_help_method
        return {"record": record}
    if isinstance(gen, EnumGenerator):
        return {
            "enum": {
                "ty": descriptor_to_dict(gen.ty),
                "type_name": parts_to_list(gen.type_name),
                "variants": list(gen.variants),
                "type_doc": gen.type_doc,
            }
        }
    raise SnapshotEncodeError(f"unknown type generator: {gen!r}")


def to_dict(walker: TypeWalker) -> dict[str, Any]:
    if walker._consumed:
        raise SnapshotEncodeError("type walker was already generated")
    return {
        "snapshot": SNAPSHOT_VERSION,
        "version_used": walker.version_used,
        "given_types": [generator_to_dict(t) for t in walker.given_types],
        "global_instances": [
            {
                "name": g.name,
                "teal_type": parts_to_list(g.teal_type),
                "is_external": g.is_external,
                "doc": g.doc,
            }
            for g in walker.global_instances
        ],
        "extra_pages": [{"name": p.name, "content": p.content} for p in walker.extra_pages],
    }


# Decoding


def _one_tag(obj: Any, what: str) -> tuple[str, Any]:
    if not isinstance(obj, dict) or len(obj) != 1:
        raise SnapshotDecodeError(f"invalid {what}: expected a single-key tagged object")
    ((tag, value),) = obj.items()
    return tag, value


def _teal_type_from(obj: dict[str, Any]) -> TealType:
    generics = obj.get("generics")
    return TealType(
        name=str(obj["name"]),
        kind=KindOfType(obj["kind"]),
        generics=None if generics is None else tuple(descriptor_from_dict(g) for g in generics),
    )


def descriptor_from_dict(obj: Any) -> TypeDescriptor:
    tag, value = _one_tag(obj, "type descriptor")
    if tag == "single":
        return _teal_type_from(value)
    if tag == "array":
        return ArrayType(descriptor_from_dict(value))
    if tag == "map":
        return MapType(descriptor_from_dict(value["key"]), descriptor_from_dict(value["value"]))
    if tag == "union":
        return UnionType(tuple(descriptor_from_dict(v) for v in value))
    if tag == "function":
        return FunctionType(
            tuple(param_from_dict(p) for p in value["params"]),
            tuple(descriptor_from_dict(r) for r in value["returns"]),
        )
    if tag == "variadic":
        return VariadicType(descriptor_from_dict(value))
    raise SnapshotDecodeError(f"unknown type descriptor tag: {tag!r}")


def param_from_dict(obj: Any) -> Param:
    tag, value = _one_tag(obj, "parameter")
    if tag == "param":
        name = value["name"]
        return FunctionParam(None if name is None else str(name), descriptor_from_dict(value["ty"]))
    return descriptor_from_dict(obj)


def parts_from_list(items: Any) -> tuple[NamePart, ...]:
    out: list[NamePart] = []
    for item in items:
        tag, value = _one_tag(item, "name part")
        if tag == "symbol":
            out.append(Symbol(str(value)))
        elif tag == "type":
            out.append(_teal_type_from(value))
        else:
            raise SnapshotDecodeError(f"unknown name part tag: {tag!r}")
    return tuple(out)


def _function_from(obj: dict[str, Any]) -> ExportedFunction:
    return ExportedFunction(
        name=str(obj["name"]),
        signature=parts_from_list(obj["signature"]),
        is_meta_method=bool(obj["is_meta_method"]),
    )


def _field_from(obj: dict[str, Any]) -> Field:
    return Field(
        name=str(obj["name"]),
        signature=parts_from_list(obj["signature"]),
        type=descriptor_from_dict(obj["type"]),
    )


def generator_from_dict(obj: Any) -> TypeGenerator:
    tag, value = _one_tag(obj, "type generator")
    if tag == "record":
        docs = DocLedger(
            pending=value["pending_doc"],
            documentation={str(k): str(v) for k, v in value["documentation"].items()},
            type_doc=str(value["type_doc"]),
        )
        buckets = {b: [_function_from(f) for f in value[b]] for b in _FUNCTION_BUCKETS}
        return RecordGenerator(
            ty=descriptor_from_dict(value["ty"]),
            type_name=parts_from_list(value["type_name"]),
            should_be_inlined=bool(value["should_be_inlined"]),
            is_user_data=bool(value["is_user_data"]),
            fields=[_field_from(f) for f in value["fields"]],
            static_fields=[_field_from(f) for f in value["static_fields"]],
            docs=docs,
            should_generate_help_method=bool(value["should_generate_help_method"]),
            **buckets,
        )
    if tag == "enum":
        return EnumGenerator(
            ty=descriptor_from_dict(value["ty"]),
            type_name=parts_from_list(value["type_name"]),
            variants=[str(v) for v in value["variants"]],
            type_doc=str(value["type_doc"]),
        )
    raise SnapshotDecodeError(f"unknown type generator tag: {tag!r}")


def from_dict(obj: Any) -> TypeWalker:
    if not isinstance(obj, dict):
        raise SnapshotDecodeError("invalid snapshot envelope")
    if obj.get("snapshot") != SNAPSHOT_VERSION:
        raise SnapshotDecodeError(f"unsupported snapshot version: {obj.get('snapshot')!r}")
    try:
        return TypeWalker(
            given_types=[generator_from_dict(t) for t in obj["given_types"]],
            global_instances=[
                GlobalInstance(
                    name=str(g["name"]),
                    teal_type=parts_from_list(g["teal_type"]),
                    is_external=bool(g["is_external"]),
                    doc=str(g["doc"]),
                )
                for g in obj["global_instances"]
            ],
            extra_pages=[ExtraPage(name=str(p["name"]), content=str(p["content"])) for p in obj["extra_pages"]],
            version_used=str(obj["version_used"]),
        )
    except SnapshotDecodeError:
        raise
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise SnapshotDecodeError(f"invalid snapshot: {e!r}") from e


def dumps_json(walker: TypeWalker, *, pretty: bool = False) -> str:
    return json.dumps(to_dict(walker), indent=2 if pretty else None)


def loads_json(text: str | bytes) -> TypeWalker:
    try:
        obj = json.loads(text)
    except ValueError as e:
        raise SnapshotDecodeError(f"failed to parse snapshot JSON: {e}") from e
    return from_dict(obj)


def packb(walker: TypeWalker) -> bytes:
    payload = to_dict(walker)
    try:
        return msgpack.packb(payload, use_bin_type=True)
    except Exception as e:  # noqa: BLE001 - boundary encoding error
        raise SnapshotEncodeError(str(e)) from e


def unpackb(payload: bytes) -> TypeWalker:
    try:
        obj = msgpack.unpackb(payload, raw=False)
    except Exception as e:  # noqa: BLE001 - boundary decoding error
        raise SnapshotDecodeError(str(e)) from e
    return from_dict(obj)
