"""Turn aggregated generators into declaration text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Sequence

from ._logging import scoped_logger
from .docs import render_doc, split_lines
from .signature import ensure_text
from .typename import parts_to_str

if TYPE_CHECKING:
    from .generator import EnumGenerator, RecordGenerator
    from .walker import GlobalInstance

log = scoped_logger("render")


@dataclass(frozen=True)
class RenderOptions:
    module_name: str
    is_global: bool = True

    @property
    def scope(self) -> str:
        return "global" if self.is_global else "local"


def combine_section(entries: Sequence[str], title: str) -> str:
    """Group rendered members under a ``-- title`` header, two tabs deep."""
    if not entries:
        return ""
    combined = "\n".join(
        "".join(f"\t\t{line}\n" for line in split_lines(entry)) for entry in entries
    )
    return f"\t\t-- {title}\n{combined}\n"


def render_record(record: "RecordGenerator") -> str:
    type_name = parts_to_str(record.type_name)
    documentation = record.documentation

    # Getter and setter register the same field; keep the first.
    seen: set[str] = set()
    fields: list[str] = []
    for f in [*record.fields, *record.static_fields]:
        if f.name in seen:
            continue
        seen.add(f.name)
        fields.append(f.generate(documentation))

    buckets = [
        (fields, "Fields"),
        ([f.generate(documentation) for f in record.methods], "Pure methods"),
        ([f.generate(documentation) for f in record.mut_methods], "Mutating methods"),
        ([f.generate(documentation) for f in record.functions], "Pure functions"),
        ([f.generate(documentation) for f in record.mut_functions], "Mutating functions"),
        ([f.generate(documentation) for f in record.meta_method], "Meta methods"),
        ([f.generate(documentation) for f in record.meta_method_mut], "Mutating MetaMethods"),
        ([f.generate(documentation) for f in record.meta_function], "Meta functions"),
        ([f.generate(documentation) for f in record.meta_function_mut], "Mutating meta functions"),
    ]
    body = "".join(combine_section(entries, title) for entries, title in buckets)

    if record.should_be_inlined:
        header = f"\t-- {type_name}\n"
        end = ""
    else:
        header = f"\trecord {type_name}\n"
        if record.is_user_data:
            header += "\t\tuserdata\n"
        end = "\tend"
    return f"{render_doc(record.type_doc)}{header}\n{body}\n{end}"


def escape_variant(variant: str) -> str:
    return variant.replace("\\", "\\\\").replace('"', '\\"')


def render_enum(enum: "EnumGenerator") -> str:
    name = parts_to_str(enum.type_name)
    variants = "\n".join(f'\t\t"{escape_variant(ensure_text(v))}"' for v in enum.variants)
    return f"{render_doc(enum.type_doc)}\tenum {name}\n{variants}\n\tend"


def render_global_instance(instance: "GlobalInstance", module_name: str) -> str:
    name = ensure_text(instance.name)
    prefix = f"{module_name}." if instance.is_external else ""
    return f"{render_doc(instance.doc)}global {name}: {prefix}{parts_to_str(instance.teal_type)}\n"


def render_module(
    opts: RenderOptions,
    bodies: Iterable[str],
    instances: Iterable["GlobalInstance"] = (),
) -> str:
    """Wrap rendered type bodies in the module record.

    Global instances follow the record, qualified with the module name when
    their type is declared by the module.
    """
    name = opts.module_name
    record = "\n".join(bodies)
    globals_ = "".join(render_global_instance(i, name) for i in instances)
    log.debug("rendered module %s", name, extra={"module_name": name})
    return f"{opts.scope} record {name}\n{record}\nend\n{globals_}return {name}"
