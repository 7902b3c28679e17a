"""Aggregate the members of one exposed type.

A binding layer drives a ``RecordGenerator`` while it installs members on a
live object: every ``add_*`` call (or replayed ``Registration`` event) lands
in one bucket, optionally preceded by ``document()`` calls whose text is
attached to that member. ``generate()`` then renders the record once.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator

from .docs import PARAGRAPH_SEPARATOR, DocLedger
from .errors import GeneratorConsumedError
from .events import (
    Document,
    DocumentType,
    Event,
    GenerateHelp,
    MemberKind,
    MetaMethod,
    Registration,
)
from .host import to_typename, to_typenames
from .render import render_enum, render_record
from .signature import ExportedFunction, Field, build_signature, host_name
from .typename import NamePart, TypeDescriptor


class TypeGenerator(ABC):
    """A type body ready to be rendered: a record or an enum."""

    ty: TypeDescriptor
    type_name: tuple[NamePart, ...]
    _consumed: bool

    @property
    def is_inlined(self) -> bool:
        return False

    @property
    def consumed(self) -> bool:
        return self._consumed

    def record(self) -> "RecordGenerator | None":
        return None

    @abstractmethod
    def generate(self) -> str: ...

    def _check_live(self) -> None:
        if self._consumed:
            raise GeneratorConsumedError(f"{self.ty} was already generated")

    def _consume(self) -> None:
        self._check_live()
        self._consumed = True


@dataclass(eq=False)
class RecordGenerator(TypeGenerator):
    ty: TypeDescriptor
    type_name: tuple[NamePart, ...]
    should_be_inlined: bool = False
    is_user_data: bool = False
    fields: list[Field] = field(default_factory=list)
    static_fields: list[Field] = field(default_factory=list)
    methods: list[ExportedFunction] = field(default_factory=list)
    mut_methods: list[ExportedFunction] = field(default_factory=list)
    functions: list[ExportedFunction] = field(default_factory=list)
    mut_functions: list[ExportedFunction] = field(default_factory=list)
    meta_method: list[ExportedFunction] = field(default_factory=list)
    meta_method_mut: list[ExportedFunction] = field(default_factory=list)
    meta_function: list[ExportedFunction] = field(default_factory=list)
    meta_function_mut: list[ExportedFunction] = field(default_factory=list)
    docs: DocLedger = field(default_factory=DocLedger)
    should_generate_help_method: bool = True
    _consumed: bool = field(default=False, repr=False)

    @classmethod
    def new(cls, tp: Any, *, should_be_inlined: bool = False, is_user_data: bool = False) -> "RecordGenerator":
        ty = to_typename(tp)
        return cls(
            ty=ty,
            type_name=tuple(ty.to_parts()),
            should_be_inlined=should_be_inlined,
            is_user_data=is_user_data,
        )

    @property
    def is_inlined(self) -> bool:
        return self.should_be_inlined

    @property
    def documentation(self) -> dict[str, str]:
        return self.docs.documentation

    @property
    def type_doc(self) -> str:
        return self.docs.type_doc

    @property
    def pending_doc(self) -> str | None:
        return self.docs.pending

    def record(self) -> "RecordGenerator":
        return self

    def all_functions(self) -> Iterator[ExportedFunction]:
        for bucket in (
            self.methods,
            self.mut_methods,
            self.functions,
            self.mut_functions,
            self.meta_method,
            self.meta_method_mut,
            self.meta_function,
            self.meta_function_mut,
        ):
            yield from bucket

    # Documentation

    def document(self, text: str) -> "RecordGenerator":
        self._check_live()
        self.docs.document(text)
        return self

    def document_type(self, text: str) -> "RecordGenerator":
        self._check_live()
        self.docs.document_type(text)
        return self

    def copy_docs(self, name: str | bytes) -> None:
        """Attach pending documentation to ``name``.

        Only needed when members are appended to the buckets by hand.
        """
        self.docs.commit(host_name(name))

    # Fields

    def add_field(self, name: str | bytes, tp: Any) -> "RecordGenerator":
        self._check_live()
        self.copy_docs(name)
        self.fields.append(Field.new(name, tp))
        return self

    def add_static_field(self, name: str | bytes, tp: Any) -> "RecordGenerator":
        self._check_live()
        self.copy_docs(name)
        self.static_fields.append(Field.new(name, tp))
        return self

    # Methods and functions

    def add_method(self, name: str | bytes, params: Any = (), returns: Any = ()) -> "RecordGenerator":
        return self._add(self.methods, name, params, returns, is_method=True)

    def add_method_mut(self, name: str | bytes, params: Any = (), returns: Any = ()) -> "RecordGenerator":
        return self._add(self.mut_methods, name, params, returns, is_method=True)

    def add_function(self, name: str | bytes, params: Any = (), returns: Any = ()) -> "RecordGenerator":
        return self._add(self.functions, name, params, returns, is_method=False)

    def add_function_mut(self, name: str | bytes, params: Any = (), returns: Any = ()) -> "RecordGenerator":
        return self._add(self.mut_functions, name, params, returns, is_method=False)

    def add_meta_method(self, meta: MetaMethod | str, params: Any = (), returns: Any = ()) -> "RecordGenerator":
        return self._add_meta(self.meta_method, meta, params, returns, is_method=True)

    def add_meta_method_mut(self, meta: MetaMethod | str, params: Any = (), returns: Any = ()) -> "RecordGenerator":
        return self._add_meta(self.meta_method_mut, meta, params, returns, is_method=True)

    def add_meta_function(self, meta: MetaMethod | str, params: Any = (), returns: Any = ()) -> "RecordGenerator":
        return self._add_meta(self.meta_function, meta, params, returns, is_method=False)

    def add_meta_function_mut(self, meta: MetaMethod | str, params: Any = (), returns: Any = ()) -> "RecordGenerator":
        return self._add_meta(self.meta_function_mut, meta, params, returns, is_method=False)

    def set_generate_help_method(self, should_generate: bool) -> "RecordGenerator":
        self._check_live()
        self.should_generate_help_method = should_generate
        return self

    def generate_help(self) -> "RecordGenerator":
        """Declare ``help(key?: string): string``; see ``help()`` for what it returns.

        Does nothing once ``set_generate_help_method(False)`` was called.
        """
        self._check_live()
        if not self.should_generate_help_method:
            return self
        self.functions.append(build_signature("help", False, None, to_typenames(str), to_typenames(str)))
        return self

    def help(self, key: str | None = None) -> str:
        return self.docs.help(key)

    def _add(
        self,
        bucket: list[ExportedFunction],
        name: str | bytes,
        params: Any,
        returns: Any,
        *,
        is_method: bool,
        is_meta_method: bool = False,
    ) -> "RecordGenerator":
        self._check_live()
        self.copy_docs(name)
        bucket.append(
            build_signature(
                name,
                is_meta_method,
                self.ty if is_method else None,
                to_typenames(params),
                to_typenames(returns),
            )
        )
        return self

    def _add_meta(
        self,
        bucket: list[ExportedFunction],
        meta: MetaMethod | str,
        params: Any,
        returns: Any,
        *,
        is_method: bool,
    ) -> "RecordGenerator":
        name = MetaMethod.resolve(meta).value
        return self._add(bucket, name, params, returns, is_method=is_method, is_meta_method=True)

    # Events

    def apply(self, event: Event) -> "RecordGenerator":
        if isinstance(event, Document):
            return self.document(event.text)
        if isinstance(event, DocumentType):
            return self.document_type(event.text)
        if isinstance(event, GenerateHelp):
            return self.generate_help()
        if not isinstance(event, Registration):
            raise TypeError(f"unknown registration event: {event!r}")

        kind = MemberKind(event.kind)
        if kind.is_field():
            field_types = to_typenames(event.returns) or to_typenames(event.params)
            if len(field_types) != 1:
                raise ValueError(f"field {event.name!r} needs exactly one type, got {len(field_types)}")
            if kind is MemberKind.STATIC_FIELD:
                self.add_static_field(event.name, field_types[0])
            else:
                self.add_field(event.name, field_types[0])
            name = host_name(event.name)
        else:
            getattr(self, f"add_{kind.value}")(event.name, event.params, event.returns)
            name = MetaMethod.resolve(event.name).value if kind.is_meta() else host_name(event.name)

        # A rejected event leaves no pending doc.
        if event.doc is not None:
            self.docs.document(event.doc)
            self.docs.commit(name)
        return self

    def replay(self, events: Iterable[Event]) -> "RecordGenerator":
        for event in events:
            self.apply(event)
        return self

    def generate(self) -> str:
        self._consume()
        return render_record(self)


@dataclass(eq=False)
class EnumGenerator(TypeGenerator):
    ty: TypeDescriptor
    type_name: tuple[NamePart, ...]
    variants: list[str] = field(default_factory=list)
    type_doc: str = ""
    _consumed: bool = field(default=False, repr=False)

    @classmethod
    def new(cls, tp: Any) -> "EnumGenerator":
        ty = to_typename(tp)
        return cls(ty=ty, type_name=tuple(ty.to_parts()))

    def add_variant(self, variant: str | bytes) -> "EnumGenerator":
        self._check_live()
        self.variants.append(host_name(variant))
        return self

    def add_variants(self, variants: Iterable[str | bytes]) -> "EnumGenerator":
        for v in variants:
            self.add_variant(v)
        return self

    def document_type(self, text: str) -> "EnumGenerator":
        self._check_live()
        self.type_doc += text + PARAGRAPH_SEPARATOR
        return self

    def generate(self) -> str:
        self._consume()
        return render_enum(self)
