from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator, Protocol, runtime_checkable

from ._logging import scoped_logger
from ._version import __version__
from .errors import GeneratorConsumedError, MissingTypeBodyError
from .generator import RecordGenerator, TypeGenerator
from .host import to_typename
from .render import RenderOptions, render_module
from .signature import host_name
from .typename import KindOfType, NamePart, TealType

log = scoped_logger("walker")


@runtime_checkable
class TypeBody(Protocol):
    """A type that can replay its registrations into a generator.

    Implemented by (or on behalf of) the binding layer.
    """

    @classmethod
    def get_type_body(cls) -> TypeGenerator: ...


@dataclass(frozen=True)
class GlobalInstance:
    name: str
    teal_type: tuple[NamePart, ...]
    is_external: bool
    doc: str = ""


@dataclass(frozen=True)
class ExtraPage:
    """A free-form documentation page shipped alongside the declarations."""

    name: str
    content: str


class InstanceCollector:
    """Handed to an exporter's ``add_instances()`` to record its global values."""

    def __init__(self) -> None:
        self._doc = ""
        self.instances: list[GlobalInstance] = []

    def document_instance(self, doc: str) -> "InstanceCollector":
        self._doc += doc + "\n"
        return self

    def add_instance(self, name: str | bytes, tp: Any, *, is_external: bool | None = None) -> "InstanceCollector":
        ty = to_typename(tp)
        if is_external is None:
            is_external = isinstance(ty, TealType) and ty.kind is KindOfType.EXTERNAL
        doc, self._doc = self._doc, ""
        self.instances.append(
            GlobalInstance(
                name=host_name(name),
                teal_type=tuple(ty.to_parts()),
                is_external=is_external,
                doc=doc,
            )
        )
        return self


@dataclass(eq=False)
class TypeWalker:
    """Collects type bodies and global instances, then renders the module.

    ``generate()`` consumes the walker and every generator it holds.
    """

    given_types: list[TypeGenerator] = field(default_factory=list)
    global_instances: list[GlobalInstance] = field(default_factory=list)
    extra_pages: list[ExtraPage] = field(default_factory=list)
    version_used: str = __version__
    _consumed: bool = field(default=False, repr=False)

    def __iter__(self) -> Iterator[TypeGenerator]:
        return iter(self.given_types)

    def iter(self) -> Iterator[TypeGenerator]:
        return iter(self.given_types)

    def process_type(self, tp: Any) -> "TypeWalker":
        """Add the body of ``tp`` as a nested record (or enum) of the module."""
        return self.add_type(_type_body(tp))

    def process_type_inline(self, tp: Any) -> "TypeWalker":
        """Add the body of ``tp`` directly into the module record.

        Only records are inlined; enums are added as usual.
        """
        body = _type_body(tp)
        if isinstance(body, RecordGenerator):
            body.should_be_inlined = True
        return self.add_type(body)

    def add_type(self, generator: TypeGenerator) -> "TypeWalker":
        self._check_live()
        if not isinstance(generator, TypeGenerator):
            raise TypeError(f"expected a TypeGenerator, got {type(generator).__name__}")
        self.given_types.append(generator)
        log.debug("processed type %s", generator.ty, extra={"inlined": generator.is_inlined})
        return self

    def document_global_instance(self, exporter: Any) -> "TypeWalker":
        """Collect the global instances an exporter exposes.

        ``exporter`` is an object (or a class, which gets instantiated) with an
        ``add_instances(collector)`` method.
        """
        self._check_live()
        if isinstance(exporter, type):
            exporter = exporter()
        collector = InstanceCollector()
        exporter.add_instances(collector)
        self.global_instances.extend(collector.instances)
        return self

    def add_page(self, name: str, content: str) -> "TypeWalker":
        self._check_live()
        self.extra_pages.append(ExtraPage(name=name, content=content))
        return self

    def add_page_from(self, name: str, location: str | Path) -> "TypeWalker":
        return self.add_page(name, Path(location).read_text(encoding="utf-8"))

    def check_correct_version(self) -> bool:
        return self.version_used == __version__

    def generate(self, module_name: str, is_global: bool = True) -> str:
        self._check_live()
        self._consumed = True
        opts = RenderOptions(module_name=module_name, is_global=is_global)
        bodies = [t.generate() for t in self.given_types]
        return render_module(opts, bodies, self.global_instances)

    def generate_global(self, module_name: str) -> str:
        return self.generate(module_name, True)

    def generate_local(self, module_name: str) -> str:
        return self.generate(module_name, False)

    def _check_live(self) -> None:
        if self._consumed:
            raise GeneratorConsumedError("type walker was already generated")


def _type_body(tp: Any) -> TypeGenerator:
    hook = getattr(tp, "get_type_body", None)
    if not callable(hook):
        raise MissingTypeBodyError(f"{tp!r} does not provide get_type_body()")
    body = hook()
    if not isinstance(body, TypeGenerator):
        raise MissingTypeBodyError(
            f"{tp!r}.get_type_body() returned {type(body).__name__}, expected a TypeGenerator"
        )
    return body
