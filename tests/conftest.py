from __future__ import annotations

from typing import Callable, TypeVar

import pytest

from tealgen import EnumGenerator, RecordGenerator, external

T = TypeVar("T")


class Example:
    """One field exposed through a getter and a setter, one pure method."""

    @classmethod
    def get_type_body(cls) -> RecordGenerator:
        gen = RecordGenerator.new(cls)
        gen.add_field("example", int)
        gen.add_field("example", int)
        gen.add_method("add", [int], [int])
        return gen


class Color:
    @classmethod
    def to_typename(cls):
        return external("Color")

    @classmethod
    def get_type_body(cls) -> EnumGenerator:
        return EnumGenerator.new(cls).add_variants(["Red", "Green"])


class Export:
    def add_instances(self, collector) -> None:
        collector.document_instance("the shared example").add_instance("example", Example)
        collector.add_instance("add_one", Callable[[int], int])
        collector.add_instance("identity", Callable[[T], T])


@pytest.fixture
def example_type():
    return Example


@pytest.fixture
def color_type():
    return Color


@pytest.fixture
def exporter():
    return Export
