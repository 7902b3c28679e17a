from __future__ import annotations

import logging

import pytest

from tealgen import EnumGenerator, RecordGenerator, TypeWalker, external
from tealgen.errors import GeneratorConsumedError, MissingTypeBodyError, NameEncodingError

EXAMPLE_MODULE = (
    "global record test\n"
    "\trecord Example\n"
    "\n"
    "\t\t-- Fields\n"
    "\t\texample : integer\n"
    "\n"
    "\t\t-- Pure methods\n"
    "\t\tadd: function(Example,integer):(integer)\n"
    "\n"
    "\n"
    "\tend\n"
    "end\n"
    "return test"
)


class Inlined:
    @classmethod
    def get_type_body(cls) -> RecordGenerator:
        return RecordGenerator.new(external("R")).add_method("m")


class BadName:
    @classmethod
    def get_type_body(cls) -> RecordGenerator:
        return RecordGenerator.new(cls).add_method(b"\xff")


class WrongBody:
    @classmethod
    def get_type_body(cls):
        return "not a generator"


def test_example_module(example_type):
    assert TypeWalker().process_type(example_type).generate_global("test") == EXAMPLE_MODULE


def test_local_module(example_type):
    out = TypeWalker().process_type(example_type).generate_local("test")
    assert out == EXAMPLE_MODULE.replace("global record", "local record", 1)


def test_empty_module():
    assert TypeWalker().generate("m") == "global record m\n\nend\nreturn m"


def test_empty_userdata_module():
    walker = TypeWalker().add_type(RecordGenerator.new(external("Example"), is_user_data=True))
    assert walker.generate("Examples") == (
        "global record Examples\n\trecord Example\n\t\tuserdata\n\n\n\tend\nend\nreturn Examples"
    )


def test_bodies_keep_registration_order(example_type, color_type):
    out = TypeWalker().process_type(color_type).process_type(example_type).generate("m")
    assert out.index("\tenum Color\n") < out.index("\trecord Example\n")
    assert "\tend\n\trecord Example" in out


def test_inline_and_nested_bodies_both_render():
    out = TypeWalker().process_type(Inlined).process_type_inline(Inlined).generate("m")
    assert out.count("\t\tm: function(R):()\n") == 2
    assert out.count("\trecord R\n") == 1
    assert "\t-- R\n" in out


def test_enums_are_not_inlined(color_type):
    walker = TypeWalker().process_type_inline(color_type)
    assert [t.is_inlined for t in walker] == [False]
    assert isinstance(next(walker.iter()), EnumGenerator)


def test_global_instances_follow_module_record(example_type, exporter):
    out = TypeWalker().process_type(example_type).document_global_instance(exporter).generate("test")
    assert out.endswith(
        "\tend\nend\n"
        "--the shared example\n"
        "global example: test.Example\n"
        "global add_one: function(integer):(integer)\n"
        "global identity: function<T>(T):(T)\n"
        "return test"
    )


def test_instance_external_flag_can_be_overridden(example_type):
    class Export:
        def add_instances(self, collector):
            collector.add_instance("plain", example_type, is_external=False)

    walker = TypeWalker().document_global_instance(Export())
    assert walker.global_instances[0].is_external is False
    assert "global plain: Example\n" in walker.generate("test")


def test_missing_type_body():
    with pytest.raises(MissingTypeBodyError):
        TypeWalker().process_type(int)
    with pytest.raises(MissingTypeBodyError, match=r"expected a TypeGenerator"):
        TypeWalker().process_type(WrongBody)


def test_add_type_rejects_other_objects():
    with pytest.raises(TypeError):
        TypeWalker().add_type("Example")


def test_invalid_name_fails_at_generate():
    walker = TypeWalker().process_type(BadName)
    with pytest.raises(NameEncodingError):
        walker.generate("test")


def test_walker_is_consumed_by_generate(example_type):
    walker = TypeWalker().process_type(example_type)
    walker.generate("test")
    with pytest.raises(GeneratorConsumedError):
        walker.generate("test")
    with pytest.raises(GeneratorConsumedError):
        walker.process_type(example_type)


def test_generate_is_deterministic(example_type, exporter):
    def build() -> str:
        return TypeWalker().process_type(example_type).document_global_instance(exporter).generate("test")

    assert build() == build()


def test_extra_pages(tmp_path):
    page = tmp_path / "guide.md"
    page.write_text("# Guide\nhello", encoding="utf-8")

    walker = TypeWalker().add_page("intro", "welcome").add_page_from("guide", page)
    assert [(p.name, p.content) for p in walker.extra_pages] == [
        ("intro", "welcome"),
        ("guide", "# Guide\nhello"),
    ]
    assert "guide" not in walker.generate("m")


def test_version_check():
    walker = TypeWalker()
    assert walker.check_correct_version()
    walker.version_used = "0.0.0-other"
    assert not walker.check_correct_version()


def test_debug_logging(example_type, caplog):
    with caplog.at_level(logging.DEBUG, logger="tealgen"):
        TypeWalker().process_type(example_type).generate("test")
    messages = [r.getMessage() for r in caplog.records]
    assert "processed type Example" in messages
    assert "rendered module test" in messages
