from __future__ import annotations

import pytest

from tealgen import EnumGenerator, external
from tealgen.errors import GeneratorConsumedError, NameEncodingError


def test_variants_are_quoted_and_escaped():
    gen = EnumGenerator.new(external("Color")).add_variants(["Red", 'Qu"ote', "Back\\slash"])
    assert gen.generate() == '\tenum Color\n\t\t"Red"\n\t\t"Qu\\"ote"\n\t\t"Back\\\\slash"\n\tend'


def test_enum_type_doc_is_rendered():
    gen = EnumGenerator.new(external("Color")).document_type("Colors").add_variant("Red")
    assert gen.generate() == '--Colors\n--\n\tenum Color\n\t\t"Red"\n\tend'


def test_enum_is_never_inlined(color_type):
    gen = color_type.get_type_body()
    assert not gen.is_inlined
    assert gen.record() is None


def test_enum_generate_consumes():
    gen = EnumGenerator.new(external("Color"))
    gen.generate()
    with pytest.raises(GeneratorConsumedError):
        gen.add_variant("Red")


def test_invalid_variant_fails_at_render_time():
    gen = EnumGenerator.new(external("Color")).add_variant(b"\xfe")
    with pytest.raises(NameEncodingError):
        gen.generate()
