from __future__ import annotations

from typing import Callable, TypeVar

import pytest

from tealgen.errors import NameEncodingError
from tealgen.host import to_typenames
from tealgen.signature import Field, build_signature, ensure_text, host_name
from tealgen.typename import FunctionParam, VariadicType, builtin, external, generic, parts_to_str

T = TypeVar("T")
U = TypeVar("U")


def _sig(fn) -> str:
    return parts_to_str(fn.signature)


def test_no_params_no_returns():
    assert _sig(build_signature("noop")) == "function():()"


def test_method_gets_self_type_first():
    fn = build_signature("add", False, external("Example"), to_typenames(int), to_typenames(int))
    assert _sig(fn) == "function(Example,integer):(integer)"
    assert fn.generate({}) == "add: function(Example,integer):(integer)"


def test_generics_are_declared_once_in_order():
    fn = build_signature(
        "map",
        False,
        external("Example"),
        to_typenames([T, Callable[[T], U]]),
        to_typenames(U),
    )
    assert _sig(fn) == "function<T,U>(Example,T,function(T):(U)):(U)"


def test_self_type_generics_come_first():
    fn = build_signature("swap", False, generic("S"), to_typenames([T]), to_typenames([generic("S")]))
    assert _sig(fn) == "function<S,T>(S,T):(S)"


def test_multiple_returns():
    fn = build_signature("split", params=to_typenames(str), returns=to_typenames([str, str]))
    assert _sig(fn) == "function(string):(string,string)"


def test_meta_method_prefix_and_docs():
    fn = build_signature("__add", True, external("V"), to_typenames(external("V")), to_typenames(external("V")))
    assert fn.generate({"__add": "adds two vectors"}) == (
        "--adds two vectors\nmetamethod __add: function(V,V):(V)"
    )


def test_field_renders_with_spaced_colon():
    f = Field.new("count", int)
    assert f.generate({}) == "count : integer"
    assert f.generate({"count": "line one\nline two"}) == "--line one\n--line two\ncount : integer"


def test_byte_names_fail_only_when_rendered():
    fn = build_signature(b"bad\xffname")
    assert fn.name == host_name(b"bad\xffname")
    with pytest.raises(NameEncodingError):
        fn.generate({})


def test_ensure_text_passes_valid_names():
    assert ensure_text("héllo") == "héllo"
    assert host_name(b"plain") == "plain"


def test_named_params_leave_self_unnamed():
    fn = build_signature(
        "add",
        False,
        external("Example"),
        to_typenames([FunctionParam("amount", int)]),
        to_typenames(int),
    )
    assert _sig(fn) == "function(Example,amount:integer):(integer)"


def test_variadic_params_and_returns():
    fn = build_signature("print", params=[VariadicType(builtin("any"))], returns=[VariadicType(builtin("string"))])
    assert _sig(fn) == "function(...:any):(string...)"


def test_named_generic_param_declares_generic():
    fn = build_signature("id", params=to_typenames(FunctionParam("x", T)), returns=to_typenames(T))
    assert _sig(fn) == "function<T>(x:T):(T)"
