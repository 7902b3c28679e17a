from __future__ import annotations

from tealgen.docs import HELP_NOT_FOUND, DocLedger, render_doc


def test_render_doc_prefixes_every_line():
    assert render_doc(None) == ""
    assert render_doc("") == ""
    assert render_doc("a\n\nb") == "--a\n--\n--b\n"


def test_pending_doc_attaches_to_next_member():
    docs = DocLedger()
    docs.document("first line")
    docs.document("second paragraph")
    docs.commit("x")
    assert docs.documentation == {"x": "first line\n\nsecond paragraph"}
    assert docs.pending is None


def test_commit_without_pending_doc_is_noop():
    docs = DocLedger()
    docs.commit("x")
    assert docs.documentation == {}


def test_second_commit_appends_a_paragraph():
    docs = DocLedger()
    docs.document("a")
    docs.commit("x")
    docs.document("b")
    docs.commit("x")
    assert docs.documentation["x"] == "a\n\nb"


def test_type_doc_accumulates_paragraphs():
    docs = DocLedger()
    docs.document_type("one")
    docs.document_type("two")
    assert docs.type_doc == "one\n\ntwo\n\n"


def test_help_lists_pages_and_looks_up_keys():
    docs = DocLedger()
    docs.document_type("An example type.")
    docs.document("adds")
    docs.commit("add")
    docs.document("subtracts")
    docs.commit("sub")

    assert docs.help() == "An example type.\n\n\nAvailable pages:\nadd\nsub\n"
    assert docs.help("sub") == "subtracts"
    assert docs.help("missing") == HELP_NOT_FOUND


def test_render_doc_splits_on_newlines_only():
    assert render_doc("page\x0cbreak same line") == "--page\x0cbreak same line\n"
    assert render_doc("windows\r\nline\r\n") == "--windows\n--line\n"
    assert render_doc("trailing\n\n") == "--trailing\n--\n"
