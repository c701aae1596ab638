"""Tests for class-name rewriting."""

from __future__ import annotations

from tests.conftest import fld, method
from warnmatch.rewriter import (
    MappingRewriter,
    identity_rewriter,
    rewrite_field,
    rewrite_method,
    rewrite_signature,
)

_RENAMES = MappingRewriter({"com.old.Foo": "com.new.Foo"})


class TestMappingRewriter:
    def test_renames_known_class(self) -> None:
        assert _RENAMES("com.old.Foo") == "com.new.Foo"

    def test_unknown_class_unchanged(self) -> None:
        assert _RENAMES("com.old.Bar") == "com.old.Bar"

    def test_len(self) -> None:
        assert len(_RENAMES) == 1

    def test_copies_mapping(self) -> None:
        renames = {"a.A": "b.B"}
        rewriter = MappingRewriter(renames)
        renames["a.A"] = "c.C"
        assert rewriter("a.A") == "b.B"


def test_identity_rewriter() -> None:
    assert identity_rewriter("com.example.Foo") == "com.example.Foo"


class TestRewriteSignature:
    def test_field_descriptor(self) -> None:
        assert rewrite_signature(_RENAMES, "Lcom/old/Foo;") == "Lcom/new/Foo;"

    def test_method_descriptor(self) -> None:
        sig = "(ILcom/old/Foo;[Lcom/old/Foo;)Lcom/old/Foo;"
        assert rewrite_signature(_RENAMES, sig) == (
            "(ILcom/new/Foo;[Lcom/new/Foo;)Lcom/new/Foo;"
        )

    def test_unrelated_classes_untouched(self) -> None:
        sig = "(Ljava/lang/String;)V"
        assert rewrite_signature(_RENAMES, sig) == sig

    def test_primitive_descriptor(self) -> None:
        assert rewrite_signature(_RENAMES, "J") == "J"

    def test_identity_short_circuits(self) -> None:
        assert rewrite_signature(identity_rewriter, "Lx;") == "Lx;"


class TestRewriteAnnotations:
    def test_method(self) -> None:
        original = method("run", "com.old.Foo", "(Lcom/old/Foo;)V")
        rewritten = rewrite_method(_RENAMES, original)
        assert rewritten.class_name == "com.new.Foo"
        assert rewritten.signature == "(Lcom/new/Foo;)V"
        assert rewritten.method_name == "run"
        assert original.class_name == "com.old.Foo"

    def test_field(self) -> None:
        original = fld("x", "com.old.Foo", "Lcom/old/Foo;", is_static=True)
        rewritten = rewrite_field(_RENAMES, original)
        assert rewritten.class_name == "com.new.Foo"
        assert rewritten.signature == "Lcom/new/Foo;"
        assert rewritten.is_static is True

    def test_identity_returns_same_object(self) -> None:
        original = method()
        assert rewrite_method(identity_rewriter, original) is original
