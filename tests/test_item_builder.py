"""Tests for building doc items from declarations and adjacent comments."""

from perlgib.doc_item import AttributeItem, ModifierItem, PackageItem, RoutineItem
from perlgib.element import (
    ATTRIBUTE,
    COMMENT,
    MODIFIER,
    OTHER,
    PACKAGE,
    ROUTINE,
    Element,
)
from perlgib.item_builder import (
    build_declaration_item,
    build_package_item,
    is_private_name,
    preceding_comments,
)
from perlgib.item_result import Fail, Skip


def _sub(name: str) -> Element:
    return Element(ROUTINE, f"sub {name}", name=name, line=10)


def _doc(text: str) -> Element:
    return Element(COMMENT, f"### {text}")


def _package(name: str = "X::Y") -> Element:
    return Element(PACKAGE, f"package {name}", name=name, line=1)


def test_is_private_name() -> None:
    """Verify detection of private names, including qualified ones."""
    assert is_private_name("_build")
    assert is_private_name("Foo::_bar")
    assert not is_private_name("build")
    assert not is_private_name("Foo_::bar")


def test_preceding_comments_source_order() -> None:
    """Verify that the backward walk returns comments in source order."""
    elements = [_doc("one"), _doc("two"), _sub("f")]
    assert preceding_comments(elements, 2, "###") == ["### one", "### two"]


def test_routine_with_description_and_test() -> None:
    """Verify a routine item carrying description and test body."""
    elements = [
        _doc("Adds."),
        _doc("```"),
        _doc("ok(1);"),
        _doc("```"),
        _sub("add"),
    ]
    item = build_declaration_item(elements, 4)
    assert item == RoutineItem(
        statement="sub add",
        name="add",
        description="Adds.",
        line=10,
        test="ok(1);",
    )


def test_routine_without_comments() -> None:
    """Verify that undocumented routines are kept with empty description."""
    item = build_declaration_item([_sub("plain")], 0)
    assert isinstance(item, RoutineItem)
    assert item.description == ""
    assert item.test is None


def test_private_routine_skipped() -> None:
    """Verify that private routines produce no item."""
    elements = [_doc("Hidden."), _sub("_hidden")]
    assert isinstance(build_declaration_item(elements, 1), Skip)


def test_private_routine_documented_on_request() -> None:
    """Verify that private routines are kept when asked for."""
    elements = [_doc("Hidden."), _sub("_hidden")]
    item = build_declaration_item(elements, 1, document_private_items=True)
    assert isinstance(item, RoutineItem)
    assert item.description == "Hidden."


def test_non_comment_severs_adjacency() -> None:
    """Verify that an intervening statement detaches the comments."""
    elements = [_doc("Lost."), Element(OTHER, "1;"), _sub("f")]
    item = build_declaration_item(elements, 2)
    assert isinstance(item, RoutineItem)
    assert item.description == ""


def test_wrong_marker_severs_adjacency() -> None:
    """Verify that plain or package comments terminate the walk."""
    elements = [_doc("Lost."), Element(COMMENT, "# plain"), _sub("f")]
    item = build_declaration_item(elements, 2)
    assert isinstance(item, RoutineItem)
    assert item.description == ""

    elements = [Element(COMMENT, "##! package text"), _sub("g")]
    item = build_declaration_item(elements, 1)
    assert isinstance(item, RoutineItem)
    assert item.description == ""


def test_ignored_routine_skipped() -> None:
    """Verify that the ignore directive drops the routine."""
    elements = [_doc("#[ignore(item)]"), _doc("Text."), _sub("f")]
    assert isinstance(build_declaration_item(elements, 2), Skip)


def test_ignored_routine_documented_on_request() -> None:
    """Verify that ignored items can be kept, flagged and without text."""
    elements = [_doc("#[ignore(item)]"), _doc("Text."), _sub("f")]
    item = build_declaration_item(elements, 2, document_ignored_items=True)
    assert isinstance(item, RoutineItem)
    assert item.ignored
    assert item.description == ""


def test_malformed_block_fails() -> None:
    """Verify that malformed blocks are reported with the routine name."""
    elements = [_doc("```"), _doc("ok(1);"), _sub("f")]
    result = build_declaration_item(elements, 2)
    assert isinstance(result, Fail)
    assert "routine f" in result.reason


def test_attribute_and_modifier_items() -> None:
    """Verify attribute and modifier items follow the routine rules."""
    elements = [
        _doc("Path to file."),
        Element(ATTRIBUTE, "has 'file'", name="file"),
        _doc("Wraps run."),
        Element(MODIFIER, "around 'run'", name="run"),
        Element(ATTRIBUTE, "has '_cache'", name="_cache"),
    ]
    attribute = build_declaration_item(elements, 1)
    assert attribute == AttributeItem(
        statement="has 'file'", name="file", description="Path to file."
    )
    modifier = build_declaration_item(elements, 3)
    assert isinstance(modifier, ModifierItem)
    assert modifier.description == "Wraps run."
    assert isinstance(build_declaration_item(elements, 4), Skip)


def test_non_declaration_fails() -> None:
    """Verify that only declaration elements can become items."""
    assert isinstance(build_declaration_item([Element(OTHER, "1;")], 0), Fail)


def test_package_item_following_comments() -> None:
    """Verify that the package block follows the package statement."""
    elements = [
        _package(),
        Element(COMMENT, "##! Line one"),
        Element(COMMENT, "##! Line two"),
        _doc("Not package text."),
        Element(COMMENT, "##! Detached"),
    ]
    item = build_package_item(elements, 0)
    assert item == PackageItem(
        statement="package X::Y",
        name="X::Y",
        description="Line one\nLine two",
        line=1,
    )


def test_package_item_without_comments() -> None:
    """Verify that a package without block has empty description."""
    item = build_package_item([_package(), _sub("f")], 0)
    assert isinstance(item, PackageItem)
    assert item.description == ""


def test_package_item_ignored() -> None:
    """Verify that an ignored package block yields a skip."""
    elements = [_package(), Element(COMMENT, "##! #[ignore(item)]")]
    assert isinstance(build_package_item(elements, 0), Skip)
    kept = build_package_item(elements, 0, document_ignored_items=True)
    assert isinstance(kept, PackageItem)
    assert kept.ignored
