"""Tests for the namespace index tree and its rendering."""

from pathlib import Path

from perlgib.build_namespace_index import build_namespace_index, namespace_path
from perlgib.doc_item import CoreModule, Document, PackageItem
from perlgib.render_index_page import render_index_page

LIB = Path("lib")


def _module(name: str) -> CoreModule:
    path = LIB.joinpath(*name.split("::")).with_suffix(".pm")
    return CoreModule(
        file_path=path,
        package_item=PackageItem(statement=f"package {name}", name=name),
    )


def test_namespace_path() -> None:
    """Verify segment derivation for modules and documents."""
    assert namespace_path(_module("Perl::Gib::Module"), LIB) == [
        "Perl",
        "Gib",
        "Module",
    ]
    doc = Document(file_path=LIB / "Perl" / "Gib" / "Usage.md", content="")
    assert namespace_path(doc, LIB) == ["Perl", "Gib", "Usage"]
    outside = Document(file_path=Path("/elsewhere/README.md"), content="")
    assert namespace_path(outside, LIB) == ["README"]


def test_build_index_tree() -> None:
    """Verify intermediate nodes, leaves with children and ordering."""
    gib = _module("Perl::Gib")
    module = _module("Perl::Gib::Module")
    alpha = _module("Alpha")
    usage = Document(file_path=LIB / "Perl" / "Gib" / "Usage.md", content="")

    root = build_namespace_index([module, gib, alpha], [usage], LIB)

    assert list(root.children) == ["Alpha", "Perl"]
    perl = root.children["Perl"]
    assert perl.leaf is None
    node = perl.children["Gib"]
    assert node.leaf is gib
    assert list(node.children) == ["Module", "Usage"]
    assert node.children["Module"].leaf is module
    assert node.children["Usage"].leaf is usage


def test_duplicate_leaf_keeps_first() -> None:
    """Verify that a second entry for the same node is ignored."""
    first = _module("Dup")
    second = CoreModule(
        file_path=Path("lib/other/Dup.pm"),
        package_item=PackageItem(statement="package Dup", name="Dup"),
    )
    root = build_namespace_index([first, second], [], LIB)
    assert root.children["Dup"].leaf is first


def test_render_index_page() -> None:
    """Verify the nested Markdown list of the index page."""
    root = build_namespace_index(
        [_module("Perl::Gib"), _module("Perl::Gib::Module"), _module("Alpha")],
        [Document(file_path=LIB / "Perl" / "Gib" / "Usage.md", content="")],
        LIB,
    )
    md = render_index_page(root, "My Library", LIB)
    assert md == (
        "# My Library\n"
        "\n"
        "- [Alpha](Alpha.md)\n"
        "- Perl\n"
        "  - [Gib](Perl/Gib.md)\n"
        "    - [Module](Perl/Gib/Module.md)\n"
        "    - [Usage](Perl/Gib/Usage.md)\n"
    )
