"""Logic for turning declarations and adjacent comments into doc items."""

import logging
from collections.abc import Sequence

from perlgib.comment_classifier import CommentBlock, classify_comment_block
from perlgib.doc_item import (
    AttributeItem,
    DocItem,
    ModifierItem,
    PackageItem,
    RoutineItem,
)
from perlgib.element import (
    ATTRIBUTE,
    COMMENT,
    ITEM_DOC_MARKER,
    MODIFIER,
    PACKAGE_DOC_MARKER,
    ROUTINE,
    Element,
)
from perlgib.item_result import Fail, Skip

logger = logging.getLogger(__name__)

ITEM_CLASSES: dict[str, type[DocItem]] = {
    ROUTINE: RoutineItem,
    ATTRIBUTE: AttributeItem,
    MODIFIER: ModifierItem,
}


def is_private_name(name: str) -> bool:
    """Check if a (possibly qualified) name is private by convention."""
    return name.rsplit("::", 1)[-1].startswith("_")


def _is_doc_comment(element: Element, marker: str) -> bool:
    return element.kind == COMMENT and element.marker == marker


def following_comments(
    elements: Sequence[Element], index: int, marker: str
) -> list[str]:
    """Collect contiguous doc comments right after ``elements[index]``."""
    lines = []
    for element in elements[index + 1 :]:
        if not _is_doc_comment(element, marker):
            break
        lines.append(element.text)
    return lines


def preceding_comments(
    elements: Sequence[Element], index: int, marker: str
) -> list[str]:
    """Collect contiguous doc comments right before ``elements[index]``.

    The walk goes backwards and stops at the first element that is not a
    matching comment; the result is returned in source order.
    """
    lines = []
    for element in reversed(elements[:index]):
        if not _is_doc_comment(element, marker):
            break
        lines.append(element.text)
    lines.reverse()
    return lines


def build_package_item(
    elements: Sequence[Element],
    index: int,
    *,
    document_ignored_items: bool = False,
) -> PackageItem | Skip | Fail:
    """Build the package item from the package element and its ``##!`` block."""
    element = elements[index]
    block = classify_comment_block(
        following_comments(elements, index, PACKAGE_DOC_MARKER),
        PACKAGE_DOC_MARKER,
    )
    if isinstance(block, Fail):
        return block
    if block.ignored and not document_ignored_items:
        return Skip(f"package {element.name} ignored by comment")

    return PackageItem(
        statement=element.text,
        name=element.name or "",
        description=block.description,
        ignored=block.ignored,
        line=element.line,
    )


def build_declaration_item(
    elements: Sequence[Element],
    index: int,
    *,
    document_private_items: bool = False,
    document_ignored_items: bool = False,
) -> DocItem | Skip | Fail:
    """Build a routine, attribute or modifier item from ``elements[index]``."""
    element = elements[index]
    item_class = ITEM_CLASSES.get(element.kind)
    if item_class is None:
        return Fail(f"Element at line {element.line} is not a declaration")

    name = element.name or ""
    if is_private_name(name) and not document_private_items:
        return Skip(f"{element.kind} {name} is private")

    block = classify_comment_block(
        preceding_comments(elements, index, ITEM_DOC_MARKER), ITEM_DOC_MARKER
    )
    if isinstance(block, Fail):
        return Fail(f"{block.reason} ({element.kind} {name}, line {element.line})")
    if block.ignored and not document_ignored_items:
        return Skip(f"{element.kind} {name} ignored by comment")

    return _make_item(item_class, element, block)


def _make_item(
    item_class: type[DocItem], element: Element, block: CommentBlock
) -> DocItem:
    fields = {
        "statement": element.text,
        "name": element.name or "",
        "description": block.description,
        "ignored": block.ignored,
        "line": element.line,
    }
    if item_class is RoutineItem:
        return RoutineItem(**fields, test=block.test)
    if block.test is not None:
        logger.debug(
            "Dropping test body on non-routine %s at line %s",
            element.name,
            element.line,
        )
    return item_class(**fields)
