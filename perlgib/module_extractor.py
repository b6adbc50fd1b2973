"""Logic for extracting a module record from a file's element stream."""

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from perlgib.doc_item import CoreModule, DocItem, ExtendedModule, Module
from perlgib.element import ATTRIBUTE, INCLUDE, MODIFIER, PACKAGE, ROUTINE, Element
from perlgib.errors import MalformedCommentBlock, MissingPackage
from perlgib.item_builder import build_declaration_item, build_package_item
from perlgib.item_result import Fail, Skip

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION_MODULES = ("Moose", "Moose::Role")

CORE_KINDS = frozenset({ROUTINE})
EXTENDED_KINDS = frozenset({ROUTINE, ATTRIBUTE, MODIFIER})


def uses_extension(
    elements: Iterable[Element],
    extension_modules: Iterable[str] = DEFAULT_EXTENSION_MODULES,
) -> bool:
    """Check if any include statement loads one of the extension modules."""
    wanted = set(extension_modules)
    return any(e.kind == INCLUDE and e.name in wanted for e in elements)


def extract_module(
    file_path: Path,
    elements: Sequence[Element],
    *,
    document_private_items: bool = False,
    document_ignored_items: bool = False,
    extension_modules: Iterable[str] = DEFAULT_EXTENSION_MODULES,
) -> Module | None:
    """Build the module record for one file.

    Returns None if the package block carries the ignore directive. Raises
    MissingPackage when no package is declared and MalformedCommentBlock when
    any comment block cannot be classified.
    """
    package_index = next(
        (i for i, e in enumerate(elements) if e.kind == PACKAGE), None
    )
    if package_index is None:
        raise MissingPackage(file_path)

    package = build_package_item(
        elements, package_index, document_ignored_items=document_ignored_items
    )
    if isinstance(package, Fail):
        raise MalformedCommentBlock(file_path, package.reason)
    if isinstance(package, Skip):
        logger.info("Skipping module %s: %s", file_path, package.reason)
        return None

    extended = uses_extension(elements, extension_modules)
    kinds = EXTENDED_KINDS if extended else CORE_KINDS

    items: list[DocItem] = []
    for index, element in enumerate(elements):
        if element.kind not in kinds:
            continue
        result = build_declaration_item(
            elements,
            index,
            document_private_items=document_private_items,
            document_ignored_items=document_ignored_items,
        )
        if isinstance(result, Fail):
            raise MalformedCommentBlock(file_path, result.reason)
        if isinstance(result, Skip):
            logger.debug("%s: %s", file_path, result.reason)
            continue
        items.append(result)

    module_class = ExtendedModule if extended else CoreModule
    return module_class(
        file_path=Path(file_path), package_item=package, items=tuple(items)
    )
