"""Logic for building the namespace tree used by the index page."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from perlgib.doc_item import Document, Module

logger = logging.getLogger(__name__)

PACKAGE_SEPARATOR = "::"


@dataclass
class IndexNode:
    """One namespace segment; may hold a leaf and children at the same time."""

    segment: str
    children: dict[str, "IndexNode"] = field(default_factory=dict)
    leaf: Module | Document | None = None

    def child(self, segment: str) -> "IndexNode":
        """Return the child for ``segment``, creating it if needed."""
        node = self.children.get(segment)
        if node is None:
            node = IndexNode(segment)
            self.children[segment] = node
        return node

    def walk(self, depth: int = 0) -> Iterable[tuple[int, "IndexNode"]]:
        """Yield ``(depth, node)`` for every descendant in display order."""
        for node in self.children.values():
            yield depth, node
            yield from node.walk(depth + 1)


def namespace_path(entry: Module | Document, library_path: Path) -> list[str]:
    """Split a module name or a document path into namespace segments."""
    if isinstance(entry, Module):
        return [p for p in entry.name.split(PACKAGE_SEPARATOR) if p]
    try:
        rel = entry.file_path.relative_to(library_path)
    except ValueError:
        rel = Path(entry.file_path.name)
    return list(rel.with_suffix("").parts)


def _sort_children(node: IndexNode) -> None:
    node.children = dict(sorted(node.children.items()))
    for child in node.children.values():
        _sort_children(child)


def build_namespace_index(
    modules: Iterable[Module],
    documents: Iterable[Document],
    library_path: Path,
) -> IndexNode:
    """Build the namespace tree for all modules and documents."""
    root = IndexNode("")
    for entry in [*modules, *documents]:
        segments = namespace_path(entry, library_path)
        if not segments:
            continue
        node = root
        for segment in segments:
            node = node.child(segment)
        if node.leaf is not None:
            logger.warning(
                "Index entry %s already taken by %s, ignoring %s",
                PACKAGE_SEPARATOR.join(segments),
                node.leaf.file_path,
                entry.file_path,
            )
            continue
        node.leaf = entry
    _sort_children(root)
    return root
