"""Logic for rendering the library index page."""

from pathlib import Path

from perlgib.build_namespace_index import IndexNode
from perlgib.page_path_for_file import page_path_for_file


def render_index_page(root: IndexNode, library_name: str, library_path: Path) -> str:
    """Render the namespace tree as a nested Markdown list."""
    parts: list[str] = [f"# {library_name}", ""]

    for depth, node in root.walk():
        indent = "  " * depth
        if node.leaf is None:
            parts.append(f"{indent}- {node.segment}")
        else:
            page = page_path_for_file(node.leaf.file_path, library_path).as_posix()
            parts.append(f"{indent}- [{node.segment}]({page})")

    return "\n".join(parts).rstrip() + "\n"
