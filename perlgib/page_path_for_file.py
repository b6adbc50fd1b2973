"""Utility for determining the relative page path of a library file."""

from pathlib import Path

MARKDOWN_SUFFIX = ".md"


def page_path_for_file(source: Path, library_path: Path) -> Path:
    """Relative Markdown page path, e.g. ``Foo/Bar.pm`` -> ``Foo/Bar.md``."""
    try:
        rel = source.relative_to(library_path)
    except ValueError:
        rel = Path(source.name)
    return rel.with_suffix(MARKDOWN_SUFFIX)
