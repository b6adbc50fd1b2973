"""Utility for determining the output file path of a rendered page."""

from pathlib import Path

from perlgib.page_path_for_file import page_path_for_file


def output_file_for_page(source: Path, library_path: Path, out_root: Path) -> Path:
    """Map a library file onto its Markdown page under ``out_root``."""
    # lib/Foo/Bar.pm -> out_root/Foo/Bar.md
    p = out_root / page_path_for_file(source, library_path)
    p.parent.mkdir(parents=True, exist_ok=True)
    return p
