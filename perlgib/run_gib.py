"""Orchestration logic for generating documentation and running module tests."""

import logging
from pathlib import Path

from perlgib.build_namespace_index import build_namespace_index
from perlgib.doc_item import Document, Module
from perlgib.errors import RunnerError
from perlgib.load_config import GibConfig
from perlgib.load_module import collect_documents, collect_modules
from perlgib.output_file_for_page import output_file_for_page
from perlgib.render_index_page import render_index_page
from perlgib.render_module_page import render_page
from perlgib.run_module_tests import run_module_tests

logger = logging.getLogger(__name__)

MODULE_SUFFIX = ".pm"
DOCUMENT_SUFFIX = ".md"
INDEX_FILE = "index.md"


def find_files(library_path: Path, suffix: str) -> list[Path]:
    """Find library files with the given suffix in a stable order."""
    return sorted(p for p in library_path.rglob(f"*{suffix}") if p.is_file())


def run_doc(config: GibConfig) -> int:
    """Generate Markdown pages for all modules and documents."""
    module_files = find_files(config.library_path, MODULE_SUFFIX)
    document_files = find_files(config.library_path, DOCUMENT_SUFFIX)
    if not module_files and not document_files:
        msg = f"No {MODULE_SUFFIX} or {DOCUMENT_SUFFIX} files found under: "
        raise SystemExit(msg + str(config.library_path))

    modules = collect_modules(module_files, config)
    documents = collect_documents(document_files)

    out_root = config.output_path.resolve()
    out_root.mkdir(parents=True, exist_ok=True)

    written = _write_pages([*modules, *documents], config.library_path, out_root)

    if not config.no_index:
        _write_index_page(modules, documents, config, out_root)
        written += 1

    print(f"Generated {written} Markdown pages into: {out_root}")
    return 0


def _write_pages(
    entries: list[Module | Document], library_path: Path, out_root: Path
) -> int:
    """Render module and document pages to disk."""
    written = 0
    for entry in entries:
        out_file = output_file_for_page(entry.file_path, library_path, out_root)
        out_file.write_text(render_page(entry), encoding="utf-8")
        written += 1
    return written


def _write_index_page(
    modules: list[Module],
    documents: list[Document],
    config: GibConfig,
    out_root: Path,
) -> None:
    """Render the namespace index page."""
    root = build_namespace_index(modules, documents, config.library_path)
    md = render_index_page(root, config.library_name, config.library_path)
    (out_root / INDEX_FILE).write_text(md, encoding="utf-8")


def run_test(config: GibConfig) -> int:
    """Run the embedded tests of every module.

    Returns 1 if the tests of any module failed or could not be run.
    """
    modules = collect_modules(
        find_files(config.library_path, MODULE_SUFFIX), config
    )

    failed: list[str] = []
    for module in modules:
        try:
            status = run_module_tests(
                module,
                config.library_path,
                runner=config.test_runner,
                timeout=config.test_timeout,
            )
        except RunnerError:
            logger.exception("Cannot run tests of %s", module.name)
            failed.append(module.name)
            continue
        if status is None:
            logger.debug("No tests in %s", module.name)
        elif status != 0:
            logger.warning("Tests of %s exited with status %s", module.name, status)
            failed.append(module.name)

    if failed:
        print(f"Tests failed for {len(failed)} module(s): {', '.join(failed)}")
        return 1
    return 0
