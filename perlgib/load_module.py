"""Logic for loading module and document records from disk."""

import logging
from collections.abc import Iterable
from pathlib import Path

from perlgib.doc_item import Document, Module
from perlgib.errors import ExtractionError, MissingPackage, UnreadableSource
from perlgib.load_config import GibConfig
from perlgib.module_extractor import extract_module
from perlgib.perl_tokenizer import PerlTokenizer

logger = logging.getLogger(__name__)


def load_module(file_path: Path, config: GibConfig) -> Module | None:
    """Read, scan and extract one Perl module file.

    Returns None for modules ignored by their package block.
    """
    try:
        source = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise UnreadableSource(file_path, f"Cannot read module ({exc})") from exc
    if not source.strip():
        raise MissingPackage(file_path)

    elements = PerlTokenizer().tokenize(source)
    return extract_module(
        file_path,
        elements,
        document_private_items=config.document_private_items,
        document_ignored_items=config.document_ignored_items,
        extension_modules=config.extension_modules,
    )


def collect_modules(files: Iterable[Path], config: GibConfig) -> list[Module]:
    """Extract every file, skipping the ones that fail."""
    modules: list[Module] = []
    for f in files:
        try:
            module = load_module(f, config)
        except ExtractionError as exc:
            logger.warning("Skipping %s", exc)
            continue
        if module is not None:
            modules.append(module)
    return modules


def load_document(file_path: Path) -> Document:
    """Load a Markdown file as a passthrough document."""
    return Document(file_path=file_path, content=file_path.read_text(encoding="utf-8"))


def collect_documents(files: Iterable[Path]) -> list[Document]:
    """Load every Markdown file, skipping unreadable ones."""
    documents: list[Document] = []
    for f in files:
        try:
            documents.append(load_document(f))
        except (OSError, UnicodeDecodeError):
            logger.warning("Skipping unreadable document: %s", f)
    return documents
