"""Logic for rendering module and document pages in Markdown."""

from perlgib.doc_item import DocItem, Document, ExtendedModule, Module, RoutineItem
from perlgib.md_codeblock import md_codeblock

NO_DOCUMENTATION = "> No documentation found."


def _render_item(item: DocItem) -> list[str]:
    """Render a single routine, attribute or modifier section."""
    parts = [f"### `{item.statement}`", ""]
    if item.description:
        parts += [item.description, ""]
    else:
        parts += [NO_DOCUMENTATION, ""]
    if isinstance(item, RoutineItem) and item.test:
        parts += ["#### Example", "", md_codeblock("perl", item.test), ""]
    return parts


def _render_section(title: str, items: list) -> list[str]:
    if not items:
        return []
    parts = [f"## {title}", ""]
    for item in items:
        parts.extend(_render_item(item))
    return parts


def render_module_page(module: Module) -> str:
    """Render a module page in Markdown."""
    parts: list[str] = [f"# {module.name}", ""]

    if module.package_item.description:
        parts += [module.package_item.description, ""]

    if isinstance(module, ExtendedModule):
        parts.extend(_render_section("Attributes", module.attributes))
        parts.extend(_render_section("Modifiers", module.modifiers))
    parts.extend(_render_section("Subroutines", module.routines))

    return "\n".join(parts).rstrip() + "\n"


def render_page(entry: Module | Document) -> str:
    """Render a module page, or pass a document's content through."""
    if isinstance(entry, Document):
        return entry.content
    return render_module_page(entry)
