"""Data models for documented items and the records that own them."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class DocItem:
    """One documented unit of a Perl module."""

    statement: str
    name: str
    description: str = ""
    ignored: bool = False
    line: int = 0


@dataclass(frozen=True)
class PackageItem(DocItem):
    """The package declaration and its trailing ``##!`` block."""


@dataclass(frozen=True)
class RoutineItem(DocItem):
    """A ``sub`` declaration with its optional embedded test body."""

    test: str | None = None


@dataclass(frozen=True)
class AttributeItem(DocItem):
    """A Moose ``has`` declaration."""


@dataclass(frozen=True)
class ModifierItem(DocItem):
    """A Moose method modifier (``before``, ``after``, ``around``...)."""


@dataclass(frozen=True)
class Module:
    """Documentation extracted from one Perl module file."""

    file_path: Path
    package_item: PackageItem
    items: tuple[DocItem, ...] = ()

    @property
    def name(self) -> str:
        """Declared package name."""
        return self.package_item.name

    @property
    def routines(self) -> list[RoutineItem]:
        """Routine items in source order."""
        return [it for it in self.items if isinstance(it, RoutineItem)]


@dataclass(frozen=True)
class CoreModule(Module):
    """Module without the object-system extension; routines only."""


@dataclass(frozen=True)
class ExtendedModule(Module):
    """Module using Moose; may also hold attribute and modifier items."""

    @property
    def attributes(self) -> list[AttributeItem]:
        """Attribute items in source order."""
        return [it for it in self.items if isinstance(it, AttributeItem)]

    @property
    def modifiers(self) -> list[ModifierItem]:
        """Modifier items in source order."""
        return [it for it in self.items if isinstance(it, ModifierItem)]


@dataclass(frozen=True)
class Document:
    """Plain Markdown file shipped alongside the modules."""

    file_path: Path
    content: str
