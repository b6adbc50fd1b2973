"""Logic for loading configuration files into an immutable settings object."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from perlgib.deep_merge import deep_merge

DEFAULT_CONFIG: dict[str, Any] = {
    "library_path": "lib",
    "output_path": "doc",
    "library_name": "Library",
    "document_private_items": False,
    "document_ignored_items": False,
    "no_index": False,
    "extension_modules": ["Moose", "Moose::Role"],
    "test": {
        "runner": ["prove", "--verbose"],
        "timeout": 300,
    },
}


@dataclass(frozen=True)
class GibConfig:
    """Settings shared by extraction, rendering and test runs."""

    library_path: Path
    output_path: Path
    library_name: str = "Library"
    document_private_items: bool = False
    document_ignored_items: bool = False
    no_index: bool = False
    extension_modules: tuple[str, ...] = ("Moose", "Moose::Role")
    test_runner: tuple[str, ...] = ("prove", "--verbose")
    test_timeout: float | None = 300

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "GibConfig":
        """Build settings from a merged configuration mapping."""
        test = config.get("test") or {}
        timeout = test.get("timeout")
        return cls(
            library_path=Path(config["library_path"]).absolute(),
            output_path=Path(config["output_path"]).absolute(),
            library_name=str(config.get("library_name") or "Library"),
            document_private_items=bool(config.get("document_private_items")),
            document_ignored_items=bool(config.get("document_ignored_items")),
            no_index=bool(config.get("no_index")),
            extension_modules=tuple(config.get("extension_modules") or ()),
            test_runner=tuple(str(x) for x in test.get("runner") or ("prove",)),
            test_timeout=float(timeout) if timeout else None,
        )


def load_config(
    path: str | None = None, overrides: dict[str, Any] | None = None
) -> GibConfig:
    """Load configuration from a YAML file, merge it with defaults and overrides."""
    config = DEFAULT_CONFIG.copy()
    if path:
        p = Path(path)
        if p.exists():
            user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
            config = deep_merge(config, user_config)
    if overrides:
        config = deep_merge(config, overrides)
    return GibConfig.from_dict(config)
