"""Logic for composing a Test::More script from a module's embedded tests."""

import logging
import re

from perlgib.doc_item import Module

logger = logging.getLogger(__name__)

ROUTINE_NAME_RE = re.compile(r"\bsub\s+([A-Za-z_][\w:]*)")


def routine_test_name(statement: str) -> str | None:
    """Derive a subtest name from a routine statement (``sub name(...)``)."""
    m = ROUTINE_NAME_RE.search(statement)
    return m.group(1) if m else None


def collect_tests(module: Module) -> dict[str, str]:
    """Map subtest names to test bodies for routines that carry one.

    Two routines deriving the same name overwrite each other; the last one in
    source order wins.
    """
    tests: dict[str, str] = {}
    for routine in module.routines:
        if not routine.test or not routine.test.strip():
            continue
        name = routine_test_name(routine.statement)
        if name is None:
            logger.warning(
                "Cannot derive test name from %r in %s",
                routine.statement,
                module.file_path,
            )
            continue
        if name in tests:
            logger.warning(
                "Duplicate test name %s in %s, last definition wins",
                name,
                module.file_path,
            )
        tests[name] = routine.test
    return tests


def _quote(text: str) -> str:
    return "'" + text.replace("\\", "\\\\").replace("'", "\\'") + "'"


def compose_test_script(package: str, tests: dict[str, str]) -> str:
    """Render the Perl test script for one package."""
    parts = [
        f"use {package};",
        "use Test::More;",
        "",
        f'printf "## Moduletest: %s\\n", {_quote(package)};',
        "",
    ]
    for name, body in tests.items():
        parts.append(f"subtest {_quote(name)} => sub {{")
        # Bodies are copied verbatim; heredoc terminators must stay at column 0.
        parts.append(body.rstrip("\n"))
        parts.append("};")
        parts.append("")
    parts.append("done_testing();")
    return "\n".join(parts) + "\n"
