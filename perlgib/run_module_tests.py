"""Logic for running a module's synthesized test script."""

import logging
import subprocess
import tempfile
from collections.abc import Sequence
from pathlib import Path

from perlgib.doc_item import Module
from perlgib.errors import RunnerTimeout, RunnerUnavailable
from perlgib.synthesize_test_script import collect_tests, compose_test_script

logger = logging.getLogger(__name__)

DEFAULT_RUNNER = ("prove", "--verbose")


def _run(cmd: list[str], module: Module, timeout: float | None) -> int:
    logger.debug("Running: %s", " ".join(cmd))
    try:
        completed = subprocess.run(cmd, check=False, timeout=timeout)
    except OSError as exc:
        msg = f"Cannot start test runner {cmd[0]}: {exc}"
        raise RunnerUnavailable(msg) from exc
    except subprocess.TimeoutExpired as exc:
        msg = f"Tests of {module.name} did not finish within {timeout}s"
        raise RunnerTimeout(msg) from exc
    return completed.returncode


def run_module_tests(
    module: Module,
    library_path: Path,
    runner: Sequence[str] = DEFAULT_RUNNER,
    timeout: float | None = None,
) -> int | None:
    """Run the module's embedded tests and return the runner's exit status.

    The library path is put on the runner's ``@INC`` with ``-I``. Returns None
    without starting a process if the module has no tests. The temporary
    script is removed on every exit path.
    """
    tests = collect_tests(module)
    if not tests:
        return None

    script = compose_test_script(module.name, tests)
    fh = tempfile.NamedTemporaryFile(
        "w", suffix=".t", prefix="perlgib-", encoding="utf-8", delete=False
    )
    script_path = Path(fh.name)
    try:
        with fh:
            fh.write(script)
        cmd = [*runner, "-I", str(library_path), str(script_path)]
        return _run(cmd, module, timeout)
    finally:
        script_path.unlink(missing_ok=True)
