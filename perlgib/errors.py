"""Exception taxonomy for extraction and test runs."""


class GibError(Exception):
    """Base class for all perlgib errors."""


class ExtractionError(GibError):
    """A single source file could not be turned into a module record."""

    def __init__(self, file_path: object, reason: str) -> None:
        """Initialize with the offending file and a human readable reason."""
        super().__init__(f"{reason}: {file_path}")
        self.file_path = file_path
        self.reason = reason


class MissingPackage(ExtractionError):
    """The source file declares no package."""

    def __init__(self, file_path: object) -> None:
        """Initialize for the given file."""
        super().__init__(file_path, "Module does not contain package")


class MalformedCommentBlock(ExtractionError):
    """A documentation comment block could not be classified."""


class UnreadableSource(ExtractionError):
    """The source file could not be read."""


class RunnerError(GibError):
    """The external test runner did not produce an exit status."""


class RunnerUnavailable(RunnerError):
    """The test runner executable could not be started."""


class RunnerTimeout(RunnerError):
    """The test runner did not finish within the configured timeout."""
