"""
Error taxonomy for the astsentry engine.

Rule analyzers never raise these; they come from reading, parsing and path
validation in the runner and adapters.
"""


class AnalyzerError(Exception):
    """Base class for engine failures that abort the analysis of a file."""


class IOFailure(AnalyzerError):
    """A file could not be read."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        detail = f": {reason}" if reason else ""
        super().__init__(f"Failed to read {path}{detail}")


class ParseFailure(AnalyzerError):
    """A syntax tree could not be produced for a file."""

    def __init__(self, path: str, line: int, column: int, message: str):
        self.path = path
        self.line = line
        self.column = column
        self.message = message
        super().__init__(f"Parse error in {path} at {line}:{column}: {message}")


class InvalidInput(AnalyzerError):
    """A path does not exist or is of an unsupported type."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid path {path}: {reason}")


class InternalQueryError(AnalyzerError):
    """A structural query failed to compile against the active grammar."""


class AnalysisFailure(AnalyzerError):
    """An unexpected error escaped while analyzing a file."""

    def __init__(self, path: str, cause: BaseException):
        self.path = path
        self.cause = cause
        super().__init__(f"Analysis of {path} failed: {type(cause).__name__}: {cause}")
