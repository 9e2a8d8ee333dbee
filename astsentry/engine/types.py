"""
Core types for the astsentry engine.

This module provides the issue model shared by the pipeline, the runner and
every rule analyzer, plus the analyzer contract and the language adapter
base class.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Protocol, Tuple

from .errors import ParseFailure
from .nodes import first_error_node
from .position import PositionResolver


NodeRange = Tuple[int, int]  # (start_byte, end_byte) 0-based, end exclusive


class Severity(str, Enum):
    """Closed severity taxonomy. Ordering is only used for display."""
    ERROR = "error"
    WARNING = "warning"
    SUGGESTION = "suggestion"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {Severity.ERROR: 0, Severity.WARNING: 1, Severity.SUGGESTION: 2}


class Category(str, Enum):
    """Concern area an issue belongs to (kebab-case on the wire)."""
    SECURITY = "security"
    BEST_PRACTICE = "best-practice"
    CODE_QUALITY = "code-quality"
    PERFORMANCE = "performance"
    MAINTAINABILITY = "maintainability"
    COMPLEXITY = "complexity"
    TYPE_ANNOTATION = "type-annotation"


@dataclass(frozen=True)
class Issue:
    """A single finding produced by a rule analyzer."""
    file_path: str
    line: int
    column: int
    message: str
    severity: Severity
    category: Category
    rule: str
    end_line: Optional[int] = None
    end_column: Optional[int] = None
    code_snippet: Optional[str] = None

    def _replace(self, **kwargs):
        """Provide NamedTuple-like _replace method."""
        return replace(self, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Wire form; absent optional fields are omitted."""
        data: Dict[str, Any] = {
            "file_path": self.file_path,
            "line": self.line,
            "column": self.column,
        }
        if self.end_line is not None:
            data["end_line"] = self.end_line
        if self.end_column is not None:
            data["end_column"] = self.end_column
        data["message"] = self.message
        data["severity"] = self.severity.value
        data["category"] = self.category.value
        data["rule"] = self.rule
        if self.code_snippet is not None:
            data["code_snippet"] = self.code_snippet
        return data


@dataclass
class SeveritySummary:
    """Per-severity counters. error + warning + suggestion == total always."""
    error: int = 0
    warning: int = 0
    suggestion: int = 0
    total: int = 0

    def add(self, severity: Severity) -> None:
        if severity == Severity.ERROR:
            self.error += 1
        elif severity == Severity.WARNING:
            self.warning += 1
        else:
            self.suggestion += 1
        self.total += 1

    def merge(self, other: "SeveritySummary") -> None:
        self.error += other.error
        self.warning += other.warning
        self.suggestion += other.suggestion
        self.total += other.total

    @classmethod
    def from_issues(cls, issues: Iterable[Issue]) -> "SeveritySummary":
        summary = cls()
        for issue in issues:
            summary.add(issue.severity)
        return summary

    def to_dict(self) -> Dict[str, int]:
        return {
            "error": self.error,
            "warning": self.warning,
            "suggestion": self.suggestion,
            "total": self.total,
        }


@dataclass
class FileAnalysis:
    """Issues for one file, with a summary that always equals their fold."""
    file_path: str
    issues: List[Issue] = field(default_factory=list)
    summary: SeveritySummary = field(default_factory=SeveritySummary)

    @classmethod
    def from_issues(cls, file_path: str, issues: Iterable[Issue]) -> "FileAnalysis":
        issues = list(issues)
        return cls(file_path=file_path, issues=issues, summary=SeveritySummary.from_issues(issues))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file_path": self.file_path,
            "issues": [issue.to_dict() for issue in self.issues],
            "summary": self.summary.to_dict(),
        }


@dataclass(frozen=True)
class FileFailure:
    """A file excluded from a run because it could not be analyzed."""
    file_path: str
    message: str


@dataclass
class AnalysisResult:
    """Run-wide result. The summary is the element-wise sum of file summaries."""
    files: List[FileAnalysis] = field(default_factory=list)
    summary: SeveritySummary = field(default_factory=SeveritySummary)
    failures: List[FileFailure] = field(default_factory=list)

    def add_file(self, analysis: FileAnalysis) -> None:
        self.files.append(analysis)
        self.summary.merge(analysis.summary)

    def add_failure(self, file_path: str, message: str) -> None:
        self.failures.append(FileFailure(file_path, message))

    def filter_severity(self, severity: Severity) -> "AnalysisResult":
        """Return a new result keeping only issues of the given severity."""
        filtered = AnalysisResult(failures=list(self.failures))
        for analysis in self.files:
            kept = [issue for issue in analysis.issues if issue.severity == severity]
            filtered.add_file(FileAnalysis.from_issues(analysis.file_path, kept))
        return filtered

    def to_dict(self) -> Dict[str, Any]:
        return {
            "files": [analysis.to_dict() for analysis in self.files],
            "summary": self.summary.to_dict(),
            "failures": [
                {"file_path": failure.file_path, "message": failure.message}
                for failure in self.failures
            ],
        }


@dataclass(frozen=True)
class AnalyzerMeta:
    """Metadata about a rule analyzer.

    Attributes:
        id: Analyzer identifier (e.g., "complexity")
        category: Default category for the issues it emits
        description: Human-readable description
        langs: Languages the analyzer is registered for
        rules: Rule ids the analyzer can emit
    """
    id: str
    category: Category
    description: str = ""
    langs: Tuple[str, ...] = ()
    rules: Tuple[str, ...] = ()


@dataclass
class AnalyzerContext:
    """Context passed to analyzers for a single file."""
    file_path: str
    text: str
    tree: Any
    adapter: Optional["LanguageAdapter"] = None
    config: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self._positions: Optional[PositionResolver] = None

    @property
    def language(self) -> Optional[str]:
        return self.adapter.language_id if self.adapter else None

    @property
    def root(self):
        return getattr(self.tree, "root_node", self.tree)

    @property
    def positions(self) -> PositionResolver:
        if self._positions is None:
            self._positions = PositionResolver(self.text)
        return self._positions

    def report(self, node, message: str, rule: str, severity: Severity,
               category: Category) -> Issue:
        """Build an Issue located at a node's byte span."""
        return self.report_span((node.start_byte, node.end_byte), message, rule, severity, category)

    def report_span(self, span: NodeRange, message: str, rule: str, severity: Severity,
                    category: Category) -> Issue:
        position = self.positions.resolve(span[0], span[1])
        return Issue(
            file_path=self.file_path,
            line=position.line,
            column=position.column,
            end_line=position.end_line,
            end_column=position.end_column,
            message=message,
            severity=severity,
            category=category,
            rule=rule,
            code_snippet=position.snippet,
        )


class Analyzer(Protocol):
    """Protocol for all rule analyzers.

    Analyzers are stateless: everything they track while walking a tree lives
    inside a single visit() call, so one instance can serve many files and
    threads at once.
    """
    meta: AnalyzerMeta

    def visit(self, ctx: AnalyzerContext) -> Iterable[Issue]:
        """Visit a file and return issues in traversal order."""
        ...


class LanguageAdapter(ABC):
    """Abstract base class for language adapters."""

    @property
    @abstractmethod
    def language_id(self) -> str:
        """Return the language identifier (e.g., 'python', 'typescript', 'javascript')."""
        pass

    @property
    @abstractmethod
    def file_extensions(self) -> Tuple[str, ...]:
        """Return supported file extensions (e.g., ('.py',), ('.ts', '.tsx'))."""
        pass

    @abstractmethod
    def parse(self, text: str, file_path: Optional[str] = None) -> Any:
        """Parse text and return a Tree-sitter tree."""
        pass

    def check_syntax(self, tree: Any, text: str, file_path: str) -> None:
        """Raise ParseFailure when the tree could not be produced cleanly.

        Adapters whose analyzers report syntax errors as issues override this
        with a no-op.
        """
        root = getattr(tree, "root_node", None)
        if root is None:
            raise ParseFailure(file_path, 1, 1, "parser produced no tree")
        if not root.has_error:
            return
        bad = first_error_node(root) or root
        position = PositionResolver(text).resolve(bad.start_byte, bad.end_byte)
        detail = "missing " + bad.type if bad.is_missing else "unexpected syntax"
        raise ParseFailure(file_path, position.line, position.column, detail)

    def handles(self, file_path: str) -> bool:
        return file_path.lower().endswith(self.file_extensions)
