"""Shared helpers: build real analyzer contexts from source snippets."""

from astsentry.engine.javascript_adapter import default_javascript_adapter
from astsentry.engine.kotlin_adapter import default_kotlin_adapter
from astsentry.engine.python_adapter import default_python_adapter
from astsentry.engine.types import AnalyzerContext
from astsentry.engine.typescript_adapter import default_typescript_adapter

ADAPTERS = {
    "javascript": default_javascript_adapter,
    "typescript": default_typescript_adapter,
    "python": default_python_adapter,
    "kotlin": default_kotlin_adapter,
}

EXTENSIONS = {"javascript": "js", "typescript": "ts", "python": "py", "kotlin": "kt"}


def create_test_context(code: str, language: str = "javascript", config: dict = None,
                        file_path: str = None) -> AnalyzerContext:
    """Parse code with the real adapter and wrap it in an AnalyzerContext."""
    adapter = ADAPTERS[language]
    file_path = file_path or f"test.{EXTENSIONS[language]}"
    tree = adapter.parse(code, file_path=file_path)
    return AnalyzerContext(
        file_path=file_path,
        text=code,
        tree=tree,
        adapter=adapter,
        config=config or {},
    )


def run_analyzer(analyzer, code: str, language: str = "javascript", config: dict = None,
                 file_path: str = None):
    return list(analyzer.visit(create_test_context(code, language, config, file_path)))


def by_rule(issues, rule: str):
    return [issue for issue in issues if issue.rule == rule]
