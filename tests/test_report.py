"""Tests for the human-readable report."""

from astsentry.engine.report import format_human
from astsentry.engine.types import AnalysisResult, Category, FileAnalysis, Issue, Severity


def make_issue(severity: Severity, rule: str, line: int) -> Issue:
    return Issue(
        file_path="app.js",
        line=line,
        column=1,
        message=f"{rule} message",
        severity=severity,
        category=Category.BEST_PRACTICE,
        rule=rule,
        code_snippet="var x = 1;",
    )


class TestFormatHuman:

    def setup_method(self):
        self.result = AnalysisResult()
        self.result.add_file(FileAnalysis.from_issues("app.js", [
            make_issue(Severity.SUGGESTION, "no-var", 1),
            make_issue(Severity.WARNING, "eqeqeq", 2),
            make_issue(Severity.ERROR, "no-eval", 3),
            make_issue(Severity.WARNING, "no-console", 4),
        ]))
        self.result.add_failure("broken.js", "Parse error in broken.js at 1:1: unexpected syntax")

    def test_header_and_summary(self):
        out = format_human(self.result, rules_count=12)
        lines = out.splitlines()
        assert lines[0] == "Scanned 2 files with 12 rules"
        assert lines[1] == "Found 4 issues"
        assert "  Errors: 1" in lines
        assert "  Warnings: 2" in lines
        assert "  Suggestions: 1" in lines
        assert lines[-1] == "  Total: 4"

    def test_issues_listed_most_severe_first(self):
        out = format_human(self.result)
        order = ["no-eval", "eqeqeq", "no-console", "no-var"]
        positions = [out.index(f"({rule})") for rule in order]
        assert positions == sorted(positions)
        # the result itself keeps pipeline order
        assert [i.rule for i in self.result.files[0].issues] == ["no-var", "eqeqeq", "no-eval", "no-console"]

    def test_skipped_files(self):
        out = format_human(self.result)
        assert "Skipped files:" in out
        assert "  broken.js: Parse error" in out

    def test_clean_file_is_not_listed(self):
        result = AnalysisResult()
        result.add_file(FileAnalysis.from_issues("clean.js", []))
        out = format_human(result)
        assert "clean.js" not in out
        assert out.startswith("Scanned 1 files\nFound 0 issues")
