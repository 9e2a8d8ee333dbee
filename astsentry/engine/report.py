"""
Human-readable rendering of an AnalysisResult.
"""

from typing import Dict, List

from .types import AnalysisResult, Severity

SEVERITY_ICONS: Dict[Severity, str] = {
    Severity.ERROR: "❌",
    Severity.WARNING: "⚠️",
    Severity.SUGGESTION: "💡",
}

MAX_SNIPPET = 80


def _snippet_line(snippet: str) -> str:
    first = snippet.splitlines()[0] if snippet else ""
    if len(first) > MAX_SNIPPET:
        first = first[:MAX_SNIPPET - 3] + "..."
    return first


def format_human(result: AnalysisResult, rules_count: int = 0) -> str:
    """Per-file issue listing followed by the run totals."""
    lines: List[str] = []
    header = f"Scanned {len(result.files) + len(result.failures)} files"
    if rules_count:
        header += f" with {rules_count} rules"
    lines.append(header)
    lines.append(f"Found {result.summary.total} issues")
    lines.append("")

    for analysis in result.files:
        if not analysis.issues:
            continue
        lines.append(f"📁 {analysis.file_path}")
        # most severe first; pipeline order is kept within a severity
        for issue in sorted(analysis.issues, key=lambda issue: issue.severity.rank):
            icon = SEVERITY_ICONS.get(issue.severity, "❓")
            lines.append(
                f"  {icon} {issue.line}:{issue.column} {issue.severity.value}: "
                f"{issue.message} ({issue.rule})"
            )
            if issue.code_snippet:
                lines.append(f"      {_snippet_line(issue.code_snippet)}")
        lines.append("")

    if result.failures:
        lines.append("Skipped files:")
        for failure in result.failures:
            lines.append(f"  {failure.file_path}: {failure.message}")
        lines.append("")

    summary = result.summary
    lines.append("📊 Summary:")
    lines.append(f"  Errors: {summary.error}")
    lines.append(f"  Warnings: {summary.warning}")
    lines.append(f"  Suggestions: {summary.suggestion}")
    lines.append(f"  Total: {summary.total}")
    return "\n".join(lines)
