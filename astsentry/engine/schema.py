"""
JSON schema validation for astsentry reports.

This module provides JSON schema definitions and validation helpers so the
JSON report conforms to a well-defined contract for downstream tools.
"""

import json
from typing import Any, Dict, List

import jsonschema

from .types import AnalysisResult, Category, Severity

REPORT_VERSION = "1"

SUMMARY_JSON_SCHEMA = {
    "type": "object",
    "properties": {
        "error": {"type": "integer", "minimum": 0},
        "warning": {"type": "integer", "minimum": 0},
        "suggestion": {"type": "integer", "minimum": 0},
        "total": {"type": "integer", "minimum": 0},
    },
    "required": ["error", "warning", "suggestion", "total"],
    "additionalProperties": False,
}

# JSON Schema for a single Issue
ISSUE_JSON_SCHEMA = {
    "type": "object",
    "properties": {
        "file_path": {
            "type": "string",
            "description": "Path of the analyzed file, as given to the runner"
        },
        "line": {"type": "integer", "minimum": 1},
        "column": {"type": "integer", "minimum": 1},
        "end_line": {"type": "integer", "minimum": 1},
        "end_column": {"type": "integer", "minimum": 1},
        "message": {
            "type": "string",
            "description": "Human-readable description of the issue"
        },
        "severity": {
            "type": "string",
            "enum": [s.value for s in Severity],
        },
        "category": {
            "type": "string",
            "enum": [c.value for c in Category],
        },
        "rule": {
            "type": "string",
            "description": "Rule identifier that generated this issue"
        },
        "code_snippet": {
            "type": "string",
            "description": "Source text covered by the issue"
        },
    },
    "required": ["file_path", "line", "column", "message", "severity", "category", "rule"],
    "additionalProperties": False,
}

FILE_JSON_SCHEMA = {
    "type": "object",
    "properties": {
        "file_path": {"type": "string"},
        "issues": {"type": "array", "items": ISSUE_JSON_SCHEMA},
        "summary": SUMMARY_JSON_SCHEMA,
    },
    "required": ["file_path", "issues", "summary"],
    "additionalProperties": False,
}

# JSON Schema for the complete report
REPORT_JSON_SCHEMA = {
    "type": "object",
    "properties": {
        "version": {"type": "string"},
        "files": {"type": "array", "items": FILE_JSON_SCHEMA},
        "summary": SUMMARY_JSON_SCHEMA,
        "failures": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "file_path": {"type": "string"},
                    "message": {"type": "string"},
                },
                "required": ["file_path", "message"],
                "additionalProperties": False,
            },
        },
    },
    "required": ["files", "summary"],
}


def validate_issues(issues: List[Dict[str, Any]]) -> List[str]:
    """
    Validate a list of issue dicts against the issue schema.

    Returns:
        List of validation errors (empty if valid)
    """
    validator = jsonschema.Draft7Validator(ISSUE_JSON_SCHEMA)
    errors = []
    for i, issue in enumerate(issues):
        for error in validator.iter_errors(issue):
            errors.append(f"Issue {i}: {error.message}")
    return errors


def validate_report(report: Dict[str, Any]) -> List[str]:
    """
    Validate a JSON report against the schema, including summary arithmetic.

    Args:
        report: Report dictionary as produced by result_to_dict()

    Returns:
        List of validation errors (empty if valid)
    """
    validator = jsonschema.Draft7Validator(REPORT_JSON_SCHEMA)
    errors = [f"Report validation: {error.message}" for error in validator.iter_errors(report)]
    if errors:
        return errors

    totals = {"error": 0, "warning": 0, "suggestion": 0, "total": 0}
    for entry in report["files"]:
        counted = {"error": 0, "warning": 0, "suggestion": 0}
        for issue in entry["issues"]:
            counted[issue["severity"]] += 1
        counted["total"] = len(entry["issues"])
        if counted != entry["summary"]:
            errors.append(f"File {entry['file_path']}: summary does not match its issues")
        for key in totals:
            totals[key] += entry["summary"][key]
    if totals != report["summary"]:
        errors.append("Report summary is not the sum of the file summaries")
    return errors


def result_to_dict(result: AnalysisResult) -> Dict[str, Any]:
    report = result.to_dict()
    report["version"] = REPORT_VERSION
    return report


def result_to_json(result: AnalysisResult, indent: int = 2) -> str:
    return json.dumps(result_to_dict(result), indent=indent)
