"""
astsentry tree-sitter engine package.

This package provides the issue model, the analyzer contract, language
adapters, the analyzer pipelines and the runner.
"""

from .types import (
    Severity, Category, Issue, SeveritySummary, FileAnalysis, AnalysisResult,
    AnalyzerMeta, AnalyzerContext, Analyzer, LanguageAdapter, NodeRange
)

from .errors import (
    AnalyzerError, IOFailure, ParseFailure, InvalidInput, InternalQueryError, AnalysisFailure
)

from .registry import (
    Pipeline, Registry, load_analyzers, build_default_registry, get_registry
)

from .config import (
    EngineConfig, load_config, get_default_config, find_config_file, get_rule_severity
)

__all__ = [
    # Types
    "Severity", "Category", "Issue", "SeveritySummary", "FileAnalysis", "AnalysisResult",
    "AnalyzerMeta", "AnalyzerContext", "Analyzer", "LanguageAdapter", "NodeRange",

    # Errors
    "AnalyzerError", "IOFailure", "ParseFailure", "InvalidInput", "InternalQueryError", "AnalysisFailure",

    # Registry
    "Pipeline", "Registry", "load_analyzers", "build_default_registry", "get_registry",

    # Config
    "EngineConfig", "load_config", "get_default_config", "find_config_file", "get_rule_severity"
]
