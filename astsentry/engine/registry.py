"""
Registry for analyzers, pipelines and language adapters.

A Pipeline is an ordered, fixed set of analyzers run over one tree. The
Registry maps each language to its adapter and pipeline. Neither keeps
per-file state, so one registry can serve concurrent file analyses.
"""

import importlib
import logging
import threading
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from .types import Analyzer, AnalyzerContext, Issue, LanguageAdapter

logger = logging.getLogger(__name__)

RULES_PACKAGE = "astsentry.rules"


class Pipeline:
    """Ordered analyzers; issues are concatenated in registration order."""

    def __init__(self, analyzers: Iterable[Analyzer]):
        self._analyzers: Tuple[Analyzer, ...] = tuple(analyzers)

    @property
    def analyzers(self) -> Tuple[Analyzer, ...]:
        return self._analyzers

    def analyzer_ids(self) -> List[str]:
        return [analyzer.meta.id for analyzer in self._analyzers]

    def rule_ids(self) -> List[str]:
        ids: List[str] = []
        for analyzer in self._analyzers:
            for rule_id in analyzer.meta.rules:
                if rule_id not in ids:
                    ids.append(rule_id)
        return ids

    def for_language(self, language: str) -> "Pipeline":
        """Analyzers that declare language, or no languages at all, in order."""
        kept = [a for a in self._analyzers if not a.meta.langs or language in a.meta.langs]
        if len(kept) == len(self._analyzers):
            return self
        return Pipeline(kept)

    def analyze_module(self, tree: Any, file_path: str, source: str,
                       adapter: Optional[LanguageAdapter] = None,
                       config: Optional[Dict[str, Any]] = None) -> List[Issue]:
        """Run every analyzer over one tree and concatenate their issues."""
        issues: List[Issue] = []
        for analyzer in self._analyzers:
            ctx = AnalyzerContext(
                file_path=file_path,
                text=source,
                tree=tree,
                adapter=adapter,
                config=dict(config or {}),
            )
            issues.extend(analyzer.visit(ctx))
        return issues


def load_analyzers(module_names: Sequence[str], package: str = RULES_PACKAGE) -> List[Analyzer]:
    """Import rule modules in order and collect their RULES lists."""
    analyzers: List[Analyzer] = []
    for name in module_names:
        module = importlib.import_module(f"{package}.{name}")
        rules = getattr(module, "RULES", None)
        if not isinstance(rules, list):
            logger.warning("Rule module %s has no RULES list", module.__name__)
            continue
        for rule in rules:
            analyzers.append(rule() if isinstance(rule, type) else rule)
    return analyzers


class Registry:
    """Central registry for adapters and their pipelines."""

    def __init__(self):
        self._adapters: Dict[str, LanguageAdapter] = {}
        self._pipelines: Dict[str, Pipeline] = {}

    def register(self, adapter: LanguageAdapter, pipeline: Pipeline) -> None:
        """Register a language adapter with its pipeline. Later registrations win."""
        self._adapters[adapter.language_id] = adapter
        self._pipelines[adapter.language_id] = pipeline

    def get_adapter(self, language: str) -> Optional[LanguageAdapter]:
        return self._adapters.get(language)

    def get_pipeline(self, language: str) -> Optional[Pipeline]:
        return self._pipelines.get(language)

    def get_adapter_for_file(self, file_path: str) -> Optional[LanguageAdapter]:
        """Get adapter for a file based on its extension."""
        for adapter in self._adapters.values():
            if adapter.handles(file_path):
                return adapter
        return None

    def supported_extensions(self) -> Tuple[str, ...]:
        exts: List[str] = []
        for adapter in self._adapters.values():
            exts.extend(adapter.file_extensions)
        return tuple(exts)

    def list_supported_languages(self) -> List[str]:
        return list(self._adapters.keys())


def build_default_registry() -> Registry:
    """JavaScript and TypeScript share the script pipeline; Python and Kotlin have their own."""
    from ..rules import KOTLIN_RULE_MODULES, PYTHON_RULE_MODULES, SCRIPT_RULE_MODULES
    from .javascript_adapter import default_javascript_adapter
    from .kotlin_adapter import default_kotlin_adapter
    from .python_adapter import default_python_adapter
    from .typescript_adapter import default_typescript_adapter

    script_pipeline = Pipeline(load_analyzers(SCRIPT_RULE_MODULES))
    python_pipeline = Pipeline(load_analyzers(PYTHON_RULE_MODULES))
    kotlin_pipeline = Pipeline(load_analyzers(KOTLIN_RULE_MODULES))
    registry = Registry()
    for adapter, pipeline in (
        (default_javascript_adapter, script_pipeline),
        (default_typescript_adapter, script_pipeline),
        (default_python_adapter, python_pipeline),
        (default_kotlin_adapter, kotlin_pipeline),
    ):
        registry.register(adapter, pipeline.for_language(adapter.language_id))
    logger.debug("Registered languages: %s", registry.list_supported_languages())
    return registry


_global_registry: Optional[Registry] = None
_global_lock = threading.Lock()


def get_registry() -> Registry:
    """Get the shared default registry, building it on first use."""
    global _global_registry
    with _global_lock:
        if _global_registry is None:
            _global_registry = build_default_registry()
        return _global_registry
