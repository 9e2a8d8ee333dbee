"""
CLI runner for the astsentry engine.

This module discovers files, parses them with the registered language
adapters, runs the analyzer pipelines and renders the aggregated result.
"""

import argparse
import concurrent.futures
import logging
import os
import sys
from typing import List, Optional, Sequence

from .config import EngineConfig, find_config_file, get_default_config, get_rule_severity, load_config
from .errors import AnalysisFailure, AnalyzerError, InvalidInput, IOFailure
from .registry import Registry, get_registry
from .report import format_human
from .schema import result_to_dict, result_to_json, validate_report
from .types import AnalysisResult, FileAnalysis, Issue, LanguageAdapter, Severity

logger = logging.getLogger(__name__)


def _apply_config(issues: List[Issue], config: EngineConfig) -> List[Issue]:
    """Drop disabled rules and apply severity overrides."""
    kept = []
    for issue in issues:
        if config.is_rule_disabled(issue.rule):
            continue
        severity = get_rule_severity(issue.rule, config)
        if severity is not None and severity != issue.severity:
            issue = issue._replace(severity=severity)
        kept.append(issue)
    return kept


def analyze_source(source: str, file_path: str, registry: Optional[Registry] = None,
                   config: Optional[EngineConfig] = None,
                   adapter: Optional[LanguageAdapter] = None) -> FileAnalysis:
    """Analyze in-memory source text as if it were the file at file_path.

    Raises:
        InvalidInput: no adapter handles the file's extension
        ParseFailure: the adapter rejects the syntax tree
    """
    registry = registry or get_registry()
    config = config or get_default_config()
    adapter = adapter or registry.get_adapter_for_file(file_path)
    if adapter is None:
        raise InvalidInput(file_path, "unsupported file type")
    pipeline = registry.get_pipeline(adapter.language_id)
    if pipeline is None:
        raise InvalidInput(file_path, f"no analyzers registered for {adapter.language_id}")

    tree = adapter.parse(source, file_path=file_path)
    adapter.check_syntax(tree, source, file_path)
    issues = pipeline.analyze_module(tree, file_path, source, adapter, config.analyzer_config())
    return FileAnalysis.from_issues(file_path, _apply_config(issues, config))


def analyze_file(file_path: str, registry: Optional[Registry] = None,
                 config: Optional[EngineConfig] = None) -> FileAnalysis:
    """Read and analyze a single file.

    Any unexpected exception is re-raised as AnalysisFailure, so callers only
    ever see AnalyzerError subclasses.
    """
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise IOFailure(file_path, str(e)) from e
    try:
        return analyze_source(content, file_path, registry, config)
    except AnalyzerError:
        raise
    except Exception as e:
        logger.warning("Unexpected error analyzing %s", file_path, exc_info=True)
        raise AnalysisFailure(file_path, e) from e


def collect_files(root: str, registry: Optional[Registry] = None,
                  config: Optional[EngineConfig] = None) -> List[str]:
    """Collect supported files under root, sorted.

    Hidden directories and configured excludes (node_modules by default) are
    not descended into.
    """
    registry = registry or get_registry()
    config = config or get_default_config()
    extensions = registry.supported_extensions()
    excluded = set(config.exclude) | {"node_modules"}

    files = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(
            d for d in dirnames if not d.startswith(".") and d not in excluded
        )
        for name in filenames:
            if name.lower().endswith(extensions):
                files.append(os.path.join(dirpath, name))
    files.sort()
    logger.info("Found %d files to analyze under %s", len(files), root)
    return files


def run_analysis(files: Sequence[str], registry: Optional[Registry] = None,
                 config: Optional[EngineConfig] = None, jobs: int = 1) -> AnalysisResult:
    """Analyze files, optionally in parallel, folding results in input order.

    A file that fails is logged, recorded as a failure and left out of the
    result; the remaining files are still analyzed.
    """
    registry = registry or get_registry()
    config = config or get_default_config()
    result = AnalysisResult()

    def record(file_path: str, outcome) -> None:
        if isinstance(outcome, AnalyzerError):
            logger.warning("Failed to process %s: %s", file_path, outcome)
            result.add_failure(file_path, str(outcome))
        else:
            result.add_file(outcome)

    def analyze_one(file_path: str):
        try:
            return analyze_file(file_path, registry, config)
        except AnalyzerError as e:
            return e
        except Exception as e:
            return AnalysisFailure(file_path, e)

    if jobs <= 1 or len(files) <= 1:
        for file_path in files:
            record(file_path, analyze_one(file_path))
        return result

    with concurrent.futures.ThreadPoolExecutor(max_workers=jobs) as executor:
        futures = [executor.submit(analyze_one, file_path) for file_path in files]
        # Collect results in order
        for file_path, future in zip(files, futures):
            record(file_path, future.result())
    return result


def analyze_path(path: str, registry: Optional[Registry] = None,
                 config: Optional[EngineConfig] = None, jobs: Optional[int] = None) -> AnalysisResult:
    """Analyze a file or a directory tree.

    Errors for a single file propagate; errors inside a directory run are
    isolated per file.
    """
    registry = registry or get_registry()
    config = config or get_default_config()

    if os.path.isfile(path):
        if registry.get_adapter_for_file(path) is None:
            raise InvalidInput(path, "unsupported file type")
        result = AnalysisResult()
        result.add_file(analyze_file(path, registry, config))
        return result
    if os.path.isdir(path):
        files = collect_files(path, registry, config)
        return run_analysis(files, registry, config, jobs if jobs is not None else config.jobs)
    raise InvalidInput(path, "no such file or directory")


def _resolve_jobs(requested: Optional[int], config: EngineConfig) -> int:
    jobs = config.jobs if requested is None else requested
    if jobs == 0:
        jobs = min(4, os.cpu_count() or 1)
    return max(1, jobs)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point. Returns the process exit code."""
    parser = argparse.ArgumentParser(
        prog="astsentry",
        description="Syntax-tree based static analysis for JavaScript, TypeScript, Python and Kotlin",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  astsentry src/
  astsentry app.ts --format json --validate
  astsentry frontend/ --jobs 4 --severity warning --strict
        """
    )

    parser.add_argument(
        "path",
        help="File or directory to analyze"
    )

    parser.add_argument(
        "--format",
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable report) or human (default)"
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 when any issue is reported"
    )

    parser.add_argument(
        "--severity",
        choices=[s.value for s in Severity],
        help="Only report issues of this severity"
    )

    parser.add_argument(
        "--config",
        help="Path to configuration file"
    )

    parser.add_argument(
        "--jobs",
        type=int,
        default=None,
        help="Number of parallel jobs (0=auto, 1=sequential, N=parallel)"
    )

    parser.add_argument(
        "--validate",
        action="store_true",
        help="Validate JSON output against schema"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    config_path = args.config or find_config_file(args.path)
    config = load_config(config_path)
    logger.info("Using config: %s", config_path or "defaults")

    registry = get_registry()
    try:
        result = analyze_path(args.path, registry, config, _resolve_jobs(args.jobs, config))
    except AnalyzerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.severity:
        result = result.filter_severity(Severity(args.severity))

    if args.format == "json":
        if args.validate:
            errors = validate_report(result_to_dict(result))
            if errors:
                print("JSON validation errors:", file=sys.stderr)
                for error in errors:
                    print(f"  {error}", file=sys.stderr)
                return 2
        print(result_to_json(result))
    else:
        rules_count = len({
            rule
            for language in registry.list_supported_languages()
            for rule in registry.get_pipeline(language).rule_ids()
        })
        print(format_human(result, rules_count))

    if args.strict and result.summary.total > 0:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
