"""
Configuration management for the astsentry engine.

This module provides configuration loading with sensible defaults for
thresholds, severity overrides, disabled rules and discovery excludes.
"""

import copy
import fnmatch
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import yaml

from .types import Severity

logger = logging.getLogger(__name__)

CONFIG_NAMES = [".astsentry.yml", ".astsentry.yaml", "astsentry.yml", "astsentry.yaml"]

DEFAULT_THRESHOLDS: Dict[str, int] = {
    "max_complexity": 10,
    "max_depth": 4,
    "max_statements": 50,
    "max_params": 5,
    "max_string_length": 50,
    "duplicate_string_threshold": 3,
}

DEFAULT_EXCLUDE = ["node_modules", "dist", "build", "coverage"]


@dataclass
class EngineConfig:
    """Configuration for the astsentry engine."""

    # Numeric limits handed to analyzers through AnalyzerContext.config
    thresholds: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_THRESHOLDS))

    # Rule severity overrides (rule_id -> severity)
    rule_severities: Dict[str, str] = field(default_factory=dict)

    # fnmatch patterns over rule ids
    disabled_rules: List[str] = field(default_factory=list)

    # Directory names skipped during discovery
    exclude: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDE))

    jobs: int = 1

    def is_rule_disabled(self, rule_id: str) -> bool:
        return any(fnmatch.fnmatchcase(rule_id, pattern) for pattern in self.disabled_rules)

    def analyzer_config(self) -> Dict[str, Any]:
        """Per-file config dict passed to analyzers."""
        return dict(self.thresholds)


def _defaults() -> Dict[str, Any]:
    return {
        "thresholds": dict(DEFAULT_THRESHOLDS),
        "rule_severities": {},
        "disabled_rules": [],
        "exclude": list(DEFAULT_EXCLUDE),
        "jobs": 1,
    }


def _merge(defaults: Dict[str, Any], file_config: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(defaults)
    for key, value in file_config.items():
        if key not in merged:
            logger.debug("Ignoring unknown config key: %s", key)
            continue
        if key == "thresholds":
            if not isinstance(value, dict):
                raise ValueError("thresholds must be a mapping")
            for name, limit in value.items():
                if name not in DEFAULT_THRESHOLDS:
                    logger.debug("Ignoring unknown threshold: %s", name)
                    continue
                merged["thresholds"][name] = int(limit)
        elif key == "rule_severities":
            if not isinstance(value, dict):
                raise ValueError("rule_severities must be a mapping")
            for rule_id, severity in value.items():
                # raises ValueError for names outside the taxonomy
                merged["rule_severities"][rule_id] = Severity(str(severity).lower()).value
        elif key in ("disabled_rules", "exclude"):
            if not isinstance(value, list):
                raise ValueError(f"{key} must be a list")
            merged[key] = [str(item) for item in value]
        elif key == "jobs":
            merged["jobs"] = max(1, int(value))
    return merged


def load_config(config_path: Optional[str] = None) -> EngineConfig:
    """
    Load configuration from file or use defaults.

    Args:
        config_path: Path to config file (YAML). If None, uses defaults.

    Returns:
        EngineConfig instance
    """
    defaults = _defaults()

    if config_path and os.path.exists(config_path):
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                file_config = yaml.safe_load(f) or {}
            if not isinstance(file_config, dict):
                raise ValueError("top level must be a mapping")
            merged = _merge(defaults, file_config)
            logger.debug("Loaded config from %s", config_path)
            return EngineConfig(**merged)
        except (OSError, yaml.YAMLError, ValueError, TypeError) as e:
            logger.warning("Failed to load config from %s: %s. Using default configuration.", config_path, e)

    return EngineConfig(**defaults)


def get_default_config() -> EngineConfig:
    """Get default configuration without loading from file."""
    return load_config(None)


def find_config_file(start_path: str = ".") -> Optional[str]:
    """
    Find configuration file by walking up the directory tree.

    Looks for files in this order:
    1. .astsentry.yml
    2. .astsentry.yaml
    3. astsentry.yml
    4. astsentry.yaml

    Args:
        start_path: File or directory to start searching from

    Returns:
        Path to config file or None if not found
    """
    current_path = os.path.abspath(start_path)
    if os.path.isfile(current_path):
        current_path = os.path.dirname(current_path)

    while True:
        for config_name in CONFIG_NAMES:
            config_path = os.path.join(current_path, config_name)
            if os.path.isfile(config_path):
                return config_path

        parent_path = os.path.dirname(current_path)
        if parent_path == current_path:
            break
        current_path = parent_path

    return None


def get_rule_severity(rule_id: str, config: EngineConfig,
                      default_severity: Optional[Severity] = None) -> Optional[Severity]:
    """
    Get the configured severity for a rule, falling back to default.

    Args:
        rule_id: Rule identifier (e.g., "eqeqeq")
        config: Engine configuration
        default_severity: Fallback severity if not configured

    Returns:
        The overriding Severity, or default_severity
    """
    if config.rule_severities and rule_id in config.rule_severities:
        return Severity(config.rule_severities[rule_id])
    return default_severity
