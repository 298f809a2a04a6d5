"""
Configuration loading and management.
Loads YAML config files and merges sanitizer defaults with user overrides.
"""

import dataclasses
import yaml
from dataclasses import dataclass, field, fields
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional
import logging

from .models import FlattenRules


logger = logging.getLogger(__name__)


DEFAULT_SANITIZER_OPTIONS = MappingProxyType({
    'recover': True,
    'resolve_entities': False,
    'no_network': True,
    'remove_blank_text': True,
    'remove_comments': True,
    'remove_pis': True,
    'huge_tree': True,
    'strip_control_chars': True,
    'ascii_chars': False,
})


def merge_config(defaults: Mapping[str, Any], overrides: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Merge override options over defaults.

    Args:
        defaults: Default options
        overrides: Caller options; these win on key collision

    Returns:
        New merged dict (inputs are not modified)
    """
    result = dict(defaults)
    for key, value in (overrides or {}).items():
        result[key] = value
    return result


@dataclass(frozen=True)
class ConverterConfig:
    """Immutable settings for one conversion."""
    source: Optional[str] = None
    source_encoding: str = 'utf-8'
    sanitizer_options: Mapping[str, Any] = field(default_factory=dict)  # Overrides only
    case_folding: bool = False
    skip_white: bool = True
    rules: FlattenRules = field(default_factory=FlattenRules)

    def __post_init__(self):
        # Freeze the overrides so the config cannot change after construction
        object.__setattr__(self, 'sanitizer_options',
                           MappingProxyType(dict(self.sanitizer_options)))

    @property
    def effective_rules(self) -> FlattenRules:
        """Rules matching the tokenizer's tag case."""
        return self.rules.folded() if self.case_folding else self.rules

    def with_sanitizer_options(self, overrides: Mapping[str, Any]) -> 'ConverterConfig':
        """Return a copy with additional sanitizer overrides (new values win)."""
        merged = merge_config(self.sanitizer_options, overrides)
        return dataclasses.replace(self, sanitizer_options=merged)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'ConverterConfig':
        """
        Build a config from a parsed YAML mapping.

        Raises:
            ValueError: If the `tags` section names an unknown rule or a
                non-string tag
        """
        tags = data.get('tags') or {}
        known = {f.name for f in fields(FlattenRules)}
        unknown = set(tags) - known
        if unknown:
            raise ValueError(f"Unknown tag settings: {', '.join(sorted(unknown))}")
        not_text = sorted(name for name, value in tags.items() if not isinstance(value, str))
        if not_text:
            raise ValueError(f"Tag settings must be strings: {', '.join(not_text)}")

        tokenizer_cfg = data.get('tokenizer') or {}
        source = data.get('source')

        return cls(
            source=str(source) if source else None,
            source_encoding=data.get('source_encoding', 'utf-8'),
            sanitizer_options=data.get('sanitizer') or {},
            case_folding=bool(tokenizer_cfg.get('case_folding', False)),
            skip_white=bool(tokenizer_cfg.get('skip_white', True)),
            rules=FlattenRules(**tags),
        )


class ConfigLoader:
    """Loads and caches configuration from a YAML file."""

    def __init__(self, config_path: Path):
        self.config_path = Path(config_path)
        self._cache = {}

    def _load_yaml(self, filepath: Path) -> Dict[str, Any]:
        """Load a YAML file and cache it."""
        if filepath in self._cache:
            return self._cache[filepath]

        if not filepath.exists():
            raise FileNotFoundError(f"Config file not found: {filepath}")

        logger.info(f"Loading config: {filepath}")
        with open(filepath, 'r') as f:
            data = yaml.safe_load(f) or {}

        self._cache[filepath] = data
        return data

    def load(self) -> Dict[str, Any]:
        """Load the raw configuration mapping."""
        return self._load_yaml(self.config_path)

    def load_converter_config(self) -> ConverterConfig:
        """Load and parse conversion settings."""
        config = ConverterConfig.from_dict(self.load())
        logger.info(f"Loaded converter config with {len(config.sanitizer_options)} sanitizer overrides")
        return config

    def load_logging_config(self) -> Dict[str, Any]:
        """Load the `logging` section."""
        return dict(self.load().get('logging') or {})

    def load_export_config(self) -> Dict[str, Any]:
        """Load the `export` section."""
        return dict(self.load().get('export') or {})

    def clear_cache(self):
        """Clear configuration cache (useful for testing or reload)."""
        self._cache.clear()
        logger.debug("Config cache cleared")
