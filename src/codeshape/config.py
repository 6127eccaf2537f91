"""Configuration loading and management for codeshape.

Configuration sources are merged in priority order:
    1. Defaults (defined in the dataclasses below)
    2. Global config (~/.codeshape.toml)
    3. Project config (./codeshape.toml)
    4. Explicit config file
    5. Environment variables (CODESHAPE_* prefix)
    6. Overrides passed as kwargs (typically from CLI flags)

A TOML file holds top-level analysis keys plus one table per analyzer::

    max_scan_depth = 8

    [dependencies]
    max_circular_depth = 12
    path_aliases = { "@/" = "src/" }

    [size]
    threshold = 300

    [responsibility]
    max_responsibilities = 3

Example:
    >>> config = load_config(size={"threshold": 250})
    >>> config.size.threshold
    250
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

DEFAULT_INCLUDE_PATTERNS = ["**/*.ts", "**/*.tsx", "**/*.js", "**/*.jsx"]

DEFAULT_EXCLUDE_PATTERNS = [
    "**/node_modules/**",
    "**/.next/**",
    "**/dist/**",
    "**/build/**",
    "**/.git/**",
    "**/coverage/**",
]


@dataclass(frozen=True)
class DependencyConfig:
    """Dependency graph settings.

    Attributes:
        max_circular_depth: Deepest DFS stack explored while looking for cycles
        exclude_patterns: Glob patterns pruned from directory scans
        include_external_deps: Keep bare package imports as leaf graph nodes
        unused_import_threshold: Unused imports tolerated before raising an issue
        path_aliases: Specifier prefix rewrites, resolved against the project root
    """

    max_circular_depth: int = 10
    exclude_patterns: list[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDE_PATTERNS))
    include_external_deps: bool = False
    unused_import_threshold: int = 0
    path_aliases: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.max_circular_depth < 2:
            raise InvalidConfigError(
                "max_circular_depth", self.max_circular_depth, "a cycle needs at least 2 files"
            )
        if self.unused_import_threshold < 0:
            raise InvalidConfigError(
                "unused_import_threshold", self.unused_import_threshold, "must be non-negative"
            )


@dataclass(frozen=True)
class FileSizeConfig:
    """Effective-line counting and the oversize threshold."""

    threshold: int = 400
    exclude_comments: bool = True
    exclude_empty_lines: bool = True
    exclude_imports: bool = False

    def __post_init__(self) -> None:
        if self.threshold < 1:
            raise InvalidConfigError("threshold", self.threshold, "must be at least 1")


@dataclass(frozen=True)
class ResponsibilityConfig:
    """Responsibility classification settings.

    ``enable_heuristics`` turns on the name-keyword categories (utility,
    configuration, interaction handlers). ``strict_mode`` tolerates one
    responsibility fewer before a file is flagged.
    """

    max_responsibilities: int = 2
    enable_heuristics: bool = True
    strict_mode: bool = False

    def __post_init__(self) -> None:
        if self.max_responsibilities < 1:
            raise InvalidConfigError(
                "max_responsibilities", self.max_responsibilities, "must be at least 1"
            )

    @property
    def effective_max(self) -> int:
        if self.strict_mode:
            return max(1, self.max_responsibilities - 1)
        return self.max_responsibilities


@dataclass(frozen=True)
class AnalysisConfig:
    """Top-level configuration handed to an analysis session."""

    include_patterns: list[str] = field(default_factory=lambda: list(DEFAULT_INCLUDE_PATTERNS))
    max_scan_depth: int = 10
    verbosity: Verbosity = "normal"

    dependencies: DependencyConfig = field(default_factory=DependencyConfig)
    size: FileSizeConfig = field(default_factory=FileSizeConfig)
    responsibility: ResponsibilityConfig = field(default_factory=ResponsibilityConfig)

    def __post_init__(self) -> None:
        if self.max_scan_depth < 0:
            raise InvalidConfigError("max_scan_depth", self.max_scan_depth, "must be non-negative")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError(
                "verbosity", self.verbosity, "expected quiet, normal or verbose"
            )
        if not self.include_patterns:
            raise InvalidConfigError("include_patterns", self.include_patterns, "must not be empty")

    def with_size(self, **changes: Any) -> AnalysisConfig:
        """Return a copy with updated size settings."""
        return replace(self, size=replace(self.size, **changes))

    def with_dependencies(self, **changes: Any) -> AnalysisConfig:
        """Return a copy with updated dependency settings."""
        return replace(self, dependencies=replace(self.dependencies, **changes))

    def with_responsibility(self, **changes: Any) -> AnalysisConfig:
        """Return a copy with updated responsibility settings."""
        return replace(self, responsibility=replace(self.responsibility, **changes))


# TOML table / env prefix -> nested config class
_SECTIONS: dict[str, type] = {
    "dependencies": DependencyConfig,
    "size": FileSizeConfig,
    "responsibility": ResponsibilityConfig,
}


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides. Section overrides are dicts
            (``size={"threshold": 300}``); ``verbose``/``quiet`` flags
            are folded into ``verbosity``.

    Returns:
        Validated AnalysisConfig instance

    Raises:
        ConfigurationError: If a config file is missing or invalid, or a
            value fails validation
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / ".codeshape.toml"
    if global_config.exists():
        _merge(merged, _load_toml_file(global_config))

    project_config = Path.cwd() / "codeshape.toml"
    if project_config.exists():
        _merge(merged, _load_toml_file(project_config))

    if config_file is not None:
        config_file = Path(config_file)
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        _merge(merged, _load_toml_file(config_file))

    _merge(merged, _load_env_vars())

    if "verbose" in overrides:
        if overrides.pop("verbose"):
            overrides["verbosity"] = "verbose"
    if "quiet" in overrides:
        if overrides.pop("quiet"):
            overrides["verbosity"] = "quiet"
    _merge(merged, overrides)

    for section, section_cls in _SECTIONS.items():
        value = merged.pop(section, None)
        if value is None:
            continue
        if isinstance(value, section_cls):
            merged[section] = value
        elif isinstance(value, dict):
            try:
                merged[section] = section_cls(**value)
            except TypeError as e:
                raise ConfigurationError(f"Invalid [{section}] config: {e}")
        else:
            raise InvalidConfigError(section, value, "expected a table")

    try:
        return AnalysisConfig(**merged)
    except TypeError as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def _merge(target: dict[str, Any], source: dict[str, Any]) -> None:
    """Merge ``source`` into ``target``; section tables merge key by key."""
    for key, value in source.items():
        if key in _SECTIONS and isinstance(value, dict) and isinstance(target.get(key), dict):
            target[key] = {**target[key], **value}
        elif key in _SECTIONS and isinstance(value, dict):
            target[key] = dict(value)
        else:
            target[key] = value


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from CODESHAPE_* environment variables.

    Top-level scalars use ``CODESHAPE_<FIELD>`` (``CODESHAPE_MAX_SCAN_DEPTH``);
    section scalars use ``CODESHAPE_<SECTION>_<FIELD>``
    (``CODESHAPE_SIZE_THRESHOLD``, ``CODESHAPE_DEPENDENCIES_INCLUDE_EXTERNAL_DEPS``).
    List and dict fields are not settable from the environment.
    """
    result: dict[str, Any] = {}
    result.update(_env_for(AnalysisConfig, "CODESHAPE_"))
    for section, section_cls in _SECTIONS.items():
        values = _env_for(section_cls, f"CODESHAPE_{section.upper()}_")
        if values:
            result[section] = values
    return result


def _env_for(cls: type, prefix: str) -> dict[str, Any]:
    type_hints = get_type_hints(cls)
    result: dict[str, Any] = {}

    for f in fields(cls):
        if f.name in _SECTIONS:
            continue
        env_key = f"{prefix}{f.name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hints.get(f.name))
        except ValueError as e:
            raise ConfigurationError(f"Invalid {env_key}: {e}")
        if parsed is not None:
            result[f.name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type.

    Returns None for types that cannot be expressed as a single string.

    Raises:
        ValueError: If value can't be parsed to the expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    if origin in (list, dict) or type_hint in (list, dict):
        return None

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        if lower in ("false", "0", "no", "off"):
            return False
        raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Load a TOML file.

    Raises:
        ConfigurationError: If the file is not valid TOML
    """
    try:
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore[no-redef]

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}")
