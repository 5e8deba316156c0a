"""Configuration loading for notelint."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from notelint.loader import DEFAULT_EXTENSIONS

CONFIG_FILENAMES = (".notelint.toml", "notelint.toml")
PYPROJECT_FILENAME = "pyproject.toml"
PYPROJECT_TOOL_KEY = "notelint"
OUTPUT_FORMATS = {"text", "json"}
TOP_LEVEL_KEYS = {"format", "jobs", "extensions", "include", "exclude", "rules", "naming", "layout"}


@dataclass(slots=True)
class NamingConfig:
    """Word lists used by the naming rules."""

    boolean_prefixes: list[str] = field(default_factory=lambda: ["is", "has", "can", "should"])
    ambiguous_words: list[str] = field(
        default_factory=lambda: ["read", "write", "use", "need", "check"]
    )
    negated_words: list[str] = field(
        default_factory=lambda: ["disable", "not", "no", "dont", "never"]
    )
    generic_names: list[str] = field(
        default_factory=lambda: ["tmp", "temp", "retval", "foo", "bar", "baz", "stuff", "thing"]
    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "boolean_prefixes": list(self.boolean_prefixes),
            "ambiguous_words": list(self.ambiguous_words),
            "negated_words": list(self.negated_words),
            "generic_names": list(self.generic_names),
        }


@dataclass(slots=True)
class LayoutConfig:
    """Thresholds used by the layout and control-flow rules."""

    max_nesting: int = 4
    indent_width: int = 4
    max_ternary_length: int = 80

    def to_dict(self) -> dict[str, Any]:
        return {
            "max_nesting": self.max_nesting,
            "indent_width": self.indent_width,
            "max_ternary_length": self.max_ternary_length,
        }


@dataclass(slots=True)
class StyleConfig:
    """Rule tuning shared by all built-in rules."""

    naming: NamingConfig = field(default_factory=NamingConfig)
    layout: LayoutConfig = field(default_factory=LayoutConfig)

    def to_dict(self) -> dict[str, Any]:
        return {"naming": self.naming.to_dict(), "layout": self.layout.to_dict()}


@dataclass(slots=True)
class AppConfig:
    """Runtime configuration values resolved from project files."""

    format: str = "text"
    jobs: int = 1
    extensions: list[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    include: list[str] = field(default_factory=list)
    exclude: list[str] = field(default_factory=list)
    rule_enable: list[str] | None = None
    rule_disable: list[str] = field(default_factory=list)
    style: StyleConfig = field(default_factory=StyleConfig)
    source: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "format": self.format,
            "jobs": self.jobs,
            "extensions": list(self.extensions),
            "include": list(self.include),
            "exclude": list(self.exclude),
            "rules": {
                "enable": list(self.rule_enable) if self.rule_enable is not None else None,
                "disable": list(self.rule_disable),
            },
            "style": self.style.to_dict(),
            "source": self.source,
        }


def load_app_config(repo: Path, config_path: Path | None = None) -> AppConfig:
    """Resolve the config for ``repo``.

    An explicit ``config_path`` wins. Otherwise the first of
    ``.notelint.toml``, ``notelint.toml`` and a ``[tool.notelint]`` table in
    ``pyproject.toml`` is used, falling back to defaults.
    """
    repo = repo.resolve()
    if config_path is not None:
        resolved = config_path if config_path.is_absolute() else (repo / config_path)
        if not resolved.exists():
            raise ValueError(f"Config file does not exist: {resolved}")
        return _from_mapping(_read_config_table(resolved) or {}, source=str(resolved))

    for candidate in [repo / name for name in CONFIG_FILENAMES] + [repo / PYPROJECT_FILENAME]:
        if not candidate.exists():
            continue
        mapping = _read_config_table(candidate)
        if mapping is not None:
            return _from_mapping(mapping, source=str(candidate))

    return AppConfig()


def default_config_template() -> str:
    """Return a starter config template."""
    return "\n".join(
        [
            'format = "text"',
            "jobs = 4",
            'extensions = [".md", ".markdown", ".txt", ".rst"]',
            'include = ["chapters/**"]',
            'exclude = ["drafts/**"]',
            "",
            "[rules]",
            "enable = [",
            '  "ambiguous_boolean",',
            '  "negated_boolean",',
            '  "generic_name",',
            '  "ternary_overuse",',
            '  "yoda_condition",',
            '  "awkward_control_flow",',
            '  "deep_nesting",',
            "]",
            "disable = []",
            "",
            "[naming]",
            'boolean_prefixes = ["is", "has", "can", "should"]',
            'ambiguous_words = ["read", "write", "use", "need", "check"]',
            'negated_words = ["disable", "not", "no", "dont", "never"]',
            'generic_names = ["tmp", "temp", "retval", "foo", "bar", "baz", "stuff", "thing"]',
            "",
            "[layout]",
            "max_nesting = 4",
            "indent_width = 4",
            "max_ternary_length = 80",
            "",
        ]
    )


def _read_config_table(path: Path) -> dict[str, Any] | None:
    """Return the notelint table of ``path``; None for a pyproject without one."""
    try:
        with path.open("rb") as file_obj:
            loaded = tomllib.load(file_obj)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in {path}: {exc}") from exc

    if path.name != PYPROJECT_FILENAME:
        return loaded

    tool = loaded.get("tool")
    section = tool.get(PYPROJECT_TOOL_KEY) if isinstance(tool, dict) else None
    if section is None:
        return None
    return _as_table(section, f"tool.{PYPROJECT_TOOL_KEY}")


def _from_mapping(mapping: dict[str, Any], *, source: str) -> AppConfig:
    unknown = sorted(key for key in mapping if key not in TOP_LEVEL_KEYS)
    if unknown:
        raise ValueError(f"Unknown config keys in {source}: {', '.join(unknown)}")

    rules_mapping = _as_table(mapping.get("rules"), "rules")
    naming_mapping = _as_table(mapping.get("naming"), "naming")
    layout_mapping = _as_table(mapping.get("layout"), "layout")

    jobs = _as_int(mapping.get("jobs", 1), "jobs")
    if jobs < 1:
        raise ValueError("jobs must be >= 1")

    extensions = _as_str_list(mapping.get("extensions")) or list(DEFAULT_EXTENSIONS)
    for extension in extensions:
        if not extension.startswith("."):
            raise ValueError(f"extensions entries must start with '.', got '{extension}'")

    return AppConfig(
        format=_as_choice(mapping.get("format", "text"), OUTPUT_FORMATS, "format"),
        jobs=jobs,
        extensions=extensions,
        include=_as_str_list(mapping.get("include")),
        exclude=_as_str_list(mapping.get("exclude")),
        rule_enable=_as_str_list_or_none(rules_mapping.get("enable")),
        rule_disable=_as_str_list(rules_mapping.get("disable")),
        style=StyleConfig(
            naming=_parse_naming_config(naming_mapping),
            layout=_parse_layout_config(layout_mapping),
        ),
        source=source,
    )


def _parse_naming_config(value: dict[str, Any]) -> NamingConfig:
    defaults = NamingConfig()
    return NamingConfig(
        boolean_prefixes=_lowered(value.get("boolean_prefixes"), defaults.boolean_prefixes),
        ambiguous_words=_lowered(value.get("ambiguous_words"), defaults.ambiguous_words),
        negated_words=_lowered(value.get("negated_words"), defaults.negated_words),
        generic_names=_as_str_list(value.get("generic_names")) or defaults.generic_names,
    )


def _parse_layout_config(value: dict[str, Any]) -> LayoutConfig:
    layout = LayoutConfig(
        max_nesting=_as_int(value.get("max_nesting", 4), "layout.max_nesting"),
        indent_width=_as_int(value.get("indent_width", 4), "layout.indent_width"),
        max_ternary_length=_as_int(
            value.get("max_ternary_length", 80), "layout.max_ternary_length"
        ),
    )
    if layout.max_nesting < 1:
        raise ValueError("layout.max_nesting must be >= 1")
    if layout.indent_width < 1:
        raise ValueError("layout.indent_width must be >= 1")
    if layout.max_ternary_length < 1:
        raise ValueError("layout.max_ternary_length must be >= 1")
    return layout


def _lowered(value: Any, default: list[str]) -> list[str]:
    items = _as_str_list(value)
    if not items:
        return list(default)
    return [item.lower() for item in items]


def _as_table(value: Any, field_name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{field_name} must be a table/object")
    return value


def _as_str_list(value: Any) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError("Expected a list of strings")
    items: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError("Expected a list of strings")
        items.append(item)
    return items


def _as_str_list_or_none(value: Any) -> list[str] | None:
    if value is None:
        return None
    return _as_str_list(value)


def _as_choice(raw: Any, allowed: set[str], field_name: str) -> str:
    value = str(raw).lower()
    if value not in allowed:
        choices = ", ".join(sorted(allowed))
        raise ValueError(f"{field_name} must be one of: {choices}")
    return value


def _as_int(raw: Any, field_name: str) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ValueError(f"{field_name} must be an integer")
    return raw
