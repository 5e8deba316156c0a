"""Config loading tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from notelint.config import AppConfig, default_config_template, load_app_config


def test_defaults_when_no_config_present(tmp_path: Path) -> None:
    config = load_app_config(tmp_path)
    assert config == AppConfig()
    assert config.source is None
    assert config.style.naming.boolean_prefixes == ["is", "has", "can", "should"]


def test_dot_file_takes_precedence_over_pyproject(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        "\n".join(["[tool.notelint]", 'format = "text"', "jobs = 8"]),
        encoding="utf-8",
    )
    (tmp_path / ".notelint.toml").write_text(
        "\n".join(
            [
                'format = "json"',
                "jobs = 3",
                'exclude = ["drafts/**"]',
                "",
                "[rules]",
                'enable = ["ambiguous_boolean", "deep_nesting"]',
                'disable = ["deep_nesting"]',
                "",
                "[naming]",
                'ambiguous_words = ["Read", "Fetch"]',
                "",
                "[layout]",
                "max_nesting = 6",
            ]
        ),
        encoding="utf-8",
    )

    config = load_app_config(tmp_path)
    assert config.format == "json"
    assert config.jobs == 3
    assert config.exclude == ["drafts/**"]
    assert config.rule_enable == ["ambiguous_boolean", "deep_nesting"]
    assert config.rule_disable == ["deep_nesting"]
    assert config.style.naming.ambiguous_words == ["read", "fetch"]
    assert config.style.layout.max_nesting == 6
    assert config.style.layout.indent_width == 4
    assert config.source == str(tmp_path / ".notelint.toml")


def test_pyproject_tool_section_is_used(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        "\n".join(
            [
                "[project]",
                'name = "book"',
                "",
                "[tool.notelint]",
                'extensions = [".md", ".c"]',
                "",
                "[tool.notelint.rules]",
                'disable = ["yoda_condition"]',
            ]
        ),
        encoding="utf-8",
    )

    config = load_app_config(tmp_path)
    assert config.extensions == [".md", ".c"]
    assert config.rule_enable is None
    assert config.rule_disable == ["yoda_condition"]
    assert config.source == str(tmp_path / "pyproject.toml")


def test_pyproject_without_tool_section_falls_back_to_defaults(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text('[project]\nname = "book"\n', encoding="utf-8")
    assert load_app_config(tmp_path).source is None


@pytest.mark.parametrize(
    ("body", "message"),
    [
        ('format = "xml"', "format must be one of: json, text"),
        ("jobs = 0", "jobs must be >= 1"),
        ("jobs = true", "jobs must be an integer"),
        ('extensions = ["md"]', "extensions entries must start with '.'"),
        ("[layout]\nmax_nesting = 0", "layout.max_nesting must be >= 1"),
        ('rules = "all"', "rules must be a table/object"),
        ("format = [", "Invalid TOML"),
    ],
)
def test_invalid_values_raise_value_error(tmp_path: Path, body: str, message: str) -> None:
    (tmp_path / ".notelint.toml").write_text(body, encoding="utf-8")
    with pytest.raises(ValueError, match=message):
        load_app_config(tmp_path)


def test_explicit_missing_config_path_raises(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="Config file does not exist"):
        load_app_config(tmp_path, config_path=Path("missing.toml"))


def test_default_template_round_trips(tmp_path: Path) -> None:
    path = tmp_path / "starter.toml"
    path.write_text(default_config_template(), encoding="utf-8")

    config = load_app_config(tmp_path, config_path=path)
    assert config.jobs == 4
    assert config.include == ["chapters/**"]
    assert config.rule_enable is not None
    assert len(config.rule_enable) == 7
    assert config.style.layout.max_ternary_length == 80


def test_dedicated_file_rejects_nested_tool_table(tmp_path: Path) -> None:
    (tmp_path / ".notelint.toml").write_text(
        "\n".join(["[tool.notelint]", 'format = "json"']),
        encoding="utf-8",
    )
    with pytest.raises(ValueError, match="Unknown config keys in .*: tool"):
        load_app_config(tmp_path)


def test_unknown_keys_in_pyproject_section_are_rejected(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        "\n".join(["[tool.notelint]", "fail_above = 3"]),
        encoding="utf-8",
    )
    with pytest.raises(ValueError, match="Unknown config keys in .*: fail_above"):
        load_app_config(tmp_path)
