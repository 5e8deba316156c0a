"""CLI entrypoint for notelint."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated

import click
import typer

from notelint import __version__
from notelint.config import OUTPUT_FORMATS, AppConfig, default_config_template, load_app_config
from notelint.engine import lint_path
from notelint.loader import RootNotFoundError
from notelint.output import render_json, render_text
from notelint.rules import build_rules, list_rule_info
from notelint.rules.base import Rule

app = typer.Typer(
    name="notelint",
    no_args_is_help=True,
    help="Lint chapter notes and their code snippets for readability issues.",
)


class _EchoHandler(logging.Handler):
    """Log handler that writes through click so it follows the current stderr."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=True)
        except Exception:
            self.handleError(record)


def version_callback(value: bool) -> None:
    """Print version and exit when --version is provided."""
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool,
        typer.Option("--version", help="Show version and exit.", callback=version_callback),
    ] = False,
) -> None:
    """Root command callback."""
    _ = version


@app.command("check")
def check_command(
    root: Annotated[Path, typer.Argument(help="Directory (or single file) of chapter notes.")],
    rules: Annotated[
        str | None,
        typer.Option("--rules", help="Comma-separated rule ids to run (default: all)."),
    ] = None,
    format: Annotated[
        str | None, typer.Option(help="Output format: text|json.", show_default="text")
    ] = None,
    jobs: Annotated[
        int | None, typer.Option(help="Number of worker threads.", show_default="1")
    ] = None,
    include: Annotated[list[str] | None, typer.Option(help="Include glob pattern.")] = None,
    exclude: Annotated[list[str] | None, typer.Option(help="Exclude glob pattern.")] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config TOML file."),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log progress to stderr.")
    ] = False,
) -> None:
    """Lint chapter files and report findings.

    Exits 0 when clean, 1 when findings were reported, 2 when ROOT is missing.
    """
    _configure_logging(verbose)
    if not root.exists():
        typer.echo(f"Error: root path does not exist: {root}", err=True)
        raise typer.Exit(code=2)

    app_config = _load_config_or_raise(_config_dir(root), config_file)
    output_format = (format or app_config.format).lower()
    if output_format not in OUTPUT_FORMATS:
        raise typer.BadParameter("format must be one of: json, text", param_hint="--format")

    resolved_jobs = jobs if jobs is not None else app_config.jobs
    if resolved_jobs < 1:
        raise typer.BadParameter("jobs must be >= 1", param_hint="--jobs")

    enabled_ids = _parse_rule_ids(rules) if rules is not None else app_config.rule_enable
    active_rules = _build_rules_or_raise(
        app_config,
        enabled_rule_ids=enabled_ids,
        param_hint="--rules" if rules is not None else "config.rules",
    )

    try:
        result = lint_path(
            root,
            rules=active_rules,
            jobs=resolved_jobs,
            extensions=app_config.extensions,
            include=include if include is not None else app_config.include,
            exclude=exclude if exclude is not None else app_config.exclude,
        )
    except RootNotFoundError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2) from exc

    if output_format == "json":
        typer.echo(render_json(result, root=str(root)))
    else:
        typer.echo(render_text(result))

    if result.exit_code:
        raise typer.Exit(code=result.exit_code)


@app.command("rules")
def rules_command(
    repo: Annotated[Path, typer.Option(help="Directory to read config from.")] = Path("."),
    format: Annotated[str, typer.Option(help="Output format: text|json.")] = "text",
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config TOML file."),
    ] = None,
) -> None:
    """List available rules and whether they are enabled."""
    output_format = format.lower()
    if output_format not in OUTPUT_FORMATS:
        raise typer.BadParameter("format must be one of: json, text", param_hint="--format")

    app_config = _load_config_or_raise(repo, config_file)
    active_ids = {
        rule.rule_id
        for rule in _build_rules_or_raise(
            app_config, enabled_rule_ids=app_config.rule_enable, param_hint="config.rules"
        )
    }
    rule_info = list_rule_info()

    if output_format == "json":
        payload = {
            "rules": [
                {
                    "rule_id": item.rule_id,
                    "name": item.name,
                    "description": item.description,
                    "category": item.category,
                    "default_enabled": item.default_enabled,
                    "enabled": item.rule_id in active_ids,
                }
                for item in rule_info
            ],
            "meta": {"config_source": app_config.source},
        }
        typer.echo(json.dumps(payload, sort_keys=True))
        return

    lines = ["Available rules:"]
    for item in rule_info:
        status = "enabled" if item.rule_id in active_ids else "disabled"
        lines.append(f"- {item.rule_id} [{item.category}, {status}] - {item.description}")
    typer.echo("\n".join(lines))


@app.command("config")
def config_command(
    repo: Annotated[Path, typer.Option(help="Directory to read config from.")] = Path("."),
    format: Annotated[str, typer.Option(help="Output format: text|json.")] = "text",
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config TOML file."),
    ] = None,
) -> None:
    """Show resolved configuration."""
    output_format = format.lower()
    if output_format not in OUTPUT_FORMATS:
        raise typer.BadParameter("format must be one of: json, text", param_hint="--format")

    app_config = _load_config_or_raise(repo, config_file)
    active_rules = _build_rules_or_raise(
        app_config, enabled_rule_ids=app_config.rule_enable, param_hint="config.rules"
    )
    payload = app_config.to_dict()
    payload["active_rule_ids"] = [rule.rule_id for rule in active_rules]

    if output_format == "json":
        typer.echo(json.dumps(payload, sort_keys=True))
        return

    lines = [
        "Resolved configuration:",
        f"- source: {payload['source'] or 'defaults'}",
        f"- format: {payload['format']}",
        f"- jobs: {payload['jobs']}",
        f"- extensions: {payload['extensions']}",
        f"- include: {payload['include']}",
        f"- exclude: {payload['exclude']}",
        f"- rules.enable: {payload['rules']['enable']}",
        f"- rules.disable: {payload['rules']['disable']}",
        f"- active_rule_ids: {payload['active_rule_ids']}",
    ]
    typer.echo("\n".join(lines))


@app.command("config-init")
def config_init_command(
    out: Annotated[Path, typer.Option(help="Output path for starter config TOML.")] = Path(
        ".notelint.toml"
    ),
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite if file already exists."),
    ] = False,
) -> None:
    """Create a starter config file."""
    out_path = out.resolve()
    if out_path.exists() and not force:
        raise typer.BadParameter(
            f"Refusing to overwrite existing file: {out_path}. Use --force to overwrite."
        )
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(default_config_template(), encoding="utf-8")
    typer.echo(f"Wrote starter config: {out_path}")


def main() -> None:
    """Console script entrypoint."""
    app()


def _configure_logging(verbose: bool) -> None:
    package_logger = logging.getLogger("notelint")
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    echo_handlers = [item for item in package_logger.handlers if isinstance(item, _EchoHandler)]
    if not verbose:
        for handler in echo_handlers:
            package_logger.removeHandler(handler)
        return
    if not echo_handlers:
        handler = _EchoHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        package_logger.addHandler(handler)


def _config_dir(root: Path) -> Path:
    return root if root.is_dir() else root.parent


def _parse_rule_ids(raw: str) -> list[str]:
    rule_ids = [item.strip() for item in raw.split(",") if item.strip()]
    if not rule_ids:
        raise typer.BadParameter("expected at least one rule id", param_hint="--rules")
    return rule_ids


def _load_config_or_raise(repo: Path, config_file: Path | None = None) -> AppConfig:
    try:
        return load_app_config(repo, config_path=config_file)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="config") from exc


def _build_rules_or_raise(
    app_config: AppConfig,
    *,
    enabled_rule_ids: list[str] | None,
    param_hint: str,
) -> list[Rule]:
    try:
        return build_rules(
            enabled_rule_ids=enabled_rule_ids,
            disabled_rule_ids=app_config.rule_disable,
            style=app_config.style,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint=param_hint) from exc
