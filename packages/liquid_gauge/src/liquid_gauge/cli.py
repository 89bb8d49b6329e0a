"""Typer CLI for the liquid fill gauge.

Commands:
  render          Render a query response file into an SVG gauge
  options         List display options and whether they are shown for a config
  explain-option  Explain how one option resolves for a config
  renderers       List available rendering backends
"""

from __future__ import annotations

import json
import logging
from pathlib import Path  # noqa: TC003
from typing import Annotated, Any

import typer
import yaml
from rich.console import Console
from rich.table import Table

from gauge_core.types import OptionOverrides, OptionValue
from liquid_gauge.explain import explain_option
from liquid_gauge.host import RecordingHostContext
from liquid_gauge.lifecycle import GaugeLifecycleController
from liquid_gauge.options import build_default_registry, is_visible
from liquid_gauge.renderers import UnknownRendererError, discover_renderers, get_renderer
from liquid_gauge.resolver import merge_options
from liquid_gauge.settings import GaugeSettings
from liquid_gauge.surface import PanelContainer

app = typer.Typer(
    name="liquid-gauge",
    help="Render query results as a liquid fill gauge",
    no_args_is_help=True,
)
console = Console()


def _configure_logging(settings: GaugeSettings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        force=True,
    )


def _load_document(path: Path) -> Any:
    """Load a JSON or YAML document."""
    text = path.read_text()
    if path.suffix.lower() in (".yaml", ".yml"):
        return yaml.safe_load(text)
    return json.loads(text)


_BOOLEAN_WORDS = {"true": True, "yes": True, "false": False, "no": False}


def _coerce(raw: str) -> OptionValue:
    """Read an override value as a boolean word, then a number, else a literal string."""
    text = raw.strip()
    if text.lower() in _BOOLEAN_WORDS:
        return _BOOLEAN_WORDS[text.lower()]
    for number in (int, float):
        try:
            return number(text)
        except ValueError:
            continue
    return raw


def _parse_overrides(overrides: list[str]) -> OptionOverrides:
    """Turn repeated ``--override key=value`` arguments into OptionOverrides."""
    pairs = [item.partition("=") for item in overrides]
    for key, sep, _ in pairs:
        if not sep or not key.strip():
            console.print(f"[red]Expected key=value for --override, got '{key}'[/red]")
            raise typer.Exit(1)
    return OptionOverrides(values={key.strip(): _coerce(raw) for key, _, raw in pairs})


def _user_config(config_file: Path | None, overrides: list[str] | None) -> dict[str, Any]:
    config: dict[str, Any] = {}
    if config_file:
        try:
            loaded = _load_document(config_file)
        except (OSError, ValueError, yaml.YAMLError) as e:
            console.print(f"[red]Error reading config: {e}[/red]")
            raise typer.Exit(1) from None
        if not isinstance(loaded, dict):
            console.print(f"[red]Config file must contain a mapping: {config_file}[/red]")
            raise typer.Exit(1)
        config.update(loaded)
    config.update(_parse_overrides(overrides or []).values)
    return config


ConfigOption = Annotated[
    Path | None, typer.Option("--config", "-c", help="User option values (JSON or YAML)")
]
OverrideOption = Annotated[
    list[str] | None, typer.Option("--override", "-o", help="Option override (key=value)")
]
FormatOption = Annotated[str, typer.Option("--format", "-f", help="Output format: text or json")]


@app.command()
def render(
    query_file: Annotated[
        Path, typer.Argument(help="Query response with 'fields' and 'data' (JSON or YAML)")
    ],
    config_file: ConfigOption = None,
    override: OverrideOption = None,
    width: Annotated[float, typer.Option("--width", help="Panel width in pixels")] = 400,
    height: Annotated[float, typer.Option("--height", help="Panel height in pixels")] = 400,
    renderer: Annotated[
        str | None, typer.Option("--renderer", "-r", help="Renderer entry point name")
    ] = None,
    output: Annotated[
        Path | None, typer.Option("--output", help="Write the SVG here instead of stdout")
    ] = None,
    html: Annotated[bool, typer.Option("--html", help="Emit the whole panel element")] = False,
) -> None:
    """Render a query response into a liquid fill gauge."""
    settings = GaugeSettings()
    _configure_logging(settings)

    try:
        response = _load_document(query_file)
    except (OSError, ValueError, yaml.YAMLError) as e:
        console.print(f"[red]Error reading query response: {e}[/red]")
        raise typer.Exit(1) from None
    if not isinstance(response, dict):
        console.print(f"[red]Query response must be a mapping: {query_file}[/red]")
        raise typer.Exit(1)
    config = _user_config(config_file, override)

    try:
        backend = get_renderer(renderer or settings.renderer)
    except UnknownRendererError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None

    context = RecordingHostContext()
    controller = GaugeLifecycleController(context, renderer=backend, settings=settings)
    container = PanelContainer(client_width=width, client_height=height)
    surface = controller.create(container, config)

    try:
        controller.update(
            response.get("data", []),
            container,
            config,
            {"fields": response.get("fields", {})},
        )
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None

    if context.has_errors:
        console.print("[red]Gauge not rendered:[/red]")
        for err in context.errors.values():
            console.print(f"  [red]✗[/red] {err.title}: {err.message}")
        raise typer.Exit(1)

    document = container.to_html() if html else surface.to_svg()
    if output:
        output.write_text(document)
        console.print(f"[green]Gauge written to {output}[/green]")
    else:
        typer.echo(document)


@app.command()
def options(
    config_file: ConfigOption = None,
    override: OverrideOption = None,
    format: FormatOption = "text",
) -> None:
    """List display options, their defaults and whether the panel shows them."""
    registry = build_default_registry()
    config = _user_config(config_file, override)
    merged = merge_options(config, registry.defaults())

    if format == "json":
        payload = [
            {**e.model_dump(mode="json"), "visible": is_visible(e.key, merged)}
            for e in registry.all_entries()
        ]
        typer.echo(json.dumps(payload, indent=2))
        return

    table = Table(title="Liquid Fill Gauge Options")
    table.add_column("Key", style="cyan")
    table.add_column("Label")
    table.add_column("Section")
    table.add_column("Default", style="green")
    table.add_column("Shown")
    for e in registry.all_entries():
        table.add_row(
            e.key,
            e.label,
            e.section.value,
            str(e.default),
            "yes" if is_visible(e.key, merged) else "[dim]no[/dim]",
        )
    console.print(table)


@app.command("explain-option")
def explain(
    key: Annotated[str, typer.Argument(help="Option key, e.g. maxValue")],
    config_file: ConfigOption = None,
    override: OverrideOption = None,
    format: FormatOption = "text",
) -> None:
    """Explain how a single option resolves for the given configuration."""
    registry = build_default_registry()
    config = _user_config(config_file, override)
    try:
        explanation = explain_option(
            key, registry, config, get_renderer(GaugeSettings().renderer).default_settings()
        )
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None
    typer.echo(explanation.to_json() if format == "json" else explanation.to_text())


@app.command("renderers")
def list_renderers() -> None:
    """List available rendering backends."""
    table = Table(title="Available Renderers")
    table.add_column("Name", style="cyan")
    table.add_column("Implementation")
    for name, backend in sorted(discover_renderers().items()):
        table.add_row(name, f"{type(backend).__module__}.{type(backend).__qualname__}")
    console.print(table)
