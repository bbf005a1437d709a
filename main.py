#!/usr/bin/env python3
"""Alert Lifecycle Service - CLI Entry Point."""
import sys
import json
import logging
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

import click
from rich.console import Console
from rich.table import Table

from __version__ import __version__

console = Console()
logger = logging.getLogger("alertsvc.cli")


def _init_components(config_path=None, verbose=False):
    """Lazy initialization of all components."""
    from utils.logger import setup_logging
    from config import load_config
    from definitions import create_definitions
    from alerts.service import AlertsService
    from alerts.channels import ConsoleChannel, FileChannel, EmailChannel

    config = load_config(config_path)
    log_cfg = config.get("logging", {})
    setup_logging("DEBUG" if verbose else log_cfg.get("level", "INFO"), log_cfg.get("file"))

    definitions = create_definitions(config)

    channels = []
    channel_cfg = config.get("channels", {})
    file_cfg = channel_cfg.get("file", {})
    if file_cfg.get("enabled", True):
        channels.append(FileChannel(file_cfg.get("path", "data/actions.jsonl")))

    # Console only if running interactively
    if channel_cfg.get("console", True) and sys.stdout.isatty():
        channels.append(ConsoleChannel())

    if config.get("email", {}).get("enabled", False):
        channels.append(EmailChannel(config))

    alerts = AlertsService(channels, config.get("actions", []))
    logger.debug(f"Initialized: backend={config['definitions']['backend']}, {len(channels)} channel(s)")

    return {"config": config, "definitions": definitions, "alerts": alerts}


@click.group()
@click.option("--config", "config_path", default=None, help="Path to config YAML")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.version_option(__version__, prog_name="alertsvc")
@click.pass_context
def cli(ctx, config_path, verbose):
    """Alert Lifecycle Service - condition definitions, alert lifecycle & email notifications."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["verbose"] = verbose


def _get_components(ctx):
    if "_components" not in ctx.obj:
        ctx.obj["_components"] = _init_components(ctx.obj.get("config_path"), ctx.obj.get("verbose"))
        ctx.find_root().call_on_close(ctx.obj["_components"]["definitions"].close)
    return ctx.obj["_components"]


def _fail(message):
    console.print(f"[red]✗[/red] {message}")
    sys.exit(1)


# ──────────────────────────────────────────────────────
# SERVE
# ──────────────────────────────────────────────────────
@cli.command()
@click.option("--host", default=None, help="Bind address (default: server.host)")
@click.option("--port", default=None, type=int, help="Port (default: server.port)")
@click.pass_context
def serve(ctx, host, port):
    """Run the REST service."""
    c = _get_components(ctx)
    from web.app import create_app

    server_cfg = c["config"]["server"]
    host = host or server_cfg.get("host", "127.0.0.1")
    port = port or server_cfg.get("port", 8080)

    app = create_app(c["config"], c)
    console.print(f"[bold]Alert Lifecycle Service[/bold] listening on http://{host}:{port}")
    app.run(host=host, port=port, debug=False)


# ──────────────────────────────────────────────────────
# CONDITIONS
# ──────────────────────────────────────────────────────
@cli.group()
def conditions():
    """Manage condition definitions."""
    pass


@conditions.command("list")
@click.option("--type", "kind", default=None,
              type=click.Choice(["string", "threshold", "range", "availability"]),
              help="Only show one condition variant")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def conditions_list(ctx, kind, as_json):
    """List stored conditions."""
    from models.conditions import CONDITION_KINDS

    c = _get_components(ctx)
    items = c["definitions"].get_conditions()
    if kind:
        items = [cond for cond in items if cond.type == CONDITION_KINDS[kind]]
    items.sort(key=lambda cond: cond.condition_id)

    if as_json:
        click.echo(json.dumps([cond.to_dict() for cond in items], indent=2))
        return
    if not items:
        console.print("No conditions defined.")
        return

    table = Table(show_header=True, box=None)
    table.add_column("Condition ID", style="dim")
    table.add_column("Type")
    table.add_column("Trigger")
    table.add_column("Mode")
    table.add_column("Predicate")
    for cond in items:
        table.add_row(cond.condition_id, cond.type.value, cond.trigger_id,
                      cond.trigger_mode.value, cond.describe())
    console.print(table)


@conditions.command("show")
@click.argument("condition_id")
@click.pass_context
def conditions_show(ctx, condition_id):
    """Show one condition as JSON."""
    c = _get_components(ctx)
    found = c["definitions"].get_condition(condition_id)
    if found is None:
        _fail(f"Condition {condition_id} not found")
    click.echo(json.dumps(found.to_dict(), indent=2))


@conditions.command("add-string")
@click.option("--tenant", "tenant_id", default="", help="Tenant id")
@click.option("--trigger", "trigger_id", required=True, help="Owning trigger id")
@click.option("--data-id", required=True, help="Data stream id")
@click.option("--operator", required=True,
              type=click.Choice(["EQUAL", "NOT_EQUAL", "STARTS_WITH", "ENDS_WITH", "CONTAINS", "MATCH"]))
@click.option("--pattern", required=True, help="Pattern to compare against")
@click.option("--mode", default="FIRING", type=click.Choice(["FIRING", "AUTORESOLVE"]))
@click.option("--ignore-case", is_flag=True, help="Case-insensitive comparison")
@click.option("--id", "condition_id", default=None, help="Explicit condition id")
@click.pass_context
def conditions_add_string(ctx, tenant_id, trigger_id, data_id, operator, pattern, mode,
                          ignore_case, condition_id):
    """Add a string condition."""
    from models.conditions import StringCondition
    from models.enums import Mode, StringOperator
    from models.exceptions import AlertsError

    c = _get_components(ctx)
    try:
        cond = StringCondition(
            tenant_id=tenant_id, trigger_id=trigger_id, trigger_mode=Mode(mode), data_id=data_id,
            operator=StringOperator(operator), pattern=pattern, ignore_case=ignore_case,
            condition_id=condition_id,
        )
        c["definitions"].add_condition(cond)
    except AlertsError as e:
        _fail(str(e))
    console.print(f"[green]✓[/green] Added {cond.condition_id}: {cond.describe()}")


@conditions.command("remove")
@click.argument("condition_id")
@click.pass_context
def conditions_remove(ctx, condition_id):
    """Remove a condition."""
    from models.exceptions import NotFound

    c = _get_components(ctx)
    try:
        c["definitions"].remove_condition(condition_id)
    except NotFound as e:
        _fail(str(e))
    console.print(f"[green]✓[/green] Removed {condition_id}")


# ──────────────────────────────────────────────────────
# EMAIL
# ──────────────────────────────────────────────────────
@cli.group()
def email():
    """Render and send alert notification emails."""
    pass


@email.command("render")
@click.option("--scenario", default="all",
              type=click.Choice(["threshold", "availability", "mixed", "all"]))
@click.option("--status", default="all",
              type=click.Choice(["open", "acknowledged", "resolved", "all"]))
@click.option("--out", "out_dir", default="data/test-emails", help="Output directory for .eml files")
@click.pass_context
def email_render(ctx, scenario, status, out_dir):
    """Write .eml files for the reference alert scenarios."""
    from alerts.scenarios import SCENARIOS, build_scenario, plugin_message
    from notifications.email_plugin import EmailPlugin
    from utils.formatters import now_ms

    c = _get_components(ctx)
    plugin = EmailPlugin(c["config"])

    scenarios = sorted(SCENARIOS) if scenario == "all" else [scenario]
    statuses = ["open", "acknowledged", "resolved"] if status == "all" else [status]

    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)
    stamp = now_ms()
    for name in scenarios:
        for st in statuses:
            alert = build_scenario(name, st.upper())
            msg = plugin.create_mime_message(plugin_message(alert))
            path = out / f"{name}-{st}-{stamp}.eml"
            path.write_bytes(msg.as_bytes())
            console.print(f"[green]✓[/green] {path}  [dim]{msg['Subject']}[/dim]")


@email.command("test")
@click.pass_context
def email_test(ctx):
    """Check SMTP connectivity."""
    from notifications.email_sender import EmailSender

    c = _get_components(ctx)
    result = EmailSender(c["config"]).test_connection()
    if result["status"] != "ok":
        _fail(result["message"])
    console.print(f"[green]✓[/green] {result['message']}")


if __name__ == "__main__":
    cli()
