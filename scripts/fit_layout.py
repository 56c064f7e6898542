#!/usr/bin/env python3
"""
Layout Fit CLI

Inspects how a CV would be laid out on a fixed-size page: estimated column
heights, page count and the layout tier the renderer would be given.

Commands:
    metrics - Show estimated heights for a CV file
    select  - Show the selected layout tier and configuration for a CV file

Examples:\n

    fit_layout.py metrics data/cvs/ada.yaml              # Column and block heights

    fit_layout.py select data/cvs/ada.json               # Selected tier and settings

    fit_layout.py select ada.yaml --tiers tiers.yaml     # With retuned tiers

    fit_layout.py select ada.yaml --page letter          # US Letter instead of A4
"""

import json
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

import typer
import yaml
from dotenv import load_dotenv
from loguru import logger
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException
from typing_extensions import Annotated

from pagefit.contexts.rendering import (
    A4,
    LETTER,
    InvalidTierConfigError,
    decide_layout,
    estimate,
    format_recommendation,
    load_layout_tiers,
)
from pagefit.contexts.rendering.logger import log_metrics, setup_layout_logger
from pagefit.contexts.templating import CVDocument, InvalidCVStructureError

load_dotenv()
logger.enable("pagefit")
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
LAYOUT_TIERS_PATH = os.getenv("LAYOUT_TIERS_PATH")

PAGE_SIZES = {"a4": A4, "letter": LETTER}

app = typer.Typer(
    help="Estimate CV content height and select a page layout",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def load_cv_file(cv_path: Path) -> CVDocument:
    """
    Load a CV-data file (YAML or JSON) into a CVDocument.

    Raises:
        InvalidCVStructureError: If the file cannot be parsed or is not a mapping
    """
    try:
        data: Dict[str, Any] = OmegaConf.to_container(OmegaConf.load(cv_path), resolve=False)
    except (yaml.YAMLError, OmegaConfBaseException, OSError) as e:
        raise InvalidCVStructureError(f"Could not read CV file {cv_path}: {e}") from e
    return CVDocument.from_dict(data)


def _start_session(command: str, tiers_path: Optional[Path] = None, quiet: bool = False) -> Path:
    log_dir = LOGS_PATH / f"{command}_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
    console = sys.stderr if quiet else sys.stdout
    return setup_layout_logger(log_dir, tier_config=tiers_path, console=console)


def _resolve_page(page: str):
    if page.lower() not in PAGE_SIZES:
        typer.secho(
            f"Error: unknown page size '{page}' (choose from {', '.join(PAGE_SIZES)})\n",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(code=1)
    return PAGE_SIZES[page.lower()]


@app.command("metrics")
def metrics_command(
    cv_path: Annotated[
        Path,
        typer.Argument(help="CV-data file (YAML or JSON)", exists=True, dir_okay=False),
    ],
    page: Annotated[
        str,
        typer.Option("--page", "-p", help="Page size: a4 or letter"),
    ] = "a4",
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the metrics as JSON only"),
    ] = False,
):
    """
    Show estimated column heights, page count and per-block heights.

    Examples:\n

        $ fit_layout.py metrics data/cvs/ada.yaml

        $ fit_layout.py metrics data/cvs/ada.yaml --page letter

        $ fit_layout.py metrics data/cvs/ada.yaml --json
    """
    geometry = _resolve_page(page)
    log_file = _start_session("metrics", quiet=as_json)

    try:
        metrics = estimate(load_cv_file(cv_path), geometry)
    except InvalidCVStructureError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    log_metrics(metrics, verbose=True)

    if as_json:
        typer.echo(json.dumps(metrics.to_dict(), indent=2))
        raise typer.Exit()

    typer.secho(f"\nMetrics: {cv_path.name}", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"  Sidebar height: {metrics.sidebar_height:.0f}pt")
    typer.echo(f"  Main height:    {metrics.main_height:.0f}pt")
    typer.echo(f"  Usable height:  {metrics.usable_height:.0f}pt")
    typer.echo(f"  Page fill:      {metrics.fill_percentage}%")
    typer.echo(f"  Page count:     {metrics.page_count}")

    if metrics.sections:
        typer.echo("\nMain column blocks:")
        for section in metrics.sections:
            breakable = " (breakable)" if section.can_break else ""
            typer.echo(f"  - {section.name}: {section.height:.0f}pt{breakable}")

    typer.echo(f"\n  Log: {log_file}\n")


@app.command("select")
def select_command(
    cv_path: Annotated[
        Path,
        typer.Argument(help="CV-data file (YAML or JSON)", exists=True, dir_okay=False),
    ],
    tiers_path: Annotated[
        Optional[Path],
        typer.Option(
            "--tiers",
            "-t",
            help="YAML tier overrides (default: LAYOUT_TIERS_PATH, if set)",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    page: Annotated[
        str,
        typer.Option("--page", "-p", help="Page size: a4 or letter"),
    ] = "a4",
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the renderer settings as JSON only"),
    ] = False,
):
    """
    Show the selected layout tier, its settings and the recommendation message.

    Examples:\n

        $ fit_layout.py select data/cvs/ada.yaml

        $ fit_layout.py select data/cvs/ada.yaml --tiers configs/tiers.yaml

        $ fit_layout.py select data/cvs/ada.yaml --json
    """
    geometry = _resolve_page(page)
    if tiers_path is None and LAYOUT_TIERS_PATH:
        tiers_path = Path(LAYOUT_TIERS_PATH)
    log_file = _start_session("select", tiers_path, quiet=as_json)

    try:
        tiers = load_layout_tiers(tiers_path)
        decision = decide_layout(load_cv_file(cv_path), tiers=tiers, geometry=geometry)
    except (InvalidCVStructureError, InvalidTierConfigError, OSError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    settings = decision.configuration.to_dict()
    if as_json:
        typer.echo(json.dumps(settings, indent=2))
        raise typer.Exit()

    typer.secho(f"\nLayout: {cv_path.name}", fg=typer.colors.BLUE, bold=True)
    typer.secho(f"  Tier: {decision.tier.name}", bold=True)
    typer.echo(f"  {format_recommendation(decision)}")
    typer.echo("\nSettings:")
    typer.echo(json.dumps(settings, indent=2))
    typer.echo(f"\n  Log: {log_file}\n")


if __name__ == "__main__":
    app()
