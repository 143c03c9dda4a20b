"""Entry point: view AWS Cost Explorer spend in the terminal."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from rich.console import Console

from api.client import CostExplorerClient
from core.config import DEFAULT_CONFIG, DashboardConfig
from core.errors import CostDataError, DashboardError
from core.loader import load_dashboard
from core.state import DashboardState
from ui.app import run_dashboard
from ui.views import REMEDIATION_CHECKLIST, render_text_report

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aws-costs",
        description="Terminal UI for viewing AWS Cost Explorer data with charts",
    )
    parser.add_argument(
        "-p",
        "--profile",
        default=os.environ.get("AWS_PROFILE", "default"),
        help="AWS profile to use (defaults to AWS_PROFILE or 'default')",
    )
    parser.add_argument(
        "-r",
        "--region",
        default=os.environ.get("AWS_REGION"),
        help="AWS region (defaults to AWS_REGION, the profile region, or us-east-1)",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging (logs to stderr)")
    parser.add_argument("--no-tui", action="store_true", help="Just print costs without TUI (useful for scripts)")
    return parser


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def run_text_mode(client: CostExplorerClient, config: DashboardConfig = DEFAULT_CONFIG) -> int:
    console = Console()
    try:
        summary = client.get_current_month()
    except CostDataError as exc:
        err = Console(stderr=True)
        err.print(f"❌ Error: {exc}", style="bold red")
        err.print("\nMake sure you have:")
        for i, item in enumerate(REMEDIATION_CHECKLIST, start=1):
            err.print(f"  {i}. {item}")
        return 1
    console.print("☁️  AWS Cost Explorer\n")
    console.print(render_text_report(summary, config))
    return 0


def run_tui_mode(client: CostExplorerClient, config: DashboardConfig = DEFAULT_CONFIG) -> int:
    state = load_dashboard(DashboardState(), client, config.trend_months)
    run_dashboard(state, config)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.debug)
    logger.info("Starting AWS Costs TUI with profile %s", args.profile)

    try:
        client = CostExplorerClient(profile=args.profile, region=args.region)
    except CostDataError as exc:
        logger.error("%s", exc)
        print(f"❌ Error: {exc}", file=sys.stderr)
        return 1

    if args.no_tui:
        return run_text_mode(client)
    try:
        return run_tui_mode(client)
    except DashboardError as exc:
        print(f"❌ Dashboard error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
