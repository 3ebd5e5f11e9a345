import argparse
import logging
import sys
from importlib.metadata import version
from pathlib import Path

from botocore.exceptions import BotoCoreError, ClientError
from rich.console import Console

from .logger import logger
from .modes import discover
from .preflight import PreflightError

BANNER = """\
╔════════════════════════════════════════════════════════════════╗
║   AWS EC2 Information Gatherer for Terraform Configuration    ║
║                    Production-Ready Script                     ║
╚════════════════════════════════════════════════════════════════╝"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="ec2scout: AWS EC2 resource discovery for Terraform",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive run; the region is prompted for
  ec2scout

  # Write the report and log somewhere else
  ec2scout --output-dir ./reports

  # Use a named AWS profile
  AWS_PROFILE=staging ec2scout
""",
    )
    try:
        ver = version("ec2scout")
    except Exception:
        ver = "unknown"
    parser.add_argument("--version", action="version", version=f"ec2scout v{ver}")
    parser.add_argument(
        "--output-dir",
        default=str(Path.cwd()),
        help="Directory for the Markdown report and log file (default: cwd)",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.verbose:
        logger.setLevel(logging.DEBUG)

    log_console = Console(stderr=True)
    log_console.print(f"[bold blue]{BANNER}[/bold blue]", highlight=False)

    try:
        discover.run_discovery(args, log_console)
    except (PreflightError, ClientError, BotoCoreError):
        # Already logged (with its location for AWS errors) by run_discovery
        return 1

    log_console.print("\n[bold green]✓ Script completed successfully![/bold green]\n")
    return 0


def run() -> None:
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        console = Console(stderr=True)
        console.print("\n[bold red]Operation cancelled by user.[/bold red]")
        sys.exit(130)


if __name__ == "__main__":
    run()
