import argparse
import traceback
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError
from rich.console import Console

from ..core import LOG_FILENAME, REPORT_FILENAME, TIMESTAMP_FORMAT
from ..logger import add_file_handler, logger
from ..preflight import PreflightError, check_prerequisites
from ..regions import list_regions, select_region
from ..reporter import MarkdownReport
from ..schemas.account import CallerIdentity
from ..walkers import compute, network

PACKAGE_DIR = Path(__file__).resolve().parents[1]


@dataclass
class Section:
    """
    One report stage: fetch(region) -> report model -> template.
    The model's `is_empty` selects the template's "none found" branch.
    """

    label: str
    template: str
    fetch: Callable[[str], Any]


SECTIONS = [
    Section("AMI (OS Image) Details", "images.md.j2", compute.get_image_report),
    Section(
        "Available Instance Types",
        "instance_types.md.j2",
        compute.get_instance_type_report,
    ),
    Section("VPC Details", "vpcs.md.j2", network.get_vpc_report),
    Section(
        "Subnet Details (Public & Private)",
        "subnets.md.j2",
        network.get_subnet_report,
    ),
    Section(
        "Security Group (Firewall) Details",
        "security_groups.md.j2",
        network.get_security_group_report,
    ),
    Section("SSH Key Pair Details", "key_pairs.md.j2", compute.get_key_pair_report),
]


@dataclass
class RunContext:
    report_path: Path
    log_path: Path
    identity: CallerIdentity | None = None
    region: str | None = None


def build_run_context(output_dir: Path, now: datetime | None = None) -> RunContext:
    stamp = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)
    return RunContext(
        report_path=output_dir / REPORT_FILENAME.format(timestamp=stamp),
        log_path=output_dir / LOG_FILENAME.format(timestamp=stamp),
    )


def log_section(console: Console, title: str) -> None:
    console.print()
    console.rule(f"[bold cyan]{title}[/bold cyan]")
    logger.debug(f"== {title} ==")


def run_section(
    section: Section, region: str, report: MarkdownReport, console: Console
) -> None:
    log_section(console, f"Gathering {section.label}")
    data = section.fetch(region)
    if data.is_empty:
        logger.warning(f"No results for {section.label} in region {region}")
    report.append_template(section.template, data=data, region=region)
    logger.info(f"✓ {section.label} saved to output file")


def failure_location(exc: BaseException) -> str:
    """file:line of the frame that raised, innermost first party frame."""
    frames = traceback.extract_tb(exc.__traceback__)
    own = [
        f for f in frames if Path(f.filename).resolve().is_relative_to(PACKAGE_DIR)
    ] or frames
    if not own:
        return "unknown location"
    frame = own[-1]
    return f"{Path(frame.filename).name}:{frame.lineno}"


def run_discovery(
    args: argparse.Namespace,
    log_console: Console,
    sections: list[Section] | None = None,
) -> RunContext:
    """
    Executes the full discovery run: preflight, region prompt, every section
    in order, then the Terraform scaffold and the closing guide.

    AWS errors are not caught per section. The first one ends the run after
    being logged with its location; sections already written stay on disk.
    """
    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    ctx = build_run_context(output_dir)

    file_handler = add_file_handler(logger, ctx.log_path)
    try:
        logger.info(f"Run started at {datetime.now():%Y-%m-%d %H:%M:%S}")
        logger.info(f"Log file: {ctx.log_path}")
        logger.info(f"Output file: {ctx.report_path}")

        log_section(log_console, "Checking Prerequisites")
        ctx.identity = check_prerequisites()
        regions = list_regions()

        with MarkdownReport(ctx.report_path) as report:
            report.append_template(
                "header.md.j2",
                identity=ctx.identity,
                generated=f"{datetime.now().astimezone():%Y-%m-%d %H:%M:%S %Z}",
            )

            log_section(log_console, "AWS Region Selection")
            ctx.region = select_region(log_console, regions=regions)
            report.append_template("region.md.j2", region=ctx.region)

            for section in sections if sections is not None else SECTIONS:
                run_section(section, ctx.region, report, log_console)

            log_section(log_console, "Generating Terraform Configuration Example")
            report.append_template("terraform.md.j2", region=ctx.region)
            report.append_template("footer.md.j2")
            logger.info("✓ Terraform example configuration generated")

        log_section(log_console, "Summary")
        logger.info("All information has been gathered successfully!")
        logger.info(f"Output saved to: {ctx.report_path}")
        logger.info(f"Log file saved to: {ctx.log_path}")
    except PreflightError as e:
        logger.error(str(e))
        raise
    except (ClientError, BotoCoreError) as e:
        logger.error(f"Run failed at {failure_location(e)}: {e}")
        raise
    finally:
        logger.removeHandler(file_handler)
        file_handler.close()

    return ctx
