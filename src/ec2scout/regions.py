from botocore.exceptions import BotoCoreError, ClientError
from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt
from tenacity import retry

from .clients import get_bootstrap_ec2_client
from .core import BOOTSTRAP_REGION, RETRY_CONFIG
from .logger import logger
from .preflight import PreflightError

LIST_COMMAND = "list"


@retry(**RETRY_CONFIG)  # type: ignore[call-overload, untyped-decorator]
def _describe_regions() -> list[str]:
    client = get_bootstrap_ec2_client()
    response = client.describe_regions()
    return sorted(r["RegionName"] for r in response.get("Regions", []))


def list_regions() -> list[str]:
    """
    Authoritative list of regions enabled for the account, fetched from the
    bootstrap region before any region has been chosen.
    """
    try:
        return _describe_regions()
    except (ClientError, BotoCoreError) as e:
        raise PreflightError(
            f"Unable to list AWS regions via {BOOTSTRAP_REGION}: {e}"
        ) from e


def normalize_region_input(text: str | None) -> str:
    return (text or "").strip().lower()


def is_list_command(text: str | None) -> bool:
    return normalize_region_input(text) == LIST_COMMAND


def print_region_listing(console: Console, regions: list[str]) -> None:
    console.print()
    console.print("[cyan]Available AWS Regions:[/cyan]")
    console.print()
    for i, name in enumerate(regions, start=1):
        console.print(f"{i:2d}) {name}", highlight=False)
    console.print()


def select_region(console: Console, regions: list[str] | None = None) -> str:
    """
    Prompts until a valid region code is entered. There is no retry cap.
    Typing 'list' shows every region and prompts again.
    """
    if regions is None:
        regions = list_regions()
    known = set(regions)

    console.print("[blue]Enter AWS Region Name[/blue]")
    console.print(
        "[yellow]Examples: us-east-1, us-west-2, ap-south-1, eu-west-1[/yellow]"
    )
    console.print("[yellow](Type 'list' to see all available regions)[/yellow]")
    console.print()

    while True:
        region_input = normalize_region_input(
            Prompt.ask(
                "Enter AWS Region", console=console, default="", show_default=False
            )
        )

        if region_input == LIST_COMMAND:
            print_region_listing(console, regions)
            continue

        if region_input in known:
            logger.info(f"✓ Valid region selected: {region_input}")
            return region_input

        logger.error(f"Invalid region name: '{escape(region_input)}'")
        console.print("[yellow]Tip: Type 'list' to see all available regions[/yellow]")
        console.print()
