"""CLI."""

from __future__ import annotations

import json
import sys
from typing import Any

import click
from DrissionPage import Chromium

from driver_helper import __version__
from driver_helper.config import HelperConfig
from driver_helper.exceptions import DriverHelperError
from driver_helper.helper import DriverHelper
from driver_helper.logging_config import setup_logging


def _connect(address: str) -> Any:
    """Attach to a running Chromium and return its most recent tab."""
    return Chromium(address).latest_tab


@click.group()
@click.version_option(version=__version__, prog_name="driver-helper")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    help="Set the logging level.",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str) -> None:
    """driver-helper.

    Poll a live browser tab for elements, titles and URLs.
    """
    ctx.ensure_object(dict)
    ctx.obj["log_level"] = log_level
    setup_logging(log_level, "driver_helper")


@cli.command()
@click.option(
    "--address",
    "-a",
    default="127.0.0.1:9222",
    show_default=True,
    help="Debugging address of an already running Chromium.",
)
@click.option("--url", "-u", default=None, help="URL to open before checking.")
@click.option("--base-url", default=None, help="Base URL for relative --url values.")
@click.option("--any", "any_locators", multiple=True, help="Pass if any of these locators is present.")
@click.option("--all", "all_locators", multiple=True, help="Pass if all of these locators are present.")
@click.option("--title", default=None, help="Expected substring of the page title.")
@click.option(
    "--timeout",
    "-t",
    type=float,
    default=10.0,
    help="Timeout in seconds for each check.",
)
@click.option(
    "--output",
    "-o",
    type=click.Choice(["json", "text"]),
    default="text",
    help="Output format.",
)
@click.pass_context
def probe(
    ctx: click.Context,
    address: str,
    url: str | None,
    base_url: str | None,
    any_locators: tuple[str, ...],
    all_locators: tuple[str, ...],
    title: str | None,
    timeout: float,
    output: str,
) -> None:
    """Run presence and title checks against the current tab."""
    log_level = ctx.obj.get("log_level", "INFO")

    try:
        config = HelperConfig(explicit_timeout=timeout, base_url=base_url, log_level=log_level)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e

    if not any_locators and not all_locators and title is None:
        raise click.UsageError("Nothing to check: give at least one of --any, --all or --title.")

    checks: dict[str, Any] = {}
    try:
        helper = DriverHelper(_connect(address), config)
        if url:
            helper.open_url(url)

        if any_locators:
            outcome = helper.any_present_outcome(
                *(helper.element(loc) for loc in any_locators), timeout=timeout
            )
            checks["any"] = any_locators[outcome.index] if outcome.succeeded else None
        if all_locators:
            checks["all"] = helper.all_elements_present(
                *(helper.element(loc) for loc in all_locators), timeout=timeout
            )
        if title is not None:
            checks["title"] = helper.is_title_as_expected(title, timeout=timeout)

    except KeyboardInterrupt:
        click.echo("\nInterrupted.", err=True)
        sys.exit(130)

    except DriverHelperError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(2)

    passed = all(value not in (None, False) for value in checks.values())

    if output == "json":
        click.echo(json.dumps({"passed": passed, "checks": checks}, indent=2))
    else:
        for name, value in checks.items():
            click.echo(f"{name}: {value}")
        click.echo("PASSED" if passed else "FAILED")

    sys.exit(0 if passed else 1)


def main() -> None:
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()
