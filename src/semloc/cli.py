from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

import click
from pydantic import ValidationError

from .errors import InvalidLocatorError, NoSuchElementError
from .lookup import find_all, find_first
from .models import SemanticLocator
from .parser import parse
from .settings import describe_settings_error, load_settings
from .soup_tree import SoupTree

if TYPE_CHECKING:
    from .playwright_tree import PlaywrightTree


def _configure_logging(verbose: bool) -> logging.Logger:
    logger = logging.getLogger("semloc")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if logger.handlers:
        return logger
    logger.propagate = False
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    logger.addHandler(handler)
    return logger


def _parse_or_fail(locator: str) -> SemanticLocator:
    try:
        return parse(locator)
    except InvalidLocatorError as exc:
        raise click.BadParameter(str(exc), param_hint="LOCATOR") from exc


@click.group()
def cli() -> None:
    """Find elements by semantic (accessibility) locators."""


@cli.command("parse")
@click.argument("locator", type=str)
def parse_command(locator: str) -> None:
    parsed = _parse_or_fail(locator)
    payload = {
        "locator": str(parsed),
        "pre_outer": [node.to_dict() for node in parsed.pre_outer],
        "post_outer": [node.to_dict() for node in parsed.post_outer],
    }
    click.echo(json.dumps(payload, indent=2))


@cli.command("find")
@click.argument("source", type=str)
@click.argument("locator", type=str)
@click.option("--include-hidden", is_flag=True, default=False, help="Also match elements hidden from assistive technology.")
@click.option("--first", "first_only", is_flag=True, default=False, help="Only print the first match; fail when there is none.")
@click.option("--verbose", is_flag=True, default=False, help="Log resolution steps to stderr.")
def find_command(source: str, locator: str, include_hidden: bool, first_only: bool, verbose: bool) -> None:
    """Resolve LOCATOR against SOURCE, an HTML file or an http(s) URL."""
    logger = _configure_logging(verbose)
    parsed = _parse_or_fail(locator)

    if not source.startswith(("http://", "https://")):
        try:
            tree = SoupTree.from_file(source)
        except OSError as exc:
            raise click.BadParameter(f"Cannot read {source}: {exc}", param_hint="SOURCE") from exc
        _emit_matches(parsed, tree.root, tree, include_hidden, first_only)
        return

    try:
        settings = load_settings()
    except ValidationError as exc:
        raise click.UsageError(describe_settings_error(exc)) from exc

    from playwright.sync_api import Error as PlaywrightError
    from playwright.sync_api import sync_playwright

    from .playwright_tree import PlaywrightTree

    logger.info("Opening %s in %s", source, settings.browser)
    with sync_playwright() as playwright:
        try:
            browser = getattr(playwright, settings.browser).launch(headless=True)
        except PlaywrightError as exc:
            if "executable doesn't exist" not in str(exc).lower():
                raise
            raise click.ClickException(
                f"Playwright {settings.browser} is not installed. Run `playwright install {settings.browser}`."
            ) from exc
        try:
            page = browser.new_page()
            page.goto(source, timeout=settings.timeout_ms)
            with PlaywrightTree.for_page(page) as tree:
                _emit_matches(parsed, tree.root, tree, include_hidden, first_only)
        finally:
            browser.close()


def _emit_matches(
    locator: SemanticLocator,
    root: Any,
    tree: SoupTree | PlaywrightTree,
    include_hidden: bool,
    first_only: bool,
) -> None:
    if first_only:
        try:
            element = find_first(locator, root, tree, include_hidden)
        except NoSuchElementError as exc:
            click.echo(str(exc), err=True)
            raise click.exceptions.Exit(1) from exc
        click.echo(json.dumps(tree.describe(element)))
        return

    for element in find_all(locator, root, tree, include_hidden):
        click.echo(json.dumps(tree.describe(element)))
