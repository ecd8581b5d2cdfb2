import json
import logging
import sys

import click

from . import __version__ as VERSION
from .config import Config, build_catalog, build_offers, refresh_config
from .errors import TillError
from .till import price_breakdown

logger = logging.getLogger(__name__)


@click.group(invoke_without_command=True)
@click.pass_context
@click.option("--version", is_flag=True, help="Show the version and exit.")
def main(ctx, version):
    """Till: point-of-sale pricing CLI"""
    try:
        ctx.obj = {"config": refresh_config()}
    except TillError as exc:
        _emit_structured_error(exc.explanation, code=exc.error_code, category=exc.category)

    if version:
        click.echo(f"till version {VERSION}")
        return
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@main.command(name="help")
@click.pass_context
def help_command(ctx):
    """Show this message and exit."""
    click.echo(ctx.parent.get_help())


def _emit_structured_error(message: str, *, code: str, category: str, as_json: bool = False, exit_code: int = 2):
    payload = {
        "ok": False,
        "error": {
            "code": code,
            "category": category,
            "message": message,
        },
    }
    if as_json:
        click.echo(json.dumps(payload, indent=2, sort_keys=True))
    else:
        prefix = "Till internal error" if code == "INTERNAL" else "Till error"
        click.echo(f"{prefix} [{category}:{code}]: {message}")
    sys.exit(exit_code)


def _format_total(cost: int, config: Config) -> str:
    major = cost / config.minor_units_per_major
    return f"Total cost is {cost} {config.minor_unit} aka {major:.2f} {config.major_unit}"


@main.command()
@click.argument("items", nargs=-1)
@click.option("--json", "json_output", is_flag=True, help="Emit the itemised breakdown as JSON")
@click.option("--no-free-item", is_flag=True, help="Disable the cheapest-item-free promotion")
@click.option("-v", "--verbose", is_flag=True, help="Log pricing steps")
@click.pass_context
def checkout(ctx, items, json_output, no_free_item, verbose):
    """Price ITEMS and print the total cost including discounts."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    config = ctx.obj["config"]

    try:
        breakdown = price_breakdown(
            list(items),
            catalog=build_catalog(config),
            offers=build_offers(config),
            cheapest_item_free=config.cheapest_item_free and not no_free_item,
        )
    except TillError as exc:
        _emit_structured_error(exc.explanation, code=exc.error_code, category=exc.category, as_json=json_output)
    except Exception as exc:  # keep the exit contract for unexpected failures
        logger.exception("Unhandled till checkout error")
        _emit_structured_error(str(exc), code="INTERNAL", category="SYSTEM", as_json=json_output)

    if json_output:
        click.echo(json.dumps(breakdown, indent=2, sort_keys=True))
        return
    click.echo(_format_total(breakdown["total"], config))


@main.command(name="catalog")
@click.pass_context
def catalog_command(ctx):
    """List catalog items and active offers."""
    config = ctx.obj["config"]
    try:
        catalog = build_catalog(config)
        offers = build_offers(config)
    except TillError as exc:
        click.echo(f"Error: {exc.explanation}")
        sys.exit(2)

    for name, cost in sorted(catalog.items()):
        click.echo(f"{name} {cost}")
    if not offers and not config.cheapest_item_free:
        return
    click.echo()
    click.echo("Offers:")
    for rule in offers:
        click.echo(f"  {rule.label}")
    if config.cheapest_item_free:
        click.echo("  cheapest item free")


if __name__ == "__main__":
    main()
