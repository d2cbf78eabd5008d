"""CLI for standalone provider testing."""

from __future__ import annotations

import asyncio
import json
import logging
from datetime import date

import click

from layover_core.schemas import AggregatedResults, CabinClass, Offer, SearchRequest
from layover_providers.aggregator import ProviderAggregator, ProviderHealth
from layover_providers.registry import PROVIDER_NAMES, build_providers

logger = logging.getLogger(__name__)


def _build_search_request(
    origin: str,
    destination: str,
    departure_date: str,
    return_date: str | None,
    cabin: str,
    max_connections: int,
    allow_direct: bool,
) -> SearchRequest:
    return SearchRequest(
        origin=origin.upper(),
        destination=destination.upper(),
        departure_date=date.fromisoformat(departure_date),
        return_date=date.fromisoformat(return_date) if return_date else None,
        cabin_class=CabinClass(cabin.upper()),
        max_connections=max_connections,
        prefer_layovers=not allow_direct,
    )


def _print_offers(offers: list[Offer]) -> None:
    if not offers:
        click.echo("No offers found.")
        return
    click.echo(f"\nFound {len(offers)} offer(s):\n")
    for i, o in enumerate(offers, 1):
        stops = ", ".join(
            f"{lay.airport} {lay.duration_minutes}min" for lay in o.layovers
        )
        click.echo(
            f"  {i}. {o.airline.code} | {o.origin} → {o.destination} | "
            f"{o.outbound[0].departure.time:%Y-%m-%d %H:%M} | "
            f"{o.outbound_duration_minutes}min | {o.price.total:.2f} {o.price.currency} "
            f"({o.source.value}) | layovers: [{stops}]"
        )


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
def cli(verbose: bool) -> None:
    """Layover provider CLI."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )


@cli.command("search")
@click.argument("origin")
@click.argument("destination")
@click.argument("departure_date")
@click.option("--return-date", default=None, help="Return date (YYYY-MM-DD)")
@click.option(
    "--provider",
    "provider_names",
    multiple=True,
    type=click.Choice(PROVIDER_NAMES, case_sensitive=False),
    help="Provider(s) to query; defaults to all",
)
@click.option("--cabin", default="ECONOMY", help="Cabin class")
@click.option("--max-connections", default=2, show_default=True, type=int)
@click.option("--allow-direct", is_flag=True, help="Keep non-stop itineraries")
@click.option("--json-output", is_flag=True, help="Output as JSON")
def search(
    origin: str,
    destination: str,
    departure_date: str,
    return_date: str | None,
    provider_names: tuple[str, ...],
    cabin: str,
    max_connections: int,
    allow_direct: bool,
    json_output: bool,
) -> None:
    """Search the selected providers concurrently and merge the results."""
    request = _build_search_request(
        origin,
        destination,
        departure_date,
        return_date,
        cabin,
        max_connections,
        allow_direct,
    )

    async def _run() -> AggregatedResults:
        aggregator = ProviderAggregator(build_providers(provider_names or None))
        try:
            return await aggregator.search_all(request)
        finally:
            await aggregator.close()

    result = asyncio.run(_run())
    if json_output:
        click.echo(json.dumps(result.model_dump(mode="json"), indent=2))
        return

    counts = ", ".join(f"{src.value}={n}" for src, n in result.provider_counts.items())
    click.echo(f"Providers: {counts} | Duration: {result.search_time_ms}ms")
    for err in result.provider_errors:
        click.echo(f"Error: {err.provider.value} {err.error_type}: {err.message}", err=True)
    _print_offers(result.offers)


@cli.command("health")
def health_check() -> None:
    """Check health of all providers."""

    async def _run() -> list[ProviderHealth]:
        aggregator = ProviderAggregator(build_providers())
        try:
            return await aggregator.health_status()
        finally:
            await aggregator.close()

    for health in asyncio.run(_run()):
        line = f"  {health.provider.value}: {health.status.upper()} ({health.response_time_ms}ms)"
        if health.error:
            line += f" - {health.error}"
        click.echo(line)
