"""CLI for running layover discovery searches."""

from __future__ import annotations

import asyncio
import json
import logging
from datetime import date

import click

from layover_core.observability import CollectingErrorSink
from layover_core.schemas import (
    CabinClass,
    DiscoveryResult,
    LayoverPreferences,
    PassengerCount,
    SearchRequest,
)
from layover_discovery.config import settings
from layover_discovery.factory import build_discovery_service
from layover_providers.aggregator import ProviderHealth

logger = logging.getLogger(__name__)


def _print_result(result: DiscoveryResult) -> None:
    source = " (cached)" if result.from_cache else ""
    click.echo(
        f"Search {result.search_id}{source}: {result.total_offers} offer(s), "
        f"{result.total_candidates} layover candidate(s), {result.search_time_ms}ms"
    )
    for note in result.market_data.notes:
        click.echo(f"Note: {note}", err=True)
    for err in result.provider_errors:
        click.echo(f"Error: {err.provider.value} {err.error_type}: {err.message}", err=True)

    if not result.offers:
        click.echo("No layover opportunities found.")
        return

    market = result.market_insights
    click.echo(
        f"Market average {market.average_price:.0f} {market.currency} "
        f"(confidence {market.price_confidence:.1f})\n"
    )
    for i, scored in enumerate(result.offers, 1):
        offer = scored.offer
        click.echo(
            f"  {i}. {offer.airline.code} {offer.origin} → {offer.destination} | "
            f"{offer.price.total:.2f} {offer.price.currency} | "
            f"layover score {scored.layover_score:.2f}"
        )
        for lay in scored.layovers:
            cand = lay.candidate
            click.echo(
                f"       {cand.city} ({cand.airport}) {cand.duration_minutes}min "
                f"score {lay.total_score:.1f}: {lay.score.recommendation if lay.score else ''}"
            )
            for insight in lay.score.insights[:3] if lay.score else []:
                click.echo(f"         - {insight}")

    for rec in result.insights.recommendations:
        click.echo(f"\n{rec}")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
def cli(verbose: bool) -> None:
    """Layover discovery CLI."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )


@cli.command("discover")
@click.argument("origin")
@click.argument("destination")
@click.argument("departure_date")
@click.option("--return-date", default=None, help="Return date (YYYY-MM-DD)")
@click.option("--adults", default=1, show_default=True, type=int)
@click.option("--children", default=0, show_default=True, type=int)
@click.option("--infants", default=0, show_default=True, type=int)
@click.option("--cabin", default="ECONOMY", help="Cabin class")
@click.option("--currency", default="USD", show_default=True)
@click.option("--max-connections", default=2, show_default=True, type=int)
@click.option("--min-layover", default=settings.min_layover_minutes, show_default=True, type=int)
@click.option("--max-layover", default=settings.max_layover_minutes, show_default=True, type=int)
@click.option("--interest", "interests", multiple=True, help="Preferred activity category")
@click.option("--checked-baggage", is_flag=True, help="Traveling with checked baggage")
@click.option("--json-output", is_flag=True, help="Output as JSON")
def discover(
    origin: str,
    destination: str,
    departure_date: str,
    return_date: str | None,
    adults: int,
    children: int,
    infants: int,
    cabin: str,
    currency: str,
    max_connections: int,
    min_layover: int,
    max_layover: int,
    interests: tuple[str, ...],
    checked_baggage: bool,
    json_output: bool,
) -> None:
    """Find, enrich and rank layovers between ORIGIN and DESTINATION."""
    request = SearchRequest(
        origin=origin,
        destination=destination,
        departure_date=date.fromisoformat(departure_date),
        return_date=date.fromisoformat(return_date) if return_date else None,
        cabin_class=CabinClass(cabin.upper()),
        passengers=PassengerCount(adults=adults, children=children, infants=infants),
        currency=currency,
        max_connections=max_connections,
        preferences=LayoverPreferences(
            min_layover_minutes=min_layover,
            max_layover_minutes=max_layover,
            preferred_activities=list(interests),
            has_checked_baggage=checked_baggage,
        ),
    )
    sink = CollectingErrorSink()

    async def _run() -> DiscoveryResult:
        service = build_discovery_service(error_sink=sink)
        try:
            return await service.discover(request)
        finally:
            await service.close()

    result = asyncio.run(_run())
    if json_output:
        click.echo(json.dumps(result.model_dump(mode="json"), indent=2))
        return

    _print_result(result)
    if sink.records:
        click.echo(f"\n{len(sink.records)} recovered error(s) during this search", err=True)


@cli.command("health")
def health_check() -> None:
    """Check health of all configured flight providers."""

    async def _run() -> list[ProviderHealth]:
        service = build_discovery_service()
        try:
            return await service.health()
        finally:
            await service.close()

    for health in asyncio.run(_run()):
        line = f"  {health.provider.value}: {health.status.upper()} ({health.response_time_ms}ms)"
        if health.error:
            line += f" - {health.error}"
        click.echo(line)
