"""Merge and deduplicate offers returned by several providers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from layover_core.schemas import DedupPolicy

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from layover_core.schemas import Offer

logger = logging.getLogger(__name__)


def default_dedup_key(offer: Offer) -> str:
    """Route endpoints, minute-truncated local departure and primary airline."""
    return offer.dedup_key


def sort_key(offer: Offer, key: Callable[[Offer], str]) -> tuple[float, str, str, str]:
    """Ascending price; ties broken by content so provider timing never matters."""
    return (offer.price.total, key(offer), offer.source.value, offer.id)


def merge_offers(
    batches: Sequence[Sequence[Offer]],
    policy: DedupPolicy = DedupPolicy.LOWEST_PRICE,
    key: Callable[[Offer], str] = default_dedup_key,
) -> list[Offer]:
    """Merge per-provider offer lists into one unique, price-sorted list.

    * ``batches`` must be in provider-registration order; "first seen"
      refers to that order, never to completion order.
    * Offers sharing a key are one itinerary. ``FIRST_SEEN`` keeps the
      earliest; ``LOWEST_PRICE`` keeps the cheapest (earliest on ties).
    """
    groups: dict[str, Offer] = {}
    seen = 0
    for batch in batches:
        for offer in batch:
            seen += 1
            k = key(offer)
            existing = groups.get(k)
            if existing is None:
                groups[k] = offer
            elif (
                policy is DedupPolicy.LOWEST_PRICE
                and offer.price.total < existing.price.total
            ):
                groups[k] = offer

    merged = sorted(groups.values(), key=lambda o: sort_key(o, key))
    logger.info("Merged %d offers into %d unique offers", seen, len(merged))
    return merged
