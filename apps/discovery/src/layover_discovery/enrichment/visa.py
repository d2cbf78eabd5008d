"""Entry requirements for leaving the airport in a layover country."""

from __future__ import annotations

from typing import TYPE_CHECKING

from layover_core.schemas import VisaRequirement
from layover_discovery.config import settings

if TYPE_CHECKING:
    from collections.abc import Iterable


class VisaPolicy:
    """Country-code lookup against the configured visa lists.

    Countries on none of the lists map to ``NONE``: no known restriction.
    """

    def __init__(
        self,
        *,
        visa_free: Iterable[str] | None = None,
        evisa: Iterable[str] | None = None,
        visa_required: Iterable[str] | None = None,
    ) -> None:
        self._table: dict[str, VisaRequirement] = {}
        for codes, requirement in (
            (visa_free if visa_free is not None else settings.visa_free_countries,
             VisaRequirement.VISA_FREE),
            (evisa if evisa is not None else settings.evisa_countries,
             VisaRequirement.EVISA),
            (visa_required if visa_required is not None else settings.visa_required_countries,
             VisaRequirement.VISA_REQUIRED),
        ):
            for code in codes:
                self._table[code.upper()] = requirement

    def requirement(self, country: str) -> VisaRequirement:
        return self._table.get(country.upper(), VisaRequirement.NONE)
