"""Display names for carriers that commonly appear in connecting itineraries."""

from __future__ import annotations

AIRLINE_NAMES: dict[str, str] = {
    "AA": "American Airlines",
    "AF": "Air France",
    "AY": "Finnair",
    "BA": "British Airways",
    "CX": "Cathay Pacific",
    "DL": "Delta Air Lines",
    "EK": "Emirates",
    "ET": "Ethiopian Airlines",
    "EY": "Etihad Airways",
    "IB": "Iberia",
    "JL": "Japan Airlines",
    "KE": "Korean Air",
    "KL": "KLM Royal Dutch Airlines",
    "LH": "Lufthansa",
    "LX": "Swiss International Air Lines",
    "NH": "All Nippon Airways",
    "QF": "Qantas",
    "QR": "Qatar Airways",
    "SQ": "Singapore Airlines",
    "TG": "Thai Airways",
    "TK": "Turkish Airlines",
    "UA": "United Airlines",
}


def airline_name(code: str) -> str:
    """Known display name for a carrier code, falling back to the code itself."""
    return AIRLINE_NAMES.get(code.upper(), code.upper())
