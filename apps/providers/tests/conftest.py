"""Sample provider payloads, trimmed to the fields the parsers read."""

from __future__ import annotations

import pytest


@pytest.fixture
def kiwi_payload() -> dict:
    return {
        "currency": "USD",
        "data": [
            {
                "id": "0f6a",
                "price": 612,
                "airlines": ["QR"],
                "route": [
                    {
                        "flyFrom": "JFK",
                        "flyTo": "DOH",
                        "cityFrom": "New York",
                        "cityTo": "Doha",
                        "airline": "QR",
                        "flight_no": 702,
                        "equipment": "77W",
                        "utc_departure": "2030-03-10T14:00:00.000Z",
                        "utc_arrival": "2030-03-11T02:00:00.000Z",
                        "return": 0,
                    },
                    {
                        "flyFrom": "DOH",
                        "flyTo": "SIN",
                        "cityFrom": "Doha",
                        "cityTo": "Singapore",
                        "airline": "QR",
                        "flight_no": 944,
                        "utc_departure": "2030-03-11T12:00:00.000Z",
                        "utc_arrival": "2030-03-11T20:00:00.000Z",
                        "return": 0,
                    },
                ],
            },
            {"id": "broken", "price": 100, "route": [{"flyFrom": "JFK"}]},
        ],
    }


def _duffel_place(code: str, city: str, country: str, zone: str) -> dict:
    return {
        "iata_code": code,
        "city_name": city,
        "iata_country_code": country,
        "time_zone": zone,
    }


@pytest.fixture
def duffel_data() -> dict:
    jfk = _duffel_place("JFK", "New York", "US", "America/New_York")
    dxb = _duffel_place("DXB", "Dubai", "AE", "Asia/Dubai")
    sin = _duffel_place("SIN", "Singapore", "SG", "Asia/Singapore")
    emirates = {"iata_code": "EK", "name": "Emirates"}
    return {
        "id": "orq_0001",
        "offers": [
            {
                "id": "off_0001",
                "total_amount": "640.50",
                "base_amount": "500.00",
                "tax_amount": "140.50",
                "total_currency": "USD",
                "owner": emirates,
                "slices": [
                    {
                        "segments": [
                            {
                                "origin": jfk,
                                "destination": dxb,
                                "departing_at": "2030-03-10T22:00:00",
                                "arriving_at": "2030-03-11T19:30:00",
                                "marketing_carrier": emirates,
                                "marketing_carrier_flight_number": "202",
                                "aircraft": {"name": "Airbus A380"},
                                "duration": "PT12H30M",
                            },
                            {
                                "origin": dxb,
                                "destination": sin,
                                "departing_at": "2030-03-12T02:30:00",
                                "arriving_at": "2030-03-12T14:00:00",
                                "marketing_carrier": emirates,
                                "marketing_carrier_flight_number": "354",
                                "duration": "PT7H30M",
                            },
                        ]
                    }
                ],
            },
            {"id": "off_bad", "total_amount": "1.00", "slices": []},
        ],
    }


@pytest.fixture
def amadeus_body() -> dict:
    return {
        "data": [
            {
                "id": "1",
                "itineraries": [
                    {
                        "segments": [
                            {
                                "departure": {"iataCode": "JFK", "at": "2030-03-10T11:00:00"},
                                "arrival": {"iataCode": "IST", "at": "2030-03-11T04:30:00"},
                                "carrierCode": "TK",
                                "number": "2",
                                "aircraft": {"code": "77W"},
                                "duration": "PT9H30M",
                            },
                            {
                                "departure": {"iataCode": "IST", "at": "2030-03-11T09:30:00"},
                                "arrival": {"iataCode": "SIN", "at": "2030-03-12T01:00:00"},
                                "carrierCode": "TK",
                                "number": "54",
                                "duration": "PT10H30M",
                            },
                        ]
                    }
                ],
                "price": {
                    "currency": "USD",
                    "total": "720.00",
                    "base": "600.00",
                    "grandTotal": "735.00",
                },
                "validatingAirlineCodes": ["TK"],
            }
        ],
        "dictionaries": {
            "locations": {
                "JFK": {"cityCode": "NYC", "countryCode": "US"},
                "IST": {"cityCode": "IST", "countryCode": "TR"},
                "SIN": {"cityCode": "SIN", "countryCode": "SG"},
            },
            "carriers": {"TK": "TURKISH AIRLINES"},
        },
    }


@pytest.fixture
def kiwi_bogota_payload() -> dict:
    """Copa via Panama City; none of these airports are in the reference table."""
    return {
        "currency": "USD",
        "data": [
            {
                "id": "7c21",
                "price": 288,
                "airlines": ["CM"],
                "route": [
                    {
                        "flyFrom": "BOG",
                        "flyTo": "PTY",
                        "cityFrom": "Bogota",
                        "cityTo": "Panama City",
                        "airline": "CM",
                        "flight_no": 221,
                        "local_departure": "2030-03-10T09:00:00.000Z",
                        "utc_departure": "2030-03-10T14:00:00.000Z",
                        "local_arrival": "2030-03-10T10:45:00.000Z",
                        "utc_arrival": "2030-03-10T15:45:00.000Z",
                        "return": 0,
                    },
                    {
                        "flyFrom": "PTY",
                        "flyTo": "MIA",
                        "cityFrom": "Panama City",
                        "cityTo": "Miami",
                        "airline": "CM",
                        "flight_no": 408,
                        "local_departure": "2030-03-10T13:45:00.000Z",
                        "utc_departure": "2030-03-10T18:45:00.000Z",
                        "local_arrival": "2030-03-10T17:55:00.000Z",
                        "utc_arrival": "2030-03-10T21:55:00.000Z",
                        "return": 0,
                    },
                ],
            }
        ],
    }


@pytest.fixture
def duffel_bogota_data() -> dict:
    """The same Copa itinerary as Duffel reports it."""
    bog = _duffel_place("BOG", "Bogota", "CO", "America/Bogota")
    pty = _duffel_place("PTY", "Panama City", "PA", "America/Panama")
    mia = _duffel_place("MIA", "Miami", "US", "America/New_York")
    copa = {"iata_code": "CM", "name": "Copa Airlines"}
    return {
        "id": "orq_0002",
        "offers": [
            {
                "id": "off_0002",
                "total_amount": "301.20",
                "total_currency": "USD",
                "owner": copa,
                "slices": [
                    {
                        "segments": [
                            {
                                "origin": bog,
                                "destination": pty,
                                "departing_at": "2030-03-10T09:00:00",
                                "arriving_at": "2030-03-10T10:45:00",
                                "marketing_carrier": copa,
                                "marketing_carrier_flight_number": "221",
                            },
                            {
                                "origin": pty,
                                "destination": mia,
                                "departing_at": "2030-03-10T13:45:00",
                                "arriving_at": "2030-03-10T17:55:00",
                                "marketing_carrier": copa,
                                "marketing_carrier_flight_number": "408",
                            },
                        ]
                    }
                ],
            }
        ],
    }
