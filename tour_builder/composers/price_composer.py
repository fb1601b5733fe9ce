"""Per-person and party pricing for a (possibly spliced) tour."""
from __future__ import annotations

import logging
from typing import List, Optional

from tour_builder.schemas import PriceLine, PriceQuote, Tour
from tour_builder.settings import CURRENCY

logger = logging.getLogger(__name__)


def per_person(tour: Optional[Tour]) -> float:
    """Per-head price of one tour.

    Exactly one tier applies, first match wins: regular price, promo price,
    then ``base_per_day * total_days``. A tour with no price fields costs 0.
    """
    if tour is None:
        return 0.0
    if tour.regular_per_person is not None:
        return tour.regular_per_person
    if tour.promo_per_person is not None:
        return tour.promo_per_person
    if tour.base_per_day is not None:
        return tour.base_per_day * tour.total_days
    return 0.0


def combined_per_person(base: Tour, insert: Optional[Tour] = None) -> float:
    return per_person(base) + (per_person(insert) if insert is not None else 0.0)


def total(per_person_price: float, passengers: int) -> float:
    if passengers < 1:
        logger.debug("Passenger count %d clamped to 1", passengers)
    return per_person_price * max(1, passengers)


def format_currency(amount: float, currency: str = CURRENCY, hide_cents: bool = False) -> str:
    if hide_cents:
        return f"{currency} {round(amount):,}"
    return f"{currency} {amount:,.2f}"


def price_for(
    base: Tour,
    insert: Optional[Tour] = None,
    passengers: int = 1,
    infants: int = 0,
    currency: str = CURRENCY,
) -> PriceQuote:
    """Quote a party's price, with a per-head breakdown when a tour is spliced in.

    Infants are carried on the quote but not priced.
    """
    base_pp = per_person(base)
    lines: List[PriceLine]
    if insert is None:
        lines = [PriceLine(label="Per head", value=base_pp)]
        pp = base_pp
    else:
        insert_pp = per_person(insert)
        pp = base_pp + insert_pp
        lines = [
            PriceLine(label="Base per head", value=base_pp),
            PriceLine(label="Inserted per head", value=insert_pp),
            PriceLine(label="Per head (total)", value=pp),
        ]

    party = max(1, passengers)
    infants = max(0, infants)
    amount = total(pp, passengers)
    formatted = format_currency(amount, currency)
    if infants:
        formatted = f"{formatted} + {infants} infant(s) (TBD)"
    return PriceQuote(
        per_person_lines=lines,
        per_person=pp,
        passengers=party,
        infants=infants,
        total=amount,
        currency=currency,
        formatted_total=formatted,
    )
