from __future__ import annotations

from datetime import date
from typing import List, Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

from tour_builder.settings import CURRENCY, DEFAULT_COLOR_KEY

# ------- Catalog records (read-only inputs) -------
class Stop(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    city: str
    country: Optional[str] = None
    dwell_days: Optional[int] = Field(None, validation_alias=AliasChoices("dwell_days", "dwellDays", "days"))
    is_start: bool = Field(False, validation_alias=AliasChoices("is_start", "isStart"))
    is_end: bool = Field(False, validation_alias=AliasChoices("is_end", "isEnd"))

    @property
    def days_here(self) -> int:
        """Dwell length with the catalog fallback: absent or non-positive counts as one day."""
        if self.dwell_days is None or self.dwell_days <= 0:
            return 1
        return self.dwell_days


class Tour(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    id: str
    title: str = ""
    slug: Optional[str] = None
    line: Optional[str] = None
    stops: List[Stop] = Field(default_factory=list, validation_alias=AliasChoices("stops", "fullStops", "full_stops"))
    total_days: int = Field(0, ge=0, validation_alias=AliasChoices("total_days", "totalDays", "durationDays"))
    regular_per_person: Optional[float] = Field(
        None, validation_alias=AliasChoices("regular_per_person", "regularPricePerPerson", "regularPerPerson")
    )
    promo_per_person: Optional[float] = Field(
        None, validation_alias=AliasChoices("promo_per_person", "promoPricePerPerson", "promoPerPerson")
    )
    base_per_day: Optional[float] = Field(
        None, validation_alias=AliasChoices("base_per_day", "basePricePerDay", "basePerDay")
    )

    @property
    def color_key(self) -> str:
        return self.line or DEFAULT_COLOR_KEY


# ------- Derived itinerary structures -------
class StopRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    stop: Stop
    start_day: int
    end_day: int
    origin_tour_id: Optional[str] = None
    source: Literal["base", "insert"] = "base"
    color_key: str = DEFAULT_COLOR_KEY

    def covers(self, day: int) -> bool:
        return self.start_day <= day <= self.end_day

    def shifted(self, by: int) -> "StopRange":
        return self.model_copy(update={"start_day": self.start_day + by, "end_day": self.end_day + by})


class MergedItinerary(BaseModel):
    ranges: List[StopRange] = Field(default_factory=list)
    total_days: int = 0


class SpliceRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    insert_tour: Tour = Field(..., validation_alias=AliasChoices("insert_tour", "insertTour"))
    insert_after_day: int = Field(..., validation_alias=AliasChoices("insert_after_day", "insertAfterDay"))
    # the base tour is the first argument of build_merged_itinerary; kept here for hand-off payloads
    base_tour: Optional[Tour] = Field(None, validation_alias=AliasChoices("base_tour", "baseTour"))


class PlaceEntry(BaseModel):
    city: str
    color_key: str = DEFAULT_COLOR_KEY
    source: Literal["base", "insert"] = "base"


# ------- Segment selection (tagged variants) -------
class EmptySelection(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["empty"] = "empty"


class JoinAndLeave(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: Literal["join_and_leave"] = "join_and_leave"
    join_day: int = Field(..., ge=0, validation_alias=AliasChoices("join_day", "joinDay"))
    leave_day: int = Field(..., ge=0, validation_alias=AliasChoices("leave_day", "leaveDay"))

    @model_validator(mode="after")
    def _ordered(self) -> "JoinAndLeave":
        if self.join_day > self.leave_day:
            raise ValueError("join_day must not be after leave_day")
        return self


SegmentSelection = Union[EmptySelection, JoinAndLeave]


# ------- Layout -------
class Span(BaseModel):
    start_day: int
    end_day: int
    origin_tour_id: Optional[str] = None
    color_key: str = DEFAULT_COLOR_KEY
    lane: Literal[0, 1] = 0


class Connector(BaseModel):
    after_span_index: int
    from_lane: Literal[0, 1]
    to_lane: Literal[0, 1]


class SpanLayout(BaseModel):
    spans: List[Span] = Field(default_factory=list)
    connectors: List[Connector] = Field(default_factory=list)


# ------- Pricing -------
class PriceLine(BaseModel):
    label: str
    value: float


class PriceQuote(BaseModel):
    per_person_lines: List[PriceLine] = Field(default_factory=list)
    per_person: float = 0.0
    passengers: int = 1
    infants: int = 0
    total: float = 0.0
    currency: str = CURRENCY
    formatted_total: str = ""


class CustomRoute(BaseModel):
    """Booking hand-off record describing one spliced tour."""

    tour_slug: Optional[str] = None
    tour_title: str
    tour_line: Optional[str] = None
    duration_days: int
    price_per_person: float
    insert_after_day: int


# ------- Session -------
class DayEntry(BaseModel):
    index: int
    city: Optional[str] = None
    country: Optional[str] = None
    calendar_date: Optional[date] = None
    places: List[PlaceEntry] = Field(default_factory=list)
    selected: bool = False


class SessionView(BaseModel):
    itinerary: MergedItinerary
    days: List[DayEntry] = Field(default_factory=list)
    layout: SpanLayout = Field(default_factory=SpanLayout)
    selection: Union[EmptySelection, JoinAndLeave] = Field(default_factory=EmptySelection, discriminator="kind")
    day_count: int = 0
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    from_city: Optional[str] = None
    to_city: Optional[str] = None
    price: PriceQuote = Field(default_factory=PriceQuote)
    custom_route: Optional[CustomRoute] = None
