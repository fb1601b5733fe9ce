from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional

from fastapi import Body, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from tour_builder.catalog import load_catalog
from tour_builder.composers.price_composer import price_for
from tour_builder.composers.segment_selector import select_day
from tour_builder.errors import InvalidSpliceDay
from tour_builder.orchestrator import build_session_view
from tour_builder.schemas import EmptySelection, JoinAndLeave, SegmentSelection, Tour
from tour_builder.settings import allowed_origins, get_logger

logger = get_logger(__name__)

app = FastAPI(title="Tour Builder Itinerary API")

# Local UIs (Vite dev server, static builds) call this API directly; narrow the
# list via TOUR_BUILDER_ALLOWED_ORIGINS.
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

catalog = load_catalog()


class SelectionPayload(BaseModel):
    """Wire form of a selection: both days or neither."""

    join_day: Optional[int] = None
    leave_day: Optional[int] = None

    @model_validator(mode="after")
    def _paired(self) -> "SelectionPayload":
        if (self.join_day is None) != (self.leave_day is None):
            raise ValueError("join_day and leave_day must be given together")
        if self.join_day is not None and not 0 <= self.join_day <= self.leave_day:
            raise ValueError("expected 0 <= join_day <= leave_day")
        return self

    def to_selection(self) -> SegmentSelection:
        if self.join_day is None or self.leave_day is None:
            return EmptySelection()
        return JoinAndLeave(join_day=self.join_day, leave_day=self.leave_day)


# ------- Request models -------
class ItineraryRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    base: Tour
    insert: Optional[Tour] = None
    insert_after_day: Optional[int] = None
    selection: Optional[SelectionPayload] = None
    passengers: int = 1
    infants: int = 0
    departure: Optional[date] = None


class SelectionRequest(BaseModel):
    selection: SelectionPayload = SelectionPayload()
    day: int
    total_days: Optional[int] = None


class PriceRequest(BaseModel):
    base: Tour
    insert: Optional[Tour] = None
    passengers: int = 1
    infants: int = 0


def _validate(model: type, payload: Dict[str, Any]) -> Any:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.errors(include_url=False, include_context=False)) from exc


def _session_response(req: ItineraryRequest) -> Dict[str, Any]:
    try:
        view = build_session_view(
            req.base,
            insert=req.insert,
            insert_after_day=req.insert_after_day,
            selection=req.selection.to_selection() if req.selection else None,
            passengers=req.passengers,
            infants=req.infants,
            departure=req.departure,
        )
    except InvalidSpliceDay as exc:
        logger.info("Rejected splice for %s: %s", req.base.id, exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return view.model_dump(mode="json")


@app.post("/api/itinerary")
async def api_itinerary(payload: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
    """Full recomputation for the customisation screen."""
    return _session_response(_validate(ItineraryRequest, payload))


@app.post("/api/selection")
async def api_selection(payload: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
    req: SelectionRequest = _validate(SelectionRequest, payload)
    return select_day(req.selection.to_selection(), req.day, req.total_days).model_dump(mode="json")


@app.post("/api/price")
async def api_price(payload: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
    req: PriceRequest = _validate(PriceRequest, payload)
    return price_for(req.base, req.insert, passengers=req.passengers, infants=req.infants).model_dump(mode="json")


@app.get("/api/tours/{identifier}/itinerary")
async def api_catalog_itinerary(
    identifier: str,
    insert: Optional[str] = Query(None),
    after: Optional[int] = Query(None),
    passengers: int = Query(1),
    departure: Optional[date] = Query(None),
) -> Dict[str, Any]:
    """Same as ``POST /api/itinerary`` with tours looked up in the catalog."""
    try:
        base = catalog.get(identifier)
        insert_tour = catalog.get(insert) if insert else None
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=f"Unknown tour: {exc.args[0]}") from exc
    req = ItineraryRequest(
        base=base,
        insert=insert_tour,
        insert_after_day=after,
        passengers=passengers,
        departure=departure,
    )
    return _session_response(req)
