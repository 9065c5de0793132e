import logging
from fastapi import Depends, FastAPI, Query, HTTPException
from fastapi.responses import RedirectResponse
from fastapi.middleware.cors import CORSMiddleware

from .config import GOOGLE_API_KEY, LOG_LEVEL
from .schemas import HiddenField, LookupResponse, SubmitRequest, SubmitResponse
from .core.classifier import MultipleMatches, NoMatch, SingleMatch
from .core.coordinator import QueryCoordinator, ValidationFailure

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="GeoForm Postal Code Lookup API",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_coordinator() -> QueryCoordinator:
    # one coordinator per request, lookups of different clients never collide
    return QueryCoordinator(api_key=GOOGLE_API_KEY)


def _fields(pairs) -> list:
    return [HiddenField(name=k, value=v) for k, v in pairs]


@app.get("/", include_in_schema=False)
async def root():
    return RedirectResponse(url="/docs")


@app.get("/lookup", response_model=LookupResponse, response_model_exclude_none=True)
async def lookup(
    country: str = Query("", description="Country code, e.g. DE"),
    zipcode: str = Query("", description="Postal code"),
    coordinator: QueryCoordinator = Depends(get_coordinator),
):
    outcome = await coordinator.start_lookup(country, zipcode)
    if outcome is None:
        raise HTTPException(status_code=409, detail="Lookup already in progress")

    areas = {n: dict(coordinator.index.areas[n]) for n in coordinator.index.names}
    if isinstance(outcome, ValidationFailure):
        return LookupResponse(status="invalid_input", message=outcome.message)
    if isinstance(outcome, NoMatch):
        return LookupResponse(status="no_match", message=outcome.message)
    if isinstance(outcome, SingleMatch):
        return LookupResponse(
            status="single",
            cities=[outcome.name],
            city=outcome.name,
            fields=_fields(outcome.hidden_fields()),
            submit_enabled=outcome.submit_enabled,
            areas=areas,
        )
    if isinstance(outcome, MultipleMatches):
        return LookupResponse(
            status="multiple",
            cities=outcome.names,
            submit_enabled=outcome.submit_enabled,
            areas=areas,
        )
    raise HTTPException(status_code=500, detail="Unknown lookup outcome")


@app.post("/submit", response_model=SubmitResponse)
async def submit(
    body: SubmitRequest,
    coordinator: QueryCoordinator = Depends(get_coordinator),
):
    outcome = await coordinator.start_lookup(body.country, body.zipcode)
    if isinstance(outcome, ValidationFailure):
        raise HTTPException(status_code=400, detail=outcome.message)

    pairs = coordinator.resolve_submission(body.city)
    if pairs is None:
        raise HTTPException(status_code=422, detail=f"{body.city!r} is not a valid city for this postal code")
    return SubmitResponse(city=body.city, fields=_fields(pairs))
