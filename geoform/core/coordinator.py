"""
Lookup orchestration against the geocoding transport.

A lookup first queries the postal code alone. When the answer names other
localities sharing the postal code, one extra query per locality is sent
concurrently and the lookup waits for all of them before classifying the
merged batch. Only one lookup runs at a time per coordinator.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, List, Optional, Tuple, Union
from ..config import ENTER_ZIPCODE, INVALID_ZIPCODE, SELECT_COUNTRY
from ..schemas import GeocodeResult
from .classifier import (
    LOCALITY,
    Classification,
    LocalityIndex,
    NoMatch,
    classify_results,
)
from .geocode import GoogleGeocoder, parse_result
from .submission import resolve_submission

logger = logging.getLogger(__name__)

Transport = Callable[[str, str, str], Awaitable[Any]]


@dataclass(frozen=True)
class Messages:
    invalid_zipcode: str = INVALID_ZIPCODE
    select_country: str = SELECT_COUNTRY
    enter_zipcode: str = ENTER_ZIPCODE


@dataclass(frozen=True)
class ValidationFailure:
    message: str

    @property
    def submit_enabled(self) -> bool:
        return False


LookupOutcome = Union[ValidationFailure, Classification]


class LookupState(Enum):
    IDLE = "idle"
    IN_FLIGHT = "in_flight"


@dataclass
class LookupSession:
    pending: List[str]
    collected: List[GeocodeResult] = field(default_factory=list)
    done: bool = False

    def settle(self, name: str, result: Optional[GeocodeResult]) -> bool:
        """Mark ``name`` as answered; returns True once nothing is pending."""
        if name in self.pending:
            self.pending.remove(name)
        if result is not None:
            self.collected.append(result)
        self.done = not self.pending
        return self.done


def primary_cities(result: GeocodeResult) -> List[str]:
    return [c.long_name for c in result.address_components if LOCALITY in c.types]


def sibling_localities(result: GeocodeResult) -> List[str]:
    """Localities sharing the postal code that the result itself does not name."""
    known = primary_cities(result)
    extras: List[str] = []
    for name in result.postcode_localities or []:
        if name not in known and name not in extras:
            extras.append(name)
    return extras


class QueryCoordinator:
    def __init__(
        self,
        transport: Optional[Transport] = None,
        api_key: Optional[str] = None,
        messages: Optional[Messages] = None,
    ):
        self.transport = transport if transport is not None else GoogleGeocoder(api_key)
        self.messages = messages or Messages()
        self.state = LookupState.IDLE
        self.index = LocalityIndex()
        self.last_outcome: Optional[LookupOutcome] = None
        self._session: Optional[LookupSession] = None

    @property
    def in_flight(self) -> bool:
        return self.state is LookupState.IN_FLIGHT

    async def start_lookup(self, country: str, postal_code: str) -> Optional[LookupOutcome]:
        """
        Run one lookup for ``country`` and ``postal_code``.

        Returns None without doing anything while another lookup is in
        flight. Missing input gives a ValidationFailure and no request is
        sent; every other path ends in a classification.
        """
        if self.in_flight:
            logger.debug("Lookup for %s/%s ignored, another one is in flight", country, postal_code)
            return None

        if not country:
            return self._finish(ValidationFailure(self.messages.select_country))
        if not postal_code:
            return self._finish(ValidationFailure(self.messages.enter_zipcode))

        self.state = LookupState.IN_FLIGHT
        try:
            outcome = await self._run(country, postal_code)
        finally:
            self._session = None
            self.state = LookupState.IDLE
        logger.info("Lookup %s/%s finished: %s", country, postal_code, type(outcome).__name__)
        return self._finish(outcome)

    def resolve_submission(self, city: Optional[str]) -> Optional[List[Tuple[str, str]]]:
        return resolve_submission(city, self.index)

    def _finish(self, outcome: LookupOutcome) -> LookupOutcome:
        self.last_outcome = outcome
        return outcome

    async def _run(self, country: str, postal_code: str) -> Classification:
        self.index = LocalityIndex()
        primary = await self._query(country, postal_code, "")
        if primary is None:
            return NoMatch(self.messages.invalid_zipcode)

        extras = sibling_localities(primary)
        if not extras:
            return self._classify([primary])

        logger.info("Postal code %s/%s shared by %d more localities", country, postal_code, len(extras))
        session = LookupSession(pending=list(extras), collected=[primary])
        self._session = session
        await asyncio.gather(
            *(self._receive(session, country, postal_code, name) for name in extras)
        )
        return self._classify(session.collected)

    async def _receive(self, session: LookupSession, country: str, postal_code: str, name: str) -> None:
        result = await self._query(country, postal_code, name)
        if result is None:
            logger.debug("No result for locality %r, skipping it", name)
        session.settle(name, result)

    async def _query(self, country: str, postal_code: str, address: str) -> Optional[GeocodeResult]:
        try:
            raw = await self.transport(country, postal_code, address)
        except Exception as e:
            logger.warning("Geocode query %s/%s %r failed: %s", country, postal_code, address, e)
            return None
        return parse_result(raw)

    def _classify(self, results: List[GeocodeResult]) -> Classification:
        self.index, outcome = classify_results(results, self.messages.invalid_zipcode)
        return outcome
