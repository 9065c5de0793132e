import asyncio
import logging
from typing import Any, Optional
import requests
from pydantic import ValidationError
from ..config import GEOCODE_URL, GOOGLE_API_KEY, REQUEST_TIMEOUT
from ..schemas import GeocodeResult
from .http import get_json

logger = logging.getLogger(__name__)


def parse_result(raw: Any) -> Optional[GeocodeResult]:
    """Validate one raw result; malformed data counts as no result."""
    if raw is None:
        return None
    if isinstance(raw, GeocodeResult):
        return raw
    try:
        return GeocodeResult.model_validate(raw)
    except ValidationError as e:
        logger.warning("Discarding malformed geocode result: %s", e)
        return None


def build_params(country: str, zipcode: str, address: str, api_key: str) -> dict:
    return {
        "key": api_key,
        "components": f"country:{country}|postal_code:{zipcode}",
        "sensor": "false",
        "address": address,
    }


class GoogleGeocoder:
    """
    Google Geocoding API transport.

    Calling an instance returns the first result of the response, or None
    when the request fails or the service reports anything but ``OK``.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        url: str = GEOCODE_URL,
        timeout: float = REQUEST_TIMEOUT,
    ):
        self.api_key = api_key if api_key is not None else GOOGLE_API_KEY
        self.url = url
        self.timeout = timeout

    def fetch(self, country: str, zipcode: str, address: str = "") -> Optional[GeocodeResult]:
        params = build_params(country, zipcode, address, self.api_key)
        try:
            data = get_json(self.url, params=params, timeout=self.timeout)
        except (requests.RequestException, ValueError) as e:
            logger.warning("Geocode request failed for %s/%s %r: %s", country, zipcode, address, e)
            return None

        status = data.get("status") if isinstance(data, dict) else None
        results = (data.get("results") or []) if status == "OK" else []
        if not results:
            logger.info("No geocode result for %s/%s %r (status=%s)", country, zipcode, address, status)
            return None
        return parse_result(results[0])

    async def __call__(self, country: str, zipcode: str, address: str = "") -> Optional[GeocodeResult]:
        return await asyncio.to_thread(self.fetch, country, zipcode, address)
