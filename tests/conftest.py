"""Pytest configuration and fixtures."""
import asyncio
import pytest
from geoform.schemas import AddressComponent, GeocodeResult


def component(long_name, *types):
    return AddressComponent(long_name=long_name, short_name=long_name, types=list(types))


def result(*components, postcode_localities=None):
    return GeocodeResult(
        address_components=list(components),
        postcode_localities=postcode_localities,
    )


class FakeTransport:
    """Answers queries from a dict keyed by address, recording every call."""

    def __init__(self, answers=None, delays=None):
        self.answers = answers or {}
        self.delays = delays or {}
        self.calls = []

    async def __call__(self, country, zipcode, address=""):
        self.calls.append((country, zipcode, address))
        await asyncio.sleep(self.delays.get(address, 0))
        answer = self.answers.get(address)
        if isinstance(answer, Exception):
            raise answer
        return answer


@pytest.fixture
def springfield():
    return result(
        component("Springfield", "locality", "political"),
        component("Illinois", "administrative_area_level_1", "political"),
        component("United States", "country", "political"),
    )


@pytest.fixture
def shared_postcode():
    """Primary answer for a postal code shared by three towns."""
    return result(
        component("Altdorf", "locality", "political"),
        component("Landkreis Nord", "administrative_area_level_3", "political"),
        component("Bayern", "administrative_area_level_1", "political"),
        postcode_localities=["Altdorf", "Bergheim", "Dorfen"],
    )


@pytest.fixture
def bergheim():
    return result(
        component("Bergheim", "locality", "political"),
        component("Landkreis Nord", "administrative_area_level_3", "political"),
        component("Bayern", "administrative_area_level_1", "political"),
    )


@pytest.fixture
def dorfen():
    return result(
        component("Dorfen", "locality", "political"),
        component("Landkreis Süd", "administrative_area_level_3", "political"),
        component("Bayern", "administrative_area_level_1", "political"),
    )
