"""
Classification of merged geocode results into candidate localities.

A batch of results is scanned component by component. Every ``locality``
component registers a candidate city, and ``administrative_area_level_*``
components are attributed to the city of the same result. Cities without
any administrative area are dropped, and what remains decides between
no match, a single match and a choice between several cities.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple, Union
from ..config import INVALID_ZIPCODE
from ..schemas import GeocodeResult

logger = logging.getLogger(__name__)

LOCALITY = "locality"
AREA_LEVEL_PREFIX = "administrative_area_level_"

AreaLevels = Dict[str, str]


@dataclass
class LocalityIndex:
    names: List[str] = field(default_factory=list)
    areas: Dict[str, AreaLevels] = field(default_factory=dict)

    def register(self, name: str) -> AreaLevels:
        if name not in self.areas:
            self.areas[name] = {}
            self.names.append(name)
        return self.areas[name]

    def prune(self) -> None:
        self.names = [n for n in self.names if self.areas.get(n)]
        self.areas = {n: self.areas[n] for n in self.names}

    def get(self, name: str) -> Optional[AreaLevels]:
        return self.areas.get(name)

    def __len__(self) -> int:
        return len(self.names)

    def __contains__(self, name: object) -> bool:
        return name in self.areas


@dataclass(frozen=True)
class NoMatch:
    message: str = INVALID_ZIPCODE

    @property
    def submit_enabled(self) -> bool:
        return False


@dataclass(frozen=True)
class SingleMatch:
    name: str
    area_levels: AreaLevels

    @property
    def submit_enabled(self) -> bool:
        return True

    def hidden_fields(self) -> List[Tuple[str, str]]:
        return [("city", self.name)]


@dataclass(frozen=True)
class MultipleMatches:
    names: List[str]

    @property
    def submit_enabled(self) -> bool:
        return True


Classification = Union[NoMatch, SingleMatch, MultipleMatches]


def _area_tags(types: Iterable[str]) -> List[str]:
    return [t for t in types if t.startswith(AREA_LEVEL_PREFIX)]


def _record(levels: AreaLevels, tag: str, name: str) -> None:
    # first occurrence of a tag wins
    if tag not in levels:
        levels[tag] = name


def build_locality_index(results: Iterable[GeocodeResult]) -> LocalityIndex:
    """
    Build the pruned locality index for a batch of results.

    Results are scanned in order, so the city order of the index is the
    discovery order across the batch. A city seen in several results keeps
    its first position and merges area levels tag by tag.
    """
    index = LocalityIndex()
    for result in results:
        current: Optional[AreaLevels] = None
        held: List[Tuple[str, str]] = []

        for component in result.address_components:
            if LOCALITY in component.types:
                current = index.register(component.long_name)
                # area components listed before the city belong to it
                for tag, name in held:
                    _record(current, tag, name)
                held = []

            for tag in _area_tags(component.types):
                if current is None:
                    held.append((tag, component.long_name))
                else:
                    _record(current, tag, component.long_name)

    found = len(index)
    index.prune()
    if found != len(index):
        logger.debug("Pruned %d localities without area levels", found - len(index))
    return index


def classify(index: LocalityIndex, invalid_message: str = INVALID_ZIPCODE) -> Classification:
    if not index.names:
        return NoMatch(message=invalid_message)
    if len(index.names) == 1:
        name = index.names[0]
        return SingleMatch(name=name, area_levels=dict(index.areas[name]))
    return MultipleMatches(names=list(index.names))


def classify_results(
    results: Iterable[GeocodeResult], invalid_message: str = INVALID_ZIPCODE
) -> Tuple[LocalityIndex, Classification]:
    index = build_locality_index(results)
    return index, classify(index, invalid_message)
