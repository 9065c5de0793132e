"""Tests for locality classification."""
from geoform.core.classifier import (
    MultipleMatches,
    NoMatch,
    SingleMatch,
    build_locality_index,
    classify,
    classify_results,
)
from conftest import component, result


def test_single_locality(springfield):
    """One locality with an area level gives a single match."""
    index, outcome = classify_results([springfield])

    assert outcome == SingleMatch("Springfield", {"administrative_area_level_1": "Illinois"})
    assert outcome.submit_enabled
    assert outcome.hidden_fields() == [("city", "Springfield")]
    assert index.names == ["Springfield"]


def test_locality_without_area_levels_is_pruned():
    """Cities without administrative areas never become candidates."""
    batch = [
        result(
            component("Nowhere", "locality", "political"),
            component("Somewhere", "country", "political"),
            component("12345", "postal_code"),
        )
    ]
    index, outcome = classify_results(batch)

    assert isinstance(outcome, NoMatch)
    assert outcome.message == "Invalid zipcode"
    assert not outcome.submit_enabled
    assert index.names == []
    assert "Nowhere" not in index


def test_empty_batch_is_no_match():
    _, outcome = classify_results([], invalid_message="Ungültige PLZ")
    assert outcome == NoMatch("Ungültige PLZ")


def test_duplicate_locality_merges_first_seen(shared_postcode):
    """A city found in two results appears once with merged levels."""
    second = result(
        component("Altdorf", "locality", "political"),
        component("Oberbayern", "administrative_area_level_2", "political"),
        component("Somewhere Else", "administrative_area_level_1", "political"),
    )
    index = build_locality_index([shared_postcode, second])

    assert index.names == ["Altdorf"]
    assert index.get("Altdorf") == {
        "administrative_area_level_3": "Landkreis Nord",
        "administrative_area_level_1": "Bayern",
        "administrative_area_level_2": "Oberbayern",
    }


def test_first_tag_within_result_wins():
    batch = [
        result(
            component("Springfield", "locality"),
            component("Illinois", "administrative_area_level_1"),
            component("Not Illinois", "administrative_area_level_1"),
        )
    ]
    index = build_locality_index(batch)
    assert index.get("Springfield") == {"administrative_area_level_1": "Illinois"}


def test_area_levels_attributed_to_latest_locality():
    batch = [
        result(
            component("A", "locality"),
            component("State A", "administrative_area_level_1"),
            component("B", "locality"),
            component("County B", "administrative_area_level_2"),
        )
    ]
    index = build_locality_index(batch)

    assert index.names == ["A", "B"]
    assert index.get("A") == {"administrative_area_level_1": "State A"}
    assert index.get("B") == {"administrative_area_level_2": "County B"}


def test_area_levels_before_locality_belong_to_it():
    batch = [
        result(
            component("Illinois", "administrative_area_level_1"),
            component("Springfield", "locality"),
        ),
        result(component("Shelbyville", "locality")),
    ]
    index = build_locality_index(batch)

    assert index.names == ["Springfield"]
    assert index.get("Springfield") == {"administrative_area_level_1": "Illinois"}


def test_area_levels_do_not_cross_results():
    batch = [
        result(component("Springfield", "locality")),
        result(component("Illinois", "administrative_area_level_1")),
    ]
    _, outcome = classify_results(batch)
    assert isinstance(outcome, NoMatch)


def test_multiple_matches_keep_discovery_order(shared_postcode, bergheim, dorfen):
    index, outcome = classify_results([shared_postcode, dorfen, bergheim])

    assert outcome == MultipleMatches(["Altdorf", "Dorfen", "Bergheim"])
    assert outcome.submit_enabled
    assert classify(index) == outcome


def test_names_are_not_normalized():
    batch = [
        result(component("Altdorf", "locality"), component("Bayern", "administrative_area_level_1")),
        result(component("ALTDORF", "locality"), component("Bayern", "administrative_area_level_1")),
    ]
    _, outcome = classify_results(batch)
    assert outcome == MultipleMatches(["Altdorf", "ALTDORF"])
