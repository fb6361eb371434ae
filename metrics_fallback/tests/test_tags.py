import pytest

from metrics_fallback.tags import to_mapping, to_sequence


def test_mapping_to_sequence_keeps_iteration_order():
    tags = {"b": "2", "a": "1", "success": True}

    assert to_sequence(tags) == ["b:2", "a:1", "success:True"]


@pytest.mark.parametrize("empty", [{}, [], (), None])
def test_empty_tags_become_empty_list(empty):
    assert to_sequence(empty) == []
    assert to_mapping(empty) == {}


def test_sequence_passes_through_unchanged():
    tags = ("tag1:value1", "tag2:value2")

    assert to_sequence(tags) == ["tag1:value1", "tag2:value2"]


def test_sequence_splits_on_first_separator_only():
    assert to_mapping(["url:http://example.com:8080", "env:prod"]) == {
        "url": "http://example.com:8080",
        "env": "prod",
    }


def test_entry_without_separator_maps_to_empty_value():
    assert to_mapping(["standalone"]) == {"standalone": ""}


def test_single_string_is_treated_as_one_tag():
    assert to_sequence("env:prod") == ["env:prod"]
    assert to_mapping("env:prod") == {"env": "prod"}


def test_mapping_is_copied():
    tags = {"tag1": "value1"}

    result = to_mapping(tags)

    assert result == tags
    assert result is not tags


def test_mapping_round_trips_through_sequence():
    tags = {"service": "api", "region": "eu-west-1", "path": "/a:b"}

    assert to_mapping(to_sequence(tags)) == tags
