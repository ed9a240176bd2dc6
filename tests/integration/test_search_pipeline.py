import pytest

from contact_search.catalog.schema import FieldDescriptor, FieldSchema
from contact_search.search.pipeline import SearchPipeline
from contact_search.store import SAMPLE_CONTACTS
from contact_search.types import SearchQuery


@pytest.fixture
def pipeline() -> SearchPipeline:
    return SearchPipeline()


def _nickname_schema(nickname_weight: float) -> FieldSchema:
    return FieldSchema(
        [
            FieldDescriptor(key="id", label="ID", searchable=False),
            FieldDescriptor(key="lastName", label="Last Name", default_weight=1.0),
            FieldDescriptor(key="nickname", label="Nickname", default_weight=nickname_weight),
        ],
        default_projection=["id"],
    )


def test_closer_fuzzy_match_ranks_first(pipeline: SearchPipeline) -> None:
    records = [{"firstName": "Maj on"}, {"firstName": "John"}]

    results = pipeline.search(records, SearchQuery(raw_text="Jon", threshold=0.6))

    assert [result.record["firstName"] for result in results] == ["John", "Maj on"]
    assert [result.score for result in results] == [0.75, 0.67]
    assert results[0].matched_fields == ["firstName"]


def test_blank_query_browses_newest_first(pipeline: SearchPipeline) -> None:
    results = pipeline.search(list(SAMPLE_CONTACTS), SearchQuery(raw_text="  ", max_results=2))

    assert [result.record["id"] for result in results] == ["101", "102"]
    assert all(result.score == 1.0 for result in results)
    assert all(result.matched_fields == ["all"] for result in results)
    assert all(result.field_scores == {"all": 1.0} for result in results)


def test_custom_browse_order() -> None:
    pipeline = SearchPipeline(browse_order=lambda records: sorted(records, key=lambda r: r["lastName"]))

    results = pipeline.search(list(SAMPLE_CONTACTS), SearchQuery(raw_text=""))

    assert [result.record["lastName"] for result in results] == ["Doe", "Johnson", "Smith"]


def test_requested_fields_keep_valid_keys_only(pipeline: SearchPipeline) -> None:
    query = SearchQuery(raw_text="", requested_fields=("email", "bogusField"))

    results = pipeline.search(list(SAMPLE_CONTACTS), query)

    assert results
    assert all(set(result.record) == {"email"} for result in results)


def test_no_requested_fields_returns_default_projection(pipeline: SearchPipeline) -> None:
    results = pipeline.search(list(SAMPLE_CONTACTS), SearchQuery(raw_text="jane"))

    assert len(results) == 1
    assert results[0].record == {"id": "102", "firstName": "Jane", "lastName": "Smith"}


def test_unmatched_query_returns_empty_list(pipeline: SearchPipeline) -> None:
    assert pipeline.search(list(SAMPLE_CONTACTS), SearchQuery(raw_text="xyz999")) == []


def test_prefix_match_ranks_before_equal_scoring_fuzzy_match() -> None:
    pipeline = SearchPipeline(_nickname_schema(2.4))
    records = [
        {"id": "fuzzy", "lastName": "Brown", "nickname": "sn"},
        {"id": "prefix", "lastName": "Smith", "nickname": ""},
    ]

    results = pipeline.search(records, SearchQuery(raw_text="sm", threshold=0.5))

    assert [result.record["id"] for result in results] == ["prefix", "fuzzy"]
    assert results[0].score == results[1].score == 1.2


def test_prefix_match_ranks_before_higher_scoring_fuzzy_match() -> None:
    pipeline = SearchPipeline(_nickname_schema(3.0))
    records = [
        {"id": "fuzzy", "lastName": "Brown", "nickname": "sn"},
        {"id": "prefix", "lastName": "Smith", "nickname": ""},
    ]

    results = pipeline.search(records, SearchQuery(raw_text="sm", threshold=0.5))

    assert [result.record["id"] for result in results] == ["prefix", "fuzzy"]
    assert results[0].score < results[1].score


def test_out_of_range_parameters_are_clamped(pipeline: SearchPipeline) -> None:
    records = [{"id": str(i), "firstName": f"Contact {i}"} for i in range(150)]

    assert len(pipeline.search(records, SearchQuery(raw_text="", max_results=1000))) == 100
    assert len(pipeline.search(records, SearchQuery(raw_text="", max_results=0))) == 1

    strict = pipeline.run(records, SearchQuery(raw_text="contact", threshold=5.0))
    lenient = pipeline.run(records, SearchQuery(raw_text="contact", threshold=-1.0))
    assert strict.threshold == 1.0
    assert lenient.threshold == 0.1


def test_results_respect_threshold_and_best_field_score(pipeline: SearchPipeline) -> None:
    threshold = 0.5
    results = pipeline.search(
        list(SAMPLE_CONTACTS),
        SearchQuery(raw_text="jon", threshold=threshold, max_results=100),
    )

    assert results
    for result in results:
        assert result.score >= threshold
        assert result.score == max(result.field_scores.values())
        assert list(result.field_scores) == result.matched_fields


def test_malformed_records_do_not_abort_the_scan(pipeline: SearchPipeline) -> None:
    records = [{}, object(), {"firstName": None}, {"id": "1", "firstName": "John"}]

    results = pipeline.search(records, SearchQuery(raw_text="john"))

    assert [result.record["id"] for result in results] == ["1"]


def test_exact_mode_reports_substring_matches(pipeline: SearchPipeline) -> None:
    results = pipeline.search(list(SAMPLE_CONTACTS), SearchQuery(raw_text="john", fuzzy=False))

    assert [result.record["id"] for result in results] == ["101", "103"]
    assert all(result.matched_fields == ["exact_match"] for result in results)
    assert all(result.score == 1.0 for result in results)


def test_exact_mode_tolerates_close_words(pipeline: SearchPipeline) -> None:
    results = pipeline.search(list(SAMPLE_CONTACTS), SearchQuery(raw_text="jon", fuzzy=False))

    assert [result.record["id"] for result in results] == ["101"]
    assert results[0].score == 1.0


def test_exact_mode_orders_substring_hits_before_close_words(pipeline: SearchPipeline) -> None:
    records = [{"id": "a", "firstName": "John"}, {"id": "b", "firstName": "Jonathan"}]

    results = pipeline.search(records, SearchQuery(raw_text="jon", fuzzy=False))

    assert [result.record["id"] for result in results] == ["b", "a"]
    assert all(result.score == 1.0 for result in results)
    assert all(result.matched_fields == ["exact_match"] for result in results)


def test_scores_round_half_up(pipeline: SearchPipeline) -> None:
    records = [{"id": "1", "firstName": "abcdefgh"}]

    results = pipeline.search(records, SearchQuery(raw_text="abcdexyz", threshold=0.6))

    assert [result.score for result in results] == [0.63]
    assert results[0].field_scores == {"firstName": 0.63}


def test_browse_compares_timestamps_as_instants(pipeline: SearchPipeline) -> None:
    records = [
        {"id": "older", "createdAt": "2025-01-15T10:30:00Z"},
        {"id": "garbled", "createdAt": "not-a-date"},
        {"id": "newer", "createdAt": "2025-01-15T10:30:00.500Z"},
        {"id": "undated"},
        {"id": "offset", "createdAt": "2025-01-15T12:00:00+02:00"},
    ]

    results = pipeline.search(records, SearchQuery(raw_text=""))

    assert [result.record["id"] for result in results] == [
        "newer",
        "older",
        "offset",
        "garbled",
        "undated",
    ]


def test_run_reports_envelope_metadata(pipeline: SearchPipeline) -> None:
    response = pipeline.run(list(SAMPLE_CONTACTS), SearchQuery(raw_text="smith"))

    assert response.query == "smith"
    assert response.threshold == 0.6
    assert response.fuzzy is True
    assert response.total == len(response.results) == 1
    assert response.total_contacts == 3

    browse = pipeline.run(list(SAMPLE_CONTACTS), SearchQuery(raw_text=""))
    assert browse.query is None
    assert browse.total == 3
