from itertools import product

from contact_search.catalog.schema import default_schema
from contact_search.scoring.distance import levenshtein_distance
from contact_search.scoring.similarity import similarity
from contact_search.search.pipeline import SearchPipeline
from contact_search.store import SAMPLE_CONTACTS
from contact_search.types import SearchQuery

_WORDS = ["", "a", "jo", "John", "jon", "Johnson", "smith", "Smyth", "maj on", "+1-555-123"]
_QUERIES = ["jo", "john", "smyth", "campus", "engneering", "sen", "xyz999"]
_THRESHOLDS = [0.1, 0.3, 0.5, 0.6, 0.8, 1.0]


def test_distance_identity_symmetry_and_empty() -> None:
    for a, b in product(_WORDS, repeat=2):
        assert levenshtein_distance(a, a) == 0
        assert levenshtein_distance(a, b) == levenshtein_distance(b, a)
    for word in _WORDS:
        assert levenshtein_distance("", word) == len(word)


def test_similarity_is_bounded_and_reflexive() -> None:
    for a, b in product(_WORDS, repeat=2):
        assert 0.0 <= similarity(a, b) <= 1.0
        assert similarity(a, a) == 1.0


def test_raising_threshold_never_adds_results() -> None:
    pipeline = SearchPipeline()
    records = list(SAMPLE_CONTACTS)

    for raw_text in _QUERIES:
        counts = [
            len(pipeline.search(records, SearchQuery(raw_text=raw_text, threshold=t, max_results=100)))
            for t in _THRESHOLDS
        ]
        assert counts == sorted(counts, reverse=True), raw_text


def test_projection_matches_validated_fields() -> None:
    pipeline = SearchPipeline()
    schema = default_schema()
    requests = [(), ("email",), ("email", "bogusField"), ("bogusField",), ("year", "id", "gender")]

    for requested, raw_text in product(requests, ["", "jo"]):
        expected = set(schema.validate(requested))
        results = pipeline.search(
            list(SAMPLE_CONTACTS),
            SearchQuery(raw_text=raw_text, requested_fields=requested),
        )
        assert results
        assert all(set(result.record) == expected for result in results)


def test_repeated_search_is_identical() -> None:
    pipeline = SearchPipeline()
    records = list(SAMPLE_CONTACTS)
    query = SearchQuery(raw_text="jo", threshold=0.4)

    assert pipeline.search(records, query) == pipeline.search(records, query)
