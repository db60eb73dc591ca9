"""Unit tests – filter compiler."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

import pytest
from hypothesis import given
from hypothesis import strategies as st

from esfilter.kernel.errors import (
    CustomQueryError,
    ErrorCode,
    StructExpectedError,
    StructNotSupportedError,
    TypeNotSupportedError,
)
from esfilter.query import (
    CustomSearch,
    Filter,
    FloatRange,
    FullTextSearchMust,
    FullTextSearchShould,
    FunctionQuery,
    IntRange,
    MultiMatchSearchShould,
    Nested,
    Script,
    ScriptQuery,
    TermQuery,
    TimeRange,
    build_bool_query,
    compile_exists,
    compile_must,
    es_field,
    marshal_query,
)


# ---------------------------------------------------------------------------
# Filter records
# ---------------------------------------------------------------------------


@dataclass
class Address:
    city: str = ""


@dataclass
class CovidFilter:
    vaccines: list[str] = es_field("Covid.Vaccine")
    doses: list[int] = es_field("Covid.Doses")


@dataclass
class PersonFilter:
    names: list[str] = es_field("Name")
    ids: list[int] = es_field("ID")
    active: bool | None = es_field("Active")
    age: IntRange | None = es_field("Age")
    height: FloatRange = es_field("Height", default_factory=FloatRange)
    born: TimeRange = es_field("BirthDate", default_factory=TimeRange)
    covid: Nested = es_field("Covid", default_factory=lambda: Nested(None))
    text: FullTextSearchShould | None = es_field("Name, SocialName")
    must_text: FullTextSearchMust | None = es_field("Name,SocialName")
    tags: MultiMatchSearchShould | None = es_field("Tag,Label")
    custom: CustomSearch | None = es_field()


@dataclass
class RecordFieldFilter:
    address: Address = es_field("Address", default_factory=lambda: Address("Lisbon"))


@dataclass
class ScalarFieldFilter:
    label: str = es_field("Label")


@dataclass
class ExistsFilter:
    has_email: bool | None = es_field("Email")
    has_phone: bool | None = es_field("Phone")
    covid: Nested = es_field("Covid", default_factory=lambda: Nested(None))


@dataclass
class CovidExists:
    vaccinated: bool | None = es_field("Covid.Vaccinated")
    tested: bool | None = es_field("Covid.Tested")


@dataclass
class ExistsWithList:
    names: list[str] = es_field("Name", default_factory=lambda: ["x"])


@dataclass
class ExistsWithRange:
    age: IntRange | None = es_field("Age", default_factory=lambda: IntRange(1, 2))


def _compile(record: object) -> dict:
    return build_bool_query(Filter(must=record)).to_dict()


# ---------------------------------------------------------------------------
# Top-level combination
# ---------------------------------------------------------------------------


class TestTopLevel:
    def test_empty_filter_is_match_all(self) -> None:
        assert build_bool_query(Filter()).to_dict() == {"match_all": {}}

    def test_all_fields_skipped_is_match_all(self) -> None:
        assert _compile(PersonFilter()) == {"match_all": {}}

    def test_single_must_node_is_unwrapped(self) -> None:
        assert _compile(PersonFilter(names=["John", "Mary"])) == {
            "terms": {"Name": ["John", "Mary"]}
        }

    def test_several_must_nodes_wrap_in_bool(self) -> None:
        out = _compile(PersonFilter(names=["John"], active=True))
        assert out == {
            "bool": {
                "must": [
                    {"terms": {"Name": ["John"]}},
                    {"term": {"Active": True}},
                ]
            }
        }

    def test_must_and_must_not(self) -> None:
        node = build_bool_query(
            Filter(must=PersonFilter(names=["John"]), must_not=PersonFilter(ids=[7]))
        )
        assert node.to_dict() == {
            "bool": {
                "must": {"terms": {"Name": ["John"]}},
                "must_not": {"terms": {"ID": [7]}},
            }
        }

    def test_single_must_not_is_not_unwrapped(self) -> None:
        node = build_bool_query(Filter(must_not=PersonFilter(ids=[1, 2])))
        assert node.to_dict() == {"bool": {"must_not": {"terms": {"ID": [1, 2]}}}}

    def test_exists_joins_must_side(self) -> None:
        node = build_bool_query(
            Filter(must=PersonFilter(names=["John"]), exists=ExistsFilter(has_email=True))
        )
        assert node.to_dict() == {
            "bool": {
                "must": [
                    {"terms": {"Name": ["John"]}},
                    {"exists": {"field": "Email"}},
                ]
            }
        }

    def test_compiling_does_not_mutate_the_filter(self) -> None:
        record = PersonFilter(names=["John"], covid=Nested(CovidFilter(vaccines=["a"])))
        filter = Filter(must=record)
        first = marshal_query(build_bool_query(filter))
        second = marshal_query(build_bool_query(filter))
        assert first == second
        assert record.names == ["John"]


# ---------------------------------------------------------------------------
# Must-mode dispatch
# ---------------------------------------------------------------------------


class TestMustFields:
    def test_uint_terms(self) -> None:
        assert _compile(PersonFilter(ids=[1, 2, 3])) == {"terms": {"ID": [1, 2, 3]}}

    def test_negative_uint_rejected(self) -> None:
        with pytest.raises(TypeNotSupportedError) as exc_info:
            _compile(PersonFilter(ids=[1, -2]))
        assert exc_info.value.name == "ids"

    def test_empty_list_skipped(self) -> None:
        assert compile_must(PersonFilter(names=[])) == []

    def test_optional_false_bool_is_kept(self) -> None:
        assert _compile(PersonFilter(active=False)) == {"term": {"Active": False}}

    def test_zero_range_behind_optional_is_open(self) -> None:
        assert _compile(PersonFilter(age=IntRange(0, 0))) == {
            "range": {
                "Age": {"from": None, "include_lower": True, "include_upper": True, "to": None}
            }
        }

    def test_zero_range_in_plain_field_is_skipped(self) -> None:
        assert compile_must(PersonFilter(height=FloatRange(0.0, 0.0))) == []

    def test_range_with_one_open_bound(self) -> None:
        assert _compile(PersonFilter(age=IntRange(18, 0))) == {
            "range": {
                "Age": {"from": 18, "include_lower": True, "include_upper": True, "to": None}
            }
        }

    def test_float_range(self) -> None:
        assert _compile(PersonFilter(height=FloatRange(1.5, 2.0))) == {
            "range": {
                "Height": {"from": 1.5, "include_lower": True, "include_upper": True, "to": 2.0}
            }
        }

    def test_time_range_renders_utc_with_z(self) -> None:
        start = datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert _compile(PersonFilter(born=TimeRange(from_=start))) == {
            "range": {
                "BirthDate": {
                    "from": "2024-01-01T00:00:00Z",
                    "include_lower": True,
                    "include_upper": True,
                    "to": None,
                }
            }
        }

    def test_full_text_should(self) -> None:
        out = _compile(PersonFilter(text=FullTextSearchShould(["a", "b"])))
        expected_match = lambda q: {  # noqa: E731
            "multi_match": {
                "fields": ["Name", "SocialName"],
                "max_expansions": 1024,
                "query": q,
                "type": "phrase_prefix",
            }
        }
        assert out == {"bool": {"should": [expected_match("a"), expected_match("b")]}}

    def test_full_text_must_single_string(self) -> None:
        out = _compile(PersonFilter(must_text=FullTextSearchMust(["john"])))
        assert out == {
            "bool": {
                "must": {
                    "multi_match": {
                        "fields": ["Name", "SocialName"],
                        "max_expansions": 1024,
                        "query": "john",
                        "type": "phrase_prefix",
                    }
                }
            }
        }

    def test_empty_full_text_behind_optional_is_match_all(self) -> None:
        assert _compile(PersonFilter(text=FullTextSearchShould([]))) == {"match_all": {}}

    def test_multi_match_is_best_fields_should(self) -> None:
        out = _compile(PersonFilter(tags=MultiMatchSearchShould(["red"])))
        assert out == {
            "bool": {
                "should": {
                    "multi_match": {
                        "fields": ["Tag", "Label"],
                        "max_expansions": 1024,
                        "query": "red",
                        "type": "best_fields",
                    }
                }
            }
        }

    def test_custom_query_node_used_as_is(self) -> None:
        custom = CustomSearch(FunctionQuery(lambda: TermQuery("Status", "ok")))
        assert _compile(PersonFilter(custom=custom)) == {"term": {"Status": "ok"}}

    def test_custom_query_may_return_a_mapping(self) -> None:
        custom = CustomSearch(FunctionQuery(lambda: {"script": {"source": "true"}}))
        assert _compile(PersonFilter(custom=custom)) == {"script": {"source": "true"}}

    def test_custom_script_query(self) -> None:
        script = Script("doc['Age'].value > params.min", params={"min": 18})
        custom = CustomSearch(FunctionQuery(lambda: ScriptQuery(script)))
        assert _compile(PersonFilter(names=["John"], custom=custom)) == {
            "bool": {
                "must": [
                    {"terms": {"Name": ["John"]}},
                    {
                        "script": {
                            "script": {
                                "params": {"min": 18},
                                "source": "doc['Age'].value > params.min",
                            }
                        }
                    },
                ]
            }
        }

    def test_custom_query_error_propagates(self) -> None:
        def boom() -> TermQuery:
            raise CustomQueryError("invalid custom query")

        with pytest.raises(CustomQueryError) as exc_info:
            _compile(PersonFilter(custom=CustomSearch(FunctionQuery(boom))))
        assert exc_info.value.code == ErrorCode.BAD_REQUEST

    @pytest.mark.parametrize("result", [None, "term", 42, ["a"]])
    def test_custom_query_must_return_node_or_mapping(self, result: object) -> None:
        custom = CustomSearch(FunctionQuery(lambda: result))  # type: ignore[arg-type, return-value]
        with pytest.raises(CustomQueryError) as exc_info:
            _compile(PersonFilter(custom=custom))
        assert exc_info.value.code == ErrorCode.BAD_REQUEST
        assert exc_info.value.detail == {"field": "custom", "type": type(result).__name__}

    def test_record_field_not_supported(self) -> None:
        with pytest.raises(StructNotSupportedError) as exc_info:
            _compile(RecordFieldFilter())
        assert exc_info.value.message == "[Address] struct is not supported"

    def test_scalar_field_not_supported(self) -> None:
        with pytest.raises(TypeNotSupportedError) as exc_info:
            _compile(ScalarFieldFilter(label="x"))
        assert exc_info.value.message == "[label] is of unknown type: str"
        assert exc_info.value.code == ErrorCode.BAD_REQUEST

    def test_zero_scalar_is_skipped(self) -> None:
        assert compile_must(ScalarFieldFilter()) == []

    def test_non_record_rejected(self) -> None:
        with pytest.raises(StructExpectedError) as exc_info:
            compile_must(42)
        assert exc_info.value.message == "[int] filter must be a struct"


# ---------------------------------------------------------------------------
# Nested folding
# ---------------------------------------------------------------------------


class TestNested:
    def test_empty_payload_produces_no_node(self) -> None:
        assert compile_must(PersonFilter(covid=Nested(CovidFilter()))) == []

    def test_single_inner_node(self) -> None:
        out = _compile(PersonFilter(covid=Nested(CovidFilter(vaccines=["pfizer"]))))
        assert out == {
            "nested": {"path": "Covid", "query": {"terms": {"Covid.Vaccine": ["pfizer"]}}}
        }

    def test_several_inner_nodes_wrap_in_bool_must(self) -> None:
        out = _compile(PersonFilter(covid=Nested(CovidFilter(vaccines=["pfizer"], doses=[2]))))
        assert out == {
            "nested": {
                "path": "Covid",
                "query": {
                    "bool": {
                        "must": [
                            {"terms": {"Covid.Vaccine": ["pfizer"]}},
                            {"terms": {"Covid.Doses": [2]}},
                        ]
                    }
                },
            }
        }

    def test_explicit_path_wins(self) -> None:
        out = _compile(
            PersonFilter(covid=Nested(CovidFilter(vaccines=["x"]), path="Health.Covid"))
        )
        assert out["nested"]["path"] == "Health.Covid"


# ---------------------------------------------------------------------------
# Exists mode
# ---------------------------------------------------------------------------


class TestExists:
    def test_true_and_false_flags(self) -> None:
        exists, not_exists = compile_exists(ExistsFilter(has_email=True, has_phone=False))
        assert [n.to_dict() for n in exists] == [{"exists": {"field": "Email"}}]
        assert [n.to_dict() for n in not_exists] == [{"exists": {"field": "Phone"}}]

    def test_only_exists_renders_single_clause_as_object(self) -> None:
        node = build_bool_query(Filter(exists=ExistsFilter(has_email=True)))
        assert node.to_dict() == {"bool": {"must": {"exists": {"field": "Email"}}}}

    def test_not_exists_goes_to_must_not(self) -> None:
        node = build_bool_query(Filter(exists=ExistsFilter(has_phone=False)))
        assert node.to_dict() == {"bool": {"must_not": {"exists": {"field": "Phone"}}}}

    def test_nested_lists_fold_independently(self) -> None:
        record = ExistsFilter(covid=Nested(CovidExists(vaccinated=True, tested=False)))
        exists, not_exists = compile_exists(record)
        assert [n.to_dict() for n in exists] == [
            {"nested": {"path": "Covid", "query": {"exists": {"field": "Covid.Vaccinated"}}}}
        ]
        assert [n.to_dict() for n in not_exists] == [
            {"nested": {"path": "Covid", "query": {"exists": {"field": "Covid.Tested"}}}}
        ]

    def test_list_field_not_supported(self) -> None:
        with pytest.raises(TypeNotSupportedError):
            compile_exists(ExistsWithList())

    def test_range_field_not_supported(self) -> None:
        with pytest.raises(StructNotSupportedError) as exc_info:
            compile_exists(ExistsWithRange())
        assert exc_info.value.name == "Age"


# ---------------------------------------------------------------------------
# Determinism
# ---------------------------------------------------------------------------


_names = st.lists(st.text(min_size=1, max_size=8), max_size=5)


class TestDeterminism:
    @given(names=_names, ids=st.lists(st.integers(min_value=0, max_value=10**6), max_size=5))
    def test_same_filter_same_bytes(self, names: list[str], ids: list[int]) -> None:
        first = Filter(must=PersonFilter(names=list(names), ids=list(ids)))
        second = Filter(must=PersonFilter(names=list(names), ids=list(ids)))
        assert marshal_query(build_bool_query(first)) == marshal_query(build_bool_query(second))
