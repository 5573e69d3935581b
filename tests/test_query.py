"""Tests for query string serialization."""

import pytest
from pydantic import BaseModel

from declarest.bindings import ParameterBinding, ParamRole
from declarest.exceptions import BindingError, SerializationError
from declarest.query import serialize_query


def query(index, key=""):
    return ParameterBinding(ParamRole.QUERY, key, index)


class Filters(BaseModel):
    status: str
    limit: int | None = None


class TestSerializeQuery:
    """Tests for serialize_query."""

    def test_scalars_and_arrays(self):
        """Test arrays expand to repeated keys in order."""
        params = serialize_query([query(0)], [{"active": True, "tags": ["a", "b"]}])

        assert str(params) == "active=true&tags=a&tags=b"
        assert params.get_list("tags") == ["a", "b"]

    def test_object_elements_in_arrays_are_json(self):
        """Test object elements are JSON encoded before appending."""
        params = serialize_query([query(0)], [{"sort": [{"field": "name"}, "id"]}])
        assert params.get_list("sort") == ['{"field":"name"}', "id"]

    def test_nested_object_is_single_json_entry(self):
        """Test a nested mapping becomes exactly one JSON entry."""
        params = serialize_query([query(0)], [{"filter": {"age": {"gt": 18}}}])
        assert params.get_list("filter") == ['{"age":{"gt":18}}']

    def test_none_values_dropped(self):
        """Test None values and None array elements are skipped."""
        params = serialize_query([query(0)], [{"a": None, "b": [None, 1], "c": 0}])
        assert params.multi_items() == [("b", "1"), ("c", "0")]

    def test_absent_or_falsy_binding_skipped(self):
        """Test optional query objects may be omitted."""
        assert len(serialize_query([query(0)], [])) == 0
        assert len(serialize_query([query(0)], [None])) == 0
        assert len(serialize_query([query(0)], [{}])) == 0

    def test_last_scalar_write_wins(self):
        """Test repeated scalar keys across bindings keep only the last value."""
        params = serialize_query([query(0), query(1)], [{"page": 1}, {"page": 2}])
        assert params.get_list("page") == ["2"]

    def test_scalar_set_replaces_earlier_array_entries(self):
        """Test a scalar set after array entries replaces them all."""
        params = serialize_query([query(0), query(1)], [{"tag": ["a", "b"]}, {"tag": "c"}])
        assert params.get_list("tag") == ["c"]

    def test_arrays_accumulate_across_bindings(self):
        """Test array entries from several bindings all survive."""
        params = serialize_query([query(0), query(1)], [{"tag": ["a"]}, {"tag": ["b"]}])
        assert params.get_list("tag") == ["a", "b"]

    def test_named_query_binding(self):
        """Test a keyed binding sends a single value under its key."""
        params = serialize_query([query(0, "email")], ["ada@example.com"])
        assert params.multi_items() == [("email", "ada@example.com")]

    def test_named_query_binding_keeps_falsy_scalars(self):
        """Test a keyed binding sends 0 and False."""
        params = serialize_query([query(0, "page"), query(1, "draft")], [0, False])
        assert params.multi_items() == [("page", "0"), ("draft", "false")]

    def test_pydantic_model(self):
        """Test a model argument is dumped to a mapping."""
        params = serialize_query([query(0)], [Filters(status="open")])
        assert params.multi_items() == [("status", "open")]

    def test_unkeyed_scalar_rejected(self):
        """Test an unkeyed binding must receive a mapping."""
        with pytest.raises(BindingError, match="must be a mapping"):
            serialize_query([query(0)], ["page=2"])

    def test_circular_value_raises(self):
        """Test values that cannot be JSON encoded raise SerializationError."""
        circular = {}
        circular["self"] = circular
        with pytest.raises(SerializationError):
            serialize_query([query(0)], [{"filter": circular}])
