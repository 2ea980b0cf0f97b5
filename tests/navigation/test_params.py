"""Tests for param normalization."""

from scenenav.navigation import filter_param, unite_params


class PressEvent:
    """Stand-in for a UI event object passed by a button handler."""

    def __init__(self):
        self.target = "button"


class TestFilterParam:
    """Test filter_param."""

    def test_plain_dict_kept(self):
        data = {"id": 1}
        assert filter_param(data) is data

    def test_scalars_wrapped(self):
        """Scalar payloads are wrapped under a data key."""
        assert filter_param("hello") == {"data": "hello"}
        assert filter_param(42) == {"data": 42}
        assert filter_param([1, 2]) == {"data": [1, 2]}

    def test_rich_objects_dropped(self):
        """Objects that are not plain data never become params."""
        assert filter_param(PressEvent()) == {}

    def test_dict_subclass_dropped(self):
        from collections import OrderedDict

        assert filter_param(OrderedDict(a=1)) == {}


class TestUniteParams:
    """Test unite_params."""

    def test_later_objects_override(self):
        """Later objects win on key conflicts."""
        res = unite_params("Detail", [{"a": 1}, {"b": 2}, {"a": 3}])

        assert res == {"a": 3, "b": 2, "routeName": "Detail"}

    def test_route_name_attached_without_params(self):
        assert unite_params("Home", []) == {"routeName": "Home"}

    def test_none_and_events_skipped(self):
        res = unite_params("Home", [None, PressEvent(), {"x": 1}])

        assert res == {"x": 1, "routeName": "Home"}

    def test_route_name_wins_over_param(self):
        res = unite_params("Home", [{"routeName": "Other"}])

        assert res["routeName"] == "Home"

    def test_scalar_merged_as_data(self):
        res = unite_params("Home", ["payload", {"y": 2}])

        assert res == {"data": "payload", "y": 2, "routeName": "Home"}
