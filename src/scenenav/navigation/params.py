"""Normalization of caller-supplied navigation params."""

from collections.abc import Iterable
from typing import Any

# Payloads wrapped under a ``data`` key instead of being merged
_SCALAR_TYPES = (str, bytes, int, float, bool, list, tuple)


def filter_param(data: Any) -> dict[str, Any]:
    """Turn one supplied param object into a mergeable dict.

    Plain dicts are used as-is, scalar and sequence payloads are wrapped
    as ``{"data": value}``, and any other object (UI event payloads and the
    like) is dropped.
    """
    if isinstance(data, _SCALAR_TYPES):
        return {"data": data}
    if type(data) is not dict:
        return {}
    return data


def unite_params(route_name: str | None, params: Iterable[Any]) -> dict[str, Any]:
    """Merge param objects left to right and attach ``routeName``.

    Later objects override earlier keys. Falsy entries are skipped.

    Example:
        >>> unite_params("Detail", [{"a": 1}, {"b": 2}, {"a": 3}])
        {'a': 3, 'b': 2, 'routeName': 'Detail'}
    """
    res: dict[str, Any] = {}
    for param in params:
        if param:
            res = {**res, **filter_param(param)}
    res["routeName"] = route_name
    return res
