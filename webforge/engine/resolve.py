"""Deep merge of configuration mappings.

Precedence, field by field:

* a key present in the overrides wins over the base;
* a mapping present on both sides is merged recursively;
* sequences are replaced wholesale, never concatenated;
* an override value of ``None`` is ignored.

Neither input is mutated.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel

M = TypeVar("M", bound=BaseModel)


def deep_merge(base: Mapping[str, Any], overrides: Mapping[str, Any] | None) -> dict[str, Any]:
    """Return a new mapping with *overrides* merged into *base*."""
    merged: dict[str, Any] = copy.deepcopy(dict(base))
    if not overrides:
        return merged

    for key, value in overrides.items():
        if value is None:
            continue
        current = merged.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def as_mapping(value: BaseModel | Mapping[str, Any] | None) -> dict[str, Any]:
    """Plain-data view of a model or mapping, keyed by field names."""
    if value is None:
        return {}
    if isinstance(value, BaseModel):
        return value.model_dump(mode="python", exclude_unset=True)
    return dict(value)


def merge_models(
    model_cls: type[M],
    base: BaseModel | Mapping[str, Any],
    overrides: BaseModel | Mapping[str, Any] | None,
) -> M:
    """Deep-merge *overrides* into *base* and validate the result.

    The base is dumped in full so its values survive; overrides that are
    models contribute only the fields that were explicitly set.
    """
    if isinstance(base, BaseModel):
        base_data = base.model_dump(mode="python")
    else:
        base_data = dict(base)
    return model_cls.model_validate(deep_merge(base_data, as_mapping(overrides)))
