from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict


def freeze_properties(properties: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    """Return a read-only view over a private copy of ``properties``.

    ``None`` becomes an empty mapping. The caller's mapping is never wrapped
    directly, so later changes to it are not visible through the result.
    """
    return MappingProxyType(dict(properties or {}))


def _rebuild(cls: type, values: Dict[str, Any]) -> "FrozenModel":
    return cls.model_validate(values)


class FrozenModel(BaseModel):
    """Base for immutable records.

    Copies never bypass validation: ``model_copy(update=...)`` and unpickling
    rebuild the record through ``model_validate``, and a copy without changes
    is the record itself.
    """

    model_config = ConfigDict(frozen=True)

    def _field_values(self) -> Dict[str, Any]:
        values = {}
        for name in type(self).model_fields:
            value = getattr(self, name)
            if isinstance(value, MappingProxyType):
                value = dict(value)
            values[name] = value
        return values

    def model_copy(self, *, update: Optional[Mapping[str, Any]] = None, deep: bool = False) -> "FrozenModel":
        if not update:
            return self
        return type(self).model_validate({**self._field_values(), **update})

    def __copy__(self) -> "FrozenModel":
        return self

    def __deepcopy__(self, memo: Optional[Dict[int, Any]] = None) -> "FrozenModel":
        return self

    def __reduce__(self):
        return _rebuild, (type(self), self._field_values())
