# Copyright 2025 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Immutable records produced by the definition parser."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Optional, Tuple

from ..utils.source_location import SourceLocation


class _NoDefault:
    """Marker for "no defaultValue"; None is a legitimate default."""

    _instance: Optional["_NoDefault"] = None

    def __new__(cls) -> "_NoDefault":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_DEFAULT"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return (_NoDefault, ())


NO_DEFAULT = _NoDefault()

Member = Tuple[str, Any]


def freeze_literal(value: Any) -> Any:
    """Return a read-only copy of a literal: lists become tuples, dicts become mappingproxies."""
    if isinstance(value, (list, tuple)):
        return tuple(freeze_literal(item) for item in value)
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze_literal(item) for key, item in value.items()})
    return value


def thaw_literal(value: Any) -> Any:
    """Return a fresh plain list/dict copy of a frozen literal."""
    if isinstance(value, (list, tuple)):
        return [thaw_literal(item) for item in value]
    if isinstance(value, Mapping):
        return {key: thaw_literal(item) for key, item in value.items()}
    return value


def _freeze_members(members: Optional[Tuple[Member, ...]]) -> Optional[Tuple[Member, ...]]:
    if members is None:
        return None
    return tuple((label, freeze_literal(value)) for label, value in members)


def _members_to_list(members: Optional[Tuple[Member, ...]]) -> Optional[list]:
    if members is None:
        return None
    return [[label, thaw_literal(value)] for label, value in members]


def _freeze_entry(entry: Any) -> None:
    # Frozen dataclasses only allow post-init normalization through object.__setattr__
    object.__setattr__(entry, "default_value", freeze_literal(entry.default_value))
    object.__setattr__(entry, "members", _freeze_members(entry.members))
    if entry.schema is not None:
        object.__setattr__(entry, "schema", tuple(entry.schema))


@dataclass(frozen=True)
class Parameter:
    name: str
    type: str
    description: str = ""
    default_value: Any = NO_DEFAULT
    schema: Optional[Tuple["Parameter", ...]] = None
    members: Optional[Tuple[Member, ...]] = None

    def __post_init__(self) -> None:
        _freeze_entry(self)

    @property
    def has_default(self) -> bool:
        return self.default_value is not NO_DEFAULT

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "type": self.type,
            "description": self.description,
        }
        if self.has_default:
            data["defaultValue"] = thaw_literal(self.default_value)
        if self.schema is not None:
            data["schema"] = [entry.to_dict() for entry in self.schema]
        if self.members is not None:
            data["members"] = _members_to_list(self.members)
        return data


@dataclass(frozen=True)
class ReturnSpec:
    type: str = "any"
    description: str = ""
    name: Optional[str] = None
    default_value: Any = NO_DEFAULT
    schema: Optional[Tuple[Parameter, ...]] = None
    members: Optional[Tuple[Member, ...]] = None

    def __post_init__(self) -> None:
        _freeze_entry(self)

    @property
    def has_default(self) -> bool:
        return self.default_value is not NO_DEFAULT

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.type, "description": self.description}
        if self.name is not None:
            data["name"] = self.name
        if self.has_default:
            data["defaultValue"] = thaw_literal(self.default_value)
        if self.schema is not None:
            data["schema"] = [entry.to_dict() for entry in self.schema]
        if self.members is not None:
            data["members"] = _members_to_list(self.members)
        return data


@dataclass(frozen=True)
class Definition:
    """A parsed function signature plus the metadata found around it."""

    pathname: str
    description: str = ""
    context: Optional[SourceLocation] = None
    returns: ReturnSpec = field(default_factory=ReturnSpec)
    charge: int = 1
    keys: Tuple[str, ...] = ()
    params: Tuple[Parameter, ...] = ()

    def get_param(self, name: str) -> Optional[Parameter]:
        for param in self.params:
            if param.name == name:
                return param
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pathname": self.pathname,
            "description": self.description,
            "context": self.context.to_dict() if self.context is not None else None,
            "returns": self.returns.to_dict(),
            "charge": self.charge,
            "keys": list(self.keys),
            "params": [param.to_dict() for param in self.params],
        }
