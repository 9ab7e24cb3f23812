"""Records kept by the pet shop and their document and JSON forms."""

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any, Dict, Type, TypeVar

from bson import ObjectId

NULL_OBJECT_ID = ObjectId(b"\x00" * 12)

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_ZERO_VALUES: Dict[type, Any] = {str: "", int: 0, ObjectId: NULL_OBJECT_ID}
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

M = TypeVar("M", bound="Model")


class InvalidObjectId(ValueError):
    """Raised when a value cannot be read as an object id."""


def parse_object_id(value: Any) -> ObjectId:
    """Return the object id written as 24 hex digits in ``value``."""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and len(value) == 24 and set(value) <= _HEX_DIGITS:
        return ObjectId(value)
    raise InvalidObjectId(f"invalid object id: {value!r}")


def _decode_object_id(value: Any) -> ObjectId:
    if isinstance(value, str):
        return NULL_OBJECT_ID if value == "" else parse_object_id(value)
    if isinstance(value, Mapping) and isinstance(value.get("$oid"), str):
        return parse_object_id(value["$oid"])
    raise InvalidObjectId(f"invalid object id: {value!r}")


def _decode(name: str, kind: type, value: Any) -> Any:
    if value is None:
        return _ZERO_VALUES[kind]
    if kind is ObjectId:
        return _decode_object_id(value)
    if kind is int:
        if isinstance(value, int) and not isinstance(value, bool):
            if not _INT64_MIN <= value <= _INT64_MAX:
                raise ValueError(f"field {name!r} is out of range")
            return value
        raise ValueError(f"field {name!r} must be an integer")
    if isinstance(value, str):
        return value
    raise ValueError(f"field {name!r} must be a string")


@dataclass
class Model:
    """Base record: an id plus the fields declared by a subclass."""

    id: ObjectId = NULL_OBJECT_ID

    @classmethod
    def _data_fields(cls):
        return [f for f in fields(cls) if f.name != "id"]

    def to_document(self) -> Dict[str, Any]:
        """Database form; ``_id`` is left out while the id is unset."""
        document: Dict[str, Any] = {}
        if self.id != NULL_OBJECT_ID:
            document["_id"] = self.id
        for f in self._data_fields():
            document[f.name] = getattr(self, f.name)
        return document

    def to_json(self) -> Dict[str, Any]:
        """JSON-ready form with object ids written as hex strings."""
        result: Dict[str, Any] = {"id": str(self.id)}
        for f in self._data_fields():
            value = getattr(self, f.name)
            result[f.name] = str(value) if isinstance(value, ObjectId) else value
        return result

    @classmethod
    def from_document(cls: Type[M], document: Mapping) -> M:
        """Build a record from a database document."""
        object_id = document.get("_id")
        values: Dict[str, Any] = {"id": NULL_OBJECT_ID if object_id is None else object_id}
        for f in cls._data_fields():
            raw = document.get(f.name)
            values[f.name] = _ZERO_VALUES[f.type] if raw is None else raw
        return cls(**values)

    @classmethod
    def from_json(cls: Type[M], data: Any) -> M:
        """Build a record from a decoded JSON object.

        Keys match field names case-insensitively, unknown keys are ignored,
        missing or null fields keep their zero value.
        """
        if not isinstance(data, Mapping):
            raise ValueError("request body must be a JSON object")
        by_name = {f.name: f for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key, raw in data.items():
            if not isinstance(key, str):
                continue
            f = by_name.get(key) or by_name.get(key.lower())
            if f is not None:
                values[f.name] = _decode(f.name, f.type, raw)
        return cls(**values)


@dataclass
class Owner(Model):
    name: str = ""
    email: str = ""
    phone: str = ""


@dataclass
class Pet(Model):
    name: str = ""
    species: str = ""
    age: int = 0
    owner_id: ObjectId = NULL_OBJECT_ID


@dataclass
class Service(Model):
    name: str = ""
    description: str = ""
    price: int = 0


@dataclass
class Appointment(Model):
    pet_id: ObjectId = NULL_OBJECT_ID
    service_id: ObjectId = NULL_OBJECT_ID
    date: str = ""
    note: str = ""