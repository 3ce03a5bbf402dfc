"""
Shared building blocks for document models.
"""
from datetime import datetime, timezone
from typing import Annotated, Any

from bson import ObjectId
from pydantic import BaseModel, BeforeValidator, ConfigDict, PlainSerializer, SerializationInfo
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """MongoDB hands back naive UTC datetimes; make them aware."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _coerce_object_id(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, str) and not ObjectId.is_valid(value):
        raise ValueError(f"'{value}' is not a valid ObjectId")
    return value


def _serialize_object_id(value: str, info: SerializationInfo) -> Any:
    if info.mode_is_json():
        return value
    return ObjectId(value)


# Stored as BSON ObjectId, handled in Python as its hex string.
ObjectIdStr = Annotated[
    str,
    BeforeValidator(_coerce_object_id),
    PlainSerializer(_serialize_object_id),
]


def new_object_id() -> str:
    return str(ObjectId())


def to_object_id(value: str) -> ObjectId:
    """Convert a hex id from a route or session into an ObjectId."""
    if not ObjectId.is_valid(value):
        raise ValueError(f"'{value}' is not a valid ObjectId")
    return ObjectId(value)


class DocumentModel(BaseModel):
    """
    Base for stored documents.

    Python attributes are snake_case; the stored field names are the
    camelCase aliases.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        validate_default=True,
    )

    def to_document(self) -> dict[str, Any]:
        """Dump to the stored shape, leaving `_id` out until one is assigned."""
        doc = self.model_dump(by_alias=True)
        if doc.get("_id") is None:
            doc.pop("_id", None)
        return doc
