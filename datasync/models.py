"""
Sync Layer Data Models

Base item model shared by every mirrored entity, the observable collection
state, and the API response envelopes.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


def normalize_identity(value: Any) -> Any:
    """
    Give every record a public ``id``

    Records keyed by a raw storage identifier (``_id``) get it copied to
    ``id`` when ``id`` is missing; storage-only keys (leading underscore,
    e.g. ``__v``) are dropped. Lists and nested records are walked.
    """
    if isinstance(value, list):
        return [normalize_identity(v) for v in value]
    if not isinstance(value, dict):
        return value
    normalized = {k: normalize_identity(v) for k, v in value.items() if not k.startswith("_")}
    if not normalized.get("id") and value.get("_id") is not None:
        normalized["id"] = str(value["_id"])
    return normalized


class SyncItem(BaseModel):
    """
    Base model for every entity held in a synced collection

    Wire names are camelCase; unknown fields are preserved so a round trip
    through the mirror never drops data the console does not model.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @model_validator(mode="before")
    @classmethod
    def normalize_identity(cls, data: Any) -> Any:
        """Map the storage identifier ``_id`` onto ``id``, nested records included"""
        return normalize_identity(data)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return value

    def to_wire(self) -> Dict[str, Any]:
        """Serialize with API field names"""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


ItemT = TypeVar("ItemT", bound=SyncItem)


@dataclass(frozen=True)
class SyncState(Generic[ItemT]):
    """
    Snapshot of a synced collection

    ``items`` is never mutated in place by the collection; every change
    installs a new list.
    """
    items: List[ItemT] = field(default_factory=list)
    loading: bool = False
    error: Optional[str] = None


# ============================================================================
# Response envelopes
# ============================================================================


class ApiEnvelope(BaseModel):
    """``{success, data, message}`` wrapper returned by every endpoint"""
    model_config = ConfigDict(extra="allow")

    success: bool = True
    data: Any = None
    message: Optional[str] = None


class ListEnvelope(ApiEnvelope):
    """List envelope with optional pagination fields"""
    data: List[Any] = Field(default_factory=list)
    total: Optional[int] = None
    page: Optional[int] = None
    pages: Optional[int] = None
    count: Optional[int] = None

    @field_validator("data", mode="before")
    @classmethod
    def default_list(cls, value: Any) -> Any:
        return value if isinstance(value, list) else []


@dataclass
class Page(Generic[ItemT]):
    """One page of a list endpoint"""
    items: List[ItemT]
    total: Optional[int] = None
    page: Optional[int] = None
    pages: Optional[int] = None
    count: Optional[int] = None


__all__ = [
    "normalize_identity",
    "SyncItem",
    "ItemT",
    "SyncState",
    "ApiEnvelope",
    "ListEnvelope",
    "Page",
]
