"""Bloc événement — date, lieu (physique ou en ligne), billetterie."""
from typing import Literal, Optional, Union

from pydantic import Field, field_validator

from ..core.i18n import LocalizedText
from .base import BaseBlock, coerce_flag, coerce_number, coerce_optional_str, coerce_text


class EventBlock(BaseBlock):
    type: Literal["event"] = "event"
    title: LocalizedText = ""
    description: LocalizedText = ""
    cover_url: Optional[str] = Field(default=None, alias="coverUrl")
    start_at: Optional[str] = Field(default=None, alias="startAt")
    end_at: Optional[str] = Field(default=None, alias="endAt")
    location_type: Optional[str] = Field(default=None, alias="locationType")
    location_value: Optional[str] = Field(default=None, alias="locationValue")
    is_paid: bool = Field(default=False, alias="isPaid")
    price: Optional[Union[int, float]] = None
    currency: Optional[str] = None
    status: Optional[str] = None

    @field_validator("title", "description", mode="before")
    @classmethod
    def _text(cls, v):
        return coerce_text(v)

    @field_validator(
        "cover_url", "start_at", "end_at", "location_type", "location_value",
        "currency", "status", mode="before",
    )
    @classmethod
    def _str(cls, v):
        return coerce_optional_str(v)

    @field_validator("is_paid", mode="before")
    @classmethod
    def _flag(cls, v):
        return coerce_flag(v)

    @field_validator("price", mode="before")
    @classmethod
    def _price(cls, v):
        return coerce_number(v)

    @property
    def is_online(self) -> bool:
        return (self.location_type or "").lower() == "online"

    @property
    def is_listed(self) -> bool:
        """Brouillons et événements clos exclus des données structurées."""
        return (self.status or "published").lower() not in ("draft", "closed")
