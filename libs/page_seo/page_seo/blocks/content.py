"""Blocs de contenu — text, video, countdown, separator, carousel, testimonial, map."""
from typing import List, Literal, Optional, Union

from pydantic import Field, field_validator

from ..core.i18n import LocalizedText
from .base import (
    BaseBlock, BlockModel,
    coerce_dict_list, coerce_number, coerce_optional_str, coerce_text,
)


class TextBlock(BaseBlock):
    type: Literal["text"] = "text"
    content: LocalizedText = ""
    style: Optional[str] = None

    @field_validator("content", mode="before")
    @classmethod
    def _text(cls, v):
        return coerce_text(v)

    @field_validator("style", mode="before")
    @classmethod
    def _style(cls, v):
        return coerce_optional_str(v)


class VideoBlock(BaseBlock):
    type: Literal["video"] = "video"
    title: LocalizedText = ""
    url: Optional[str] = None

    @field_validator("title", mode="before")
    @classmethod
    def _text(cls, v):
        return coerce_text(v)

    @field_validator("url", mode="before")
    @classmethod
    def _url(cls, v):
        return coerce_optional_str(v)


class CountdownBlock(BaseBlock):
    type: Literal["countdown"] = "countdown"
    title: LocalizedText = ""
    target_date: Optional[str] = Field(default=None, alias="targetDate")

    @field_validator("title", mode="before")
    @classmethod
    def _text(cls, v):
        return coerce_text(v)

    @field_validator("target_date", mode="before")
    @classmethod
    def _date(cls, v):
        return coerce_optional_str(v)


class SeparatorBlock(BaseBlock):
    type: Literal["separator"] = "separator"


class CarouselBlock(BaseBlock):
    type: Literal["carousel"] = "carousel"
    title: LocalizedText = ""
    images: List[dict] = []

    @field_validator("title", mode="before")
    @classmethod
    def _text(cls, v):
        return coerce_text(v)

    @field_validator("images", mode="before")
    @classmethod
    def _items(cls, v):
        return coerce_dict_list(v)


class TestimonialItem(BlockModel):
    name: LocalizedText = ""
    text: LocalizedText = ""
    role: LocalizedText = ""
    rating: Optional[Union[int, float]] = None

    @field_validator("name", "text", "role", mode="before")
    @classmethod
    def _text(cls, v):
        return coerce_text(v)

    @field_validator("rating", mode="before")
    @classmethod
    def _rating(cls, v):
        return coerce_number(v)


class TestimonialBlock(BaseBlock):
    type: Literal["testimonial"] = "testimonial"
    title: LocalizedText = ""
    testimonials: List[TestimonialItem] = []

    @field_validator("title", mode="before")
    @classmethod
    def _text(cls, v):
        return coerce_text(v)

    @field_validator("testimonials", mode="before")
    @classmethod
    def _items(cls, v):
        return coerce_dict_list(v)


class MapBlock(BaseBlock):
    type: Literal["map"] = "map"
    address: LocalizedText = ""

    @field_validator("address", mode="before")
    @classmethod
    def _text(cls, v):
        return coerce_text(v)
