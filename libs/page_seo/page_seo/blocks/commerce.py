"""Blocs commerciaux — product, pricing, catalog, booking."""
from typing import List, Literal, Optional, Union

from pydantic import Field, field_validator

from ..core.i18n import LocalizedText
from .base import (
    BaseBlock, BlockModel,
    coerce_dict_list, coerce_number, coerce_optional_str, coerce_text,
)

Number = Optional[Union[int, float]]


class ProductBlock(BaseBlock):
    type: Literal["product"] = "product"
    name: LocalizedText = ""
    description: LocalizedText = ""
    price: Number = None
    currency: Optional[str] = None
    image: Optional[str] = None
    buy_link: Optional[str] = Field(default=None, alias="buyLink")

    @field_validator("name", "description", mode="before")
    @classmethod
    def _text(cls, v):
        return coerce_text(v)

    @field_validator("price", mode="before")
    @classmethod
    def _price(cls, v):
        return coerce_number(v)

    @field_validator("currency", "image", "buy_link", mode="before")
    @classmethod
    def _str(cls, v):
        return coerce_optional_str(v)


class PricingItem(BlockModel):
    id: Optional[str] = None
    name: LocalizedText = ""
    description: LocalizedText = ""
    price: Number = None
    currency: Optional[str] = None
    service_type: Optional[str] = Field(default=None, alias="serviceType")

    @field_validator("name", "description", mode="before")
    @classmethod
    def _text(cls, v):
        return coerce_text(v)

    @field_validator("price", mode="before")
    @classmethod
    def _price(cls, v):
        return coerce_number(v)

    @field_validator("id", "currency", "service_type", mode="before")
    @classmethod
    def _str(cls, v):
        return coerce_optional_str(v)


class PricingBlock(BaseBlock):
    type: Literal["pricing"] = "pricing"
    title: LocalizedText = ""
    items: List[PricingItem] = []
    currency: Optional[str] = None

    @field_validator("title", mode="before")
    @classmethod
    def _text(cls, v):
        return coerce_text(v)

    @field_validator("items", mode="before")
    @classmethod
    def _items(cls, v):
        return coerce_dict_list(v)

    @field_validator("currency", mode="before")
    @classmethod
    def _str(cls, v):
        return coerce_optional_str(v)


class CatalogCategory(BlockModel):
    name: LocalizedText = ""

    @field_validator("name", mode="before")
    @classmethod
    def _text(cls, v):
        return coerce_text(v)


class CatalogItem(BlockModel):
    name: LocalizedText = ""
    description: LocalizedText = ""
    price: Number = None

    @field_validator("name", "description", mode="before")
    @classmethod
    def _text(cls, v):
        return coerce_text(v)

    @field_validator("price", mode="before")
    @classmethod
    def _price(cls, v):
        return coerce_number(v)


class CatalogBlock(BaseBlock):
    type: Literal["catalog"] = "catalog"
    title: LocalizedText = ""
    categories: List[CatalogCategory] = []
    items: List[CatalogItem] = []
    currency: Optional[str] = None

    @field_validator("title", mode="before")
    @classmethod
    def _text(cls, v):
        return coerce_text(v)

    @field_validator("categories", "items", mode="before")
    @classmethod
    def _items(cls, v):
        return coerce_dict_list(v)

    @field_validator("currency", mode="before")
    @classmethod
    def _str(cls, v):
        return coerce_optional_str(v)


class BookingBlock(BaseBlock):
    type: Literal["booking"] = "booking"
    title: LocalizedText = ""
    description: LocalizedText = ""

    @field_validator("title", "description", mode="before")
    @classmethod
    def _text(cls, v):
        return coerce_text(v)
