"""Bloc FAQ — liste question/réponse."""
from typing import List, Literal, Optional

from pydantic import field_validator

from ..core.i18n import LocalizedText
from .base import BaseBlock, BlockModel, coerce_dict_list, coerce_optional_str, coerce_text


class FAQItem(BlockModel):
    id: Optional[str] = None
    question: LocalizedText = ""
    answer: LocalizedText = ""

    @field_validator("question", "answer", mode="before")
    @classmethod
    def _text(cls, v):
        return coerce_text(v)

    @field_validator("id", mode="before")
    @classmethod
    def _id(cls, v):
        return coerce_optional_str(v)


class FAQBlock(BaseBlock):
    type: Literal["faq"] = "faq"
    title: LocalizedText = ""
    items: List[FAQItem] = []

    @field_validator("title", mode="before")
    @classmethod
    def _text(cls, v):
        return coerce_text(v)

    @field_validator("items", mode="before")
    @classmethod
    def _items(cls, v):
        return coerce_dict_list(v)
