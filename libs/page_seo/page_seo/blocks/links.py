"""Blocs contact — link, button, socials, messenger."""
from typing import List, Literal, Optional

from pydantic import field_validator

from ..core.i18n import LocalizedText
from .base import BaseBlock, BlockModel, coerce_dict_list, coerce_optional_str, coerce_text


class LinkBlock(BaseBlock):
    type: Literal["link"] = "link"
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


class ButtonBlock(LinkBlock):
    type: Literal["button"] = "button"


class SocialPlatform(BlockModel):
    name: str = ""
    url: Optional[str] = None
    icon: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, v):
        return coerce_optional_str(v) or ""

    @field_validator("url", "icon", mode="before")
    @classmethod
    def _str(cls, v):
        return coerce_optional_str(v)


class SocialsBlock(BaseBlock):
    type: Literal["socials"] = "socials"
    title: LocalizedText = ""
    platforms: List[SocialPlatform] = []

    @field_validator("title", mode="before")
    @classmethod
    def _text(cls, v):
        return coerce_text(v)

    @field_validator("platforms", mode="before")
    @classmethod
    def _items(cls, v):
        return coerce_dict_list(v)


class MessengerItem(BlockModel):
    platform: str = ""
    username: str = ""

    @field_validator("platform", "username", mode="before")
    @classmethod
    def _str(cls, v):
        return coerce_optional_str(v) or ""


class MessengerBlock(BaseBlock):
    type: Literal["messenger"] = "messenger"
    title: LocalizedText = ""
    messengers: List[MessengerItem] = []

    @field_validator("title", mode="before")
    @classmethod
    def _text(cls, v):
        return coerce_text(v)

    @field_validator("messengers", mode="before")
    @classmethod
    def _items(cls, v):
        return coerce_dict_list(v)
