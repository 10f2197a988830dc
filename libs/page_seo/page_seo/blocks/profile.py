"""Blocs identité — profile, avatar."""
from typing import Literal, Optional

from pydantic import Field, field_validator

from ..core.i18n import LocalizedText
from .base import BaseBlock, coerce_optional_str, coerce_text


class ProfileBlock(BaseBlock):
    type: Literal["profile"] = "profile"
    name: LocalizedText = ""
    bio: LocalizedText = ""
    avatar: Optional[str] = None

    @field_validator("name", "bio", mode="before")
    @classmethod
    def _text(cls, v):
        return coerce_text(v)

    @field_validator("avatar", mode="before")
    @classmethod
    def _url(cls, v):
        return coerce_optional_str(v)


class AvatarBlock(BaseBlock):
    type: Literal["avatar"] = "avatar"
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    name: LocalizedText = ""
    subtitle: LocalizedText = ""

    @field_validator("name", "subtitle", mode="before")
    @classmethod
    def _text(cls, v):
        return coerce_text(v)

    @field_validator("image_url", mode="before")
    @classmethod
    def _url(cls, v):
        return coerce_optional_str(v)
