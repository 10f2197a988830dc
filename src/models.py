"""
Data models — Page, Block
SQLAlchemy (SQLite), miroir en lecture du stockage des pages link-in-bio.
"""
import uuid
from datetime import datetime
from typing import List, Optional

import sqlalchemy as sa
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


# ── ORM ────────────────────────────────────────────────────────────────

class Base(DeclarativeBase):
    pass


class PageDB(Base):
    __tablename__ = "pages"
    id:           Mapped[str]            = mapped_column(sa.String, primary_key=True, default=lambda: str(uuid.uuid4()))
    slug:         Mapped[str]            = mapped_column(sa.String, unique=True, index=True, nullable=False)
    title:        Mapped[Optional[str]]  = mapped_column(sa.String, nullable=True)
    description:  Mapped[Optional[str]]  = mapped_column(sa.Text, nullable=True)
    avatar_url:   Mapped[Optional[str]]  = mapped_column(sa.String, nullable=True)
    niche:        Mapped[Optional[str]]  = mapped_column(sa.String, nullable=True)
    is_published: Mapped[bool]           = mapped_column(sa.Boolean, default=False)
    # Date de création du compte propriétaire (grâce quality gate)
    account_created_at: Mapped[Optional[datetime]] = mapped_column(sa.DateTime, nullable=True)
    created_at:   Mapped[datetime]       = mapped_column(sa.DateTime, default=datetime.utcnow)
    updated_at:   Mapped[datetime]       = mapped_column(sa.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    likes:        Mapped[int]            = mapped_column(sa.Integer, default=0)

    blocks: Mapped[List["BlockDB"]] = relationship(
        "BlockDB", back_populates="page", cascade="all, delete-orphan", order_by="BlockDB.position",
    )


class BlockDB(Base):
    __tablename__ = "blocks"
    id:       Mapped[str]           = mapped_column(sa.String, primary_key=True, default=lambda: str(uuid.uuid4()))
    page_id:  Mapped[str]           = mapped_column(sa.String, sa.ForeignKey("pages.id"), nullable=False)
    type:     Mapped[str]           = mapped_column(sa.String, nullable=False)
    title:    Mapped[Optional[str]] = mapped_column(sa.String, nullable=True)
    content:  Mapped[str]           = mapped_column(sa.Text, default="{}")
    position: Mapped[int]           = mapped_column(sa.Integer, default=0)

    page: Mapped["PageDB"] = relationship("PageDB", back_populates="blocks")
