"""BlogPost - Posts de blog para SEO. Sem dependências relacionais."""

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import AwareDateTime, Base, TimestampMixin


class BlogPost(Base, TimestampMixin):
    __tablename__ = "blog_posts"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    excerpt: Mapped[Optional[str]] = mapped_column(Text)
    author: Mapped[Optional[str]] = mapped_column(String(255))

    # SEO
    meta_description: Mapped[Optional[str]] = mapped_column(String(160))
    meta_keywords: Mapped[Optional[str]] = mapped_column(String(255))

    status: Mapped[Optional[str]] = mapped_column(String(50), default="draft")
    featured: Mapped[Optional[bool]] = mapped_column(Boolean, default=False)
    published: Mapped[Optional[bool]] = mapped_column(Boolean, default=False)
    published_at: Mapped[Optional[datetime]] = mapped_column(AwareDateTime())

    __table_args__ = (
        Index("blog_posts_slug_idx", "slug", unique=True),
        Index("blog_posts_status_idx", "status"),
    )
