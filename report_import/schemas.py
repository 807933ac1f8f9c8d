"""
Front-matter models mirroring the site's `posts` and `reports` content
collections, so a generated document is rejected here rather than at site
build time.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class _FrontMatter(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    title: str
    description: str
    pub_date: dt.date = Field(alias="pubDate")
    tags: list[str] = Field(default_factory=list)


class PostFrontMatter(_FrontMatter):
    pinned: bool = False


class ReportFrontMatter(_FrontMatter):
    source_url: Optional[str] = Field(default=None, alias="sourceUrl")
