from typing import List

from pydantic import BaseModel, Field


class SitemapEntry(BaseModel):
    url: str
    lastModified: str
    changeFrequency: str
    priority: float


class RobotsRule(BaseModel):
    userAgents: List[str] = Field(default_factory=list)
    allow: str = "/"
