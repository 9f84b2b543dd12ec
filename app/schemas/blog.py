from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PostFrontmatter(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    date: str = ""
    description: str = ""
    tags: List[str] = Field(default_factory=list)


class PostSummary(PostFrontmatter):
    pass


class RenderedPost(PostFrontmatter):
    contentHtml: str = ""


class PostListing(BaseModel):
    title: str
    description: str
    posts: List[PostSummary] = Field(default_factory=list)


class OgImageRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    date: str = ""


class OgImage(BaseModel):
    url: str
    width: int
    height: int
    alt: Optional[str] = None


class OpenGraphMetadata(BaseModel):
    type: str = "article"
    title: str
    description: str = ""
    url: str
    images: List[OgImage] = Field(default_factory=list)


class TwitterMetadata(BaseModel):
    card: str = "summary_large_image"
    title: str
    description: str = ""
    images: List[str] = Field(default_factory=list)


class PostMetadata(BaseModel):
    title: str
    description: Optional[str] = None
    openGraph: Optional[OpenGraphMetadata] = None
    twitter: Optional[TwitterMetadata] = None
