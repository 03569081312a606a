from pydantic import BaseModel, ConfigDict
from datetime import datetime


# --- Post ---

class PostBase(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    # Presence and format are left to the store's NOT NULL / UNIQUE constraints.
    title: str | None = None
    slug: str | None = None
    image_url: str | None = None
    content: str | None = None
    excerpt: str | None = None
    author: str | None = None
    badge: str | None = None


class PostCreate(PostBase):
    pass


class PostUpdate(PostBase):
    pass


class PostResponse(PostBase):
    id: str
    date: datetime
    likes: int
    model_config = ConfigDict(from_attributes=True)


# --- Comment ---

class CommentCreate(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str | None = None
    comment: str | None = None


class CommentResponse(BaseModel):
    id: str
    post_id: str
    name: str
    comment: str
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


# --- Envelopes ---

class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
