"""
Comment service: append-only comments attached to a post id.

Comments cannot be edited or deleted via the public API.  The post id is
stored as given: there is no existence check against ``blog_posts``, so a
comment on an unknown (or later deleted) post is kept as an orphan.
"""
import uuid
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Comment
from app.schemas import CommentCreate


def _comment_to_dict(comment: Comment) -> dict:
    return {
        "id": comment.id,
        "post_id": comment.post_id,
        "name": comment.name,
        "comment": comment.comment,
        "created_at": comment.created_at.isoformat() if comment.created_at else None,
    }


async def list_comments(db: AsyncSession, post_id: str) -> list[dict]:
    """Return the comments for *post_id*, oldest first."""
    q = (
        select(Comment)
        .where(Comment.post_id == post_id)
        .order_by(Comment.created_at.asc())
    )
    result = await db.execute(q)
    return [_comment_to_dict(c) for c in result.scalars().all()]


async def add_comment(db: AsyncSession, post_id: str, data: CommentCreate) -> dict:
    """Insert a comment for *post_id* and return its serialised dict."""
    comment = Comment(
        id=str(uuid.uuid4()),
        post_id=post_id,
        name=data.name,
        comment=data.comment,
        created_at=datetime.now(timezone.utc),
    )
    db.add(comment)
    await db.flush()
    return _comment_to_dict(comment)
