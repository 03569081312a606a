"""
Post service: data access for the Post aggregate.

Design notes
------------
- Every function issues exactly one SQL statement.  Reads are a single
  SELECT, writes a single INSERT / UPDATE / DELETE; the UPDATE uses
  RETURNING so the refreshed row comes back without a second round trip.
- Identifiers (UUID4) and timestamps are generated here, before the
  statement runs, so the caller knows them even if the store is slow.
- The like counter is bumped with ``likes = likes + 1`` inside the store,
  which keeps concurrent likes correct without any application locking.
- Service functions flush but do not commit; the transaction boundary
  is owned by the ``get_db`` dependency in the router layer.
"""
import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Post
from app.schemas import PostCreate, PostUpdate

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _now() -> datetime:
    return datetime.now(timezone.utc)


def _post_to_dict(post: Post) -> dict:
    """Serialise a Post ORM instance to a plain dict."""
    return {
        "id": post.id,
        "title": post.title,
        "slug": post.slug,
        "image_url": post.image_url,
        "content": post.content,
        "excerpt": post.excerpt,
        "author": post.author,
        "badge": post.badge,
        "date": post.date.isoformat() if post.date else None,
        "likes": post.likes,
    }


# ---------------------------------------------------------------------------
# Public service functions
# ---------------------------------------------------------------------------

async def list_posts(db: AsyncSession) -> list[dict]:
    """Return every post, newest first."""
    result = await db.execute(select(Post).order_by(Post.date.desc()))
    return [_post_to_dict(p) for p in result.scalars().all()]


async def get_post_by_slug(db: AsyncSession, slug: str) -> dict | None:
    """
    Return the post whose slug is *slug*.

    Returns None when no such post exists.
    """
    result = await db.execute(select(Post).where(Post.slug == slug))
    post = result.scalar_one_or_none()
    if post is None:
        return None
    return _post_to_dict(post)


async def create_post(db: AsyncSession, data: PostCreate) -> dict:
    """
    Insert a new post with a fresh UUID, the current timestamp and zero
    likes, and return it.

    Slug uniqueness and required columns are enforced by the store; a
    violation surfaces as an ``IntegrityError`` from the flush.
    """
    post = Post(
        id=str(uuid.uuid4()),
        **data.model_dump(),
        date=_now(),
        likes=0,
    )
    db.add(post)
    await db.flush()
    logger.info("Created post id=%s slug=%r", post.id, post.slug)
    return _post_to_dict(post)


async def update_post(db: AsyncSession, post_id: str, data: PostUpdate) -> dict | None:
    """
    Overwrite every mutable field of *post_id* and refresh its timestamp.

    Fields missing from the payload are written as NULL, exactly like an
    explicit null.  Returns None when the post does not exist.
    """
    stmt = (
        update(Post)
        .where(Post.id == post_id)
        .values(**data.model_dump(), date=_now())
        .returning(Post)
    )
    result = await db.execute(stmt)
    post = result.scalar_one_or_none()
    if post is None:
        return None
    return _post_to_dict(post)


async def delete_post(db: AsyncSession, post_id: str) -> bool:
    """
    Hard-delete *post_id*.  Comments that reference it are left in place.

    Returns True on success, False when the post does not exist.
    """
    result = await db.execute(delete(Post).where(Post.id == post_id))
    if result.rowcount == 0:
        return False
    logger.info("Deleted post id=%s", post_id)
    return True


async def add_like(db: AsyncSession, post_id: str) -> None:
    """
    Atomically increment the like counter of *post_id*.

    An unknown id matches zero rows and is not reported as an error.
    """
    await db.execute(
        update(Post)
        .where(Post.id == post_id)
        .values(likes=Post.likes + 1)
        .execution_options(synchronize_session=False)
    )
