from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from app.database import get_db
from app.schemas import (
    CommentCreate,
    CommentResponse,
    ErrorResponse,
    MessageResponse,
    PostCreate,
    PostResponse,
    PostUpdate,
)
from app.services import comment_service, post_service

router = APIRouter(
    prefix="/api/posts",
    tags=["posts"],
    responses={500: {"model": ErrorResponse}},
)

_NOT_FOUND = {404: {"model": ErrorResponse}}

@router.get("", response_model=list[PostResponse])
async def list_posts(db: AsyncSession = Depends(get_db, scope="function")):
    return await post_service.list_posts(db)

@router.get("/{slug}", response_model=PostResponse, responses=_NOT_FOUND)
async def get_post(slug: str, db: AsyncSession = Depends(get_db, scope="function")):
    post = await post_service.get_post_by_slug(db, slug)
    if not post:
        raise HTTPException(status_code=404, detail="Post not found")
    return post

@router.post("", status_code=201, response_model=PostResponse)
async def create_post(data: PostCreate, db: AsyncSession = Depends(get_db, scope="function")):
    return await post_service.create_post(db, data)

@router.put("/{post_id}", response_model=PostResponse, responses=_NOT_FOUND)
async def update_post(post_id: str, data: PostUpdate, db: AsyncSession = Depends(get_db, scope="function")):
    post = await post_service.update_post(db, post_id, data)
    if not post:
        raise HTTPException(status_code=404, detail="Post not found")
    return post

@router.delete("/{post_id}", response_model=MessageResponse, responses=_NOT_FOUND)
async def delete_post(post_id: str, db: AsyncSession = Depends(get_db, scope="function")):
    deleted = await post_service.delete_post(db, post_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Post not found")
    return {"message": "Post deleted successfully"}

@router.post("/{post_id}/like", response_model=MessageResponse)
async def like_post(post_id: str, db: AsyncSession = Depends(get_db, scope="function")):
    await post_service.add_like(db, post_id)
    return {"message": "Like added"}

@router.get("/{post_id}/comments", response_model=list[CommentResponse])
async def list_comments(post_id: str, db: AsyncSession = Depends(get_db, scope="function")):
    return await comment_service.list_comments(db, post_id)

@router.post("/{post_id}/comments", status_code=201, response_model=MessageResponse)
async def add_comment(post_id: str, data: CommentCreate, db: AsyncSession = Depends(get_db, scope="function")):
    await comment_service.add_comment(db, post_id, data)
    return {"message": "Comment added"}
