from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from config import settings
from database import get_db
from schemas.post import PostCreate, PostResponse, PostUpdate
from services.post_service import PostService

router = APIRouter(prefix="/posts", tags=["Posts"])


@router.post(
    "",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="createPost",
    responses={404: {"description": "Author or parent post not found"}}
)
def create_post(post_in: PostCreate, db: Session = Depends(get_db)):
    """
    Create a post, or a reply when `parent_post_id` is given.

    The author's post_count and the parent's reply_count are updated in the
    same transaction.
    """
    return PostService(db).create_post(post_in)


@router.get("", response_model=List[PostResponse], operation_id="getPosts")
def get_posts(
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db)
):
    """Top-level posts, newest first."""
    return PostService(db).get_posts(limit=limit, offset=offset)


@router.get("/by-user/{user_id}", response_model=List[PostResponse], operation_id="getPostsByUserId")
def get_posts_by_user_id(user_id: int, db: Session = Depends(get_db)):
    return PostService(db).get_posts_by_user(user_id)


@router.get("/{post_id}/replies", response_model=List[PostResponse], operation_id="getPostReplies")
def get_post_replies(post_id: int, db: Session = Depends(get_db)):
    return PostService(db).get_post_replies(post_id)


@router.get("/{post_id}", response_model=Optional[PostResponse], operation_id="getPostById")
def get_post_by_id(post_id: int, db: Session = Depends(get_db)):
    return PostService(db).get_post(post_id)


@router.patch("/{post_id}", response_model=PostResponse, operation_id="updatePost")
def update_post(post_id: int, post_in: PostUpdate, db: Session = Depends(get_db)):
    return PostService(db).update_post(post_id, post_in)


@router.delete("/{post_id}", response_model=bool, operation_id="deletePost")
def delete_post(post_id: int, db: Session = Depends(get_db)):
    """Delete a post with its likes. Direct replies become top-level posts."""
    return PostService(db).delete_post(post_id)
