from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database import get_db
from schemas.follow import FollowCreate, FollowResponse
from schemas.user import UserResponse
from services.follow_service import FollowService

router = APIRouter(prefix="/follows", tags=["Social Graph"])


@router.post(
    "",
    response_model=FollowResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="createFollow",
    responses={
        400: {"description": "A user cannot follow themselves"},
        404: {"description": "User not found"},
        409: {"description": "Already following"}
    }
)
def create_follow(follow_in: FollowCreate, db: Session = Depends(get_db)):
    return FollowService(db).create_follow(follow_in.follower_id, follow_in.following_id)


@router.get("/users/{user_id}/followers", response_model=List[UserResponse], operation_id="getFollowers")
def get_followers(user_id: int, db: Session = Depends(get_db)):
    return FollowService(db).get_followers(user_id)


@router.get("/users/{user_id}/following", response_model=List[UserResponse], operation_id="getFollowing")
def get_following(user_id: int, db: Session = Depends(get_db)):
    return FollowService(db).get_following(user_id)


@router.get(
    "/{follower_id}/{following_id}",
    response_model=Optional[FollowResponse],
    operation_id="getFollowRelationship"
)
def get_follow_relationship(follower_id: int, following_id: int, db: Session = Depends(get_db)):
    """The follower -> following edge, or null."""
    return FollowService(db).get_follow_relationship(follower_id, following_id)


@router.delete("/{follower_id}/{following_id}", response_model=bool, operation_id="deleteFollow")
def delete_follow(follower_id: int, following_id: int, db: Session = Depends(get_db)):
    return FollowService(db).delete_follow(follower_id, following_id)
