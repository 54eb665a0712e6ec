from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database import get_db
from schemas.like import LikeCreate, LikeResponse
from services.like_service import LikeService

router = APIRouter(prefix="/likes", tags=["Social Graph"])


@router.post(
    "",
    response_model=LikeResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="createLike",
    responses={404: {"description": "User or post not found"}, 409: {"description": "Already liked"}}
)
def create_like(like_in: LikeCreate, db: Session = Depends(get_db)):
    return LikeService(db).create_like(like_in.user_id, like_in.post_id)


@router.delete("/{user_id}/{post_id}", response_model=bool, operation_id="deleteLike")
def delete_like(user_id: int, post_id: int, db: Session = Depends(get_db)):
    return LikeService(db).delete_like(user_id, post_id)
