from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database import get_db
from schemas.user import UserCreate, UserResponse, UserUpdate
from services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="createUser",
    responses={409: {"description": "Username or email already taken"}}
)
def create_user(user_in: UserCreate, db: Session = Depends(get_db)):
    """Create a user. Counters start at zero."""
    return UserService(db).create_user(user_in)


@router.get("", response_model=List[UserResponse], operation_id="getUsers")
def get_users(db: Session = Depends(get_db)):
    return UserService(db).get_users()


@router.get(
    "/by-username/{username}",
    response_model=Optional[UserResponse],
    operation_id="getUserByUsername"
)
def get_user_by_username(username: str, db: Session = Depends(get_db)):
    """Case-insensitive exact match; returns null when nobody has the name."""
    return UserService(db).get_user_by_username(username)


@router.get("/{user_id}", response_model=Optional[UserResponse], operation_id="getUserById")
def get_user_by_id(user_id: int, db: Session = Depends(get_db)):
    return UserService(db).get_user_by_id(user_id)


@router.patch(
    "/{user_id}",
    response_model=UserResponse,
    operation_id="updateUser",
    responses={404: {"description": "User not found"}}
)
def update_user(user_id: int, user_in: UserUpdate, db: Session = Depends(get_db)):
    """Partial update; an explicit null clears the field."""
    return UserService(db).update_user(user_id, user_in)
