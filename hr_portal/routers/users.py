from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from hr_portal.core.exceptions import ConflictError, NotFoundError
from hr_portal.database import commit_or_rollback, get_db
from hr_portal.models.user import User
from hr_portal.routers.auth_deps import get_current_user, require_admin
from hr_portal.schemas.user import UserCreate, UserResponse

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
def read_me(current_user: User = Depends(get_current_user)):
    return current_user


@router.get("", response_model=List[UserResponse])
def list_users(db: Session = Depends(get_db), _: User = Depends(require_admin())):
    return db.query(User).order_by(User.id).all()


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(data: UserCreate, db: Session = Depends(get_db), _: User = Depends(require_admin())):
    if db.query(User).filter((User.username == data.username) | (User.email == data.email)).first():
        raise ConflictError("A user with this username or email already exists")
    user = User(username=data.username, email=data.email, user_type=data.user_type.value, is_active=True)
    db.add(user)
    commit_or_rollback(db)
    db.refresh(user)
    return user


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: int, db: Session = Depends(get_db), _: User = Depends(require_admin())):
    user = db.get(User, user_id)
    if not user:
        raise NotFoundError("User", user_id)
    return user
