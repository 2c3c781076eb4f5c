from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging

from learn_note.database import get_db, commit_or_raise
from learn_note.models.user import User
from learn_note.schemas.user import UserCreate, UserUpdate, UserOut, UserProfileOut, CurrentUser
from learn_note.services.normalizer import normalize_user
from learn_note.utils.errors import Conflict, NotFound
from learn_note.utils.security import get_current_user, get_password_hash

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["Users"])

DUPLICATE_EMAIL = "Email already registered"


def _load_user(db: Session, user_id: int) -> User:
    db_user = db.query(User).filter(User.id == user_id).first()
    if db_user is None:
        raise NotFound("User not found")
    return db_user


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def register(body: UserCreate, db: Session = Depends(get_db)):
    """Create an account. The password is stored only as a bcrypt hash."""
    if db.query(User).filter(User.email == body.email).first():
        raise Conflict(DUPLICATE_EMAIL)

    db_user = User(
        email=body.email,
        name=body.name,
        password=get_password_hash(body.password),
        topic_order=[],
    )
    db.add(db_user)
    commit_or_raise(db, DUPLICATE_EMAIL)
    db.refresh(db_user)

    logger.info("Registered user %s", db_user.id)
    return normalize_user(db_user)


@router.get("/me", response_model=UserProfileOut)
def get_profile(user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    return normalize_user(_load_user(db, user.id), include_topic_order=True)


@router.put("/me", response_model=UserProfileOut, status_code=status.HTTP_201_CREATED)
def update_topic_order(
    body: UserUpdate,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Store the user's custom topic ordering, the only mutable profile field."""
    db_user = _load_user(db, user.id)
    db_user.topic_order = body.topic_order
    db.commit()
    db.refresh(db_user)
    return normalize_user(db_user, include_topic_order=True)
