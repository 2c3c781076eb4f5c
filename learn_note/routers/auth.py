from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from learn_note.config import Settings, get_settings
from learn_note.database import get_db
from learn_note.models.user import User
from learn_note.schemas.user import AuthTokenOut, CurrentUser, LoginRequest
from learn_note.utils.errors import AuthenticationError, ValidationFailure
from learn_note.utils.security import create_auth_token, get_current_user, verify_password

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _token_response(user, settings: Settings) -> dict:
    return {
        "authToken": create_auth_token(user, settings),
        "id": user.id,
        "email": user.email,
        "name": user.name,
    }


@router.post("/login", response_model=AuthTokenOut)
def login(body: LoginRequest, db: Session = Depends(get_db), settings: Settings = Depends(get_settings)):
    """Exchange email and password for a bearer token."""
    if not isinstance(body.email, str) or not isinstance(body.password, str) or not body.email or not body.password:
        raise ValidationFailure("Missing email or password")

    user = db.query(User).filter(User.email == body.email).first()
    if not user or not verify_password(body.password, user.password):
        raise AuthenticationError("Incorrect email or password")

    return _token_response(user, settings)


@router.post("/refresh", response_model=AuthTokenOut)
def refresh_token(user: CurrentUser = Depends(get_current_user), settings: Settings = Depends(get_settings)):
    """Issue a fresh token for a still-valid one."""
    return _token_response(user, settings)
