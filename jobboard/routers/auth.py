from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
import logging

from ..database import get_db
from ..schemas.user import UserCreate, UserLogin, User, ProfileUpdate, UserPasswordUpdate
from ..schemas.token import AuthPayload
from ..models.user import User as UserModel, UserRole
from ..crud.user import create_user, get_user_by_email, update_profile, update_password
from ..dependencies.security import create_access_token, get_current_user
from ..utils.hash import verify_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _auth_payload(user: UserModel) -> dict:
    token = create_access_token(data={"sub": user.email})
    return AuthPayload(access_token=token, user=User.model_validate(user)).model_dump()


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(user: UserCreate, db: Session = Depends(get_db)):
    if user.role == UserRole.ADMIN:
        raise HTTPException(status_code=400, detail="role: Input should be 'applicant' or 'employer'")
    if get_user_by_email(db, email=user.email):
        raise HTTPException(status_code=400, detail="Email already registered")

    db_user = create_user(db, user)
    logger.info(f"Registered {db_user.role.value} account {db_user.id}")
    return {"success": True, "data": _auth_payload(db_user), "message": "User registered successfully"}


@router.post("/login")
def login(credentials: UserLogin, db: Session = Depends(get_db)):
    db_user = get_user_by_email(db, email=credentials.email)

    if not db_user or not verify_password(credentials.password, db_user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not db_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Account is deactivated.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return {"success": True, "data": _auth_payload(db_user), "message": "Login successful"}


@router.get("/me")
def read_me(current_user: UserModel = Depends(get_current_user)):
    return {"success": True, "data": User.model_validate(current_user)}


@router.put("/profile")
def update_my_profile(
    profile: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_user),
):
    user = update_profile(db, current_user, profile)
    return {"success": True, "data": User.model_validate(user), "message": "Profile updated successfully"}


@router.post("/change-password")
def change_password(
    passwords: UserPasswordUpdate,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_user),
):
    if not verify_password(passwords.current_password, current_user.hashed_password):
        raise HTTPException(status_code=400, detail="Current password is incorrect")
    update_password(db, current_user, passwords.new_password)
    return {"success": True, "message": "Password changed successfully"}
