"""
User endpoints for API v1.

Registration, login and user listing.  The login chosen at
registration is the name other users invite into projects.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, status

from taskboard_api.app.core.security import create_access_token, get_current_user
from taskboard_api.app.schemas.user import UserCreate, UserLogin, UserRead
from taskboard_api.app.services.user_service import UserService


router = APIRouter()


@router.post("/", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def register_user(user: UserCreate) -> UserRead:
    """Register a new user.  A taken login yields HTTP 409."""
    try:
        return await UserService.create_user(user)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.post("/login")
async def login_user(credentials: UserLogin) -> dict:
    """Check the credentials and return a bearer token."""
    db_user = await UserService.authenticate(credentials.login, credentials.password)
    if not db_user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    token = create_access_token({"sub": db_user.login})
    return {"access_token": token, "token_type": "bearer"}


@router.get("/me", response_model=UserRead)
async def read_current_user(current_user: Dict[str, Any] = Depends(get_current_user)) -> UserRead:
    user = await UserService.get_user_by_id(current_user["user_id"])
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.get("/", response_model=List[UserRead])
async def list_users(current_user: Dict[str, Any] = Depends(get_current_user)) -> List[UserRead]:
    """All registered users, for picking logins to invite."""
    return await UserService.list_users()
