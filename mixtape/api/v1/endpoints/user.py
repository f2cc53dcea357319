# ============================================================================
# FILE: mixtape/api/v1/endpoints/user.py
# ============================================================================
from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
from typing import List
from mixtape.api.dependencies import get_db, get_user_service, require_current_user
from mixtape.db.models.user import User
from mixtape.schemas.history import HistoryEntryResponse
from mixtape.schemas.user import Preferences, RoleUpdate, Token, UserCreate, UserResponse
from mixtape.services.user_service import UserService
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    user_data: UserCreate,
    db: Session = Depends(get_db),
    service: UserService = Depends(get_user_service)
):
    """
    Register a new user account
    """
    return service.create_user(db, user_data)

@router.post("/login", response_model=Token)
async def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
    service: UserService = Depends(get_user_service)
):
    """
    Login with username and password
    Returns JWT access token
    """
    user = service.authenticate_user(db, form_data.username, form_data.password)
    return Token(access_token=service.issue_token(user), username=user.username, role=user.role)

@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    current_user: User = Depends(require_current_user)
):
    """
    Get current user information
    Requires authentication
    """
    return current_user

@router.get("/history", response_model=List[HistoryEntryResponse])
async def get_user_history(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user),
    service: UserService = Depends(get_user_service)
):
    """
    Get user's per-song listening history, most recent first
    Requires authentication
    """
    return service.get_history(db, current_user.id)

@router.get("/preferences/me", response_model=Preferences)
async def get_preferences(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user),
    service: UserService = Depends(get_user_service)
):
    return service.get_preferences(db, current_user.id)

@router.put("/preferences", response_model=Preferences)
async def update_preferences(
    preferences: Preferences,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user),
    service: UserService = Depends(get_user_service)
):
    """
    Replace stated genres, bands and years
    Requires authentication
    """
    return service.update_preferences(db, current_user.id, preferences)

# Admin-only user management

@router.get("/", response_model=List[UserResponse])
async def list_users(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user),
    service: UserService = Depends(get_user_service)
):
    return service.list_users(db, current_user)

@router.patch("/{user_id}/toggle", response_model=UserResponse)
async def toggle_user_active(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user),
    service: UserService = Depends(get_user_service)
):
    return service.toggle_active(db, user_id, current_user)

@router.put("/{user_id}/role", response_model=UserResponse)
async def set_user_role(
    user_id: int,
    role_data: RoleUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user),
    service: UserService = Depends(get_user_service)
):
    return service.set_role(db, user_id, role_data.role, current_user)

@router.delete("/{user_id}")
async def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user),
    service: UserService = Depends(get_user_service)
):
    service.delete_user(db, user_id, current_user)
    return {"message": "User deleted successfully"}
