# ============================================================================
# FILE: mixtape/api/v1/endpoints/djs.py
# ============================================================================
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import List
from mixtape.api.dependencies import get_db, get_dj_service, require_current_user
from mixtape.db.models.user import User
from mixtape.schemas.dj import DjDetailResponse, DjProfileResponse, DjProfileUpdate
from mixtape.schemas.playlist import PlaylistResponse
from mixtape.services.dj_service import DjService
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("/", response_model=List[DjProfileResponse])
async def list_djs(
    db: Session = Depends(get_db),
    service: DjService = Depends(get_dj_service)
):
    """Public discover page: featured DJs first"""
    return service.list_profiles(db)

@router.get("/{profile_id}", response_model=DjDetailResponse)
async def get_dj(
    profile_id: int,
    db: Session = Depends(get_db),
    service: DjService = Depends(get_dj_service)
):
    """Public DJ profile with that DJ's public playlists"""
    profile, playlists = service.get_profile(db, profile_id)
    return DjDetailResponse(
        profile=DjProfileResponse.model_validate(profile),
        playlists=[PlaylistResponse.from_playlist(p) for p in playlists],
    )

@router.post("/", response_model=DjProfileResponse)
async def save_dj_profile(
    profile_data: DjProfileUpdate,
    response: Response,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user),
    service: DjService = Depends(get_dj_service)
):
    """
    Create or edit the current user's DJ profile
    Returns 201 on creation, 200 on update
    """
    profile, created = service.save_profile(db, current_user, profile_data)
    if created:
        response.status_code = status.HTTP_201_CREATED
    return profile
