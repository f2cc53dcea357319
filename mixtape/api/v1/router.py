# ============================================================================
# FILE: mixtape/api/v1/router.py
# ============================================================================
from fastapi import APIRouter
from mixtape.api.v1.endpoints import djs, playlist, songs, stats, user

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(user.router, prefix="/user", tags=["user"])
api_router.include_router(songs.router, prefix="/songs", tags=["songs"])
api_router.include_router(playlist.router, prefix="/playlist", tags=["playlist"])
api_router.include_router(stats.router, prefix="/stats", tags=["stats"])
api_router.include_router(djs.router, prefix="/djs", tags=["djs"])
