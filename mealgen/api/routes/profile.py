from typing import Optional

from fastapi import APIRouter, Body, Depends, Header
from fastapi.responses import JSONResponse

from mealgen.api import actions
from mealgen.infra.Profile_Repository import ProfileRepository, get_profile_repository
from mealgen.utilities.config import DEFAULT_USER_ID

router = APIRouter()


def current_user_id(x_user_id: Optional[str] = Header(default=None)) -> str:
    """User key for the profile store; set by the auth proxy in front of the app."""
    if x_user_id and x_user_id.strip():
        return x_user_id.strip()
    return DEFAULT_USER_ID


@router.get("/profile")
def read_profile(user_id: str = Depends(current_user_id),
                 repository: ProfileRepository = Depends(get_profile_repository)):
    return {"profile": actions.get_profile(user_id, repository=repository)}


@router.put("/profile")
def update_profile(profile: dict = Body(...),
                   user_id: str = Depends(current_user_id),
                   repository: ProfileRepository = Depends(get_profile_repository)):
    result = actions.save_profile(profile, user_id, repository=repository)
    return JSONResponse(status_code=200 if result["success"] else 400, content=result)
