from __future__ import annotations

from fastapi import APIRouter, Depends, File, Form, UploadFile
from starlette.concurrency import run_in_threadpool

from socialnet.services.profile_service import ImageUpload, ProfileService
from socialnet.services.session_service import current_user_id

router = APIRouter(prefix="/profile", tags=["profile"])
profile_service = ProfileService()


@router.post("/edit")
async def edit_profile(
    bio: str | None = Form(None),
    gender: str | None = Form(None),
    image: UploadFile | None = File(None),
    user_id: str = Depends(current_user_id),
):
    upload = None
    if image is not None and image.filename:
        upload = ImageUpload(data=await image.read(), content_type=(image.content_type or "").lower())
    # database work and the storage upload block, keep them off the event loop
    user = await run_in_threadpool(profile_service.edit_profile, user_id, bio=bio, gender=gender, image=upload)
    return {"message": "Profile updated.", "success": True, "user": user}


@router.get("/{user_id}")
def get_profile(user_id: str):
    return {"user": profile_service.get_profile(user_id), "success": True}
