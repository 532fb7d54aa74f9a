from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from socialnet.services.graph_service import FollowResult, GraphService
from socialnet.services.session_service import current_user_id
from socialnet.services.suggestion_service import SuggestionService

router = APIRouter(tags=["users"])
graph_service = GraphService()
suggestion_service = SuggestionService()


def _follow_response(result: FollowResult) -> dict:
    return {
        "message": result.message,
        "success": True,
        "action": result.action,
        "updatedFollowerCount": result.follower_count,
    }


@router.get("/suggested")
def suggested(limit: int | None = Query(None, ge=1, le=100), user_id: str = Depends(current_user_id)):
    users = suggestion_service.get_suggested(user_id, limit=limit)
    if not users:
        return JSONResponse({"message": "No suggested users at this time", "success": False}, status_code=400)
    return {"success": True, "users": users}


@router.post("/users/{target_id}/follow-or-unfollow")
def follow_or_unfollow(target_id: str, user_id: str = Depends(current_user_id)):
    return _follow_response(graph_service.follow_or_unfollow(user_id, target_id))


@router.post("/users/{target_id}/follow")
def follow(target_id: str, user_id: str = Depends(current_user_id)):
    return _follow_response(graph_service.follow(user_id, target_id))


@router.post("/users/{target_id}/unfollow")
def unfollow(target_id: str, user_id: str = Depends(current_user_id)):
    return _follow_response(graph_service.unfollow(user_id, target_id))
