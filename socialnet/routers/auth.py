from __future__ import annotations

from typing import Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from socialnet.services.auth_service import AuthService
from socialnet.services.session_service import clear_session_cookie, set_session_cookie

router = APIRouter(tags=["auth"])
auth_service = AuthService()


class RegisterPayload(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginPayload(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


@router.post("/register", status_code=201)
def register(payload: RegisterPayload):
    auth_service.register(payload.username, payload.email, payload.password)
    return {"message": "Account created successfully.", "success": True}


@router.post("/login")
def login(payload: LoginPayload):
    outcome = auth_service.login(payload.email, payload.password)
    resp = JSONResponse(
        {
            "message": f"Welcome back {outcome.user['username']}",
            "success": True,
            "user": outcome.user,
        }
    )
    set_session_cookie(resp, outcome.token)
    return resp


@router.post("/logout")
def logout():
    resp = JSONResponse({"message": "Logged out successfully.", "success": True})
    clear_session_cookie(resp)
    return resp
