from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from jobboard.database import get_db
from jobboard.dependencies import require_admin
from jobboard.schemas.admin import AdminLoginRequest, AdminLoginResponse
from jobboard.schemas.common import Envelope
from jobboard.services.admin_service import admin_service

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.post("/login", response_model=Envelope[AdminLoginResponse])
async def admin_login(req: AdminLoginRequest, request: Request, db: Session = Depends(get_db)):
    client_host = request.client.host if request.client else "unknown"
    result = admin_service.login(db, req.username, req.password, throttle_key=f"login:{client_host}")
    return Envelope(data=AdminLoginResponse(**result), message="Logged in")


@router.post("/logout", response_model=Envelope)
async def admin_logout(token: str = Depends(require_admin)):
    admin_service.logout(token)
    return Envelope(message="Logged out")
