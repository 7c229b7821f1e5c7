from fastapi import APIRouter

from .features.create_invitation.router import router as create_invitation_router

router = APIRouter()

router.include_router(create_invitation_router)
