from fastapi import APIRouter

from .features.cast_vote.router import router as cast_vote_router

router = APIRouter()

router.include_router(cast_vote_router)
