from fastapi import APIRouter

from .features.create_event.router import router as create_event_router
from .features.deliver_reminders.router import router as deliver_reminders_router
from .features.get_event.router import router as get_event_router
from .features.manage_event.router import router as manage_event_router

router = APIRouter()

router.include_router(create_event_router)
router.include_router(get_event_router)
router.include_router(manage_event_router)
router.include_router(deliver_reminders_router)
