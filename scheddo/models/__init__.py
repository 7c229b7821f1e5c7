from scheddo.models.base import Base, BaseModel, TimeStamp

__all__ = [
    "Base",
    "BaseModel",
    "TimeStamp",
]
