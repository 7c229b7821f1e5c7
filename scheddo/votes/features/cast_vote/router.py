from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from scheddo.jobs import get_job_queue
from scheddo.urls import VOTES_URL
from scheddo.votes.features.cast_vote.write_model import CastVoteWriteModel, SqlCastVoteWriteModel

router = APIRouter()


class CastVoteRequest(BaseModel):
    user_id: UUID
    suggestion_id: UUID


class VoteResponse(BaseModel):
    id: UUID
    user_id: UUID
    suggestion_id: UUID
    created_at: datetime


def get_cast_vote_write_model() -> CastVoteWriteModel:
    """Dependency to get cast vote write model instance."""
    return SqlCastVoteWriteModel(job_queue=get_job_queue())


@router.post(VOTES_URL, response_model=VoteResponse, status_code=status.HTTP_201_CREATED)
async def cast_vote(
    request: CastVoteRequest,
    write_model: CastVoteWriteModel = Depends(get_cast_vote_write_model),
) -> VoteResponse:
    vote = await write_model.cast_vote(request.user_id, request.suggestion_id)
    return VoteResponse(
        id=vote.id,
        user_id=vote.user_id,
        suggestion_id=vote.suggestion_id,
        created_at=vote.created_at,
    )
