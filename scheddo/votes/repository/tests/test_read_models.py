from scheddo.votes.repository.orm_models import Vote
from scheddo.votes.repository.read_models import SqlVoteReadModel


async def test_vote_for_suggestion(db_session, make_user, make_event):
    voter = await make_user()
    event = await make_event(await make_user())
    first, second = event.suggestions
    db_session.add(Vote(user_id=voter.uuid, suggestion_id=first.uuid))
    await db_session.flush()
    read_model = SqlVoteReadModel(session_overwrite=db_session)

    vote = await read_model.vote_for_suggestion(voter.uuid, first.uuid)

    assert vote is not None
    assert vote.user_id == voter.uuid
    assert vote.suggestion_id == first.uuid
    assert vote.created_at.tzinfo is not None
    assert await read_model.vote_for_suggestion(voter.uuid, second.uuid) is None


async def test_voted_for_is_per_user(db_session, make_user, make_event):
    voter = await make_user()
    other = await make_user()
    event = await make_event(await make_user())
    suggestion = event.suggestions[0]
    db_session.add(Vote(user_id=voter.uuid, suggestion_id=suggestion.uuid))
    await db_session.flush()
    read_model = SqlVoteReadModel(session_overwrite=db_session)

    assert await read_model.voted_for(voter.uuid, suggestion.uuid)
    assert not await read_model.voted_for(other.uuid, suggestion.uuid)
