"""Turns an invitee descriptor into exactly one canonical invitee record."""

import logging

import httpx

from scheddo.identities.dtos import InviteeDTO, UserDTO
from scheddo.identities.repository.write_models import IdentityWriteModel
from scheddo.invitations.dtos import InviteeDescriptor, InviteeLookupFailure
from scheddo.yammer.dtos import YammerError

logger = logging.getLogger(__name__)


class InvitationResolver:
    def __init__(self, identity_write_model: IdentityWriteModel) -> None:
        self.identity_write_model = identity_write_model

    async def resolve(self, descriptor: InviteeDescriptor, creator: UserDTO) -> InviteeDTO | None:
        """Find or create the invitee a descriptor refers to.

        A Yammer user id wins over a Yammer group id, which wins over the free
        text. Yammer users are fetched with the event creator's credentials,
        which are never stored on the invitee.
        Returns None when the descriptor carries nothing usable.

        Raises:
            InviteeLookupFailure: If Yammer had to be asked and failed.
        """
        if descriptor.yammer_user_id:
            try:
                user = await self.identity_write_model.find_or_create_user_with_auth(
                    access_token=creator.access_token,
                    yammer_staging=creator.yammer_staging,
                    yammer_user_id=descriptor.yammer_user_id,
                    refresh_token=False,
                )
            except (YammerError, httpx.HTTPError) as e:
                logger.warning(f"Could not look up Yammer user {descriptor.yammer_user_id}: {e}")
                raise InviteeLookupFailure(
                    f"Could not look up Yammer user {descriptor.yammer_user_id}"
                ) from e
            return user.as_invitee()

        if descriptor.yammer_group_id:
            return await self.identity_write_model.find_or_create_group(
                yammer_group_id=descriptor.yammer_group_id,
                name=descriptor.name_or_email,
            )

        email = (descriptor.name_or_email or "").strip()
        if not email:
            return None

        existing = await self.identity_write_model.find_user_by_email(email)
        if existing is None:
            existing = await self.identity_write_model.find_guest_by_email(email)
        if existing is not None:
            return existing
        return await self.identity_write_model.create_guest_without_name_validation(email)
