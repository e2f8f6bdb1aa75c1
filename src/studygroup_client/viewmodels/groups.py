from __future__ import annotations

from studygroup_client.application.dto.group import CreateGroupDTO
from studygroup_client.application.exceptions import AppError, ValidationError
from studygroup_client.application.projector import error_reason, fail_fast, project
from studygroup_client.application.repositories.group import GroupRepository
from studygroup_client.application.session import SessionContext
from studygroup_client.application.state import Error, RequestState, StateHolder
from studygroup_client.application.validation import validate_group
from studygroup_client.domain.entities.group import Group, GroupDetail
from studygroup_client.domain.value_objects.enums import Category


class GroupViewModel:
    """Group browsing, membership and detail screens.

    Membership mutations never patch local lists: on success the affected
    resource is fetched again.
    """

    def __init__(self, repository: GroupRepository, session: SessionContext) -> None:
        self._repository = repository
        self._session = session
        self.groups_state: StateHolder[list[Group]] = StateHolder(name="groups.all")
        self.my_groups_state: StateHolder[list[Group]] = StateHolder(name="groups.mine")
        self.create_group_state: StateHolder[Group] = StateHolder(name="groups.create")
        self.group_detail_state: StateHolder[GroupDetail] = StateHolder(name="groups.detail")
        self.leave_state: StateHolder[None] = StateHolder(name="groups.leave")

    async def load_all_groups(self) -> RequestState[list[Group]]:
        return await project(
            self.groups_state,
            lambda: self._repository.list_groups(self._session.require_user_id()),
            fallback="Failed to load groups",
        )

    async def load_groups_by_category(self, category: Category) -> RequestState[list[Group]]:
        return await project(
            self.groups_state,
            lambda: self._repository.list_groups_by_category(
                category, self._session.require_user_id(),
            ),
            fallback="Failed to load groups",
        )

    async def load_my_groups(self) -> RequestState[list[Group]]:
        return await project(
            self.my_groups_state,
            lambda: self._repository.list_my_groups(self._session.require_user_id()),
            fallback="Failed to load your groups",
        )

    async def create_group(self, dto: CreateGroupDTO) -> RequestState[Group]:
        try:
            validate_group(dto)
        except ValidationError as exc:
            return fail_fast(self.create_group_state, exc)
        return await project(
            self.create_group_state,
            lambda: self._repository.create_group(dto, self._session.require_user_id()),
            fallback="Failed to create group",
        )

    def reset_create_group_state(self) -> None:
        self.create_group_state.reset()

    async def load_group_detail(self, group_id: int) -> RequestState[GroupDetail]:
        return await project(
            self.group_detail_state,
            lambda: self._repository.get_group_detail(group_id, self._session.require_user_id()),
            fallback="Failed to load group",
        )

    async def join_group(self, group_id: int) -> bool:
        """Join from the group list; the list is reloaded on success."""
        try:
            await self._repository.join_group(group_id, self._session.require_user_id())
        except AppError:
            return False
        await self.load_all_groups()
        return True

    async def join_group_with_greeting(self, group_id: int, greeting: str) -> bool:
        """Join from the detail screen; the detail is reloaded on success."""
        try:
            await self._repository.join_group(
                group_id, self._session.require_user_id(), greeting,
            )
        except AppError as exc:
            self._fail_detail(exc, "Failed to join group")
            return False
        await self.load_group_detail(group_id)
        return True

    async def leave_group(self, group_id: int) -> RequestState[None]:
        async def _leave() -> None:
            await self._repository.leave_group(group_id, self._session.require_user_id())

        result = await project(self.leave_state, _leave, fallback="Failed to leave group")
        if not isinstance(result, Error):
            await self.load_my_groups()
        return result

    async def kick_member(self, group_id: int, target_user_id: int) -> bool:
        """Leader-only removal; the group detail is re-fetched, not patched."""
        try:
            await self._repository.kick_member(
                group_id, self._session.require_user_id(), target_user_id,
            )
        except AppError as exc:
            self._fail_detail(exc, "Failed to remove member")
            return False
        await self.load_group_detail(group_id)
        return True

    def _fail_detail(self, exc: AppError, fallback: str) -> None:
        self.group_detail_state.next_ticket()
        self.group_detail_state.set(Error(error_reason(exc, fallback)))
