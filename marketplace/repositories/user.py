"""User repository."""

from collections.abc import Iterable

from marketplace.domain.enums import UserRole
from marketplace.domain.user import User
from marketplace.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    model = User

    async def get_for_update(self, user_id: str) -> User | None:
        """Load a user and lock its row until the surrounding transaction ends.

        Databases without row locks (SQLite) ignore the FOR UPDATE clause.
        """
        result = await self._session.execute(
            self._base_query()
            .where(User.id == user_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    async def get_by_email(self, email: str) -> User | None:
        result = await self._session.execute(
            self._base_query().where(User.email == email)
        )
        return result.scalars().first()

    async def list_by_roles(self, roles: Iterable[UserRole]) -> list[User]:
        result = await self._session.execute(
            self._base_query()
            .where(User.role.in_(list(roles)))
            .order_by(User.created_at.desc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())
