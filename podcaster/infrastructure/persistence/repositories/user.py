"""Repository for user accounts."""

from typing import Any

from attrs import define
from sqlalchemy.ext.asyncio import AsyncSession

from podcaster.config import get_logger
from podcaster.domain.entities import User
from podcaster.domain.repositories import PasswordHasherProtocol
from podcaster.infrastructure.persistence.database.db_models import DBUser
from podcaster.infrastructure.persistence.repositories.base_repo import (
    NO_FIELDS,
    BaseModelMapper,
    BaseRepository,
)
from podcaster.infrastructure.persistence.repositories.repo_decorator import (
    db_operation,
)

logger = get_logger(__name__)


@define(frozen=True, slots=True)
class UserMapper(BaseModelMapper[DBUser, User]):
    """Maps between DBUser and User domain models.

    The password hash is only copied into the domain model when explicitly
    requested through ``include_fields``.
    """

    @staticmethod
    async def to_domain(db_model: DBUser, include_fields: frozenset[str] = NO_FIELDS) -> User:
        return User(
            id=db_model.id,
            email=db_model.email,
            role=db_model.role,
            password=db_model.password if "password" in include_fields else None,
        )

    @staticmethod
    def new(**fields: Any) -> User:
        return User.register(**fields)

    @staticmethod
    def to_db(domain_model: User) -> DBUser:
        if domain_model.password is None:
            raise ValueError("A new user needs a password")
        return DBUser(
            email=domain_model.email,
            password=domain_model.password,
            role=domain_model.role.value,
        )

    @staticmethod
    def apply_to_db(domain_model: User, db_model: DBUser) -> None:
        db_model.email = domain_model.email
        db_model.role = domain_model.role.value
        # None means the hash was never loaded: keep the stored one
        if domain_model.password is not None:
            db_model.password = domain_model.password


class UserRepository(BaseRepository[DBUser, User]):
    """Repository for user accounts with hash-on-write passwords."""

    def __init__(self, session: AsyncSession, password_hasher: PasswordHasherProtocol) -> None:
        super().__init__(
            session=session,
            model_class=DBUser,
            mapper=UserMapper(),
            entity_name="User",
        )
        self.password_hasher = password_hasher

    @db_operation("save_user")
    async def save(self, entity: User) -> User:
        """Persist a user, hashing the password only if it was freshly set."""
        if entity.needs_password_hash:
            logger.debug("Hashing freshly set password", user_id=entity.id)
            entity = entity.with_hashed_password(
                await self.password_hasher.hash(entity.password)
            )
        return await super().save(entity)
