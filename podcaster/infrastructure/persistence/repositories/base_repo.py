"""Generic SQLAlchemy repository and model mapper base classes."""

from typing import Any, Protocol

from attrs import define
from sqlalchemy import Select, inspect, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from podcaster.config import get_logger
from podcaster.domain.exceptions import EntityNotFoundError
from podcaster.infrastructure.persistence.database.db_models import PodcasterDBBase
from podcaster.infrastructure.persistence.repositories.repo_decorator import (
    db_operation,
)

logger = get_logger(__name__)

NO_FIELDS: frozenset[str] = frozenset()


async def safe_fetch_relationship(db_model: Any, rel_name: str) -> list[Any]:
    """Load a relationship through AsyncAttrs.awaitable_attrs.

    Always returns a list; lazy loads run inside the async greenlet instead
    of raising MissingGreenlet.
    """
    result = await getattr(db_model.awaitable_attrs, rel_name)
    if result is None:
        return []
    if isinstance(result, list):
        return result
    return [result]


class ModelMapper[TDBModel: PodcasterDBBase, TDomainModel](Protocol):
    """Protocol for bidirectional mapping between models."""

    @staticmethod
    async def to_domain(
        db_model: TDBModel, include_fields: frozenset[str] = NO_FIELDS
    ) -> TDomainModel:
        """Convert database model to domain model."""
        ...

    @staticmethod
    def new(**fields: Any) -> TDomainModel:
        """Construct an unsaved domain model."""
        ...

    @staticmethod
    def to_db(domain_model: TDomainModel) -> TDBModel:
        """Convert a new domain model to a database model."""
        ...

    @staticmethod
    def apply_to_db(domain_model: TDomainModel, db_model: TDBModel) -> None:
        """Copy the persisted fields of a domain model onto an existing row."""
        ...

    @staticmethod
    def get_default_relationships() -> list[str]:
        """Get default relationships to load for this model."""
        ...

    @classmethod
    async def map_collection(cls, db_models: list[TDBModel]) -> list[TDomainModel]:
        """Map a collection of DB models to domain models."""
        ...


@define(frozen=True, slots=True)
class BaseModelMapper[TDBModel: PodcasterDBBase, TDomainModel]:
    """Base implementation of ModelMapper with common functionality.

    Usage:
        @define(frozen=True, slots=True)
        class EpisodeMapper(BaseModelMapper[DBEpisode, Episode]):
            @staticmethod
            async def to_domain(db_model, include_fields=NO_FIELDS) -> Episode:
                return Episode(...)

            @staticmethod
            def to_db(domain_model: Episode) -> DBEpisode:
                return DBEpisode(...)
    """

    @staticmethod
    async def to_domain(
        db_model: TDBModel, include_fields: frozenset[str] = NO_FIELDS
    ) -> TDomainModel:
        raise NotImplementedError("Subclasses must implement to_domain")

    @staticmethod
    def new(**fields: Any) -> TDomainModel:
        raise NotImplementedError("Subclasses must implement new")

    @staticmethod
    def to_db(domain_model: TDomainModel) -> TDBModel:
        raise NotImplementedError("Subclasses must implement to_db")

    @staticmethod
    def apply_to_db(domain_model: TDomainModel, db_model: TDBModel) -> None:
        raise NotImplementedError("Subclasses must implement apply_to_db")

    @staticmethod
    def get_default_relationships() -> list[str]:
        return []

    @classmethod
    async def map_collection(cls, db_models: list[TDBModel]) -> list[TDomainModel]:
        """Map a collection of DB models to domain models.

        Uses cls.to_domain so the subclass implementation is called.
        """
        if not db_models:
            return []
        return [await cls.to_domain(db_model) for db_model in db_models]


class BaseRepository[TDBModel: PodcasterDBBase, TDomainModel]:
    """Generic repository implementing the domain RepositoryProtocol."""

    def __init__(
        self,
        session: AsyncSession,
        model_class: type[TDBModel],
        mapper: ModelMapper[TDBModel, TDomainModel],
        entity_name: str | None = None,
    ) -> None:
        """Initialize repository with session and model mappings."""
        self.session = session
        self.model_class = model_class
        self.mapper = mapper
        self.entity_name = entity_name or model_class.__name__.removeprefix("DB")
        logger.debug(
            f"Initialized {self.__class__.__name__} for {model_class.__name__}",
        )

    # -------------------------------------------------------------------------
    # SELECT STATEMENT BUILDERS
    # -------------------------------------------------------------------------

    def select_matching(
        self,
        criteria: dict[str, Any] | None = None,
        load_relationships: list[str] | None = None,
    ) -> Select[tuple[TDBModel]]:
        """Build a select for rows matching criteria with relationships loaded.

        ``populate_existing`` refreshes rows already in the identity map so
        collections reflect deletes made earlier in the same session.
        """
        stmt = select(self.model_class)

        for field_name, value in (criteria or {}).items():
            column = getattr(self.model_class, field_name, None)
            if column is None:
                raise ValueError(
                    f"{self.entity_name} has no field named {field_name!r}"
                )
            stmt = stmt.where(column == value)

        relationships = (
            self.mapper.get_default_relationships()
            if load_relationships is None
            else load_relationships
        )
        known = inspect(self.model_class).relationships
        options = []
        for rel in relationships:
            if rel not in known:
                raise ValueError(
                    f"{self.entity_name} has no relationship named {rel!r}"
                )
            options.append(selectinload(getattr(self.model_class, rel)))
        if options:
            stmt = stmt.options(*options)

        return stmt.order_by(self.model_class.id).execution_options(
            populate_existing=True
        )

    # -------------------------------------------------------------------------
    # CORE CRUD OPERATIONS
    # -------------------------------------------------------------------------

    @db_operation("find")
    async def find(
        self,
        criteria: dict[str, Any] | None = None,
        load_relationships: list[str] | None = None,
    ) -> list[TDomainModel]:
        """Find all entities matching criteria."""
        result = await self.session.execute(
            self.select_matching(criteria, load_relationships)
        )
        return await self.mapper.map_collection(list(result.scalars().all()))

    @db_operation("find_one")
    async def find_one(
        self,
        criteria: dict[str, Any],
        load_relationships: list[str] | None = None,
        include_fields: list[str] | None = None,
    ) -> TDomainModel | None:
        """Find a single entity matching criteria or None if not found."""
        stmt = self.select_matching(criteria, load_relationships).limit(1)
        result = await self.session.execute(stmt)
        db_entity = result.scalar_one_or_none()

        if db_entity is None:
            return None

        return await self.mapper.to_domain(db_entity, frozenset(include_fields or ()))

    @db_operation("find_one_or_fail")
    async def find_one_or_fail(self, criteria: dict[str, Any]) -> TDomainModel:
        """Find a single entity, raising EntityNotFoundError when absent."""
        entity = await self.find_one(criteria)
        if entity is None:
            raise EntityNotFoundError(self.entity_name, criteria)
        return entity

    def create(self, **fields: Any) -> TDomainModel:
        """Construct an unsaved domain entity. No I/O happens here."""
        return self.mapper.new(**fields)

    @db_operation("save")
    async def save(self, entity: TDomainModel) -> TDomainModel:
        """Insert a new entity or update the row of an existing one."""
        entity_id = getattr(entity, "id", None)

        if entity_id is None:
            db_entity = self.mapper.to_db(entity)
            self.session.add(db_entity)
        else:
            db_entity = await self.session.get(self.model_class, entity_id)
            if db_entity is None:
                raise EntityNotFoundError(self.entity_name, {"id": entity_id})
            self.mapper.apply_to_db(entity, db_entity)

        await self.session.flush()

        if db_entity.id is None:
            logger.error(f"Failed to generate ID for {self.entity_name}")
            raise ValueError(f"Failed to save {self.entity_name}: no ID was generated")

        return await self.mapper.to_domain(db_entity)

    @db_operation("delete")
    async def delete(self, target: TDomainModel | dict[str, Any]) -> None:
        """Delete one entity, or every row matching criteria."""
        if isinstance(target, dict):
            criteria = target
        else:
            entity_id = getattr(target, "id", None)
            if entity_id is None:
                raise ValueError(f"Cannot delete a {self.entity_name} that was never saved")
            criteria = {"id": entity_id}

        result = await self.session.execute(self.select_matching(criteria, []))
        for db_entity in result.scalars().all():
            await self.session.delete(db_entity)

        await self.session.flush()
