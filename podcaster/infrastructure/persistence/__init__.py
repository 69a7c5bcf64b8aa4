"""Persistence layer: SQLAlchemy models, repositories and unit of work."""

from .unit_of_work import DatabaseUnitOfWork, unit_of_work

__all__ = ["DatabaseUnitOfWork", "unit_of_work"]
