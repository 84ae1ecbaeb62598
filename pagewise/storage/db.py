from typing import Any, AsyncIterator, Type

from sqlalchemy import Select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlmodel.ext.asyncio.session import AsyncSession

from pagewise.logging import logger
from pagewise.schemas.generic_typing import GenericSQLModelType


def create_session_factory(
    database_url: str, **engine_kwargs: Any
) -> async_sessionmaker[AsyncSession]:
    """
    Create an async session factory bound to a new engine.

    Args:
        database_url: SQLAlchemy async database URL,
            e.g. ``postgresql+asyncpg://...`` or ``sqlite+aiosqlite://``.
        **engine_kwargs: Extra keyword arguments for ``create_async_engine``.

    Returns:
        Session factory producing SQLModel ``AsyncSession`` instances.
    """
    engine = create_async_engine(database_url, **engine_kwargs)
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


async def session_scope(
    factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """
    Yield a session that commits on success and rolls back on error.

    Suitable as a FastAPI dependency when wrapped with ``functools.partial``.

    Yields:
        AsyncSession: An asynchronous SQLAlchemy session.
    """
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except IntegrityError as ex:
            await session.rollback()
            logger.error(f"Database integrity error: {ex}")
            raise
        except SQLAlchemyError as ex:
            await session.rollback()
            logger.error(f"Database error: {ex}")
            raise


def default_apply_filters(
    query: Select, model: Type[GenericSQLModelType], filters: dict[str, Any]
) -> Select:
    """
    Apply default filters to a SQLModel query.

    String filters use case-insensitive ILIKE pattern matching with wildcards.
    Other types use exact equality matching or IN clauses for lists/tuples.

    Args:
        query (Select): The SQLModel query to apply filters to.
        model (Type[GenericSQLModelType]): The SQLModel class being queried.
        filters (dict[str, Any]): A dictionary of filters to apply to the query.

    Returns:
        Select: The updated query with the filters applied.

    Raises:
        ValueError: If a filter key is not an attribute of the SQLModel class.
    """
    for key, value in filters.items():
        if hasattr(model, key):
            attr = getattr(model, key)
            if isinstance(value, (list, tuple, set, frozenset)):
                query = query.filter(attr.in_(value))
            elif isinstance(value, str):
                query = query.filter(attr.ilike(f"%{value}%"))
            else:
                query = query.filter(attr == value)
        else:
            raise ValueError(
                f"Invalid filter: {key} is not an attribute of {model.__name__}"
            )
    return query


def exact_apply_filters(
    query: Select, model: Type[GenericSQLModelType], filters: dict[str, Any]
) -> Select:
    """
    Apply filters using equality (or IN for sequences) for every value.

    Used by finders, where ``by_name`` means an exact match rather than the
    partial match ``default_apply_filters`` gives strings.

    Raises:
        ValueError: If a filter key is not an attribute of the SQLModel class.
    """
    for key, value in filters.items():
        if not hasattr(model, key):
            raise ValueError(
                f"Invalid filter: {key} is not an attribute of {model.__name__}"
            )
        attr = getattr(model, key)
        if isinstance(value, (list, tuple, set, frozenset)):
            query = query.filter(attr.in_(value))
        elif value is None:
            query = query.filter(attr.is_(None))
        else:
            query = query.filter(attr == value)
    return query
