"""
Service base

Shared plumbing for the repository services: injected session, clock and
id factory, a per-service logger, boundary validation, and the
service_operation decorator that turns raised errors into ServiceResult
failures.
"""
import functools
import logging
from typing import Any, Awaitable, Callable, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from watchlog.core.clock import Clock, IdFactory, new_id, utc_timestamp
from watchlog.core.exceptions import NotFoundError, StoreFailure, ValidationFailure
from watchlog.core.result import ErrorType, ServiceResult

M = TypeVar("M", bound=BaseModel)


class BaseService:
    """
    Base class for services bound to one AsyncSession.

    Attributes:
        db: session used for every statement
        clock: returns the current ISO-8601 timestamp
        id_factory: returns a new record id
        logger: component logger
    """

    logger_name = "watchlog"

    def __init__(
        self,
        db: AsyncSession,
        clock: Optional[Clock] = None,
        id_factory: Optional[IdFactory] = None,
    ):
        self.db = db
        self.clock = clock or utc_timestamp
        self.id_factory = id_factory or new_id
        self.logger = logging.getLogger(self.logger_name)

    async def _rollback(self) -> None:
        try:
            await self.db.rollback()
        except SQLAlchemyError as e:
            self.logger.error(f"Rollback failed: {e}", exc_info=True)


def validate_form(schema: Type[M], data: Any, entity: str) -> M:
    """
    Coerce caller input into `schema`.

    Accepts an instance of the schema, any other pydantic model, or a mapping.

    Raises:
        ValidationFailure: input does not satisfy the schema
    """
    if isinstance(data, schema):
        return data
    if isinstance(data, BaseModel):
        data = data.model_dump()
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        errors = e.errors(include_url=False)
        message = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or entity}: {err['msg']}"
            for err in errors
        )
        raise ValidationFailure(message, errors=errors, entity=entity)


def service_operation(action: str):
    """
    Wrap a service coroutine so it returns a ServiceResult.

    The wrapped coroutine returns plain data; NotFoundError, ValidationFailure,
    StoreFailure and SQLAlchemyError become failures and the session is
    rolled back, so a failed operation leaves prior state untouched.

    Args:
        action: phrase used in messages, e.g. "update title"
    """

    def decorator(
        func: Callable[..., Awaitable[Any]]
    ) -> Callable[..., Awaitable[ServiceResult]]:
        @functools.wraps(func)
        async def wrapper(self: BaseService, *args, **kwargs) -> ServiceResult:
            try:
                data = await func(self, *args, **kwargs)
            except NotFoundError as e:
                await self._rollback()
                self.logger.warning(f"Cannot {action}: {e.message}")
                return ServiceResult.fail(e.message, ErrorType.NOT_FOUND)
            except ValidationFailure as e:
                await self._rollback()
                self.logger.warning(f"Cannot {action}: {e.message}")
                return ServiceResult.fail(e.message, ErrorType.VALIDATION)
            except StoreFailure as e:
                await self._rollback()
                self.logger.error(f"Failed to {action}: {e}", exc_info=True)
                return ServiceResult.fail(f"Failed to {action}: {e.message}", ErrorType.STORE)
            except SQLAlchemyError as e:
                await self._rollback()
                self.logger.error(f"Failed to {action}: {e}", exc_info=True)
                return ServiceResult.fail(f"Failed to {action}: {e}", ErrorType.STORE)
            return ServiceResult.ok(data)

        return wrapper

    return decorator
