"""Shared lifecycle and error reporting for page-level views."""

import asyncio
import logging
from collections.abc import Awaitable, Coroutine
from typing import TYPE_CHECKING, Any, TypeVar

import pydantic

from nusong_client.polling import CancellationToken
from nusong_client.services.base import (
    APIError,
    AuthenticationError,
    QuotaExceededError,
    ValidationError,
)

if TYPE_CHECKING:
    from nusong_client.main import NuSongApp

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=pydantic.BaseModel)


def _clean_message(message: str) -> str:
    return message.removeprefix("Value error, ")


class BaseView:
    """A page: owns its background work and the state shown to the user.

    Closing the view cancels its token and waits for its tasks, so no poll
    callback runs after teardown.
    """

    def __init__(self, app: "NuSongApp") -> None:
        self.app = app
        self.notifier = app.notifier
        self.cache = app.cache
        self.token = CancellationToken()
        self.errors: dict[str, str] = {}
        self.closed = False
        self._tasks: set[asyncio.Task[Any]] = set()

    def spawn(self, coro: Coroutine[Any, Any, T]) -> "asyncio.Task[T]":
        """Run coro in the background for as long as the view is open."""
        if self.closed:
            coro.close()
            raise RuntimeError(f"{type(self).__name__} is closed")
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self.token.cancel()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    def validate(self, model: type[M], **data: Any) -> M | None:
        """Build a form model, recording inline errors when it is invalid."""
        self.errors = {}
        try:
            return model(**data)
        except pydantic.ValidationError as e:
            for error in e.errors():
                field = ".".join(str(part) for part in error["loc"]) or "__root__"
                self.errors.setdefault(field, _clean_message(error["msg"]))
            return None

    async def perform(self, call: Awaitable[T], error_title: str) -> T | None:
        """Await a backend call, turning API failures into user feedback.

        Returns None when the call failed and the failure was reported.
        """
        try:
            return await call
        except AuthenticationError:
            # The auth interceptor already notified and redirected.
            return None
        except QuotaExceededError as e:
            self.notifier.error("Generation Limit Reached", str(e))
            return None
        except ValidationError as e:
            self.errors = dict(e.errors)
            self.notifier.error(error_title, str(e))
            return None
        except APIError as e:
            logger.warning("%s: %s", error_title, e)
            self.notifier.error(error_title, str(e))
            return None

    async def complete(self, call: Awaitable[Any], error_title: str) -> bool:
        """perform() for calls without a response body."""
        return await self.perform(_succeeds(call), error_title) is True


async def _succeeds(call: Awaitable[Any]) -> bool:
    await call
    return True
