"""Poll-until-terminal loop shared by every asynchronous generation job.

A job (music track, band member portrait, band picture) is started with one
call that returns an identifier; its status endpoint is then queried on a
fixed interval until it reports a terminal state. The loop:

* fetches immediately, then waits ``interval`` seconds between fetches,
* stops on ``completed`` (success callback gets the result URL unmodified)
  or ``failed`` (error callback gets the server message, or a generic one),
* gives up with a timeout error after ``max_attempts`` fetches, unless the
  ceiling is ``None``,
* retries transport and server errors, but aborts on an auth failure
  without calling back (the auth interceptor has already redirected),
* stops silently when its cancellation token is cancelled.
"""

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from nusong_client.schemas.band import ImageJobState, ImageJobStatus
from nusong_client.schemas.track import Track, TrackStatus
from nusong_client.services.base import APIError, AuthenticationError

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 30
DEFAULT_FAILURE_MESSAGE = "Generation failed. Please try again."
TIMEOUT_MESSAGE = "Generation timed out. Please try again."


class JobState(StrEnum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class JobStatus:
    """Normalized answer of a status endpoint."""

    state: JobState
    result_url: str | None = None
    error: str | None = None

    @classmethod
    def from_track(cls, track: Track) -> "JobStatus":
        if track.status == TrackStatus.COMPLETED:
            return cls(JobState.COMPLETED, result_url=track.audio_url)
        if track.status == TrackStatus.FAILED:
            return cls(JobState.FAILED, error=track.error)
        return cls(JobState.PENDING)

    @classmethod
    def from_image_job(cls, status: ImageJobStatus) -> "JobStatus":
        # A completed image job without a URL has not published its result yet.
        if status.status == ImageJobState.COMPLETED and status.image_url:
            return cls(JobState.COMPLETED, result_url=status.image_url)
        if status.status == ImageJobState.FAILED:
            return cls(JobState.FAILED, error=status.error)
        return cls(JobState.PENDING)


class PollOutcome(StrEnum):
    DONE = "done"
    ERROR = "error"
    TIMEOUT = "timeout-error"
    ABORTED = "aborted"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class PollResult:
    job_id: str
    outcome: PollOutcome
    attempts: int
    result_url: str | None = None
    error: str | None = None


class CancellationToken:
    """Ties a poll loop's lifetime to its owner."""

    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    async def sleep(self, delay: float) -> bool:
        """Sleep for delay seconds; return True if cancelled meanwhile."""
        try:
            await asyncio.wait_for(self._event.wait(), timeout=delay)
        except TimeoutError:
            return False
        return True


StatusFetcher = Callable[[str], Awaitable[JobStatus]]
Callback = Callable[..., Any]


def is_terminal_state(status: JobStatus) -> bool:
    return status.state is not JobState.PENDING


async def _call(callback: Callback | None, *args: Any) -> None:
    if callback is None:
        return
    result = callback(*args)
    if inspect.isawaitable(result):
        await result


class GenerationPoller:
    """Parameterized poll loop for one kind of generation job."""

    def __init__(
        self,
        fetch_status: StatusFetcher,
        *,
        interval: float,
        max_attempts: int | None = DEFAULT_MAX_ATTEMPTS,
        on_success: Callback | None = None,
        on_error: Callback | None = None,
        on_settled: Callback | None = None,
        is_terminal: Callable[[JobStatus], bool] = is_terminal_state,
        name: str = "generation",
    ) -> None:
        """Initialize the poller.

        Args:
            fetch_status: Coroutine returning the normalized status for a job ID.
            interval: Seconds to wait between fetches.
            max_attempts: Fetch ceiling, or None to poll until cancelled.
            on_success: Called with the result URL once the job completes.
            on_error: Called with a message on failure or timeout.
            on_settled: Called with the PollResult after on_success.
            is_terminal: Predicate deciding when a status ends the loop.
            name: Job kind, used in log messages.
        """
        if interval <= 0:
            raise ValueError("interval must be positive")
        if max_attempts is not None and max_attempts < 1:
            raise ValueError("max_attempts must be at least 1 or None")

        self.fetch_status = fetch_status
        self.interval = interval
        self.max_attempts = max_attempts
        self.on_success = on_success
        self.on_error = on_error
        self.on_settled = on_settled
        self.is_terminal = is_terminal
        self.name = name

    async def run(self, job_id: str, token: CancellationToken | None = None) -> PollResult:
        """Poll job_id until it reaches a terminal state."""
        token = token or CancellationToken()
        attempts = 0

        while True:
            if token.cancelled:
                return self._cancelled(job_id, attempts)

            attempts += 1
            try:
                status: JobStatus | None = await self.fetch_status(job_id)
            except AuthenticationError:
                logger.info("Stopped polling %s %s: session rejected", self.name, job_id)
                return PollResult(job_id, PollOutcome.ABORTED, attempts)
            except APIError as e:
                logger.warning(
                    "Error polling %s %s (attempt %d): %s", self.name, job_id, attempts, e
                )
                status = None

            if token.cancelled:
                return self._cancelled(job_id, attempts)

            if status is not None and self.is_terminal(status):
                return await self._finish(job_id, attempts, status)

            if self.max_attempts is not None and attempts >= self.max_attempts:
                logger.warning("Gave up on %s %s after %d attempts", self.name, job_id, attempts)
                await _call(self.on_error, TIMEOUT_MESSAGE)
                return PollResult(job_id, PollOutcome.TIMEOUT, attempts, error=TIMEOUT_MESSAGE)

            if await token.sleep(self.interval):
                return self._cancelled(job_id, attempts)

    def start(
        self, job_id: str, token: CancellationToken | None = None
    ) -> "asyncio.Task[PollResult]":
        """Run the loop in the background."""
        return asyncio.get_running_loop().create_task(
            self.run(job_id, token), name=f"poll-{self.name}-{job_id}"
        )

    async def _finish(self, job_id: str, attempts: int, status: JobStatus) -> PollResult:
        if status.state is JobState.COMPLETED:
            logger.info("%s %s completed after %d attempts", self.name, job_id, attempts)
            result = PollResult(job_id, PollOutcome.DONE, attempts, result_url=status.result_url)
            await _call(self.on_success, status.result_url)
            await _call(self.on_settled, result)
            return result

        message = status.error or DEFAULT_FAILURE_MESSAGE
        logger.info("%s %s failed: %s", self.name, job_id, message)
        await _call(self.on_error, message)
        return PollResult(job_id, PollOutcome.ERROR, attempts, error=message)

    def _cancelled(self, job_id: str, attempts: int) -> PollResult:
        logger.debug("Polling %s %s cancelled", self.name, job_id)
        return PollResult(job_id, PollOutcome.CANCELLED, attempts)
