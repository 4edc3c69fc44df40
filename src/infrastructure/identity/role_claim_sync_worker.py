"""Background role-claim propagation.

Implements RoleClaimSyncProtocol with a bounded asyncio.Queue drained by a
single worker task. Each job writes the authoritative role to the identity
provider through ``set_role_claim`` and is retried with exponential backoff
(tenacity). A job that exhausts its attempts is logged and dropped; the next
login that sees a stale role claim enqueues it again.

Lifecycle:
    worker = RoleClaimSyncWorker(identity_provider, logger)
    await worker.start()     # application startup
    worker.enqueue(uid, "seller")
    await worker.stop()      # application shutdown, drains pending jobs
"""

import asyncio
from dataclasses import dataclass

from tenacity import AsyncRetrying, RetryError, stop_after_attempt, wait_exponential

from src.domain.protocols.identity_provider_protocol import IdentityProviderProtocol
from src.domain.protocols.logger_protocol import LoggerProtocol


@dataclass(frozen=True, slots=True)
class _ClaimJob:
    subject_id: str
    role: str


class RoleClaimSyncWorker:
    """Queue-backed role claim propagation with a retry policy.

    Args:
        identity_provider: Adapter exposing set_role_claim.
        logger: Structured logger.
        max_attempts: Attempts per job before it is dropped.
        backoff_seconds: Base delay for exponential backoff.
        queue_size: Maximum pending jobs; enqueue fails fast when full.
    """

    def __init__(
        self,
        identity_provider: IdentityProviderProtocol,
        logger: LoggerProtocol,
        max_attempts: int = 3,
        backoff_seconds: float = 0.5,
        queue_size: int = 1000,
    ) -> None:
        self._identity_provider = identity_provider
        self._logger = logger
        self._max_attempts = max_attempts
        self._backoff_seconds = backoff_seconds
        self._queue: asyncio.Queue[_ClaimJob] = asyncio.Queue(maxsize=queue_size)
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def enqueue(self, subject_id: str, role: str) -> bool:
        """Queue a role claim write without waiting for it.

        Returns:
            bool: False when the queue is full (logged, not raised).
        """
        try:
            self._queue.put_nowait(_ClaimJob(subject_id=subject_id, role=role))
        except asyncio.QueueFull:
            self._logger.warning(
                "role_claim_sync_queue_full",
                subject_id=subject_id,
                role=role,
            )
            return False
        return True

    async def start(self) -> None:
        """Start the worker task (idempotent)."""
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="role-claim-sync")
        self._logger.info("role_claim_sync_started")

    async def stop(self, drain_timeout: float = 5.0) -> None:
        """Drain pending jobs (bounded by ``drain_timeout``) and stop."""
        if self._task is None:
            return
        try:
            await asyncio.wait_for(self._queue.join(), timeout=drain_timeout)
        except TimeoutError:
            self._logger.warning("role_claim_sync_drain_timeout", pending=self.pending)
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        self._logger.info("role_claim_sync_stopped")

    async def _run(self) -> None:
        while True:
            job = await self._queue.get()
            try:
                await self.process(job.subject_id, job.role)
            finally:
                self._queue.task_done()

    async def process(self, subject_id: str, role: str) -> bool:
        """Write one role claim with retries.

        Returns:
            bool: True when the claim was written.
        """
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self._max_attempts),
                wait=wait_exponential(multiplier=self._backoff_seconds, max=10),
                reraise=False,
            ):
                with attempt:
                    await self._identity_provider.set_role_claim(subject_id, role)
        except RetryError as e:
            last_error = e.last_attempt.exception()
            self._logger.error(
                "role_claim_sync_failed",
                subject_id=subject_id,
                role=role,
                attempts=self._max_attempts,
                error_type=type(last_error).__name__,
                error_message=str(last_error),
            )
            return False

        self._logger.info("role_claim_synced", subject_id=subject_id, role=role)
        return True
