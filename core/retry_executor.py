"""
Retry Executor

Runs an async operation under a bounded retry policy with exponential
backoff. Network failures, 5xx, 408 and 429 are retried; any other 4xx is
re-raised on the first attempt.

Usage:
    executor = RetryExecutor()
    tasks = await executor.execute(client.list_items, max_attempts=3, base_delay_ms=1000)
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

from pydantic import BaseModel, Field
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from .errors import is_retryable
from .notifications import LoggingNotifier, NotificationVariant, Notifier

logger = logging.getLogger(__name__)

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[Any]]


class RetryPolicy(BaseModel):
    """Retry ceiling and backoff base"""
    max_attempts: int = Field(default=3, ge=1)
    base_delay_ms: int = Field(default=1000, ge=0)

    def delay_ms(self, retry_index: int) -> int:
        """Backoff before the retry_index-th retry (0-based)"""
        return self.base_delay_ms * 2 ** retry_index


DEFAULT_RETRY_POLICY = RetryPolicy()


class RetryExecutor:
    """
    Executes operations with retry and exponential backoff

    The wait before retry k (k = 0, 1, ...) is ``base_delay_ms * 2**k``.
    When ``notify_progress`` is set the notifier receives an
    "Attempt k/n..." message before every retry and a failure message once
    retryable attempts are exhausted.
    """

    def __init__(
        self,
        notifier: Optional[Notifier] = None,
        sleep: Optional[Sleep] = None,
        default_policy: Optional[RetryPolicy] = None,
    ):
        """
        Args:
            notifier: Receives retry progress notifications (logs by default)
            sleep: Async sleep used between attempts (asyncio.sleep by default)
            default_policy: Policy used by execute_with_policy when none is given
        """
        self.notifier = notifier or LoggingNotifier()
        self._sleep = sleep or asyncio.sleep
        self.default_policy = default_policy or DEFAULT_RETRY_POLICY

    async def execute(
        self,
        operation: Callable[[], Awaitable[T]],
        max_attempts: int = DEFAULT_RETRY_POLICY.max_attempts,
        base_delay_ms: int = DEFAULT_RETRY_POLICY.base_delay_ms,
        notify_progress: bool = False,
    ) -> T:
        """
        Run ``operation`` until it succeeds, fails fatally, or runs out of attempts

        Args:
            operation: Zero-argument coroutine function performing one round trip
            max_attempts: Total attempts including the first (>= 1)
            base_delay_ms: Delay before the first retry, doubled for each later one
            notify_progress: Emit retry progress and final failure notifications

        Returns:
            The operation's result

        Raises:
            The last error raised by ``operation``, unchanged
        """
        policy = RetryPolicy(max_attempts=max_attempts, base_delay_ms=base_delay_ms)

        retrying = AsyncRetrying(
            sleep=self._sleep,
            stop=stop_after_attempt(policy.max_attempts),
            wait=wait_exponential(multiplier=policy.base_delay_ms / 1000, exp_base=2, min=0),
            retry=retry_if_exception(is_retryable),
            before=self._before_attempt(policy, notify_progress),
            before_sleep=self._before_sleep(policy),
            reraise=True,
        )

        try:
            return await retrying(operation)
        except Exception as e:
            if is_retryable(e):
                logger.error(f"Request failed after {policy.max_attempts} attempts: {e}")
                if notify_progress:
                    self.notifier.notify(
                        "Request Failed",
                        "The request failed after multiple attempts. Please try again later.",
                        NotificationVariant.DESTRUCTIVE,
                    )
            else:
                logger.debug(f"Request failed with non-retryable error: {e}")
            raise

    async def execute_with_policy(
        self,
        operation: Callable[[], Awaitable[T]],
        policy: Optional[RetryPolicy] = None,
        notify_progress: bool = False,
    ) -> T:
        """Run ``operation`` under a RetryPolicy (the executor default when omitted)"""
        policy = policy or self.default_policy
        return await self.execute(
            operation,
            max_attempts=policy.max_attempts,
            base_delay_ms=policy.base_delay_ms,
            notify_progress=notify_progress,
        )

    def _before_attempt(self, policy: RetryPolicy, notify_progress: bool):
        def before(retry_state: RetryCallState) -> None:
            attempt = retry_state.attempt_number
            if notify_progress and attempt > 1:
                self.notifier.notify(
                    "Retrying Request",
                    f"Attempt {attempt}/{policy.max_attempts}...",
                )
        return before

    def _before_sleep(self, policy: RetryPolicy):
        def before_sleep(retry_state: RetryCallState) -> None:
            delay_ms = policy.delay_ms(retry_state.attempt_number - 1)
            error = retry_state.outcome.exception() if retry_state.outcome else None
            logger.warning(
                f"Request failed, retrying in {delay_ms}ms... "
                f"(attempt {retry_state.attempt_number}/{policy.max_attempts}): {error}"
            )
        return before_sleep


__all__ = ["RetryPolicy", "RetryExecutor", "DEFAULT_RETRY_POLICY"]
