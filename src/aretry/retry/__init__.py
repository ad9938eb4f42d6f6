r"""Retry package implementing the policy and the retry executors.

Public API:
    - RetryPolicy: Decides which outcomes are retried and the backoff delays
    - CallbackConfig: Configuration for callbacks
    - CallbackManager: Manager for callback invocations
    - RetryExecutor: Synchronous retry executor
    - AsyncRetryExecutor: Asynchronous retry executor
"""

from __future__ import annotations

__all__ = [
    "AsyncRetryExecutor",
    "CallbackConfig",
    "CallbackManager",
    "RetryExecutor",
    "RetryPolicy",
]

from aretry.retry.executor import RetryExecutor
from aretry.retry.executor_async import AsyncRetryExecutor
from aretry.retry.manager import CallbackConfig, CallbackManager
from aretry.retry.policy import RetryPolicy
