r"""Utility functions for the retry executors."""

from __future__ import annotations

__all__ = ["async_wait_before_retry", "wait_before_retry"]

from aretry.utils.sleep import async_wait_before_retry, wait_before_retry
