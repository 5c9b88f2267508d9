"""Async client for the jwtdemo server."""

from jwtdemo.client.scheduler import AsyncioScheduler, RecurringTask, VirtualScheduler
from jwtdemo.client.session import ClientSessionManager, SessionState, ViewState
from jwtdemo.client.storage import TOKEN_SLOT, FileTokenStorage, MemoryTokenStorage

__all__ = [
    "AsyncioScheduler",
    "ClientSessionManager",
    "FileTokenStorage",
    "MemoryTokenStorage",
    "RecurringTask",
    "SessionState",
    "TOKEN_SLOT",
    "VirtualScheduler",
    "ViewState",
]
