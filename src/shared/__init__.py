"""Shared utilities and helpers."""
from shared.diagnostics import log_memory_usage, log_thread_status
from shared.progress import ConsoleProgress

__all__ = [
    'ConsoleProgress',
    'log_memory_usage',
    'log_thread_status',
]
