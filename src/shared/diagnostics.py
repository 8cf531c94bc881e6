"""
Diagnostic utilities.

Memory and thread snapshots logged around contour builds.
"""

import logging
import threading
from typing import Any

import psutil

logger = logging.getLogger(__name__)


def get_memory_info() -> dict[str, Any]:
    """Get process and system memory usage information."""
    try:
        process = psutil.Process()
        memory_info = process.memory_info()
        system_memory = psutil.virtual_memory()

        return {
            'process_rss_mb': round(memory_info.rss / 1024 / 1024, 2),
            'process_vms_mb': round(memory_info.vms / 1024 / 1024, 2),
            'system_total_mb': round(system_memory.total / 1024 / 1024, 2),
            'system_available_mb': round(
                system_memory.available / 1024 / 1024,
                2,
            ),
            'system_used_percent': system_memory.percent,
        }
    except psutil.Error as e:
        return {'error': f'Failed to get memory info: {e}'}


def get_thread_info() -> dict[str, Any]:
    """Get information about active threads."""
    info: dict[str, Any] = {
        'active_count': threading.active_count(),
        'thread_names': [t.name for t in threading.enumerate()],
        'main_thread_alive': threading.main_thread().is_alive(),
    }
    try:
        info['system_threads'] = psutil.Process().num_threads()
    except psutil.Error as e:
        logger.debug('Failed to get system thread count: %s', e)
    return info


def log_memory_usage(context: str = '') -> None:
    """Quick memory usage logging."""
    memory_info = get_memory_info()
    context_label = f' ({context})' if context else ''
    logger.info(
        'Memory usage%s: RSS=%sMB, Available=%sMB',
        context_label,
        memory_info.get('process_rss_mb', 'N/A'),
        memory_info.get('system_available_mb', 'N/A'),
    )


def log_thread_status(context: str = '') -> None:
    """Quick thread status logging."""
    thread_info = get_thread_info()
    context_label = f' ({context})' if context else ''
    logger.info(
        'Thread status%s: Active=%s, System=%s',
        context_label,
        thread_info.get('active_count', 'N/A'),
        thread_info.get('system_threads', 'N/A'),
    )
