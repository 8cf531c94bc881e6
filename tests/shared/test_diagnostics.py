"""Tests for shared.diagnostics helpers."""

import logging
from unittest.mock import patch

import psutil

import shared.diagnostics as diagnostics


def test_get_memory_info_direct():
    info = diagnostics.get_memory_info()
    assert 'process_rss_mb' in info
    assert info['process_rss_mb'] > 0


def test_get_memory_info_error():
    with patch.object(
        diagnostics.psutil, 'Process', side_effect=psutil.NoSuchProcess(1)
    ):
        info = diagnostics.get_memory_info()
    assert 'error' in info


def test_get_thread_info_direct():
    info = diagnostics.get_thread_info()
    assert info['active_count'] >= 1
    assert 'MainThread' in info['thread_names']
    assert 'system_threads' in info


def test_get_thread_info_without_psutil_threads():
    with patch.object(
        diagnostics.psutil, 'Process', side_effect=psutil.AccessDenied()
    ):
        info = diagnostics.get_thread_info()
    assert 'system_threads' not in info
    assert 'active_count' in info


def test_log_memory_usage_direct(caplog):
    with caplog.at_level(logging.INFO):
        diagnostics.log_memory_usage('test context')
    assert 'Memory usage (test context)' in caplog.text


def test_log_memory_usage_without_context(caplog):
    with caplog.at_level(logging.INFO):
        diagnostics.log_memory_usage()
    assert 'Memory usage: RSS=' in caplog.text


def test_log_memory_usage_on_error(caplog):
    with (
        patch.object(diagnostics, 'get_memory_info', return_value={'error': 'x'}),
        caplog.at_level(logging.INFO),
    ):
        diagnostics.log_memory_usage()
    assert 'RSS=N/AMB' in caplog.text


def test_log_thread_status_direct(caplog):
    with caplog.at_level(logging.INFO):
        diagnostics.log_thread_status('build')
    assert 'Thread status (build): Active=' in caplog.text
