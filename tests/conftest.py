"""Pytest configuration and fixtures shared across all test modules.

This file is automatically loaded by pytest before running any tests.
It pins the environment before weberr reads its settings.
"""

import os

# CRITICAL: Set this before any imports that might load settings
os.environ["WEBERR_ENV"] = "testing"
os.environ.setdefault("WEBERR_STACK_ENABLED", "true")
os.environ.setdefault("WEBERR_STACK_MAX_FRAMES", "64")

import pytest

from weberr.core.config import settings


@pytest.fixture
def stack_settings(monkeypatch: pytest.MonkeyPatch):
    """Global stack settings, restored after the test."""
    monkeypatch.setattr(settings.stack, "enabled", settings.stack.enabled)
    monkeypatch.setattr(settings.stack, "max_frames", settings.stack.max_frames)
    return settings.stack


@pytest.fixture
def eof() -> EOFError:
    """Foreign base error whose message is "EOF"."""
    return EOFError("EOF")
