# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import pytest
from support import FailureFactory, FakeResolver, RecordingLogger, make_failure


@pytest.fixture
def failure_factory() -> FailureFactory:
    """Return the failure builder used across tests."""
    return make_failure


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def fake_resolver() -> FakeResolver:
    return FakeResolver()
