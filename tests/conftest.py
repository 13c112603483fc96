"""Shared pytest configuration.

Property-based tests build many small tensors per example; disable the
per-example deadline so they do not fail spuriously on slower CI machines.
"""

from __future__ import annotations

import pytest
from hypothesis import HealthCheck, settings

from tensormap import config

settings.register_profile(
    "tensormap",
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.load_profile("tensormap")


@pytest.fixture(autouse=True)
def _restore_config():
    """Config knobs are module globals; reset them after every test."""
    saved = (config.DEFAULT_PLACEHOLDER, config.REDUCE_CHUNK_SIZE, config.WARN_ON_INDEX_COLLISION)
    yield
    config.set_default_placeholder(saved[0])
    config.set_reduce_chunk_size(saved[1])
    config.set_warn_on_index_collision(saved[2])
