"""
Shared fixtures: every test gets its own runtime registry, a testing
configuration, and a clean slate of method patches.
"""

import pytest

from starmixin.app.runtime import RuntimeRegistry, set_runtime_registry
from starmixin.config import Environment, ExtenderConfig, get_config, set_config
from starmixin.patches import unpatch_all


@pytest.fixture(autouse=True)
def runtime_registry():
    registry = RuntimeRegistry()
    previous_registry = set_runtime_registry(registry)
    previous_config = get_config()
    set_config(ExtenderConfig.for_environment(Environment.TESTING))
    yield registry
    unpatch_all()
    set_config(previous_config)
    set_runtime_registry(previous_registry)
