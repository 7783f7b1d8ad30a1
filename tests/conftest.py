import itertools

import pytest

from core.config import Config, load_config
from memory.backends import MemoryBackend
from memory.log import InteractionLog


@pytest.fixture
def config() -> Config:
    """Load default config for tests."""
    return load_config()


@pytest.fixture
def temp_config(tmp_path):
    """Create a temp config TOML for isolated tests."""
    toml_content = f"""
[storage]
backend = "sqlite"
db_path = "{tmp_path / 'store.db'}"
key = "test_db"
max_entries = 5
[llm]
backend = "local"
default_framework = "unittest"
[llm.local]
base_url = "http://127.0.0.1:9999/v1"
model = "test-model"
[chat]
error_message = "offline"
[explorer]
ignored_dirs = [".git"]
"""
    config_path = tmp_path / "test.toml"
    config_path.write_text(toml_content)
    return load_config(str(config_path))


@pytest.fixture
def backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def clock():
    """Deterministic millisecond clock: 1000, 1001, 1002, ..."""
    counter = itertools.count(1000)
    return lambda: next(counter)


@pytest.fixture
def log(backend, clock) -> InteractionLog:
    return InteractionLog(backend, key="test_db", clock=clock)
