# tests/conftest.py - shared fixtures
from datetime import datetime, timedelta

import pytest
import pytz

from taskboard.config import Config
from taskboard.models import Task
from taskboard.projects import ProjectRegistry
from taskboard.storage import MemoryStore

NOW = datetime(2024, 3, 10, 12, 0, tzinfo=pytz.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def config(tmp_path):
    return Config(
        _env_file=None,
        storage_path=str(tmp_path / "storage.json"),
        export_dir=str(tmp_path / "out"),
        timezone="UTC",
    )


@pytest.fixture
def make_task():
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        data = {
            "id": counter["n"],
            "name": f"Task {counter['n']}",
            "project": "other",
            "importance": 3,
            "length": 3,
            "difficulty": 3,
            "createdAt": NOW.isoformat(),
            "deadline": None,
        }
        age_days = overrides.pop("age_days", None)
        if age_days is not None:
            data["createdAt"] = (NOW - timedelta(days=age_days)).isoformat()
        data.update(overrides)
        return Task.model_validate(data)

    return _make


@pytest.fixture
def registry():
    reg = ProjectRegistry(MemoryStore())
    reg.load()
    return reg
