# tests/conftest.py
from __future__ import annotations

import numpy as np
import pytest
from loguru import logger

from namedvec import NamedVec
from namedvec.config.app_config import reset_config


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)  # or sys.stderr
    yield


@pytest.fixture(autouse=True)
def default_config():
    reset_config()
    yield
    reset_config()


@pytest.fixture
def abc_vec() -> NamedVec:
    """a=[1], b=[2, 3], c=4 -> flat [1, 2, 3, 4]"""
    return NamedVec(a=[1], b=[2, 3], c=4)


@pytest.fixture
def nested_vec() -> NamedVec:
    """
    outer
     ├── p : [0.5]
     └── q : inner
           ├── x : 1.0
           └── y : [2.0, 3.0]
    """
    inner = NamedVec(x=1.0, y=np.array([2.0, 3.0]))
    return NamedVec(p=[0.5], q=inner)


@pytest.fixture
def capture_logs():
    captured: list[str] = []
    sink_id = logger.add(lambda msg: captured.append(str(msg)), level="DEBUG")
    yield captured
    logger.remove(sink_id)
