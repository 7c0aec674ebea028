"""Pytest configuration and fixtures."""

import io
import os
from pathlib import Path

import pytest
from loguru import logger

from ormrel.diagnostics import Diagnostics
from ormrel.orm import parse_orm_file

DATA_DIR = Path(__file__).parent / "data"


def pytest_configure(config):
    """Drop ORMREL_* overrides from the calling shell"""
    for name in list(os.environ):
        if name.startswith("ORMREL_"):
            del os.environ[name]


@pytest.fixture(autouse=True)
def loguru_capture():
    stream = io.StringIO()
    logger.remove()
    logger.add(stream, level="INFO")
    yield stream
    logger.remove()


@pytest.fixture(scope="session")
def model_path() -> Path:
    """NORMA document with Event and Person concept diagrams."""
    return DATA_DIR / "event_registration.orm"


@pytest.fixture(scope="session")
def orm_model(model_path):
    return parse_orm_file(model_path)


@pytest.fixture
def diagnostics():
    return Diagnostics()


@pytest.fixture
def diagram(orm_model):
    """Lookup of a diagram of the fixture model by name"""

    def _diagram(name):
        return next(d for d in orm_model.diagrams if d.name == name)

    return _diagram


@pytest.fixture
def fact_type(orm_model):
    """Lookup of a fact type of the fixture model by name"""

    def _fact_type(name):
        return next(f for f in orm_model.fact_types if f.name == name)

    return _fact_type
