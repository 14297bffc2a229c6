"""
Shared fixtures for GridSight tests.
"""
import pytest
from gridsight.schemas import GeneratorUnit, LoadPoint


def make_series(values, start_hour=0, day="2024-01-01"):
    """Hourly series starting at day start_hour:00 (max 24 points per day)"""
    return [
        LoadPoint(timestamp=f"{day} {start_hour + i:02d}:00", value=v)
        for i, v in enumerate(values)
    ]


@pytest.fixture
def hourly_load():
    values = [100.0, 102.0, 99.0, 101.0, 100.5, 98.5, 101.5, 100.0, 99.5, 102.5, 100.0, 99.0,
              100.5, 101.0, 150.0, 100.0, 99.5, 101.0]
    return make_series(values)


@pytest.fixture
def fleet():
    return [
        GeneratorUnit(id="U1", name="Unit 1", capacity=300, status="ON"),
        GeneratorUnit(id="U2", name="Unit 2", capacity=250, status="OFF"),
        GeneratorUnit(id="U3", name="Unit 3", capacity=200, status="ON"),
    ]
