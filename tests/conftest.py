"""
Pytest configuration and shared fixtures.
"""

import sys
from datetime import date
from pathlib import Path

import pytest
from faker import Faker

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from models.dates import EN_US, SelectionMode  # noqa: E402
from models.formats import NATIVE  # noqa: E402
from models.ownership import Owned  # noqa: E402
from services.picker import DatePicker  # noqa: E402
from services.selection import SelectionStateMachine  # noqa: E402
from services.value import ValueController  # noqa: E402


class Recorder:
    """Change callback that remembers every value it was called with."""

    def __init__(self):
        self.calls = []

    def __call__(self, value):
        self.calls.append(value)

    @property
    def last(self):
        return self.calls[-1]


@pytest.fixture
def today():
    """Fixed 'now' for presets and day states."""
    return date(2025, 11, 18)


@pytest.fixture
def fake():
    """Seeded Faker so random dates are reproducible."""
    faker = Faker()
    Faker.seed(20251118)
    return faker


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def range_machine(recorder):
    """Range-mode engine with an owned value and native output."""
    controller = ValueController(SelectionMode.RANGE, Owned(on_change=recorder), NATIVE, EN_US)
    return SelectionStateMachine(controller)


@pytest.fixture
def single_machine(recorder):
    controller = ValueController(SelectionMode.SINGLE, Owned(on_change=recorder), NATIVE, EN_US)
    return SelectionStateMachine(controller)


@pytest.fixture
def single_picker(recorder, today):
    return DatePicker(
        mode=SelectionMode.SINGLE,
        value=Owned(on_change=recorder),
        output_format=NATIVE,
        locale=EN_US,
        today=lambda: today,
    )


@pytest.fixture
def range_picker(recorder, today):
    return DatePicker(
        mode=SelectionMode.RANGE,
        value=Owned(on_change=recorder),
        output_format=NATIVE,
        locale=EN_US,
        today=lambda: today,
    )
