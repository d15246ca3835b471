# type: ignore
import pytest

from unit_utils import FakeClock, ScriptedKeypad
from chipvm.runtime.devices import FrameBuffer
from chipvm.runtime.timers import Timers


@pytest.fixture
def with_clock():
    yield FakeClock()


@pytest.fixture
def with_timers(with_clock):
    yield Timers(with_clock)


@pytest.fixture
def with_screen():
    yield FrameBuffer()


@pytest.fixture
def with_keypad():
    yield ScriptedKeypad()
