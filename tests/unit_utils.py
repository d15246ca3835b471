from pathlib import Path
import random
from typing import Callable

from chipvm.common.hwconf import TICK_NS
from chipvm.common.settings import MachineSettings
from chipvm.runtime.devices import FrameBuffer
import chipvm.runtime.emulator as emulator
import chipvm.runtime.cpu as cpu
import chipvm.sasm.asm as asm


def find_file(filename: str) -> Path:
    return Path(__file__).parent / filename


def load_file(filename: str) -> str:
    return find_file(filename).read_text()


class FakeClock:
    def __init__(self):
        self.now = 0

    def __call__(self) -> int:
        return self.now

    def advance(self, ns: int):
        self.now += ns

    def advance_ticks(self, ticks: int):
        self.advance(ticks * TICK_NS)


class ScriptedKeypad:
    def __init__(self, down=(), waits=(), on_wait: Callable[[], None] | None = None):
        self.down = set(down)
        self.waits = list(waits)
        self.on_wait = on_wait
        self.polls = 0

    def poll(self):
        self.polls += 1

    def is_down(self, key: int) -> bool:
        return key in self.down

    def wait_for_key(self) -> int:
        if not self.waits:
            raise EOFError('No scripted keys left')

        if self.on_wait is not None:
            self.on_wait()

        return self.waits.pop(0)


def make_cpu(
    image: bytes,
    keypad: ScriptedKeypad | None = None,
    settings: MachineSettings | None = None,
    rng: random.Random | None = None
) -> cpu.CPU:
    if keypad is None:
        keypad = ScriptedKeypad()

    return emulator.create_cpu(image, FrameBuffer(), keypad, settings, clock=FakeClock(), rng=rng)


def words(*values: int) -> bytes:
    return b''.join(value.to_bytes(2, 'big') for value in values)


def assemble_cpu(source: str, **kwargs) -> cpu.CPU:
    return make_cpu(asm.compile_string(source), **kwargs)


def run_cycles(proc: cpu.CPU, cycles: int) -> int:
    return emulator.execute(proc, cycles, sleep=lambda _: None)


def execute_file(filename: str, cycles: int, **kwargs) -> cpu.CPU:
    item = asm.collect_file(find_file(filename))
    proc = make_cpu(asm.compile_items([item]), **kwargs)
    run_cycles(proc, cycles)
    return proc
