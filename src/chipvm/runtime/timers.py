import time
from typing import Callable

from chipvm.common.hwconf import TICK_NS


Clock = Callable[[], int]


class Timers:
    ''' Delay and sound counters ticking at 60 Hz of clock time '''
    delay: int
    sound: int

    def __init__(self, clock: Clock = time.monotonic_ns):
        self.clock = clock
        self.delay = 0
        self.sound = 0
        self.elapsed = 0
        self.last = clock()

    def tick(self):
        if self.delay > 0:
            self.delay -= 1

        if self.sound > 0:
            self.sound -= 1

    def sync(self) -> int:
        now = self.clock()
        self.elapsed += now - self.last
        self.last = now

        ticks = 0

        while self.elapsed >= TICK_NS:
            self.tick()
            self.elapsed -= TICK_NS
            ticks += 1

        return ticks

    def rebase(self):
        # Time passed since the last sync is dropped
        self.last = self.clock()

    @property
    def sound_active(self) -> bool:
        return self.sound > 0
