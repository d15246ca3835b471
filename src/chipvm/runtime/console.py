''' Terminal front end: ANSI screen and a toggling keypad '''

import os
import sys
import select
import termios
import tty
import logging as lg
from typing import TextIO

from chipvm.common.hwconf import SCREEN_WIDTH, SCREEN_HEIGHT
from chipvm.runtime.devices import FrameBuffer


KEYMAP = {c: int(c, 16) for c in '0123456789abcdef'}

PIXEL_ON = '█'
PIXEL_OFF = ' '


def map_key(char: str) -> int | None:
    return KEYMAP.get(char.lower())


class ConsoleScreen(FrameBuffer):
    def __init__(
        self,
        stream: TextIO | None = None,
        width: int = SCREEN_WIDTH,
        height: int = SCREEN_HEIGHT
    ):
        self.stream = stream if stream is not None else sys.stdout
        super().__init__(width, height)

    def set_extents(self, width: int, height: int):
        super().set_extents(width, height)
        # Hide the cursor, wipe the terminal
        self.stream.write('\x1b[?25l\x1b[2J')
        self.stream.flush()

    def clear(self):
        super().clear()
        self.stream.flush()

    def on_pixel(self, x: int, y: int, value: bool):
        self.stream.write(f'\x1b[{y + 1};{x + 1}H{PIXEL_ON if value else PIXEL_OFF}')

    def draw_sprite(self, x, y, height, sprite) -> bool:
        collided = super().draw_sprite(x, y, height, sprite)
        self.stream.flush()
        return collided

    def close(self):
        self.stream.write(f'\x1b[{self.height + 1};1H\x1b[?25h')
        self.stream.flush()


class ConsoleKeypad:
    ''' Every press of a mapped key flips its state '''
    keys: list[bool]
    fd: int | None  # None when the stream has no descriptor

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream if stream is not None else sys.stdin
        self.keys = [False] * len(KEYMAP)
        self.saved = None

        try:
            self.fd = self.stream.fileno()
        except (OSError, ValueError):
            lg.debug('Keypad stream has no descriptor, no keys will arrive')
            self.fd = None

    def __enter__(self):
        if self.fd is not None and os.isatty(self.fd):
            self.saved = termios.tcgetattr(self.fd)
            tty.setcbreak(self.fd)

        return self

    def __exit__(self, *args):
        if self.saved is not None:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self.saved)
            self.saved = None

    def read_char(self) -> str:
        if self.fd is None:
            raise EOFError('Keypad input closed')

        data = os.read(self.fd, 1)

        if not data:
            raise EOFError('Keypad input closed')

        return data.decode(errors='ignore')

    def available(self) -> bool:
        if self.fd is None:
            return False

        readable, _, _ = select.select([self.fd], [], [], 0)
        return bool(readable)

    def poll(self):
        while self.available():
            data = os.read(self.fd, 1)

            if not data:
                # Closed input only matters to wait_for_key
                lg.debug('Keypad input closed')
                self.fd = None
                return

            key = map_key(data.decode(errors='ignore'))

            if key is not None:
                self.keys[key] = not self.keys[key]
                lg.debug(f'Key {key:X} {"down" if self.keys[key] else "up"}')

    def is_down(self, key: int) -> bool:
        return 0 <= key < len(self.keys) and self.keys[key]

    def wait_for_key(self) -> int:
        while True:
            key = map_key(self.read_char())

            if key is not None:
                return key
