''' Display and input contracts consumed by the CPU '''

from typing import Protocol, Sequence

from chipvm.common.hwconf import SCREEN_WIDTH, SCREEN_HEIGHT


Sprite = Sequence[Sequence[bool]]


class Screen(Protocol):
    def clear(self) -> None:
        ...

    def set_extents(self, width: int, height: int) -> None:
        ...

    def draw_sprite(self, x: int, y: int, height: int, sprite: Sprite) -> bool:
        ...


class Keypad(Protocol):
    def poll(self) -> None:
        ...

    def is_down(self, key: int) -> bool:
        ...

    def wait_for_key(self) -> int:
        ...


class FrameBuffer:
    width: int
    height: int
    pixels: list[list[bool]]   # pixels[y][x]

    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT):
        self.set_extents(width, height)

    def set_extents(self, width: int, height: int):
        self.width = width
        self.height = height
        self.pixels = [[False] * width for _ in range(height)]

    def clear(self):
        for y, line in enumerate(self.pixels):
            for x, pixel in enumerate(line):
                if pixel:
                    line[x] = False
                    self.on_pixel(x, y, False)

    def on_pixel(self, x: int, y: int, value: bool):
        pass

    def draw_sprite(self, x: int, y: int, height: int, sprite: Sprite) -> bool:
        collided = False

        for row in range(height):
            y_pos = (y + row) % self.height
            line = self.pixels[y_pos]

            for col, bit in enumerate(sprite[row]):
                if not bit:
                    continue

                x_pos = (x + col) % self.width
                old = line[x_pos]
                line[x_pos] = not old
                collided = collided or old
                self.on_pixel(x_pos, y_pos, not old)

        return collided

    def lit(self) -> int:
        return sum(sum(line) for line in self.pixels)

    def render(self, on: str = '#', off: str = '.') -> str:
        return '\n'.join(''.join(on if p else off for p in line) for line in self.pixels)
