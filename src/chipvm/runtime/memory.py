import logging as lg

from chipvm.common.hwconf import MEMORY_SIZE, BASE_ADDRESS, OP_SIZE, GLYPH_HEIGHT
from chipvm.runtime.faults import InvalidAddress


GLYPHS = (
    bytes([0xF0, 0x90, 0x90, 0x90, 0xF0]),  # 0
    bytes([0x20, 0x60, 0x20, 0x20, 0x70]),  # 1
    bytes([0xF0, 0x10, 0xF0, 0x80, 0xF0]),  # 2
    bytes([0xF0, 0x10, 0xF0, 0x10, 0xF0]),  # 3
    bytes([0x90, 0x90, 0xF0, 0x10, 0x10]),  # 4
    bytes([0xF0, 0x80, 0xF0, 0x10, 0xF0]),  # 5
    bytes([0xF0, 0x80, 0xF0, 0x90, 0xF0]),  # 6
    bytes([0xF0, 0x10, 0x20, 0x40, 0x40]),  # 7
    bytes([0xF0, 0x90, 0xF0, 0x90, 0xF0]),  # 8
    bytes([0xF0, 0x90, 0xF0, 0x10, 0xF0]),  # 9
    bytes([0xF0, 0x90, 0xF0, 0x90, 0x90]),  # A
    bytes([0xE0, 0x90, 0xE0, 0x90, 0xE0]),  # B
    bytes([0xF0, 0x80, 0x80, 0x80, 0xF0]),  # C
    bytes([0xE0, 0x90, 0x90, 0x90, 0xE0]),  # D
    bytes([0xF0, 0x80, 0xF0, 0x80, 0xF0]),  # E
    bytes([0xF0, 0x80, 0xF0, 0x80, 0x80])   # F
)


def glyph_row(glyph: int, row: int) -> int:
    if not 0 <= glyph < len(GLYPHS) or not 0 <= row < GLYPH_HEIGHT:
        raise InvalidAddress(f'No row {row} in glyph {glyph}')

    return GLYPHS[glyph][row]


class Memory:
    ''' Program address space, logical addresses start at base '''
    data: bytearray
    base: int

    def __init__(self, size: int = MEMORY_SIZE, base: int = BASE_ADDRESS):
        self.data = bytearray(size)
        self.base = base

    def __len__(self):
        return len(self.data)

    def offset(self, address: int) -> int:
        offset = address - self.base

        if not 0 <= offset < len(self.data):
            raise InvalidAddress(f'Address 0x{address:X} is out of memory')

        return offset

    def can_fetch(self, address: int) -> bool:
        return self.base <= address <= self.base + len(self.data) - OP_SIZE

    def __getitem__(self, address: int) -> int:
        return self.data[self.offset(address)]

    def __setitem__(self, address: int, value: int):
        self.data[self.offset(address)] = value & 0xFF

    def load(self, image: bytes):
        size = min(len(image), len(self.data))

        if size < len(image):
            lg.info(f'Program image truncated from {len(image)} to {size} bytes')

        self.data[:size] = image[:size]
        lg.debug(f'Loaded {size} bytes at 0x{self.base:X}')
