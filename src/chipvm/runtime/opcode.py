from dataclasses import dataclass


@dataclass(frozen=True)
class OpCode:
    ''' Two-byte instruction word, split into nibbles n[0]..n[3] '''
    high: int
    low: int

    @classmethod
    def from_word(cls, word: int):
        return cls((word >> 8) & 0xFF, word & 0xFF)

    def __getitem__(self, nibble: int) -> int:
        if nibble == 0:
            return (self.high & 0xF0) >> 4

        if nibble == 1:
            return self.high & 0x0F

        if nibble == 2:
            return (self.low & 0xF0) >> 4

        if nibble == 3:
            return self.low & 0x0F

        raise IndexError(f'No nibble {nibble} in an opcode')

    @property
    def value(self) -> int:
        return self.high << 8 | self.low

    @property
    def x(self) -> int:
        return self[1]

    @property
    def y(self) -> int:
        return self[2]

    @property
    def n(self) -> int:
        return self[3]

    @property
    def nn(self) -> int:
        return self.low

    @property
    def nnn(self) -> int:
        return self.value & 0xFFF

    def __str__(self):
        return f'{self.value:04X}'
