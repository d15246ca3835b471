from chipvm.common.hwconf import NUM_REGISTERS, STACK_DEPTH, BASE_ADDRESS
from chipvm.runtime.faults import InvalidRegister, StackOverflow, StackUnderflow


class CallStack:
    depth: int
    frames: list[int]

    def __init__(self, depth: int = STACK_DEPTH):
        self.depth = depth
        self.frames = []

    def __len__(self):
        return len(self.frames)

    def push(self, address: int):
        if len(self.frames) >= self.depth:
            raise StackOverflow(f'Call stack overflow, depth {self.depth}')

        self.frames.append(address)

    def pop(self) -> int:
        if not self.frames:
            raise StackUnderflow('Return with an empty call stack')

        return self.frames.pop()


class RegisterFile:
    v: list[int]    # General purpose registers V0..VF
    pc: int         # Program counter
    stack: CallStack
    _i: int

    def __init__(self):
        self.v = [0] * NUM_REGISTERS
        self.pc = BASE_ADDRESS
        self.stack = CallStack()
        self._i = 0

    def check(self, index: int):
        if not 0 <= index < NUM_REGISTERS:
            raise InvalidRegister(f'No register {index}')

    def __getitem__(self, index: int) -> int:
        self.check(index)
        return self.v[index]

    def __setitem__(self, index: int, value: int):
        self.check(index)
        self.v[index] = value & 0xFF

    @property
    def i(self) -> int:
        return self._i

    @i.setter
    def i(self, value: int):
        self._i = value & 0xFFFF
