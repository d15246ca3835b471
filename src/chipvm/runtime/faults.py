class MachineFault(Exception):
    ''' Fatal interpreter condition, never retried '''
    opcode: int | None = None
    pc: int | None = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def locate(self, opcode: int | None, pc: int):
        # Innermost context wins
        if self.pc is None:
            self.opcode = opcode
            self.pc = pc

        return self

    def __str__(self):
        if self.pc is None:
            return self.message

        if self.opcode is None:
            return f'{self.message} (at 0x{self.pc:03X})'

        return f'{self.message} (opcode {self.opcode:04X} at 0x{self.pc:03X})'


class DecodeError(MachineFault):
    pass


class InvalidOperand(MachineFault):
    pass


class InvalidAddress(MachineFault):
    pass


class InvalidRegister(MachineFault):
    pass


class StackOverflow(MachineFault):
    pass


class StackUnderflow(MachineFault):
    pass
