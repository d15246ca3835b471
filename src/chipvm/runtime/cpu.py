import random
import logging as lg

import chipvm.common.ops as ops
from chipvm.common.hwconf import (
    OP_SIZE, FLAG_REGISTER, GLYPH_BASE, BASE_ADDRESS, SCREEN_WIDTH, SCREEN_HEIGHT
)
from chipvm.common.settings import MachineSettings
from chipvm.runtime.opcode import OpCode
from chipvm.runtime.memory import Memory, glyph_row
from chipvm.runtime.registers import RegisterFile
from chipvm.runtime.timers import Timers
from chipvm.runtime.devices import Screen, Keypad
from chipvm.runtime.faults import MachineFault, DecodeError, InvalidOperand, InvalidAddress


class CPU():
    memory: Memory
    regs: RegisterFile
    timers: Timers
    skip: int  # Pending skips

    def __init__(
        self,
        memory: Memory,
        screen: Screen,
        keypad: Keypad,
        timers: Timers | None = None,
        settings: MachineSettings | None = None,
        rng: random.Random | None = None
    ):
        self.memory = memory    # Ref. to memory
        self.screen = screen    # Ref. to display
        self.keypad = keypad    # Ref. to keypad

        self.regs = RegisterFile()
        self.timers = timers if timers is not None else Timers()
        self.settings = settings if settings is not None else MachineSettings()
        self.rng = rng if rng is not None else random.Random()
        self.skip = 0

        screen.set_extents(SCREEN_WIDTH, SCREEN_HEIGHT)

    # - Helpers - #

    def debug_dump(self):
        state = [f'{k}:{v:X}' for k, v in {
            'PC': self.regs.pc,
            'I': self.regs.i,
            'DT': self.timers.delay,
            'ST': self.timers.sound,
            'SK': self.skip
        }.items()]

        state.extend([f'V{i:X}:{v:X}' for i, v in enumerate(self.regs.v)])

        lg.debug(' '.join(state))

    def fetch(self) -> OpCode:
        pc = self.regs.pc
        return OpCode(self.memory[pc], self.memory[pc + 1])

    def jump(self, address: int):
        if not self.memory.can_fetch(address):
            raise InvalidAddress(f'Jump to invalid location 0x{address:X}')

        self.regs.pc = address

    def set_flag(self, value: int):
        self.regs[FLAG_REGISTER] = value

    def check_block(self, address: int, size: int):
        # Faults before any byte of the block is touched
        self.memory.offset(address)
        self.memory.offset(address + size - 1)

    def sprite_byte(self, row: int) -> int:
        i = self.regs.i

        if GLYPH_BASE <= i < BASE_ADDRESS:
            return glyph_row(i - GLYPH_BASE, row)

        return self.memory[i + row]

    # - Control flow - #

    def sys(self, op: OpCode) -> bool:
        if op.value == ops.CLS:
            self.screen.clear()
        elif op.value == ops.RET:
            # Lands on the call, the loop steps over it
            self.jump(self.regs.stack.pop())
        else:
            raise InvalidOperand(f'Invalid opcode {op}')

        return False

    def jp(self, op: OpCode) -> bool:
        self.jump(op.nnn)
        return True

    def call(self, op: OpCode) -> bool:
        self.regs.stack.push(self.regs.pc)
        self.jump(op.nnn)
        return True

    def jpo(self, op: OpCode) -> bool:
        self.jump((op.nnn + self.regs[0]) % 0x1000)
        return True

    # - Conditional skips - #

    def skip_if(self, condition: bool):
        if condition:
            self.skip += 1

    def se(self, op: OpCode) -> bool:
        self.skip_if(self.regs[op.x] == op.nn)
        return False

    def sne(self, op: OpCode) -> bool:
        self.skip_if(self.regs[op.x] != op.nn)
        return False

    def ser(self, op: OpCode) -> bool:
        self.skip_if(self.regs[op.x] == self.regs[op.y])
        return False

    def sner(self, op: OpCode) -> bool:
        self.skip_if(self.regs[op.x] != self.regs[op.y])
        return False

    def skp(self, op: OpCode) -> bool:
        key = self.regs[op.x]

        if op.nn == ops.SKP_DOWN:
            self.skip_if(self.keypad.is_down(key))
        elif op.nn == ops.SKP_UP:
            if self.settings.strict_key_up:
                self.skip_if(not self.keypad.is_down(key))
            else:
                self.skip_if(self.keypad.is_down(key))
        else:
            raise InvalidOperand(f'Invalid opcode {op}')

        return False

    # - Data - #

    def ld(self, op: OpCode) -> bool:
        self.regs[op.x] = op.nn
        return False

    def add(self, op: OpCode) -> bool:
        self.regs[op.x] = self.regs[op.x] + op.nn
        return False

    def ldi(self, op: OpCode) -> bool:
        self.regs.i = op.nnn
        return False

    def rnd(self, op: OpCode) -> bool:
        self.regs[op.x] = self.rng.randrange(0x100) & op.nn
        return False

    # - Arithmetic - #

    def alu_ld(self, x: int, y: int):
        self.regs[x] = self.regs[y]

    def alu_or(self, x: int, y: int):
        self.regs[x] = self.regs[x] | self.regs[y]

    def alu_and(self, x: int, y: int):
        self.regs[x] = self.regs[x] & self.regs[y]

    def alu_xor(self, x: int, y: int):
        self.regs[x] = self.regs[x] ^ self.regs[y]

    def alu_add(self, x: int, y: int):
        result = self.regs[x] + self.regs[y]
        self.regs[x] = result
        self.set_flag(1 if result > 0xFF else 0)

    def alu_sub(self, x: int, y: int):
        not_borrow = 1 if self.regs[x] > self.regs[y] else 0
        self.regs[x] = self.regs[x] - self.regs[y]
        self.set_flag(not_borrow)

    def alu_shr(self, x: int, y: int):
        self.set_flag(self.regs[x] & 0x01)
        self.regs[x] = self.regs[x] >> 1

    def alu_subn(self, x: int, y: int):
        not_borrow = 1 if self.regs[y] > self.regs[x] else 0
        self.regs[x] = self.regs[y] - self.regs[x]
        self.set_flag(not_borrow)

    def alu_shl(self, x: int, y: int):
        self.set_flag((self.regs[x] & 0x80) >> 7)
        self.regs[x] = self.regs[x] << 1

    ALU_HANDLERS = {
        ops.ALU_LD: alu_ld,
        ops.ALU_OR: alu_or,
        ops.ALU_AND: alu_and,
        ops.ALU_XOR: alu_xor,
        ops.ALU_ADD: alu_add,
        ops.ALU_SUB: alu_sub,
        ops.ALU_SHR: alu_shr,
        ops.ALU_SUBN: alu_subn,
        ops.ALU_SHL: alu_shl
    }

    def alu(self, op: OpCode) -> bool:
        handler = self.ALU_HANDLERS.get(op.n)

        if handler is None:
            raise InvalidOperand(f'Invalid opcode {op}')

        handler(self, op.x, op.y)
        return False

    # - Display - #

    def drw(self, op: OpCode) -> bool:
        x = self.regs[op.x]
        y = self.regs[op.y]
        height = op.n

        sprite = []

        for row in range(height):
            byte = self.sprite_byte(row)
            sprite.append([((byte >> bit) & 1) == 1 for bit in range(7, -1, -1)])

        collided = self.screen.draw_sprite(x, y, height, sprite)
        self.set_flag(1 if collided else 0)
        return False

    # - Timers, keypad and I - #

    def ld_vx_dt(self, x: int):
        self.regs[x] = self.timers.delay

    def ld_vx_k(self, x: int):
        lg.debug(f'Waiting for a key into V{x:X}')
        self.regs[x] = self.keypad.wait_for_key()
        # Timers stand still while waiting
        self.timers.rebase()

    def ld_dt_vx(self, x: int):
        self.timers.delay = self.regs[x]

    def ld_st_vx(self, x: int):
        self.timers.sound = self.regs[x]

    def add_i_vx(self, x: int):
        self.regs.i = self.regs.i + self.regs[x]

    def ld_f_vx(self, x: int):
        self.regs.i = GLYPH_BASE + self.regs[x]

    def ld_b_vx(self, x: int):
        value = self.regs[x]
        i = self.regs.i
        self.check_block(i, 3)

        self.memory[i] = value // 100
        self.memory[i + 1] = value // 10 % 10
        self.memory[i + 2] = value % 10

    def ld_mem_vx(self, x: int):
        i = self.regs.i
        self.check_block(i, x + 1)

        for index in range(x + 1):
            self.memory[i + index] = self.regs[index]

        self.regs.i = i + x + 1

    def ld_vx_mem(self, x: int):
        i = self.regs.i
        self.check_block(i, x + 1)

        for index in range(x + 1):
            self.regs[index] = self.memory[i + index]

        self.regs.i = i + x + 1

    MISC_HANDLERS = {
        ops.LD_VX_DT: ld_vx_dt,
        ops.LD_VX_K: ld_vx_k,
        ops.LD_DT_VX: ld_dt_vx,
        ops.LD_ST_VX: ld_st_vx,
        ops.ADD_I_VX: add_i_vx,
        ops.LD_F_VX: ld_f_vx,
        ops.LD_B_VX: ld_b_vx,
        ops.LD_MEM_VX: ld_mem_vx,
        ops.LD_VX_MEM: ld_vx_mem
    }

    def misc(self, op: OpCode) -> bool:
        handler = self.MISC_HANDLERS.get(op.nn)

        if handler is None:
            raise InvalidOperand(f'Invalid opcode {op}')

        handler(self, op.x)
        return False

    HANDLERS = (
        sys,    # ops.SYS
        jp,     # ops.JP
        call,   # ops.CALL
        se,     # ops.SE
        sne,    # ops.SNE
        ser,    # ops.SER
        ld,     # ops.LD
        add,    # ops.ADD
        alu,    # ops.ALU
        sner,   # ops.SNER
        ldi,    # ops.LDI
        jpo,    # ops.JPO
        rnd,    # ops.RND
        drw,    # ops.DRW
        skp,    # ops.SKP
        misc    # ops.MISC
    )

    # -- Implementation -- #

    def exec_next(self) -> bool:
        ''' Executes one instruction or consumes one pending skip '''
        pc = self.regs.pc

        if self.skip > 0:
            try:
                self.jump(pc + OP_SIZE)
            except MachineFault as e:
                e.locate(None, pc)
                raise

            self.skip -= 1
            return False

        op = self.fetch()

        try:
            family = op[0]

            if family >= len(self.HANDLERS):
                raise DecodeError(f'Opcode {op} not recognized')

            handler = self.HANDLERS[family]

            if not handler(self, op):
                self.jump(self.regs.pc + OP_SIZE)

        except MachineFault as e:
            e.locate(op.value, pc)
            raise

        if self.settings.trace:
            self.debug_dump()

        return True

    def cycle(self) -> bool:
        self.timers.sync()
        self.keypad.poll()
        return self.exec_next()
