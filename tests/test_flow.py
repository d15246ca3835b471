import pytest

import chipvm.runtime.cpu as cpu
import chipvm.runtime.faults as faults

from unit_utils import make_cpu, words, run_cycles


def test_set_and_add():
    proc = make_cpu(bytes([0x60, 0x05, 0x70, 0x03]))
    run_cycles(proc, 2)

    assert proc.regs[0] == 8
    assert proc.regs.pc == 0x204


def test_jump_to_self():
    proc = make_cpu(bytes([0x12, 0x00]))
    run_cycles(proc, 1000)

    assert proc.regs.pc == 0x200
    assert proc.regs.v == [0] * 16
    assert proc.regs.i == 0


def test_call_and_return():
    proc = make_cpu(words(0x2206, 0x6001, 0x1204, 0x00EE))

    run_cycles(proc, 1)
    assert proc.regs.pc == 0x206
    assert proc.regs.stack.frames == [0x200]

    run_cycles(proc, 1)
    assert proc.regs.pc == 0x202
    assert len(proc.regs.stack) == 0

    run_cycles(proc, 1)
    assert proc.regs[0] == 1


def test_jump_with_offset():
    proc = make_cpu(words(0x6004, 0xB300))
    run_cycles(proc, 2)

    assert proc.regs.pc == 0x304


def test_jump_with_offset_wraps():
    # 0xFF8 + 0x10 wraps to 0x008, below the program area
    proc = make_cpu(words(0x6010, 0xBFF8))

    with pytest.raises(faults.InvalidAddress) as e:
        run_cycles(proc, 2)

    assert e.value.opcode == 0xBFF8
    assert e.value.pc == 0x202


def test_jump_out_of_memory():
    proc = make_cpu(words(0x1000))

    with pytest.raises(faults.InvalidAddress) as e:
        run_cycles(proc, 1)

    assert e.value.opcode == 0x1000
    assert e.value.pc == 0x200
    assert 'opcode 1000 at 0x200' in str(e.value)


def test_jump_to_last_byte():
    # A jump must leave room for a two-byte fetch
    proc = make_cpu(words(0x1FFF))

    with pytest.raises(faults.InvalidAddress):
        run_cycles(proc, 1)


def test_return_on_empty_stack():
    proc = make_cpu(words(0x00EE))

    with pytest.raises(faults.StackUnderflow):
        run_cycles(proc, 1)


def test_call_stack_overflow():
    proc = make_cpu(words(0x2200))
    run_cycles(proc, 16)

    with pytest.raises(faults.StackOverflow):
        run_cycles(proc, 1)


def test_clear_screen():
    proc = make_cpu(words(0x00E0))
    proc.screen.pixels[3][4] = True
    run_cycles(proc, 1)

    assert proc.screen.lit() == 0
    assert proc.regs.pc == 0x202


def test_unknown_sys_operand():
    proc = make_cpu(words(0x0123))

    with pytest.raises(faults.InvalidOperand):
        run_cycles(proc, 1)


def test_runs_off_into_zeroed_memory():
    proc = make_cpu(words(0x6001))

    with pytest.raises(faults.InvalidOperand) as e:
        run_cycles(proc, 2)

    assert e.value.opcode == 0x0000
    assert e.value.pc == 0x202


def test_family_outside_table(monkeypatch):
    monkeypatch.setattr(cpu.CPU, 'HANDLERS', cpu.CPU.HANDLERS[:15])
    proc = make_cpu(words(0xF007))

    with pytest.raises(faults.DecodeError):
        run_cycles(proc, 1)


def test_skip_is_deferred_by_one_cycle():
    proc = make_cpu(words(0x6005, 0x3005, 0x6101, 0x6202))
    run_cycles(proc, 2)

    assert proc.regs.pc == 0x204
    assert proc.skip == 1

    assert proc.cycle() is False
    assert proc.regs.pc == 0x206
    assert proc.skip == 0
    assert proc.regs[1] == 0

    run_cycles(proc, 1)
    assert proc.regs[2] == 2


def test_no_skip_when_condition_fails():
    proc = make_cpu(words(0x6005, 0x3006, 0x6101, 0x6202))
    run_cycles(proc, 4)

    assert proc.regs[1] == 1
    assert proc.regs[2] == 2
    assert proc.regs.pc == 0x208


@pytest.mark.parametrize('word, skipped', [
    (0x4007, True),
    (0x4005, False),
    (0x5010, False),
    (0x5020, True),
    (0x9010, True),
    (0x9020, False),
])
def test_conditional_skips(word, skipped):
    # V0 = 5, V1 = 6, V2 = 5
    proc = make_cpu(words(0x6005, 0x6106, 0x6205, word, 0x63AA, 0x64BB))
    run_cycles(proc, 6)

    assert proc.regs[3] == (0 if skipped else 0xAA)
    assert proc.regs[4] == 0xBB
