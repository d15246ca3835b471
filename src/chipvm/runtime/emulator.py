import sys
import time
import random
from pathlib import Path
import logging as lg
import traceback
from typing import Callable

import click

from chipvm.common.settings import MachineSettings
from chipvm.runtime.memory import Memory
from chipvm.runtime.timers import Timers, Clock
from chipvm.runtime.devices import Screen, Keypad
from chipvm.runtime.console import ConsoleScreen, ConsoleKeypad
import chipvm.runtime.faults as faults
import chipvm.runtime.cpu as cpu


EXIT_OK = 0
EXIT_KEYBOARD = 3
EXIT_FAULT = 100
EXIT_EXEC_ERROR = 101


def create_cpu(
    image: bytes,
    screen: Screen,
    keypad: Keypad,
    settings: MachineSettings | None = None,
    clock: Clock | None = None,
    rng: random.Random | None = None
) -> cpu.CPU:
    memory = Memory()
    timers = Timers(clock) if clock is not None else Timers()
    proc = cpu.CPU(memory, screen, keypad, timers=timers, settings=settings, rng=rng)
    memory.load(image)
    return proc


def execute(
    proc: cpu.CPU,
    cycles: int | None = None,
    sleep: Callable[[float], None] = time.sleep
) -> int:
    ''' Runs the loop, forever unless a cycle budget is given '''
    done = 0

    while cycles is None or done < cycles:
        if proc.cycle():
            sleep(proc.settings.cycle_delay)

        done += 1

    return done


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('--trace', is_flag=True, help='Dump registers after each instruction')
@click.option('--strict-key-up', is_flag=True, help='EXA1 skips when the key is up')
@click.option('--delay', type=float, default=None, help='Seconds to yield per instruction')
@click.option('--cycles', type=int, default=None, help='Stop after this many cycles')
@click.argument('rom_filename', type=Path)
def run(
    verbose: bool,
    trace: bool,
    strict_key_up: bool,
    delay: float | None,
    cycles: int | None,
    rom_filename: Path
):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info('CHIPVM')

    settings = MachineSettings().update(
        cycle_delay=delay,
        trace=trace,
        strict_key_up=strict_key_up
    )

    screen = None

    try:
        rom = rom_filename.read_bytes()

        with ConsoleKeypad() as keypad:
            screen = ConsoleScreen()
            proc = create_cpu(rom, screen, keypad, settings)
            done = execute(proc, cycles)

        lg.info(f'Execution stopped after {done} cycles')
        sys.exit(EXIT_OK)

    except faults.MachineFault as e:
        lg.error(f'Execution halted on machine fault: {e}')
        sys.exit(EXIT_FAULT)

    except KeyboardInterrupt:
        lg.info('Execution halted by the user')
        sys.exit(EXIT_KEYBOARD)

    except Exception as e:
        lg.info(f'Execution halted on general error {e}')
        traceback.print_exc()
        sys.exit(EXIT_EXEC_ERROR)

    finally:
        if screen is not None:
            screen.close()


if __name__ == '__main__':
    run()
