import struct
import logging as lg
from pathlib import Path
from typing import Tuple, List

import click
import pyparsing as pp

from chipvm.sasm.fpp import FPP
import chipvm.sasm.grammar as grammar


class CompilationItem:
    modulename: str
    contents: str


def collect_file(filepath: str | Path) -> CompilationItem:
    if isinstance(filepath, str):
        filepath = Path(filepath)

    lg.debug(f'Collecting file {filepath}')
    item = CompilationItem()
    item.contents = filepath.read_text()
    item.modulename = filepath.stem
    return item


def resolve(first_pass: FPP, operand: int | str) -> int:
    if isinstance(operand, int):
        return operand

    if operand not in first_pass.label_dict:
        raise UserWarning(f'Undefined label {operand}')

    return first_pass.label_dict[operand]


def compile_items(compile_items: List[CompilationItem]) -> bytes:
    # First pass
    first_pass = FPP()

    for compile_item in compile_items:
        lg.info(f'Processing {compile_item.modulename}')
        first_pass.namespace = compile_item.modulename

        try:
            actions = grammar.program.parse_string(compile_item.contents, parse_all=True)
        except pp.ParseException as e:
            raise UserWarning(f'{compile_item.modulename}:{e.lineno}: {e.line.strip()}') from e

        for (func, arg) in actions:  # type: ignore
            func(first_pass, arg)

    # Second pass
    bytestr = bytearray()

    for (t, d) in first_pass.cmd_list:
        if t == 'bytes':
            bytestr += d

        if t == 'ins':
            (address, encode, operands) = d
            word = encode(*[resolve(first_pass, operand) for operand in operands])
            lg.debug(f'0x{address:03X}: {word:04X}')
            bytestr += struct.pack('>H', word)

    return bytes(bytestr)


def compile_string(contents: str, modulename: str = 'main') -> bytes:
    item = CompilationItem()
    item.modulename = modulename
    item.contents = contents
    return compile_items([item])


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.argument('sources', nargs=-1, type=Path)
@click.argument('binary', type=Path)
def compile(verbose: bool, sources: Tuple[Path], binary: Path):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info('CHIPVM ASM')

    items = [collect_file(path) for path in sources]
    bytestr = compile_items(items)
    binary.parent.mkdir(parents=True, exist_ok=True)
    binary.write_bytes(bytestr)
    lg.info(f'Wrote {len(bytestr)} bytes to {binary}')


if __name__ == '__main__':
    compile()
