from pathlib import Path
import logging as lg

import pyparsing as pp

from intcode.common.hwconf import MEMORY_SIZE, WORD_MIN, WORD_MAX
from intcode.loader.grammar import ALLOWED, program
from intcode.runtime.machine import Machine


class LoadError(UserWarning):
    pass


def check_bytes(data: bytes):
    for offset, byte in enumerate(data):
        if byte not in ALLOWED:
            raise LoadError(f'Unexpected byte {byte} at offset {offset}')


def parse_program(data: bytes | str) -> list[int]:
    if isinstance(data, str):
        data = data.encode()

    check_bytes(data)
    text = data.decode('ascii').replace('\n', '')

    if not text:
        raise LoadError('Empty program')

    try:
        cells = list(program.parse_string(text))
    except pp.ParseBaseException as e:
        raise LoadError(f'Malformed program at column {e.col}: {e.msg}') from e

    if len(cells) > MEMORY_SIZE:
        raise LoadError(f'Program of {len(cells)} cells exceeds memory size {MEMORY_SIZE}')

    for addr, val in enumerate(cells):
        if not WORD_MIN <= val <= WORD_MAX:
            raise LoadError(f'Value {val} at cell {addr} out of range')

    lg.debug(f'Parsed program of {len(cells)} cells')
    return cells


def load_program(data: bytes | str, trace: bool = False) -> Machine:
    return Machine.from_program(parse_program(data), trace=trace)


def load_file(filepath: str | Path, trace: bool = False) -> Machine:
    if isinstance(filepath, str):
        filepath = Path(filepath)

    lg.debug(f'Loading program {filepath}')
    return load_program(filepath.read_bytes(), trace=trace)
