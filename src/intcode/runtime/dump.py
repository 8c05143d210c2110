from pathlib import Path
import logging as lg

from intcode.runtime.machine import Machine


def format_dump(machine: Machine) -> str:
    return ''.join(f'{addr}: {val}\n' for addr, val in machine.cells())


def dump_memory(machine: Machine, path: Path):
    lg.info(f'Dumping memory to {path}')
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(format_dump(machine))
