import sys
from pathlib import Path
import logging as lg
from typing import Iterable, Iterator, List, Tuple

import click

from intcode.common.hwconf import DUMP_FILENAME
from intcode.loader.loader import LoadError, load_program
from intcode.runtime.dump import dump_memory
from intcode.runtime.machine import Machine
import intcode.runtime.state as st


EXIT_HALT = 0
EXIT_MACHINE_ERROR = 2
EXIT_INPUT_EXHAUSTED = 3
EXIT_LOAD_ERROR = 4
EXIT_KEYBOARD = 5


class InputExhausted(Exception):
    pass


def drive(machine: Machine, inputs: Iterable[int]) -> Iterator[int]:
    pending = iter(inputs)

    while not st.is_terminal(machine.state):
        if isinstance(machine.state, st.AwaitingInput):
            value = next(pending, None)

            if value is None:
                raise InputExhausted(f'No input left for address {machine.state.address}')

            machine.provide_input(value)

        elif isinstance(machine.state, st.Outputting):
            yield machine.take_output()

        else:
            machine.resume()


def execute(machine: Machine, inputs: Iterable[int]) -> List[int]:
    return list(drive(machine, inputs))


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug and traces instructions')
@click.option('-i', '--input', 'inputs', type=int, multiple=True, help='Input value, may be repeated')
@click.option('--dump', type=Path, default=Path(DUMP_FILENAME), show_default=True, help='Memory dump file')
@click.option('--no-dump', is_flag=True, help='Do not write memory dump')
@click.argument('program', type=click.Path(allow_dash=True), default='-')
def run(verbose: bool, inputs: Tuple[int], dump: Path, no_dump: bool, program: str):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info('INTCODE')

    try:
        # '-' reads the program from stdin
        with click.open_file(program, 'rb') as source:
            machine = load_program(source.read(), trace=verbose)

    except (LoadError, OSError) as e:
        lg.error(f'Failed to load {program}: {e}')
        sys.exit(EXIT_LOAD_ERROR)

    exit_code = EXIT_HALT

    try:
        for value in drive(machine, inputs):
            click.echo(value)

    except InputExhausted as e:
        lg.error(f'Execution suspended: {e}')
        exit_code = EXIT_INPUT_EXHAUSTED

    except KeyboardInterrupt:
        lg.info('Execution halted by the user')
        exit_code = EXIT_KEYBOARD

    if isinstance(machine.state, st.Errored):
        lg.error(f'Execution halted on machine error: {machine.state.error}')
        exit_code = EXIT_MACHINE_ERROR

    if not no_dump:
        dump_memory(machine, dump)

    sys.exit(exit_code)


if __name__ == '__main__':
    run()
