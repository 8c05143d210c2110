import logging as lg
from typing import Callable, Iterable, Iterator, NoReturn, Tuple

import intcode.common.ops as ops
from intcode.common.hwconf import MEMORY_SIZE, WORD_MIN, WORD_MAX
import intcode.runtime.state as st


class ContractViolation(Exception):
    ''' Machine operation called from a state that does not allow it '''
    pass


class Fault(Exception):
    ''' Raised inside the machine only, recorded as Errored by resume '''

    def __init__(self, error: st.Error):
        super().__init__(str(error))
        self.error = error


def in_word_range(value: int) -> bool:
    return WORD_MIN <= value <= WORD_MAX


def is_word(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and in_word_range(value)


class Machine:
    ip: int             # Instruction pointer
    state: st.State     # Lifecycle state
    trace: bool         # Log every decoded instruction
    memory: list[int]   # Flat cell array
    modes: int          # Mode digits left for the current instruction

    def __init__(self, trace: bool = False):
        self.memory = [0] * MEMORY_SIZE
        self.ip = 0
        self.state = st.UNLOADED
        self.trace = trace
        self.modes = 0

    @classmethod
    def from_program(cls, cells: Iterable[int], trace: bool = False) -> 'Machine':
        machine = cls(trace=trace)
        machine.load(cells)
        return machine

    # - Helpers - #

    def expect_state(self, expected: type):
        if not isinstance(self.state, expected):
            raise ContractViolation(
                f"Expected machine in state '{expected.tag}', "
                f"but it was in '{self.state.tag}'"
            )

    def debug_dump(self, head: int):
        width = ops.WIDTHS.get(head % ops.OPCODE_BASE, 1)
        params = self.memory[self.ip:self.ip + width - 1]
        words = ' '.join(str(w) for w in [head, *params])
        name = ops.NAMES.get(head % ops.OPCODE_BASE, '???')
        lg.debug(f'IP:{self.ip - 1} instruction: {words} ({name})')

    def fail(self, error: st.Error) -> NoReturn:
        raise Fault(error)

    def to_address(self, value: int) -> int:
        if value < 0:
            self.fail(st.UnexpectedNegativeNumber(value))

        if value >= MEMORY_SIZE:
            self.fail(st.AddressOutOfRange(value))

        return value

    def next(self) -> int:
        addr = self.to_address(self.ip)
        self.ip += 1
        return self.memory[addr]

    def next_mode(self) -> int:
        mode = self.modes % ops.MODE_BASE
        self.modes //= ops.MODE_BASE
        return mode

    def get_next_param(self) -> int:
        mode = self.next_mode()
        val = self.next()

        if mode == ops.POSITIONAL:
            return self.memory[self.to_address(val)]

        if mode == ops.IMMEDIATE:
            return val

        self.fail(st.UnexpectedParameterMode(mode))

    def get_next_target(self) -> int:
        mode = self.next_mode()
        val = self.next()

        if mode != ops.POSITIONAL:
            self.fail(st.UnexpectedParameterMode(mode))

        return self.to_address(val)

    def arithm_pair(self, op: Callable[[int, int], int]):
        a = self.get_next_param()
        b = self.get_next_param()
        target = self.get_next_target()
        result = op(a, b)

        if not in_word_range(result):
            self.fail(st.ValueOutOfRange(result))

        self.memory[target] = result

    # - Operations - #

    def add(self):
        self.arithm_pair(lambda a, b: a + b)

    def mul(self):
        self.arithm_pair(lambda a, b: a * b)

    def inp(self):
        address = self.get_next_target()
        self.state = st.AwaitingInput(address)

    def out(self):
        value = self.get_next_param()
        self.state = st.Outputting(value)

    def hlt(self):
        self.state = st.HALTED

    HANDLERS = {
        ops.ADD: add,
        ops.MUL: mul,
        ops.INP: inp,
        ops.OUT: out,
        ops.HLT: hlt
    }

    # -- Implementation -- #

    def exec_next(self):
        head = self.next()

        if head < 0:
            self.fail(st.UnexpectedNegativeNumber(head))

        if self.trace:
            self.debug_dump(head)

        opcode = head % ops.OPCODE_BASE
        self.modes = head // ops.OPCODE_BASE
        handler = self.HANDLERS.get(opcode)

        if handler is None:
            self.fail(st.UnexpectedOpcode(opcode))

        handler(self)

    def load(self, cells: Iterable[int]):
        self.expect_state(st.Unloaded)
        cells = list(cells)

        if len(cells) > MEMORY_SIZE:
            raise ContractViolation(
                f'Program of {len(cells)} cells does not fit into {MEMORY_SIZE} cells'
            )

        for addr, val in enumerate(cells):
            if not is_word(val):
                raise ContractViolation(f'Cell {addr} value {val!r} is not a word')

        self.memory[:len(cells)] = cells
        self.state = st.RESUMABLE

    def resume(self):
        self.expect_state(st.Resumable)

        try:
            while isinstance(self.state, st.Resumable):
                self.exec_next()

        except Fault as e:
            lg.info(f'Execution errored at IP:{self.ip}: {e.error}')
            self.state = st.Errored(e.error)
            return

        if isinstance(self.state, st.Halted):
            lg.info(f'Execution halted at IP:{self.ip}')

    def provide_input(self, value: int):
        self.expect_state(st.AwaitingInput)

        if not is_word(value):
            raise ContractViolation(f'Input value {value!r} is not a word')

        self.memory[self.state.address] = value
        self.state = st.RESUMABLE

    def take_output(self) -> int:
        self.expect_state(st.Outputting)
        value = self.state.value
        self.state = st.RESUMABLE
        return value

    # - Inspection - #

    def peek(self, address: int) -> int:
        if not 0 <= address < MEMORY_SIZE:
            raise IndexError(f'Address {address} out of range')

        return self.memory[address]

    def cells(self) -> Iterator[Tuple[int, int]]:
        return enumerate(tuple(self.memory))

    def snapshot(self) -> Tuple[int, ...]:
        return tuple(self.memory)
