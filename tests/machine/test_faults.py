import pytest

import intcode.runtime.state as st
from intcode.common.hwconf import MEMORY_SIZE, WORD_MIN, WORD_MAX
from intcode.runtime.machine import ContractViolation, Machine

from unit_utils import padded


def run_to_error(cells) -> Machine:
    machine = Machine.from_program(cells)
    machine.resume()
    assert isinstance(machine.state, st.Errored)
    return machine


@pytest.mark.parametrize('program, error', [
    ([5], st.UnexpectedOpcode(5)),
    ([1, 0, 0, 0, 42], st.UnexpectedOpcode(42)),
    ([198], st.UnexpectedOpcode(98)),
    ([11101, 1, 1, 0, 99], st.UnexpectedParameterMode(1)),
    ([103, 0, 99], st.UnexpectedParameterMode(1)),
    ([201, 0, 0, 0, 99], st.UnexpectedParameterMode(2)),
    ([901, 0, 0, 0, 99], st.UnexpectedParameterMode(9)),
    ([21001, 0, 0, 0, 99], st.UnexpectedParameterMode(2)),
    ([10001, 0, 0, -5, 99], st.UnexpectedParameterMode(1)),
    ([10001, 0, 0, 5000, 99], st.UnexpectedParameterMode(1)),
    ([201, -5, 0, 0, 99], st.UnexpectedParameterMode(2)),
    ([201, 5000, 0, 0, 99], st.UnexpectedParameterMode(2)),
    ([103, -1, 99], st.UnexpectedParameterMode(1)),
    ([1, -3, 0, 0, 99], st.UnexpectedNegativeNumber(-3)),
    ([1, 0, 0, -7, 99], st.UnexpectedNegativeNumber(-7)),
    ([3, -1, 99], st.UnexpectedNegativeNumber(-1)),
    ([-1], st.UnexpectedNegativeNumber(-1)),
    ([4, MEMORY_SIZE, 99], st.AddressOutOfRange(MEMORY_SIZE)),
    ([1, 0, 0, 5000, 99], st.AddressOutOfRange(5000)),
])
def test_fault_recorded(program, error):
    machine = run_to_error(program)
    assert machine.state == st.Errored(error)


def test_fault_leaves_memory_untouched():
    program = [1, 0, 0, 0, 2, 0, 0, -4, 99]
    machine = run_to_error(program)
    assert machine.state == st.Errored(st.UnexpectedNegativeNumber(-4))
    assert machine.snapshot() == tuple(padded([2, 0, 0, 0, 2, 0, 0, -4, 99]))


def test_errored_is_terminal():
    machine = run_to_error([5])
    before = (machine.state, machine.ip, machine.snapshot())

    with pytest.raises(ContractViolation, match="'errored'"):
        machine.resume()

    with pytest.raises(ContractViolation):
        machine.provide_input(0)

    with pytest.raises(ContractViolation):
        machine.take_output()

    assert (machine.state, machine.ip, machine.snapshot()) == before


def test_fetch_past_capacity():
    machine = Machine.from_program([1101, 0, 0, 0] * (MEMORY_SIZE // 4))
    machine.resume()
    assert machine.state == st.Errored(st.AddressOutOfRange(MEMORY_SIZE))
    assert machine.ip == MEMORY_SIZE


def test_multiply_overflow():
    machine = run_to_error([1102, WORD_MAX, 2, 0, 99])
    assert machine.state == st.Errored(st.ValueOutOfRange(WORD_MAX * 2))
    assert machine.peek(0) == 1102


def test_add_at_word_max():
    machine = Machine.from_program([1101, WORD_MAX - 1, 1, 0, 99])
    machine.resume()
    assert machine.state == st.HALTED
    assert machine.peek(0) == WORD_MAX


def test_error_strings():
    assert str(st.UnexpectedOpcode(5)) == 'unexpected opcode 5'
    assert str(st.UnexpectedParameterMode(1)) == 'unexpected parameter mode 1'
    assert str(st.UnexpectedNegativeNumber(-2)) == 'unexpected negative number -2'


def test_terminal_states():
    assert st.is_terminal(st.HALTED)
    assert st.is_terminal(st.Errored(st.UnexpectedOpcode(0)))
    assert not st.is_terminal(st.RESUMABLE)
    assert not st.is_terminal(st.AwaitingInput(0))
    assert not st.is_terminal(st.Outputting(0))
    assert not st.is_terminal(st.UNLOADED)


@pytest.mark.parametrize('a, b', [
    (WORD_MIN, -1),
    (WORD_MAX, 1),
])
def test_add_overflow(a, b):
    machine = run_to_error([1101, a, b, 5, 99, 17])
    assert machine.state == st.Errored(st.ValueOutOfRange(a + b))
    assert machine.peek(5) == 17
