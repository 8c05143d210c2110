import pytest

from intcode.runtime.machine import Machine


@pytest.fixture
def echo_machine():
    yield Machine.from_program([3, 0, 4, 0, 99])


@pytest.fixture
def fresh_machine():
    yield Machine()
