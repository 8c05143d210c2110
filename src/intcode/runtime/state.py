''' Machine lifecycle states and fault records '''

from dataclasses import dataclass
from typing import ClassVar, TypeAlias


# - Faults - #

@dataclass(frozen=True)
class UnexpectedOpcode:
    opcode: int

    def __str__(self) -> str:
        return f'unexpected opcode {self.opcode}'


@dataclass(frozen=True)
class UnexpectedParameterMode:
    mode: int

    def __str__(self) -> str:
        return f'unexpected parameter mode {self.mode}'


@dataclass(frozen=True)
class UnexpectedNegativeNumber:
    value: int

    def __str__(self) -> str:
        return f'unexpected negative number {self.value}'


@dataclass(frozen=True)
class AddressOutOfRange:
    address: int

    def __str__(self) -> str:
        return f'address {self.address} out of range'


@dataclass(frozen=True)
class ValueOutOfRange:
    value: int

    def __str__(self) -> str:
        return f'value {self.value} out of range'


Error: TypeAlias = (
    UnexpectedOpcode
    | UnexpectedParameterMode
    | UnexpectedNegativeNumber
    | AddressOutOfRange
    | ValueOutOfRange
)


# - Lifecycle - #

@dataclass(frozen=True)
class Unloaded:
    tag: ClassVar[str] = 'unloaded'


@dataclass(frozen=True)
class Resumable:
    tag: ClassVar[str] = 'resumable'


@dataclass(frozen=True)
class AwaitingInput:
    tag: ClassVar[str] = 'awaiting_input'
    address: int


@dataclass(frozen=True)
class Outputting:
    tag: ClassVar[str] = 'outputting'
    value: int


@dataclass(frozen=True)
class Halted:
    tag: ClassVar[str] = 'halted'


@dataclass(frozen=True)
class Errored:
    tag: ClassVar[str] = 'errored'
    error: Error


State: TypeAlias = Unloaded | Resumable | AwaitingInput | Outputting | Halted | Errored


UNLOADED = Unloaded()
RESUMABLE = Resumable()
HALTED = Halted()


def is_terminal(state: State) -> bool:
    return isinstance(state, (Halted, Errored))
