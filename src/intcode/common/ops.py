# Opcodes
ADD = 1     # P1 + P2 -> M[W3]
MUL = 2     # P1 * P2 -> M[W3]
INP = 3     # input -> M[W1]
OUT = 4     # P1 -> output
HLT = 99    # halt

# Parameter modes
POSITIONAL = 0  # parameter is an address
IMMEDIATE = 1   # parameter is the operand

OPCODE_BASE = 100   # word % 100 -> opcode, word // 100 -> modes
MODE_BASE = 10      # one decimal digit per parameter

# Instruction widths in words, including the instruction word itself
WIDTHS = {
    ADD: 4,
    MUL: 4,
    INP: 2,
    OUT: 2,
    HLT: 1
}

NAMES = {
    ADD: 'add',
    MUL: 'mul',
    INP: 'inp',
    OUT: 'out',
    HLT: 'hlt'
}
