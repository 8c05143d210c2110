MEMORY_SIZE = 1024      # Fixed number of memory cells

# Signed 64-bit cells
WORD_BITS = 64
WORD_MIN = -(1 << (WORD_BITS - 1))
WORD_MAX = (1 << (WORD_BITS - 1)) - 1

DUMP_FILENAME = 'end.dump'
