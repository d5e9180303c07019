# The total amount of memory to allocate for the emulator
MAX_MEMORY = 4096

# Where the font sprites are loaded
FONT_START = 0x000

# The number of bytes in each hexadecimal digit sprite
FONT_SPRITE_SIZE = 5

# Where the program counter should originally point
PROGRAM_COUNTER_START = 0x200

# Where the stack pointer should originally point. The stack grows upwards
# in 2 byte slots and must stay below STACK_END.
STACK_POINTER_START = 0xEA0
STACK_END = 0xF00

# The total number of registers in the Chip 8 CPU
NUM_REGISTERS = 0x10

# The number of keys on the hexadecimal keypad
NUM_KEYS = 0x10

# The flag register
FLAG_REGISTER = 0xF

# Masks used to pull the fields out of an operand:
#
#   Bits:  15-12     11-8      7-4       3-0
#          family     x         y         n
FAMILY_MASK = 0xF000
X_MASK = 0x0F00
Y_MASK = 0x00F0
N_MASK = 0x000F
NN_MASK = 0x00FF
NNN_MASK = 0x0FFF

BYTE_MASK = 0xFF
INDEX_MASK = 0xFFF
