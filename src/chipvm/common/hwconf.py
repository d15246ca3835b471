MEMORY_SIZE     = 3584
BASE_ADDRESS    = 0x200         # Program image is loaded here
OP_SIZE         = 2

GLYPH_BASE      = 100           # Glyph window [GLYPH_BASE, BASE_ADDRESS)
GLYPH_COUNT     = 16
GLYPH_HEIGHT    = 5

NUM_REGISTERS   = 16
FLAG_REGISTER   = 0xF
STACK_DEPTH     = 16

SCREEN_WIDTH    = 64
SCREEN_HEIGHT   = 32

TICK_NS         = 16_666_667    # 60 Hz timer tick
CYCLE_DELAY     = 0.001         # Yield after each executed instruction
