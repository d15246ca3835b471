# Families (n0)
SYS = 0x0   # 00E0 cls, 00EE ret
JP = 0x1    # NNN -> PC
CALL = 0x2  # push PC; NNN -> PC
SE = 0x3    # skip if VX == NN
SNE = 0x4   # skip if VX != NN
SER = 0x5   # skip if VX == VY
LD = 0x6    # NN -> VX
ADD = 0x7   # VX + NN -> VX
ALU = 0x8   # VX op VY -> VX
SNER = 0x9  # skip if VX != VY
LDI = 0xA   # NNN -> I
JPO = 0xB   # NNN + V0 -> PC
RND = 0xC   # rand & NN -> VX
DRW = 0xD   # sprite [I], N rows at VX, VY
SKP = 0xE   # skip on key state
MISC = 0xF  # timers, keypad, I

# Family 0 operands
CLS = 0x00E0
RET = 0x00EE

# ALU selectors (n3)
ALU_LD = 0x0    # VY -> VX
ALU_OR = 0x1    # VX | VY -> VX
ALU_AND = 0x2   # VX & VY -> VX
ALU_XOR = 0x3   # VX ^ VY -> VX
ALU_ADD = 0x4   # VX + VY -> VX, carry -> VF
ALU_SUB = 0x5   # VX - VY -> VX, not borrow -> VF
ALU_SHR = 0x6   # VX >> 1 -> VX, bit 0 -> VF
ALU_SUBN = 0x7  # VY - VX -> VX, not borrow -> VF
ALU_SHL = 0xE   # VX << 1 -> VX, bit 7 -> VF

# Key skips (NN)
SKP_DOWN = 0x9E
SKP_UP = 0xA1

# Misc selectors (NN)
LD_VX_DT = 0x07
LD_VX_K = 0x0A
LD_DT_VX = 0x15
LD_ST_VX = 0x18
ADD_I_VX = 0x1E
LD_F_VX = 0x29
LD_B_VX = 0x33
LD_MEM_VX = 0x55
LD_VX_MEM = 0x65
