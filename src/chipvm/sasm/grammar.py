# type: ignore
''' Instruction grammar, every statement yields (handler, argument) '''

import pyparsing as pp

import chipvm.common.ops as ops
from chipvm.sasm.fpp import FPP


def to_int(text: str) -> int:
    if text[:2] in ('0x', '0X'):
        return int(text[2:], 16)

    if text[:2] in ('0b', '0B'):
        return int(text[2:], 2)

    if text[0] == '$':
        return int(text[1:], 16)

    return int(text)


def check(value: int, limit: int, what: str) -> int:
    if not 0 <= value <= limit:
        raise UserWarning(f'{what} {value} out of range')

    return value


# Encoders
def fixed(word):
    return lambda: word


def nnn(family):
    return lambda addr: family << 12 | check(addr, 0xFFF, 'Address')


def xnn(family):
    return lambda x, nn: family << 12 | x << 8 | check(nn, 0xFF, 'Byte')


def xy(family):
    return lambda x, y: family << 12 | x << 8 | y << 4


def alu(selector):
    return lambda x, y=0: ops.ALU << 12 | x << 8 | y << 4 | selector


def skp(selector):
    return lambda x: ops.SKP << 12 | x << 8 | selector


def misc(selector):
    return lambda x: ops.MISC << 12 | x << 8 | selector


def drw(x, y, n):
    return ops.DRW << 12 | x << 8 | y << 4 | check(n, 0xF, 'Height')


# Tokens
def kw(word):
    return pp.CaselessKeyword(word).suppress()


COMMA = pp.Suppress(',')

comment = pp.Regex(r';.*')

id = pp.Regex(r'[A-Za-z_][A-Za-z0-9_]*')

reg = pp.Regex(r'[vV][0-9a-fA-F](?![0-9A-Za-z_])').set_parse_action(lambda r: int(r[0][1], 16))
v0 = pp.Regex(r'[vV]0(?![0-9A-Za-z_])').suppress()

number = pp.Regex(r'0[xX][0-9a-fA-F]+|0[bB][01]+|\$[0-9a-fA-F]+|[0-9]+')
number.set_parse_action(lambda r: to_int(r[0]))

ref = ~reg + id
addr = number | ref

i_reg = kw('i')
mem_i = pp.Suppress('[') + kw('i') + pp.Suppress(']')
dt = kw('dt')
st = kw('st')
key = kw('k')
font = kw('f')
bcd = kw('b')


def g_ins(mnemonic, operands, encode):
    expr = pp.CaselessKeyword(mnemonic)

    for index, operand in enumerate(operands):
        if index > 0:
            expr = expr + COMMA

        expr = expr + operand

    return expr.set_parse_action(lambda r: (FPP.issue_ins, (encode, list(r)[1:])))


# Flow
cls_cmd = g_ins('cls', [], fixed(ops.CLS))
ret_cmd = g_ins('ret', [], fixed(ops.RET))
jp_cmd = g_ins('jp', [addr], nnn(ops.JP))
jpo_cmd = g_ins('jp', [v0, addr], nnn(ops.JPO))
call_cmd = g_ins('call', [addr], nnn(ops.CALL))

# Skips
se_cmd = g_ins('se', [reg, number], xnn(ops.SE))
ser_cmd = g_ins('se', [reg, reg], xy(ops.SER))
sne_cmd = g_ins('sne', [reg, number], xnn(ops.SNE))
sner_cmd = g_ins('sne', [reg, reg], xy(ops.SNER))
skp_cmd = g_ins('skp', [reg], skp(ops.SKP_DOWN))
sknp_cmd = g_ins('sknp', [reg], skp(ops.SKP_UP))

# Loads
ld_cmd = g_ins('ld', [reg, number], xnn(ops.LD))
ldr_cmd = g_ins('ld', [reg, reg], alu(ops.ALU_LD))
ldi_cmd = g_ins('ld', [i_reg, addr], nnn(ops.LDI))
ld_vx_dt_cmd = g_ins('ld', [reg, dt], misc(ops.LD_VX_DT))
ld_vx_k_cmd = g_ins('ld', [reg, key], misc(ops.LD_VX_K))
ld_dt_vx_cmd = g_ins('ld', [dt, reg], misc(ops.LD_DT_VX))
ld_st_vx_cmd = g_ins('ld', [st, reg], misc(ops.LD_ST_VX))
ld_f_vx_cmd = g_ins('ld', [font, reg], misc(ops.LD_F_VX))
ld_b_vx_cmd = g_ins('ld', [bcd, reg], misc(ops.LD_B_VX))
ld_mem_vx_cmd = g_ins('ld', [mem_i, reg], misc(ops.LD_MEM_VX))
ld_vx_mem_cmd = g_ins('ld', [reg, mem_i], misc(ops.LD_VX_MEM))

# Arithmetic
add_cmd = g_ins('add', [reg, number], xnn(ops.ADD))
addr_cmd = g_ins('add', [reg, reg], alu(ops.ALU_ADD))
add_i_cmd = g_ins('add', [i_reg, reg], misc(ops.ADD_I_VX))
or_cmd = g_ins('or', [reg, reg], alu(ops.ALU_OR))
and_cmd = g_ins('and', [reg, reg], alu(ops.ALU_AND))
xor_cmd = g_ins('xor', [reg, reg], alu(ops.ALU_XOR))
sub_cmd = g_ins('sub', [reg, reg], alu(ops.ALU_SUB))
subn_cmd = g_ins('subn', [reg, reg], alu(ops.ALU_SUBN))
shr_cmd = g_ins('shr', [reg], alu(ops.ALU_SHR))
shrr_cmd = g_ins('shr', [reg, reg], alu(ops.ALU_SHR))
shl_cmd = g_ins('shl', [reg], alu(ops.ALU_SHL))
shlr_cmd = g_ins('shl', [reg, reg], alu(ops.ALU_SHL))
rnd_cmd = g_ins('rnd', [reg, number], xnn(ops.RND))

# Display
drw_cmd = g_ins('drw', [reg, reg, number], drw)

# Data
db = (kw('db') + number + pp.ZeroOrMore(COMMA + number)).set_parse_action(
    lambda r: (FPP.issue_bytes, list(r))
)

label = (id + pp.Suppress(':')).set_parse_action(lambda r: (FPP.on_label, r))

asm_cmd = cls_cmd \
    ^ ret_cmd \
    ^ jp_cmd \
    ^ jpo_cmd \
    ^ call_cmd \
    ^ se_cmd \
    ^ ser_cmd \
    ^ sne_cmd \
    ^ sner_cmd \
    ^ skp_cmd \
    ^ sknp_cmd \
    ^ ld_cmd \
    ^ ldr_cmd \
    ^ ldi_cmd \
    ^ ld_vx_dt_cmd \
    ^ ld_vx_k_cmd \
    ^ ld_dt_vx_cmd \
    ^ ld_st_vx_cmd \
    ^ ld_f_vx_cmd \
    ^ ld_b_vx_cmd \
    ^ ld_mem_vx_cmd \
    ^ ld_vx_mem_cmd \
    ^ add_cmd \
    ^ addr_cmd \
    ^ add_i_cmd \
    ^ or_cmd \
    ^ and_cmd \
    ^ xor_cmd \
    ^ sub_cmd \
    ^ subn_cmd \
    ^ shr_cmd \
    ^ shrr_cmd \
    ^ shl_cmd \
    ^ shlr_cmd \
    ^ rnd_cmd \
    ^ drw_cmd \
    ^ db

statement = label | asm_cmd
program = pp.ZeroOrMore(statement)
program.ignore(comment)
