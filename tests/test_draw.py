from chipvm.runtime.memory import GLYPHS

from unit_utils import make_cpu, assemble_cpu, words, run_cycles
from fixtures import with_screen  # noqa: F401

FULL_ROW = [[True] * 8]


def test_collision_on_redraw(with_screen):  # noqa: F811
    assert with_screen.draw_sprite(10, 4, 1, FULL_ROW) is False
    assert with_screen.lit() == 8

    assert with_screen.draw_sprite(10, 4, 1, FULL_ROW) is True
    assert with_screen.lit() == 0


def test_no_collision_on_disjoint_sprites(with_screen):  # noqa: F811
    with_screen.draw_sprite(0, 0, 1, FULL_ROW)

    assert with_screen.draw_sprite(0, 1, 1, FULL_ROW) is False
    assert with_screen.lit() == 16


def test_wraparound(with_screen):  # noqa: F811
    with_screen.draw_sprite(62, 31, 2, [[True] * 8, [True] + [False] * 7])

    assert with_screen.pixels[31][62:] == [True, True]
    assert with_screen.pixels[31][:6] == [True] * 6
    assert with_screen.pixels[0][62] is True
    assert with_screen.lit() == 9


def test_render(with_screen):  # noqa: F811
    with_screen.set_extents(4, 2)
    with_screen.draw_sprite(1, 1, 1, [[True, False, True]])

    assert with_screen.render() == '....\n.#.#'


def test_draw_glyph():
    # V0 = 5; I = glyph V0; V1 = 0; V2 = 0; draw 5 rows
    proc = make_cpu(words(0x6005, 0xF029, 0x6100, 0x6200, 0xD125))
    run_cycles(proc, 5)

    for row, byte in enumerate(GLYPHS[5]):
        bits = [((byte >> bit) & 1) == 1 for bit in range(7, -1, -1)]
        assert proc.screen.pixels[row][:8] == bits

    assert proc.regs[0xF] == 0


def test_draw_twice_reports_collision():
    proc = make_cpu(words(0x6005, 0xF029, 0xD005, 0xD005))
    run_cycles(proc, 3)
    assert proc.regs[0xF] == 0

    run_cycles(proc, 1)
    assert proc.regs[0xF] == 1
    assert proc.screen.lit() == 0


def test_draw_from_memory():
    proc = assemble_cpu('''
        ld i, sprite
        ld v3, 8
        ld v4, 2
        drw v3, v4, 2
    end:
        jp end
    sprite:
        db 0b10000001, 0xFF
    ''')
    run_cycles(proc, 4)

    assert proc.screen.pixels[2][8:16] == [True] + [False] * 6 + [True]
    assert proc.screen.pixels[3][8:16] == [True] * 8
    assert proc.screen.lit() == 10


def test_empty_sprite():
    proc = make_cpu(words(0x6F01, 0xD000))
    run_cycles(proc, 2)

    assert proc.regs[0xF] == 0
    assert proc.screen.lit() == 0
