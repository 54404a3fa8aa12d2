from __future__ import annotations

from omikuji.models.fortune import Fortune
from omikuji.services.board import OmikujiBoard
from omikuji.services.selector import NO_SELECTION, DrawSelector


def _fortunes(n: int) -> list[Fortune]:
    return [Fortune(id=str(i), title=f"吉{i}") for i in range(n)]


def test_board_empty_has_no_active():
    board = OmikujiBoard([], DrawSelector(seed=1))
    assert board.current_index == NO_SELECTION
    assert board.active is None
    assert board.can_draw is False
    assert board.draw() is None
    assert board.current_index == NO_SELECTION


def test_board_initial_draw_is_in_range():
    board = OmikujiBoard(_fortunes(4), DrawSelector(seed=1))
    assert 0 <= board.current_index < 4
    assert board.active is board.fortunes[board.current_index]


def test_board_draw_changes_fortune():
    board = OmikujiBoard(_fortunes(3), DrawSelector(seed=2))
    for _ in range(50):
        before = board.current_index
        board.draw()
        assert board.current_index != before


def test_board_single_fortune_redraw_stays():
    board = OmikujiBoard(_fortunes(1), DrawSelector(seed=3))
    assert board.draw() == board.fortunes[0]


def test_board_clear_then_draw():
    board = OmikujiBoard(_fortunes(3), DrawSelector(seed=4))
    board.clear()
    assert board.active is None
    assert board.detail_text == ""
    assert board.draw() is not None


def test_board_detail_text_joins_lines():
    fortune = Fortune(id="1", title="大吉", details=("願い事　叶う", "待ち人　来る"))
    board = OmikujiBoard([fortune], DrawSelector(seed=5))
    assert board.detail_text == "願い事　叶う\n待ち人　来る"


def test_board_does_not_mutate_source_sequence():
    source = _fortunes(3)
    board = OmikujiBoard(source, DrawSelector(seed=6))
    board.draw()
    board.clear()
    assert source == _fortunes(3)
    assert isinstance(board.fortunes, tuple)
