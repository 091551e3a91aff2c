from endless_ttt.game_basics import O_CELL, X_CELL, is_draw
from endless_ttt.solver import solve_state


def test_terminal_positions_values():
    # X three in a row
    x_win = (2, 2, 2, 0, 0, 0, 0, 0, 0)
    res = solve_state(x_win, O_CELL)
    assert res['value'] == -1
    assert res['plies_to_end'] == 0

    # Draw full board no winner
    draw = (2, 1, 2, 2, 1, 1, 1, 2, 2)
    assert is_draw(list(draw))
    res = solve_state(draw, O_CELL)
    assert res['value'] == 0
    assert res['plies_to_end'] == 0


def test_empty_board_is_draw_and_all_moves_optimal():
    for starter in (X_CELL, O_CELL):
        s = solve_state(tuple([0] * 9), starter)
        assert s['value'] == 0
        assert len(s['optimal_moves']) == 9


def test_immediate_win_preferred():
    # X to move, immediate win at 2
    b = (2, 2, 0, 0, 1, 0, 0, 1, 0)
    s = solve_state(b, X_CELL)
    assert s['value'] == 1
    assert 2 in s['optimal_moves']
    assert s['dtt_action'][2] == min(d for d in s['dtt_action'] if d is not None)


def test_solver_is_symmetric_in_player_labels():
    b = (2, 2, 0, 0, 1, 0, 0, 1, 0)
    swapped = tuple(0 if v == 0 else (O_CELL if v == X_CELL else X_CELL) for v in b)
    assert solve_state(b, X_CELL) == solve_state(swapped, O_CELL)


def test_delaying_loss_preferred():
    # O to move with two X threats: every move loses
    b = (2, 2, 0, 2, 1, 0, 0, 0, 1)
    s = solve_state(b, O_CELL)
    assert s['value'] == -1
    dtts = [s['dtt_action'][i] for i in s['optimal_moves']]
    assert max(dtts) == max(d for d in s['dtt_action'] if d is not None)
