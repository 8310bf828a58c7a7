"""
Tests for board geometry.

Covers single spin and shift steps, reflection through the center and past
the outer ring, and inverse round trips over every cell.
"""

import pytest

from ringpuzzle.game import Cell, Move, apply_move, apply_moves, opposite, shift_step, spin_step
from ringpuzzle.game.geometry import validate_cell, validate_move

RINGS = 4
ALL_CELLS = [Cell(r, p) for r in range(1, RINGS + 1) for p in range(12)]


# =============================================================================
# Spin
# =============================================================================


class TestSpin:
    def test_clockwise_decreases_position(self):
        assert spin_step(Cell(2, 5), True) == Cell(2, 4)

    def test_counter_clockwise_increases_position(self):
        assert spin_step(Cell(2, 5), False) == Cell(2, 6)

    def test_wraps_around(self):
        assert spin_step(Cell(1, 0), True) == Cell(1, 11)
        assert spin_step(Cell(1, 11), False) == Cell(1, 0)

    def test_other_rings_untouched(self):
        assert apply_move(Cell(3, 7), Move.spin(1, True, 4), RINGS) == Cell(3, 7)

    def test_twelve_steps_is_identity(self):
        assert apply_move(Cell(4, 3), Move.spin(4, True, 12), RINGS) == Cell(4, 3)

    @pytest.mark.parametrize("reps", [1, 3, 6, 11])
    def test_inverse_restores_every_cell(self, reps):
        for ring in range(1, RINGS + 1):
            move = Move.spin(ring, True, reps)
            for cell in ALL_CELLS:
                moved = apply_move(cell, move, RINGS)
                assert apply_move(moved, move.inverted(), RINGS) == cell


# =============================================================================
# Shift
# =============================================================================


class TestShift:
    def test_true_moves_outward_on_lower_positions(self):
        assert shift_step(Cell(2, 3), True, RINGS) == Cell(3, 3)

    def test_true_moves_inward_on_upper_positions(self):
        assert shift_step(Cell(2, 9), True, RINGS) == Cell(1, 9)

    def test_reflects_through_center(self):
        # inward from ring 1 lands on ring 1 of the opposite half
        assert shift_step(Cell(1, 9), True, RINGS) == Cell(1, 3)
        assert shift_step(Cell(1, 3), False, RINGS) == Cell(1, 9)

    def test_reflects_past_outer_ring(self):
        assert shift_step(Cell(4, 3), True, RINGS) == Cell(4, 9)
        assert shift_step(Cell(4, 9), False, RINGS) == Cell(4, 3)

    def test_halves_travel_together(self):
        # a full column line advances as one: each cell moves to the next one
        line = [Cell(r, 8) for r in range(RINGS, 0, -1)] + [Cell(r, 2) for r in range(1, RINGS + 1)]
        for i, cell in enumerate(line):
            assert shift_step(cell, True, RINGS) == line[(i + 1) % len(line)]

    def test_full_cycle_is_identity(self):
        move = Move.shift(2, True, 2 * RINGS)
        for cell in ALL_CELLS:
            assert apply_move(cell, move, RINGS) == cell

    def test_other_columns_untouched(self):
        assert apply_move(Cell(2, 4), Move.shift(1, True, 3), RINGS) == Cell(2, 4)

    @pytest.mark.parametrize("reps", [1, 2, 4, 5, 7])
    @pytest.mark.parametrize("direction", [True, False])
    def test_inverse_restores_every_cell(self, reps, direction):
        for column in range(6):
            move = Move.shift(column, direction, reps)
            for cell in ALL_CELLS:
                moved = apply_move(cell, move, RINGS)
                assert 1 <= moved.ring <= RINGS
                assert apply_move(moved, move.inverted(), RINGS) == cell

    def test_single_ring_board(self):
        assert shift_step(Cell(1, 0), True, 1) == Cell(1, 6)
        assert shift_step(Cell(1, 6), True, 1) == Cell(1, 0)


# =============================================================================
# Sequences and validation
# =============================================================================


class TestSequences:
    def test_reversed_inverse_sequence_restores(self):
        moves = [Move.spin(1, True, 3), Move.shift(0, False, 2), Move.spin(4, False, 5), Move.shift(3, True, 4)]
        undo = [m.inverted() for m in reversed(moves)]
        for cell in ALL_CELLS:
            assert apply_moves(apply_moves(cell, moves, RINGS), undo, RINGS) == cell

    def test_opposite(self):
        assert opposite(0) == 6
        assert opposite(11) == 5


class TestValidation:
    def test_ring_out_of_range(self):
        with pytest.raises(ValueError):
            validate_cell(Cell(0, 0), RINGS)
        with pytest.raises(ValueError):
            validate_cell(Cell(5, 0), RINGS)

    def test_position_out_of_range(self):
        with pytest.raises(ValueError):
            validate_cell(Cell(1, 12), RINGS)

    def test_bad_moves(self):
        with pytest.raises(ValueError):
            validate_move(Move.spin(5, True), RINGS)
        with pytest.raises(ValueError):
            validate_move(Move.shift(6, True), RINGS)
        with pytest.raises(ValueError):
            validate_move(Move.spin(1, True, 0), RINGS)

    def test_good_moves(self):
        validate_move(Move.spin(4, False, 6), RINGS)
        validate_move(Move.shift(5, True), RINGS)
