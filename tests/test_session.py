"""
Tests for PuzzleSession and the origami rule set.

Covers the move gate, move events, undo, the remaining-move count and the
automatic unscramble.
"""

import pytest

from ringpuzzle.core.config import Config
from ringpuzzle.game import Cell, ErrorCode, InvalidMoveSequenceError, Move
from ringpuzzle.rules import OrigamiRules, OrigamiRulesConfig
from ringpuzzle.session import MoveSource, PuzzleSession, SessionState


# =============================================================================
# Rules
# =============================================================================


class TestOrigamiRules:
    def test_config_validation(self):
        with pytest.raises(ValueError):
            OrigamiRulesConfig(max_sets=0)
        with pytest.raises(ValueError):
            OrigamiRulesConfig(max_moves=-1)

    def test_build_returns_moves_to_solve(self, registry):
        rules = OrigamiRules(OrigamiRulesConfig(max_moves=4, seed=3), ring_count=4)
        moves = rules.build_puzzle(registry)
        assert 1 <= moves <= 4
        assert len(rules.solve_log) == moves
        assert len(registry) > 0

    def test_take_solution_is_consumed_once(self, registry):
        rules = OrigamiRules(OrigamiRulesConfig(seed=3), ring_count=4)
        rules.build_puzzle(registry)
        assert rules.take_solution()
        assert rules.take_solution() == []

    def test_clear_puzzle(self, registry):
        rules = OrigamiRules(OrigamiRulesConfig(seed=3), ring_count=4)
        rules.build_puzzle(registry)
        rules.clear_puzzle()
        assert len(registry) == 0
        assert rules.solve_log == []


# =============================================================================
# Moves and gate
# =============================================================================


class TestMoves:
    def test_player_move_is_logged(self, session):
        result = session.request_spin(1, True)
        assert result.success
        assert session.move_log.last == Move.spin(1, True)

    def test_repeated_requests_merge(self, session):
        session.request_spin(3, False)
        session.request_spin(3, False)
        assert session.move_log.last == Move.spin(3, False, 2)

    def test_invalid_axis_is_rejected(self, session):
        before = session.registry.snapshot()
        result = session.request_spin(9, True)
        assert not result.success
        assert result.error == ErrorCode.INVALID_AXIS
        assert len(session.move_log) == 0
        assert session.registry.snapshot() == before

        result = session.request_shift(6, True)
        assert result.error == ErrorCode.INVALID_AXIS

    def test_gate_blocks_until_complete(self, config):
        session = PuzzleSession(config, auto_complete=False)
        session.new_puzzle(seed=5)
        assert session.request_shift(0, True).success
        assert session.state == SessionState.MOVE_IN_PROGRESS

        before = session.registry.snapshot()
        blocked = session.request_spin(1, True)
        assert not blocked.success
        assert blocked.error == ErrorCode.MOVE_IN_PROGRESS
        assert session.registry.snapshot() == before
        assert not session.undo().success

        session.complete_move()
        assert session.request_spin(1, True).success

    def test_iter_steps_follows_last_move(self, session):
        session.request_spin(2, True)
        assert len(list(session.iter_steps())) == 1
        result = session.request_move(Move.shift(1, False, 3))
        steps = list(session.iter_steps())
        assert [s.index for s in steps] == [0, 1, 2]
        assert steps == result.steps

    def test_remaining_moves(self, session):
        start = session.remaining_moves
        assert start == session.moves_to_solve
        session.request_spin(1, True)
        assert session.remaining_moves == start - 1
        session.request_spin(1, False)
        assert session.remaining_moves == start


# =============================================================================
# Events
# =============================================================================


class TestEvents:
    def test_move_event_per_accepted_move(self, session):
        events = []
        session.add_move_listener(events.append)
        session.request_spin(1, True)
        session.request_spin(9, True)
        assert len(events) == 1
        event = events[0]
        assert event.source == MoveSource.PLAYER
        assert event.step_time == session.config.board.move_time
        assert event.wait_time == session.config.board.wait_time
        assert event.reps == 1
        assert event.to_dict()["source"] == "player"

    def test_undo_event_uses_undo_time(self, session):
        session.request_shift(2, True)
        events = []
        session.add_move_listener(events.append)
        session.undo()
        assert [e.source for e in events] == [MoveSource.UNDO]
        assert events[0].step_time == session.config.board.undo_time
        assert events[0].move == Move.shift(2, False)

    def test_remove_listener(self, session):
        events = []
        session.add_move_listener(events.append)
        session.remove_move_listener(events.append)
        session.request_spin(1, True)
        assert events == []

    def test_solve_event(self, session):
        checks = []
        session.add_solve_listener(checks.append)
        session.check_solve()
        assert len(checks) == 1
        assert checks[0].report is not None


# =============================================================================
# Undo and solve
# =============================================================================


class TestUndo:
    def test_undo_on_empty_log_is_noop(self, session):
        before = session.registry.snapshot()
        result = session.undo()
        assert result.success
        assert result.move is None
        assert session.registry.snapshot() == before

    def test_undo_restores_board(self, session):
        before = session.registry.snapshot()
        session.request_spin(2, True)
        session.request_spin(2, True)
        session.request_shift(4, False)
        assert session.undo().success
        assert session.undo().success
        assert len(session.move_log) == 0
        assert session.registry.snapshot() == before

    def test_undo_all_returns_log_length(self, session):
        before = session.registry.snapshot()
        for move in [Move.spin(1, True), Move.shift(0, True), Move.spin(4, False, 3)]:
            session.request_move(move)
        assert session.undo_all() == 3
        assert session.registry.snapshot() == before


class TestSolve:
    @pytest.mark.parametrize("seed", range(10))
    def test_solve_after_scramble(self, config, seed):
        session = PuzzleSession(config)
        moves = session.new_puzzle(seed=seed)
        assert session.solve() == moves
        assert session.check_solve()
        assert session.remaining_moves is None

    def test_solve_after_player_moves(self, session):
        session.request_spin(1, True)
        session.request_shift(3, False)
        session.request_spin(2, False)
        sources = []
        session.add_move_listener(lambda e: sources.append((e.source, e.step_time)))
        moves = session.moves_to_solve
        assert session.solve() == moves
        assert session.check_solve()
        assert sources[:3] == [(MoveSource.UNDO, 0.0)] * 3
        assert all(src == MoveSource.SOLVE for src, _ in sources[3:])
        assert len(sources) == 3 + moves
        assert len(session.move_log) == 0

    def test_solution_is_consumed(self, session):
        assert session.solve() > 0
        assert session.solve() == 0

    def test_manual_reverse_replay_solves(self, config):
        session = PuzzleSession(config)
        session.new_puzzle(seed=21)
        for move in reversed(list(session.rules.solve_log)):
            assert session.request_move(move.inverted()).success
        assert session.check_solve()

    def test_empty_board_is_solved(self, blank_session):
        assert blank_session.check_solve()
        assert blank_session.solve() == 0

    def test_invalid_solution_log_is_rejected(self, blank_session):
        with pytest.raises(InvalidMoveSequenceError):
            blank_session.move_log.install_solution([Move.spin(1, True), Move.spin(1, True)])


class TestPacedReplay:
    """Undo-all and solve with the gate held open by the consumer."""

    @pytest.fixture
    def gated(self, config):
        session = PuzzleSession(config, auto_complete=False)
        session.new_puzzle(seed=5)
        return session

    def _play(self, session, moves):
        for move in moves:
            assert session.request_move(move).success
            session.complete_move()

    def test_undo_all_applies_one_move_per_completion(self, gated):
        before = gated.registry.snapshot()
        self._play(gated, [Move.spin(1, True), Move.shift(0, True), Move.spin(4, False, 3)])
        events = []
        gated.add_move_listener(events.append)

        assert gated.undo_all() == 3
        assert len(events) == 1
        assert len(gated.move_log) == 2
        assert gated.state == SessionState.MOVE_IN_PROGRESS
        assert list(gated.iter_steps()) == events[0].steps
        assert len(events[0].steps) == 3
        assert not gated.request_spin(2, True).success

        gated.complete_move()
        assert len(events) == 2
        assert gated.state == SessionState.MOVE_IN_PROGRESS
        gated.complete_move()
        assert len(events) == 3
        gated.complete_move()

        assert len(events) == 3
        assert gated.state == SessionState.IDLE
        assert len(gated.move_log) == 0
        assert gated.registry.snapshot() == before
        assert [e.source for e in events] == [MoveSource.UNDO] * 3

    def test_solve_is_paced_the_same_way(self, gated):
        self._play(gated, [Move.spin(2, True), Move.shift(3, False)])
        expected = gated.moves_to_solve
        events = []
        gated.add_move_listener(events.append)

        played = gated.solve()
        assert played == expected > 0
        assert len(events) == 1
        completions = 0
        while gated.state == SessionState.MOVE_IN_PROGRESS:
            gated.complete_move()
            completions += 1
            assert len(events) == min(completions + 1, 2 + played)

        assert completions == 2 + played
        assert [e.source for e in events[:2]] == [MoveSource.UNDO] * 2
        assert all(e.source == MoveSource.SOLVE for e in events[2:])
        assert gated.moves_to_solve is None
        assert gated.check_solve()

    def test_undo_all_on_empty_log_leaves_gate_open(self, gated):
        assert gated.undo_all() == 0
        assert gated.state == SessionState.IDLE

    def test_new_puzzle_drops_queued_undos(self, gated):
        self._play(gated, [Move.spin(1, True), Move.shift(0, True)])
        gated.undo_all()
        gated.new_puzzle(seed=6)
        assert gated.state == SessionState.IDLE
        gated.request_spin(1, True)
        gated.complete_move()
        assert len(gated.move_log) == 1


class TestLifecycle:
    def test_new_puzzle_resets(self, session):
        session.request_spin(1, True)
        session.check_solve()
        moves = session.new_puzzle(seed=8)
        assert len(session.move_log) == 0
        assert session.solved is None
        assert session.remaining_moves == moves

    def test_same_seed_same_board(self, config):
        a, b = PuzzleSession(config), PuzzleSession(config)
        a.new_puzzle(seed=17)
        b.new_puzzle(seed=17)
        assert a.registry.snapshot() == b.registry.snapshot()

    def test_clear(self, session):
        session.clear()
        assert len(session.registry) == 0
        assert session.remaining_moves is None

    def test_to_dict(self, session):
        data = session.to_dict()
        assert data["ring_count"] == 4
        assert data["remaining_moves"] == session.moves_to_solve
        assert len(data["pieces"]) == len(session.registry)

    def test_unknown_rules_type(self):
        config = Config()
        config.rules.type = "nope"
        with pytest.raises(ValueError):
            PuzzleSession(config)

    def test_pieces_rest_on_board(self, session):
        for move in [Move.shift(c, True, 3) for c in range(6)]:
            session.request_move(move)
        for piece in session.registry:
            assert isinstance(piece.cell, Cell)
            assert 1 <= piece.ring <= 4
