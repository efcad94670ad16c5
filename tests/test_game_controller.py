from __future__ import annotations

import pytest

from grid_models import GameNotice, GridCoordinate, Phase, RecallOutcome


def test_initial_state_is_idle_at_level_one(make_controller):
    controller = make_controller()
    snapshot = controller.snapshot()

    assert snapshot.phase == Phase.IDLE
    assert snapshot.level == 1
    assert snapshot.sequence == ()
    assert snapshot.seconds_remaining is None


def test_level_one_correct_click_advances_to_level_two(make_controller, scheduler, notices):
    controller = make_controller([GridCoordinate(2, 3)])

    assert controller.start_or_continue_level()
    assert controller.phase() == Phase.FLASHING
    assert controller.snapshot().flashing_coordinate == GridCoordinate(2, 3)

    scheduler.advance(2999)
    assert controller.phase() == Phase.FLASHING
    scheduler.advance(1)
    assert controller.phase() == Phase.DISTRACTION
    assert controller.snapshot().flashing_coordinate is None
    assert controller.snapshot().distraction_pair is not None

    controller.answer_distraction(True)
    assert controller.phase() == Phase.RECALLING
    assert controller.snapshot().seconds_remaining == 20

    assert controller.click_cell(2, 3) == RecallOutcome.COMPLETE
    assert controller.phase() == Phase.RECALLING
    assert controller.snapshot().recall_resolved

    scheduler.advance(200)
    assert controller.phase() == Phase.IDLE
    assert controller.level() == 2
    assert notices.notices == [GameNotice.LEVEL_COMPLETE]
    assert notices.messages == ["Correct! Moving to next level."]


def test_out_of_order_click_restarts_same_level(make_controller, scheduler, notices, play_to_recall):
    controller = make_controller([GridCoordinate(0, 0), GridCoordinate(4, 4), GridCoordinate(1, 2)])
    controller.reset(level=3)
    controller.start_or_continue_level()
    play_to_recall(controller)

    assert controller.snapshot().sequence == (GridCoordinate(0, 0), GridCoordinate(4, 4), GridCoordinate(1, 2))
    assert controller.click_cell(0, 0) == RecallOutcome.CORRECT
    assert controller.click_cell(1, 2) == RecallOutcome.WRONG
    assert controller.snapshot().click_log == (GridCoordinate(0, 0), GridCoordinate(1, 2))

    scheduler.advance(99)
    assert controller.phase() == Phase.RECALLING
    scheduler.advance(1)

    assert controller.phase() == Phase.IDLE
    assert controller.level() == 3
    assert notices.notices == [GameNotice.WRONG_CLICK_RESTART]
    assert notices.messages[0].endswith("Restarting Level 3.")


def test_recall_timeout_restarts_same_level_once(make_controller, scheduler, notices, play_to_recall):
    controller = make_controller()
    controller.reset(level=6)
    controller.start_or_continue_level()
    play_to_recall(controller)

    assert controller.snapshot().seconds_remaining == 30

    scheduler.advance(29_000)
    assert controller.phase() == Phase.RECALLING
    assert controller.snapshot().seconds_remaining == 1

    scheduler.advance(1000)
    assert controller.phase() == Phase.IDLE
    assert controller.level() == 6
    assert notices.notices == [GameNotice.TIME_EXPIRED_RESTART]

    scheduler.advance(60_000)
    assert notices.notices == [GameNotice.TIME_EXPIRED_RESTART]
    assert scheduler.pending_count() == 0


@pytest.mark.parametrize("level", range(1, 8))
def test_flash_loop_builds_unique_sequence_of_level_length(make_controller, play_to_recall, level):
    controller = make_controller()
    controller.reset(level=level)
    controller.start_or_continue_level()
    play_to_recall(controller)

    sequence = controller.snapshot().sequence
    assert len(sequence) == level
    assert len(set(sequence)) == level
    assert all(coordinate.is_within(5) for coordinate in sequence)


def test_phases_alternate_flash_and_distraction_before_recall(make_controller, play_to_recall):
    controller = make_controller()
    controller.reset(level=3)

    phases = []
    controller.add_state_listener(lambda snapshot: phases.append(snapshot.phase))
    controller.start_or_continue_level()
    play_to_recall(controller)

    collapsed = [phase for index, phase in enumerate(phases) if index == 0 or phases[index - 1] != phase]
    assert collapsed == [
        Phase.FLASHING,
        Phase.DISTRACTION,
        Phase.FLASHING,
        Phase.DISTRACTION,
        Phase.FLASHING,
        Phase.DISTRACTION,
        Phase.RECALLING,
    ]


def test_flash_step_labels_follow_step_index(make_controller, scheduler):
    controller = make_controller()
    controller.reset(level=2)
    controller.start_or_continue_level()
    assert controller.snapshot().step_index == 0

    scheduler.advance(2600)
    controller.answer_distraction(False)
    assert controller.phase() == Phase.FLASHING
    assert controller.snapshot().step_index == 1
    assert len(controller.snapshot().sequence) == 2


def test_finishing_last_level_returns_to_level_one(make_controller, scheduler, notices, play_to_recall):
    controller = make_controller()
    controller.reset(level=7)
    controller.start_or_continue_level()
    play_to_recall(controller)

    sequence = controller.snapshot().sequence
    outcomes = [controller.click_cell(coordinate.row, coordinate.col) for coordinate in sequence]
    assert outcomes == [RecallOutcome.CORRECT] * 6 + [RecallOutcome.COMPLETE]

    scheduler.advance(200)
    assert controller.level() == 1
    assert controller.phase() == Phase.IDLE
    assert notices.notices == [GameNotice.GAME_COMPLETE]
    assert notices.messages == ["Champion! You finished all 7 Levels!"]


def test_clicks_after_complete_do_not_double_advance(make_controller, scheduler, notices, play_to_recall):
    controller = make_controller([GridCoordinate(2, 3), GridCoordinate(0, 1)])
    controller.start_or_continue_level()
    play_to_recall(controller)

    assert controller.click_cell(2, 3) == RecallOutcome.COMPLETE
    assert controller.click_cell(2, 3) == RecallOutcome.IGNORED
    assert controller.click_cell(0, 1) == RecallOutcome.IGNORED

    scheduler.advance(1000)
    assert controller.level() == 2
    assert notices.notices == [GameNotice.LEVEL_COMPLETE]


def test_countdown_stops_once_recall_is_resolved(make_controller, scheduler, notices, play_to_recall):
    controller = make_controller([GridCoordinate(1, 1)])
    controller.start_or_continue_level()
    play_to_recall(controller)

    scheduler.advance(19_900)
    assert controller.click_cell(1, 1) == RecallOutcome.COMPLETE
    scheduler.advance(5000)

    assert notices.notices == [GameNotice.LEVEL_COMPLETE]


def test_duplicate_click_is_ignored_without_logging(make_controller, play_to_recall):
    controller = make_controller([GridCoordinate(0, 0), GridCoordinate(1, 1)])
    controller.reset(level=2)
    controller.start_or_continue_level()
    play_to_recall(controller)

    assert controller.click_cell(0, 0) == RecallOutcome.CORRECT
    assert controller.click_cell(0, 0) == RecallOutcome.IGNORED
    assert controller.snapshot().click_log == (GridCoordinate(0, 0),)


def test_reset_during_flash_cancels_pending_transition(make_controller, scheduler):
    controller = make_controller()
    controller.start_or_continue_level()
    assert controller.phase() == Phase.FLASHING

    controller.reset()
    scheduler.advance(10_000)

    assert controller.phase() == Phase.IDLE
    assert controller.snapshot().distraction_pair is None
    assert scheduler.pending_count() == 0


def test_reset_during_recall_cancels_countdown(make_controller, scheduler, notices, play_to_recall):
    controller = make_controller()
    controller.start_or_continue_level()
    play_to_recall(controller)

    controller.reset(level=4)
    scheduler.advance(60_000)

    assert controller.level() == 4
    assert notices.notices == []
    assert scheduler.pending_count() == 0


def test_commands_outside_their_phase_are_ignored(make_controller, scheduler):
    controller = make_controller()

    assert controller.answer_distraction() is False
    assert controller.click_cell(0, 0) == RecallOutcome.IGNORED

    controller.start_or_continue_level()
    assert controller.start_or_continue_level() is False
    assert controller.answer_distraction() is False
    assert controller.click_cell(0, 0) == RecallOutcome.IGNORED
    assert len(controller.snapshot().sequence) == 1


def test_click_outside_grid_is_ignored(make_controller, play_to_recall):
    controller = make_controller()
    controller.start_or_continue_level()
    play_to_recall(controller)

    assert controller.click_cell(5, 0) == RecallOutcome.IGNORED
    assert controller.click_cell(-1, 2) == RecallOutcome.IGNORED
    assert controller.snapshot().click_log == ()


def test_restart_after_failure_builds_fresh_sequence(make_controller, scheduler, play_to_recall):
    controller = make_controller()
    controller.reset(level=2)
    controller.start_or_continue_level()
    play_to_recall(controller)

    first = controller.snapshot().sequence[0]
    wrong = next(
        GridCoordinate(row, col)
        for row in range(5)
        for col in range(5)
        if GridCoordinate(row, col) != first
    )
    assert controller.click_cell(wrong.row, wrong.col) == RecallOutcome.WRONG
    scheduler.advance(100)

    assert controller.start_or_continue_level()
    snapshot = controller.snapshot()
    assert snapshot.phase == Phase.FLASHING
    assert len(snapshot.sequence) == 1
    assert snapshot.click_log == ()


def test_distraction_answer_is_not_scored(make_controller, scheduler, notices, play_to_recall):
    controller = make_controller([GridCoordinate(3, 3)])
    controller.start_or_continue_level()
    scheduler.advance(3000)

    pair = controller.snapshot().distraction_pair
    wrong_answer = not pair.is_identical
    assert controller.answer_distraction(wrong_answer)
    assert controller.phase() == Phase.RECALLING
    assert notices.notices == []


def test_reset_rejects_level_outside_table(make_controller):
    controller = make_controller()
    with pytest.raises(ValueError):
        controller.reset(level=0)
    with pytest.raises(ValueError):
        controller.reset(level=8)


def test_failing_listener_does_not_break_state_machine(make_controller, scheduler):
    controller = make_controller([GridCoordinate(2, 2)])

    def broken_listener(snapshot):
        raise RuntimeError("listener failure")

    controller.add_state_listener(broken_listener)
    controller.start_or_continue_level()
    scheduler.advance(3000)

    assert controller.phase() == Phase.DISTRACTION


def test_seconds_remaining_counts_down_in_snapshots(make_controller, scheduler, play_to_recall):
    controller = make_controller()
    controller.start_or_continue_level()
    play_to_recall(controller)

    seen = []
    controller.add_state_listener(lambda snapshot: seen.append(snapshot.seconds_remaining))
    scheduler.advance(3000)

    assert seen == [19, 18, 17]
