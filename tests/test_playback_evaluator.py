import pytest

from courtplay.models import (
    ActionAnimation,
    BallOwner,
    BasketballPlayDocument,
    Phase,
    PlayAction,
    PlayObject,
    Point,
)
from courtplay.playback import compile_play_playback, get_phase_frame, get_play_frame, get_transition_frame


def _player(object_id: str, x: float, y: float) -> PlayObject:
    return PlayObject(id=object_id, type="offense_player", position=Point(x=x, y=y), size=18)


def _move(
    action_id: str,
    object_id: str,
    start: Point,
    end: Point,
    duration_ms: float = 500,
    *,
    action_type: str = "cut",
    trigger: str = "after_previous",
    to_object_id=None,
) -> PlayAction:
    return PlayAction(
        id=action_id,
        type=action_type,
        from_=start,
        to=end,
        from_object_id=object_id,
        to_object_id=to_object_id,
        animation=ActionAnimation(trigger=trigger, duration_ms=duration_ms),
    )


def _two_phase_document(actions, owner: BallOwner = BallOwner.inherit()) -> BasketballPlayDocument:
    departing = Phase(
        id="p1",
        name="Set",
        objects=(_player("o1", 100, 100), _player("o2", 500, 500), _player("o3", 900, 900)),
        actions=tuple(actions),
        ball_owner=owner,
    )
    arriving = Phase(
        id="p2",
        name="Finish",
        objects=(_player("o1", 300, 100), _player("o2", 500, 800), _player("o3", 900, 900)),
        actions=(),
    )
    return BasketballPlayDocument(schema_version=1, court_template="half_court", phases=(departing, arriving))


def _cut_document() -> BasketballPlayDocument:
    return _two_phase_document(
        [
            _move("c1", "o1", Point(x=100, y=100), Point(x=300, y=100), 400),
            _move("c2", "o2", Point(x=500, y=500), Point(x=500, y=800), 600),
        ]
    )


def test_frame_at_zero_matches_departing_positions():
    transition = compile_play_playback(_cut_document()).transitions[0]

    frame = get_transition_frame(transition, 0)

    assert frame.positions["o1"] == Point(x=100, y=100)
    assert frame.positions["o2"] == Point(x=500, y=500)
    assert frame.progress == 0


def test_frame_at_end_matches_arriving_positions():
    transition = compile_play_playback(_cut_document()).transitions[0]

    frame = get_transition_frame(transition, transition.total_duration_ms)

    assert frame.positions == {
        "o1": Point(x=300, y=100),
        "o2": Point(x=500, y=800),
        "o3": Point(x=900, y=900),
    }
    assert frame.progress == 1


def test_midpoint_interpolates_linearly():
    transition = compile_play_playback(_cut_document()).transitions[0]

    frame = get_transition_frame(transition, 200)

    assert frame.positions["o1"].x == pytest.approx(200)
    assert frame.positions["o1"].y == pytest.approx(100)
    assert frame.positions["o2"] == Point(x=500, y=500)


def test_object_rests_at_arrival_after_its_last_action():
    transition = compile_play_playback(_cut_document()).transitions[0]

    frame = get_transition_frame(transition, 700)

    assert frame.positions["o1"] == Point(x=300, y=100)
    assert frame.positions["o2"].y == pytest.approx(650)


def test_elapsed_is_clamped():
    transition = compile_play_playback(_cut_document()).transitions[0]

    assert get_transition_frame(transition, -50).positions == get_transition_frame(transition, 0).positions
    late = get_transition_frame(transition, 10_000)
    assert late.elapsed_ms == transition.total_duration_ms


def test_later_action_wins_when_windows_overlap():
    document = _two_phase_document(
        [
            _move("a", "o1", Point(x=100, y=100), Point(x=100, y=500), 800),
            _move("b", "o1", Point(x=100, y=100), Point(x=300, y=100), 400, trigger="with_previous"),
        ]
    )
    transition = compile_play_playback(document).transitions[0]

    frame = get_transition_frame(transition, 200)

    assert frame.positions["o1"].x == pytest.approx(200)
    assert frame.positions["o1"].y == pytest.approx(100)


def test_gap_between_actions_holds_last_target():
    document = _two_phase_document(
        [
            _move("a", "o1", Point(x=100, y=100), Point(x=200, y=100), 400),
            _move("b", "o2", Point(x=500, y=500), Point(x=500, y=800), 400),
            _move("c", "o1", Point(x=200, y=100), Point(x=300, y=100), 400),
        ]
    )
    transition = compile_play_playback(document).transitions[0]

    frame = get_transition_frame(transition, 600)

    assert frame.positions["o1"] == Point(x=200, y=100)


def test_passes_do_not_move_the_passer():
    document = _two_phase_document(
        [_move("p", "o1", Point(x=100, y=100), Point(x=500, y=500), action_type="pass", to_object_id="o2")],
        owner=BallOwner.owner("o1"),
    )
    transition = compile_play_playback(document).transitions[0]

    frame = get_transition_frame(transition, 250)

    assert frame.positions["o1"] == Point(x=100, y=100)
    assert frame.ball_owner_object_id == "o1"
    assert get_transition_frame(transition, 500).ball_owner_object_id == "o2"


def test_owner_changes_after_pass_end():
    document = _two_phase_document(
        [_move("p", "o1", Point(x=100, y=100), Point(x=500, y=500), action_type="pass", to_object_id="o2")],
        owner=BallOwner.owner("o1"),
    )
    transition = compile_play_playback(document).transitions[0]

    assert get_transition_frame(transition, 400).ball_owner_object_id == "o1"
    assert get_transition_frame(transition, 600).ball_owner_object_id == "o2"


def test_double_speed_matches_half_elapsed():
    document = _cut_document()
    normal = compile_play_playback(document, 1.0).transitions[0]
    fast = compile_play_playback(document, 2.0).transitions[0]

    for elapsed in (0, 100, 250, 400, 550):
        assert get_transition_frame(fast, elapsed / 2).positions == get_transition_frame(normal, elapsed).positions


def test_dwell_transition_shows_departing_phase():
    transition = compile_play_playback(_two_phase_document([])).transitions[0]

    frame = get_transition_frame(transition, 0)

    assert transition.total_duration_ms == 0
    assert frame.positions["o1"] == Point(x=100, y=100)
    assert frame.progress == 1


def test_object_only_in_arriving_phase_appears_at_arrival():
    departing = Phase(id="p1", name="A", objects=(), actions=())
    arriving = Phase(id="p2", name="B", objects=(_player("o9", 50, 60),), actions=())
    document = BasketballPlayDocument(schema_version=1, court_template="half_court", phases=(departing, arriving))

    frame = get_transition_frame(compile_play_playback(document).transitions[0], 0)

    assert frame.positions == {"o9": Point(x=50, y=60)}


def test_phase_frame_for_last_phase_is_static():
    document = _cut_document()
    playback = compile_play_playback(document)

    frame = get_phase_frame(document, playback, 1, 300)

    assert frame.positions == document.phases[1].positions()
    assert frame.ball_owner_object_id == "o1"
    with pytest.raises(IndexError):
        get_phase_frame(document, playback, 2)


def test_play_frame_walks_transitions_back_to_back():
    phases = _cut_document().phases
    document = BasketballPlayDocument(
        schema_version=1,
        court_template="half_court",
        phases=(phases[0], phases[0].model_copy(update={"id": "p1b"}), phases[1]),
    )
    playback = compile_play_playback(document)

    index, frame = get_play_frame(playback, 1200)

    assert index == 1
    assert frame.elapsed_ms == 200
    assert get_play_frame(playback, 99_999)[0] == 1


def test_play_frame_needs_a_transition():
    single = BasketballPlayDocument(
        schema_version=1,
        court_template="half_court",
        phases=(_cut_document().phases[0],),
    )

    with pytest.raises(ValueError):
        get_play_frame(compile_play_playback(single), 0)


def test_action_starting_at_zero_draws_from_its_own_start_point():
    document = _two_phase_document([_move("c1", "o1", Point(x=400, y=400), Point(x=300, y=100), 400)])
    transition = compile_play_playback(document).transitions[0]

    frame = get_transition_frame(transition, 0)

    assert frame.positions["o1"] == Point(x=400, y=400)
    assert frame.positions["o2"] == Point(x=500, y=500)
