import asyncio
import random

from dropfour.components.match_state import MatchPhase
from dropfour.components.round_state import RoundPhase
from dropfour.constants import PLAYER_1, PLAYER_2
from dropfour.events.bus import EVENT_MATCH_STARTED, EVENT_ROUND_STARTED, EventBus
from dropfour.session import create_session
from dropfour.systems.state_utils import get_board, get_match_state, get_placement, get_round_state
from dropfour.systems.turn_system import DropOutcome
from tests.helpers import GatedPresentation, run

WINNING_COLUMNS = [0, 8, 1, 8, 2, 8, 3]


def _win_round(session):
    for col in WINNING_COLUMNS:
        result = run(session.drop(col))
    return result


def test_new_match_starts_first_round():
    bus = EventBus()
    started = []
    rounds = []
    bus.subscribe(EVENT_MATCH_STARTED, lambda sender, **kw: started.append(kw))
    bus.subscribe(EVENT_ROUND_STARTED, lambda sender, **kw: rounds.append(kw))

    session = create_session(["alien"], event_bus=bus, rng=random.Random(2))

    match_state = get_match_state(session.world)
    assert match_state.phase is MatchPhase.PLAYING
    assert match_state.scores == {PLAYER_1: 0, PLAYER_2: 0}
    round_state = get_round_state(session.world)
    assert round_state.round_number == 1
    assert round_state.current_player == PLAYER_1
    assert started == [{"mods": ["alien"], "threshold": 120}]
    assert rounds[0]["round_number"] == 1
    assert len(rounds[0]["claims"]["alien"]) == 1


def test_session_without_mods_stays_in_setup():
    session = create_session(None)
    assert get_match_state(session.world).phase is MatchPhase.SETUP
    assert not session.turns.can_drop()


def test_continue_is_refused_mid_round():
    session = create_session()
    run(session.drop(0))
    assert session.flow.continue_game() is False
    assert get_round_state(session.world).round_number == 1


def test_continue_after_win_keeps_scores_and_clears_board():
    session = create_session(["bombs"], rng=random.Random(9))
    get_placement(session.world).claims = {"bombs": set()}
    _win_round(session)
    old_board = get_board(session.world)

    assert session.flow.continue_game() is True

    board = get_board(session.world)
    assert board is not old_board
    assert board.disc_count() == 0
    round_state = get_round_state(session.world)
    assert round_state.round_number == 2
    assert round_state.phase is RoundPhase.AWAITING_MOVE
    assert round_state.move_count == 0
    assert round_state.winner is None
    # The player who moved last keeps the turn into the next round.
    assert round_state.current_player == PLAYER_1
    assert get_match_state(session.world).scores[PLAYER_1] == 30
    assert len(get_placement(session.world).claimed_by("bombs")) == 8


def test_reset_round_keeps_scores_and_starts_over():
    session = create_session()
    _win_round(session)
    session.flow.continue_game()
    run(session.drop(4))

    assert session.flow.reset_round() is True

    assert get_board(session.world).disc_count() == 0
    assert get_round_state(session.world).round_number == 3
    assert get_match_state(session.world).scores[PLAYER_1] == 30


def test_reset_round_refused_while_resolving_unless_forced():
    session = create_session()
    state = get_round_state(session.world)
    state.phase = RoundPhase.RESOLVING

    assert session.flow.reset_round() is False
    assert session.flow.reset_round(force=True) is True
    assert get_round_state(session.world).phase is RoundPhase.AWAITING_MOVE


def test_reset_round_refused_before_match_starts():
    session = create_session(None)
    assert session.flow.reset_round() is False


def test_new_match_clears_previous_standings():
    session = create_session()
    _win_round(session)

    session.flow.new_match(["jackpot"])

    match_state = get_match_state(session.world)
    assert match_state.scores == {PLAYER_1: 0, PLAYER_2: 0}
    assert match_state.round_wins == {PLAYER_1: 0, PLAYER_2: 0}
    assert match_state.rounds_played == 0
    assert match_state.active_mod_slugs == ["jackpot"]
    assert get_round_state(session.world).round_number == 1


def test_new_match_is_refused_while_a_drop_resolves():
    presentation = GatedPresentation()
    session = create_session(["bombs"], presentation=presentation, rng=random.Random(6))
    get_placement(session.world).claims = {"bombs": set()}

    async def scenario():
        task = asyncio.create_task(session.drop(0))
        await presentation.wait_until_parked()
        refused = session.flow.new_match([])
        presentation.open()
        return refused, await task

    refused, result = run(scenario())

    assert refused is False
    assert result.outcome is DropOutcome.TURN_PASSED
    assert get_match_state(session.world).active_mod_slugs == ["bombs"]
    assert get_round_state(session.world).current_player == PLAYER_2

    assert session.flow.new_match([]) is True
    state = get_round_state(session.world)
    assert state.current_player == PLAYER_1
    assert state.round_number == 1
    assert get_board(session.world).disc_count() == 0
