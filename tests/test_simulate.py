import pytest

from sushibattle import rules
from sushibattle.agents import GreedyAgent, KenzoAgent, RandomAgent
from sushibattle.agents.evaluation import rank_by_power
from sushibattle.agents.reactions import FLAWLESS_REACTION
from sushibattle.battle import BattlePhase
from sushibattle.cards import card_power
from sushibattle.config import GameConfig
from sushibattle.events import DraftComplete
from sushibattle.match import STAGE_BATTLE, STAGE_DRAFT, STAGE_GAMEOVER, Match
from sushibattle.simulate import SimulationConfig, new_match, play_match, run

REACTION_EMOTES = {
    "emote_anger",
    "emote_swirl",
    "emote_laugh",
    "emote_stars",
    "emote_dots3",
    "emote_faceAngry",
}


def outcome_summary(records):
    return [
        (r.outcome.winner, r.outcome.player_score, r.outcome.opponent_score, len(r.rounds))
        for r in records
    ]


def test_run_is_deterministic_for_a_seed():
    config = SimulationConfig(seed=2025, games=5)
    first = list(run(config))
    second = list(run(config))
    assert outcome_summary(first) == outcome_summary(second)
    assert [r.player_hand for r in first] == [r.player_hand for r in second]
    assert [r.seed for r in first] == [2025, 2026, 2027, 2028, 2029]


def test_match_invariants_over_many_seeds():
    for record in run(SimulationConfig(seed=0, games=30, player=GreedyAgent())):
        assert len(record.player_hand) == rules.HAND_SIZE
        assert len(record.opponent_hand) == rules.HAND_SIZE
        ids = [card.id for card in record.player_hand + record.opponent_hand]
        assert len(ids) == len(set(ids))

        outcome = record.outcome
        assert outcome.player_score + outcome.opponent_score <= len(record.rounds)
        assert 1 <= len(record.rounds) <= rules.HAND_SIZE // rules.CARDS_PER_ROUND
        assert outcome.rounds_played == len(record.rounds)
        if outcome.player_score > outcome.opponent_score:
            assert outcome.winner == rules.SIDE_PLAYER
        elif outcome.opponent_score > outcome.player_score:
            assert outcome.winner == rules.SIDE_OPPONENT
        else:
            assert outcome.winner == rules.RESULT_TIE
            assert not outcome.is_flawless


def test_run_requires_at_least_one_game():
    with pytest.raises(ValueError):
        list(run(SimulationConfig(seed=0, games=0)))


def test_every_difficulty_plays_to_completion():
    for difficulty in ("easy", "normal", "hard"):
        config = SimulationConfig(
            seed=7,
            games=3,
            game=GameConfig(difficulty=difficulty, counter_player_tendency=True, adaptive_opponent=True),
            player=RandomAgent(seed=3),
        )
        assert len(list(run(config))) == 3


def test_match_stages_and_reactions():
    match = new_match(11)
    assert match.stage == STAGE_DRAFT
    assert isinstance(match.opponent, GreedyAgent)

    while not match.draft.is_complete:
        assert match.select_player_card(0) is False
        assert match.select_draft_card(0)

    assert match.stage == STAGE_BATTLE
    assert match.select_draft_card(0) is False
    assert match.game_state().phase is BattlePhase.SELECTION
    assert match.game_state().current_round == 1

    while not match.is_over:
        assert match.select_player_card(0)
        assert match.select_player_card(1)
        assert match.execute_battle() is not None
        assert match.last_reaction is not None
        assert match.last_reaction.emote in REACTION_EMOTES
        match.end_round()

    assert match.stage == STAGE_GAMEOVER
    assert match.execute_battle() is None
    assert match.end_round() is False
    outcome = match.battle.outcome
    if outcome.is_flawless and outcome.winner == rules.SIDE_PLAYER:
        assert match.last_reaction == FLAWLESS_REACTION


def test_custom_opponent_and_restart():
    match = Match(seed=5, opponent=GreedyAgent())
    match.start()
    record = play_match(match, GreedyAgent())
    assert record.outcome.winner in (rules.SIDE_PLAYER, rules.SIDE_OPPONENT, rules.RESULT_TIE)

    match.start()
    assert match.stage == STAGE_DRAFT
    assert match.last_reaction is None
    assert len(match.draft.current_choices) == 2


def test_short_hands_end_the_game_immediately():
    match = Match(seed=1, config=GameConfig(hand_size=2, cards_per_round=2))
    match.start()
    match.select_draft_card(0)
    match.select_draft_card(0)
    assert match.stage == STAGE_BATTLE
    record_rounds = 0
    while not match.is_over:
        match.select_player_card(0)
        match.select_player_card(1)
        match.execute_battle()
        match.end_round()
        record_rounds += 1
    assert record_rounds == 1


def test_default_opponent_plays_highest_power_cards():
    for seed in range(40):
        match = new_match(seed)
        while not match.draft.is_complete:
            match.select_draft_card(0)
        opponent_hand = match.battle.opponent_hand
        match.select_player_card(0)
        match.select_player_card(1)
        expected = rank_by_power(opponent_hand)[:2]
        assert match.battle.opponent_selection == expected
        assert [card_power(c) for c in match.battle.opponent_selection] == sorted(
            (card_power(c) for c in opponent_hand), reverse=True
        )[:2]


def test_adaptive_opponent_uses_kenzo_difficulty():
    match = Match(seed=3, config=GameConfig(difficulty="hard", adaptive_opponent=True))
    assert isinstance(match.opponent, KenzoAgent)
    assert match.opponent.name == "Kenzo (hard)"


def test_play_match_requires_a_recorded_outcome():
    match = new_match(8)
    match.bus.subscribe(DraftComplete, lambda event: setattr(match, "stage", STAGE_GAMEOVER))
    with pytest.raises(RuntimeError):
        play_match(match, GreedyAgent())
