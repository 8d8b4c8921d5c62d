import random

import pytest

from sushibattle import rules
from sushibattle.agents import (
    BalancedAgent,
    Difficulty,
    FirstCardsAgent,
    GreedyAgent,
    KenzoAgent,
    RandomAgent,
    StrategicAgent,
    analyze_tendency,
    counter_type,
    draft_score,
    ensure_from_hand,
    evaluate_card,
    generate_reaction,
)
from sushibattle.agents.reactions import FLAWLESS_REACTION, TIE_REACTION
from sushibattle.cards import beats
from sushibattle.catalog import Card
from sushibattle.exceptions import InvalidDifficultyError, NoCardsAvailableError


class FixedRandom(random.Random):
    """Random source whose random() always returns the same value."""

    def __init__(self, value: float) -> None:
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


def make_card(card_id: str, card_type: str, stat: int, tier: str = "common") -> Card:
    stats = {"attack": 0, "defense": 0, "healing": 0}
    stats[card_type] = stat
    return Card(id=card_id, name=card_id, tier=tier, type=card_type, **stats)


ATK10 = make_card("atk10", "attack", 10)
ATK9 = make_card("atk9", "attack", 9)
ATK5 = make_card("atk5", "attack", 5)
DEF7 = make_card("def7", "defense", 7)
DEF3 = make_card("def3", "defense", 3)
HEAL3 = make_card("heal3", "healing", 3)


def ids(cards):
    return [card.id for card in cards]


class TestTendency:
    def test_needs_two_cards(self):
        assert analyze_tendency([]) is None
        assert analyze_tendency([ATK10]) is None

    def test_plurality_type(self):
        assert analyze_tendency([ATK10, DEF7, DEF3]) == "defense"

    def test_ties_follow_type_order(self):
        assert analyze_tendency([DEF7, ATK10]) == "attack"
        assert analyze_tendency([HEAL3, DEF7]) == "defense"


def test_counter_type_agrees_with_comparator_cycle():
    assert counter_type("attack") == "defense"
    assert counter_type("defense") == "healing"
    assert counter_type("healing") == "attack"
    for card_type in rules.CARD_TYPES:
        assert beats(counter_type(card_type), card_type)


def test_counter_type_defaults_to_attack():
    assert counter_type("spicy") == "attack"


def test_evaluate_card_counts_counter_and_tier():
    legend = make_card("legend", "attack", 10, tier="legendary")
    assert evaluate_card(legend) == 14
    assert evaluate_card(legend, opponent_type="healing") == 17
    assert evaluate_card(legend, opponent_type="defense") == 14


def test_draft_score_penalises_crowded_types():
    hand = [make_card(f"a{i}", "attack", 1) for i in range(4)]
    assert draft_score(ATK5, hand) == 3
    assert draft_score(DEF3, hand) == 4
    assert draft_score(ATK5, hand[:2]) == 5


def test_first_cards_agent():
    agent = FirstCardsAgent()
    assert agent.select_cards([HEAL3, ATK10, DEF7], 2) == (HEAL3, ATK10)
    assert agent.select_draft_card([ATK5, ATK10]) == 0
    assert agent.select_draft_card([]) is None


def test_greedy_agent_prefers_power_and_keeps_order_on_ties():
    twin = make_card("twin", "defense", 10)
    agent = GreedyAgent()
    assert agent.select_cards([DEF3, ATK10, twin, ATK5], 2) == (ATK10, twin)
    assert agent([DEF3, ATK10], 1) == (ATK10,)


def test_random_agent_deterministic_with_seed():
    hand = [ATK10, ATK9, ATK5, DEF7, DEF3, HEAL3]
    picks_a = [RandomAgent(seed=123).select_cards(hand, 2) for _ in range(3)]
    picks_b = [RandomAgent(seed=123).select_cards(hand, 2) for _ in range(3)]
    assert picks_a == picks_b
    for pick in picks_a:
        assert len(set(ids(pick))) == 2
        assert set(pick) <= set(hand)


def test_random_agent_returns_whole_short_hand():
    assert set(RandomAgent(seed=1).select_cards([ATK10], 2)) == {ATK10}


class TestBalanced:
    def test_round_robin_over_types(self):
        hand = [ATK5, HEAL3, ATK10, DEF7]
        assert ids(BalancedAgent().select_cards(hand, 2)) == ["atk10", "def7"]
        assert ids(BalancedAgent().select_cards(hand, 4)) == ["atk10", "def7", "heal3", "atk5"]

    def test_single_type_hand(self):
        hand = [ATK5, ATK10, ATK9]
        assert ids(BalancedAgent().select_cards(hand, 3)) == ["atk10", "atk9", "atk5"]

    def test_stops_when_hand_runs_out(self):
        assert ids(BalancedAgent().select_cards([DEF3], 2)) == ["def3"]


class TestStrategic:
    def test_without_tendency_plays_power(self):
        hand = [DEF3, ATK9, HEAL3, ATK10]
        assert ids(StrategicAgent().select_cards(hand, 2)) == ["atk10", "atk9"]

    def test_counters_player_tendency(self):
        hand = [DEF3, ATK9, HEAL3, ATK10]
        played = [ATK5, ATK10]
        # Attack-heavy player is countered with defense first.
        assert ids(StrategicAgent().select_cards(hand, 2, played)) == ["def3", "atk10"]


@pytest.mark.parametrize(
    "agent",
    [FirstCardsAgent(), RandomAgent(seed=0), GreedyAgent(), BalancedAgent(), StrategicAgent(), KenzoAgent(seed=0)],
)
def test_agents_reject_empty_hand(agent):
    with pytest.raises(NoCardsAvailableError):
        agent.select_cards([], 2)


def test_base_draft_choice_prefers_missing_types():
    crowded = [make_card(f"a{i}", "attack", 1) for i in range(4)]
    assert GreedyAgent().select_draft_card([ATK5, DEF3], crowded) == 1
    assert GreedyAgent().select_draft_card([ATK5, DEF3], []) == 0


def test_ensure_from_hand_rejects_foreign_or_duplicate_cards():
    with pytest.raises(ValueError):
        ensure_from_hand([ATK10], [ATK5])
    with pytest.raises(ValueError):
        ensure_from_hand([ATK5, ATK5], [ATK5])


class TestKenzo:
    def test_difficulty_parsing(self):
        assert Difficulty.parse("HARD") is Difficulty.HARD
        assert KenzoAgent().difficulty is Difficulty.NORMAL
        with pytest.raises(InvalidDifficultyError):
            Difficulty.parse("nightmare")
        with pytest.raises(InvalidDifficultyError):
            KenzoAgent("impossible")

    def test_hard_counters_tendency(self):
        agent = KenzoAgent("hard", seed=0)
        hand = [DEF3, ATK9, HEAL3, ATK10]
        assert ids(agent.select_cards(hand, 2, [HEAL3, HEAL3])) == ["atk10", "atk9"]
        assert ids(agent.select_cards(hand, 2, [DEF7, DEF3])) == ["heal3", "atk10"]

    def test_normal_flips_between_strategic_and_balanced(self):
        hand = [ATK10, ATK9, DEF3]
        strategic = KenzoAgent("normal", rng=FixedRandom(0.1))
        balanced = KenzoAgent("normal", rng=FixedRandom(0.9))
        assert ids(strategic.select_cards(hand, 2)) == ["atk10", "atk9"]
        assert ids(balanced.select_cards(hand, 2)) == ["atk10", "def3"]

    def test_easy_plays_random_cards_from_hand(self):
        hand = [ATK10, ATK9, ATK5, DEF7, DEF3, HEAL3]
        picks = KenzoAgent("easy", seed=9).select_cards(hand, 2)
        assert len(picks) == 2
        assert set(picks) <= set(hand)

    def test_draft_pick_takes_best_score(self):
        agent = KenzoAgent("hard", seed=0)
        assert agent.select_draft_card([ATK5, ATK10]) == 1
        assert agent.select_draft_card([ATK5]) == 0
        assert agent.select_draft_card([]) is None

    def test_easy_draft_sometimes_blunders(self):
        assert KenzoAgent("easy", rng=FixedRandom(0.1)).select_draft_card([ATK5, ATK10]) == 0
        assert KenzoAgent("easy", rng=FixedRandom(0.5)).select_draft_card([ATK5, ATK10]) == 1

    def test_set_difficulty(self):
        agent = KenzoAgent()
        agent.set_difficulty("easy")
        assert agent.difficulty is Difficulty.EASY
        assert agent.name == "Kenzo (easy)"


class TestReactions:
    def test_flawless_overrides_round_result(self):
        assert generate_reaction("player", is_flawless=True) == FLAWLESS_REACTION
        assert FLAWLESS_REACTION.voice == "kenzoLoser"

    def test_round_results(self):
        rng = random.Random(0)
        for _ in range(10):
            assert generate_reaction("player", rng=rng).emote in {"emote_anger", "emote_swirl"}
            assert generate_reaction("opponent", rng=rng).emote in {"emote_laugh", "emote_stars"}
        assert generate_reaction("tie") == TIE_REACTION
