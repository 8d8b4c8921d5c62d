import itertools

import pytest

from sushibattle import rules
from sushibattle.cards import Outcome, beats, card_power, compare, primary_stat
from sushibattle.catalog import Card, default_catalog


def make_card(card_id: str, card_type: str, stat: int, tier: str = "common") -> Card:
    stats = {"attack": 0, "defense": 0, "healing": 0}
    stats[card_type if card_type in stats else "attack"] = stat
    return Card(id=card_id, name=card_id.title(), tier=tier, type=card_type, **stats)


def test_attack_beats_healing_with_higher_stat():
    attacker = make_card("a", "attack", 5)
    healer = make_card("h", "healing", 3)
    assert compare(attacker, healer) is Outcome.FIRST


def test_lower_stat_forfeits_type_advantage():
    attacker = make_card("a", "attack", 2)
    healer = make_card("h", "healing", 5)
    assert compare(attacker, healer) is Outcome.SECOND


def test_defense_beats_attack_on_equal_stat():
    attacker = make_card("a", "attack", 9)
    defender = make_card("d", "defense", 9)
    assert compare(attacker, defender) is Outcome.SECOND
    assert compare(defender, attacker) is Outcome.FIRST


def test_healing_beats_defense():
    healer = make_card("h", "healing", 4)
    defender = make_card("d", "defense", 4)
    assert compare(healer, defender) is Outcome.FIRST


def test_same_type_equal_stats_tie():
    first = make_card("d1", "defense", 6)
    second = make_card("d2", "defense", 6)
    assert compare(first, second) is Outcome.TIE


def test_same_type_higher_stat_wins():
    weak = make_card("h1", "healing", 4)
    strong = make_card("h2", "healing", 7)
    assert compare(weak, strong) is Outcome.SECOND


def test_unknown_type_uses_attack_stat():
    odd = Card(id="odd", name="Odd", tier="common", type="spicy", attack=7, defense=1, healing=1)
    assert primary_stat(odd) == 7
    # Outside the advantage cycle, stats are compared directly.
    assert compare(odd, make_card("a", "attack", 5)) is Outcome.FIRST
    assert compare(odd, make_card("h", "healing", 7)) is Outcome.TIE


def test_primary_stat_follows_type():
    card = Card(id="x", name="X", tier="rare", type="defense", attack=1, defense=8, healing=3)
    assert primary_stat(card) == 8


@pytest.mark.parametrize(
    "card_id, expected",
    [("dead_tuna", 12), ("gyoza", 8), ("wasabi", 5), ("ramen", 12)],
)
def test_card_power_adds_tier_bonus(card_id, expected):
    assert card_power(default_catalog().get(card_id)) == expected


def test_advantage_cycle_each_type_beats_exactly_one():
    for card_type in rules.CARD_TYPES:
        beaten = [other for other in rules.CARD_TYPES if beats(card_type, other)]
        assert len(beaten) == 1
        assert not beats(beaten[0], card_type)


def test_comparison_symmetric_over_catalog():
    cards = default_catalog().cards
    for first, second in itertools.product(cards, repeat=2):
        assert compare(first, second) is compare(second, first).inverted()
