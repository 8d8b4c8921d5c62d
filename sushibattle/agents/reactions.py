"""Cosmetic reactions Kenzo shows after a round."""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

from .. import rules


@dataclass(frozen=True)
class Reaction:
    emote: str
    voice: Optional[str] = None


FLAWLESS_REACTION = Reaction("emote_faceAngry", "kenzoLoser")
TIE_REACTION = Reaction("emote_dots3")

_PLAYER_ROUND = (Reaction("emote_anger"), Reaction("emote_swirl"))
_OPPONENT_ROUND = (Reaction("emote_laugh"), Reaction("emote_stars"))


def generate_reaction(
    round_result: str,
    *,
    is_flawless: bool = False,
    rng: Optional[random.Random] = None,
) -> Reaction:
    """Pick Kenzo's reaction to a round or game result.

    ``round_result`` is the winning side or ``"tie"``. Never touches game state.
    """

    if is_flawless:
        return FLAWLESS_REACTION
    rng = rng or random.Random()
    if round_result == rules.SIDE_PLAYER:
        return rng.choice(_PLAYER_ROUND)
    if round_result == rules.SIDE_OPPONENT:
        return rng.choice(_OPPONENT_ROUND)
    return TIE_REACTION


__all__ = ["FLAWLESS_REACTION", "Reaction", "TIE_REACTION", "generate_reaction"]
