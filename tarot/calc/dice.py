"""
Dice Expression Evaluator.

Grammar: <quantity>d<sides>[kh1]

- "2d6"     -> sum of two six-sided dice
- "3d10kh1" -> highest of three ten-sided dice

Dice embedded in effect text are replaced left to right, each expression
rolled independently on the shared RNG. Tokens that look like dice but
can't be rolled ("0d6", "2d0", "4d6kh2", more than
MAX_DICE_QUANTITY dice) are left as they are.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Union

from ..errors import UnparseableDiceExpression
from ..state.rng import Random

logger = logging.getLogger(__name__)

KEEP_HIGHEST_SUFFIX = "kh1"

# Larger quantities are rejected as unparseable rather than rolled
MAX_DICE_QUANTITY = 1000

# Anything dice-shaped; validity is decided by parse_dice
DICE_TOKEN = re.compile(r"\b\d+d\d+(?:kh\d*)?\b")
_DICE_EXACT = re.compile(r"^(\d+)d(\d+)(kh1)?$")


@dataclass(frozen=True)
class DiceExpression:
    """Roll `quantity` dice with `sides` faces; sum them or keep the highest."""
    quantity: int
    sides: int
    keep_highest_one: bool = False

    def __post_init__(self):
        if self.quantity < 1 or self.sides < 1:
            raise UnparseableDiceExpression(
                f"Dice need quantity >= 1 and sides >= 1: {self.quantity}d{self.sides}"
            )
        if self.quantity > MAX_DICE_QUANTITY:
            raise UnparseableDiceExpression(
                f"At most {MAX_DICE_QUANTITY} dice per expression: {self.quantity}d{self.sides}"
            )

    def notation(self) -> str:
        suffix = KEEP_HIGHEST_SUFFIX if self.keep_highest_one else ""
        return f"{self.quantity}d{self.sides}{suffix}"

    def __str__(self) -> str:
        return self.notation()


def parse_dice(token: str) -> DiceExpression:
    """
    Parse dice notation.

    Raises:
        UnparseableDiceExpression: token is not valid notation
    """
    match = _DICE_EXACT.match(token.strip())
    if not match:
        raise UnparseableDiceExpression(f"Invalid dice expression: {token!r}")
    quantity, sides, keep = match.groups()
    return DiceExpression(int(quantity), int(sides), keep is not None)


class DiceRoller:
    """Rolls dice expressions on an injected RNG."""

    def __init__(self, rng: Random):
        self.rng = rng

    def roll(self, expr: DiceExpression) -> List[int]:
        """Individual die results, in roll order."""
        return [self.rng.random_int_range(1, expr.sides) for _ in range(expr.quantity)]

    def evaluate(self, expr: Union[DiceExpression, str]) -> int:
        """
        Roll an expression.

        Returns:
            Max of the rolls for keep-highest, otherwise their sum
        """
        if isinstance(expr, str):
            expr = parse_dice(expr)
        rolls = self.roll(expr)
        if expr.keep_highest_one:
            return max(rolls)
        return sum(rolls)

    def evaluate_in_text(self, text: str) -> str:
        """Replace every dice expression in `text` with a rolled total."""
        def substitute(match: re.Match) -> str:
            token = match.group(0)
            try:
                expr = parse_dice(token)
            except UnparseableDiceExpression as e:
                logger.warning("Skipping dice token %r: %s", token, e)
                return token
            return str(self.evaluate(expr))

        return DICE_TOKEN.sub(substitute, text)


def find_dice(text: str) -> List[str]:
    """Dice-shaped tokens in `text`, in order."""
    return DICE_TOKEN.findall(text)
