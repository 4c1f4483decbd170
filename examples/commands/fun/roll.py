"""Dice roller: roll [NdM], default 1d6."""

import random
import re

aliases = ["r", "dice"]
help = "Roll dice. Usage: roll [NdM], e.g. roll 2d6"

DICE = re.compile(r"^(\d*)d(\d+)$")


def run(context, message, args):
    spec = args[0] if args and args[0] else "1d6"
    match = DICE.match(spec.lower())
    if match is None:
        raise ValueError(f"Invalid dice: {spec}")

    count = int(match.group(1) or 1)
    sides = int(match.group(2))
    if not 1 <= count <= 100 or sides < 2:
        raise ValueError(f"Invalid dice: {spec}")

    rolls = [random.randint(1, sides) for _ in range(count)]
    return f"🎲 {spec}: {rolls} = {sum(rolls)}"
