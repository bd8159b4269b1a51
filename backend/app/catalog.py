"""Fixed tables for Primary 5 problem generation: difficulty tiers, operations,
curriculum topics and the scenario themes used to steer variety."""

from __future__ import annotations
import random
from typing import Dict, List, Optional, Sequence

from .textnorm import normalize


DIFFICULTIES: List[str] = ["easy", "medium", "hard"]
OP_TYPES: List[str] = ["any", "add", "sub", "mul", "div"]
TOPICS: List[str] = [
    "any",
    "fractions-division",
    "percentage",
    "ratio",
    "rate",
    "area-triangle",
    "volume-cube-cuboid",
    "angles",
    "triangles",
    "quadrilaterals",
]

DIFFICULTY_RULES: Dict[str, str] = {
    "easy": "- Single-step, numbers ≤ 100, integer answer.",
    "medium": "- Two steps, numbers ≤ 500, integer answer.",
    "hard": "- 2–3 steps mixing operations, numbers ≤ 1000, integer answer.",
}

OP_RULES: Dict[str, str] = {
    "any": "Use exactly one of: addition, subtraction, multiplication, or division.",
    "add": "Operation must be addition.",
    "sub": "Operation must be subtraction.",
    "mul": "Operation must be multiplication.",
    "div": "Operation must be division.",
}

# Scope of each curriculum topic, phrased as instructions for the model
TOPIC_RULES: Dict[str, str] = {
    "fractions-division": (
        "Fractions — division: divide a proper fraction by a whole number, or find a fraction "
        "of a quantity and share it equally; the final answer must still be a whole number."
    ),
    "percentage": (
        "Percentage: find a percentage of a quantity, express a part as a percentage of a whole, "
        "or work out discount / GST / interest on whole-dollar amounts."
    ),
    "ratio": (
        "Ratio: ratios of two or three quantities in simplest form, finding one quantity given "
        "the ratio and another quantity or the total."
    ),
    "rate": (
        "Rate: amount per unit (price per item, litres per minute, pages per day) and "
        "finding the total or number of units from a given rate."
    ),
    "area-triangle": (
        "Area of triangle: area = 1/2 × base × height with whole-number lengths in cm or m; "
        "the height may be drawn outside the triangle."
    ),
    "volume-cube-cuboid": (
        "Volume of cube and cuboid: length × breadth × height in cm³ or m³, or litres of "
        "water in a rectangular tank (1 litre = 1000 cm³)."
    ),
    "angles": (
        "Angles: angles on a straight line (180°), at a point (360°) and vertically opposite "
        "angles; find the unknown angle in degrees."
    ),
    "triangles": (
        "Triangles: angle sum of a triangle is 180°, properties of isosceles, equilateral and "
        "right-angled triangles; find the unknown angle in degrees."
    ),
    "quadrilaterals": (
        "Parallelogram, rhombus and trapezium: use their angle properties to find an unknown "
        "angle in degrees."
    ),
}

THEMES: List[str] = [
    "sports day",
    "gardening",
    "library books",
    "bus rides",
    "pets",
    "fruit stall",
    "stationery shop",
    "recycling cans",
    "classroom seats",
    "swimming practice",
    "museum tickets",
    "bicycle rentals",
    "birthday party",
    "zoo animals",
    "farm eggs",
    "sandwiches",
    "oranges",
    "stickers",
    "balloons",
]


def topic_rules(topic: Optional[str]) -> str:
    if topic and topic != "any" and topic in TOPIC_RULES:
        return f"Topic: {TOPIC_RULES[topic]}"
    listing = "\n".join(f"  * {text}" for text in TOPIC_RULES.values())
    return f"Topic: any one of the following Primary 5 topics:\n{listing}"


def pick_theme(recent: Sequence[str], themes: Sequence[str] = THEMES, rng: Optional[random.Random] = None) -> str:
    """Pick a theme whose name does not already appear in the recent problems.

    Best effort: when every theme has been used, the first one in the shuffled
    order is returned anyway.
    """
    rng = rng or random
    bag = normalize(" ".join(recent))
    shuffled = rng.sample(list(themes), len(themes))
    for theme in shuffled:
        if normalize(theme) not in bag:
            return theme
    return shuffled[0]
