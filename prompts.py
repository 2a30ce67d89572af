# prompts.py
import random

GRATITUDE_PROMPTS = [
    "What is one thing you're grateful for today?",
    "What made you smile today?",
    "Who said something kind to you recently?",
    "What small moment brought you joy today?",
    "What's something beautiful you noticed today?",
    "Who made a positive difference in your day?",
    "What's a simple pleasure you enjoyed today?",
    "What comfort or luxury are you thankful for?",
    "What achievement, big or small, are you proud of?",
    "What relationship in your life are you grateful for?",
]


def pick_prompt(rng=None) -> str:
    """Uniform pick from GRATITUDE_PROMPTS; pass a seeded random.Random in tests."""
    rng = rng or random
    return GRATITUDE_PROMPTS[rng.randrange(len(GRATITUDE_PROMPTS))]
