import random

from prompts import GRATITUDE_PROMPTS, pick_prompt


def test_seeded_pick_is_repeatable():
    assert pick_prompt(random.Random(42)) == pick_prompt(random.Random(42))


def test_every_prompt_can_come_up():
    rng = random.Random(0)
    seen = {pick_prompt(rng) for _ in range(500)}
    assert seen == set(GRATITUDE_PROMPTS)


def test_index_source_is_injected(mocker):
    rng = mocker.Mock()
    rng.randrange.return_value = 3
    assert pick_prompt(rng) == GRATITUDE_PROMPTS[3]
    rng.randrange.assert_called_once_with(len(GRATITUDE_PROMPTS))
