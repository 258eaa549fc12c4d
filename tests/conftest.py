import numpy as np
import pytest


ENGLISH_TEXT = (
    "It was late in the evening when the old man came down the hill with his dog. "
    "He had spent the whole day in the fields, and there was still a great deal of "
    "work to be done before the first snow. The farm had been in his family for "
    "more than a hundred years, and he knew every stone and every tree on the land. "
    "When he reached the house he found that the door was open and that someone had "
    "left a letter on the kitchen table. The letter was short, but it told him that "
    "his son would come home at the end of the month. He read it twice, then sat "
    "down by the fire and thought about the years that had passed since the boy went "
    "away to the city. There had been many changes in that time. The village was "
    "smaller now, the school had closed, and most of the young people had gone to "
    "look for work in other places. Still, the old man believed that the land would "
    "always be there, and that a farm was worth more than any job in an office. He "
    "would show his son the new barn and the horses, and they would walk together "
    "along the river as they used to do when the boy was small. Perhaps this time "
    "his son would want to stay. The old man did not know what he would say if the "
    "answer was no, but he would ask the question all the same, because that was what "
    "a father should do."
)

PANGRAM = "THE QUICK BROWN FOX JUMPS OVER THE LAZY DOG"


@pytest.fixture
def english_text():
    return ENGLISH_TEXT


@pytest.fixture
def pangram():
    return PANGRAM


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
