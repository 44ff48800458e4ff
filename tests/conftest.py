import pytest

from sentiment_summary.sentiment import LexiconSentimentEngine

LEXICON = {
    "happy": 3, "love": 3, "great": 3, "joy": 3, "wonderful": 4, "enjoy": 2,
    "bad": -3, "terrible": -3, "nightmare": -3, "slow": -2, "expensive": -2, "hate": -3,
}

DOG_TEXT = (
    "Dogs bring endless joy to families. "
    "Dogs need daily walks and regular exercise. "
    "Owning dogs can be expensive and the vet bills are a nightmare. "
    "Puppies chew shoes and furniture. "
    "Many families love walking their dogs in the park. "
    "Training puppies takes patience and time. "
    "A great dog makes every walk a wonderful adventure."
)


@pytest.fixture
def lexicon_engine():
    return LexiconSentimentEngine(LEXICON)


@pytest.fixture
def dog_text():
    return DOG_TEXT
