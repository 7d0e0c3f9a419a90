import pytest

from phonecode.dictionary import DictionaryIndex
from phonecode.keypad import PRECHELT

WORDS = ["an", "blah", "a", "foo", "bar", "boo", "bree"]

# Word list of the "phone code" benchmark, without its umlaut entries
PRECHELT_WORDS = [
    "an", "blau", "Boot", "da", "Fee", "fern", "Fest", "fort", "je", "jemand",
    "mir", "Mix", "Mixer", "Name", "neu", "Ort", "so", "Tor", "Torf", "Wasser",
]


@pytest.fixture
def index():
    return DictionaryIndex.build(WORDS)


@pytest.fixture
def empty_index():
    return DictionaryIndex.build([])


@pytest.fixture
def prechelt_index():
    return DictionaryIndex.build(PRECHELT_WORDS, PRECHELT)
