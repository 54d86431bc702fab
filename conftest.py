"""
Shared fixtures: sample definitions under samples/ and word enumeration.
"""
import os
from itertools import product

import json5
import pytest

SAMPLES_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'samples')


@pytest.fixture
def sample_path():
    def path(name: str) -> str:
        return os.path.join(SAMPLES_DIR, name)
    return path


@pytest.fixture
def sample(sample_path):
    """Parsed content of a file in samples/."""
    def load(name: str):
        with open(sample_path(name), 'r', encoding='utf-8') as f:
            return json5.load(f)
    return load


@pytest.fixture
def all_words():
    """Every string over `alphabet` with at most `max_length` symbols."""
    def words(alphabet, max_length: int):
        for n in range(max_length + 1):
            for symbols in product(sorted(alphabet), repeat=n):
                yield ''.join(symbols)
    return words
