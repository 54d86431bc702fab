import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple, Union

from fsakit.automaton import Automaton
from fsakit.errors import AlphabetViolation
from fsakit.utils import Input, NameAllocator, State, TransPair
from fsakit.validator import validate_language

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Language:
    '''
    a finite language, `words` is the `accept` field of a language file
    '''
    alphabet: Tuple[Input, ...]
    words: Tuple[str, ...]

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'Language':
        return validate_language(data)

    def to_dict(self) -> Dict[str, Any]:
        return {'alphabet': list(self.alphabet), 'accept': list(self.words)}

    def check_words(self) -> None:
        alphabet = set(self.alphabet)
        for word in self.words:
            for ch in word:
                if ch not in alphabet:
                    raise AlphabetViolation(
                        f'string "{word}" contains symbol "{ch}" not in alphabet',
                        symbol=ch,
                        word=word)


def build_trie(language: Union[Language, Dict[str, Any]]) -> Automaton:
    '''
    build the prefix tree of a finite language as a dfa

    words sharing a prefix share the states of that prefix, the state a word
    ends in accepts, the root accepts iff the empty word is in the language
    '''
    if not isinstance(language, Language):
        language = validate_language(language)
    language.check_words()

    state_allocator = NameAllocator('q')
    start_state = state_allocator.next
    edges: Dict[TransPair, State] = {}
    accept_states: List[State] = []

    for word in language.words:
        curr = start_state
        for ch in word:
            key = TransPair(curr, ch)
            if edges.get(key) is None:
                edges[key] = state_allocator.next
            curr = edges[key]
        accept_states.append(curr)

    states = state_allocator.names
    logger.debug('trie for %d words has %d states', len(language.words),
                 len(states))
    return Automaton(states, start_state, accept_states, language.alphabet,
                     dict((key, [target]) for key, target in edges.items()))
