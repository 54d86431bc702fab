from enum import Enum
from itertools import product
from typing import FrozenSet, Iterator, NamedTuple, Optional, Set

from fsakit.automaton import Automaton
from fsakit.utils import State, TransPair


class Reason(Enum):
    SymbolNotInAlphabet = 'Symbol not in alphabet'
    DeadConfiguration = 'Dead configuration'
    ReachedAcceptState = 'Reached an accept state'
    NoAcceptStateReached = 'No accept state reached'


class Verdict(NamedTuple):
    accepted: bool
    reason: Reason
    # the offending symbol for SymbolNotInAlphabet
    symbol: Optional[str] = None
    # states the automaton was in when it stopped
    states: FrozenSet[State] = frozenset()

    @property
    def message(self) -> str:
        if self.reason is Reason.SymbolNotInAlphabet:
            return f'Symbol \'{self.symbol}\' not in alphabet'
        return self.reason.value

    def __str__(self) -> str:
        return f'{"ACCEPT" if self.accepted else "REJECT"}: {self.message}'


def evaluate(automaton: Automaton, word: str) -> Verdict:
    '''
    run `word` through `automaton`, works for nfa and dfa alike

    a rejected word is a normal outcome and never raises
    '''
    alphabet = set(automaton.alphabet)
    for ch in word:
        if ch not in alphabet:
            return Verdict(False, Reason.SymbolNotInAlphabet, symbol=ch)

    # a dfa is simulated as an nfa whose current set has at most one state
    current: FrozenSet[State] = frozenset([automaton.start_state])
    for ch in word:
        nxt: Set[State] = set()
        for state in current:
            nxt.update(automaton.query(TransPair(state, ch)))
        current = frozenset(nxt)
        if len(current) == 0:
            return Verdict(False, Reason.DeadConfiguration)

    if any(automaton.is_accepting(s) for s in current):
        return Verdict(True, Reason.ReachedAcceptState, states=current)
    return Verdict(False, Reason.NoAcceptStateReached, states=current)


def accepts(automaton: Automaton, word: str) -> bool:
    return evaluate(automaton, word).accepted


def language(automaton: Automaton, max_length: int) -> Iterator[str]:
    '''
    every accepted word of at most `max_length` symbols, shortest first
    '''
    alphabet = sorted(automaton.alphabet)
    for n in range(max_length + 1):
        for symbols in product(alphabet, repeat=n):
            word = ''.join(symbols)
            if accepts(automaton, word):
                yield word
