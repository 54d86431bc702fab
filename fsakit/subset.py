import logging
from typing import Dict, FrozenSet, Iterable, List, Set

from prettytable import PrettyTable

from fsakit.automaton import Automaton
from fsakit.errors import UnsupportedFeature
from fsakit.utils import SUBSET_DELIMITER, Oslash, State, Input, TransPair, is_epsilon, state_name

logger = logging.getLogger(__name__)

StateSubset = FrozenSet[State]


def subset_name(subset: Iterable[State]) -> State:
    '''
    canonical dfa state name of a set of nfa states, members are sorted and
    joined with SUBSET_DELIMITER

    backslash and the delimiter are escaped inside member names, so two
    different subsets never share a name
    '''

    def escape(s: State) -> str:
        return s.replace('\\', '\\\\').replace(SUBSET_DELIMITER,
                                               f'\\{SUBSET_DELIMITER}')

    return SUBSET_DELIMITER.join(escape(s) for s in sorted(subset))


def subset_construct(nfa: Automaton, verbose: bool = False) -> Automaton:
    """
    convert nfa to dfa using subset construction algorithm

    a dfa state is created for every reachable non-empty set of nfa states,
    an empty target set leaves the transition out instead of adding a dead state
    """
    inputs = nfa.alphabet
    for _input in inputs:
        if is_epsilon(_input):
            raise UnsupportedFeature(
                'Epsilon transitions are not supported.', symbol=_input)

    def move(subset: StateSubset, _input: Input) -> StateSubset:
        res: Set[State] = set()
        for state in subset:
            res.update(nfa.query(TransPair(state, _input)))
        return frozenset(res)

    # subsets are keyed by value, discovery order does not matter
    subset_state_map: Dict[StateSubset, State] = dict()

    initial_subset: StateSubset = frozenset([nfa.start_state])
    start_state = subset_name(initial_subset)
    subset_state_map[initial_subset] = start_state

    stack: List[StateSubset] = [initial_subset]

    trans_table: Dict[TransPair, Set[State]] = dict()

    while len(stack) != 0:
        curr = stack.pop(-1)
        for _input in inputs:
            target = move(curr, _input)
            if len(target) == 0:
                continue
            if not target in subset_state_map:
                subset_state_map[target] = subset_name(target)
                stack.append(target)
            _current = subset_state_map[curr]
            _target = subset_state_map[target]
            trans_table[TransPair(_current, _input)] = {_target}

    accept_states = [
        dfa_state for nfa_states, dfa_state in subset_state_map.items()
        if any(nfa.is_accepting(s) for s in nfa_states)
    ]

    states = list(subset_state_map.values())

    dfa = Automaton(states, start_state, accept_states, inputs, trans_table)

    logger.debug('subset construction: %d nfa states -> %d dfa states',
                 len(nfa.states), len(states))

    if verbose:
        table = PrettyTable(['NFA STATE', 'DFA STATE', *inputs])
        for nfa_states, dfa_state in subset_state_map.items():
            row = [
                f'{{{",".join(map(state_name, sorted(nfa_states)))}}}',
                dfa_state
            ]
            for _input in inputs:
                target = dfa.query(TransPair(dfa_state, _input))
                row.append(Oslash if len(target) == 0 else next(iter(target)))
            table.add_row(row)
        print(table)

    return dfa
