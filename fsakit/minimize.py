import logging
from typing import Dict, List, Set, Tuple

from prettytable import PrettyTable

from fsakit.automaton import Automaton
from fsakit.errors import UnsupportedFeature
from fsakit.utils import Input, State, TransPair

logger = logging.getLogger(__name__)

# (accepting, ((input, signature id of successor), ...))
Signature = Tuple[bool, Tuple[Tuple[Input, int], ...]]


def minimize_acyclic(dfa: Automaton, verbose: bool = False) -> Automaton:
    '''
    merge the states of an acyclic dfa that accept the same set of suffixes

    in an acyclic dfa two states accept the same suffixes iff both (or
    neither) accept and they move to equivalent states on every input. states
    are visited successors first, so each signature only refers to signatures
    already known, and equal signatures get the same id.
    '''
    if not dfa.is_deterministic:
        raise UnsupportedFeature(
            'Acyclic minimization requires a deterministic automaton.')
    order = dfa.topological_order()
    if order is None:
        raise UnsupportedFeature(
            'Acyclic minimization requires an automaton without cycles.')

    signature_ids: Dict[Signature, int] = {}
    state_signature: Dict[State, int] = {}

    for state in order:
        edges: List[Tuple[Input, int]] = []
        for _input, targets in dfa.successors(state).items():
            target = next(iter(targets))
            edges.append((_input, state_signature[target]))
        signature: Signature = (dfa.is_accepting(state), tuple(sorted(edges)))
        if signature not in signature_ids:
            signature_ids[signature] = len(signature_ids)
        state_signature[state] = signature_ids[signature]

    # declared states first, then states only referenced by the start or a
    # transition, predecessors before successors
    candidates = list(dict.fromkeys([*dfa.states, *reversed(order)]))

    # first state with a given signature represents all of them
    representative: Dict[int, State] = {}
    state_map: Dict[State, State] = {}
    for state in candidates:
        sig = state_signature[state]
        if sig not in representative:
            representative[sig] = state
        state_map[state] = representative[sig]

    states = list(representative.values())
    start_state = state_map[dfa.start_state]
    accept_states = [s for s in states if dfa.is_accepting(s)]

    trans_table: Dict[TransPair, Set[State]] = {}
    for state in states:
        for _input, targets in dfa.successors(state).items():
            trans_table[TransPair(state, _input)] = set(
                state_map[t] for t in targets)

    dafsa = Automaton(states, start_state, accept_states, dfa.alphabet,
                      trans_table)

    logger.debug('acyclic minimization: %d states -> %d states',
                 len(dfa.states), len(states))

    if verbose:
        table = PrettyTable(['STATE', 'MERGED INTO', 'SIGNATURE'])
        for state in candidates:
            table.add_row([state, state_map[state], state_signature[state]])
        print(table)

    return dafsa
