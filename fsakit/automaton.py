from functools import cached_property
from typing import Iterable, List, Any, Dict, FrozenSet, Mapping, Optional, Set
from graphviz import Digraph

from prettytable import PrettyTable

from fsakit.utils import Oslash, State, Input, StatePair, TransPair, state_name


class Transition:
    '''
    one edge of the transition graph, parallel edges share a Transition and
    list every symbol in `inputs`
    '''

    def __init__(self, current: State, target: State,
                 inputs: List[Input]) -> None:
        self._current = current
        self._target = target
        self._inputs = inputs

    @property
    def current(self):
        return self._current

    @property
    def target(self):
        return self._target

    @property
    def inputs(self):
        return self._inputs

    def __repr__(self) -> str:
        return f'{self.current}->{self.target} on {{{",".join(self.inputs)}}}'

    def __eq__(self, __o: object) -> bool:
        if not isinstance(__o, Transition):
            return False
        return self.target == __o.target and self.current == __o.current and self.inputs == __o.inputs

    def __hash__(self) -> int:
        return hash((self.target, *self.inputs, self.current))


class Automaton:
    # an automaton has 5 attributes
    # a state set
    # an input alphabet
    # a start state
    # an accept states set
    # a transition function (state, input) -> set of states
    #
    # nfa, dfa and dafsa share this class, a dfa is an automaton whose
    # transition function never yields more than one state.
    # instances are never modified, every algorithm returns a new one
    def __init__(self, states: Iterable[State], start_state: State,
                 accept_states: Iterable[State], alphabet: Iterable[Input],
                 trans_table: Mapping[TransPair, Iterable[State]]) -> None:
        # dict.fromkeys removes duplicates and keeps declaration order
        self._states = tuple(dict.fromkeys(states))
        self._alphabet = tuple(dict.fromkeys(alphabet))
        self._start_state: State = start_state
        self._accept_states: FrozenSet[State] = frozenset(accept_states)

        self._trans_table: Dict[TransPair, FrozenSet[State]] = {}
        for key, targets in trans_table.items():
            targets = frozenset(targets)
            # an empty target set means there is no transition at all
            if len(targets) != 0:
                self._trans_table[TransPair(*key)] = targets

    @staticmethod
    def trans_table_to_trans_list(
            trans_table: Mapping[TransPair, Iterable[State]]) -> List[Transition]:
        trans_list: Dict[StatePair, List[Input]] = {}
        for trans_pair, target_states in trans_table.items():
            for state in sorted(target_states):
                state_pair = StatePair(trans_pair.current, state)
                if trans_list.get(state_pair) is None:
                    trans_list[state_pair] = []
                trans_list[state_pair].append(trans_pair.input)
        return [
            Transition(state_pair.current, state_pair.target, inputs)
            for state_pair, inputs in trans_list.items()
        ]

    @staticmethod
    def trans_dict_to_trans_table(
        trans_dict: Mapping[State, Mapping[Input, Iterable[State]]]
    ) -> Dict[TransPair, FrozenSet[State]]:
        '''
        {state: {input: [state, ...]}} -> {(state, input): {state, ...}}
        '''
        trans_table: Dict[TransPair, FrozenSet[State]] = {}
        for current, by_input in trans_dict.items():
            for _input, targets in by_input.items():
                trans_table[TransPair(current, _input)] = frozenset(targets)
        return trans_table

    @property
    def states(self) -> List[State]:
        return list(self._states)

    @property
    def alphabet(self) -> List[Input]:
        return list(self._alphabet)

    @property
    def start_state(self) -> State:
        return self._start_state

    @property
    def accept_states(self) -> FrozenSet[State]:
        return self._accept_states

    @property
    def trans_table(self) -> Dict[TransPair, FrozenSet[State]]:
        return dict(self._trans_table)

    @cached_property
    def transitions(self) -> List[Transition]:
        return Automaton.trans_table_to_trans_list(self._trans_table)

    def query(self, key: TransPair) -> FrozenSet[State]:
        return self._trans_table.get(key, frozenset())

    @cached_property
    def _out_edges(self) -> Dict[State, Dict[Input, FrozenSet[State]]]:
        out_edges: Dict[State, Dict[Input, FrozenSet[State]]] = {}
        for pair, targets in self._trans_table.items():
            out_edges.setdefault(pair.current, {})[pair.input] = targets
        return out_edges

    def successors(self, state: State) -> Dict[Input, FrozenSet[State]]:
        return dict(self._out_edges.get(state, {}))

    def is_accepting(self, state: State) -> bool:
        return state in self._accept_states

    @cached_property
    def is_deterministic(self) -> bool:
        return all(len(targets) <= 1 for targets in self._trans_table.values())

    def topological_order(self) -> Optional[List[State]]:
        '''
        every state listed after all of its successors (post-order),
        None when the transition graph has a cycle, self-loops included
        '''
        # the start state takes part even when `states` does not declare it
        adjacency: Dict[State, Set[State]] = dict(
            (s, set()) for s in (*self._states, self._start_state))
        for current, by_input in self._out_edges.items():
            for targets in by_input.values():
                adjacency.setdefault(current, set()).update(targets)

        order: List[State] = []
        # 0: unvisited, 1: on the dfs stack, 2: finished
        color: Dict[State, int] = dict((s, 0) for s in adjacency)
        for root in adjacency:
            if color[root] != 0:
                continue
            color[root] = 1
            stack = [(root, iter(sorted(adjacency[root])))]
            while len(stack) != 0:
                state, children = stack[-1]
                child = next(children, None)
                if child is None:
                    stack.pop()
                    color[state] = 2
                    order.append(state)
                    continue
                child_color = color.get(child, 0)
                if child_color == 1:
                    return None
                if child_color == 0:
                    color[child] = 1
                    stack.append((child, iter(sorted(adjacency.get(child, ())))))
        return order

    @cached_property
    def is_acyclic(self) -> bool:
        return self.topological_order() is not None

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'Automaton':
        from fsakit.validator import validate
        return validate(data)

    def to_dict(self) -> Dict[str, Any]:
        transitions: Dict[State, Dict[Input, List[State]]] = dict(
            (s, {}) for s in self._states)
        for pair, targets in self._trans_table.items():
            transitions.setdefault(pair.current, {})[pair.input] = sorted(targets)
        return {
            'states': list(self._states),
            'alphabet': list(self._alphabet),
            'start': self._start_state,
            'accept': [s for s in self._states if s in self._accept_states],
            'transitions': transitions
        }

    def __eq__(self, __o: object) -> bool:
        if not isinstance(__o, Automaton):
            return False
        return set(self._states) == set(__o._states) \
            and set(self._alphabet) == set(__o._alphabet) \
            and self._start_state == __o._start_state \
            and self._accept_states == __o._accept_states \
            and self._trans_table == __o._trans_table

    def __repr__(self) -> str:
        table = PrettyTable(['STATE', *self._alphabet])
        # right alignment
        table.align['STATE'] = 'r'

        def format_state(s: State) -> str:
            res = f'{s}'
            if s == self._start_state:
                res = f'-> {res}'
            if s in self._accept_states:
                res = f'* {res}'
            return res

        for s in self._states:
            row: List[str] = [format_state(s)]
            for i in self._alphabet:
                states = self.query(TransPair(s, i))
                row.append(Oslash if len(states) ==
                           0 else ','.join(map(state_name, sorted(states))))
            table.add_row(row)
        return table.get_string()

    def visualize(self, name: str = 'automaton') -> Digraph:
        '''
        visualize transition graph
        '''
        g = Digraph(name=name, graph_attr={'rankdir': 'LR'})

        g.node(name='vnode', label='', shape='none')

        for state in self._states:
            label = state_name(state)
            if state in self._accept_states:
                g.node(name=label, label=label, shape='doublecircle')
            else:
                g.node(name=label, label=label, shape='circle')

        g.edge('vnode',
               state_name(self._start_state),
               label='start',
               arrowsize='0.5')

        for trans in self.transitions:
            g.edge(state_name(trans.current),
                   state_name(trans.target),
                   ','.join(trans.inputs),
                   arrowsize='0.5')
        return g
