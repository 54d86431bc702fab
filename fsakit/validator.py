'''
checks the shape of a parsed automaton / language definition before any
algorithm runs

an automaton definition looks like

    {
        "states": ["q1", "q2"],
        "alphabet": ["a", "b"],
        "start": "q1",
        "accept": ["q2"],
        "transitions": {"q1": {"a": ["q1", "q2"], "b": ["q1"]}, "q2": {"b": ["q1"]}}
    }

and a language definition looks like

    {"alphabet": ["a", "b"], "accept": ["", "a", "ab", "aabb"]}

where `accept` lists the words of the language.
'''
import logging
from collections.abc import Mapping
from typing import Any, Dict, List, TYPE_CHECKING, cast

import json5

from fsakit.automaton import Automaton
from fsakit.errors import MalformedInput, ReferentialIntegrityViolation, UnsupportedFeature
from fsakit.utils import EPSILON_KEYS, Input, State, check_array_type, check_type, is_epsilon

if TYPE_CHECKING:
    from fsakit.trie import Language

logger = logging.getLogger(__name__)

AUTOMATON_KEYS = ('states', 'alphabet', 'start', 'accept', 'transitions')

LANGUAGE_KEYS = ('alphabet', 'accept')


def _check_mapping(raw: Any, what: str) -> None:
    if not isinstance(raw, Mapping):
        raise MalformedInput(
            f'{what} definition must be an object, requested {type(raw).__name__}.')


def _check_required(raw: Mapping, keys) -> None:
    for key in keys:
        if key not in raw:
            raise MalformedInput(f'Missing key \'{key}\'.', key=key)


def _check_no_epsilon(raw: Mapping) -> None:
    for key in raw.keys():
        if key in EPSILON_KEYS:
            raise UnsupportedFeature(
                'Epsilon transitions are not supported.', key=key)


def _check_transitions(transitions: Any) -> Dict[State, Dict[Input, List[State]]]:
    check_type(transitions, Mapping, 'transitions')
    for state, by_input in transitions.items():
        field_name = f'transitions.{state}'
        check_type(state, State, field_name)
        check_type(by_input, Mapping, field_name)
        for _input, targets in by_input.items():
            check_type(_input, Input, field_name)
            if is_epsilon(_input):
                raise UnsupportedFeature(
                    f'Epsilon transitions are not supported (found {_input!r} in {field_name}).',
                    key=field_name,
                    symbol=_input)
            check_array_type(targets, State, list, f'{field_name}.{_input}',
                             allow_empty=True)
    return cast(Dict[State, Dict[Input, List[State]]], transitions)


def validate(raw: Any, strict: bool = False) -> Automaton:
    '''
    turn a parsed automaton definition into an Automaton

    only the declared shape is checked, pass strict=True to check that every
    referenced state and symbol is declared as well
    '''
    _check_mapping(raw, 'Automaton')
    _check_required(raw, AUTOMATON_KEYS)
    _check_no_epsilon(raw)

    states = raw['states']
    alphabet = raw['alphabet']
    start = raw['start']
    accept = raw['accept']
    check_array_type(states, State, list, 'states', allow_empty=True)
    check_array_type(alphabet, Input, list, 'alphabet', allow_empty=True)
    check_array_type(accept, State, list, 'accept', allow_empty=True)
    check_type(start, State, 'start')
    for symbol in alphabet:
        if is_epsilon(symbol):
            raise UnsupportedFeature(
                f'Epsilon transitions are not supported (found {symbol!r} in alphabet).',
                key='alphabet',
                symbol=symbol)
    transitions = _check_transitions(raw['transitions'])

    automaton = Automaton(states, start, accept, alphabet,
                          Automaton.trans_dict_to_trans_table(transitions))
    if strict:
        check_integrity(automaton)
    logger.debug('validated automaton with %d states over %d symbols',
                 len(automaton.states), len(automaton.alphabet))
    return automaton


def check_integrity(automaton: Automaton) -> None:
    states = set(automaton.states)
    alphabet = set(automaton.alphabet)
    if automaton.start_state not in states:
        raise ReferentialIntegrityViolation(
            f'Start state \'{automaton.start_state}\' is not a declared state.',
            key='start')
    for state in sorted(automaton.accept_states):
        if state not in states:
            raise ReferentialIntegrityViolation(
                f'Accept state \'{state}\' is not a declared state.',
                key='accept')
    for pair, targets in automaton.trans_table.items():
        field_name = f'transitions.{pair.current}'
        if pair.current not in states:
            raise ReferentialIntegrityViolation(
                f'Transition source \'{pair.current}\' is not a declared state.',
                key=field_name)
        if pair.input not in alphabet:
            raise ReferentialIntegrityViolation(
                f'Symbol \'{pair.input}\' in {field_name} is not in the alphabet.',
                key=field_name,
                symbol=pair.input)
        for target in sorted(targets):
            if target not in states:
                raise ReferentialIntegrityViolation(
                    f'Transition target \'{target}\' in {field_name}.{pair.input} is not a declared state.',
                    key=f'{field_name}.{pair.input}')


def validate_language(raw: Any) -> 'Language':
    from fsakit.trie import Language
    _check_mapping(raw, 'Language')
    _check_required(raw, LANGUAGE_KEYS)
    _check_no_epsilon(raw)
    alphabet = raw['alphabet']
    words = raw['accept']
    check_array_type(alphabet, Input, list, 'alphabet')
    check_array_type(words, str, list, 'accept', allow_empty=True)
    return Language(tuple(dict.fromkeys(alphabet)), tuple(words))


def _read(path: str) -> Any:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json5.load(f)
    except ValueError as e:
        raise MalformedInput(f'{path} is not valid JSON: {e}') from e


def load(path: str, strict: bool = False) -> Automaton:
    return validate(_read(path), strict)


def load_language(path: str) -> 'Language':
    return validate_language(_read(path))
