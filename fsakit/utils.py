from typing import Collection, List, NamedTuple
from typing_extensions import TypeAlias

from fsakit.errors import TypeMismatch

# rendered graphs go here, relative to the working directory
OUTPUT_DIR = 'output'

Epsilon: str = 'ε'

# keys that name an epsilon transition, either at the top level of a
# definition or as a transition symbol
EPSILON_KEYS = ('epsilon', 'eps', Epsilon, '')

# empty set
Oslash: str = 'Ø'

# joins the members of a subset into a dfa state name
SUBSET_DELIMITER: str = ','

State: TypeAlias = str

Input: TypeAlias = str


def state_name(state: State):
    return f'{state}'


class TransPair(NamedTuple):
    current: State
    input: Input


class StatePair(NamedTuple):
    current: State
    target: State


class NameAllocator:

    def __init__(self, prefix='') -> None:
        self._id = 0
        self._prefix = prefix
        self._names: List[str] = []

    @property
    def next(self) -> str:
        _id = f'{self._prefix}{self._id}'
        self._names.append(_id)
        self._id += 1
        return _id

    @property
    def names(self) -> List[str]:
        return self._names


def is_epsilon(symbol: Input) -> bool:
    return symbol in EPSILON_KEYS


def check_type(_obj: object, _type, field_name: str):
    if not isinstance(_obj, _type):
        raise TypeMismatch(
            f'Field {field_name} must be type {_type.__name__}, requested {type(_obj).__name__}.',
            key=field_name)


def check_array_type(_list: Collection,
                     element_type,
                     list_type,
                     field_name: str,
                     allow_empty=False):
    check_type(_list, list_type, field_name)
    if not allow_empty and len(_list) == 0:
        raise TypeMismatch(f'Field {field_name} must not be empty.',
                           key=field_name)
    for element in _list:
        if not isinstance(element, element_type):
            raise TypeMismatch(
                f'Field {field_name} must be type List[{element_type.__name__}], found element {element!r} of type {type(element).__name__}.',
                key=field_name)
