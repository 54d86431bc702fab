import logging
from typing import Any, Optional, Union

from fsakit.automaton import Automaton
from fsakit.errors import NoAutomatonLoaded
from fsakit.evaluator import Verdict, evaluate
from fsakit.minimize import minimize_acyclic
from fsakit.subset import subset_construct
from fsakit.trie import Language, build_trie
from fsakit.validator import load, load_language, validate, validate_language

logger = logging.getLogger(__name__)


class Session:
    '''
    the automaton a front end is currently working on

    `original` is what was loaded (the uploaded automaton, or the trie of an
    uploaded language), `current` is the result of the latest transformation.
    a failed load leaves nothing loaded.
    '''

    def __init__(self) -> None:
        self._current: Optional[Automaton] = None
        self._original: Optional[Automaton] = None

    @property
    def loaded(self) -> bool:
        return self._current is not None

    @property
    def current(self) -> Automaton:
        if self._current is None:
            raise NoAutomatonLoaded('No automaton loaded.')
        return self._current

    @property
    def original(self) -> Automaton:
        if self._original is None:
            raise NoAutomatonLoaded('No automaton loaded.')
        return self._original

    def _install(self, automaton: Automaton) -> Automaton:
        self._current = automaton
        self._original = automaton
        return automaton

    def clear(self) -> None:
        self._current = None
        self._original = None

    def load_automaton(self, source: Union[str, Any], strict: bool = False) -> Automaton:
        '''
        `source` is a file path or an already parsed definition
        '''
        try:
            if isinstance(source, str):
                automaton = load(source, strict)
            else:
                automaton = validate(source, strict)
        except Exception:
            self.clear()
            raise
        logger.info('loaded automaton with %d states', len(automaton.states))
        return self._install(automaton)

    def load_language(self, source: Union[str, Language, Any]) -> Automaton:
        try:
            if isinstance(source, str):
                language = load_language(source)
            elif isinstance(source, Language):
                language = source
            else:
                language = validate_language(source)
            automaton = build_trie(language)
        except Exception:
            self.clear()
            raise
        logger.info('built trie with %d states from %d words',
                    len(automaton.states), len(language.words))
        return self._install(automaton)

    def convert(self, verbose: bool = False) -> Automaton:
        self._current = subset_construct(self.current, verbose)
        return self._current

    def minimize(self, verbose: bool = False) -> Automaton:
        self._current = minimize_acyclic(self.current, verbose)
        return self._current

    def reset(self) -> Automaton:
        self._current = self.original
        return self._current

    def evaluate(self, word: str) -> Verdict:
        return evaluate(self.current, word)
