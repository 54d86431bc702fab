from typing import Optional


class AutomatonError(ValueError):
    '''
    base class of every error raised while loading or transforming an automaton,
    `key`, `symbol` and `word` point at the offending part of the input
    '''

    def __init__(self,
                 message: str,
                 key: Optional[str] = None,
                 symbol: Optional[str] = None,
                 word: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.key = key
        self.symbol = symbol
        self.word = word


class MalformedInput(AutomatonError):
    pass


class TypeMismatch(MalformedInput):
    pass


class UnsupportedFeature(AutomatonError):
    pass


class AlphabetViolation(AutomatonError):
    pass


class ReferentialIntegrityViolation(AutomatonError):
    pass


class NoAutomatonLoaded(RuntimeError):
    pass
