from fsakit.automaton import Automaton, Transition
from fsakit.errors import (AutomatonError, MalformedInput, TypeMismatch, UnsupportedFeature,
                           AlphabetViolation, ReferentialIntegrityViolation, NoAutomatonLoaded)
from fsakit.evaluator import Reason, Verdict, evaluate, accepts
from fsakit.minimize import minimize_acyclic
from fsakit.session import Session
from fsakit.subset import subset_construct
from fsakit.trie import Language, build_trie
from fsakit.validator import validate, validate_language, load, load_language
