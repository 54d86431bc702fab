import pytest

from fsakit.automaton import Automaton
from fsakit.errors import AlphabetViolation, MalformedInput, UnsupportedFeature
from fsakit.evaluator import accepts, language
from fsakit.minimize import minimize_acyclic
from fsakit.subset import subset_construct
from fsakit.trie import Language, build_trie
from fsakit.utils import TransPair
from fsakit.validator import load, load_language, validate

WORDS = ('', 'a', 'ab', 'aabb')


@pytest.fixture
def small_language() -> Language:
    return Language(('a', 'b'), WORDS)


def test_build_trie_shares_prefixes(small_language):
    trie = build_trie(small_language)
    assert trie.states == ['q0', 'q1', 'q2', 'q3', 'q4', 'q5']
    assert trie.start_state == 'q0'
    assert trie.accept_states == {'q0', 'q1', 'q2', 'q5'}
    assert trie.query(TransPair('q0', 'a')) == {'q1'}
    assert trie.query(TransPair('q1', 'b')) == {'q2'}
    assert trie.query(TransPair('q1', 'a')) == {'q3'}
    assert trie.query(TransPair('q0', 'b')) == frozenset()
    assert trie.is_deterministic
    assert trie.is_acyclic


def test_build_trie_accepts_exactly_the_words(small_language, all_words):
    trie = build_trie(small_language)
    for word in all_words('ab', 5):
        assert accepts(trie, word) == (word in WORDS), word


def test_build_trie_from_dict():
    trie = build_trie({'alphabet': ['x', 'y'], 'accept': ['xy', 'xy', 'y']})
    assert len(trie.states) == 4
    assert list(language(trie, 3)) == ['y', 'xy']


def test_empty_word_marks_root():
    trie = build_trie(Language(('a',), ('',)))
    assert trie.states == ['q0']
    assert trie.accept_states == {'q0'}
    assert accepts(trie, '')
    assert not accepts(trie, 'a')


def test_empty_language():
    trie = build_trie(Language(('a',), ()))
    assert trie.states == ['q0']
    assert trie.accept_states == frozenset()
    assert not accepts(trie, '')


def test_alphabet_violation(sample_path):
    language = load_language(sample_path('language_bad_symbol.json'))
    with pytest.raises(AlphabetViolation) as excinfo:
        build_trie(language)
    assert excinfo.value.word == 'abc'
    assert excinfo.value.symbol == 'c'


def test_language_requires_alphabet():
    with pytest.raises(MalformedInput) as excinfo:
        build_trie({'accept': ['a']})
    assert excinfo.value.key == 'alphabet'
    with pytest.raises(MalformedInput):
        build_trie({'alphabet': [], 'accept': ['a']})


def test_minimize_merges_suffix_equivalent_states(small_language):
    trie = build_trie(small_language)
    dafsa = minimize_acyclic(trie)
    assert len(dafsa.states) < len(trie.states)
    assert dafsa.states == ['q0', 'q1', 'q2', 'q3', 'q4']
    # q2 and q5 are both final without outgoing edges
    assert dafsa.query(TransPair('q4', 'b')) == {'q2'}
    assert dafsa.accept_states == {'q0', 'q1', 'q2'}
    assert dafsa.start_state == 'q0'


def test_minimize_keeps_language(small_language, all_words):
    trie = build_trie(small_language)
    dafsa = minimize_acyclic(trie)
    for word in all_words('ab', 6):
        assert accepts(trie, word) == accepts(dafsa, word), word


def test_minimize_is_idempotent(small_language):
    dafsa = minimize_acyclic(build_trie(small_language))
    again = minimize_acyclic(dafsa)
    assert len(again.states) == len(dafsa.states)
    assert again == dafsa


def test_minimize_shares_suffixes():
    words = ('tap', 'taps', 'top', 'tops')
    trie = build_trie(Language(tuple('apost'), words))
    dafsa = minimize_acyclic(trie)
    # t -> {a, o} -> p -> (s)
    assert len(trie.states) == 8
    assert len(dafsa.states) == 5
    assert list(language(dafsa, 4)) == ['tap', 'top', 'taps', 'tops']


def test_minimize_deep_word_is_not_recursive():
    word = 'ab' * 3000
    trie = build_trie(Language(('a', 'b'), (word, )))
    dafsa = minimize_acyclic(trie)
    assert len(dafsa.states) == len(word) + 1
    assert accepts(dafsa, word)
    assert not accepts(dafsa, word[:-1])


def test_minimize_rejects_cycles(sample_path):
    dfa = subset_construct(load(sample_path('nfa_q1q2.json')))
    with pytest.raises(UnsupportedFeature):
        minimize_acyclic(dfa)


def test_minimize_rejects_self_loop():
    dfa = Automaton(['s'], 's', ['s'], ['a'], {TransPair('s', 'a'): ['s']})
    assert not dfa.is_acyclic
    with pytest.raises(UnsupportedFeature):
        minimize_acyclic(dfa)


def test_minimize_rejects_nondeterminism(sample_path):
    with pytest.raises(UnsupportedFeature):
        minimize_acyclic(load(sample_path('nfa_q1q2.json')))


def test_minimize_verbose(sample_path, capsys):
    minimize_acyclic(build_trie(load_language(sample_path('language.json'))),
                     verbose=True)
    assert 'MERGED INTO' in capsys.readouterr().out


def test_minimize_keeps_undeclared_target():
    dfa = validate({
        'states': ['q0'],
        'alphabet': ['a'],
        'start': 'q0',
        'accept': ['q1'],
        'transitions': {'q0': {'a': ['q1']}}
    })
    dafsa = minimize_acyclic(dfa)
    assert dafsa.states == ['q0', 'q1']
    assert accepts(dafsa, 'a')
    assert not accepts(dafsa, '')


def test_minimize_keeps_undeclared_start():
    dfa = validate({
        'states': ['q1'],
        'alphabet': ['a'],
        'start': 'q0',
        'accept': ['q1'],
        'transitions': {'q0': {'a': ['q1']}}
    })
    dafsa = minimize_acyclic(dfa)
    assert dafsa.start_state == 'q0'
    assert accepts(dafsa, 'a')
    assert not accepts(dafsa, '')


def test_minimize_undeclared_start_without_moves():
    dfa = Automaton(['q1'], 'q0', ['q1'], ['a'], {})
    dafsa = minimize_acyclic(dfa)
    assert dafsa.start_state == 'q0'
    assert not accepts(dafsa, '')


def test_minimize_dfa_that_is_not_a_trie(all_words):
    # s1 and s2 both reach s4
    dfa = Automaton(['s0', 's1', 's2', 's3', 's4'], 's0', ['s3', 's4'],
                    ['a', 'b'], {
                        TransPair('s0', 'a'): ['s1'],
                        TransPair('s0', 'b'): ['s2'],
                        TransPair('s1', 'a'): ['s3'],
                        TransPair('s1', 'b'): ['s4'],
                        TransPair('s2', 'a'): ['s4'],
                    })
    dafsa = minimize_acyclic(dfa)
    assert dafsa.states == ['s0', 's1', 's2', 's3']
    assert dafsa.query(TransPair('s2', 'a')) == {'s3'}
    for word in all_words('ab', 4):
        assert accepts(dfa, word) == accepts(dafsa, word), word
    assert list(language(dafsa, 4)) == ['aa', 'ab', 'ba']
