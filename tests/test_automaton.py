import string

import pytest

from simicc.automaton import DFA, EPSILON, FINAL_STATE, NFA, parse_regular_grammar


def _looping_grammar(alphabet):
    lines = [f"S->{c}S" for c in alphabet] + ["S->@"]
    return f"{len(lines)}\n" + "\n".join(lines) + "\n"


def test_parse_regular_grammar_reads_productions():
    nfa = parse_regular_grammar("3\nS -> aS\nS -> bA\nA -> c\n")
    assert nfa.start == "S"
    assert nfa.states == {"S", "A"}
    assert nfa.terminals == {"a", "b", "c"}
    assert nfa.transitions[("S", "a")] == {"S"}
    assert nfa.transitions[("S", "b")] == {"A"}
    assert nfa.transitions[("A", "c")] == {FINAL_STATE}


def test_parse_regular_grammar_without_spaces():
    nfa = parse_regular_grammar("1\nS->xS")
    assert nfa.transitions[("S", "x")] == {"S"}


def test_parse_regular_grammar_rejects_missing_count():
    with pytest.raises(ValueError):
        parse_regular_grammar("S -> aS")


def test_parse_regular_grammar_rejects_truncated_text():
    with pytest.raises(ValueError):
        parse_regular_grammar("2\nS -> aS\n")


def test_epsilon_closure_follows_chains():
    nfa = parse_regular_grammar("3\nS->@A\nA->@B\nB->b\n")
    assert nfa.epsilon_closure({"S"}) == frozenset({"S", "A", "B"})
    assert nfa.epsilon_closure({"B"}) == frozenset({"B"})


def test_epsilon_closure_contains_its_input():
    nfa = NFA(start="S", transitions={("S", EPSILON): {"T"}})
    closure = nfa.epsilon_closure({"S", "X"})
    assert {"S", "X", "T"} <= closure


def test_dfa_start_state_is_closure_of_start():
    nfa = parse_regular_grammar(_looping_grammar("ab"))
    dfa = DFA.from_nfa(nfa)
    assert dfa.states[0] == nfa.epsilon_closure({nfa.start})
    assert 0 in dfa.finals


def test_dfa_accepts_words_over_alphabet():
    dfa = DFA.from_nfa(parse_regular_grammar(_looping_grammar(string.ascii_letters + string.digits)))
    for word in ["a", "abc", "x1y2", "Z9"]:
        assert dfa.accepts(word)


def test_dfa_rejects_unknown_symbols():
    dfa = DFA.from_nfa(parse_regular_grammar(_looping_grammar(string.ascii_lowercase)))
    assert not dfa.accepts("a1")
    assert not dfa.accepts("a_b")


def test_dfa_accepts_empty_word_when_start_is_final():
    dfa = DFA.from_nfa(parse_regular_grammar(_looping_grammar("a")))
    assert dfa.accepts("")


def test_dfa_states_are_distinct():
    dfa = DFA.from_nfa(parse_regular_grammar("3\nS -> aS\nS -> bA\nA -> c\n"))
    assert len(set(dfa.states)) == len(dfa.states)
    assert all(state for state in dfa.states)
    for state_id, row in dfa.transitions.items():
        assert 0 <= state_id < len(dfa.states)
        assert all(0 <= target < len(dfa.states) for target in row.values())


def test_dfa_finals_hold_final_marker():
    dfa = DFA.from_nfa(parse_regular_grammar("3\nS -> aS\nS -> bA\nA -> c\n"))
    for state_id in dfa.finals:
        assert FINAL_STATE in dfa.states[state_id]