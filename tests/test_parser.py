import pytest

from simicc.parser import (
    ParseError,
    Parser,
    format_procedure,
    is_terminal,
    parse_grammar,
)

CC_GRAMMAR = "3\nP->CC$\nC->cC$\nC->d$\n"


@pytest.fixture
def parser():
    return Parser(parse_grammar(CC_GRAMMAR))


def test_is_terminal():
    assert is_terminal("A") is False
    assert is_terminal("a") is True
    assert is_terminal("@") is None


def test_parse_grammar_augments():
    grammar = parse_grammar(CC_GRAMMAR)
    assert str(grammar.productions[0]) == "S->P"
    assert [str(p) for p in grammar.productions[1:]] == ["P->CC", "C->cC", "C->d"]
    assert grammar.terminals == {"c", "d"}
    assert grammar.nonterminals == {"P", "C"}


def test_parse_grammar_errors():
    with pytest.raises(ValueError):
        parse_grammar("x")
    with pytest.raises(ValueError):
        parse_grammar("1\nP->ab")


def test_first_sets_with_epsilon():
    first = parse_grammar("2\nP->aB$\nB->@$").first_sets()
    assert first["B"] == {"@"}
    assert first["P"] == {"a"}


def test_format_first(parser):
    assert parser.format_first() == "FIRST(C)={c,d,}\nFIRST(P)={c,d,}\n"


def test_canonical_collection_size(parser):
    assert len(parser.states) == 10
    assert len(set(map(tuple, parser.states))) == len(parser.states)


def test_accepts_and_builds_tree(parser):
    result = parser.parse("cdd#")
    assert result.steps[-1].action == "Accept"
    root = result.root
    assert root.value == "P"
    assert root.parent is None
    for node in result.nodes[1:-1]:
        assert node.parent is not None
        assert node.id in result.nodes[node.parent].children