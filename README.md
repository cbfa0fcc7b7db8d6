# simicc

Building blocks for the front end of a small C-like language:

- `simicc.automaton` reads a right-linear (regular) grammar into an NFA.
  It then turns that NFA into a DFA by subset construction.
- `simicc.parser` reads a context-free grammar and computes its FIRST sets.
  From the grammar it builds canonical LR(1) item sets and an ACTION/GOTO
  table. It then runs a shift-reduce parse over a string of grammar symbols
  and builds a parse tree as it goes.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Automata

`parse_regular_grammar(text)` expects the number of productions first,
followed by the productions themselves, such as `A->aB` or `A->a`:

- The left side of the first production is the start state.
- The first character of a right side is the input symbol.
- The second character, if there is one, is the next state. A right side of
  one character leads to the final state `#`.
- `@` marks an epsilon move.

```python
from simicc.automaton import DFA, parse_regular_grammar

nfa = parse_regular_grammar(grammar_text)
nfa.epsilon_closure({nfa.start})   # frozenset of NFA states

dfa = DFA.from_nfa(nfa)
dfa.accepts("abc")                 # True if the run ends in a final state
```

`DFA.from_nfa` numbers its states from 0, which is the start state, and
processes the NFA's terminals in sorted order. `DFA.states` holds the NFA
state set behind each DFA state, `DFA.finals` the numbers of the accepting
ones, and `DFA.transitions` maps a state number and a symbol to the next
state.

## LR(1) parsing

In a context-free grammar for `parse_grammar(text)`:

- upper-case letters are non-terminals;
- `@` stands for the empty string;
- every other character is a terminal;
- each right-hand side ends with `$`;
- whitespace is ignored.

The text starts with the number of productions. The grammar is augmented with
production 0, `S -> <start>`, so `S` should not be used as an ordinary
non-terminal.

```python
from simicc.parser import Parser, ParseError, format_procedure, parse_grammar

grammar = parse_grammar("3 E->E+T$ E->T$ T->i$")
grammar.first_sets()          # {'E': {...}, 'T': {...}}

parser = Parser(grammar)
print(parser.format_first())    # FIRST(X)={...} for every non-terminal
print(parser.format_items())    # the item sets I0, I1, ... with lookaheads
print(parser.format_actions())  # (state,symbol,target, shift|reduce) lines

try:
    result = parser.parse("i+i#")
except ParseError as err:
    print(err, err.expected)
else:
    print(format_procedure(result.steps))
    print(result.root)
```

`Parser.parse` takes the input as a string of terminal symbols ending in `#`.
It returns a `ParseResult` that holds two things:

- `steps`, a list of `ParseStep`, each with the state stack, the symbol stack
  and the action taken;
- `nodes`, the `TreeNode`s of the parse tree, each with its `parent` and
  `children` ids.

When the input is rejected, the parser raises `ParseError`. The error's
`expected` attribute holds the symbols the parser could have accepted at that
point, and its `steps` attribute holds the steps taken up to the failure.

`is_terminal(symbol)` returns `False` for a non-terminal, `None` for `@` and
`True` for any other symbol.

## What this package does not do

The package has no command-line program and no tokeniser for program source
text. It does not read a C-like source file or split it into keywords,
numbers, operators and identifiers, and it writes no product files. The
caller supplies the grammars and the symbol string to be parsed.