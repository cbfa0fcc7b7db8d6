"""Regular grammars, their NFA and the DFA built by subset construction."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Iterable

FINAL_STATE = "#"
EPSILON = "@"


class _Reader:
    """Reads single characters and words from text, skipping whitespace."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0

    def _skip_space(self) -> None:
        while self._pos < len(self._text) and self._text[self._pos].isspace():
            self._pos += 1

    def char(self) -> str:
        self._skip_space()
        if self._pos >= len(self._text):
            raise ValueError("unexpected end of grammar")
        ch = self._text[self._pos]
        self._pos += 1
        return ch

    def word(self) -> str:
        self._skip_space()
        start = self._pos
        while self._pos < len(self._text) and not self._text[self._pos].isspace():
            self._pos += 1
        if start == self._pos:
            raise ValueError("unexpected end of grammar")
        return self._text[start:self._pos]


@dataclass
class NFA:
    """Nondeterministic automaton read from a right-linear grammar."""

    start: str
    states: set[str] = field(default_factory=set)
    terminals: set[str] = field(default_factory=set)
    transitions: dict[tuple[str, str], set[str]] = field(default_factory=dict)

    def targets(self, state: str, symbol: str) -> frozenset[str]:
        return frozenset(self.transitions.get((state, symbol), ()))

    def epsilon_closure(self, states: Iterable[str]) -> frozenset[str]:
        """Return the states reachable from the given ones by epsilon moves."""
        closure = set(states)
        pending = list(closure)
        while pending:
            state = pending.pop()
            for target in self.targets(state, EPSILON):
                if target not in closure:
                    closure.add(target)
                    pending.append(target)
        return frozenset(closure)


def parse_regular_grammar(text: str) -> NFA:
    """Build an NFA from a grammar: a count followed by productions ``A->aB``."""
    reader = _Reader(text)
    try:
        count = int(reader.word())
    except ValueError as exc:
        raise ValueError("grammar must start with the number of productions") from exc

    nfa: NFA | None = None
    for _ in range(count):
        left = reader.char()
        reader.char()
        reader.char()
        right = reader.word()
        if nfa is None:
            nfa = NFA(start=left)
        nfa.states.add(left)
        nfa.terminals.add(right[0])
        target = right[1] if len(right) > 1 else FINAL_STATE
        nfa.transitions.setdefault((left, right[0]), set()).add(target)

    if nfa is None:
        raise ValueError("grammar has no productions")
    return nfa


@dataclass
class DFA:
    """Deterministic automaton whose states are sets of NFA states."""

    states: list[frozenset[str]]
    finals: set[int]
    transitions: dict[int, dict[str, int]]

    @classmethod
    def from_nfa(cls, nfa: NFA) -> DFA:
        """Run the subset construction over the NFA's terminals in sorted order."""
        start = nfa.epsilon_closure({nfa.start})
        states = [start]
        index = {start: 0}
        finals = {0} if FINAL_STATE in start else set()
        transitions: dict[int, dict[str, int]] = {}
        queue = deque([start])

        while queue:
            current = queue.popleft()
            current_id = index[current]
            for symbol in sorted(nfa.terminals):
                moved: set[str] = set()
                for state in sorted(current):
                    moved |= nfa.targets(state, symbol)
                target = nfa.epsilon_closure(moved)
                if not target:
                    continue
                known = index.get(target)
                # A transition is recorded only toward a state that was
                # already known when it was reached.
                if known is None:
                    index[target] = len(states)
                    states.append(target)
                    queue.append(target)
                    if FINAL_STATE in target:
                        finals.add(index[target])
                elif symbol != EPSILON:
                    transitions.setdefault(current_id, {})[symbol] = known

        return cls(states, finals, transitions)

    def accepts(self, word: str) -> bool:
        """Return True if running the word from the start state ends in a final state."""
        state = 0
        for ch in word:
            next_state = self.transitions.get(state, {}).get(ch)
            if next_state is None:
                return False
            state = next_state
        return state in self.finals