"""LR(1) grammar analysis, table construction and shift-reduce parsing."""

from __future__ import annotations

import re
import string
from dataclasses import dataclass, field

EPSILON = "@"
END_SIGN = "$"
AUGMENTED_START = "S"
END_MARKER = "#"


def is_terminal(symbol: str) -> bool | None:
    """Return False for nonterminals (upper case), None for epsilon, True otherwise."""
    if "A" <= symbol <= "Z":
        return False
    if symbol != EPSILON:
        return True
    return None


@dataclass(frozen=True)
class Production:
    """A production ``lhs -> rhs`` where every character of rhs is a symbol."""

    lhs: str
    rhs: str

    def __str__(self) -> str:
        return f"{self.lhs}->{self.rhs}"


@dataclass
class Grammar:
    """A context-free grammar augmented with production 0: ``S -> start``."""

    productions: list[Production]
    terminals: set[str] = field(default_factory=set)
    nonterminals: set[str] = field(default_factory=set)

    def first_sets(self) -> dict[str, set[str]]:
        """Compute FIRST sets of the nonterminals by fixed-point iteration."""
        first: dict[str, set[str]] = {}
        changed = True
        while changed:
            changed = False
            for production in self.productions[1:]:
                left, rhs = production.lhs, production.rhs
                left_first = first.setdefault(left, set())
                index = 0
                may_vanish = True
                while may_vanish and index < len(rhs):
                    may_vanish = False
                    right = rhs[index]
                    if is_terminal(right) is False:
                        right_first = first.get(right, set())
                        for symbol in sorted(right_first - {EPSILON}):
                            if symbol not in left_first:
                                left_first.add(symbol)
                                changed = True
                        if EPSILON in right_first:
                            may_vanish = True
                            index += 1
                    elif right not in left_first:
                        left_first.add(right)
                        changed = True
                if index == len(rhs):
                    left_first.add(EPSILON)
        return first


def parse_grammar(text: str) -> Grammar:
    """Read a count followed by productions ``A->xyz$``; whitespace is ignored."""
    match = re.match(r"\s*(\d+)", text)
    if match is None:
        raise ValueError("grammar must start with the number of productions")
    count = int(match.group(1))
    symbols = iter(ch for ch in text[match.end():] if not ch.isspace())

    def take() -> str:
        try:
            return next(symbols)
        except StopIteration:
            raise ValueError("unexpected end of grammar") from None

    productions: list[Production] = []
    grammar = Grammar(productions)

    def note(symbol: str) -> None:
        kind = is_terminal(symbol)
        if kind is False:
            grammar.nonterminals.add(symbol)
        elif kind is True:
            grammar.terminals.add(symbol)

    for _ in range(count):
        left = take()
        take()
        take()
        note(left)
        rhs = []
        symbol = take()
        while symbol != END_SIGN:
            rhs.append(symbol)
            note(symbol)
            symbol = take()
        productions.append(Production(left, "".join(rhs)))

    if not productions:
        raise ValueError("grammar has no productions")
    productions.insert(0, Production(AUGMENTED_START, productions[0].lhs))
    return grammar


@dataclass(frozen=True)
class Item:
    """An LR(1) item: production number, dot position and lookahead."""

    production: int
    dot: int
    lookahead: str


@dataclass(frozen=True)
class Transition:
    """A goto edge between two item sets."""

    source: int
    target: int
    symbol: str


@dataclass(frozen=True)
class Action:
    """Positive target: shift/goto; zero: accept; negative: reduce by -target."""

    symbol: str
    target: int


@dataclass
class TreeNode:
    """A node of the parse tree."""

    id: int
    value: str
    parent: int | None = None
    children: list[int] = field(default_factory=list)


@dataclass
class ParseStep:
    """One line of the parse procedure."""

    number: int
    states: tuple[int, ...]
    signs: str
    action: str | None = None


@dataclass
class ParseResult:
    """Steps taken by an accepted parse and the tree nodes built."""

    steps: list[ParseStep]
    nodes: list[TreeNode]

    @property
    def root(self) -> TreeNode:
        return self.nodes[-1]


class ParseError(Exception):
    """Raised when the input is not accepted by the grammar."""

    def __init__(self, message: str, expected: list[str] | None = None,
                 steps: list[ParseStep] | None = None) -> None:
        super().__init__(message)
        self.expected = expected or []
        self.steps = steps or []


class Parser:
    """Canonical LR(1) parser built from a grammar."""

    def __init__(self, grammar: Grammar) -> None:
        self.grammar = grammar
        self.first = grammar.first_sets()
        self.states: list[list[Item]] = []
        self.transitions: list[Transition] = []
        self._build_item_sets()
        self.actions = self._build_actions()

    def _rhs(self, item: Item) -> str:
        return self.grammar.productions[item.production].rhs

    def _symbol_after_dot(self, item: Item) -> str | None:
        rhs = self._rhs(item)
        return rhs[item.dot] if item.dot < len(rhs) else None

    def _lookaheads(self, item: Item) -> list[str]:
        rhs = self._rhs(item)
        result: list[str] = []
        index = item.dot + 1
        while True:
            if index == len(rhs):
                result.append(item.lookahead)
                return result
            symbol = rhs[index]
            if is_terminal(symbol) is True:
                result.append(symbol)
                return result
            symbol_first = self.first.get(symbol, set())
            result.extend(sorted(symbol_first - {EPSILON}))
            if EPSILON not in symbol_first:
                return result
            index += 1

    def _closure(self, items: list[Item]) -> None:
        for item in items:
            symbol = self._symbol_after_dot(item)
            if symbol is None or is_terminal(symbol) is not False:
                continue
            lookaheads = self._lookaheads(item)
            for number, production in enumerate(self.grammar.productions):
                if production.lhs != symbol:
                    continue
                for lookahead in lookaheads:
                    new = Item(number, 0, lookahead)
                    if new not in items:
                        items.append(new)

    def _goto(self, symbols: set[str], source: int) -> None:
        for symbol in sorted(symbols):
            kernel: list[Item] = []
            for item in self.states[source]:
                if self._symbol_after_dot(item) == symbol:
                    moved = Item(item.production, item.dot + 1, item.lookahead)
                    if moved not in kernel:
                        kernel.append(moved)
            if not kernel:
                continue
            self._closure(kernel)
            try:
                target = self.states.index(kernel)
            except ValueError:
                target = len(self.states)
                self.states.append(kernel)
            self.transitions.append(Transition(source, target, symbol))

    def _build_item_sets(self) -> None:
        start = [Item(0, 0, END_MARKER)]
        self._closure(start)
        self.states.append(start)
        index = 0
        while index < len(self.states):
            self._goto(self.grammar.nonterminals, index)
            self._goto(self.grammar.terminals, index)
            index += 1

    def _build_actions(self) -> list[list[Action]]:
        table: list[list[Action]] = [[] for _ in self.states]
        for number, items in enumerate(self.states):
            for item in items:
                symbol = self._symbol_after_dot(item)
                if symbol is None or symbol == EPSILON:
                    table[number].append(Action(item.lookahead, -item.production))
        for edge in self.transitions:
            table[edge.source].append(Action(edge.symbol, edge.target))
        return table

    def parse(self, symbols: str) -> ParseResult:
        """Parse a symbol string ending in ``#``; raise ParseError if rejected."""
        productions = self.grammar.productions
        nodes = [TreeNode(0, END_MARKER)]
        state_stack = [0]
        sign_stack = [nodes[0]]
        steps: list[ParseStep] = []
        pos = 0

        while sign_stack[-1].value != AUGMENTED_START:
            current = state_stack[-1]
            ch = symbols[pos] if pos < len(symbols) else ""
            pos += 1
            step = ParseStep(len(steps), tuple(state_stack),
                             "".join(node.value for node in sign_stack))
            steps.append(step)

            action = next((a for a in self.actions[current] if a.symbol == ch), None)
            if action is None:
                expected = [a.symbol for a in self.actions[current]]
                raise ParseError(f"input rejected at {ch!r}; expected one of "
                                 f"{' '.join(expected)}", expected, steps)
            if action.target > 0:
                step.action = f"s{action.target}"
                node = TreeNode(len(nodes), ch)
                nodes.append(node)
                sign_stack.append(node)
                state_stack.append(action.target)
                continue
            if action.target == 0:
                step.action = "Accept"
                return ParseResult(steps, nodes)

            number = -action.target
            production = productions[number]
            pos -= 1
            step.action = f"r{number}"
            count = len(production.rhs)
            if count >= len(sign_stack):
                raise ParseError("symbol stack exhausted during reduction", [], steps)
            popped = sign_stack[-count:] if count else []
            del sign_stack[len(sign_stack) - count:]
            del state_stack[len(state_stack) - count:]

            parent = TreeNode(len(nodes), production.lhs)
            for child in popped:
                parent.children.append(child.id)
                child.parent = parent.id
            nodes.append(parent)
            sign_stack.append(parent)

            goto = next((a.target for a in self.actions[state_stack[-1]]
                         if a.symbol == parent.value), None)
            if goto is None:
                raise ParseError("no GOTO action found", [], steps)
            state_stack.append(goto)

        return ParseResult(steps, nodes)

    def format_first(self) -> str:
        """Render FIRST sets of nonterminals A..Z."""
        lines = []
        for symbol in string.ascii_uppercase:
            symbols = self.first.get(symbol)
            if symbols:
                body = "".join(f"{s}," for s in sorted(symbols))
                lines.append(f"FIRST({symbol})={{{body}}}\n")
        return "".join(lines)

    def format_items(self) -> str:
        """Render every item set with dotted productions and lookaheads."""
        lines = []
        bar = "-" * 25
        for number, items in enumerate(self.states):
            lines.append(f"{bar}I{number}{bar}\n")
            for item in items:
                production = self.grammar.productions[item.production]
                rhs = production.rhs[:item.dot] + "·" + production.rhs[item.dot:]
                lines.append(f"{production.lhs}->{rhs},    outlook: {item.lookahead}\n")
        return "".join(lines)

    def format_actions(self) -> str:
        """Render the action table, one entry per line."""
        lines = []
        for number, actions in enumerate(self.actions):
            for action in actions:
                if action.target > 0:
                    lines.append(f"({number},{action.symbol},{action.target}, shift )\n")
                else:
                    lines.append(f"({number},{action.symbol},{-action.target}, reduce )\n")
        return "".join(lines)


def format_procedure(steps: list[ParseStep]) -> str:
    """Render the parse procedure as a table."""
    out = ["step\t\tstate\t\tsymbol\t\tinput\t\tACTION\t\tGOTO\n", "-" * 88 + "\n"]
    for step in steps:
        states = "".join(f"{s}," for s in step.states)
        line = f"{step.number}\t\t\n#{states}\t\t{step.signs}"
        if step.action is not None:
            line += f"\t\t{step.action}\n"
        out.append(line)
    return "".join(out)