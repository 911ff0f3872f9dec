"""
Finite-state scanner for C-style comment removal.

The scanner walks the text once. In every state it looks up the first
transition whose token matches at the current position; if none matches,
one character is consumed and copied to the output only in emitting states.

States:
    NORMAL          code outside strings and comments
    LINE_COMMENT    after '//' up to the end of the line
    BLOCK_COMMENT   between '/*' and '*/'
    SINGLE_QUOTE    inside '...'
    DOUBLE_QUOTE    inside "..."
    TEMPLATE        inside `...`
    ESCAPED         after a backslash inside a string; the next character is
                    copied verbatim and the scanner returns to that string

Newlines inside comments are always emitted so that code following a
closing '*/' stays on its own line and line structure is preserved.
"""

from dataclasses import dataclass
from enum import Enum


class ScannerState(Enum):
    NORMAL = "normal"
    LINE_COMMENT = "line_comment"
    BLOCK_COMMENT = "block_comment"
    SINGLE_QUOTE = "single_quote"
    DOUBLE_QUOTE = "double_quote"
    TEMPLATE = "template"
    ESCAPED = "escaped"


@dataclass(frozen=True)
class Transition:
    """
    A state change triggered by a token.

    Attributes:
        token: Text that triggers the transition at the current position
        target: State entered after consuming the token
        emit: Whether the token is copied to the output
    """

    token: str
    target: ScannerState
    emit: bool = True


# States whose unmatched characters are copied to the output
EMITTING_STATES: frozenset[ScannerState] = frozenset([
    ScannerState.NORMAL,
    ScannerState.SINGLE_QUOTE,
    ScannerState.DOUBLE_QUOTE,
    ScannerState.TEMPLATE,
    ScannerState.ESCAPED,
])

STRING_STATES: dict[str, ScannerState] = {
    "'": ScannerState.SINGLE_QUOTE,
    '"': ScannerState.DOUBLE_QUOTE,
    "`": ScannerState.TEMPLATE,
}

ALL_QUOTES = "'\"`"


def build_transition_table(quotes: str = ALL_QUOTES) -> dict[ScannerState, tuple[Transition, ...]]:
    """
    Build the transition table for the given string delimiters.

    Order within a state matters: longer tokens that share a prefix with
    shorter ones ('\\r\\n' vs '\\n') are listed first.
    """
    table: dict[ScannerState, tuple[Transition, ...]] = {
        ScannerState.NORMAL: (
            Transition("//", ScannerState.LINE_COMMENT, emit=False),
            Transition("/*", ScannerState.BLOCK_COMMENT, emit=False),
            *(Transition(q, STRING_STATES[q]) for q in quotes),
        ),
        ScannerState.LINE_COMMENT: (
            Transition("\r\n", ScannerState.NORMAL),
            Transition("\n", ScannerState.NORMAL),
        ),
        ScannerState.BLOCK_COMMENT: (
            Transition("*/", ScannerState.NORMAL, emit=False),
            Transition("\r\n", ScannerState.BLOCK_COMMENT),
            Transition("\n", ScannerState.BLOCK_COMMENT),
        ),
    }
    for quote in quotes:
        table[STRING_STATES[quote]] = (
            Transition("\\", ScannerState.ESCAPED),
            Transition(quote, ScannerState.NORMAL),
        )
    return table


class CStyleScanner:
    """Removes '//' and '/* */' comments while leaving string literals intact."""

    def __init__(self, quotes: str = ALL_QUOTES):
        unknown = set(quotes) - set(STRING_STATES)
        if unknown:
            raise ValueError(f"Unsupported string delimiters: {''.join(sorted(unknown))}")
        self._table = build_transition_table(quotes)

    def match(self, state: ScannerState, text: str, pos: int) -> Transition | None:
        """Return the transition taken from ``state`` at ``text[pos]``, if any."""
        for transition in self._table.get(state, ()):
            if text.startswith(transition.token, pos):
                return transition
        return None

    def strip(self, content: str) -> str:
        out: list[str] = []
        state = ScannerState.NORMAL
        return_state = ScannerState.NORMAL
        pos = 0
        length = len(content)

        while pos < length:
            if state is ScannerState.ESCAPED:
                out.append(content[pos])
                pos += 1
                state = return_state
                continue

            transition = self.match(state, content, pos)
            if transition is None:
                if state in EMITTING_STATES:
                    out.append(content[pos])
                pos += 1
                continue

            if transition.emit:
                out.append(transition.token)
            if transition.target is ScannerState.ESCAPED:
                return_state = state
            state = transition.target
            pos += len(transition.token)

        return "".join(out)
