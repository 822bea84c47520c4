"""Recursive-descent parser and writer for Newick tree text.

Grammar accepted by the parser:

    subtree := '(' subtree (',' subtree)* ')' label? length?
             | label length?
    label   := quoted-string | bare-token
    length  := ':' signed-float

Whitespace and ``[...]`` comments may appear between any two tokens and
are skipped together. A trailing ``;`` ends the tree and is optional.
The result is an n-ary ``ParseNode`` tree; single-child nodes are kept as
they are and resolved later by the binarizer.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

from geophylo.core.constants import (
    BRANCH_LENGTH_CHARS,
    COMMENT_CLOSE,
    COMMENT_OPEN,
    NEWICK_DELIMITERS,
    QUOTE,
    TREE_TERMINATOR,
)
from geophylo.core.exceptions import TreeSyntaxError

logger = logging.getLogger(__name__)


@dataclass
class ParseNode:
    """N-ary node of a freshly parsed tree.

    Attributes:
        children: Ordered child nodes; empty for a leaf.
        label: Raw label text, None when the node has none.
        length: Branch length to the parent, None when absent.
    """

    children: list[ParseNode] = field(default_factory=list)
    label: str | None = None
    length: float | None = None

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def iter_preorder(self) -> Iterator[ParseNode]:
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def iter_leaves(self) -> Iterator[ParseNode]:
        """Yield leaves left to right."""
        return (node for node in self.iter_preorder() if node.is_leaf)

    def count_internal(self) -> int:
        return sum(1 for node in self.iter_preorder() if not node.is_leaf)


class NewickParser:
    """Single-use parser over one Newick string."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def parse(self) -> ParseNode:
        """Parse the whole input into a ParseNode root.

        Raises:
            TreeSyntaxError: On malformed input, with the character offset.
        """
        root = self._parse_subtree()
        self._skip_ignorables()
        if self._at_end():
            return root
        if self._peek() != TREE_TERMINATOR:
            raise TreeSyntaxError(f"Unexpected {self._peek()!r} after root subtree", self.pos)
        self.pos += 1
        self._skip_ignorables()
        if not self._at_end():
            logger.warning(
                f"Ignoring {len(self.text) - self.pos} characters after tree terminator"
            )
        return root

    # -------------------------------------------------------------------------
    # Grammar rules
    # -------------------------------------------------------------------------

    def _parse_subtree(self) -> ParseNode:
        self._skip_ignorables()
        if self._at_end():
            raise TreeSyntaxError("Unexpected end of Newick string", self.pos)

        if self._peek() == "(":
            self.pos += 1
            children = [self._parse_subtree()]
            self._skip_ignorables()
            while self._peek() == ",":
                self.pos += 1
                children.append(self._parse_subtree())
                self._skip_ignorables()
            self._expect(")")
            label = self._parse_optional_label()
            length = self._parse_optional_length()
            return ParseNode(children, label, length)

        label = self._parse_label()
        length = self._parse_optional_length()
        return ParseNode([], label, length)

    def _parse_optional_label(self) -> str | None:
        self._skip_ignorables()
        if self._at_end() or self._peek() in ":,);":
            return None
        return self._parse_label()

    def _parse_label(self) -> str | None:
        self._skip_ignorables()
        if self._peek() == QUOTE:
            return self._parse_quoted()

        start = self.pos
        while not self._at_end():
            ch = self.text[self.pos]
            if ch in NEWICK_DELIMITERS or ch.isspace():
                break
            self.pos += 1
        return self.text[start:self.pos] or None

    def _parse_quoted(self) -> str:
        start = self.pos
        self.pos += 1
        chars: list[str] = []
        while not self._at_end():
            ch = self.text[self.pos]
            if ch == QUOTE:
                if self.text.startswith(QUOTE * 2, self.pos):
                    chars.append(QUOTE)
                    self.pos += 2
                    continue
                self.pos += 1
                return "".join(chars)
            chars.append(ch)
            self.pos += 1
        raise TreeSyntaxError("Unterminated quoted label", start)

    def _parse_optional_length(self) -> float | None:
        self._skip_ignorables()
        if self._peek() != ":":
            return None
        self.pos += 1
        self._skip_ignorables()
        start = self.pos
        while not self._at_end() and self.text[self.pos] in BRANCH_LENGTH_CHARS:
            self.pos += 1
        number = self.text[start:self.pos]
        if not number:
            return None
        try:
            return float(number)
        except ValueError:
            raise TreeSyntaxError(f"Invalid branch length {number!r}", start) from None

    # -------------------------------------------------------------------------
    # Scanning helpers
    # -------------------------------------------------------------------------

    def _skip_ignorables(self) -> None:
        """Skip whitespace and [...] comments until neither is next."""
        progressed = True
        while progressed:
            progressed = False
            while not self._at_end() and self.text[self.pos].isspace():
                self.pos += 1
                progressed = True
            if self._peek() == COMMENT_OPEN:
                close = self.text.find(COMMENT_CLOSE, self.pos + 1)
                if close < 0:
                    raise TreeSyntaxError("Unterminated comment", self.pos)
                self.pos = close + 1
                progressed = True

    def _expect(self, expected: str) -> None:
        self._skip_ignorables()
        if self._peek() != expected:
            raise TreeSyntaxError(f"Expected {expected!r}", self.pos)
        self.pos += 1

    def _peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def _at_end(self) -> bool:
        return self.pos >= len(self.text)


def parse_newick(text: str) -> ParseNode:
    """Parse Newick text into a ParseNode tree.

    Args:
        text: Newick string, optionally terminated by ';'.

    Returns:
        Root of the parsed n-ary tree.

    Raises:
        TreeSyntaxError: If the text is not valid Newick.
    """
    return NewickParser(text).parse()


# =============================================================================
# Writer
# =============================================================================


def quote_label(label: str) -> str:
    """Quote a label if the bare form would not parse back identically."""
    needs_quotes = (
        not label
        or label.startswith(QUOTE)
        or any(ch in NEWICK_DELIMITERS or ch.isspace() for ch in label)
    )
    if not needs_quotes:
        return label
    return QUOTE + label.replace(QUOTE, QUOTE * 2) + QUOTE


def _format_node(node: ParseNode) -> str:
    text = ""
    if not node.is_leaf:
        parts = []
        for child in node.children:
            parts.append(_format_node(child))
        text = "(" + ",".join(parts) + ")"
    if node.label is not None:
        text += quote_label(node.label)
    if node.length is not None:
        text += f":{node.length!r}"
    return text


def to_newick(node: ParseNode) -> str:
    """Serialize a ParseNode tree back to Newick, terminated by ';'.

    Lengths are written with repr() so they parse back to the same float.
    """
    return _format_node(node) + TREE_TERMINATOR
