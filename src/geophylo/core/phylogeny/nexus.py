"""Extract the translate table and first tree statement from NEXUS text.

The NEXUS layer does not parse NEXUS in general. It scans lines for a
``translate`` block and for the first ``tree <name> = <newick>;``
statement, then hands the Newick part to the Newick parser. Scanning is an
explicit state machine so that the ``;`` termination rules can be tested
without any file I/O.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from enum import Enum
from types import MappingProxyType
from typing import NamedTuple

from geophylo.core.constants import QUOTE, TREE_TERMINATOR
from geophylo.core.exceptions import NexusTreeNotFoundError

logger = logging.getLogger(__name__)

TranslateTable = Mapping[str, str]

EMPTY_TRANSLATE: TranslateTable = MappingProxyType({})

_TRANSLATE_KEYWORD = re.compile(r"\btranslate\b", re.IGNORECASE)
_TREE_STATEMENT = re.compile(r"\s*tree\b[^=]*=", re.IGNORECASE)


class ScanState(str, Enum):
    """States of the NEXUS line scanner."""

    SEEKING = "seeking"
    IN_TRANSLATE_BLOCK = "in_translate_block"
    IN_TREE_STATEMENT = "in_tree_statement"
    DONE = "done"


class NexusData(NamedTuple):
    """Newick text of the first tree plus its translate table."""

    newick: str
    translate: TranslateTable


class NexusScanner:
    """Line-fed state machine collecting translate and tree text.

    Feed lines with ``feed()`` until ``done`` is True or input runs out.
    Only the first translate block and the first tree statement are
    collected; later ones are ignored.

    Example:
        >>> scanner = NexusScanner()
        >>> for line in ["translate 1 Alpha,", "2 Beta;", "tree t = (1,2);"]:
        ...     scanner.feed(line)
        >>> scanner.tree_text
        '(1,2)'
    """

    def __init__(self) -> None:
        self.state = ScanState.SEEKING
        self._translate_parts: list[str] = []
        self._tree_parts: list[str] = []
        self._translate_seen = False

    @property
    def done(self) -> bool:
        return self.state is ScanState.DONE

    @property
    def translate_text(self) -> str:
        return " ".join(self._translate_parts)

    @property
    def tree_text(self) -> str:
        return " ".join(self._tree_parts).strip()

    def feed(self, line: str) -> None:
        """Consume one line of input."""
        segment = line.strip()
        if segment and not self.done:
            self._consume(segment)

    def _consume(self, segment: str) -> None:
        if self.state is ScanState.SEEKING:
            tree_match = _TREE_STATEMENT.match(segment)
            if tree_match:
                self._transition(ScanState.IN_TREE_STATEMENT)
                self._consume(segment[tree_match.end():])
                return
            keyword = None if self._translate_seen else _TRANSLATE_KEYWORD.search(segment)
            if keyword:
                self._translate_seen = True
                self._transition(ScanState.IN_TRANSLATE_BLOCK)
                self._consume(segment[keyword.end():])
            return

        if self.state is ScanState.IN_TRANSLATE_BLOCK:
            body, terminator, rest = segment.partition(TREE_TERMINATOR)
            self._append(self._translate_parts, body)
            if terminator:
                self._transition(ScanState.SEEKING)
                if rest.strip():
                    self._consume(rest.strip())
            return

        if self.state is ScanState.IN_TREE_STATEMENT:
            body, terminator, _ = segment.partition(TREE_TERMINATOR)
            self._append(self._tree_parts, body)
            if terminator:
                self._transition(ScanState.DONE)

    @staticmethod
    def _append(parts: list[str], text: str) -> None:
        text = text.strip()
        if text:
            parts.append(text)

    def _transition(self, state: ScanState) -> None:
        logger.debug(f"NEXUS scanner: {self.state.value} -> {state.value}")
        self.state = state


def _skip_separators(block: str, i: int) -> int:
    while i < len(block) and (block[i].isspace() or block[i] in ",;"):
        i += 1
    return i


def parse_translate_entries(block: str) -> TranslateTable:
    """Parse ``<digits> <name>`` pairs from the body of a translate block.

    Names are either single-quoted (``''`` for a literal quote) or run to
    the next ``,`` or ``;``. Text that does not start with digits is
    skipped one character at a time.

    Args:
        block: Translate block body without the ``translate`` keyword.

    Returns:
        Read-only mapping from numeric token to display name.
    """
    table: dict[str, str] = {}
    i = 0
    while True:
        i = _skip_separators(block, i)
        if i >= len(block):
            break

        start = i
        while i < len(block) and block[i].isdigit():
            i += 1
        if start == i:
            i += 1
            continue
        key = block[start:i]

        while i < len(block) and block[i].isspace():
            i += 1

        if i < len(block) and block[i] == QUOTE:
            i += 1
            chars: list[str] = []
            while i < len(block):
                if block[i] == QUOTE:
                    if block.startswith(QUOTE * 2, i):
                        chars.append(QUOTE)
                        i += 2
                        continue
                    i += 1
                    break
                chars.append(block[i])
                i += 1
            value = "".join(chars)
        else:
            name_start = i
            while i < len(block) and block[i] not in ",;":
                i += 1
            value = block[name_start:i].strip()

        if value:
            table[key] = value

    return MappingProxyType(table)


def scan_nexus(lines: Iterable[str], source: str = "<text>") -> NexusData:
    """Run the scanner over NEXUS lines.

    Args:
        lines: Lines of the NEXUS document.
        source: Name used in error messages.

    Returns:
        NexusData with the first tree's Newick text (without ';') and the
        translate table (empty when the document has none).

    Raises:
        NexusTreeNotFoundError: If no non-empty tree statement is found.
    """
    scanner = NexusScanner()
    for line in lines:
        scanner.feed(line)
        if scanner.done:
            break

    newick = scanner.tree_text
    if not newick:
        raise NexusTreeNotFoundError(source)

    translate = parse_translate_entries(scanner.translate_text)
    logger.debug(f"NEXUS translate table has {len(translate)} entries")
    return NexusData(newick=newick, translate=translate)
