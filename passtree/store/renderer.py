from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import List, Sequence, Tuple

from rich.style import Style
from rich.text import Text

from .walker import TreeWalker


INDENT = "    "
BULLET = "*   "
ANCESTOR_STYLE = Style(color="rgb(195,91,156)", bold=True)


def _line(component: str, depth: int) -> str:
    return f"{INDENT * depth}{BULLET}{component}"


class TreeRenderer:
    """Draws a sorted entry listing as an indented tree.

    Shared ancestry between consecutive entries is printed once, so the
    listing must be in the order produced by :class:`TreeWalker`.
    """

    def __init__(self, walker: TreeWalker, colorize: bool = False):
        self.walker = walker
        self.colorize = colorize

    def draw_tree(self, subdirectory: str = "", search_term: str = "") -> str:
        return self.render(self.walker.walk(subdirectory=subdirectory, search_term=search_term))

    def draw_tree_text(self, subdirectory: str = "", search_term: str = "") -> Text:
        return self.render_text(self.walker.walk(subdirectory=subdirectory, search_term=search_term))

    def render(self, entries: Sequence[Path]) -> str:
        return "\n".join(line for line, _is_leaf in self._lines(entries))

    def render_text(self, entries: Sequence[Path]) -> Text:
        """Like :meth:`render`, with ancestor lines styled when colorizing."""
        text = Text()
        for i, (line, is_leaf) in enumerate(self._lines(entries)):
            if i:
                text.append("\n")
            if self.colorize and not is_leaf:
                text.append(line, style=ANCESTOR_STYLE)
            else:
                text.append(line)
        return text

    def _lines(self, entries: Sequence[Path]) -> List[Tuple[str, bool]]:
        out: List[Tuple[str, bool]] = []
        previous = self.walker.resolver.root
        for current in entries:
            out.extend(self._branch(previous, current))
            previous = current
        return out

    def _branch(self, previous: Path, current: Path) -> List[Tuple[str, bool]]:
        resolver = self.walker.resolver
        prev_parts = PurePosixPath(resolver.symbolic_name_for(previous)).parts
        cur_parts = PurePosixPath(resolver.symbolic_name_for(current)).parts
        if not cur_parts:
            return []

        shared = 0
        while shared < len(prev_parts) and shared < len(cur_parts) and prev_parts[shared] == cur_parts[shared]:
            shared += 1
        # Only reachable with duplicate names; the leaf is still drawn.
        shared = min(shared, len(cur_parts) - 1)

        last = len(cur_parts) - 1
        return [(_line(cur_parts[depth], depth), depth == last) for depth in range(shared, len(cur_parts))]
