"""Column definitions and a store that keeps their ranges from overlapping."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator

from sheetcells.cell import GENERAL_FORMAT, CellType

COL_WIDTH = 9.5
EXCEL_2006_MAX_ROW_COUNT = 1048576
EXCEL_2006_MAX_ROW_INDEX = EXCEL_2006_MAX_ROW_COUNT - 1

STRING_FORMAT = "@"
INT_FORMAT = "0"

_FORMAT_FOR_TYPE = {
    CellType.STRING: STRING_FORMAT,
    CellType.NUMERIC: INT_FORMAT,
    CellType.BOOL: GENERAL_FORMAT,
    CellType.INLINE: STRING_FORMAT,
    CellType.ERROR: GENERAL_FORMAT,
    # Date-typed cells are stored as numbers with a date format instead.
    CellType.DATE: GENERAL_FORMAT,
    CellType.STRING_FORMULA: STRING_FORMAT,
}


@dataclass(eq=False)
class Col:
    """Settings shared by the columns ``min`` to ``max`` inclusive."""

    min: int = 0
    max: int = 0
    hidden: bool = False
    width: float = 0.0
    collapsed: bool = False
    outline_level: int = 0
    best_fit: bool = False
    custom_width: bool = False
    phonetic: bool = False
    num_fmt: str = ""
    parsed_num_fmt: Any = None
    style: Any = None
    out_xf_id: int = 0

    def set_width(self, width: float) -> None:
        """Set the width in characters of the widest digit."""
        self.width = width
        self.custom_width = True

    def set_type(self, cell_type: CellType) -> None:
        """Pick the number format that suits the given cell type."""
        fmt = _FORMAT_FOR_TYPE.get(cell_type)
        if fmt is not None:
            self.num_fmt = fmt

    def set_style(self, style: Any) -> None:
        self.style = style

    def set_outline_level(self, outline_level: int) -> None:
        self.outline_level = outline_level

    def copy_to_range(self, min_col: int, max_col: int) -> Col:
        """Return a copy of this column covering a different range."""
        return Col(
            min=min_col,
            max=max_col,
            hidden=self.hidden,
            width=self.width,
            collapsed=self.collapsed,
            outline_level=self.outline_level,
            best_fit=self.best_fit,
            custom_width=self.custom_width,
            phonetic=self.phonetic,
            num_fmt=self.num_fmt,
            parsed_num_fmt=self.parsed_num_fmt,
            style=self.style,
        )


def new_col_for_range(min_col: int, max_col: int) -> Col:
    """Create a Col for an inclusive range, swapping the bounds if reversed."""
    if max_col < min_col:
        return Col(min=max_col, max=min_col)
    return Col(min=min_col, max=max_col)


@dataclass(eq=False)
class ColStoreNode:
    """A link in the ordered chain of column definitions."""

    col: Col
    prev: ColStoreNode | None = None
    next: ColStoreNode | None = None

    def find_node_for_col_num(self, num: int) -> ColStoreNode | None:
        """Walk the chain from this node to the node covering column ``num``."""
        node: ColStoreNode | None = self
        while node is not None:
            col = node.col
            if col.min <= num <= col.max:
                return node
            if num < col.min:
                prev = node.prev
                if prev is None or prev.col.max < num:
                    return None
                node = prev
            else:
                nxt = node.next
                if nxt is None or nxt.col.min > num:
                    return None
                node = nxt
        return None


class ColStore:
    """Ordered, non-overlapping column definitions.

    Adding a Col that overlaps existing ones trims, splits or replaces them.
    """

    def __init__(self) -> None:
        self.root: ColStoreNode | None = None
        self._len = 0

    def __len__(self) -> int:
        return self._len

    def __iter__(self) -> Iterator[Col]:
        node = self.root
        if node is None:
            return
        while node.prev is not None:
            node = node.prev
        while node is not None:
            nxt = node.next
            yield node.col
            node = nxt

    def add(self, col: Col) -> ColStoreNode:
        """Insert a Col, making room for it among the existing ones."""
        new_node = ColStoreNode(col)
        if self.root is None:
            self.root = new_node
            self._len = 1
            return new_node
        self._make_way(self.root, new_node)
        return new_node

    def find_col_by_index(self, index: int) -> Col | None:
        node = self.find_node_for_col_num(index)
        return node.col if node is not None else None

    def find_node_for_col_num(self, num: int) -> ColStoreNode | None:
        if self.root is None:
            return None
        return self.root.find_node_for_col_num(num)

    def remove_node(self, node: ColStoreNode) -> None:
        """Unlink a node from the chain."""
        if node.prev is not None:
            node.prev.next = node.next
        if node.next is not None:
            node.next.prev = node.prev
        if self.root is node:
            if node.prev is not None:
                self.root = node.prev
            elif node.next is not None:
                self.root = node.next
            else:
                self.root = None
        node.next = None
        node.prev = None
        self._len -= 1

    def _add_node(
        self,
        prev: ColStoreNode | None,
        this: ColStoreNode,
        nxt: ColStoreNode | None,
    ) -> None:
        if prev is not None:
            prev.next = this
        this.prev = prev
        this.next = nxt
        if nxt is not None:
            nxt.prev = this
        self._len += 1

    def _make_way(self, node1: ColStoreNode, node2: ColStoreNode) -> None:
        c1, c2 = node1.col, node2.col

        if c1.max < c2.min:
            # node2 lies entirely after node1
            nxt = node1.next
            if nxt is not None:
                if nxt.col.min <= c2.max:
                    self._make_way(nxt, node2)
                    return
                self._add_node(node1, node2, nxt)
                return
            self._add_node(node1, node2, None)
            return

        if c1.min > c2.max:
            # node2 lies entirely before node1
            prev = node1.prev
            if prev is not None:
                if prev.col.max >= c2.min:
                    self._make_way(prev, node2)
                    return
                self._add_node(prev, node2, node1)
                return
            self._add_node(None, node2, node1)
            return

        if c1.min == c2.min and c1.max == c2.max:
            # exact replacement
            prev, nxt = node1.prev, node1.next
            self.remove_node(node1)
            self._add_node(prev, node2, nxt)
            if self.root is None:
                self.root = node2
            return

        if c1.min > c2.min and c1.max < c2.max:
            # node2 envelops node1
            prev, nxt = node1.prev, node1.next
            self.remove_node(node1)
            if prev is node2:
                node2.next = nxt
            elif nxt is node2:
                node2.prev = prev
            else:
                self._add_node(prev, node2, nxt)
            if node2.prev is not None and node2.prev.col.max >= c2.min:
                self._make_way(prev, node2)
            if node2.next is not None and node2.next.col.min <= c2.max:
                self._make_way(nxt, node2)
            if self.root is None:
                self.root = node2
            return

        if c1.min < c2.min and c1.max > c2.max:
            # node2 splits node1 in two
            tail = ColStoreNode(c1.copy_to_range(c2.max + 1, c1.max))
            self._add_node(node1, tail, node1.next)
            c1.max = c2.min - 1
            self._add_node(node1, node2, tail)
            return

        if c1.max >= c2.min and c1.min < c2.min:
            # node2 overlaps the top of node1
            nxt = node1.next
            c1.max = c2.min - 1
            if nxt is node2:
                return
            self._add_node(node1, node2, nxt)
            if nxt is not None and nxt.col.min <= c2.max:
                self._make_way(nxt, node2)
            return

        if c1.min <= c2.max and c1.min > c2.min:
            # node2 overlaps the bottom of node1
            prev = node1.prev
            c1.min = c2.max + 1
            if prev is node2:
                return
            self._add_node(prev, node2, node1)
            if prev is not None and prev.col.max >= c2.min:
                self._make_way(node1.prev, node2)
            return

    def get_or_make_cols_for_range(
        self, start: ColStoreNode | None, min_col: int, max_col: int
    ) -> list[Col]:
        """Return Cols covering ``min_col``..``max_col``, creating any gaps."""
        cols: list[Col] = []
        node = start
        low = min_col
        while True:
            if node is None:
                found = self.add(new_col_for_range(low, max_col))
            elif node.col.min <= low <= node.col.max:
                found = node
            elif node.col.max < low:
                if node.next is not None:
                    node = node.next
                    continue
                found = self.add(new_col_for_range(low, max_col))
            else:
                high = max_col if node.col.min > max_col else node.col.min - 1
                found = self.add(new_col_for_range(low, high))
            cols.append(found.col)
            if found.col.max >= max_col:
                return cols
            low = found.col.max + 1
            node = found.next