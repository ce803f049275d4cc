"""Kiosk Menu Sequencer - ordering of products and category dividers.

A store's kiosk shows one list in which products and category dividers are
interleaved. Each divider groups the products that follow it until the next
divider. This module keeps that list as an immutable ``KioskSequence`` and
derives the two fields that get persisted from it:

- ``display_order``: dense 0-based position shared by products and dividers
  (stored as ``products.kiosk_order`` and ``kiosk_categories.position``)
- ``anchor_item_id``: for a divider, the id of the nearest product before it,
  or None when no product precedes it (``kiosk_categories.after_product_id``)

Every operation takes a sequence and returns a new one. Inputs are never
modified, so a failed call leaves the caller's sequence usable as-is.

Example:
    seq = build([MenuItemEntry("A"), MenuItemEntry("B")], [])
    seq = insert_marker(seq, "Coffee", after="A")
    seq = reorder(seq, 1, 2)
"""

from __future__ import annotations

import itertools
import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union


class Placement(Enum):
    """Insertion points that are not expressed as a product id."""

    END = "end"


# Append a divider after every existing entry
END = Placement.END


class MenuSequencerError(Exception):
    """Base class for kiosk menu sequencing failures."""


class EntryNotFoundError(MenuSequencerError):
    """Raised when a referenced product or divider is not in the sequence."""

    def __init__(self, kind: str, entry_id: str):
        self.kind = kind
        self.entry_id = entry_id
        super().__init__(f"{kind} '{entry_id}' is not on the kiosk menu")


class EntryIndexError(MenuSequencerError):
    """Raised when an index falls outside the bounds allowed by an operation."""

    def __init__(self, index: int, upper: int):
        self.index = index
        self.upper = upper
        if upper < 0:
            message = f"Index {index} is invalid for an empty kiosk menu"
        else:
            message = f"Index {index} is out of range [0, {upper}]"
        super().__init__(message)


class DuplicateEntryError(MenuSequencerError):
    """Raised when an entry id would appear twice in the sequence."""

    def __init__(self, kind: str, entry_id: str):
        self.kind = kind
        self.entry_id = entry_id
        super().__init__(f"{kind} '{entry_id}' is already on the kiosk menu")


@dataclass(frozen=True)
class MenuItemEntry:
    """A product placed on the kiosk menu.

    ``payload`` is carried through untouched (name, price, sold-out flag...).
    """

    id: str
    display_order: Optional[int] = None
    payload: Mapping[str, Any] = field(default_factory=dict)

    kind = "item"


@dataclass(frozen=True)
class CategoryMarkerEntry:
    """A named divider; ``anchor_item_id`` is derived, never set by callers."""

    id: str
    name: str = ""
    display_order: Optional[int] = None
    anchor_item_id: Optional[str] = None

    kind = "category"


SequenceEntry = Union[MenuItemEntry, CategoryMarkerEntry]


@dataclass(frozen=True)
class KioskSequence:
    """Settled, immutable kiosk menu ordering."""

    entries: Tuple[SequenceEntry, ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[SequenceEntry]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> SequenceEntry:
        return self.entries[index]

    @property
    def items(self) -> List[MenuItemEntry]:
        return [e for e in self.entries if isinstance(e, MenuItemEntry)]

    @property
    def markers(self) -> List[CategoryMarkerEntry]:
        return [e for e in self.entries if isinstance(e, CategoryMarkerEntry)]

    def index_of_item(self, item_id: str) -> int:
        return self._index_of(MenuItemEntry, item_id)

    def index_of_marker(self, marker_id: str) -> int:
        return self._index_of(CategoryMarkerEntry, marker_id)

    def _index_of(self, entry_type: type, entry_id: str) -> int:
        for index, entry in enumerate(self.entries):
            if isinstance(entry, entry_type) and entry.id == entry_id:
                return index
        raise EntryNotFoundError(entry_type.kind, entry_id)


def new_marker_id() -> str:
    """Default identity generator for new dividers."""
    return str(uuid.uuid4())


def _settle(entries: Iterable[SequenceEntry]) -> KioskSequence:
    """Re-derive display orders and divider anchors for an ordered list.

    Every mutating operation ends here, so the density and anchor
    invariants hold for any sequence this module returns.
    """
    settled: List[SequenceEntry] = []
    anchor: Optional[str] = None
    for position, entry in enumerate(entries):
        if isinstance(entry, MenuItemEntry):
            anchor = entry.id
            settled.append(replace(entry, display_order=position))
        else:
            settled.append(replace(entry, display_order=position, anchor_item_id=anchor))
    return KioskSequence(tuple(settled))


def _check_index(index: int, upper: int) -> None:
    if isinstance(index, bool) or not isinstance(index, int) or index < 0 or index > upper:
        raise EntryIndexError(index, upper)


def _check_unique(entries: Iterable[SequenceEntry]) -> None:
    seen = set()
    for entry in entries:
        key = (entry.kind, entry.id)
        if key in seen:
            raise DuplicateEntryError(entry.kind, entry.id)
        seen.add(key)


def build(
    items: Iterable[MenuItemEntry],
    markers: Iterable[CategoryMarkerEntry],
) -> KioskSequence:
    """Merge products and dividers into one sequence by their last display order.

    Ties are resolved deterministically: entries without a display order go
    after every ordered entry, products sort before dividers on equal order,
    and anything still tied keeps its input order. Incoming divider anchors
    are ignored and re-derived.
    """
    entries: List[SequenceEntry] = list(itertools.chain(items, markers))
    _check_unique(entries)

    def sort_key(pair: Tuple[int, SequenceEntry]) -> Tuple[bool, int, int, int]:
        arrival, entry = pair
        order = entry.display_order
        return (
            order is None,
            order if order is not None else 0,
            0 if isinstance(entry, MenuItemEntry) else 1,
            arrival,
        )

    ordered = sorted(enumerate(entries), key=sort_key)
    return _settle(entry for _, entry in ordered)


def insert_menu_item(
    seq: KioskSequence,
    item: MenuItemEntry,
    at_index: Optional[int] = None,
) -> KioskSequence:
    """Place a product at ``at_index`` (0..len), appending by default."""
    if at_index is None:
        at_index = len(seq)
    _check_index(at_index, len(seq))
    if any(isinstance(e, MenuItemEntry) and e.id == item.id for e in seq):
        raise DuplicateEntryError(item.kind, item.id)

    entries = list(seq.entries)
    entries.insert(at_index, item)
    return _settle(entries)


def remove_menu_item(seq: KioskSequence, item_id: str) -> KioskSequence:
    """Take a product off the menu. Dividers stay, possibly re-anchored to None."""
    index = seq.index_of_item(item_id)
    return _settle(seq.entries[:index] + seq.entries[index + 1:])


def insert_marker(
    seq: KioskSequence,
    name: str,
    after: Union[str, None, Placement],
    id_factory: Callable[[], str] = new_marker_id,
) -> KioskSequence:
    """Create a divider right after product ``after``.

    ``after=None`` inserts at the very start and ``after=END`` at the very end.
    An empty name is accepted; the editor allows it while the name is typed.
    """
    if after is END:
        index = len(seq)
    elif after is None:
        index = 0
    else:
        index = seq.index_of_item(after) + 1

    marker = CategoryMarkerEntry(id=id_factory(), name=name)
    if any(isinstance(e, CategoryMarkerEntry) and e.id == marker.id for e in seq):
        raise DuplicateEntryError(marker.kind, marker.id)

    entries = list(seq.entries)
    entries.insert(index, marker)
    return _settle(entries)


def remove_marker(seq: KioskSequence, marker_id: str) -> KioskSequence:
    """Delete a divider; the products around it keep their anchors."""
    index = seq.index_of_marker(marker_id)
    return _settle(seq.entries[:index] + seq.entries[index + 1:])


def reorder(seq: KioskSequence, from_index: int, to_index: int) -> KioskSequence:
    """Move the entry at ``from_index`` to ``to_index`` (drag-and-drop drop).

    Entries in between shift by one. A move onto itself returns ``seq``.
    """
    upper = len(seq) - 1
    _check_index(from_index, upper)
    _check_index(to_index, upper)
    if from_index == to_index:
        return seq

    entries = list(seq.entries)
    moved = entries.pop(from_index)
    entries.insert(to_index, moved)
    return _settle(entries)


def rename_marker(seq: KioskSequence, marker_id: str, new_name: str) -> KioskSequence:
    index = seq.index_of_marker(marker_id)
    entries = list(seq.entries)
    entries[index] = replace(entries[index], name=new_name)
    return KioskSequence(tuple(entries))


def sections(seq: KioskSequence) -> List[Dict[str, Any]]:
    """Group products under the divider that precedes them.

    Products ahead of the first divider form a leading section with no
    category. Dividers with no products are left out.
    """
    grouped: List[Dict[str, Any]] = []
    current: Dict[str, Any] = {"category_id": None, "category_name": None, "items": []}
    for entry in seq:
        if isinstance(entry, CategoryMarkerEntry):
            if current["items"]:
                grouped.append(current)
            current = {"category_id": entry.id, "category_name": entry.name, "items": []}
        else:
            current["items"].append(entry)
    if current["items"]:
        grouped.append(current)
    return grouped
