# Services module

from kiosk_menu.services.menu_sequencer import (
    END,
    CategoryMarkerEntry,
    DuplicateEntryError,
    EntryIndexError,
    EntryNotFoundError,
    KioskSequence,
    MenuItemEntry,
    MenuSequencerError,
)
from kiosk_menu.services.kiosk_menu_service import KioskMenuService
