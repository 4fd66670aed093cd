from __future__ import annotations

import unittest
from pathlib import Path

from lazyfm.model import DirectoryListing, Entry, EntryKind, SortKey


def _listing(*names: str) -> DirectoryListing:
    return DirectoryListing(entries=[Entry(Path("/d") / name, name, EntryKind.FILE) for name in names])


class DirectoryListingTests(unittest.TestCase):
    def test_filter_is_case_sensitive_substring(self) -> None:
        listing = _listing("apple", "Apricot", "banana", "grape")
        self.assertEqual(listing.filtered("ap").names(), ["apple", "grape"])
        self.assertEqual(listing.filtered("").names(), listing.names())

    def test_filter_always_derives_from_original(self) -> None:
        original = _listing("apple", "apricot", "banana")
        after_a = original.filtered("a")
        original.filtered("ap")
        after_backspace = original.filtered("a")
        self.assertEqual(after_a.names(), after_backspace.names())
        self.assertEqual(original.names(), ["apple", "apricot", "banana"])

    def test_filtered_entries_do_not_share_selection(self) -> None:
        original = _listing("apple", "banana")
        original[0].selected = True
        filtered = original.filtered("a")
        self.assertEqual(filtered.selected_indices(), [])
        filtered[1].selected = True
        self.assertFalse(original[1].selected)

    def test_duplicate_paths_are_rejected(self) -> None:
        with self.assertRaises(ValueError):
            DirectoryListing(
                entries=[
                    Entry(Path("/d/a"), "a", EntryKind.FILE),
                    Entry(Path("/d/a"), "a", EntryKind.FILE),
                ]
            )

    def test_get_out_of_range_returns_none(self) -> None:
        listing = _listing("a")
        self.assertIsNone(listing.get(1))
        self.assertIsNone(listing.get(-1))
        self.assertEqual(listing.get(0).display_name, "a")

    def test_sort_key_toggle(self) -> None:
        self.assertIs(SortKey.NAME.toggled(), SortKey.TIME)
        self.assertIs(SortKey.TIME.toggled(), SortKey.NAME)


if __name__ == "__main__":
    unittest.main()
