"""
Tests for the internal utilities.

This module verifies:
- Unset: singleton identity, falsy semantics, representation, finality.
- coalesce: only Unset is replaced; other falsey values are preserved.
- mirror: read-only, frozen snapshots of backing fields.
- pluralize: the small set of rules used by fault titles.
"""
import copy
import pickle
import unittest
from types import MappingProxyType
from unittest import TestCase

from switchyard.utils import *


class UnsetTest(TestCase):
    """Test suite for the `Unset` sentinel."""

    def testSingleton(self):
        self.assertIs(Unset, UnsetType())

    def testFalsy(self):
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)

    def testRepr(self):
        self.assertEqual(repr(Unset), "Unset")

    def testCopyAndPicklePreserveIdentity(self):
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testFinal(self):
        with self.assertRaises(TypeError):
            class Derived(UnsetType):  # NOQA: F-841
                pass


class CoalesceTest(TestCase):
    """Test suite for `coalesce`."""

    def testReplacesUnset(self):
        self.assertEqual(coalesce(Unset, "-/"), "-/")
        self.assertIsNone(coalesce(Unset))

    def testPreservesFalsey(self):
        self.assertEqual(coalesce("", "-/"), "")
        self.assertIsNone(coalesce(None, "-/"))
        self.assertEqual(coalesce(0, 1), 0)


class MirrorTest(TestCase):
    """Test suite for `mirror`."""

    class Holder:
        items = mirror("items")
        table = mirror("table")
        tags = mirror("tags")
        name = mirror("name")

        def __init__(self):
            self._items = ["a", "b"]
            self._table = {"k": 1}
            self._tags = {"x"}
            self._name = "holder"

    def testFrozenSnapshots(self):
        holder = self.Holder()
        self.assertEqual(holder.items, ("a", "b"))
        self.assertIsInstance(holder.table, MappingProxyType)
        self.assertEqual(holder.tags, frozenset({"x"}))
        self.assertEqual(holder.name, "holder")

    def testSnapshotIndependentOfBackingField(self):
        holder = self.Holder()
        items, table = holder.items, holder.table
        holder._items.append("c")
        holder._table["j"] = 2
        self.assertEqual(items, ("a", "b"))
        self.assertNotIn("j", table)

    def testReadOnly(self):
        with self.assertRaises(AttributeError):
            self.Holder().items = ()

    def testGetterName(self):
        self.assertEqual(self.Holder.items.fget.__name__, "items")

    def testRejectsNonString(self):
        with self.assertRaises(TypeError):
            mirror(1)  # type: ignore[arg-type]


class PluralizeTest(TestCase):
    """Test suite for `pluralize`."""

    def testSingular(self):
        self.assertEqual(pluralize("switch", 1), "switch")

    def testSibilant(self):
        self.assertEqual(pluralize("switch", 2), "switches")

    def testConsonantY(self):
        self.assertEqual(pluralize("entry", 3), "entries")

    def testRegular(self):
        self.assertEqual(pluralize("flag", 0), "flags")

    def testRejectsNonString(self):
        with self.assertRaises(TypeError):
            pluralize(1, 2)  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
