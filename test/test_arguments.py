# python
"""
Arguments module behavioral tests (value slots and argument specs).

Scope
- ValueSlot: set/append/clear semantics and the initialized invariant.
- Argument: metadata validation, read-only fields, append-or-set routing.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argslot import SEPARATOR, Argument, ValueSlot


class TestValueSlot(TestCase):
    """Behavioral tests for ValueSlot storage."""

    def testStartsUninitialized(self):
        slot = ValueSlot()
        self.assertFalse(slot.initialized)
        self.assertEqual(slot.raw, "")

    def testSetOverwrites(self):
        slot = ValueSlot()
        slot.set("a")
        slot.set("b")
        self.assertTrue(slot.initialized)
        self.assertEqual(slot.raw, "b")

    def testSetEmptyStringStillInitializes(self):
        slot = ValueSlot()
        slot.set("")
        self.assertTrue(slot.initialized)

    def testAppendOnEmptyBehavesLikeSet(self):
        slot = ValueSlot()
        slot.append("x", ";")
        self.assertEqual(slot.raw, "x")

    def testAppendJoinsWithSeparator(self):
        slot = ValueSlot()
        slot.append("x", ";")
        slot.append("y", ";")
        slot.append("z", ";")
        self.assertEqual(slot.raw, "x;y;z")

    def testAppendDefaultSeparator(self):
        slot = ValueSlot()
        slot.append("x")
        slot.append("y")
        self.assertEqual(slot.raw, "x" + SEPARATOR + "y")

    def testAppendAfterEmptySetKeepsLeadingEmptyPiece(self):
        slot = ValueSlot()
        slot.set("")
        slot.append("y", ",")
        self.assertEqual(slot.raw, ",y")

    def testClearIsTheOnlyWayBack(self):
        slot = ValueSlot()
        slot.set("a")
        slot.clear()
        self.assertFalse(slot.initialized)
        self.assertEqual(slot.raw, "")

    def testRejectsNonStringValues(self):
        slot = ValueSlot()
        with self.assertRaises(TypeError):
            slot.set(1)
        with self.assertRaises(TypeError):
            slot.append(None)


class TestArgument(TestCase):
    """Behavioral tests for Argument specifications."""

    def testDefaults(self):
        argument = Argument()
        self.assertEqual(argument.help, "")
        self.assertTrue(argument.required)
        self.assertFalse(argument.many)
        self.assertEqual(argument.default, "")
        self.assertFalse(argument.satisfied)

    def testHelpIsTrimmed(self):
        self.assertEqual(Argument("  input file  ").help, "input file")

    def testFieldsAreReadOnly(self):
        argument = Argument("x")
        with self.assertRaises(AttributeError):
            argument.required = False
        with self.assertRaises(AttributeError):
            argument.default = "y"

    def testMetadataTypesValidated(self):
        with self.assertRaises(TypeError):
            Argument(None)
        with self.assertRaises(TypeError):
            Argument("x", required="yes")
        with self.assertRaises(TypeError):
            Argument("x", many=1)
        with self.assertRaises(TypeError):
            Argument("x", default=3)

    def testAssignReplacesWhenSingle(self):
        argument = Argument("x")
        argument.assign("1")
        argument.assign("2")
        self.assertEqual(argument.value.raw, "2")
        self.assertTrue(argument.satisfied)

    def testAssignAppendsWhenMany(self):
        argument = Argument("x", many=True)
        for token in ("1", "2", "3"):
            argument.assign(token)
        self.assertEqual(argument.value.raw, "1,2,3")

    def testRepr(self):
        self.assertEqual(
            repr(Argument("x", required=False, default="d")),
            "Argument(help='x', required=False, many=False, default='d')",
        )


if __name__ == "__main__":
    unittest.main()
