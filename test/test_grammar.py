# python
"""
Grammar module tests (key-tag shape, key validity, help pre-scan).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argslot import FaultCode, ParserError
from argslot.grammar import check_for_help, is_key_tag, is_valid_key, key_name


class TestKeyTag(TestCase):
    """Shape of '-X' and '--NAME' tags."""

    def testShortTags(self):
        for token in ("-a", "-Z", "-5", "-h", "-é"):
            self.assertTrue(is_key_tag(token), token)

    def testLongTags(self):
        for token in ("--ab", "--name", "--help", "--foo-bar", "---x"):
            self.assertTrue(is_key_tag(token), token)

    def testNonTags(self):
        for token in ("", "-", "--", "--x", "-ab", "-ne", "name", "a-b", "x--"):
            self.assertFalse(is_key_tag(token), token)

    def testKeyName(self):
        self.assertEqual(key_name("-a"), "a")
        self.assertEqual(key_name("--name"), "name")

    def testKeyNameOfNonTagRaises(self):
        with self.assertRaises(ParserError) as context:
            key_name("name")
        self.assertIs(context.exception.code, FaultCode.INVALID_KEY)
        self.assertEqual(context.exception.key, "name")


class TestValidKey(TestCase):
    """Registrable keys."""

    def testValid(self):
        for key in ("-a", "--name", "--ab", "-1"):
            self.assertTrue(is_valid_key(key), key)

    def testHelpIsReserved(self):
        self.assertFalse(is_valid_key("-h"))
        self.assertFalse(is_valid_key("--help"))

    def testInnerDashRejected(self):
        self.assertFalse(is_valid_key("--foo-bar"))
        self.assertFalse(is_valid_key("---x"))

    def testMalformedRejected(self):
        for key in ("-ne", "--x", "name", "-", "--"):
            self.assertFalse(is_valid_key(key), key)


class TestCheckForHelp(TestCase):
    """Help pre-scan over argv-like sequences."""

    def testNoHelp(self):
        check_for_help(["exe", "a", "--name", "b"])

    def testShortHelpAnywhere(self):
        with self.assertRaises(ParserError) as context:
            check_for_help(["exe", "a", "-h", "b"])
        self.assertIs(context.exception.code, FaultCode.HELP_REQUESTED)

    def testLongHelp(self):
        with self.assertRaises(ParserError) as context:
            check_for_help(["exe", "--help"])
        self.assertIs(context.exception.code, FaultCode.HELP_REQUESTED)

    def testProgramNameIsSkipped(self):
        check_for_help(["-h"])

    def testEmptySequence(self):
        check_for_help([])


if __name__ == "__main__":
    unittest.main()
