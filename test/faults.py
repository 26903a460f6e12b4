"""
Faults module behavioral tests (codes, triggering, rendering).

Scope
- Validate FaultCode normalization and host relabelling via __main__.__codes__.
- Validate trigger(): protocol checks, raise vs. warn vs. render.
- Validate rich rendering (plain/fancy, host styles, program name).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import io
import unittest
import warnings
from unittest import TestCase, mock

from rich.console import Console
from rich.panel import Panel

import switchyard.faults
from switchyard.faults import (
    FaultCode,
    ParserException,
    DuplicateFlagError,
    MissingSwitchesError,
    ExtraneousSwitchWarning,
    trigger,
    getdoc,
)


def _export(renderable):
    console = Console(record=True, width=100, color_system=None, file=io.StringIO())
    console.print(renderable)
    return console.export_text()


class TestFaultCode(TestCase):
    """Behavioral tests for FaultCode."""

    def testNormalizeDefaultsToNumber(self):
        with mock.patch("__main__.__codes__", {}, create=True):
            self.assertEqual(FaultCode.MISSING_SWITCHES.normalize(), "21201")

    def testNormalizeHostMapping(self):
        with mock.patch("__main__.__codes__", {FaultCode.DUPLICATE_FLAG: "DUP"}, create=True):
            self.assertEqual(FaultCode.DUPLICATE_FLAG.normalize(), "DUP")

    def testGetdoc(self):
        with mock.patch("__main__.__docs__", {FaultCode.DUPLICATE_FLAG: "twice"}, create=True):
            self.assertEqual(getdoc(FaultCode.DUPLICATE_FLAG), "twice")
            self.assertIsNone(getdoc(FaultCode.MISSING_SWITCHES))

    def testGetdocRejectsNonCode(self):
        with self.assertRaises(TypeError):
            getdoc(21101)


class TestTrigger(TestCase):
    """Behavioral tests for trigger() dispatch."""

    def setUp(self):
        self.stream = io.StringIO()
        patcher = mock.patch.object(
            switchyard.faults, "console",
            Console(file=self.stream, width=100, color_system=None)
        )
        patcher.start()
        self.addCleanup(patcher.stop)

    def testRejectsNonFault(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("plain"))

    def testRaisesOutsideShell(self):
        with self.assertRaises(MissingSwitchesError) as context:
            trigger(MissingSwitchesError("missing: i", missing=("i",)))
        self.assertEqual(context.exception.options["missing"], ("i",))

    def testTriggerMergesOptions(self):
        with self.assertRaises(DuplicateFlagError) as context:
            trigger(DuplicateFlagError("dup", prefix="i"), hint="once")
        self.assertEqual(context.exception.options["hint"], "once")
        self.assertEqual(context.exception.options["prefix"], "i")

    def testReplaceKeepsType(self):
        fault = DuplicateFlagError("dup", prefix="i").__replace__(shell=True)
        self.assertIsInstance(fault, DuplicateFlagError)
        self.assertIsInstance(fault, ValueError)
        self.assertTrue(fault.options["shell"])

    def testOptionsAreReadOnly(self):
        fault = ParserException("x", code=FaultCode.MISSING_SWITCHES)
        with self.assertRaises(TypeError):
            fault.options["code"] = None  # type: ignore[index]

    def testShellExceptionPrintsAndExits(self):
        with self.assertRaises(SystemExit) as context:
            trigger(MissingSwitchesError("missing: i"), shell=True, colorful=False)
        self.assertEqual(context.exception.code, 1)
        self.assertIn("missing: i", self.stream.getvalue())

    def testWarningOutsideShell(self):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            trigger(ExtraneousSwitchWarning("ignored -x", argument="x"))
        self.assertEqual(len(caught), 1)
        self.assertIs(caught[0].category, ExtraneousSwitchWarning)
        self.assertEqual(str(caught[0].message), "ignored -x")

    def testWarningInShellPrints(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            trigger(ExtraneousSwitchWarning("ignored -x"), shell=True)
        self.assertIn("ignored -x", self.stream.getvalue())


class TestRendering(TestCase):
    """Behavioral tests for the rich renderables of faults."""

    def testPlainRendering(self):
        fault = MissingSwitchesError(
            "Missing required command line switches: i",
            title="missing required switch",
            code=FaultCode.MISSING_SWITCHES,
            hint="add -i<value>",
            colorful=False,
        )
        with mock.patch("__main__.__prog__", "tool", create=True):
            output = _export(fault)
        self.assertIn("[ tool — 21201 | Missing Required Switch ]", output)
        self.assertIn("Missing required command line switches: i", output)
        self.assertIn("→ add -i<value>", output)

    def testFancyRenderingUsesPanel(self):
        fault = ExtraneousSwitchWarning("ignored", code=FaultCode.EXTRANEOUS_SWITCH, fancy=True)
        self.assertIsInstance(fault.__rich__(), Panel)

    def testHostStylesApplied(self):
        fault = MissingSwitchesError("boom", code=FaultCode.MISSING_SWITCHES)
        with mock.patch("__main__.__styles__", {"message": "bold red"}, create=True):
            group = fault.__rich__()
        message = group.renderables[1]
        self.assertEqual(str(message.style), "bold red")

    def testColorlessDropsStyles(self):
        fault = MissingSwitchesError("boom", code=FaultCode.MISSING_SWITCHES, colorful=False)
        message = fault.__rich__().renderables[1]
        self.assertEqual(str(message.style), "")

    def testUnknownCodeRendersPlaceholder(self):
        with mock.patch("__main__.__prog__", "tool", create=True):
            output = _export(ParserException("bare"))
        self.assertIn("[ tool — ? |", output)


if __name__ == "__main__":
    unittest.main()
