"""
Unit tests for annotations.py

Tests command recognition, argument parsing and malformed input handling.
"""

import unittest

from core.positions import FilePosition, MethodPosition, TypePosition
from extraction.annotations import (
    BaseTypeAnnotation,
    FieldAnnotation,
    InParameterAnnotation,
    MalformedAnnotation,
    NameAnnotation,
    OutParameterAnnotation,
    ScriptableAnnotation,
    TextAnnotation,
    UnknownAnnotation,
    is_usable,
    parse_annotation,
)
from extraction.diagnostics import WarningList, WarningType

METHOD_POSITION = MethodPosition.of(FilePosition("MOAIProp.cpp"), "MOAIProp", "_setLoc")
TYPE_POSITION = TypePosition(FilePosition("MOAIProp.h"), "MOAIProp")


class TestRecognizedCommands(unittest.TestCase):
    """Test parsing of every recognized command."""

    def setUp(self):
        self.warnings = WarningList()

    def parse(self, raw, position=METHOD_POSITION):
        return parse_annotation(raw, position, self.warnings)

    def test_name(self):
        annotation = self.parse("@name\tsetLoc")
        self.assertEqual(annotation, NameAnnotation(METHOD_POSITION, "setLoc"))

    def test_lua_is_name_alias(self):
        annotation = self.parse("@lua setLoc")
        self.assertIsInstance(annotation, NameAnnotation)
        self.assertEqual(annotation.value, "setLoc")

    def test_text_collapses_whitespace(self):
        annotation = self.parse("@text\tSets the transform's\n\t\tlocation.")
        self.assertIsInstance(annotation, TextAnnotation)
        self.assertEqual(annotation.value, "Sets the transform's location.")

    def test_scriptable(self):
        annotation = self.parse("@scriptable", TYPE_POSITION)
        self.assertEqual(annotation, ScriptableAnnotation(TYPE_POSITION))

    def test_base(self):
        annotation = self.parse("@base MOAINode", TYPE_POSITION)
        self.assertEqual(annotation, BaseTypeAnnotation(TYPE_POSITION, "MOAINode"))

    def test_in_parameter(self):
        annotation = self.parse("@in\t\tnumber x\t\tDefault value is 0.")
        self.assertIsInstance(annotation, InParameterAnnotation)
        self.assertEqual(annotation.name, "x")
        self.assertEqual(annotation.type_name, "number")
        self.assertFalse(annotation.is_optional)
        self.assertEqual(annotation.description, "Default value is 0.")

    def test_optional_parameter(self):
        annotation = self.parse("@opt number y")
        self.assertIsInstance(annotation, InParameterAnnotation)
        self.assertTrue(annotation.is_optional)
        self.assertEqual(annotation.description, "")

    def test_untyped_param(self):
        annotation = self.parse("@param x the x coordinate")
        self.assertIsInstance(annotation, InParameterAnnotation)
        self.assertEqual(annotation.name, "x")
        self.assertIsNone(annotation.type_name)
        self.assertEqual(annotation.description, "the x coordinate")

    def test_out_parameter_with_name(self):
        annotation = self.parse("@out number xLoc")
        self.assertEqual(annotation, OutParameterAnnotation(METHOD_POSITION, "number", "xLoc", ""))

    def test_out_parameter_without_name(self):
        annotation = self.parse("@out nil")
        self.assertIsInstance(annotation, OutParameterAnnotation)
        self.assertEqual(annotation.type_name, "nil")
        self.assertEqual(annotation.name, "")

    def test_return(self):
        annotation = self.parse("@return string The class name.")
        self.assertIsInstance(annotation, OutParameterAnnotation)
        self.assertEqual(annotation.type_name, "string")
        self.assertEqual(annotation.name, "")
        self.assertEqual(annotation.description, "The class name.")

    def test_const_has_implicit_number_type(self):
        annotation = self.parse("@const\tFRAME_FROM_DECK\t\tUse the deck's frame.", TYPE_POSITION)
        self.assertIsInstance(annotation, FieldAnnotation)
        self.assertEqual(annotation.kind, "const")
        self.assertEqual(annotation.name, "FRAME_FROM_DECK")
        self.assertEqual(annotation.type_name, "number")
        self.assertEqual(annotation.description, "Use the deck's frame.")

    def test_flag_and_attr(self):
        flag = self.parse("@flag BLEND_ADD", TYPE_POSITION)
        attr = self.parse("@attr ATTR_X_LOC", TYPE_POSITION)
        self.assertEqual((flag.kind, flag.name), ("flag", "BLEND_ADD"))
        self.assertEqual((attr.kind, attr.name), ("attr", "ATTR_X_LOC"))

    def test_field_declares_type(self):
        annotation = self.parse("@field MOAIDeck deck The attached deck.", TYPE_POSITION)
        self.assertEqual(annotation.type_name, "MOAIDeck")
        self.assertEqual(annotation.name, "deck")
        self.assertEqual(annotation.description, "The attached deck.")

    def test_recognized_commands_record_no_warnings(self):
        self.parse("@in number x")
        self.parse("@name setLoc")
        self.assertEqual(len(self.warnings), 0)


class TestUnknownCommands(unittest.TestCase):
    """Unrecognized input always yields UnknownAnnotation."""

    def test_unknown_commands_never_recognized(self):
        warnings = WarningList()
        for raw in [
            "@deprecated",
            "@NAME foo",
            "@in-out number x",
            "@inx number x",
            "@texts hello",
            "@ name foo",
            "@",
            "no command at all",
        ]:
            with self.subTest(raw=raw):
                annotation = parse_annotation(raw, METHOD_POSITION, warnings)
                self.assertIsInstance(annotation, UnknownAnnotation)
                self.assertFalse(is_usable(annotation))

    def test_unknown_keeps_command_and_text(self):
        annotation = parse_annotation("@deprecated use setDeck", METHOD_POSITION, WarningList())
        self.assertEqual(annotation.command, "deprecated")
        self.assertEqual(annotation.text, "@deprecated use setDeck")

    def test_whitespace_after_at_gives_empty_command(self):
        annotation = parse_annotation("@ name foo", METHOD_POSITION, WarningList())
        self.assertEqual(annotation.command, "")

    def test_unknown_is_not_warned_by_parser(self):
        warnings = WarningList()
        parse_annotation("@deprecated", METHOD_POSITION, warnings)
        self.assertEqual(len(warnings), 0)


class TestMalformedArguments(unittest.TestCase):
    """Known commands with missing arguments."""

    def test_missing_parameter_name(self):
        warnings = WarningList()
        annotation = parse_annotation("@in number", METHOD_POSITION, warnings)

        self.assertIsInstance(annotation, MalformedAnnotation)
        self.assertEqual(annotation.command, "in")
        self.assertFalse(is_usable(annotation))
        self.assertEqual(len(warnings), 1)
        warning = warnings.all[0]
        self.assertEqual(warning.category, WarningType.UNEXPECTED_VALUE)
        self.assertEqual(warning.position, METHOD_POSITION)
        self.assertIn("@in", warning.message)

    def test_empty_arguments(self):
        for raw in ["@name", "@text", "@base", "@const", "@field number", "@out", "@param"]:
            with self.subTest(raw=raw):
                warnings = WarningList()
                annotation = parse_annotation(raw, TYPE_POSITION, warnings)
                self.assertIsInstance(annotation, MalformedAnnotation)
                self.assertEqual(len(warnings), 1)


if __name__ == "__main__":
    unittest.main()
