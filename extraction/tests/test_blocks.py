"""
Unit tests for blocks.py

Tests comment detection, header recognition and annotation splitting.
"""

import unittest

from core.positions import FilePosition, MethodPosition, TypePosition
from extraction.blocks import (
    iter_documentation_blocks,
    split_annotations,
    split_base_list,
)

FILE = FilePosition("MOAIProp.h")


def blocks_of(code):
    return list(iter_documentation_blocks(code, FILE))


class TestClassBlocks(unittest.TestCase):
    """Test documentation attached to class and struct headers."""

    def test_class_with_base_list(self):
        code = (
            "/**\t@scriptable\n"
            " *\t@text Base class for props.\n"
            " */\n"
            "class MOAIProp :\n"
            "\tpublic MOAITransform,\n"
            "\tpublic MOAIGlobalClass < MOAIProp, MOAILuaObject > {\n"
            "};\n"
        )
        blocks = blocks_of(code)

        self.assertEqual(len(blocks), 1)
        block = blocks[0]
        self.assertFalse(block.is_method)
        self.assertEqual(block.position, TypePosition(FILE, "MOAIProp"))
        self.assertEqual(block.type_name, "MOAIProp")
        self.assertEqual(block.base_type_names, ("MOAITransform",))
        self.assertEqual(block.raw_annotations, ("@scriptable", "@text Base class for props."))
        self.assertIsNone(block.method_body)
        self.assertEqual(block.line, 1)

    def test_struct_without_bases(self):
        blocks = blocks_of("/** @text A point. */\nstruct Point {\n\tfloat x;\n};\n")

        self.assertEqual(len(blocks), 1)
        self.assertEqual(blocks[0].type_name, "Point")
        self.assertEqual(blocks[0].base_type_names, ())

    def test_forward_declaration(self):
        blocks = blocks_of("/** @const FRAME_FROM_SELF */\nclass MOAIProp;\n")

        self.assertEqual(len(blocks), 1)
        self.assertEqual(blocks[0].type_name, "MOAIProp")


class TestMethodBlocks(unittest.TestCase):
    """Test documentation attached to method definitions."""

    def test_method_definition(self):
        code = (
            "#include <moai-sim/MOAITransform.h>\n"
            "\n"
            "/**\t@name\tgetLoc\n"
            "\t@text\tReturns the location.\n"
            "\t@in\t\tMOAITransform self\n"
            "\t@out\tnumber xLoc\n"
            "*/\n"
            "int MOAITransform::_getLoc ( lua_State* L ) {\n"
            "\treturn 0;\n"
            "}\n"
        )
        blocks = blocks_of(code)

        self.assertEqual(len(blocks), 1)
        block = blocks[0]
        self.assertTrue(block.is_method)
        self.assertEqual(block.position, MethodPosition.of(FILE, "MOAITransform", "_getLoc"))
        self.assertEqual(block.type_name, "MOAITransform")
        self.assertEqual(
            block.raw_annotations,
            (
                "@name\tgetLoc",
                "@text\tReturns the location.",
                "@in\t\tMOAITransform self",
                "@out\tnumber xLoc",
            ),
        )
        self.assertEqual(block.method_body, "\n\treturn 0;\n")
        self.assertEqual(block.line, 3)

    def test_body_ends_at_column_zero_brace(self):
        code = (
            "/** @name setLoc */\n"
            "int MOAITransform::_setLoc ( lua_State* L ) {\n"
            "\tif ( state.CheckParams ( 1, \"U\" )) {\n"
            "\t}\n"
            "\treturn 0;\n"
            "}\n"
        )
        block = blocks_of(code)[0]

        self.assertIn("return 0;", block.method_body)
        self.assertIn("\t}\n", block.method_body)

    def test_body_ends_at_dash_sentinel(self):
        code = (
            "/** @name update */\n"
            "void MOAIAction::_update ( float step ) {\n"
            "\tthis->Update ( step );\n"
            "//----------------------------------------------------------------//\n"
            "int MOAIAction::_other ( lua_State* L ) {\n"
        )
        block = blocks_of(code)[0]

        self.assertEqual(block.method_body, "\n\tthis->Update ( step );\n")

    def test_indented_bodies_inside_namespace(self):
        code = (
            "namespace X {\n"
            "\t/** @name a */\n"
            "\tint Foo::_a () {\n"
            "\t\treturn 0;\n"
            "\t}\n"
            "\n"
            "\t/** @name b */\n"
            "\tint Foo::_b () {\n"
            "\t\treturn 0;\n"
            "\t}\n"
            "}\n"
        )
        blocks = blocks_of(code)

        self.assertEqual(
            [b.position for b in blocks],
            [MethodPosition.of(FILE, "Foo", "_a"), MethodPosition.of(FILE, "Foo", "_b")],
        )
        self.assertNotIn("Foo::_b", blocks[0].method_body)

    def test_declaration_has_no_body(self):
        block = blocks_of("/** @name foo */\nint Foo::foo ( );\n")[0]

        self.assertEqual(block.position, MethodPosition.of(FILE, "Foo", "foo"))
        self.assertIsNone(block.method_body)

    def test_qualified_return_type(self):
        block = blocks_of("/** @name get */\nstatic std::string Foo::_get () {\n}\n")[0]

        self.assertEqual(block.position, MethodPosition.of(FILE, "Foo", "_get"))


class TestUnattachedComments(unittest.TestCase):
    """Comments without a recognizable header are skipped."""

    def test_orphan_comment_does_not_swallow_next_block(self):
        code = (
            "/** @text orphan */\n"
            "static int counter;\n"
            "/** @name foo */\n"
            "int Foo::_foo () {\n"
            "}\n"
        )
        blocks = blocks_of(code)

        self.assertEqual(len(blocks), 1)
        self.assertEqual(blocks[0].raw_annotations, ("@name foo",))
        self.assertEqual(blocks[0].line, 3)

    def test_comment_without_annotations(self):
        self.assertEqual(blocks_of("/** Plain comment. */\nclass Foo {\n};\n"), [])

    def test_regular_comment(self):
        self.assertEqual(blocks_of("/* @text not documentation */\nclass Foo {\n};\n"), [])

    def test_empty_file(self):
        self.assertEqual(blocks_of(""), [])


class TestSplitting(unittest.TestCase):
    """Test annotation and base list splitting helpers."""

    def test_split_annotations_removes_gutter(self):
        documentation = "@text first line\n * continues here\n * @in number x\n "
        self.assertEqual(
            split_annotations(documentation),
            ["@text first line\ncontinues here", "@in number x"],
        )

    def test_at_inside_word_does_not_split(self):
        self.assertEqual(
            split_annotations("@text mail me@example.com"),
            ["@text mail me@example.com"],
        )

    def test_split_base_list_access_specifiers(self):
        self.assertEqual(split_base_list("public A, protected B, virtual public C"), ["A", "B", "C"])

    def test_split_base_list_drops_templates(self):
        self.assertEqual(
            split_base_list("public MOAINode, public Holder < A, B >"), ["MOAINode"]
        )

    def test_split_base_list_plain(self):
        self.assertEqual(split_base_list(" MOAINode "), ["MOAINode"])


if __name__ == "__main__":
    unittest.main()
