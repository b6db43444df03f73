"""
Unit tests for the Sublime Text completions exporter.
"""

import json
import tempfile
import unittest
from pathlib import Path

from codegraph.models import Overload, Parameter, ParameterDirection
from exporters.sublime import (
    SublimeTextExporter,
    create_completion_list,
    format_replacement_params,
    format_trigger_params,
)
from extraction.diagnostics import WarningList
from extraction.extractor import create_registry, parse_file

SAMPLE_API = Path(__file__).parent / "fixtures" / "sample_api.cpp"


def load_sample_registry():
    registry = create_registry()
    parse_file(str(SAMPLE_API), registry, WarningList())
    return registry


def _in(name, optional=False):
    return Parameter(name, ParameterDirection.IN, is_optional=optional)


class TestParameterFormatting(unittest.TestCase):
    """Test trigger and replacement parameter rendering."""

    def test_trigger_params(self):
        self.assertEqual(format_trigger_params([]), "( )")
        self.assertEqual(format_trigger_params([_in("self"), _in("deck", True)]), "( self, [deck] )")
        self.assertEqual(
            format_trigger_params([_in("x"), _in("y", True), _in("z", True)]), "( x, [y, z] )"
        )

    def test_replacement_params(self):
        self.assertEqual(format_replacement_params([]), "( )")
        self.assertEqual(
            format_replacement_params([_in("x"), _in("y", True)]), "( ${1:x}, ${2:y} )"
        )


class TestCompletionList(unittest.TestCase):
    """Test completion entries built from a parsed registry."""

    @classmethod
    def setUpClass(cls):
        registry = load_sample_registry()
        classes = sorted(registry.scriptable_types(), key=lambda t: t.name)
        cls.completions = create_completion_list(classes)

    def test_completion_entries(self):
        self.assertEqual(
            self.completions,
            [
                "MOAIProp",
                "MOAIProp.ATTR_X_LOC",
                "MOAIProp.deck",
                {"trigger": "MOAIProp.getLoc( self )", "contents": "getLoc( )"},
                {"trigger": "MOAIProp.new( )", "contents": "MOAIProp.new( )"},
                {"trigger": "MOAIProp.setDeck( self, [deck] )", "contents": "setDeck( ${1:deck} )"},
                {
                    "trigger": "MOAIProp.setDeck( self, deckName )",
                    "contents": "setDeck( ${1:deckName} )",
                },
                "MOAITransform",
                "MOAITransform.ATTR_X_LOC",
                {"trigger": "MOAITransform.getLoc( self )", "contents": "getLoc( )"},
            ],
        )

    def test_static_overload_contents_are_qualified(self):
        registry = load_sample_registry()
        prop = registry.get("MOAIProp")
        prop.method_map["new"].overloads.append(
            Overload(parameters=[_in("name")], is_static=True)
        )

        completions = create_completion_list([prop])
        self.assertIn({"trigger": "MOAIProp.new( name )", "contents": "MOAIProp.new( ${1:name} )"}, completions)


class TestSublimeTextExporter(unittest.TestCase):
    """Test writing the completions file."""

    def test_export_writes_commented_json(self):
        registry = load_sample_registry()

        with tempfile.TemporaryDirectory() as tmpdir:
            output_dir = Path(tmpdir) / "sublime"
            path = SublimeTextExporter().export(registry.all_types, "Moai SDK\nGenerated", str(output_dir))

            self.assertEqual(path, output_dir / "lua.sublime-completions")
            text = path.read_text(encoding="utf-8")

        self.assertTrue(text.startswith("// Moai SDK\n// Generated\n\n{"))
        self.assertTrue(text.endswith("}\n"))
        payload = json.loads(text[text.index("{"):])
        self.assertEqual(payload["scope"], "source.lua")
        self.assertNotIn("Hidden", payload["completions"])
        self.assertEqual(payload["completions"][0], "MOAIProp")

    def test_render_without_header(self):
        text = SublimeTextExporter().render([], "")
        self.assertEqual(json.loads(text), {"scope": "source.lua", "completions": []})

    def test_custom_file_name(self):
        self.assertEqual(SublimeTextExporter("moai.sublime-completions").file_name, "moai.sublime-completions")


if __name__ == "__main__":
    unittest.main()
