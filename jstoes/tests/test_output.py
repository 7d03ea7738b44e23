"""Tests for import/export block formatting."""

import logging

from jstoes.core.dialects import ExplicitImport, ExportAction, ExportEntry
from jstoes.core.output import assemble, format_exports, format_imports, relative_specifier


EXPORT_MAP = {
    "A": "/out/a/A.js",
    "B": "/out/b/B.js",
    "C": "/out/a/A.js",
}


class TestRelativeSpecifier:

    def test_sibling_directory(self):
        assert relative_specifier("/out/a/c/Y.js", "/out/a/b/X.js") == "../b/X.js"

    def test_same_directory(self):
        assert relative_specifier("/out/a/Y.js", "/out/a/X.js") == "./X.js"

    def test_subdirectory(self):
        assert relative_specifier("/out/Y.js", "/out/sub/X.js") == "./sub/X.js"

    def test_parent_directory(self):
        assert relative_specifier("/out/a/b/Y.js", "/out/X.js") == "../../X.js"


class TestFormatImports:
    """Tests for the import block."""

    def test_grouped_by_producer(self):
        block = format_imports("/out/a/Y.js", EXPORT_MAP, ["A", "B", "C"])
        assert block == (
            "import {\n"
            "\tA,\n"
            "\tC\n"
            "} from './A.js'\n"
            "import { B } from '../b/B.js'\n"
            "\n"
        )

    def test_renamed_import_keeps_local_name(self):
        block = format_imports("/out/a/Y.js", EXPORT_MAP, ["B as Local"])
        assert block == "import { B as Local } from '../b/B.js'\n\n"

    def test_explicit_import_uses_given_specifier(self):
        block = format_imports("/out/a/Y.js", EXPORT_MAP, [ExplicitImport("V", "./vendor/v.js")])
        assert block == "import { V } from './vendor/v.js'\n\n"

    def test_missing_symbol_is_dropped(self, caplog):
        with caplog.at_level(logging.WARNING):
            block = format_imports("/out/a/Y.js", EXPORT_MAP, ["Missing", "B"])

        assert block == "import { B } from '../b/B.js'\n\n"
        assert "Missing export statement for Missing" in caplog.text

    def test_no_imports(self):
        assert format_imports("/out/a/Y.js", EXPORT_MAP, []) == ""


class TestFormatExports:
    """Tests for the export block."""

    def test_structured_then_regular(self):
        exports = [
            ExportEntry("D", ExportAction.FROM, "./d.js"),
            "A",
            ExportEntry("B", ExportAction.AS, "C"),
        ]
        assert format_exports("/out/X.js", exports) == (
            'export { D } from "./d.js"\n'
            "export { B as C }\n"
            "\n"
            "export { A }\n"
        )

    def test_multiple_regular(self):
        assert format_exports("/out/X.js", ["A", "B"]) == "\nexport {\n\tA,\n\tB\n}\n"

    def test_structured_only(self):
        exports = [ExportEntry("B", ExportAction.AS, "C")]
        assert format_exports("/out/X.js", exports) == "export { B as C }\n"

    def test_no_exports(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert format_exports("/out/X.js", []) == ""
        assert "X.js does not contain explicit or implicit exports" in caplog.text


class TestAssemble:

    def test_concatenation_order(self):
        assert assemble("/* banner */\n", "IMPORTS", "BODY", "EXPORTS") == (
            "/* banner */\nIMPORTSBODYEXPORTS"
        )
