"""Tests for import resolution heuristics."""

from jstoes.core.config import EdgeCase
from jstoes.core.dialects import DialectPatterns, ExplicitImport, ExportAction, ExportEntry
from jstoes.core.imports import (
    explicit_imports,
    instantiations,
    prototype_inheritance,
    prototype_merges,
    resolve_imports,
    type_checks,
)


PATTERNS = DialectPatterns.for_global("Global")


# =========================================================================
# Sample scripts
# =========================================================================

MESH_SOURCE = '''
import { Vector3, Color as Col } from './math.js';
import Loader from './Loader.js';
import * as Utils from './utils.js';

Global.Mesh = function () {
    Object.assign( Global.Mesh.prototype, Global.EventDispatcher.prototype, {} );
};

Global.Mesh.prototype = Object.create( Global.Object3D.prototype );

var geometry = new Global.Geometry();
if ( material instanceof Global.Material ) {}
var clone = new Global.Mesh();
'''


# =========================================================================
# Individual heuristics
# =========================================================================

class TestHeuristics:
    """Each heuristic in isolation."""

    def test_explicit_imports(self):
        assert explicit_imports(MESH_SOURCE) == ["Vector3", "Color as Col", "Loader"]

    def test_default_and_named_clause(self):
        text = "import Foo, { Bar, Baz } from './x.js';"
        assert explicit_imports(text) == ["Foo", "Bar", "Baz"]

    def test_namespace_import_is_ignored(self):
        assert explicit_imports("import * as Utils from './utils.js';") == []

    def test_prototype_merges(self):
        assert prototype_merges(MESH_SOURCE, PATTERNS) == ["Mesh", "EventDispatcher"]

    def test_single_prototype_assign_is_not_a_merge(self):
        text = "Object.assign( Global.Mesh.prototype, { update: function () {} } );"
        assert prototype_merges(text, PATTERNS) == []

    def test_prototype_inheritance(self):
        assert prototype_inheritance(MESH_SOURCE, PATTERNS) == ["Object3D"]

    def test_prototype_inheritance_without_namespace(self):
        text = "Foo.prototype = Object.create( Base.prototype );"
        assert prototype_inheritance(text, PATTERNS) == ["Base"]

    def test_instantiations(self):
        assert instantiations(MESH_SOURCE, PATTERNS) == ["Geometry", "Mesh"]

    def test_type_checks(self):
        assert type_checks(MESH_SOURCE, PATTERNS) == ["Material"]


# =========================================================================
# resolve_imports
# =========================================================================

class TestResolveImports:
    """Tests for the combined import set."""

    def test_heuristic_order_without_self_reference(self):
        assert resolve_imports(MESH_SOURCE, ["Mesh"], PATTERNS) == [
            "Vector3",
            "Color as Col",
            "Loader",
            "EventDispatcher",
            "Object3D",
            "Geometry",
            "Material",
        ]

    def test_deduplicated(self):
        text = "new Global.A(); new Global.A(); x instanceof Global.A;"
        assert resolve_imports(text, ["B"], PATTERNS) == ["A"]

    def test_renamed_export_is_not_imported(self):
        exports = [ExportEntry("Impl", ExportAction.AS, "Widget")]
        text = "var w = new Global.Widget();"
        assert resolve_imports(text, exports, PATTERNS) == []

    def test_no_references(self):
        assert resolve_imports("var x = 1;", ["File"], PATTERNS) == []

    def test_override(self):
        edge_case = EdgeCase(importsOverride=["Only"])
        assert resolve_imports(MESH_SOURCE, ["Mesh"], PATTERNS, edge_case) == ["Only"]

    def test_additive_imports(self):
        edge_case = EdgeCase(imports=["Geometry", ["Earcut", "from", "./vendor/earcut.js"]])
        imports = resolve_imports("new Global.Geometry();", ["Shape"], PATTERNS, edge_case)
        assert imports == ["Geometry", ExplicitImport("Earcut", "./vendor/earcut.js")]

    def test_renamed_import_of_own_export_is_dropped(self):
        text = "import { Widget as W } from './Widget.js';"
        assert resolve_imports(text, ["Widget"], PATTERNS) == []
