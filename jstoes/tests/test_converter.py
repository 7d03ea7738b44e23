"""End-to-end tests for the two-phase conversion pipeline."""

import logging

import pytest
from jstoes.core.config import ConverterConfig
from jstoes.core.converter import Converter, convert
from jstoes.core.dialects import Dialect
from jstoes.core.rewrite import WrapperMismatchError


BANNER = "// banner\n"


# =========================================================================
# Sample source tree
# =========================================================================

GEOMETRY_JS = '''Global.Geometry = function () {};
'''

OBJECT3D_JS = '''Global.Object3D = function () {
\tthis.id = 0;
};
'''

DUPLICATE_OBJECT3D_JS = '''Global.Object3D = {};
'''

MESH_JS = '''/**
 * A mesh
 */
Global.Mesh = function () {
\tGlobal.Object3D.call( this );
\tthis.geometry = new Global.Geometry();
};
Global.Mesh.prototype = Object.create( Global.Object3D.prototype );
'''

SHADER_GLSL = '''// vertex shader
void main() {}
'''

NAMESPACE_GUARD_JS = '''var Global = Global || {};
Global.Foo = function(){};
Global.Foo.prototype.bar = function(){};
'''

PNG_BYTES = b"\x89PNG\xff\xfe\x00\x80"
LATIN1_GLSL = "// café\nvoid main() {}\n".encode("latin-1")


@pytest.fixture
def source_tree(tmp_path):
    src = tmp_path / "src"
    files = {
        "core/Geometry.js": GEOMETRY_JS,
        "core/Object3D.js": OBJECT3D_JS,
        "extra/Object3D.js": DUPLICATE_OBJECT3D_JS,
        "objects/Mesh.js": MESH_JS,
        "shaders/basic.glsl": SHADER_GLSL,
    }
    for relative, text in files.items():
        path = src / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text)
    return src


def _config(inputs, output, **overrides):
    options = {
        "inputs": [str(path) for path in inputs],
        "output": str(output),
        "banner": BANNER,
        "global": "Global",
    }
    options.update(overrides)
    return ConverterConfig.model_validate(options)


# =========================================================================
# Pipeline output
# =========================================================================

class TestConvertedTree:
    """Tests for the files written by a successful run."""

    @pytest.fixture(autouse=True)
    def run(self, source_tree, tmp_path):
        self.out = tmp_path / "out"
        self.converter = Converter(_config([source_tree], self.out))
        assert self.converter.convert().result() is None

    def test_mesh(self):
        assert (self.out / "objects" / "Mesh.js").read_text() == (
            "// banner\n"
            "import { Object3D } from '../core/Object3D.js'\n"
            "import { Geometry } from '../core/Geometry.js'\n"
            "\n"
            "\n"
            "var Mesh = function () {\n"
            "\tObject3D.call( this );\n"
            "\tthis.geometry = new Geometry();\n"
            "};\n"
            "Mesh.prototype = Object.create( Object3D.prototype );\n"
            "\n"
            "export { Mesh }\n"
        )

    def test_file_without_imports(self):
        assert (self.out / "core" / "Geometry.js").read_text() == (
            "// banner\n"
            "var Geometry = function () {};\n"
            "\n"
            "export { Geometry }\n"
        )

    def test_non_javascript_copied_with_banner(self):
        assert (self.out / "shaders" / "basic.glsl").read_text() == BANNER + SHADER_GLSL

    def test_duplicate_base_name_skipped(self):
        assert not (self.out / "extra" / "Object3D.js").exists()
        assert self.converter.export_map["Object3D"] == str(self.out / "core" / "Object3D.js")

    def test_export_map(self):
        assert set(self.converter.export_map) == {"Geometry", "Object3D", "Mesh"}

    def test_file_map_records(self):
        records = self.converter.file_map
        assert list(records) == ["Geometry", "Object3D", "Mesh", "basic"]
        assert records["Mesh"].classification.dialect is Dialect.CLASSIC
        assert records["Mesh"].exports == ("Mesh",)
        assert records["basic"].classification.dialect is Dialect.UNKNOWN

    def test_result_summary(self):
        result = self.converter.result
        assert result.files_converted == 3
        assert result.files_copied == 1
        assert result.files_skipped == 1
        assert result.files_excluded == 0
        assert result.exports_registered == 3
        assert len(result.outputs) == 4


class TestPipelineOptions:
    """Tests for excludes, edge cases and diagnostics."""

    def test_excludes(self, source_tree, tmp_path):
        out = tmp_path / "out"
        converter = Converter(_config([source_tree], out, excludes=["shaders", "Geometry.js"]))
        converter.convert().result()

        assert not (out / "shaders").exists()
        assert not (out / "core" / "Geometry.js").exists()
        assert converter.result.files_excluded == 2

    def test_missing_producer_is_reported(self, source_tree, tmp_path, caplog):
        out = tmp_path / "out"
        with caplog.at_level(logging.WARNING):
            Converter(_config([source_tree], out, excludes=["Geometry.js"])).convert().result()

        assert "Missing export statement for Geometry" in caplog.text
        mesh = (out / "objects" / "Mesh.js").read_text()
        assert "import { Geometry }" not in mesh
        assert "import { Object3D } from '../core/Object3D.js'" in mesh

    def test_duplicate_is_reported(self, source_tree, tmp_path, caplog):
        with caplog.at_level(logging.WARNING):
            Converter(_config([source_tree], tmp_path / "out")).convert().result()
        assert "The file Object3D already exists in the file map" in caplog.text

    def test_edge_case_output_override(self, source_tree, tmp_path):
        out = tmp_path / "out"
        edge_cases = {"Mesh": {"outputOverride": "Mesh.js"}}
        converter = Converter(_config([source_tree], out, edgeCases=edge_cases))
        converter.convert().result()

        mesh = (out / "Mesh.js").read_text()
        assert "import { Object3D } from './core/Object3D.js'" in mesh
        assert not (out / "objects" / "Mesh.js").exists()

    def test_single_file_input(self, source_tree, tmp_path):
        out = tmp_path / "out"
        Converter(_config([source_tree / "core" / "Geometry.js"], out)).convert().result()
        assert (out / "Geometry.js").exists()

    def test_namespace_guard_is_kept(self, tmp_path):
        src = tmp_path / "src"
        src.mkdir()
        (src / "Foo.js").write_text(NAMESPACE_GUARD_JS)
        out = tmp_path / "out"

        Converter(_config([src], out, banner="")).convert().result()

        assert (out / "Foo.js").read_text() == (
            "var Global = Global || {};\n"
            "var Foo = function(){};\n"
            "Foo.prototype.bar = function(){};\n"
            "\n"
            "export { Foo }\n"
        )

    def test_assets_are_copied_byte_for_byte(self, tmp_path):
        src = tmp_path / "src"
        src.mkdir()
        (src / "tex.png").write_bytes(PNG_BYTES)
        (src / "shader.glsl").write_bytes(LATIN1_GLSL)
        out = tmp_path / "out"

        Converter(_config([src], out)).convert().result()

        assert (out / "tex.png").read_bytes() == BANNER.encode("utf-8") + PNG_BYTES
        assert (out / "shader.glsl").read_bytes() == BANNER.encode("utf-8") + LATIN1_GLSL


# =========================================================================
# Completion styles
# =========================================================================

class TestCompletion:
    """Tests for the callback and future completion styles."""

    def test_callback_success(self, source_tree, tmp_path):
        calls = []
        returned = Converter(_config([source_tree], tmp_path / "out")).convert(
            lambda *args: calls.append(args)
        )
        assert returned is None
        assert calls == [()]

    def test_callback_failure(self, tmp_path):
        calls = []
        Converter(_config([tmp_path / "missing"], tmp_path / "out")).convert(
            lambda *args: calls.append(args)
        )
        assert len(calls) == 1
        assert isinstance(calls[0][0], FileNotFoundError)

    def test_future_failure(self, tmp_path):
        future = convert(_config([tmp_path / "missing"], tmp_path / "out"))
        assert future.done()
        with pytest.raises(FileNotFoundError):
            future.result()

    def test_wrapper_mismatch_aborts(self, tmp_path):
        src = tmp_path / "src"
        src.mkdir()
        (src / "Broken.js").write_text("(function () {\n\tvar a = 1;\n")

        future = Converter(_config([src], tmp_path / "out")).convert()

        assert isinstance(future.exception(), WrapperMismatchError)
        assert not (tmp_path / "out" / "Broken.js").exists()
