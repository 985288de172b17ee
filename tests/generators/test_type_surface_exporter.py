"""Tests for TypeSurfaceExporter"""

import pytest

from protranspile.core.errors import TypeSurfaceDesyncError
from protranspile.generators.type_surface_exporter import TypeSurfaceExporter


class TestTypeSurfaceExporter:
    """Test suite for TypeSurfaceExporter"""

    def test_build_block(self):
        block = TypeSurfaceExporter().build_block(["binance", "okx"])

        assert block.split("\n") == [
            "",
            "",
            "    export namespace pro {",
            "        export const exchanges: string[]",
            "        class Exchange  extends ExchangePro {}",
            "        class binance extends Exchange {}",
            "        class okx extends Exchange {}",
            "    }",
        ]

    def test_export_replaces_block(self, workspace):
        path = workspace / "ccxt.d.ts"
        names = TypeSurfaceExporter().export(path, ["binance", "kraken"])
        content = path.read_text()

        assert names == ["binance", "kraken"]
        assert "class binance extends Exchange {}" in content
        assert "class kraken extends Exchange {}" in content
        assert "class stale extends Exchange {}" not in content

    def test_content_outside_block_preserved(self, workspace):
        path = workspace / "ccxt.d.ts"
        TypeSurfaceExporter().export(path, ["binance"])
        content = path.read_text()

        assert content.startswith("declare module 'ccxt' {\n\n    export class Exchange {}")
        assert content.endswith("    }\n}\n")

    def test_common_lines_appear_once(self, workspace):
        path = workspace / "ccxt.d.ts"
        exporter = TypeSurfaceExporter()
        exporter.export(path, ["binance"])
        exporter.export(path, ["binance"])
        content = path.read_text()

        assert content.count("export const exchanges: string[]") == 1
        assert content.count("class Exchange  extends ExchangePro {}") == 1
        assert content.count("export namespace pro {") == 1

    def test_idempotent(self, workspace):
        path = workspace / "ccxt.d.ts"
        exporter = TypeSurfaceExporter()
        exporter.export(path, ["binance", "okx"])
        first = path.read_text()
        exporter.export(path, ["binance", "okx"])

        assert path.read_text() == first

    def test_duplicate_names_listed_once(self, workspace):
        path = workspace / "ccxt.d.ts"
        names = TypeSurfaceExporter().export(path, ["okx", "binance", "okx"])

        assert names == ["okx", "binance"]
        assert path.read_text().count("class okx extends Exchange {}") == 1

    def test_empty_class_list(self, workspace):
        path = workspace / "ccxt.d.ts"
        TypeSurfaceExporter().export(path, [])
        content = path.read_text()

        assert "export const exchanges: string[]" in content
        assert "extends Exchange {}" not in content

    def test_nested_braces_inside_block(self, tmp_path):
        path = tmp_path / "ccxt.d.ts"
        path.write_text(
            "declare module 'ccxt' {\n\n    export namespace pro {\n"
            "        interface Options { limit: number }\n    }\n\n    export const after = 1\n}\n"
        )
        TypeSurfaceExporter().export(path, ["okx"])
        content = path.read_text()

        assert "interface Options" not in content
        assert "export const after = 1" in content
        assert "class okx extends Exchange {}" in content

    def test_missing_block_is_desync(self, tmp_path):
        path = tmp_path / "ccxt.d.ts"
        path.write_text("declare module 'ccxt' {\n    export class Exchange {}\n}\n")

        with pytest.raises(TypeSurfaceDesyncError):
            TypeSurfaceExporter().export(path, ["okx"])
        assert path.read_text() == "declare module 'ccxt' {\n    export class Exchange {}\n}\n"

    def test_unclosed_block_is_desync(self, tmp_path):
        path = tmp_path / "ccxt.d.ts"
        original = "declare module 'ccxt' {\n\n    export namespace pro {\n        class a extends Exchange {}\n"
        path.write_text(original)

        with pytest.raises(TypeSurfaceDesyncError):
            TypeSurfaceExporter().export(path, ["okx"])
        assert path.read_text() == original

    def test_growing_class_list_reexport(self, workspace):
        path = workspace / "ccxt.d.ts"
        exporter = TypeSurfaceExporter()
        exporter.export(path, ["binance", "kraken"])
        exporter.export(path, ["binance", "kraken", "okx"])
        lines = path.read_text().split("\n")

        class_lines = [line for line in lines if line.endswith(" extends Exchange {}")]
        assert class_lines == [
            "        class binance extends Exchange {}",
            "        class kraken extends Exchange {}",
            "        class okx extends Exchange {}",
        ]
        assert lines.count("        export const exchanges: string[]") == 1
        assert lines.count("        class Exchange  extends ExchangePro {}") == 1
