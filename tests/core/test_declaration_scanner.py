"""Tests for ClassDeclarationScanner"""

import pytest

from protranspile.core.declaration_scanner import ClassDeclarationScanner
from protranspile.core.errors import UnitSourceError


class TestClassDeclarationScanner:
    """Test suite for ClassDeclarationScanner"""

    def test_scan_export_default_class(self):
        source = """import binanceRest from '../binance.js';

export default class binance extends binanceRest {
}
"""
        declaration = ClassDeclarationScanner().first(source)

        assert declaration.class_name == "binance"
        assert declaration.parent_name == "binanceRest"
        assert declaration.line == 3

    def test_scan_plain_class(self):
        declarations = ClassDeclarationScanner().scan("class kraken extends krakenPro {}")

        assert [(d.class_name, d.parent_name) for d in declarations] == [("kraken", "krakenPro")]

    def test_scan_multiple_classes(self):
        source = "export class a extends b {}\nexport class c extends d {}\n"

        declarations = ClassDeclarationScanner().scan(source)

        assert [d.class_name for d in declarations] == ["a", "c"]
        assert [d.line for d in declarations] == [1, 2]

    def test_class_without_parent_is_ignored(self):
        assert ClassDeclarationScanner().first("export default class Exchange {\n}") is None

    def test_declaration_inside_comment_text_is_ignored(self):
        source = "// see class a extends b for details\n"
        assert ClassDeclarationScanner().first(source) is None

    def test_scan_file(self, tmp_path):
        path = tmp_path / "okx.ts"
        path.write_text("export default class okx extends okxRest {\n}\n")

        declaration = ClassDeclarationScanner().scan_file(path)

        assert declaration.class_name == "okx"

    def test_scan_missing_file_raises(self, tmp_path):
        with pytest.raises(UnitSourceError, match="not found"):
            ClassDeclarationScanner().scan_file(tmp_path / "missing.ts")

    def test_scan_file_without_declaration_raises(self, tmp_path):
        path = tmp_path / "helpers.ts"
        path.write_text("export function helper () {}\n")

        with pytest.raises(UnitSourceError, match="declaration"):
            ClassDeclarationScanner().scan_file(path)

    def test_scan_file_with_invalid_utf8_raises(self, tmp_path):
        path = tmp_path / "kraken.ts"
        path.write_bytes(b"export default class kraken extends krakenPro {\n\xff\xfe\n}\n")

        with pytest.raises(UnitSourceError, match="Cannot read source file"):
            ClassDeclarationScanner().scan_file(path)
