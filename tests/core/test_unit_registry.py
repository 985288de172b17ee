"""Tests for UnitRegistry"""

import json

import pytest

from protranspile.core.config import GeneratorConfig
from protranspile.core.errors import ConfigError, UnitSourceError
from protranspile.core.models import Target
from protranspile.core.registry import UnitRegistry


class TestUnitRegistry:
    """Test suite for UnitRegistry"""

    def test_unit_ids_in_registry_order(self, config):
        assert UnitRegistry(config).unit_ids() == ["binance", "kraken", "okx"]

    def test_unit_ids_are_deduplicated(self, tmp_path):
        (tmp_path / "exchanges.json").write_text(json.dumps({"ws": ["okx", "okx", "binance"]}))

        assert UnitRegistry(GeneratorConfig(root=tmp_path)).unit_ids() == ["okx", "binance"]

    def test_select_all_when_empty(self, config):
        assert UnitRegistry(config).select(()) == ["binance", "kraken", "okx"]

    def test_select_subset_keeps_registry_order(self, config):
        assert UnitRegistry(config).select(["okx", "binance"]) == ["binance", "okx"]

    def test_select_unknown_matches_nothing(self, config):
        registry = UnitRegistry(config)

        assert registry.select(["bitmex"]) == []
        assert registry.unknown(["bitmex", "okx"]) == ["bitmex"]

    def test_missing_registry_file_raises(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            UnitRegistry(GeneratorConfig(root=tmp_path)).unit_ids()

    def test_registry_without_ws_key_raises(self, tmp_path):
        (tmp_path / "exchanges.json").write_text(json.dumps({"ids": ["okx"]}))

        with pytest.raises(ConfigError, match="'ws'"):
            UnitRegistry(GeneratorConfig(root=tmp_path)).unit_ids()

    def test_resolve_builds_unit(self, config, workspace):
        unit = UnitRegistry(config).resolve("binance")

        assert unit.identifier == "binance"
        assert unit.class_name == "binance"
        assert unit.parent_name == "binanceRest"
        assert unit.source_path == workspace / "ts" / "src" / "pro" / "binance.ts"
        assert unit.output_paths[Target.PYTHON] == workspace / "python" / "ccxt" / "pro" / "binance.py"
        assert unit.output_paths[Target.PHP] == workspace / "php" / "pro" / "binance.php"

    def test_resolve_missing_source_raises(self, config):
        with pytest.raises(UnitSourceError):
            UnitRegistry(config).resolve("bitmex")
