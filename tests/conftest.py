"""Shared fixtures: a fake transform engine and a throwaway project tree"""

import json
import re
from pathlib import Path
from typing import List, Tuple

import pytest

from protranspile.core.config import GeneratorConfig
from protranspile.core.declaration_scanner import ClassDeclarationScanner
from protranspile.core.errors import TransformError
from protranspile.core.models import Target, TransformResult
from protranspile.engine.transform_engine import TransformEngine

CALL_SPACING = re.compile(r"\s+\(")


class FakeEngine(TransformEngine):
    """Returns the source text, indented, as the transformed body"""

    def __init__(self, fail_on: Tuple[str, ...] = ()) -> None:
        self.calls: List[Tuple[Path, Target]] = []
        self.fail_on = fail_on
        self.scanner = ClassDeclarationScanner()

    def transform(self, source: Path, target: Target) -> TransformResult:
        self.calls.append((source, target))
        if source.stem in self.fail_on:
            raise TransformError(source, "engine crashed")
        if not source.exists():
            raise TransformError(source, "source file does not exist")
        text = source.read_text(encoding='utf-8')
        body_lines = []
        for line in text.splitlines():
            line = line.strip()
            if not line or line.startswith(("export default class", "import ")):
                continue
            # the real engine drops the space before call parentheses
            body_lines.append(f"    # {target.value}: " + CALL_SPACING.sub("(", line))
        classes = [d.class_name for d in self.scanner.scan(text)]
        return TransformResult(body="\n".join(body_lines), class_names=classes)


TYPE_SURFACE = """declare module 'ccxt' {

    export class Exchange {}

    export namespace pro {
        export const exchanges: string[]
        class Exchange  extends ExchangePro {}
        class stale extends Exchange {}
    }
}
"""

EXCHANGE_SOURCES = {
    "binance": """import binanceRest from '../binance.js';

export default class binance extends binanceRest {
    handleTrades (client, message) {
        const trades = new ArrayCacheBySymbolById (limit);
        const ohlcv = new ArrayCacheByTimestamp (limit);
        const again = new ArrayCacheBySymbolById (limit);
    }
}
""",
    "kraken": """import krakenPro from './krakenPro.js';

export default class kraken extends krakenPro {
    handleOrderBook (client, message) {
        const side = new Asks (deltas);
        const cache = new ArrayCache (limit);
        const orders = new ArrayCacheBySymbolBySide ();
    }
}
""",
    "okx": """import okxRest from '../okx.js';

export default class okx extends okxRest {
    watchTicker (symbol) {
        return this.watch (url, messageHash);
    }
}
""",
}

TEST_SOURCES = {
    "base/test.Cache.ts": "const cache = new ArrayCache (3);\nassert (equals (cache, []));\n",
    "base/test.OrderBook.ts": "const book = new OrderBook ({});\nassert (equals (book['asks'], []));\n",
    "Exchange/test.watchOrderBook.ts": "async function testWatchOrderBook (exchange, symbol) {\n}\n",
    "Exchange/test.watchTrades.ts": "async function testWatchTrades (exchange, symbol) {\n}\n",
}


@pytest.fixture
def engine():
    return FakeEngine()


@pytest.fixture
def workspace(tmp_path):
    """A minimal project tree with three exchanges and four canonical tests"""
    (tmp_path / "exchanges.json").write_text(json.dumps({"ws": list(EXCHANGE_SOURCES)}))
    (tmp_path / "ccxt.d.ts").write_text(TYPE_SURFACE)

    ts_folder = tmp_path / "ts" / "src" / "pro"
    ts_folder.mkdir(parents=True)
    for unit_id, source in EXCHANGE_SOURCES.items():
        (ts_folder / f"{unit_id}.ts").write_text(source)

    test_folder = ts_folder / "test"
    for relative, source in TEST_SOURCES.items():
        path = test_folder / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source)

    return tmp_path


@pytest.fixture
def config(workspace):
    return GeneratorConfig(root=workspace)
