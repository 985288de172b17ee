"""Main CLI entry point for protranspile"""

import sys
import argparse
import traceback
from pathlib import Path
from typing import List, Optional

from protranspile.core.build_logger import BuildLogger
from protranspile.core.config import GeneratorConfig
from protranspile.core.errors import ProTranspileError
from protranspile.core.models import RunOptions, RunResult
from protranspile.engine.transform_engine import CommandEngine, TransformEngine
from protranspile.orchestrator import Orchestrator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="protranspile",
        description="Generate Python and PHP streaming classes and tests from the TypeScript sources",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Regenerate every out-of-date exchange, the type surface and the tests
  protranspile

  # Regenerate two exchanges, ignoring timestamps
  protranspile binance okx --force

  # Only regenerate the derived tests
  protranspile --test

  # Spread all exchanges over worker processes
  protranspile --multi
        """
    )
    parser.add_argument(
        "units", nargs="*", metavar="EXCHANGE",
        help="Exchange ids to generate (default: all registered)"
    )
    parser.add_argument(
        "--test", "--tests", dest="test_only", action="store_true",
        help="Only regenerate the derived test files"
    )
    parser.add_argument(
        "--force", action="store_true",
        help="Regenerate files even if they are newer than their source"
    )
    parser.add_argument(
        "--multiprocess", "--multi", dest="multiprocess", action="store_true",
        help="Fan the exchanges out to worker processes"
    )
    parser.add_argument(
        "--child", action="store_true",
        help="Worker mode: generate class files only, no tests and no report"
    )
    parser.add_argument(
        "--workers", type=int,
        help="Number of worker processes in multiprocess mode (default: CPU count)"
    )
    parser.add_argument(
        "--config", type=Path,
        help="YAML config file (default: protranspile.yaml in the project root)"
    )
    parser.add_argument(
        "--root", type=Path, default=Path.cwd(),
        help="Project root (default: current directory)"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Print every generated file"
    )
    return parser


def parse_options(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse arguments; exchange ids and flags may be interleaved"""
    parser = build_parser()
    args = parser.parse_intermixed_args(argv)
    if args.workers is not None and args.workers < 1:
        parser.error("--workers must be a positive integer")
    return args


def options_from_args(args: argparse.Namespace) -> RunOptions:
    return RunOptions(
        units=tuple(args.units),
        force=args.force,
        child=args.child,
        multiprocess=args.multiprocess,
        test_only=args.test_only,
        verbose=args.verbose,
        workers=args.workers,
    )


def build_engine(config: GeneratorConfig) -> TransformEngine:
    return CommandEngine(config.engine.command, cwd=config.root)


def run(options: RunOptions, config: GeneratorConfig, engine: TransformEngine,
        logger: BuildLogger, config_path: Optional[Path] = None) -> RunResult:
    """Dispatch to the mode selected by options"""
    orchestrator = Orchestrator(config, engine, logger=logger)
    if not options.child and not options.multiprocess:
        logger.info(f"isForceTranspile {options.force}")
    if options.multiprocess and not options.test_only:
        return orchestrator.run_multiprocess(options, config_path=config_path)
    return orchestrator.run(options)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point"""
    args = parse_options(argv)
    options = options_from_args(args)
    logger = BuildLogger(verbose=args.verbose)

    try:
        config_path = args.config.resolve() if args.config else None
        config = GeneratorConfig.load(config_path, root=args.root.resolve())
        engine = build_engine(config)
        result = run(options, config, engine, logger, config_path=config_path)
    except ProTranspileError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error running protranspile: {e}", file=sys.stderr)
        traceback.print_exc()
        return 1

    return result.exit_code


if __name__ == "__main__":
    sys.exit(main())
