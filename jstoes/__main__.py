import argparse
import logging
import sys

from pydantic import ValidationError

from .core.config import load_config
from .core.converter import Converter


def setup_logging(log_level: str = "INFO") -> None:
    """Configure application logging."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr)
        ]
    )


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jstoes",
        description="jstoes - Convert legacy JavaScript files into ES modules",
    )
    parser.add_argument(
        "config",
        type=str,
        help="Path to a YAML config file"
    )
    parser.add_argument(
        "--inputs",
        type=str,
        nargs="+",
        default=None,
        help="Files or directories to convert (overrides the config file)"
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output directory (overrides the config file)"
    )
    parser.add_argument(
        "--global",
        dest="global_name",
        type=str,
        default=None,
        help="Legacy global namespace identifier, e.g. THREE"
    )
    parser.add_argument(
        "--banner",
        type=str,
        default=None,
        help="Header prefixed to every emitted file"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level"
    )
    return parser


def main(argv=None) -> int:
    """Main entry point for jstoes."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    overrides = {
        "inputs": args.inputs,
        "output": args.output,
        "global": args.global_name,
        "banner": args.banner,
    }

    try:
        config = load_config(args.config, **overrides)
    except (OSError, ValueError, ValidationError) as e:
        logger.error(f"Invalid configuration {args.config}: {e}")
        return 1

    converter = Converter(config)
    try:
        converter.convert().result()
    except Exception as e:
        logger.error(f"Conversion failed: {e}")
        return 1

    result = converter.result
    logger.info(
        f"Done: {result.files_converted} converted, {result.files_copied} copied, "
        f"{result.files_skipped} skipped, {result.exports_registered} exports registered "
        f"-> {config.output}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
