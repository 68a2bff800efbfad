"""
Command line entry point.

    knowledge-tree --input answers.txt --output result.txt
    echo "animale da da" | python -m knowledge_tree
"""

import argparse
import logging
import sys

from .config import Settings, parse_topic_map
from .exceptions import KnowledgeTreeError
from .models import ConfirmationPolicy
from .runner import build_registry, run_game
from .services import iter_tokens


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="knowledge-tree",
        description="Guess an entity by walking a topic's yes/no question tree.",
    )
    parser.add_argument("--input", "-i", type=argparse.FileType("r", encoding="utf-8"),
                        default=None, help="Answer tokens (default: stdin)")
    parser.add_argument("--output", "-o", type=argparse.FileType("w", encoding="utf-8"),
                        default=None, help="Result report (default: stdout)")
    parser.add_argument("--data-dir", type=str, default=None,
                        help="Directory holding the topic documents (default: bundled topics)")
    parser.add_argument("--topic", action="append", default=None, metavar="NAME=FILE",
                        help="Topic document mapping; may be repeated")
    parser.add_argument("--default-topic", type=str, default=None,
                        help="Topic reported when the answers select none")
    parser.add_argument("--confirmation", choices=[p.value for p in ConfirmationPolicy],
                        default=None, help="Meaning of a missing final confirmation")
    parser.add_argument("--log-level", type=str, default=None)
    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    """Environment settings overridden by explicit command line options."""
    settings = Settings.from_env()
    updates: dict[str, object] = {}
    if args.data_dir:
        updates["data_dir"] = args.data_dir
    if args.topic:
        updates["topics"] = parse_topic_map(",".join(args.topic))
    if args.default_topic:
        updates["default_topic"] = args.default_topic
    if args.confirmation:
        updates["confirmation_policy"] = args.confirmation
    if args.log_level:
        updates["log_level"] = args.log_level
    return Settings(**{**settings.model_dump(), **updates})


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        return _run(args)
    finally:
        if args.input is not None:
            args.input.close()
        if args.output is not None:
            args.output.close()


def _run(args: argparse.Namespace) -> int:
    try:
        settings = settings_from_args(args)
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(level=settings.log_level, format="%(levelname)s: %(name)s: %(message)s")

    try:
        registry = build_registry(settings)
        run_game(registry, iter_tokens(args.input or sys.stdin), args.output or sys.stdout,
                 settings=settings)
    except KnowledgeTreeError as e:
        logger.error(f"Fatal error: {e}")
        return 1

    return 0
