# -*- coding: utf-8 -*-
"""
gtxtranslate CLI Main Module
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

from gtxtranslate.core.errors import TranslateError
from gtxtranslate.core.models import TranslateOptions
from gtxtranslate.core.translator import Translator
from gtxtranslate.utils.config import ConfigManager
from gtxtranslate.utils.logger import setup_logger
from gtxtranslate.version import VERSION


def setup_logging(verbose: bool, log_file: Optional[str] = None, level: str = "INFO"):
    lvl = logging.DEBUG if verbose else getattr(logging, level.upper(), logging.INFO)
    setup_logger("gtxtranslate", log_file=log_file or None, level=lvl)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gtxtranslate", description=f"gtxtranslate v{VERSION} CLI")
    parser.add_argument("--config", help="Path to JSON configuration file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    parser.add_argument("--version", action="version", version=VERSION)

    sub = parser.add_subparsers(dest="command", required=True)

    tr = sub.add_parser("translate", help="Translate a piece of text")
    tr.add_argument("text", help="Text to translate")
    tr.add_argument("--from", "-s", dest="from_lang", default=None, help="Source language (default: auto)")
    tr.add_argument("--to", "-t", dest="to_lang", default=None, help="Target language")
    tr.add_argument("--raw", action="store_true", help="Include the raw upstream payload")
    tr.add_argument("--max-chunk-chars", type=int, default=None, help="Split texts longer than this")
    tr.add_argument("--json", action="store_true", help="Print the full result as JSON")

    wu = sub.add_parser("warmup", help="Pre-translate words into several languages")
    wu.add_argument("--languages", "-l", nargs="+", required=True, help="Target languages")
    wu.add_argument("--words", "-w", nargs="+", required=True, help="Words or phrases to load")

    return parser


async def run_command(args: argparse.Namespace, translator: Translator) -> str:
    async with translator:
        if args.command == "translate":
            opts = TranslateOptions(
                from_lang=args.from_lang,
                to_lang=args.to_lang,
                raw=args.raw,
                max_chunk_chars=args.max_chunk_chars,
            )
            result = await translator.translate(args.text, opts)
            if args.json:
                return json.dumps(result.to_dict(), ensure_ascii=False, indent=2)
            return result.text

        loaded = await translator.load_languages(args.languages, args.words)
        return json.dumps(loaded, ensure_ascii=False, indent=2)


def main(argv: Optional[List[str]] = None, translator: Optional[Translator] = None) -> int:
    args = build_parser().parse_args(argv)

    config_manager = ConfigManager(args.config)
    if config_manager.load_error:
        print(f"{config_manager.load_error}. Using default configuration.", file=sys.stderr)
    setup_logging(args.verbose, config_manager.logging_settings.log_file, config_manager.logging_settings.level)

    if translator is None:
        translator = Translator(settings=config_manager.translator_settings)

    try:
        output = asyncio.run(run_command(args, translator))
    except TranslateError as e:
        print(f"Error {e.code}: {e.message}", file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
