#!/usr/bin/env python3
"""
Точка входа Aislewalk: список покупок -> Markdown в порядке обхода магазина.

Использование:
    # Разобрать список, найти отделы, записать Feb-14.md рядом со списком
    python scripts/shop.py list.txt

    # Другой магазин и свой кеш
    python scripts/shop.py list.txt --store 601 --cache /tmp/cache.json

    # Только разбор (JSON в stdout, без обращения к API)
    python scripts/shop.py list.txt --parse-only
"""

import sys
import argparse
import json
from pathlib import Path

# Добавляем корень проекта в путь
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from loguru import logger

from config.settings import (
    CACHE_PATH,
    DEFAULT_STORE_ID,
    LOG_FORMAT,
    LOG_LEVEL,
    RULES_OVERLAY_PATH,
    validate_config,
)
from aislewalk.lookup import LookupCache, StorefrontClient
from aislewalk.lookup.domain.exceptions import LocationLookupError
from aislewalk.parsing import ConfigLoader, ParsingPipeline
from aislewalk.parsing.domain.exceptions import ParsingError
from aislewalk.pipeline import ShoppingListPipeline
from aislewalk.rendering import MarkdownRenderer
from aislewalk.rendering.domain.exceptions import RenderingError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Aislewalk: shopping list -> store walk order")
    parser.add_argument("path", help="Путь к текстовому списку покупок")
    parser.add_argument("--store", default=DEFAULT_STORE_ID, help="Номер магазина")
    parser.add_argument("--cache", default=str(CACHE_PATH), help="Путь к JSON кешу отделов")
    parser.add_argument("--rules", default=RULES_OVERLAY_PATH, help="Пользовательский YAML с правилами")
    parser.add_argument("--out", default=None, help="Директория для Markdown (по умолчанию рядом со списком)")
    parser.add_argument("--parse-only", action="store_true", help="Только разбор, JSON в stdout")
    parser.add_argument("--log-level", default=LOG_LEVEL, help="Уровень логирования")
    return parser


def main(argv=None) -> int:
    """Главная функция запуска."""
    args = build_parser().parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=args.log_level.upper())

    try:
        validate_config()
    except ValueError as e:
        logger.error(f"[CONFIG] {e}")
        return 1

    input_path = Path(args.path)
    if not input_path.exists():
        logger.error(f"Файл не найден: {input_path}")
        return 1

    try:
        parsing_pipeline = ParsingPipeline(
            config_loader=ConfigLoader(overlay_path=Path(args.rules) if args.rules else None)
        )

        if args.parse_only:
            result = parsing_pipeline.process_file(input_path)
            print(json.dumps(result.dto.model_dump(), ensure_ascii=False, indent=2))
            return 0

        pipeline = ShoppingListPipeline(
            parsing_pipeline=parsing_pipeline,
            provider=StorefrontClient(store_id=args.store),
            cache=LookupCache(Path(args.cache), args.store),
            renderer=MarkdownRenderer(store_id=args.store),
            store_id=args.store,
        )
        run = pipeline.run(input_path, output_dir=Path(args.out) if args.out else None)

    except (ParsingError, LocationLookupError, RenderingError) as e:
        logger.error(str(e))
        return 1

    print(run.output_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
