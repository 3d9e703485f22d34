"""
Основной пайплайн Aislewalk.

Объединяет три домена:
1. Parsing: свободный текст -> ParsedItem[]
2. Lookup: ParsedItem -> отдел магазина (кеш + API)
3. Rendering: Markdown в порядке обхода магазина
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional
from loguru import logger

from config.settings import CACHE_PATH, DEFAULT_STORE_ID
from contracts.d1_parsing_dto import ShoppingListDTO

from .lookup import LocationResolver, LookupCache, ResolutionResult, StorefrontClient
from .lookup.domain.interfaces import ILocationProvider
from .parsing import ParsingPipeline
from .parsing.domain.exceptions import ShoppingListFileNotFoundError
from .rendering import MarkdownRenderer, RenderResult


@dataclass
class ShoppingListRunResult:
    """Результат полного запуска: разбор, расположения, Markdown."""
    parsed: ShoppingListDTO
    resolution: ResolutionResult
    render: RenderResult
    output_path: Path

    def to_dict(self) -> dict:
        return {
            "parsed": self.parsed.model_dump(),
            "resolution": self.resolution.to_dict(),
            "render": self.render.to_dict(),
            "output_path": str(self.output_path),
        }


class ShoppingListPipeline:
    """Полный пайплайн: файл списка -> Markdown файл рядом с ним."""

    def __init__(
        self,
        parsing_pipeline: Optional[ParsingPipeline] = None,
        provider: Optional[ILocationProvider] = None,
        cache: Optional[LookupCache] = None,
        renderer: Optional[MarkdownRenderer] = None,
        store_id: str = DEFAULT_STORE_ID,
    ):
        self.store_id = store_id
        self.parsing_pipeline = parsing_pipeline or ParsingPipeline()
        self.provider = provider or StorefrontClient(store_id=store_id)
        self.cache = cache if cache is not None else LookupCache(CACHE_PATH, store_id)
        self.renderer = renderer or MarkdownRenderer(store_id=store_id)
        self.resolver = LocationResolver(self.provider, self.cache)

    def run(
        self,
        input_path: Path,
        output_dir: Optional[Path] = None,
        generated_at: Optional[datetime] = None,
    ) -> ShoppingListRunResult:
        """
        Обрабатывает файл списка покупок.

        Args:
            input_path: Путь к текстовому списку (UTF-8)
            output_dir: Куда писать Markdown (по умолчанию рядом со списком)
            generated_at: Время для заголовка и имени файла (по умолчанию сейчас)

        Returns:
            ShoppingListRunResult
        """
        input_path = Path(input_path)
        generated_at = generated_at or datetime.now()

        if not input_path.exists():
            raise ShoppingListFileNotFoundError(
                message=f"Файл не найден: {input_path}",
                component="ShoppingListPipeline"
            )
        raw_text = input_path.read_text(encoding="utf-8")

        # --- 1. PARSING ---
        parsing = self.parsing_pipeline.process(raw_text, source_file=input_path.name)
        dto = parsing.dto
        logger.info(
            f"Parsing {input_path.name}... {len(dto.shopping_items)} items, "
            f"{len(dto.directives)} directive{'s' if len(dto.directives) != 1 else ''} skipped."
        )

        # --- 2. LOOKUP ---
        logger.info("Looking up aisle locations...")
        self.cache.load()
        resolution = self.resolver.resolve(dto.items)
        self.cache.save()

        # --- 3. RENDERING ---
        render = self.renderer.render(
            resolution.resolved,
            raw_text=raw_text,
            source_name=input_path.name,
            generated_at=generated_at,
        )
        target_dir = Path(output_dir) if output_dir else input_path.parent
        output_path = self.renderer.write(render, target_dir / self.renderer.output_filename(generated_at))

        logger.info(
            f"Wrote {output_path.name} ({len(dto.shopping_items)} items, "
            f"{render.found_count} found, {render.unknown_count} unknown)"
        )

        return ShoppingListRunResult(
            parsed=dto,
            resolution=resolution,
            render=render,
            output_path=output_path,
        )
