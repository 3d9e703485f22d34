"""
Домен Rendering (D3): Markdown список в порядке обхода магазина.

Вход: contracts.ResolvedItem (от D2)
Выход: Markdown документ
"""

from .markdown_renderer import MarkdownRenderer, RenderResult

__all__ = [
    "MarkdownRenderer",
    "RenderResult",
]
