"""
Stage 1: Block Classification

ЦКП: Блоки списка с контекстом секции.
"""

from .stage import BlockStage, BlockResult, Block, BlockKind

__all__ = [
    "BlockStage",
    "BlockResult",
    "Block",
    "BlockKind",
]
