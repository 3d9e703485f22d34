import re
from dataclasses import dataclass
from typing import Optional

from ..rules.config_loader import RulesConfig


@dataclass
class QtyResult:
    qty: str
    name: str
    rule: str = ""


class QuantityParser:
    """
    Элемент-функция: Извлекает количество из текста товара.

    Порядок паттернов - контракт (первое совпадение побеждает):
    1. "eggs x2" / "eggs x 2"           -> qty="2"
    2. "4 cans tuna", "2 packs of gum"  -> qty="4 cans"
    3. "3-4 avocados", "4 limes"        -> qty="3-4"
    """

    def __init__(self):
        # Паттерн: Eggs x2
        self.trailing_x_pattern = re.compile(r'^(.+?)\s+x\s*(\d+)\s*$', re.IGNORECASE)
        # Паттерн: 3-4 avocados
        self.leading_number_pattern = re.compile(r'^(\d+[-–]\d+|\d+)\s+(.+)')
        # Короткий остаток в нижнем регистре: "7 up" - часть названия, а не количество
        self.fused_name_pattern = re.compile(r'^[a-z]')

    def parse(
        self,
        text: str,
        rules: RulesConfig,
        dozen: bool = False,
        shared_qty: Optional[str] = None,
    ) -> QtyResult:
        """
        ЦКП: Объект QtyResult (qty == "" если количество не найдено).

        Args:
            text: Текст товара без заметок
            rules: Таблицы правил (единицы количества)
            dozen: Был префикс "dz" - количество в дюжинах
            shared_qty: Общее количество строки ("1 bag each")
        """
        result = self._match(text, rules) or QtyResult(qty="", name=text)

        if dozen:
            result.qty = f"{result.qty} dozen" if result.qty else "dozen"

        if not result.qty and shared_qty:
            result.qty = shared_qty
            result.rule = "shared"

        return result

    def _match(self, text: str, rules: RulesConfig) -> Optional[QtyResult]:
        match = self.trailing_x_pattern.match(text)
        if match:
            return QtyResult(qty=match.group(2), name=match.group(1).strip(), rule="trailing_x")

        match = rules.leading_qty_re.match(text)
        if match:
            return QtyResult(
                qty=f"{match.group(1)} {match.group(2)}".strip(),
                name=match.group(3).strip(),
                rule="leading_unit",
            )

        match = self.leading_number_pattern.match(text)
        if match:
            rest = match.group(2)
            if not self.fused_name_pattern.match(rest) or len(rest) > 2:
                return QtyResult(qty=match.group(1), name=rest.strip(), rule="leading_number")

        return None
