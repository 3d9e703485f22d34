"""
Таблицы правил разбора (YAML).

Экспортирует:
- ConfigLoader: загрузка base.yaml + пользовательского YAML
- RulesConfig: неизменяемые таблицы и паттерны
"""

from .config_loader import ConfigLoader, RulesConfig, BASE_RULES_FILE

__all__ = [
    "ConfigLoader",
    "RulesConfig",
    "BASE_RULES_FILE",
]
