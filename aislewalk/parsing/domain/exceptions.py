"""
Исключения для домена Parsing.

Сам разбор текста не бросает исключений: любой ввод даёт результат.
Ошибки возникают только при загрузке правил и чтении файлов.
"""


class ParsingError(Exception):
    """Базовое исключение для ошибок домена Parsing."""

    def __init__(self, message: str, component: str = None, original_error: Exception = None):
        self.message = message
        self.component = component
        self.original_error = original_error
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = f"Parsing Error: {self.message}"
        if self.component:
            msg += f" (Component: {self.component})"
        if self.original_error:
            msg += f" [Original: {type(self.original_error).__name__}: {str(self.original_error)}]"
        return msg


class RulesConfigurationError(ParsingError):
    """Некорректный YAML с правилами (синтаксис или тип ключа)."""
    pass


class RulesFileNotFoundError(RulesConfigurationError):
    """Файл с правилами не найден."""
    pass


class ShoppingListFileNotFoundError(ParsingError):
    """Файл со списком покупок не найден."""
    pass
