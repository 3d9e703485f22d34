"""
Исключения для домена Lookup.

Ошибки поиска расположения товара и работы с кешем.
"""


class LocationLookupError(Exception):
    """Базовое исключение для ошибок домена Lookup."""

    def __init__(self, message: str, component: str = None, original_error: Exception = None):
        self.message = message
        self.component = component
        self.original_error = original_error
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = f"Lookup Error: {self.message}"
        if self.component:
            msg += f" (Component: {self.component})"
        if self.original_error:
            msg += f" [Original: {type(self.original_error).__name__}: {str(self.original_error)}]"
        return msg


class LookupRequestError(LocationLookupError):
    """HTTP запрос не удался после всех повторов."""
    pass


class LookupResponseError(LocationLookupError):
    """Ответ API в неожиданном формате (не JSON)."""
    pass


class LookupCacheError(LocationLookupError):
    """Ошибка записи кеша."""
    pass
