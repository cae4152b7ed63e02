"""Localized strings used in generated descriptions and summaries."""

MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "max": "max {value}",
        "min": "min {value}",
        "unique": "must be unique",
        "exists": "must reference an existing record",
        "id_of": "ID of {name}",
        "summary_get": "Get {name}",
        "summary_post": "Create {name}",
        "summary_update": "Update {name}",
        "summary_delete": "Delete {name}",
        "response_success": "Successful response",
        "response_created": "Resource created",
        "response_bad_request": "Bad request",
        "response_unauthorized": "Unauthorized",
        "response_not_found": "Resource not found",
        "response_validation_error": "Validation error",
        "response_no_content": "Resource deleted",
        "format_simple": "REST API",
        "format_json_api": "API follows the JSON:API specification",
    },
    "ru": {
        "max": "макс. {value}",
        "min": "мин. {value}",
        "unique": "должно быть уникальным",
        "exists": "должно ссылаться на существующую запись",
        "id_of": "ID {name}",
        "summary_get": "Получить {name}",
        "summary_post": "Создать {name}",
        "summary_update": "Обновить {name}",
        "summary_delete": "Удалить {name}",
        "response_success": "Успешный ответ",
        "response_created": "Ресурс создан",
        "response_bad_request": "Некорректный запрос",
        "response_unauthorized": "Не авторизован",
        "response_not_found": "Ресурс не найден",
        "response_validation_error": "Ошибка валидации",
        "response_no_content": "Ресурс удален",
        "format_simple": "REST API",
        "format_json_api": "API следует спецификации JSON:API",
    },
}

DEFAULT_LOCALE = "en"

STATUS_TEXT = {
    200: "Success",
    201: "Created",
    204: "No Content",
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    422: "Validation Error",
    500: "Server Error",
}


class Messages:
    """Message lookup for one locale, falling back to English."""

    def __init__(self, locale: str | None = None):
        self.locale = locale if locale in MESSAGES else DEFAULT_LOCALE

    def get(self, key: str, **params) -> str:
        table = MESSAGES[self.locale]
        template = table.get(key) or MESSAGES[DEFAULT_LOCALE].get(key, key)
        return template.format(**params)


def status_text(status: int) -> str:
    return STATUS_TEXT.get(status, f"HTTP {status}")
