# src/github_client/utils/sanitizer.py
"""
Утилита для маскирования чувствительных данных в логах.

Защищает токены GitHub, пароли Basic аутентификации и client_secret
OAuth приложений от попадания в логи.
"""

import re
from typing import Any, Dict


# Список чувствительных полей (case-insensitive, частичное совпадение)
SENSITIVE_KEYS = {
    # Пароли
    'password', 'passwd',
    # Токены
    'token', 'access_token', 'refresh_token', 'jwt',
    # Секреты
    'secret', 'client_secret',
    # API ключи
    'api_key', 'private_key',
    # Аутентификация
    'authorization', 'credentials',
    # Сессии и куки
    'cookie', 'session',
    # Одноразовые коды (X-GitHub-OTP)
    'otp',
}

# Регулярные выражения для обнаружения sensitive данных в строках
SENSITIVE_PATTERNS = [
    # Authorization: token <value> / Bearer <value>
    (re.compile(r'\b(token\s+|Bearer\s+)([A-Za-z0-9\-._~+/]+=*)', re.IGNORECASE), r'\1***REDACTED***'),
    # Basic auth в заголовках
    (re.compile(r'(Basic\s+)([A-Za-z0-9+/]+=*)', re.IGNORECASE), r'\1***REDACTED***'),
    # Query параметры аутентификации GitHub
    (re.compile(r'((?:access_token|client_secret)=)([^\s&,;]+)', re.IGNORECASE), r'\1***REDACTED***'),
    # Пароль в URL (user:password@host)
    (re.compile(r'://([^:/@\s]+):([^@\s]+)@'), r'://\1:***REDACTED***@'),
]


def mask_sensitive_data(data: Any, mask: str = "***REDACTED***") -> Any:
    """
    Рекурсивно маскирует чувствительные данные в словарях, списках, строках.

    Args:
        data: Данные для маскирования (dict, list, str, или любой другой тип)
        mask: Строка-заменитель для sensitive данных

    Returns:
        Копия данных с замаскированными чувствительными полями

    Examples:
        >>> mask_sensitive_data({"Authorization": "token ghp_abc", "Accept": "application/json"})
        {'Authorization': '***REDACTED***', 'Accept': 'application/json'}

        >>> mask_sensitive_data("https://api.github.com/user?access_token=ghp_abc")
        'https://api.github.com/user?access_token=***REDACTED***'
    """
    # None, числа, булевы значения возвращаем как есть
    if data is None or isinstance(data, (bool, int, float)):
        return data

    if isinstance(data, str):
        return _mask_string(data, mask)

    if isinstance(data, dict):
        return _mask_dict(data, mask)

    if isinstance(data, (list, tuple)):
        masked_items = [mask_sensitive_data(item, mask) for item in data]
        return type(data)(masked_items)

    return data


def _mask_dict(data: Dict[str, Any], mask: str) -> Dict[str, Any]:
    result = {}
    for key, value in data.items():
        key_lower = key.lower() if isinstance(key, str) else str(key).lower()
        if _is_sensitive_key(key_lower):
            result[key] = mask
        else:
            result[key] = mask_sensitive_data(value, mask)
    return result


def _mask_string(text: str, mask: str) -> str:
    result = text
    for pattern, replacement in SENSITIVE_PATTERNS:
        result = pattern.sub(replacement.replace('***REDACTED***', mask), result)
    return result


def _is_sensitive_key(key: str) -> bool:
    return any(sensitive_key in key for sensitive_key in SENSITIVE_KEYS)


def mask_url(url: str, mask: str = "***REDACTED***") -> str:
    """
    Маскирует чувствительные параметры в URL.

    Examples:
        >>> mask_url("https://api.github.com/user?client_id=abc&client_secret=xyz")
        'https://api.github.com/user?client_id=abc&client_secret=***REDACTED***'
    """
    return _mask_string(url, mask)


def mask_headers(headers: Dict[str, str], mask: str = "***REDACTED***") -> Dict[str, str]:
    """
    Маскирует чувствительные заголовки HTTP.

    Examples:
        >>> mask_headers({"Authorization": "token ghp_abc", "User-Agent": "my-app"})
        {'Authorization': '***REDACTED***', 'User-Agent': 'my-app'}
    """
    return _mask_dict(dict(headers), mask)


def add_sensitive_keys(*keys: str) -> None:
    """
    Добавляет новые чувствительные ключи в глобальный список SENSITIVE_KEYS.

    Examples:
        >>> add_sensitive_keys('webhook_signature')
    """
    for key in keys:
        SENSITIVE_KEYS.add(key.lower())
