"""
Иерархия исключений GitHub Client.

Классификация:
- ошибки конфигурации (InvalidArgumentError, UndefinedMethodError) - сразу
  в месте вызова, никогда не ретраятся
- сетевые ошибки транспорта (retryable=True)
- HTTP ошибки, которые выбрасывает ExceptionThrowerPlugin по статус коду
"""

from typing import Any, Dict, List, Optional

import requests

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# BASE
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class GitHubClientException(Exception):
    """Базовое исключение GitHub Client."""

    retryable: bool = False

    def __init__(self, message: str, **kwargs):
        self.message = message
        super().__init__(message)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# КОНФИГУРАЦИЯ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class InvalidArgumentError(GitHubClientException, ValueError):
    """
    Неверная конфигурация клиента.

    Примеры: неизвестное имя API, не указан метод аутентификации,
    неизвестный метод аутентификации.
    """
    pass

class UndefinedMethodError(GitHubClientException, AttributeError):
    """Атрибут клиента не соответствует ни одному API ресурсу."""

    def __init__(self, name: str):
        super().__init__(f'Undefined method called: "{name}"')
        self.name = name

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ТРАНСПОРТ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class NetworkError(GitHubClientException):
    """Сетевая ошибка."""

    retryable = True

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        full_message = f"{message}"
        if url:
            full_message += f" (url: {url})"
        super().__init__(full_message)

class TimeoutError(NetworkError):
    """
    Таймаут запроса.

    Args:
        message: Сообщение об ошибке
        url: URL запроса
        timeout: Значение таймаута
    """

    def __init__(self, message: str, url: str, timeout: Optional[Any] = None):
        self.timeout = timeout

        msg = message
        if timeout:
            msg += f" (timeout: {timeout}s)"

        super().__init__(msg, url)

class ConnectionError(NetworkError):
    """
    Ошибка подключения.

    Примеры:
    - Connection refused
    - Connection reset
    - DNS resolution failed
    """
    pass

class ResponseTooLargeError(GitHubClientException):
    """
    Ответ слишком большой.

    Args:
        size: Размер ответа (bytes)
        max_size: Максимально допустимый размер
        url: URL
    """

    def __init__(self, size: int, max_size: int, url: str):
        self.size = size
        self.max_size = max_size
        self.url = url

        msg = (
            f"Response too large: {size} bytes "
            f"(max: {max_size}) for {url}"
        )
        super().__init__(msg)

class TooManyRedirectsError(GitHubClientException):
    """Превышено количество редиректов."""

    def __init__(self, url: str, max_redirects: int, message: str = ""):
        self.url = url
        self.max_redirects = max_redirects
        super().__init__(message or f"Too many redirects (max: {max_redirects}) for {url}")

class CircularRedirectionError(TooManyRedirectsError):
    """Редирект указывает на уже посещённый URL."""

    def __init__(self, url: str, max_redirects: int):
        super().__init__(url, max_redirects, f"Circular redirection detected for {url}")

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# HTTP ОШИБКИ (ExceptionThrowerPlugin)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class HTTPError(GitHubClientException):
    """
    Базовая HTTP ошибка.

    Args:
        status_code: HTTP статус
        url: URL
        message: Сообщение (обычно поле "message" из ответа GitHub)
        response: Исходный ответ
    """

    def __init__(
        self,
        status_code: int,
        url: str,
        message: str = "",
        response: Optional[requests.Response] = None
    ):
        self.status_code = status_code
        self.url = url
        self.response = response
        self.detail = message

        msg = f"HTTP {status_code} error for {url}"
        if message:
            msg += f": {message}"

        super().__init__(msg)

class BadRequestError(HTTPError):
    """400 Bad Request."""

    def __init__(self, url: str, message: str = "", response: Optional[requests.Response] = None):
        super().__init__(400, url, message, response)

class UnauthorizedError(HTTPError):
    """401 Unauthorized."""

    def __init__(self, url: str, message: str = "", response: Optional[requests.Response] = None):
        super().__init__(401, url, message, response)

class TwoFactorAuthenticationRequiredError(UnauthorizedError):
    """
    401 с заголовком X-GitHub-OTP: required; <type>.

    Args:
        otp_type: Канал доставки одноразового кода (sms, app)
    """

    def __init__(self, url: str, otp_type: str, response: Optional[requests.Response] = None):
        self.otp_type = otp_type
        super().__init__(url, "Two factor authentication is enabled on this account", response)

class ForbiddenError(HTTPError):
    """403 Forbidden."""

    def __init__(self, url: str, message: str = "", response: Optional[requests.Response] = None):
        super().__init__(403, url, message, response)

class NotFoundError(HTTPError):
    """404 Not Found."""

    def __init__(self, url: str, message: str = "", response: Optional[requests.Response] = None):
        super().__init__(404, url, message, response)

class ValidationFailedError(HTTPError):
    """
    422 Unprocessable Entity с перечнем ошибок валидации.

    Args:
        errors: Сырые объекты ошибок из ответа GitHub
    """

    def __init__(
        self,
        url: str,
        message: str = "",
        errors: Optional[List[Dict[str, Any]]] = None,
        response: Optional[requests.Response] = None
    ):
        self.errors = errors or []
        super().__init__(422, url, message, response)

class ApiLimitExceedError(HTTPError):
    """
    Исчерпан лимит запросов к API.

    Args:
        limit: Значение X-RateLimit-Limit
        reset: Значение X-RateLimit-Reset (unix timestamp)
    """

    retryable = True

    def __init__(
        self,
        status_code: int,
        url: str,
        limit: Optional[int] = None,
        reset: Optional[int] = None,
        response: Optional[requests.Response] = None
    ):
        self.limit = limit
        self.reset = reset

        message = "You have reached GitHub hourly limit"
        if limit is not None:
            message += f" (limit: {limit})"
        if reset is not None:
            message += f", resets at {reset}"

        super().__init__(status_code, url, message, response)

class ServerError(HTTPError):
    """5xx ошибка сервера."""

    retryable = True

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# УТИЛИТЫ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def classify_requests_exception(
    exc: Exception,
    url: str
) -> GitHubClientException:
    """
    Конвертировать requests.exceptions в наши исключения.

    Args:
        exc: Исключение из requests
        url: URL запроса

    Returns:
        Наше исключение с правильной классификацией

    Examples:
        >>> exc = requests.exceptions.Timeout()
        >>> our_exc = classify_requests_exception(exc, "https://api.github.com/user")
        >>> assert isinstance(our_exc, TimeoutError)
        >>> assert our_exc.retryable == True
    """

    if isinstance(exc, requests.exceptions.Timeout):
        return TimeoutError("Request timeout", url)

    elif isinstance(exc, requests.exceptions.ConnectionError):
        return ConnectionError("Connection error", url)

    else:
        # Неизвестная ошибка - оборачиваем
        return GitHubClientException(str(exc))
