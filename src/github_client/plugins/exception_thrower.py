# src/github_client/plugins/exception_thrower.py

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import urlsplit

import requests

from .plugin import Plugin
from ..core.context import RequestContext
from ..core.exceptions import (
    ApiLimitExceedError,
    BadRequestError,
    ForbiddenError,
    HTTPError,
    NotFoundError,
    ServerError,
    TwoFactorAuthenticationRequiredError,
    UnauthorizedError,
    ValidationFailedError,
)

logger = logging.getLogger(__name__)


def get_content(response: requests.Response) -> Any:
    """
    Тело ответа: JSON для application/json, иначе текст.

    Невалидный JSON возвращается как текст.
    """
    content_type = response.headers.get('Content-Type', '')
    if 'application/json' in content_type:
        try:
            return response.json()
        except ValueError:
            pass
    return response.text


def _header_int(response: requests.Response, name: str) -> Optional[int]:
    value = response.headers.get(name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def format_validation_errors(errors: List[Dict[str, Any]]) -> List[str]:
    """
    Человекочитаемые сообщения для ошибок 422.

    Example:
        >>> format_validation_errors([{"code": "missing_field", "field": "title", "resource": "Issue"}])
        ['Field "title" is missing, for resource "Issue"']
    """
    messages = []
    for error in errors:
        if not isinstance(error, dict):
            messages.append(str(error))
            continue

        code = error.get('code')
        field = error.get('field')
        resource = error.get('resource')

        if code == 'missing':
            messages.append(f'The {field} {error.get("value")} does not exist, for resource "{resource}"')
        elif code == 'missing_field':
            messages.append(f'Field "{field}" is missing, for resource "{resource}"')
        elif code == 'invalid':
            if error.get('message'):
                messages.append(f'Field "{field}" is invalid, for resource "{resource}": "{error["message"]}"')
            else:
                messages.append(f'Field "{field}" is invalid, for resource "{resource}"')
        elif code == 'already_exists':
            messages.append(f'Field "{field}" already exists, for resource "{resource}"')
        else:
            messages.append(str(error.get('message', error)))
    return messages


class ExceptionThrowerPlugin(Plugin):
    """
    Плагин превращает ответы GitHub с кодом ошибки в исключения.

    Должен быть внешним плагином цепочки, чтобы видеть итоговый статус
    (после редиректов). Порядок проверок:

    1. X-RateLimit-Remaining < 1 (кроме запросов к /rate_limit) или 429
       -> ApiLimitExceedError
    2. 401 с X-GitHub-OTP: required; <type>
       -> TwoFactorAuthenticationRequiredError
    3. 422 с полем errors -> ValidationFailedError
    4. По статус коду: 400, 401, 403, 404, 5xx, остальные -> HTTPError

    Все исключения содержат исходный ответ в атрибуте response.
    """

    def after_response(self, ctx: RequestContext, response: requests.Response) -> requests.Response:
        """Проверяет статус ответа"""
        status_code = response.status_code
        if status_code < 400 or status_code > 600:
            return response

        url = ctx.url
        logger.debug(f"GitHub API error {status_code} for {ctx.method} {url}")

        remaining = _header_int(response, 'X-RateLimit-Remaining')
        is_rate_limit_request = urlsplit(url).path.rstrip('/').endswith('/rate_limit')
        if status_code == 429 or (remaining is not None and remaining < 1 and not is_rate_limit_request):
            raise ApiLimitExceedError(
                status_code,
                url,
                limit=_header_int(response, 'X-RateLimit-Limit'),
                reset=_header_int(response, 'X-RateLimit-Reset'),
                response=response,
            )

        if status_code == 401:
            otp = response.headers.get('X-GitHub-OTP', '')
            if 'required' in otp:
                otp_type = otp.split(';', 1)[1].strip() if ';' in otp else ''
                raise TwoFactorAuthenticationRequiredError(url, otp_type, response=response)

        content = get_content(response)
        message = ''
        if isinstance(content, dict):
            message = str(content.get('message', ''))
        elif isinstance(content, str):
            message = content[:200]

        if status_code == 422 and isinstance(content, dict) and content.get('errors'):
            errors = content['errors']
            details = format_validation_errors(errors)
            raise ValidationFailedError(
                url,
                'Validation Failed: ' + ', '.join(details),
                errors=errors,
                response=response,
            )

        if status_code == 400:
            raise BadRequestError(url, message, response=response)
        elif status_code == 401:
            raise UnauthorizedError(url, message, response=response)
        elif status_code == 403:
            raise ForbiddenError(url, message, response=response)
        elif status_code == 404:
            raise NotFoundError(url, message, response=response)
        elif status_code == 422:
            raise ValidationFailedError(url, message, response=response)
        elif status_code >= 500:
            raise ServerError(status_code, url, message, response=response)

        raise HTTPError(status_code, url, message, response=response)
