# src/github_client/plugins/header_plugins.py

from typing import Dict, Mapping, Optional

import requests
from requests.structures import CaseInsensitiveDict

from .plugin import Plugin
from ..core.context import RequestContext


class HeaderDefaultsPlugin(Plugin):
    """
    Плагин добавляет заголовки, которых еще нет в запросе.

    Заголовки, переданные в конкретном запросе, всегда имеют приоритет.
    GitHubClient хранит в этом плагине свой набор заголовков по умолчанию
    (Accept и все, что добавлено через add_headers).
    """

    def __init__(self, headers: Mapping[str, str]):
        """
        Args:
            headers: Заголовки по умолчанию (копируются, имена без учета регистра)
        """
        self.headers: CaseInsensitiveDict = CaseInsensitiveDict(headers)

    def before_request(self, ctx: RequestContext) -> Optional[requests.Response]:
        """Добавляет отсутствующие заголовки"""
        for name, value in self.headers.items():
            if name not in ctx.headers:
                ctx.headers[name] = value
        return None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(headers={sorted(self.headers)})"


class HeaderAppendPlugin(Plugin):
    """
    Плагин дописывает значения заголовков.

    Если заголовок уже есть в запросе, значение добавляется через запятую
    (как для многозначных заголовков HTTP), если такого значения там еще нет.
    """

    def __init__(self, headers: Mapping[str, str]):
        """
        Args:
            headers: Заголовки для дописывания (копируются)
        """
        self.headers: Dict[str, str] = dict(headers)

    def before_request(self, ctx: RequestContext) -> Optional[requests.Response]:
        """Дописывает значения заголовков"""
        for name, value in self.headers.items():
            existing = ctx.headers.get(name)
            if existing is None:
                ctx.headers[name] = value
            elif value not in [v.strip() for v in existing.split(',')]:
                ctx.headers[name] = f"{existing}, {value}"
        return None

    def __repr__(self) -> str:
        return f"HeaderAppendPlugin(headers={sorted(self.headers)})"
