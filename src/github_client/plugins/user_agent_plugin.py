"""
Плагин для заголовка User-Agent.

GitHub отклоняет запросы без User-Agent, поэтому клиент устанавливает его
всегда. Это отдельный вид плагина (а не запись в HeaderDefaultsPlugin),
чтобы clear_headers() не удалял User-Agent.
"""

from .header_plugins import HeaderDefaultsPlugin
from ..core.config import DEFAULT_USER_AGENT
from ..core.exceptions import InvalidArgumentError


class UserAgentPlugin(HeaderDefaultsPlugin):
    """
    Фиксированный User-Agent, если запрос не задает свой.

    Example:
        plugin = UserAgentPlugin("my-app/1.0 (ops@example.com)")
        builder.replace_plugin(plugin)
    """

    def __init__(self, user_agent: str = DEFAULT_USER_AGENT):
        """
        Args:
            user_agent: Значение User-Agent

        Raises:
            InvalidArgumentError: Если user_agent пустой
        """
        if not user_agent:
            raise InvalidArgumentError("user_agent must not be empty")
        self.user_agent = user_agent
        super().__init__({'User-Agent': user_agent})

    def __repr__(self) -> str:
        return f"UserAgentPlugin(user_agent={self.user_agent!r})"
