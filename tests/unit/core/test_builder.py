"""
Тесты для PluginChainBuilder и PluginClient
"""

import pytest

from github_client.core.builder import PluginChainBuilder, PluginClient
from github_client.core.context import RequestContext
from github_client.plugins.header_plugins import HeaderDefaultsPlugin
from github_client.plugins.plugin import Plugin, compose
from github_client.plugins.url_plugins import AddHostPlugin, PathPrependPlugin
from github_client.plugins.user_agent_plugin import UserAgentPlugin


class RecordingPlugin(Plugin):
    """Записывает порядок прохождения запроса и ответа"""

    def __init__(self, name, journal):
        self.name = name
        self.journal = journal

    def before_request(self, ctx):
        self.journal.append(f"before:{self.name}")
        return None

    def after_response(self, ctx, response):
        self.journal.append(f"after:{self.name}")
        return response


class OtherRecordingPlugin(RecordingPlugin):
    """Отдельный вид плагина (подкласс - другой kind)"""


def kinds(builder):
    return [type(p) for p in builder.plugins]


class TestPluginChainBuilderMutations:
    """add / replace / remove"""

    def test_add_plugin_appends_in_order(self, transport):
        builder = PluginChainBuilder(transport)
        first = AddHostPlugin("https://api.github.com")
        second = PathPrependPlugin("/api/v3")

        builder.add_plugin(first)
        builder.add_plugin(second)

        assert builder.plugins == (first, second)

    def test_add_plugin_allows_duplicate_kinds(self, transport):
        """Дубликаты одного вида через add_plugin разрешены"""
        builder = PluginChainBuilder(transport)
        builder.add_plugin(HeaderDefaultsPlugin({"X-A": "1"}))
        builder.add_plugin(HeaderDefaultsPlugin({"X-B": "2"}))

        assert kinds(builder) == [HeaderDefaultsPlugin, HeaderDefaultsPlugin]

    def test_replace_plugin_keeps_position(self, transport):
        builder = PluginChainBuilder(transport)
        host = AddHostPlugin("https://api.github.com")
        headers = HeaderDefaultsPlugin({"Accept": "a"})
        prefix = PathPrependPlugin("/api/v3")
        builder.set_plugins([host, headers, prefix])

        replacement = HeaderDefaultsPlugin({"Accept": "b"})
        builder.replace_plugin(replacement)

        assert builder.plugins == (host, replacement, prefix)

    def test_replace_plugin_appends_when_absent(self, transport):
        builder = PluginChainBuilder(transport, [AddHostPlugin("https://api.github.com")])
        prefix = PathPrependPlugin("/api/v3")

        builder.replace_plugin(prefix)

        assert builder.plugins[-1] is prefix

    def test_replace_plugin_collapses_duplicates(self, transport):
        """После replace_plugin остается ровно один плагин вида"""
        builder = PluginChainBuilder(transport)
        builder.add_plugin(HeaderDefaultsPlugin({"X-A": "1"}))
        builder.add_plugin(AddHostPlugin("https://api.github.com"))
        builder.add_plugin(HeaderDefaultsPlugin({"X-B": "2"}))

        replacement = HeaderDefaultsPlugin({"X-C": "3"})
        builder.replace_plugin(replacement)

        assert kinds(builder) == [HeaderDefaultsPlugin, AddHostPlugin]
        assert builder.plugins[0] is replacement

    @pytest.mark.parametrize("operations", [
        ["add", "replace", "add", "replace"],
        ["add", "add", "add", "replace", "remove", "replace"],
        ["replace", "replace", "replace"],
        ["add", "remove", "add", "add", "replace"],
    ])
    def test_at_most_one_plugin_per_kind_after_replace(self, transport, operations):
        builder = PluginChainBuilder(transport, [AddHostPlugin("https://api.github.com")])
        for operation in operations:
            if operation == "add":
                builder.add_plugin(HeaderDefaultsPlugin({}))
            elif operation == "replace":
                builder.replace_plugin(HeaderDefaultsPlugin({}))
            else:
                builder.remove_plugin(HeaderDefaultsPlugin)

        assert kinds(builder).count(HeaderDefaultsPlugin) == 1

    def test_kind_is_exact_class(self, transport):
        """UserAgentPlugin - подкласс HeaderDefaultsPlugin, но другой вид"""
        builder = PluginChainBuilder(transport)
        user_agent = UserAgentPlugin("test-agent")
        builder.add_plugin(user_agent)

        builder.replace_plugin(HeaderDefaultsPlugin({"Accept": "x"}))
        builder.remove_plugin(HeaderDefaultsPlugin)

        assert builder.plugins == (user_agent,)

    def test_remove_plugin_removes_all_of_kind(self, transport):
        builder = PluginChainBuilder(transport)
        builder.add_plugin(HeaderDefaultsPlugin({}))
        builder.add_plugin(HeaderDefaultsPlugin({}))

        builder.remove_plugin(HeaderDefaultsPlugin)

        assert builder.plugins == ()

    def test_remove_absent_plugin_is_noop(self, transport):
        builder = PluginChainBuilder(transport, [AddHostPlugin("https://api.github.com")])
        builder.build_client()
        revision = builder.revision

        builder.remove_plugin(PathPrependPlugin)

        assert builder.revision == revision
        assert builder.is_modified() is False

    def test_has_and_get_plugin(self, transport):
        prefix = PathPrependPlugin("/api/v3")
        builder = PluginChainBuilder(transport, [prefix])

        assert builder.has_plugin(PathPrependPlugin)
        assert builder.get_plugin(PathPrependPlugin) is prefix
        assert not builder.has_plugin(AddHostPlugin)
        assert builder.get_plugin(AddHostPlugin) is None

    def test_plugins_is_snapshot(self, transport):
        builder = PluginChainBuilder(transport)
        snapshot = builder.plugins
        builder.add_plugin(PathPrependPlugin("/x"))

        assert snapshot == ()


class TestPluginChainBuilderRevision:
    """is_modified и ленивая пересборка"""

    def test_new_builder_is_modified(self, transport):
        assert PluginChainBuilder(transport).is_modified() is True

    def test_build_clears_modified(self, transport):
        builder = PluginChainBuilder(transport)
        builder.build_client()
        assert builder.is_modified() is False

    @pytest.mark.parametrize("mutate", [
        lambda b: b.add_plugin(PathPrependPlugin("/x")),
        lambda b: b.replace_plugin(PathPrependPlugin("/y")),
        lambda b: b.remove_plugin(AddHostPlugin),
        lambda b: b.set_plugins([]),
    ])
    def test_mutation_marks_modified(self, transport, mutate):
        builder = PluginChainBuilder(transport, [AddHostPlugin("https://api.github.com")])
        builder.build_client()

        mutate(builder)

        assert builder.is_modified() is True

    def test_set_transport_marks_modified(self, transport, transport_factory):
        builder = PluginChainBuilder(transport)
        builder.build_client()

        other = transport_factory()
        builder.set_transport(other)

        assert builder.is_modified() is True
        assert builder.transport is other

    def test_revision_is_monotonic(self, transport):
        builder = PluginChainBuilder(transport)
        revisions = [builder.revision]
        for _ in range(3):
            builder.add_plugin(HeaderDefaultsPlugin({}))
            revisions.append(builder.revision)

        assert revisions == sorted(set(revisions))

    def test_built_client_carries_revision(self, transport):
        builder = PluginChainBuilder(transport)
        builder.add_plugin(HeaderDefaultsPlugin({}))

        client = builder.build_client()

        assert isinstance(client, PluginClient)
        assert client.revision == builder.revision

    def test_built_client_unaffected_by_later_mutations(self, transport):
        builder = PluginChainBuilder(transport, [HeaderDefaultsPlugin({"X-A": "1"})])
        client = builder.build_client()

        builder.add_plugin(HeaderDefaultsPlugin({"X-B": "2"}))
        client.send(RequestContext("GET", "https://api.github.com/user"))

        assert "X-A" in transport.last.headers
        assert "X-B" not in transport.last.headers


class TestCompose:
    """Порядок слоев цепочки"""

    def test_first_plugin_is_outermost(self, transport):
        journal = []
        plugins = [RecordingPlugin("outer", journal), OtherRecordingPlugin("inner", journal)]

        pipeline = compose(plugins, transport.send)
        pipeline(RequestContext("GET", "https://api.github.com/"))

        assert journal == ["before:outer", "before:inner", "after:inner", "after:outer"]

    def test_empty_chain_calls_terminal(self, transport):
        pipeline = compose([], transport.send)
        pipeline(RequestContext("GET", "https://api.github.com/"))
        assert transport.send_count == 1

    def test_before_request_short_circuit(self, transport, make_response):
        cached = make_response(200, json_data={"cached": True})

        class ShortCircuit(Plugin):
            def before_request(self, ctx):
                return cached

        pipeline = compose([ShortCircuit()], transport.send)
        response = pipeline(RequestContext("GET", "https://api.github.com/"))

        assert response is cached
        assert transport.send_count == 0

    def test_on_error_called_and_error_propagates(self, transport_factory):
        seen = []

        class Watcher(Plugin):
            def on_error(self, ctx, error):
                seen.append(error)

        boom = RuntimeError("boom")
        pipeline = compose([Watcher()], transport_factory(boom).send)

        with pytest.raises(RuntimeError):
            pipeline(RequestContext("GET", "https://api.github.com/"))
        assert seen == [boom]
