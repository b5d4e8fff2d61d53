"""Unit tests for the Resource bounded context.

Tests cover: LogBuffer ordering, ArtifactStore overwrite semantics,
ResourceService list/read, and fire-and-forget notifications.

Run with: uv run pytest tests/unit/domains/test_resources_domain.py -v
"""

__test__ = True

import logging

import pytest

from playwrightmcp.domains.resources import (
    ARTIFACT_MIME_TYPE,
    LOGS_MIME_TYPE,
    LOGS_URI,
    ArtifactStore,
    LogBuffer,
    LogEntry,
    NotificationKind,
    ResourceNotFoundError,
    ResourceNotification,
    ResourceService,
    artifact_uri,
    parse_artifact_name,
)
from tests.helpers.fake_driver import recording_subscriber


# =============================================================================
# Value objects
# =============================================================================


class TestValueObjects:
    def test_log_entry_render(self):
        assert LogEntry(level="warning", text="careful").render() == "[warning] careful"

    @pytest.mark.parametrize(
        "name, uri",
        [
            ("home", "artifact://home"),
            ("home page", "artifact://home%20page"),
            ("a:b", "artifact://a%3Ab"),
            ("Home/Page", "artifact://Home%2FPage"),
            ("{x}", "artifact://%7Bx%7D"),
        ],
    )
    def test_artifact_uri_encodes_name(self, name, uri):
        assert artifact_uri(name) == uri
        assert parse_artifact_name(uri) == name

    def test_parse_artifact_name_other_scheme(self):
        assert parse_artifact_name(LOGS_URI) is None
        assert parse_artifact_name("screenshot://a") is None

    def test_notification_to_dict(self):
        notification = ResourceNotification(kind=NotificationKind.UPDATED, uri=LOGS_URI)
        data = notification.to_dict()
        assert data["kind"] == "updated"
        assert data["uri"] == LOGS_URI
        assert data["event_type"] == "ResourceNotification"


# =============================================================================
# Registries
# =============================================================================


class TestLogBuffer:
    def test_empty_buffer_renders_empty_string(self):
        assert LogBuffer().render() == ""

    def test_entries_keep_arrival_order(self):
        buffer = LogBuffer()
        for i in range(5):
            buffer.append(LogEntry(level="log", text=f"line {i}"))

        assert len(buffer) == 5
        assert buffer.render().splitlines() == [f"[log] line {i}" for i in range(5)]


class TestArtifactStore:
    def test_put_new_and_overwrite(self):
        store = ArtifactStore()
        assert store.put("a", "Zmlyc3Q=") is True
        assert store.put("a", "c2Vjb25k") is False

        assert store.names() == ["a"]
        assert store.get("a").payload == "c2Vjb25k"
        assert len(store) == 1

    def test_get_missing(self):
        store = ArtifactStore()
        assert store.get("nope") is None
        assert "nope" not in store


# =============================================================================
# ResourceService queries
# =============================================================================


class TestResourceListing:
    def test_logs_resource_always_listed_first(self, resources):
        listing = resources.list_resources()
        assert len(listing) == 1
        assert listing[0].uri == LOGS_URI
        assert listing[0].mime_type == LOGS_MIME_TYPE
        assert listing[0].name == "Browser console logs"

    def test_artifacts_follow_logs(self, resources):
        resources.store_artifact("first", "AAAA")
        resources.store_artifact("second", "BBBB")

        listing = resources.list_resources()
        assert [r.uri for r in listing] == [
            LOGS_URI,
            "artifact://first",
            "artifact://second",
        ]
        assert listing[1].mime_type == ARTIFACT_MIME_TYPE
        assert listing[1].name == "Screenshot: first"

    def test_overwrite_keeps_single_entry(self, resources):
        resources.store_artifact("a", "AAAA")
        resources.store_artifact("a", "BBBB")

        uris = [r.uri for r in resources.list_resources()]
        assert uris.count("artifact://a") == 1
        assert resources.read("artifact://a").blob == "BBBB"

    def test_listing_computed_fresh(self, resources):
        before = resources.list_resources()
        resources.store_artifact("later", "AAAA")
        after = resources.list_resources()
        assert len(before) == 1
        assert len(after) == 2


class TestResourceRead:
    def test_read_logs_reflects_current_state(self, resources):
        assert resources.read(LOGS_URI).text == ""

        resources.append_log(LogEntry(level="log", text="hello"))
        resources.append_log(LogEntry(level="error", text="boom"))

        contents = resources.read(LOGS_URI)
        assert contents.mime_type == LOGS_MIME_TYPE
        assert contents.text == "[log] hello\n[error] boom"
        assert contents.blob is None

    def test_read_artifact(self, resources):
        resources.store_artifact("shot", "iVBORw0KGgo=")
        contents = resources.read("artifact://shot")
        assert contents.blob == "iVBORw0KGgo="
        assert contents.mime_type == ARTIFACT_MIME_TYPE
        assert contents.uri == "artifact://shot"
        assert contents.text is None

    def test_read_artifact_with_encoded_name(self, resources):
        resources.store_artifact("my shot", "AAAA")

        listing = resources.list_resources()
        assert listing[1].uri == "artifact://my%20shot"
        assert listing[1].name == "Screenshot: my shot"
        assert resources.read("artifact://my%20shot").blob == "AAAA"

    @pytest.mark.parametrize(
        "uri", ["artifact://missing", "console://logs", "logs://other", "nonsense"]
    )
    def test_read_unknown_raises_not_found(self, resources, uri):
        with pytest.raises(ResourceNotFoundError) as exc_info:
            resources.read(uri)
        assert exc_info.value.uri == uri
        assert "Resource not found" in str(exc_info.value)


# =============================================================================
# Notifications
# =============================================================================


class TestNotifications:
    @pytest.mark.asyncio
    async def test_append_log_notifies_updated(self, resources):
        received = []
        resources.subscribe(recording_subscriber(received))

        resources.append_log(LogEntry(level="log", text="hi"))
        await resources.wait_for_deliveries()

        assert len(received) == 1
        assert received[0].kind is NotificationKind.UPDATED
        assert received[0].uri == LOGS_URI

    @pytest.mark.asyncio
    async def test_store_artifact_notifies_list_changed_on_every_store(self, resources):
        received = []
        resources.subscribe(recording_subscriber(received))

        resources.store_artifact("a", "AAAA")
        resources.store_artifact("a", "BBBB")
        await resources.wait_for_deliveries()

        assert [n.kind for n in received] == [
            NotificationKind.LIST_CHANGED,
            NotificationKind.LIST_CHANGED,
        ]
        assert all(n.uri is None for n in received)

    @pytest.mark.asyncio
    async def test_failing_subscriber_is_isolated(self, resources, caplog):
        received = []

        async def broken(notification):
            raise RuntimeError("transport gone")

        resources.subscribe(broken)
        resources.subscribe(recording_subscriber(received))

        with caplog.at_level(logging.WARNING):
            resources.append_log(LogEntry(level="log", text="x"))
            await resources.wait_for_deliveries()

        assert len(received) == 1
        assert "transport gone" in caplog.text

    @pytest.mark.asyncio
    async def test_unsubscribe_stops_delivery(self, resources):
        received = []
        unsubscribe = resources.subscribe(recording_subscriber(received))
        unsubscribe()

        resources.notify(NotificationKind.LIST_CHANGED)
        await resources.wait_for_deliveries()
        assert received == []

    def test_notify_without_running_loop_is_dropped(self, resources):
        received = []
        resources.subscribe(recording_subscriber(received))

        resources.append_log(LogEntry(level="log", text="outside loop"))

        assert received == []
        assert resources.read(LOGS_URI).text == "[log] outside loop"
