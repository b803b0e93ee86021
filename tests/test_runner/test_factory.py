"""Tests for the sink factory and guard builder."""

import pytest
from cases import USER_DATA, fetch_headers

from secfetch import FetchMetadataLogOnlyMiddleware, FetchMetadataMiddleware, RequestLogger
from secfetch.runner.factory import SinkFactory, SinkFactoryError, build_guard
from secfetch.runner.schema import GuardConfigSchema, SinkConfigSchema
from secfetch.sinks import InMemoryRequestLogger, LoggingRequestLogger, SQLiteRequestLogger


class TestSinkFactory:
    """Tests for SinkFactory."""

    def test_registered_types(self):
        types = SinkFactory.registered_types()
        assert "logging" in types
        assert "memory" in types
        assert "sqlite" in types

    def test_create_logging(self):
        sink = SinkFactory().create(SinkConfigSchema(type="logging", logger_name="x"))
        assert isinstance(sink, LoggingRequestLogger)

    def test_create_memory(self):
        sink = SinkFactory().create(SinkConfigSchema(type="memory"))
        assert isinstance(sink, InMemoryRequestLogger)

    def test_create_sqlite(self, tmp_path):
        sink = SinkFactory().create(SinkConfigSchema(type="sqlite", path=str(tmp_path / "d.db")))
        assert isinstance(sink, SQLiteRequestLogger)

    def test_sqlite_requires_path(self):
        with pytest.raises(SinkFactoryError) as exc_info:
            SinkFactory().create(SinkConfigSchema(type="sqlite"))
        assert "path" in str(exc_info.value)

    def test_unknown_type_raises_error(self):
        with pytest.raises(SinkFactoryError) as exc_info:
            SinkFactory().create(SinkConfigSchema(type="kafka"))
        assert "Unknown sink type" in str(exc_info.value)
        assert "kafka" in str(exc_info.value)

    def test_register_custom_sink(self):
        class NullLogger(RequestLogger):
            async def log_request(self, request):
                pass

        SinkFactory.register("null", NullLogger)
        try:
            assert isinstance(SinkFactory().create(SinkConfigSchema(type="null")), NullLogger)
        finally:
            del SinkFactory._registry["null"]

    def test_register_rejects_non_sink(self):
        with pytest.raises(TypeError):
            SinkFactory.register("bad", dict)  # type: ignore[arg-type]


class TestBuildGuard:
    """Tests for build_guard()."""

    def test_enforce_mode(self, inner):
        guard = build_guard(inner, GuardConfigSchema(mode="enforce"))
        assert isinstance(guard, FetchMetadataMiddleware)

    def test_log_only_mode_uses_injected_sink(self, inner, sink):
        guard = build_guard(inner, GuardConfigSchema(mode="log_only"), sink=sink)
        assert isinstance(guard, FetchMetadataLogOnlyMiddleware)
        assert guard.logger is sink

    def test_log_only_mode_creates_sink(self, inner):
        config = GuardConfigSchema(mode="log_only", sink=SinkConfigSchema(type="memory"))
        guard = build_guard(inner, config)
        assert isinstance(guard.logger, InMemoryRequestLogger)

    async def test_guards_behave(self, make_client, inner, sink):
        enforcing = make_client(build_guard(inner, GuardConfigSchema()))
        logging_only = make_client(build_guard(inner, GuardConfigSchema(mode="log_only"), sink=sink))
        headers = fetch_headers("cross-site", "cors")

        assert (await enforcing.post("/", headers=headers)).status_code == 403
        resp = await logging_only.post("/", headers=headers)
        assert resp.text == USER_DATA
        assert sink.count == 1
