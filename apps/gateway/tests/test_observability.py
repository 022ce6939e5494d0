"""可观测性测试

测试内容：
1. HTTP 请求含 X-Request-ID 响应头
2. 路径中的实体 ID 提取
3. structlog 配置正确
4. 操作者解析与日志级别解析
"""

import logging

import pytest
import structlog
from betmanager.gateway.middleware.logging_config import resolve_log_level, setup_logging
from betmanager.gateway.middleware.logging_mw import resolve_actor
from betmanager.gateway.middleware.trace_mw import extract_entity
from httpx import AsyncClient


class TestObservability:
    async def test_request_id_in_response_header(self, client: AsyncClient):
        """每个请求响应包含 X-Request-ID"""
        resp = await client.get("/health")
        assert "x-request-id" in resp.headers
        # ULID 格式：26 字符
        assert len(resp.headers["x-request-id"]) == 26

    async def test_request_ids_are_unique(self, client: AsyncClient):
        ids = set()
        for _ in range(3):
            resp = await client.get("/api/tasks")
            ids.add(resp.headers["x-request-id"])
        assert len(ids) == 3

    async def test_error_responses_carry_request_id(self, client: AsyncClient):
        resp = await client.get("/api/tasks/missing")
        assert resp.status_code == 404
        assert "x-request-id" in resp.headers


class TestEntityExtraction:
    def test_task_path(self):
        assert extract_entity("/api/tasks/01JABC/delivery") == ("task_id", "01JABC")

    def test_account_path(self):
        assert extract_entity("/api/accounts/acc1/limit") == ("account_id", "acc1")

    def test_reserved_segment(self):
        assert extract_entity("/api/packs/reconcile") is None

    def test_collection_path(self):
        assert extract_entity("/api/tasks") is None


class TestLoggingConfig:
    def test_json_mode(self, monkeypatch):
        monkeypatch.setenv("BETMANAGER_LOG_FORMAT", "json")
        setup_logging()
        assert structlog.is_configured()

    def test_dev_mode(self, monkeypatch):
        monkeypatch.setenv("BETMANAGER_LOG_FORMAT", "dev")
        monkeypatch.setenv("BETMANAGER_LOG_LEVEL", "debug")
        setup_logging()
        assert structlog.is_configured()

    def test_noisy_loggers_capped(self, monkeypatch):
        monkeypatch.setenv("BETMANAGER_LOG_LEVEL", "DEBUG")
        setup_logging()
        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("aiosqlite").level == logging.WARNING

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("debug", logging.DEBUG), ("WARNING", logging.WARNING), ("loud", logging.INFO), (None, logging.INFO)],
    )
    def test_resolve_log_level(self, value, expected):
        assert resolve_log_level(value) == expected


class TestActorResolution:
    def test_header_is_trimmed(self):
        assert resolve_actor("  Ana ") == "Ana"

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_missing_header_is_system(self, value):
        assert resolve_actor(value) == "System"
