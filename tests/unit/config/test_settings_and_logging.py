"""Settings defaults, env overrides, policies built from settings, JSON log lines."""

import json
import logging

from lms.config.logging import JsonFormatter
from lms.config.settings import AppSettings
from lms.core.context import correlation_id_ctx, tenant_scope
from lms.isolation.policy import SoftDeletePolicy, TenantScopingPolicy


def test_isolation_defaults():
    settings = AppSettings()
    assert settings.isolation_failure_mode == "fail_closed"
    assert "SystemLog" in settings.soft_delete_excluded_models
    assert "Country" in settings.tenant_exempt_models
    assert "Course" not in settings.tenant_exempt_models


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("ISOLATION_FAILURE_MODE", "fail_open")
    monkeypatch.setenv("TENANT_EXEMPT_MODELS", '["Country"]')
    settings = AppSettings()
    assert settings.isolation_failure_mode == "fail_open"
    assert settings.tenant_exempt_models == ["Country"]


def test_policies_from_settings():
    settings = AppSettings(soft_delete_excluded_models=["Foo"], tenant_field="org_id")
    assert not SoftDeletePolicy.from_settings(settings).applies_to("Foo")
    tenant_policy = TenantScopingPolicy.from_settings(settings)
    assert tenant_policy.tenant_field == "org_id"
    assert tenant_policy.applies_to("Course")


def test_json_formatter_includes_context_and_extra():
    record = logging.LogRecord("lms.test", logging.INFO, __file__, 1, "isolation_rewrite_applied", (), None)
    record.interceptor = "soft_delete"
    token = correlation_id_ctx.set("corr-1")
    try:
        with tenant_scope(4):
            line = json.loads(JsonFormatter().format(record))
    finally:
        correlation_id_ctx.reset(token)
    assert line["message"] == "isolation_rewrite_applied"
    assert line["level"] == "INFO"
    assert line["correlation_id"] == "corr-1"
    assert line["tenant_id"] == 4
    assert line["isolation"] is True
    assert line["extra"] == {"interceptor": "soft_delete"}
