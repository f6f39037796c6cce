"""Unit tests for concrete check types, groups and alert channels."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from construct_engine.constructs.alert_channel import (
    EmailAlertChannel,
    SlackAlertChannel,
    WebhookAlertChannel,
)
from construct_engine.constructs.api_check import (
    ApiCheck,
    ApiCheckProps,
    ApiCheckRequest,
    AssertionBuilder,
    AssertionComparison,
    AssertionSource,
    HttpMethod,
)
from construct_engine.constructs.browser_check import BrowserCheck, BrowserCheckCode, ScriptNotFoundError
from construct_engine.constructs.check import CheckProps
from construct_engine.constructs.check_group import CheckGroup
from construct_engine.constructs.project import Project
from construct_engine.session import Session

# ---------------------------------------------------------------------------
# ApiCheck
# ---------------------------------------------------------------------------


class TestApiCheck:
    def test_type_payload(self, session: Session):
        check = ApiCheck(
            "books",
            name="Books API",
            request=ApiCheckRequest(
                method=HttpMethod.POST,
                url="https://shop.example.com/api/books",
                body='{"title": "x"}',
                assertions=[AssertionBuilder.status_code().equals(200)],
            ),
            session=session,
        )
        payload = check.synthesize()

        assert payload["checkType"] == "API"
        assert payload["degradedResponseTime"] == 10000
        assert payload["maxResponseTime"] == 20000
        request = payload["request"]
        assert request["method"] == "POST"
        assert request["url"] == "https://shop.example.com/api/books"
        assert request["followRedirects"] is True
        assert request["skipSSL"] is False
        assert request["bodyType"] == "NONE"
        assert request["queryParameters"] == []
        assert request["assertions"] == [
            {
                "source": "STATUS_CODE",
                "property": "",
                "comparison": "EQUALS",
                "target": "200",
                "regex": None,
            }
        ]

    def test_degraded_above_max_rejected(self, session: Session, api_request: ApiCheckRequest):
        with pytest.raises(ValueError, match="degraded_response_time"):
            ApiCheck(
                "slow",
                name="Slow",
                request=api_request,
                degraded_response_time=25000,
                max_response_time=20000,
                session=session,
            )

    def test_request_is_required(self, session: Session):
        with pytest.raises(ValidationError):
            ApiCheck("no-request", name="No request", session=session)

    def test_request_accepts_camel_case_aliases(self):
        request = ApiCheckRequest.model_validate({"url": "https://x.test", "followRedirects": False})
        assert request.follow_redirects is False

    def test_props_of_another_check_type_rejected(self, session: Session):
        with pytest.raises(TypeError, match="ApiCheckProps"):
            ApiCheck("base-props", CheckProps(name="Base"), session=session)


class TestAssertionBuilder:
    def test_json_body_property(self):
        assertion = AssertionBuilder.json_body("$.items.length").greater_than(0)
        assert assertion.source == AssertionSource.JSON_BODY
        assert assertion.property == "$.items.length"
        assert assertion.comparison == AssertionComparison.GREATER_THAN
        assert assertion.target == "0"

    def test_headers_with_regex(self):
        assertion = AssertionBuilder.headers("content-type", regex="json").contains("application")
        assert assertion.regex == "json"

    def test_response_time(self):
        assertion = AssertionBuilder.response_time().less_than(1000)
        assert assertion.source == AssertionSource.RESPONSE_TIME
        assert assertion.target == "1000"

    def test_not_empty_has_blank_target(self):
        assert AssertionBuilder.text_body().not_empty().target == ""


# ---------------------------------------------------------------------------
# BrowserCheck
# ---------------------------------------------------------------------------


class TestBrowserCheck:
    def test_inline_content(self, session: Session):
        check = BrowserCheck(
            "login-flow",
            name="Login flow",
            code=BrowserCheckCode(content="await page.goto('https://shop.example.com')"),
            session=session,
        )
        payload = check.synthesize()
        assert payload["checkType"] == "BROWSER"
        assert payload["script"] == "await page.goto('https://shop.example.com')"

    def test_entrypoint_relative_to_check_file(self, session: Session, tmp_path: Path):
        script_dir = tmp_path / "checks"
        script_dir.mkdir()
        (script_dir / "login.spec.js").write_text("// login", encoding="utf-8")

        check = BrowserCheck("login", name="Login", code={"entrypoint": "login.spec.js"}, session=session)

        assert check.script == "// login"
        assert check.script_path == script_dir / "login.spec.js"

    def test_absolute_entrypoint(self, session: Session, tmp_path: Path):
        script = tmp_path / "elsewhere.spec.js"
        script.write_text("// abs", encoding="utf-8")
        check = BrowserCheck("abs", name="Abs", code={"entrypoint": str(script)}, session=session)
        assert check.script == "// abs"

    def test_missing_entrypoint_raises(self, session: Session, project: Project):
        with pytest.raises(ScriptNotFoundError):
            BrowserCheck("missing", name="Missing", code={"entrypoint": "nope.spec.js"}, session=session)
        assert ("check", "missing") not in project

    def test_api_props_rejected(self, session: Session, api_request: ApiCheckRequest):
        with pytest.raises(TypeError, match="BrowserCheckProps"):
            BrowserCheck("wrong-props", ApiCheckProps(name="Wrong", request=api_request), session=session)

    def test_code_needs_exactly_one_source(self):
        with pytest.raises(ValidationError):
            BrowserCheckCode()
        with pytest.raises(ValidationError):
            BrowserCheckCode(content="x", entrypoint="y.js")


# ---------------------------------------------------------------------------
# CheckGroup
# ---------------------------------------------------------------------------


class TestCheckGroup:
    def test_synthesize(self, session: Session):
        group = CheckGroup("storefront", name="Storefront", locations=["eu-west-1"], concurrency=3, session=session)
        payload = group.synthesize()
        assert payload["name"] == "Storefront"
        assert payload["locations"] == ["eu-west-1"]
        assert payload["concurrency"] == 3
        assert payload["environmentVariables"] == []

    def test_invalid_concurrency(self, session: Session):
        with pytest.raises(ValueError, match="concurrency"):
            CheckGroup("g", name="G", concurrency=0, session=session)

    def test_group_subscriptions(self, session: Session):
        email = EmailAlertChannel("ops-email", address="ops@example.com", session=session)
        group = CheckGroup("storefront", name="Storefront", alert_channels=[email], session=session)
        [subscription] = group.add_subscriptions()
        assert subscription.logical_id == "group-alert-channel-subscription#storefront#ops-email"
        assert subscription.check_id is None
        assert subscription.group_id is not None


# ---------------------------------------------------------------------------
# Alert channels
# ---------------------------------------------------------------------------


class TestAlertChannels:
    def test_email_payload(self, session: Session):
        payload = EmailAlertChannel("ops", address="ops@example.com", session=session).synthesize()
        assert payload["type"] == "EMAIL"
        assert payload["config"] == {"address": "ops@example.com"}
        assert payload["sendRecovery"] is True
        assert payload["sendDegraded"] is False

    def test_invalid_email(self, session: Session):
        with pytest.raises(ValueError, match="email"):
            EmailAlertChannel("ops", address="not-an-address", session=session)

    def test_webhook_headers(self, session: Session):
        channel = WebhookAlertChannel(
            "hook",
            url="https://hooks.example.com",
            method="put",
            headers={"X-Token": "abc"},
            session=session,
        )
        assert channel.channel_config() == {
            "url": "https://hooks.example.com",
            "method": "PUT",
            "headers": [{"key": "X-Token", "value": "abc"}],
        }

    def test_ssl_threshold_bounds(self, session: Session):
        with pytest.raises(ValueError):
            SlackAlertChannel("slack", url="https://hooks.slack.test", ssl_expiry_threshold=90, session=session)
