"""Declarative constructs for checks, groups and alert channels.

Quick start::

    from construct_engine.constructs import ApiCheck, ApiCheckRequest, Project
    from construct_engine.session import Session

    project = Project("shop", name="Shop monitoring")
    session = Session(project=project)
    ApiCheck("home", name="Home", request=ApiCheckRequest(url="https://shop.test"), session=session)
    document = project.synthesize()
"""

from construct_engine.constructs.alert_channel import (
    AlertChannel,
    EmailAlertChannel,
    SlackAlertChannel,
    WebhookAlertChannel,
)
from construct_engine.constructs.alert_channel_subscription import AlertChannelSubscription
from construct_engine.constructs.api_check import (
    ApiCheck,
    ApiCheckProps,
    ApiCheckRequest,
    Assertion,
    AssertionBuilder,
    BodyType,
    HttpMethod,
    KeyValuePair,
)
from construct_engine.constructs.browser_check import (
    BrowserCheck,
    BrowserCheckCode,
    BrowserCheckProps,
    ScriptNotFoundError,
)
from construct_engine.constructs.check import (
    Check,
    CheckConfigDefaults,
    CheckProps,
    MissingRequiredFieldError,
    apply_check_defaults,
)
from construct_engine.constructs.check_group import CheckGroup
from construct_engine.constructs.construct import Construct
from construct_engine.constructs.environment_variable import EnvironmentVariable
from construct_engine.constructs.project import DuplicateLogicalIdError, Project
from construct_engine.constructs.ref import Ref, UnresolvedRefError

__all__ = [
    "AlertChannel",
    "AlertChannelSubscription",
    "ApiCheck",
    "ApiCheckProps",
    "ApiCheckRequest",
    "Assertion",
    "AssertionBuilder",
    "BodyType",
    "BrowserCheck",
    "BrowserCheckCode",
    "BrowserCheckProps",
    "Check",
    "CheckConfigDefaults",
    "CheckGroup",
    "CheckProps",
    "Construct",
    "DuplicateLogicalIdError",
    "EmailAlertChannel",
    "EnvironmentVariable",
    "HttpMethod",
    "KeyValuePair",
    "MissingRequiredFieldError",
    "Project",
    "Ref",
    "ScriptNotFoundError",
    "SlackAlertChannel",
    "UnresolvedRefError",
    "WebhookAlertChannel",
    "apply_check_defaults",
]
