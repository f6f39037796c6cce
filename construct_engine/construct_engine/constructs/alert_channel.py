"""Alert channel constructs.

Alert channels are attached to checks and groups through
:class:`~construct_engine.constructs.alert_channel_subscription.AlertChannelSubscription`
join constructs, which are created when the project is synthesized.
"""

from __future__ import annotations

import abc
from typing import Any, ClassVar

from construct_engine.constructs.construct import Construct
from construct_engine.session import Session


class AlertChannel(Construct):
    """Common delivery settings shared by every alert channel type."""

    type: ClassVar[str] = "alert-channel"
    channel_type: ClassVar[str]

    def __init__(
        self,
        logical_id: str,
        *,
        send_recovery: bool = True,
        send_failure: bool = True,
        send_degraded: bool = False,
        ssl_expiry: bool = False,
        ssl_expiry_threshold: int = 30,
        session: Session | None = None,
    ) -> None:
        if not 1 <= ssl_expiry_threshold <= 30:
            raise ValueError(f"ssl_expiry_threshold must be between 1 and 30 days, got {ssl_expiry_threshold}.")
        self.send_recovery = send_recovery
        self.send_failure = send_failure
        self.send_degraded = send_degraded
        self.ssl_expiry = ssl_expiry
        self.ssl_expiry_threshold = ssl_expiry_threshold
        super().__init__(logical_id, session=session)

    @abc.abstractmethod
    def channel_config(self) -> dict[str, Any]:
        """Return the channel-type specific ``config`` block."""

    def synthesize(self) -> dict[str, Any]:
        return {
            "type": self.channel_type,
            "config": self.channel_config(),
            "sendRecovery": self.send_recovery,
            "sendFailure": self.send_failure,
            "sendDegraded": self.send_degraded,
            "sslExpiry": self.ssl_expiry,
            "sslExpiryThreshold": self.ssl_expiry_threshold,
        }


class EmailAlertChannel(AlertChannel):
    channel_type: ClassVar[str] = "EMAIL"

    def __init__(self, logical_id: str, *, address: str, **kwargs: Any) -> None:
        if "@" not in address:
            raise ValueError(f"Invalid email address: {address!r}")
        self.address = address
        super().__init__(logical_id, **kwargs)

    def channel_config(self) -> dict[str, Any]:
        return {"address": self.address}


class SlackAlertChannel(AlertChannel):
    channel_type: ClassVar[str] = "SLACK"

    def __init__(self, logical_id: str, *, url: str, channel: str | None = None, **kwargs: Any) -> None:
        self.url = url
        self.channel = channel
        super().__init__(logical_id, **kwargs)

    def channel_config(self) -> dict[str, Any]:
        return {"url": self.url, "channel": self.channel}


class WebhookAlertChannel(AlertChannel):
    channel_type: ClassVar[str] = "WEBHOOK"

    def __init__(
        self,
        logical_id: str,
        *,
        url: str,
        method: str = "POST",
        headers: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> None:
        self.url = url
        self.method = method.upper()
        self.headers = dict(headers or {})
        super().__init__(logical_id, **kwargs)

    def channel_config(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "method": self.method,
            "headers": [{"key": k, "value": v} for k, v in self.headers.items()],
        }
