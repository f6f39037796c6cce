"""Check group construct."""

from __future__ import annotations

from typing import Any, ClassVar

from construct_engine.constructs.alert_channel import AlertChannel
from construct_engine.constructs.alert_channel_subscription import (
    AlertChannelSubscription,
    subscribe_alert_channels,
)
from construct_engine.constructs.construct import Construct
from construct_engine.constructs.environment_variable import EnvironmentVariable
from construct_engine.session import Session


class CheckGroup(Construct):
    """A named collection of checks sharing settings and alert channels.

    Checks join a group by passing ``group=`` (or ``group_id=Ref(...)``);
    the reference is resolved when the project is synthesized.
    """

    type: ClassVar[str] = "check-group"

    def __init__(
        self,
        logical_id: str,
        *,
        name: str,
        activated: bool = True,
        muted: bool = False,
        double_check: bool = True,
        locations: list[str] | None = None,
        private_locations: list[str] | None = None,
        tags: list[str] | None = None,
        concurrency: int = 1,
        environment_variables: list[EnvironmentVariable] | None = None,
        alert_channels: list[AlertChannel] | None = None,
        session: Session | None = None,
    ) -> None:
        if not name:
            raise ValueError(f"Check group '{logical_id}' requires a name.")
        if concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {concurrency}.")
        self.name = name
        self.activated = activated
        self.muted = muted
        self.double_check = double_check
        self.locations = list(locations or [])
        self.private_locations = list(private_locations or [])
        self.tags = list(tags or [])
        self.concurrency = concurrency
        self.environment_variables = list(environment_variables or [])
        self.alert_channels = list(alert_channels or [])
        super().__init__(logical_id, session=session)

    def add_subscriptions(self) -> list[AlertChannelSubscription]:
        return subscribe_alert_channels(
            self,
            self.alert_channels,
            id_prefix="group-alert-channel-subscription",
            owner_field="group_id",
        )

    def synthesize(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "activated": self.activated,
            "muted": self.muted,
            "doubleCheck": self.double_check,
            "locations": self.locations,
            "privateLocations": self.private_locations,
            "tags": self.tags,
            "concurrency": self.concurrency,
            "environmentVariables": [ev.model_dump() for ev in self.environment_variables],
        }
