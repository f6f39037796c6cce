"""Join construct linking an alert channel to a check or a check group."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, ClassVar

from construct_engine.constructs.construct import Construct
from construct_engine.constructs.ref import Ref
from construct_engine.session import Session

if TYPE_CHECKING:
    from construct_engine.constructs.alert_channel import AlertChannel

logger = logging.getLogger(__name__)


class AlertChannelSubscription(Construct):
    """Subscribes one alert channel to one check or one group.

    Subscriptions are derived from ``alert_channels`` lists and their
    logical ids are deterministic, so re-deriving them replaces the
    earlier registry entry instead of colliding with it.
    """

    type: ClassVar[str] = "alert-channel-subscription"
    replaceable: ClassVar[bool] = True

    def __init__(
        self,
        logical_id: str,
        *,
        alert_channel_id: Ref,
        check_id: Ref | None = None,
        group_id: Ref | None = None,
        activated: bool = True,
        session: Session | None = None,
    ) -> None:
        if (check_id is None) == (group_id is None):
            raise ValueError("A subscription needs exactly one of check_id or group_id.")
        self.alert_channel_id = alert_channel_id
        self.check_id = check_id
        self.group_id = group_id
        self.activated = activated
        super().__init__(logical_id, session=session)

    def synthesize(self) -> dict[str, Any]:
        return {
            "alertChannelId": self.alert_channel_id,
            "checkId": self.check_id,
            "groupId": self.group_id,
            "activated": self.activated,
        }


def subscribe_alert_channels(
    owner: Construct,
    alert_channels: Iterable[AlertChannel],
    *,
    id_prefix: str,
    owner_field: str,
) -> list[AlertChannelSubscription]:
    """Create one subscription per alert channel for *owner*.

    Logical ids have the form ``<id_prefix>#<ownerId>#<channelId>``.
    *owner_field* is ``"check_id"`` or ``"group_id"`` depending on which
    side of the join *owner* sits.
    """
    subscriptions: list[AlertChannelSubscription] = []
    for alert_channel in alert_channels:
        subscription = AlertChannelSubscription(
            f"{id_prefix}#{owner.logical_id}#{alert_channel.logical_id}",
            alert_channel_id=alert_channel.ref(),
            activated=True,
            session=owner.session,
            **{owner_field: owner.ref()},
        )
        subscriptions.append(subscription)
    if subscriptions:
        logger.debug("Subscribed %s to %d alert channel(s)", owner.logical_id, len(subscriptions))
    return subscriptions
