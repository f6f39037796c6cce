"""Check construct base: typed configuration, default merging and synthesis.

Every concrete check type (:class:`~construct_engine.constructs.api_check.ApiCheck`,
:class:`~construct_engine.constructs.browser_check.BrowserCheck`) shares the
fields declared on :class:`CheckProps`.  Project-wide defaults from the
session are merged into the properties once, at construction time:

* a default applies only when the property is ``None``;
* falsy but present values (``False``, ``0``, ``""``, ``[]``) are kept;
* properties the defaults do not mention are left untouched.

After merging, ``name`` must be set or construction fails with
:class:`MissingRequiredFieldError`.
"""

from __future__ import annotations

import abc
import copy
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from construct_engine.constructs.alert_channel import AlertChannel
from construct_engine.constructs.alert_channel_subscription import (
    AlertChannelSubscription,
    subscribe_alert_channels,
)
from construct_engine.constructs.construct import Construct
from construct_engine.constructs.environment_variable import EnvironmentVariable
from construct_engine.constructs.ref import Ref
from construct_engine.session import Session, resolve_session

if TYPE_CHECKING:
    from construct_engine.constructs.check_group import CheckGroup

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class MissingRequiredFieldError(Exception):
    """Raised when a required check property is still unset after defaulting."""

    def __init__(self, field_name: str, logical_id: str) -> None:
        self.field_name = field_name
        self.logical_id = logical_id
        super().__init__(f"Check '{logical_id}' is missing required property '{field_name}' after applying defaults.")


# ---------------------------------------------------------------------------
# Property models
# ---------------------------------------------------------------------------


class CheckConfigDefaults(BaseModel):
    """Check properties a project may set once for every check.

    Only fields explicitly set on an instance take part in default
    merging; a field left at its ``None`` default is not a default.
    """

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    activated: bool | None = None
    muted: bool | None = None
    double_check: bool | None = None
    should_fail: bool | None = None
    runtime_id: str | None = None
    locations: list[str] | None = None
    private_locations: list[str] | None = None
    tags: list[str] | None = None
    frequency: int | None = Field(default=None, ge=0, description="Run interval in minutes.")
    environment_variables: list[EnvironmentVariable] | None = None
    alert_channels: list[AlertChannel] | None = None


class CheckProps(CheckConfigDefaults):
    """Properties accepted by every check type.

    ``name`` is optional here so that defaults get a chance to fill it;
    :class:`Check` enforces it after merging.
    """

    name: str | None = Field(default=None, min_length=1)
    group_id: Ref | None = Field(
        default=None,
        description="Pending reference to the check group this check belongs to.",
    )

    @field_validator("group_id", mode="before")
    @classmethod
    def coerce_group_ref(cls, v: Any) -> Any:
        if isinstance(v, str):
            return Ref.from_id(v)
        return v


P = TypeVar("P", bound=CheckProps)


def _copy_list(value: list[str] | None) -> list[str] | None:
    return list(value) if value is not None else None


def apply_check_defaults(props: P, defaults: CheckConfigDefaults | None) -> P:
    """Return *props* with every ``None`` property filled from *defaults*.

    The input is not modified.  List defaults are copied so that checks
    never share a mutable default.
    """
    if defaults is None:
        return props
    updates: dict[str, Any] = {}
    for key in sorted(defaults.model_fields_set):
        if getattr(props, key) is None:
            updates[key] = copy.copy(getattr(defaults, key))
    if not updates:
        return props
    return props.model_copy(update=updates)


# ---------------------------------------------------------------------------
# Check construct
# ---------------------------------------------------------------------------


class Check(Construct):
    """Abstract base for all check types.

    Subclasses set :attr:`check_type` and :attr:`props_model` and
    implement :meth:`_type_payload`.
    """

    type: ClassVar[str] = "check"
    check_type: ClassVar[str]
    props_model: ClassVar[type[CheckProps]] = CheckProps

    def __init__(
        self,
        logical_id: str,
        props: CheckProps | Mapping[str, Any] | None = None,
        *,
        group: CheckGroup | None = None,
        session: Session | None = None,
        **fields: Any,
    ) -> None:
        session = resolve_session(session)
        props = self._coerce_props(props, fields)
        if group is not None:
            if props.group_id is not None:
                raise ValueError("Pass either group or group_id, not both.")
            props = props.model_copy(update={"group_id": group.ref()})

        props = apply_check_defaults(props, session.check_defaults)
        if props.name is None:
            raise MissingRequiredFieldError("name", logical_id)

        self.props = props
        self.name: str = props.name
        self.activated = props.activated
        self.muted = props.muted
        self.double_check = props.double_check
        self.should_fail = props.should_fail
        self.runtime_id = props.runtime_id
        self.locations = _copy_list(props.locations)
        self.private_locations = _copy_list(props.private_locations)
        self.tags = _copy_list(props.tags)
        self.frequency = props.frequency
        self.environment_variables: list[EnvironmentVariable] = list(props.environment_variables or [])
        # Subscriptions are derived from this list when the project is synthesized.
        self.alert_channels: list[AlertChannel] = list(props.alert_channels or [])
        self.group_id = props.group_id
        self.check_file_path = session.check_file_path

        self._configure(props, session)
        super().__init__(logical_id, session=session)

    @classmethod
    def _coerce_props(cls, props: CheckProps | Mapping[str, Any] | None, fields: dict[str, Any]) -> CheckProps:
        if props is None:
            return cls.props_model(**fields)
        if fields:
            raise TypeError("Pass either a props object or keyword properties, not both.")
        if isinstance(props, cls.props_model):
            return props
        if isinstance(props, Mapping):
            return cls.props_model.model_validate(dict(props))
        raise TypeError(f"{cls.__name__} expects {cls.props_model.__name__}, got {type(props).__name__}.")

    def _configure(self, props: CheckProps, session: Session) -> None:
        """Hook for subclasses to read their type-specific properties."""

    @abc.abstractmethod
    def _type_payload(self) -> dict[str, Any]:
        """Return the check-type specific part of the synthesized payload."""

    def add_subscriptions(self) -> list[AlertChannelSubscription]:
        """Register one alert channel subscription per attached channel.

        Calling this again replaces the earlier subscriptions for the same
        (check, channel) pairs.
        """
        return subscribe_alert_channels(
            self,
            self.alert_channels,
            id_prefix="check-alert-channel-subscription",
            owner_field="check_id",
        )

    def synthesize(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": self.name,
            "activated": self.activated,
            "muted": self.muted,
            "doubleCheck": self.double_check,
            "shouldFail": self.should_fail,
            "runtimeId": self.runtime_id,
            "locations": self.locations,
            "privateLocations": self.private_locations,
            "tags": self.tags,
            "frequency": self.frequency,
            "groupId": self.group_id,
            "environmentVariables": [ev.model_dump() for ev in self.environment_variables],
            "__checkFilePath": self.check_file_path,
            "sourceFile": self.check_file_path,
        }
        payload.update(self._type_payload())
        return payload
