"""Project registry: collects constructs and synthesizes the deploy payload.

Constructs register themselves on construction, keyed by
``(type, logical_id)``.  :meth:`Project.synthesize` derives alert channel
subscriptions, resolves every pending :class:`Ref` against the registry
and returns the single document sent to the deploy endpoint::

    {
        "project": {"logicalId": ..., "name": ..., "repoUrl": ...},
        "resources": [
            {"logicalId": ..., "type": "check", "payload": {...}},
            ...
        ],
    }
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

from construct_engine.constructs.alert_channel_subscription import AlertChannelSubscription
from construct_engine.constructs.check import Check
from construct_engine.constructs.check_group import CheckGroup
from construct_engine.constructs.construct import Construct
from construct_engine.constructs.ref import Ref, UnresolvedRefError

logger = logging.getLogger(__name__)

# Payload keys whose Ref values must point at a construct of a given type.
_REF_TARGET_TYPES: dict[str, str] = {
    "groupId": CheckGroup.type,
    "alertChannelId": "alert-channel",
    "checkId": Check.type,
}


class DuplicateLogicalIdError(Exception):
    """Raised when two constructs of the same type share a logical id."""


class Project:
    """Registry of every construct that belongs to one deployment unit."""

    def __init__(self, logical_id: str, name: str, repo_url: str | None = None) -> None:
        if not logical_id:
            raise ValueError("Project requires a non-empty logical id.")
        self.logical_id = logical_id
        self.name = name
        self.repo_url = repo_url
        self._constructs: dict[tuple[str, str], Construct] = {}

    # -- Registry -------------------------------------------------------------

    def add_construct(self, construct: Construct) -> None:
        """Register *construct*.

        Raises
        ------
        DuplicateLogicalIdError
            If a construct of the same type and logical id is already
            registered and the construct type is not replaceable.
        """
        key = (construct.type, construct.logical_id)
        if key in self._constructs:
            if not construct.replaceable:
                raise DuplicateLogicalIdError(
                    f"A {construct.type} with logical id '{construct.logical_id}' is already "
                    f"registered in project '{self.logical_id}'."
                )
            logger.debug("Replacing %s %s", construct.type, construct.logical_id)
        else:
            logger.debug("Registered %s %s", construct.type, construct.logical_id)
        self._constructs[key] = construct

    def get(self, construct_type: str, logical_id: str) -> Construct | None:
        return self._constructs.get((construct_type, logical_id))

    def constructs(self, construct_type: str | None = None) -> list[Construct]:
        """Return registered constructs in registration order, optionally by type."""
        return [c for (t, _), c in self._constructs.items() if construct_type is None or t == construct_type]

    def __len__(self) -> int:
        return len(self._constructs)

    def __contains__(self, key: object) -> bool:
        return key in self._constructs

    def __iter__(self) -> Iterator[Construct]:
        return iter(list(self._constructs.values()))

    # -- Resolution -----------------------------------------------------------

    def resolve(self, value: Any, *, key: str | None = None) -> Any:
        """Replace every :class:`Ref` inside *value* with its wire token.

        Dicts and lists are walked recursively.  A Ref found under a key
        listed in ``_REF_TARGET_TYPES`` must point at a construct of that
        type; other Refs may point at any registered construct.

        Raises
        ------
        UnresolvedRefError
            If a Ref names a construct that is not registered.
        """
        if isinstance(value, Ref):
            self._check_target(value, key)
            return value.to_wire()
        if isinstance(value, dict):
            return {k: self.resolve(v, key=k) for k, v in value.items()}
        if isinstance(value, list):
            return [self.resolve(v, key=key) for v in value]
        return value

    def _check_target(self, ref: Ref, key: str | None) -> None:
        expected_type = _REF_TARGET_TYPES.get(key or "")
        if expected_type is not None:
            if (expected_type, ref.logical_id) in self._constructs:
                return
        elif any(lid == ref.logical_id for _, lid in self._constructs):
            return
        target = expected_type or "construct"
        raise UnresolvedRefError(
            f"Unresolved ref '{ref.logical_id}' under '{key}': no {target} with that "
            f"logical id exists in project '{self.logical_id}'."
        )

    # -- Synthesis ------------------------------------------------------------

    def synthesize(self, filter_file: str | None = None) -> dict[str, Any]:
        """Return the resolved deploy document for this project.

        Parameters
        ----------
        filter_file:
            When given, only checks declared in this check file (and their
            subscriptions) are included.  Groups and alert channels are
            always included so that references stay resolvable.
        """
        for construct in self.constructs():
            if isinstance(construct, (Check, CheckGroup)):
                construct.add_subscriptions()

        skipped: set[str] = set()
        if filter_file is not None:
            skipped = {
                c.logical_id
                for c in self.constructs(Check.type)
                if isinstance(c, Check) and c.check_file_path != filter_file
            }

        resources: list[dict[str, Any]] = []
        for construct in self.constructs():
            if isinstance(construct, Check) and construct.logical_id in skipped:
                continue
            if (
                isinstance(construct, AlertChannelSubscription)
                and construct.check_id is not None
                and construct.check_id.logical_id in skipped
            ):
                continue
            resources.append(
                {
                    "logicalId": construct.logical_id,
                    "type": construct.type,
                    "payload": self.resolve(construct.synthesize()),
                }
            )

        logger.info("Synthesized project %s with %d resource(s)", self.logical_id, len(resources))
        return {
            "project": {
                "logicalId": self.logical_id,
                "name": self.name,
                "repoUrl": self.repo_url,
            },
            "resources": resources,
        }
