"""
Time rotating resource.

Lifecycle: Absent -> Created -> Destroyed. There is no Updated state; any
change to a replacement-triggering attribute destroys the record and creates
a new one with a fresh base timestamp.

The resource keeps no state of its own. Everything it needs arrives as
arguments and everything it produces is returned to the caller for storage.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, List, NoReturn, Optional

from rotating.core.audit import log_lifecycle_event
from rotating.core.errors import ContractViolation, UpdateNotSupportedError
from rotating.core.model import RotatingConfig, TimestampModel, build_timestamp_model
from rotating.core.resolver import RotationResolver
from rotating.core.schema import TIME_ROTATING_SCHEMA, ResourceSchema, out_of_range_problem
from rotating.core.time_common import Clock, format_rfc3339, parse_rfc3339, system_clock, truncate_to_second

logger = logging.getLogger(__name__)


class PlanAction(str, Enum):
    CREATE = "create"
    REPLACE = "replace"
    NOOP = "noop"
    DELETE = "delete"


class TimeRotatingResource:
    """Create/read/update/delete entry points plus the replacement plan."""

    def __init__(
        self,
        clock: Clock = system_clock,
        resolver: Optional[RotationResolver] = None,
        schema: ResourceSchema = TIME_ROTATING_SCHEMA,
    ) -> None:
        self.clock = clock
        self.resolver = resolver or RotationResolver()
        self.schema = schema

    def create(self, config: RotatingConfig) -> TimestampModel:
        """
        Establish the base timestamp, resolve the rotation and build the record.

        Raises:
            ParseError: rfc3339 or rotation_rfc3339 is not RFC3339.
            ContractViolation: the rotation lands outside years 1-9999.
        """
        if config.rfc3339:
            base = parse_rfc3339(config.rfc3339)
        else:
            base = truncate_to_second(self.clock())

        offsets = config.offsets_only()
        try:
            rotation = self.resolver.resolve(base, offsets)
        except OverflowError as e:
            raise ContractViolation([out_of_range_problem(offsets)]) from e
        state = build_timestamp_model(base, rotation, config, config.triggers)
        log_lifecycle_event("create", state)
        return state

    def read(self, state: TimestampModel) -> TimestampModel:
        # No recomputation: whether the rotation time has passed is decided elsewhere.
        return state

    def update(self, prior: TimestampModel, config: RotatingConfig) -> NoReturn:
        changed = self.changed_fields(prior, config)
        log_lifecycle_event("update_refused", prior, changed=sorted(changed))
        raise UpdateNotSupportedError(changed)

    def delete(self, state: TimestampModel) -> None:
        log_lifecycle_event("delete", state)

    def changed_fields(self, prior: TimestampModel, config: RotatingConfig) -> List[str]:
        """Replacement-triggering attributes whose configured value differs from `prior`."""
        changed: List[str] = []
        for name in sorted(self.schema.replacement_fields):
            attr = self.schema.attribute(name)
            wanted = getattr(config, name)
            current = getattr(prior, name)
            if wanted in (None, "") and attr.computed:
                # Unset computed attributes keep the stored value.
                continue
            if not _same_value(name, wanted, current):
                changed.append(name)
        return changed

    def plan(self, prior: Optional[TimestampModel], config: Optional[RotatingConfig]) -> PlanAction:
        if prior is None and config is None:
            return PlanAction.NOOP
        if prior is None:
            return PlanAction.CREATE
        if config is None:
            return PlanAction.DELETE
        if self.changed_fields(prior, config):
            return PlanAction.REPLACE
        return PlanAction.NOOP

    def apply(self, prior: Optional[TimestampModel], config: Optional[RotatingConfig]) -> Optional[TimestampModel]:
        """Carry out the plan and return the state to persist (None once deleted)."""
        if config is None:
            if prior is not None:
                self.delete(prior)
            return None

        self.schema.validate_config(config)
        if prior is None:
            return self.create(config)

        changed = self.changed_fields(prior, config)
        if not changed:
            return self.read(prior)

        # Build the replacement first so a failed create leaves prior in place.
        state = self.create(config)
        logger.info("Replacing time_rotating %s: %s changed.", prior.id, ", ".join(changed))
        self.delete(prior)
        return state


def _same_value(name: str, wanted: Any, current: Any) -> bool:
    if name == "triggers":
        return (wanted or {}) == (current or {})
    if name in ("rfc3339", "rotation_rfc3339") and wanted and current:
        return _canonical(wanted) == _canonical(current)
    if name.startswith("rotation_"):
        # 0 and None both mean unset.
        return (wanted or None) == (current or None)
    return wanted == current


def _canonical(value: str) -> str:
    return format_rfc3339(parse_rfc3339(value))
