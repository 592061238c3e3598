"""Rotation core primitives.

- RotationResolver turns a base instant plus offsets into the rotation instant.
- TimestampModel is the immutable persisted record built from them.
- TimeRotatingResource wires both into create/read/update/delete.
"""

from rotating.core.errors import ContractViolation, ParseError, RotatingError, UpdateNotSupportedError
from rotating.core.model import RotatingConfig, TimestampModel, build_timestamp_model
from rotating.core.offsets import (
    PRECEDENCE,
    AbsoluteRFC3339,
    Days,
    Hours,
    Minutes,
    Months,
    OffsetKind,
    OffsetSpec,
    RotationOffsets,
    Years,
)
from rotating.core.resolver import RotationResolver
from rotating.core.resource import PlanAction, TimeRotatingResource
from rotating.core.schema import TIME_ROTATING_SCHEMA, Attribute, AttributeType, ResourceSchema
from rotating.core.time_common import Clock, format_rfc3339, parse_rfc3339, system_clock

__all__ = [
    "AbsoluteRFC3339",
    "Attribute",
    "AttributeType",
    "Clock",
    "ContractViolation",
    "Days",
    "Hours",
    "Minutes",
    "Months",
    "OffsetKind",
    "OffsetSpec",
    "PRECEDENCE",
    "ParseError",
    "PlanAction",
    "ResourceSchema",
    "RotatingConfig",
    "RotatingError",
    "RotationOffsets",
    "RotationResolver",
    "TIME_ROTATING_SCHEMA",
    "TimeRotatingResource",
    "TimestampModel",
    "UpdateNotSupportedError",
    "Years",
    "build_timestamp_model",
    "format_rfc3339",
    "parse_rfc3339",
    "system_clock",
]
