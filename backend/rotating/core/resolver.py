"""
Rotation resolver.

Turns a base instant plus the configured offsets into the absolute rotation
instant. Pure: no clock, no I/O, no state between calls.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Union

from rotating.core.offsets import OffsetSpec, RotationOffsets, apply_offset
from rotating.core.time_common import UTC, ZERO_TIME

logger = logging.getLogger(__name__)


class RotationResolver:
    """
    Resolves offsets into a rotation timestamp.

    With the six-field form the fields are evaluated as sequential overwrites
    of one working value in the order days, hours, minutes, months, rfc3339,
    years. Only the last populated field counts, but every populated field
    up to it is still evaluated, so a malformed rfc3339 fails the whole
    resolution even when years is also set.
    """

    def resolve(self, base: datetime, offsets: Union[RotationOffsets, OffsetSpec]) -> datetime:
        """
        Args:
            base: Timezone-aware base instant.
            offsets: Either RotationOffsets or a single OffsetSpec variant.

        Returns:
            The rotation instant, UTC.

        Raises:
            ParseError: An absolute rfc3339 offset is not RFC3339.
        """
        if base.tzinfo is None:
            raise ValueError("base must be timezone-aware (UTC)")
        base = base.astimezone(UTC)

        if not isinstance(offsets, RotationOffsets):
            return offsets.apply(base)

        populated = offsets.populated()
        if len(populated) > 1:
            logger.warning(
                "Multiple rotation offsets populated (%s); applying %s by precedence.",
                ", ".join(kind.value for kind, _ in populated),
                populated[-1][0].value,
            )

        rotation = ZERO_TIME
        for kind, value in populated:
            rotation = apply_offset(kind, value, base)
        return rotation
