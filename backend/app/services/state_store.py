"""State store for time rotating resources.

Applies the resource's plan against persisted rows. The caller owns the
session and its transaction; the store flushes but never commits.
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.models.time_rotating_state import TimeRotatingState
from rotating.core.model import RotatingConfig, TimestampModel
from rotating.core.resource import PlanAction, TimeRotatingResource

logger = logging.getLogger(__name__)


class TimeRotatingStateStore:
    def __init__(self, session: Session, resource: Optional[TimeRotatingResource] = None) -> None:
        self._session = session
        self.resource = resource or TimeRotatingResource()

    def get(self, address: str) -> Optional[TimestampModel]:
        row = self._session.get(TimeRotatingState, address)
        if row is None:
            return None
        return self.resource.read(row.to_model())

    def plan(self, address: str, config: Optional[RotatingConfig]) -> PlanAction:
        return self.resource.plan(self.get(address), config)

    def apply(self, address: str, config: Optional[RotatingConfig]) -> Optional[TimestampModel]:
        """Converge the stored row for `address` on `config`.

        Returns the stored state afterwards, or None when it was deleted.
        """
        row = self._session.get(TimeRotatingState, address)
        prior = row.to_model() if row is not None else None

        state = self.resource.apply(prior, config)
        if state is prior:
            return state

        if row is not None:
            # Flush the delete on its own so the insert below is not merged
            # into an UPDATE of the same primary key.
            self._session.delete(row)
            self._session.flush()

        if state is not None:
            self._session.add(TimeRotatingState.from_model(address, state))
            self._session.flush()
            logger.info("Stored time_rotating %s at %s.", state.id, address)
        return state

    def delete(self, address: str) -> None:
        """Drop the row for `address`; a missing row is not an error."""
        row = self._session.get(TimeRotatingState, address)
        if row is None:
            return
        self.resource.delete(row.to_model())
        self._session.delete(row)
        self._session.flush()
