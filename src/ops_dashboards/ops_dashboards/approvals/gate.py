"""Status transition gate for approval-style records.

Approving or rejecting sets the overall status and every approver slot in one
write. The current status is not checked, so a decided request can be decided
again; the last write wins.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..common.validators import require_choice
from ..common.actor import UserRef
from ..core.exceptions import GateError
from .model import ApprovalRequest
from .taxonomy import TAXONOMIES, Taxonomy

logger = logging.getLogger(__name__)


class StatusWriter(Protocol):
    def write_status(
        self,
        *,
        request_id: int,
        status: str,
        approver_slots: Sequence[str],
        actor_id: Optional[int],
        at: datetime,
        review_notes: Optional[str] = None,
    ) -> None:
        """Persist the transition as a single UPDATE statement."""

        raise NotImplementedError


class StatusTransitionGate:
    def __init__(self, writer: StatusWriter):
        self._writer = writer

    @staticmethod
    def taxonomy_for(request: ApprovalRequest) -> Taxonomy:
        return TAXONOMIES[request.kind]

    def apply_status(
        self,
        request: ApprovalRequest,
        new_status: str,
        actor: UserRef,
        now: datetime,
        *,
        review_notes: Optional[str] = None,
    ) -> ApprovalRequest:
        """Validate and persist a status change; returns the updated request.

        Raises ValidationError for a status outside the taxonomy, GateError if
        the write fails.
        """
        taxonomy = self.taxonomy_for(request)
        status = require_choice(new_status, taxonomy.status_enum, taxonomy.allowed_targets, "status").value
        notes = review_notes if taxonomy.accepts_review_notes else None

        try:
            self._writer.write_status(
                request_id=request.request_id,
                status=status,
                approver_slots=taxonomy.approver_slots,
                actor_id=actor.user_id,
                at=now,
                review_notes=notes,
            )
        except Exception as e:
            logger.exception("Status update failed for %s #%s", request.kind.value, request.request_id)
            raise GateError(str(e)) from e

        logger.info(
            "%s #%s -> %s by user %s",
            request.kind.value,
            request.request_id,
            status,
            actor.user_id,
        )

        changes: dict = {
            "status": status,
            "approver_statuses": {slot: status for slot in taxonomy.approver_slots},
        }
        if taxonomy.records_timestamp:
            changes["updated_at"] = now
        if taxonomy.records_actor:
            changes["updated_by"] = actor.user_id
        if taxonomy.accepts_review_notes:
            changes.update(review_notes=notes, reviewed_by=actor.user_id, reviewed_at=now)
        return replace(request, **changes)
