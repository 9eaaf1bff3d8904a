from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..common.actor import UserRef
from ..common.datetime_utils import now_local
from ..core.enums import Period, RequestKind
from ..core.exceptions import NotFoundError
from ..filters.periods import resolve_period
from .gate import StatusTransitionGate
from .model import ApprovalRequest
from .repository import ApprovalRepository
from .taxonomy import TAXONOMIES


class ApprovalReviewService:
    """Review screen use cases for one request family (cleaning or production)."""

    def __init__(self, kind: RequestKind, requests: ApprovalRepository, *, gate: Optional[StatusTransitionGate] = None):
        self._taxonomy = TAXONOMIES[kind]
        self._requests = requests
        self._gate = gate or StatusTransitionGate(requests)

    def landing_stats(self, *, now: Optional[datetime] = None) -> dict:
        now = now or now_local()
        return self._requests.count_summary(
            today=resolve_period(Period.TODAY, now=now),
            month=resolve_period(Period.THIS_MONTH, now=now),
            pending_statuses=sorted(self._taxonomy.pending_statuses),
        )

    def list_requests(self) -> Sequence[ApprovalRequest]:
        return self._requests.list_requests()

    def get_request(self, request_id: int) -> ApprovalRequest:
        req = self._requests.get_request(request_id=int(request_id))
        if not req:
            raise NotFoundError("Request not found")
        return req

    def update_status(
        self,
        *,
        request_id: int,
        status: str,
        actor: UserRef,
        now: Optional[datetime] = None,
    ) -> ApprovalRequest:
        req = self.get_request(request_id)
        return self._gate.apply_status(req, status, actor, now or now_local())

    def export_rows(self) -> Sequence[dict]:
        return self._requests.export_rows()
