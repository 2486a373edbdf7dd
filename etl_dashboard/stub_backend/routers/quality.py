"""Error detection and anomaly detection endpoints.

- GET  /api/errors?page=&limit= — paged list of detected data errors
- POST /api/errors/{error_id}/ignore — mark an error as ignored
- GET  /api/errors/rules — list correction rules
- POST /api/errors/rules — create a correction rule
- PUT  /api/errors/rules/{rule_id} — update a correction rule
- POST /api/errors/rules/{rule_id}/apply — apply a rule to a set of errors
- GET  /api/anomalies — list anomalies
- POST /api/anomalies/{anomaly_id}/acknowledge — acknowledge an anomaly
- GET  /api/anomalies/rules — list alert rules
- POST /api/anomalies/rules — create an alert rule
- PUT  /api/anomalies/rules/{rule_id} — update an alert rule
"""

from __future__ import annotations

from fastapi import APIRouter, Query
from pydantic import BaseModel, Field

from etl_dashboard import keys
from etl_dashboard.models.requests import (
    AlertRuleCreate,
    AlertRuleUpdate,
    CorrectionRuleCreate,
    CorrectionRuleUpdate,
)
from etl_dashboard.stub_backend.envelope import ok, paginated
from etl_dashboard.stub_backend.store import SampleStore


class ApplyRuleRequest(BaseModel):
    """Body of the apply-rule call. Field names are snake_case on the wire."""

    error_ids: list[str] = Field(..., min_length=1)


def create_quality_router(*, store: SampleStore) -> APIRouter:
    """Factory that creates the error / anomaly router bound to ``store``."""

    router = APIRouter(tags=["quality"])

    @router.get(keys.DATA_ERRORS)
    async def list_errors(
        page: int = Query(default=1, ge=1),
        limit: int = Query(default=10, ge=1, le=100),
    ) -> dict:
        items, total = store.list_errors(page, limit)
        return paginated(items, total=total, page=page, limit=limit)

    @router.post(keys.DATA_ERRORS + "/{error_id}/ignore")
    async def ignore_error(error_id: str) -> dict:
        return ok(store.ignore_error(error_id), "Error ignored")

    @router.get(keys.CORRECTION_RULES)
    async def list_correction_rules() -> dict:
        return ok(list(store.correction_rules.values()))

    @router.post(keys.CORRECTION_RULES)
    async def create_correction_rule(body: CorrectionRuleCreate) -> dict:
        return ok(store.create_correction_rule(body))

    @router.put(keys.CORRECTION_RULES + "/{rule_id}")
    async def update_correction_rule(rule_id: str, body: CorrectionRuleUpdate) -> dict:
        return ok(store.update_correction_rule(rule_id, body))

    @router.post(keys.CORRECTION_RULES + "/{rule_id}/apply")
    async def apply_correction_rule(rule_id: str, body: ApplyRuleRequest) -> dict:
        return ok(store.apply_correction_rule(rule_id, body.error_ids), "Rule applied")

    @router.get(keys.ANOMALIES)
    async def list_anomalies() -> dict:
        return ok(list(store.anomalies.values()))

    @router.post(keys.ANOMALIES + "/{anomaly_id}/acknowledge")
    async def acknowledge_anomaly(anomaly_id: str) -> dict:
        return ok(store.acknowledge_anomaly(anomaly_id), "Anomaly acknowledged")

    @router.get(keys.ANOMALY_RULES)
    async def list_alert_rules() -> dict:
        return ok(list(store.alert_rules.values()))

    @router.post(keys.ANOMALY_RULES)
    async def create_alert_rule(body: AlertRuleCreate) -> dict:
        return ok(store.create_alert_rule(body))

    @router.put(keys.ANOMALY_RULES + "/{rule_id}")
    async def update_alert_rule(rule_id: str, body: AlertRuleUpdate) -> dict:
        return ok(store.update_alert_rule(rule_id, body))

    return router
