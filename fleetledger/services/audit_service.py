"""
Journal d'audit / Audit trail.
Les lignes sont ajoutees a la session courante et commitees avec la requete.
Rows join the current session and are committed with the request.
"""

import json
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from fleetledger.models.audit import AuditLog
from fleetledger.utils.dates import utc_now

logger = logging.getLogger(__name__)


def log_action(
    db: AsyncSession,
    entity_type: str,
    entity_id: int,
    action: str,
    user_email: str | None,
    details: dict | None = None,
    ip_address: str | None = None,
) -> AuditLog:
    entry = AuditLog(
        entity_type=entity_type,
        entity_id=entity_id,
        action=action,
        user_email=user_email,
        ip_address=ip_address,
        details=json.dumps(details, default=str) if details else None,
        created_at=utc_now(),
    )
    db.add(entry)
    return entry


def log_auth_event(db: AsyncSession, action: str, email: str, user_id: int = 0, ip: str | None = None) -> AuditLog:
    """Evenement d'authentification / Authentication event."""
    if action.endswith("_FAILED") or action.endswith("_DISABLED"):
        logger.warning("Auth %s for %s from %s", action, email, ip)
    return log_action(db, "auth", user_id, action, email, ip_address=ip)
