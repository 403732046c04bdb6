"""Refresh token cleanup: delete records whose signature expiry has passed."""

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from blog_api.services.refresh_tokens import RefreshTokenStore

if TYPE_CHECKING:
    from blog_api.core.config import Settings

logger = logging.getLogger(__name__)


def run_token_cleanup(
    session: Session,
    settings: "Settings",
    now: datetime | None = None,
) -> int:
    """
    Delete refresh token records that can no longer verify.

    Returns the number of records deleted. Idempotent: safe to run repeatedly.
    """
    if not settings.TOKEN_CLEANUP_ENABLED:
        logger.info("Token cleanup is disabled (TOKEN_CLEANUP_ENABLED=false); skipping.")
        return 0

    cutoff = now or datetime.now(UTC)
    deleted_count = RefreshTokenStore(session).purge_expired(cutoff)
    session.commit()

    if deleted_count > 0:
        logger.info(
            "Token cleanup run: cutoff=%s, refresh_tokens_deleted=%s",
            cutoff.isoformat(),
            deleted_count,
        )
    return deleted_count
