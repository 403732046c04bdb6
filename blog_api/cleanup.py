"""
CLI entrypoint for the refresh token cleanup job. Run from cron, e.g.:

  python -m blog_api.cleanup

Or hourly: 0 * * * * cd /path/to/blog-api && .venv/bin/python -m blog_api.cleanup
"""

import logging
import sys

from blog_api.core.config import get_settings
from blog_api.core.database import SessionLocal
from blog_api.core.log import configure_logging
from blog_api.services.token_cleanup import run_token_cleanup

logger = logging.getLogger(__name__)


def main() -> int:
    """Delete refresh token records whose expiry has passed."""
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    db = SessionLocal()
    try:
        deleted = run_token_cleanup(db, settings)
        logger.info("Token cleanup completed: refresh_tokens_deleted=%s", deleted)
        return 0
    except Exception as e:
        logger.exception("Token cleanup job failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
