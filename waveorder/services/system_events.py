"""
System event logging for storefront diagnostics.

Events go to the application log and, when enabled, to the system_logs
table so platform operators can see failing storefronts.
"""
import logging
from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import async_sessionmaker

from waveorder.config import get_settings
from waveorder.database import AsyncSessionLocal
from waveorder.models.system_log import SystemLog

settings = get_settings()
logger = logging.getLogger(__name__)

_SEVERITY_LEVELS = {
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


class SystemEventLogger:
    def __init__(
        self,
        session_factory: async_sessionmaker = AsyncSessionLocal,
        persist: Optional[bool] = None,
    ):
        self._session_factory = session_factory
        self.persist = settings.PERSIST_SYSTEM_LOGS if persist is None else persist

    async def log(
        self,
        log_type: str,
        severity: str = "info",
        *,
        slug: Optional[str] = None,
        business_id: Optional[str] = None,
        endpoint: Optional[str] = None,
        method: Optional[str] = None,
        status_code: Optional[int] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        referrer: Optional[str] = None,
        error_message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Record one event. Never raises: a broken log sink must not
        change the response the caller is about to send."""
        logger.log(
            _SEVERITY_LEVELS.get(severity, logging.INFO),
            f"[{log_type}] {method} {endpoint} -> {status_code} "
            f"slug={slug} business={business_id} ip={ip_address}: {error_message}",
        )

        if not self.persist:
            return

        try:
            async with self._session_factory() as session:
                session.add(SystemLog(
                    log_type=log_type,
                    severity=severity,
                    slug=slug,
                    business_id=business_id,
                    endpoint=endpoint,
                    method=method,
                    status_code=status_code,
                    ip_address=ip_address,
                    user_agent=user_agent,
                    referrer=referrer,
                    error_message=error_message,
                    context=context,
                ))
                await session.commit()
        except Exception as e:
            logger.error(f"Failed to persist system log {log_type}: {e}")


# Singleton instance
system_event_logger = SystemEventLogger()


def get_system_event_logger() -> SystemEventLogger:
    """Dependency for the system event sink"""
    return system_event_logger
