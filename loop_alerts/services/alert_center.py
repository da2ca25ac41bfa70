"""Alert delivery service.

AlertDeliveryService is the narrow interface the manager talks to.
ScheduledAlertCenter implements it in-process: delayed alerts become
APScheduler one-shot jobs keyed by alert identity, immediate alerts go
straight to a sink.
"""

from collections.abc import Callable, Mapping, Sequence
from datetime import UTC, datetime
from typing import Protocol

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.date import DateTrigger

from loop_alerts.logging_config import alert_identity_ctx, get_logger
from loop_alerts.notifications.enums import AlertCategory
from loop_alerts.notifications.models import Alert, AlertActionSpec

logger = get_logger(__name__)

CategoryTable = Mapping[AlertCategory, Sequence[AlertActionSpec]]


class AlertDeliveryService(Protocol):
    """What the alert manager needs from a delivery platform."""

    def request_authorization(self) -> None: ...

    def register_categories(self, categories: CategoryTable) -> None: ...

    def enqueue(self, alert: Alert) -> None:
        """Schedule or surface an alert, replacing any with the same identity."""
        ...

    def cancel_all_pending(self) -> None:
        """Remove every alert that has not triggered yet."""
        ...

    def cancel(self, *identities: str) -> None:
        """Remove the pending alerts with these identities."""
        ...


def log_sink(alert: Alert) -> None:
    """Default sink: write the delivered alert to the log."""
    logger.info(
        "Alert delivered",
        title=alert.title,
        subtitle=alert.subtitle,
        body=alert.body,
        category=alert.category.value if alert.category else None,
    )


class ScheduledAlertCenter:
    """In-process delivery service on an AsyncIOScheduler.

    Delayed jobs are coroutines so they run on the event loop thread;
    ``delivered`` is never touched from a worker thread.

    Until authorization is granted every enqueue is dropped with a log
    line; callers are never told.
    """

    def __init__(
        self,
        scheduler: AsyncIOScheduler | None = None,
        sink: Callable[[Alert], None] = log_sink,
    ):
        self.scheduler = scheduler or AsyncIOScheduler(timezone="UTC")
        self.sink = sink
        self.authorized = False
        self.categories: dict[AlertCategory, tuple[AlertActionSpec, ...]] = {}
        self.delivered: dict[str, Alert] = {}

    def request_authorization(self) -> None:
        # Local delivery has nobody to refuse permission
        self.authorized = True
        logger.info("Alert authorization granted")

    def register_categories(self, categories: CategoryTable) -> None:
        self.categories = {
            category: tuple(actions) for category, actions in categories.items()
        }
        logger.info(
            "Alert categories registered",
            categories=[str(c) for c in self.categories],
        )

    def enqueue(self, alert: Alert) -> None:
        token = alert_identity_ctx.set(alert.identity)
        try:
            if not self.authorized:
                logger.warning("Alert dropped: delivery not authorized")
                return

            self._remove_job(alert.identity)

            if alert.trigger.is_immediate:
                self._deliver(alert)
                return

            run_date = datetime.now(UTC) + alert.trigger.delay
            self.scheduler.add_job(
                self._fire,
                trigger=DateTrigger(run_date=run_date),
                args=[alert],
                id=alert.identity,
                name=alert.title,
                replace_existing=True,
                misfire_grace_time=None,
            )
            logger.debug("Alert scheduled", run_date=run_date.isoformat())
        except Exception as e:
            logger.error("Failed to enqueue alert", error=str(e))
        finally:
            alert_identity_ctx.reset(token)

    def cancel_all_pending(self) -> None:
        count = len(self.scheduler.get_jobs())
        self.scheduler.remove_all_jobs()
        logger.info("Pending alerts cancelled", count=count)

    def cancel(self, *identities: str) -> None:
        for identity in identities:
            if self._remove_job(identity):
                logger.info("Pending alert cancelled", identity=identity)

    def pending(self) -> list[str]:
        """Identities of alerts that have not triggered yet."""
        return [job.id for job in self.scheduler.get_jobs()]

    def pending_run_date(self, identity: str) -> datetime | None:
        """When the pending alert with this identity will fire."""
        job = self.scheduler.get_job(identity)
        if job is None:
            return None
        return job.trigger.run_date

    def _remove_job(self, identity: str) -> bool:
        if self.scheduler.get_job(identity) is None:
            return False
        try:
            self.scheduler.remove_job(identity)
        except JobLookupError:
            return False
        return True

    async def _fire(self, alert: Alert) -> None:
        token = alert_identity_ctx.set(alert.identity)
        try:
            self._deliver(alert)
        finally:
            alert_identity_ctx.reset(token)

    def _deliver(self, alert: Alert) -> None:
        self.delivered[alert.identity] = alert
        try:
            self.sink(alert)
        except Exception as e:
            logger.error("Alert sink failed", error=str(e))
