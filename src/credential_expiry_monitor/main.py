#!/usr/bin/env python3
"""
Credential Expiry Monitor

Composition root and application entry point.
Wires together all layers following hexagonal architecture principles.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from croniter import croniter

from . import __version__
from .application.exceptions import ConfigurationError, PrerequisiteError
from .application.services import InventoryCollector, NotificationDispatcher, ReportStore
from .application.use_cases import RunExpiryCheck
from .domain.services import ExpiryClassifier
from .infrastructure.adapters import (
    AzureBlobSnapshotStorage,
    EntraIdDirectoryService,
    GraphMailTransport,
    LocalDirectoryStorage,
    SmtpEmailTransport,
)
from .infrastructure.config import RUN_MODES, Settings, load_settings

if TYPE_CHECKING:
    from .application.ports import EmailTransport
    from .application.use_cases import RunResult

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


class ApplicationContainer:
    """
    Dependency injection container.

    Responsible for creating and wiring all application components.
    """

    def __init__(self, settings: Settings) -> None:
        """Initialize container with settings."""
        self._settings = settings

    def create_collector(self) -> InventoryCollector:
        """Create the inventory collector over the Entra ID directory."""
        return InventoryCollector(EntraIdDirectoryService(self._settings.graph_config))

    def create_report_store(self) -> ReportStore:
        """Create the report store with local working area and blob storage."""
        local = LocalDirectoryStorage(self._settings.report_local_dir) if self._settings.report_local_dir else None
        return ReportStore(
            AzureBlobSnapshotStorage(self._settings.blob_config),
            self._settings.report_config,
            local=local,
        )

    def create_email_transport(self) -> EmailTransport:
        """
        Create the configured email transport.

        Raises:
            ConfigurationError: If the transport cannot send and this is not a dry run.
        """
        transport: EmailTransport
        if self._settings.mail_transport.lower() == "smtp":
            transport = SmtpEmailTransport(self._settings.smtp_config)
        else:
            transport = GraphMailTransport(self._settings.graph_mail_config)

        if not transport.is_configured() and not self._settings.dry_run:
            msg = f"{transport.__class__.__name__} is not configured"
            raise ConfigurationError(msg)

        logger.info("Email transport: %s", transport.__class__.__name__)
        return transport

    def create_dispatcher(self) -> NotificationDispatcher:
        """Create the notification dispatcher."""
        return NotificationDispatcher(
            self.create_email_transport(),
            self._settings.sender,
            dry_run=self._settings.dry_run,
        )

    def create_run_use_case(self) -> RunExpiryCheck:
        """Create the main use case with all dependencies."""
        return RunExpiryCheck(
            collector=self.create_collector(),
            report_store=self.create_report_store(),
            classifier=ExpiryClassifier(self._settings.thresholds),
            dispatcher=self.create_dispatcher(),
            dry_run=self._settings.dry_run,
        )


class Application:
    """
    Main application orchestrator.

    Handles run modes (single execution, scheduled, or API) and lifecycle.
    """

    def __init__(self, settings: Settings, container: ApplicationContainer | None = None) -> None:
        """Initialize application with settings."""
        self._settings = settings
        self._container = container or ApplicationContainer(settings)

    async def run_once(self) -> RunResult:
        """Execute a single expiry run."""
        use_case = self._container.create_run_use_case()
        return await use_case.execute()

    async def run_scheduled(self) -> None:
        """Run in scheduled mode with cron expression."""
        logger.info("Starting scheduled mode with cron: %s", self._settings.cron_schedule)

        # Run immediately on startup
        logger.info("Running initial check on startup...")
        await self._run_scheduled_once()

        cron = croniter(self._settings.cron_schedule, datetime.now(UTC))

        while True:
            next_run = cron.get_next(datetime)
            now = datetime.now(UTC)

            # Handle timezone-naive datetime from croniter
            if next_run.tzinfo is None:
                next_run = next_run.replace(tzinfo=UTC)

            sleep_seconds = (next_run - now).total_seconds()

            if sleep_seconds > 0:
                logger.info("Next check scheduled for %s", next_run.isoformat())
                await asyncio.sleep(sleep_seconds)

            logger.info("Running scheduled check...")
            await self._run_scheduled_once()

    async def _run_scheduled_once(self) -> None:
        """A failed prerequisite skips this tick instead of stopping the scheduler."""
        try:
            await self.run_once()
        except PrerequisiteError as e:
            logger.error("Run aborted: %s", e)

    async def run_api(self) -> None:
        """Run in API server mode."""
        import uvicorn

        from .infrastructure.adapters.api import create_app

        logger.info(
            "Starting API server on %s:%d",
            self._settings.api_host,
            self._settings.api_port,
        )

        app = create_app(
            run_func=self.run_once,
            version=__version__,
        )

        # Serve on the already running event loop
        config = uvicorn.Config(
            app,
            host=self._settings.api_host,
            port=self._settings.api_port,
            log_level=self._settings.log_level.lower(),
        )
        await uvicorn.Server(config).serve()

    async def run(self) -> int:
        """
        Run the application based on configured mode.

        Returns:
            Exit code (0 for a completed run, 1 for a failed prerequisite).
        """
        # API mode takes precedence if enabled
        if self._settings.api_enabled:
            await self.run_api()
            return 0

        match self._settings.run_mode.lower():
            case "once":
                logger.info("Running in single-execution mode")
                try:
                    result = await self.run_once()
                except PrerequisiteError as e:
                    logger.error("Run aborted: %s", e)
                    return 1
                if not result.success:
                    logger.warning("Run completed with per-item failures")
                return 0

            case "scheduled":
                await self.run_scheduled()
                return 0  # Never reached in scheduled mode

            case _:
                logger.error(
                    "Invalid RUN_MODE: %s (use %s, or set API_ENABLED=true)",
                    self._settings.run_mode,
                    " or ".join(RUN_MODES),
                )
                return 1


async def async_main() -> int:
    """Async entry point."""
    try:
        logger.info("Credential Expiry Monitor %s starting...", __version__)

        settings = load_settings()
        logging.getLogger().setLevel(settings.log_level.upper())

        app = Application(settings)
        return await app.run()

    except ValueError as e:
        logger.error("Configuration error: %s", e)
        return 1
    except KeyboardInterrupt:
        logger.info("Shutting down...")
        return 0
    except Exception:
        logger.exception("Unexpected error")
        return 1


def main() -> None:
    """Main entry point."""
    exit_code = asyncio.run(async_main())
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
