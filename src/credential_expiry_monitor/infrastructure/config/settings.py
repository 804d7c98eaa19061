"""Application settings loaded from environment variables."""

import os
from dataclasses import dataclass, field
from functools import cached_property

from ...application.services import ReportStoreConfig, SenderIdentity
from ...domain.value_objects import DEFAULT_ALERT_THRESHOLD_DAYS, AlertThresholds
from ..adapters.entra_id.graph_client import GraphClientConfig
from ..adapters.notifications.graph_mail import GraphMailConfig
from ..adapters.notifications.smtp import SmtpConfig
from ..adapters.storage.blob import BlobStorageConfig

MAIL_TRANSPORTS = ("graph", "smtp")
RUN_MODES = ("once", "scheduled")


def _env_bool(key: str, default: bool = False) -> bool:
    """Get boolean from environment variable."""
    return os.environ.get(key, str(default)).lower() in ("true", "1", "yes")


def _env_int(key: str, default: int) -> int:
    """Get integer from environment variable."""
    return int(os.environ.get(key, str(default)))


def _env_str(key: str, default: str = "") -> str:
    """Get string from environment variable."""
    return os.environ.get(key, default)


@dataclass
class Settings:
    """Application settings container."""

    # Azure/Entra ID
    azure_tenant_id: str = field(default_factory=lambda: _env_str("AZURE_TENANT_ID"))
    azure_client_id: str = field(default_factory=lambda: _env_str("AZURE_CLIENT_ID"))
    azure_client_secret: str = field(default_factory=lambda: _env_str("AZURE_CLIENT_SECRET"))

    # Alerting
    alert_threshold_days: str = field(
        default_factory=lambda: _env_str(
            "ALERT_THRESHOLD_DAYS", ",".join(str(d) for d in DEFAULT_ALERT_THRESHOLD_DAYS)
        )
    )

    # Snapshots
    retention_days: int = field(default_factory=lambda: _env_int("RETENTION_DAYS", 10))
    report_dataset_name: str = field(default_factory=lambda: _env_str("REPORT_DATASET_NAME", "app-credentials"))
    report_local_dir: str = field(default_factory=lambda: _env_str("REPORT_LOCAL_DIR", "./reports"))
    storage_account_url: str = field(default_factory=lambda: _env_str("STORAGE_ACCOUNT_URL"))
    storage_container: str = field(default_factory=lambda: _env_str("STORAGE_CONTAINER"))

    # Mail
    mail_transport: str = field(default_factory=lambda: _env_str("MAIL_TRANSPORT", "graph"))
    mail_from: str = field(default_factory=lambda: _env_str("MAIL_FROM"))
    mail_from_name: str = field(default_factory=lambda: _env_str("MAIL_FROM_NAME", "Credential Expiry Monitor"))
    graph_mail_save_to_sent: bool = field(default_factory=lambda: _env_bool("GRAPH_MAIL_SAVE_TO_SENT"))
    smtp_server: str = field(default_factory=lambda: _env_str("SMTP_SERVER"))
    smtp_port: int = field(default_factory=lambda: _env_int("SMTP_PORT", 587))
    smtp_username: str = field(default_factory=lambda: _env_str("SMTP_USERNAME"))
    smtp_password: str = field(default_factory=lambda: _env_str("SMTP_PASSWORD"))
    smtp_use_tls: bool = field(default_factory=lambda: _env_bool("SMTP_USE_TLS", default=True))

    # Run configuration
    run_mode: str = field(default_factory=lambda: _env_str("RUN_MODE", "once"))
    cron_schedule: str = field(default_factory=lambda: _env_str("CRON_SCHEDULE", "0 8 * * *"))
    log_level: str = field(default_factory=lambda: _env_str("LOG_LEVEL", "INFO"))
    dry_run: bool = field(default_factory=lambda: _env_bool("DRY_RUN"))

    # API settings
    api_enabled: bool = field(default_factory=lambda: _env_bool("API_ENABLED"))
    api_host: str = field(default_factory=lambda: _env_str("API_HOST", "0.0.0.0"))  # noqa: S104
    api_port: int = field(default_factory=lambda: _env_int("API_PORT", 8080))

    def validate(self) -> None:
        """Validate required settings."""
        missing: list[str] = []

        if not self.azure_tenant_id:
            missing.append("AZURE_TENANT_ID")
        if not self.azure_client_id:
            missing.append("AZURE_CLIENT_ID")
        if not self.azure_client_secret:
            missing.append("AZURE_CLIENT_SECRET")
        if not self.storage_account_url:
            missing.append("STORAGE_ACCOUNT_URL")
        if not self.storage_container:
            missing.append("STORAGE_CONTAINER")
        if not self.dry_run:
            if not self.mail_from:
                missing.append("MAIL_FROM")
            if self.mail_transport.lower() == "smtp" and not self.smtp_server:
                missing.append("SMTP_SERVER")

        if missing:
            msg = f"Missing required environment variables: {', '.join(missing)}"
            raise ValueError(msg)

        if self.mail_transport.lower() not in MAIL_TRANSPORTS:
            msg = f"Invalid MAIL_TRANSPORT: {self.mail_transport} (use {' or '.join(MAIL_TRANSPORTS)})"
            raise ValueError(msg)

        if not self.api_enabled and self.run_mode.lower() not in RUN_MODES:
            msg = f"Invalid RUN_MODE: {self.run_mode} (use {' or '.join(RUN_MODES)})"
            raise ValueError(msg)

        # Parsing raises ValueError subclasses on bad input
        _ = self.thresholds
        _ = self.report_config

    @cached_property
    def graph_config(self) -> GraphClientConfig:
        """Get Graph API client configuration."""
        return GraphClientConfig(
            tenant_id=self.azure_tenant_id,
            client_id=self.azure_client_id,
            client_secret=self.azure_client_secret,
        )

    @cached_property
    def thresholds(self) -> AlertThresholds:
        """Get the alert threshold set."""
        return AlertThresholds.parse(self.alert_threshold_days)

    @cached_property
    def report_config(self) -> ReportStoreConfig:
        """Get snapshot naming and retention configuration."""
        return ReportStoreConfig(
            dataset_name=self.report_dataset_name,
            retention_days=self.retention_days,
        )

    @cached_property
    def blob_config(self) -> BlobStorageConfig:
        """Get durable storage configuration."""
        return BlobStorageConfig(
            account_url=self.storage_account_url,
            container=self.storage_container,
            tenant_id=self.azure_tenant_id,
            client_id=self.azure_client_id,
            client_secret=self.azure_client_secret,
        )

    @cached_property
    def sender(self) -> SenderIdentity:
        """Get the from identity of alert emails."""
        return SenderIdentity(address=self.mail_from, name=self.mail_from_name)

    @cached_property
    def graph_mail_config(self) -> GraphMailConfig:
        """Get Graph email configuration."""
        return GraphMailConfig(
            tenant_id=self.azure_tenant_id,
            client_id=self.azure_client_id,
            client_secret=self.azure_client_secret,
            save_to_sent_items=self.graph_mail_save_to_sent,
        )

    @cached_property
    def smtp_config(self) -> SmtpConfig:
        """Get SMTP configuration."""
        return SmtpConfig(
            server=self.smtp_server,
            port=self.smtp_port,
            username=self.smtp_username,
            password=self.smtp_password,
            use_tls=self.smtp_use_tls,
        )


def load_settings() -> Settings:
    """Load and validate settings from environment."""
    settings = Settings()
    settings.validate()
    return settings
