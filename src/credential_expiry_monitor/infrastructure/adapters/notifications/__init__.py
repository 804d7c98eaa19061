"""Email transport adapter implementations."""

from .base import BaseEmailTransport
from .graph_mail import GraphMailConfig, GraphMailTransport
from .smtp import SmtpConfig, SmtpEmailTransport

__all__ = [
    "BaseEmailTransport",
    "GraphMailConfig",
    "GraphMailTransport",
    "SmtpConfig",
    "SmtpEmailTransport",
]
