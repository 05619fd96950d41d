"""Delivery backends: HTTP reporter and TLS transport strategies"""

from .http import HTTPReporter, SendResult, TRACKING_URL
from .transport import (
    TLSTransport,
    DefaultTLSTransport,
    CertifiTLSTransport,
    CustomTLSTransport,
    get_default_transport,
)

__all__ = [
    'HTTPReporter',
    'SendResult',
    'TRACKING_URL',
    'TLSTransport',
    'DefaultTLSTransport',
    'CertifiTLSTransport',
    'CustomTLSTransport',
    'get_default_transport',
]
