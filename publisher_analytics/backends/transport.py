"""
TLS transport strategies

Decide how certificates are validated when opening the collection endpoint.
All strategies keep certificate and hostname verification on.
"""

import ssl
import urllib.request
from typing import Optional

# Use certifi for SSL verification in PyInstaller builds
import certifi


class TLSTransport:
    """Base transport: opens a urllib request with the strategy's SSL context"""

    name = "base"

    def ssl_context(self) -> ssl.SSLContext:
        raise NotImplementedError

    def open(self, request: urllib.request.Request, timeout: Optional[float] = None):
        """
        Open request and return the response object

        Args:
            request: Prepared urllib request
            timeout: Socket timeout in seconds (None = transport default)
        """
        kwargs = {'context': self.ssl_context()}
        if timeout is not None:
            kwargs['timeout'] = timeout
        return urllib.request.urlopen(request, **kwargs)

    def __repr__(self):
        return f"{type(self).__name__}()"


class DefaultTLSTransport(TLSTransport):
    """Validate against the operating system trust store"""

    name = "default"

    def ssl_context(self) -> ssl.SSLContext:
        return ssl.create_default_context()


class CertifiTLSTransport(TLSTransport):
    """Validate against the certifi CA bundle (works inside frozen builds)"""

    name = "certifi"

    def ssl_context(self) -> ssl.SSLContext:
        return ssl.create_default_context(cafile=certifi.where())


class CustomTLSTransport(TLSTransport):
    """Use a caller-provided SSL context (e.g. a private CA or revocation checks)"""

    name = "custom"

    def __init__(self, context: ssl.SSLContext):
        if context is None:
            raise ValueError("SSL context is None")
        if context.verify_mode == ssl.CERT_NONE or not context.check_hostname:
            raise ValueError("SSL context must verify certificates and hostnames")
        self._context = context

    def ssl_context(self) -> ssl.SSLContext:
        return self._context


def get_default_transport(use_certifi: bool = True) -> TLSTransport:
    """Return the transport used when none is given explicitly"""
    if use_certifi:
        return CertifiTLSTransport()
    return DefaultTLSTransport()
