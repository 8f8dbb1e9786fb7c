"""
trust_bundle — trusted CA certificate collection for outbound HTTPS.

Gathers certificate material from the operating system trust store and from
user-configured filesystem paths, and merges them into one ordered list that
an HTTPS client can use as its custom certificate-authority bundle.

Failures never propagate: a missing directory or an unreadable trust store
degrades the result instead of aborting it.
"""

from trust_bundle.aggregator import get_trusted_certificates

__all__ = ["get_trusted_certificates"]

__version__ = "0.1.0"
