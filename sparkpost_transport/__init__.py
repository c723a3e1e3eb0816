"""Top-level package for the SparkPost mail transport.

This package redirects outgoing email from a host application to the
SparkPost transmissions HTTP API instead of SMTP.  The ``mailer``
subpackage holds the message model, the request translation, the response
interpretation and the sender that ties them together; ``config`` loads
provider settings from the environment.
"""

from __future__ import annotations

__all__ = [
    "config",
    "mailer",
]

# SemVer version of the package
__version__: str = "1.2.0"
