"""
Linear Agent Gateway Core Library.

Lets a fixed set of bot identities read, comment on and self-assign Linear
issues, each acting with its own API key.

Usage:
    # Config
    from linear_gateway.config import get_settings, Settings

    # Services
    from linear_gateway.services import CredentialRouter, IssueService

    # Logging
    from linear_gateway.logging import get_logger, configure_logging
"""

__version__ = "1.0.0"

# Users should import directly from submodules:
#   from linear_gateway.config import get_settings
#   from linear_gateway.services import IssueService
