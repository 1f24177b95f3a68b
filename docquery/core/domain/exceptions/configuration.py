"""Configuration exceptions."""

from .base import DocQAError


class ConfigurationError(DocQAError):
    """Configuration is invalid or incomplete."""

    error_code = "DQ_CFG_001"


class MissingAPIKeyError(ConfigurationError):
    """A required API key or service URL is not set."""

    error_code = "DQ_CFG_002"
