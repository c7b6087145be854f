"""
Configuration management for Satispay Python SDK

This module provides the immutable API configuration and credential set,
with loaders for environment variables and JSON files.
"""

from .api_config import (
    ApiConfig,
    Credentials,
    Environment,
    PRODUCTION_AUTHSERVICES_URL,
    DEFAULT_USER_AGENT_NAME,
    DEFAULT_TIMEOUT,
)

__all__ = [
    'ApiConfig',
    'Credentials',
    'Environment',
    'PRODUCTION_AUTHSERVICES_URL',
    'DEFAULT_USER_AGENT_NAME',
    'DEFAULT_TIMEOUT',
]
