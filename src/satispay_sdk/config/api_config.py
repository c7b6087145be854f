"""
API configuration for Satispay Python SDK

Provides the immutable configuration value that every client call receives:
target environment, credentials, identification headers and transport
settings, plus loaders for environment variables and JSON files.
"""

import json
import os
from dataclasses import dataclass, field, replace, asdict
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from ..exceptions import ConfigurationError
from ..version import __version__

PRODUCTION_AUTHSERVICES_URL = "https://authservices.satispay.com"
DEFAULT_USER_AGENT_NAME = "SatispayGBusinessApiPythonSdk"
DEFAULT_TIMEOUT = 30.0

# Environment variable names
ENV_ENVIRONMENT = "SATISPAY_ENV"
ENV_PRIVATE_KEY = "SATISPAY_PRIVATE_KEY"
ENV_PUBLIC_KEY = "SATISPAY_PUBLIC_KEY"
ENV_KEY_ID = "SATISPAY_KEY_ID"
ENV_TIMEOUT = "SATISPAY_TIMEOUT"


class Environment(str, Enum):
    """Satispay environments"""
    PRODUCTION = "production"
    STAGING = "staging"
    TEST = "test"


def _unescape_pem(value: Optional[str]) -> Optional[str]:
    # .env files carry PEM keys on one line with literal '\n'
    if value is None:
        return None
    return value.replace('\\n', '\n')


@dataclass(frozen=True)
class Credentials:
    """
    Credential set used to sign requests

    Attributes:
        private_key: PKCS8 PEM private key
        public_key: SPKI PEM public key (only used for registration)
        key_id: Key identifier assigned by Satispay
    """
    private_key: Optional[str] = None
    public_key: Optional[str] = None
    key_id: Optional[str] = None

    @property
    def can_sign(self) -> bool:
        """True when both private key and key id are set"""
        return bool(self.private_key) and bool(self.key_id)

    def __repr__(self) -> str:
        # Never expose key material
        return (
            f"Credentials(key_id={self.key_id!r}, "
            f"private_key={'<set>' if self.private_key else None}, "
            f"public_key={'<set>' if self.public_key else None})"
        )


@dataclass(frozen=True)
class ApiConfig:
    """
    Configuration for a Satispay client

    Attributes:
        environment: Target environment
        credentials: Credentials used for signing
        platform: Value for x-satispay-os
        platform_version: Value for x-satispay-osv
        plugin_name: Value for x-satispay-appn
        plugin_version: Value for x-satispay-appv
        device_type: Value for x-satispay-devicetype
        tracking_code: Value for x-satispay-tracking-code
        timeout: Request timeout in seconds
        verify_ssl: Verify TLS certificates
        user_agent_name: Product token used in the User-Agent header
    """
    environment: Environment = Environment.PRODUCTION
    credentials: Credentials = field(default_factory=Credentials)
    platform: Optional[str] = None
    platform_version: Optional[str] = None
    plugin_name: Optional[str] = None
    plugin_version: Optional[str] = None
    device_type: Optional[str] = None
    tracking_code: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    verify_ssl: bool = True
    user_agent_name: str = DEFAULT_USER_AGENT_NAME

    def __post_init__(self):
        """Validate and normalize configuration"""
        try:
            object.__setattr__(self, 'environment', Environment(self.environment))
        except ValueError:
            valid = ', '.join(e.value for e in Environment)
            raise ConfigurationError(
                f"Invalid environment '{self.environment}', expected one of: {valid}",
                "INVALID_ENVIRONMENT"
            ) from None

        if not isinstance(self.credentials, Credentials):
            raise ConfigurationError("Credentials must be a Credentials instance", "INVALID_CREDENTIALS")

        if isinstance(self.timeout, bool) or not isinstance(self.timeout, (int, float)) or self.timeout <= 0:
            raise ConfigurationError(f"Timeout must be a positive number, got {self.timeout!r}", "INVALID_TIMEOUT")

    @property
    def authservices_url(self) -> str:
        """Base URL of the authservices host for the environment"""
        if self.environment == Environment.PRODUCTION:
            return PRODUCTION_AUTHSERVICES_URL
        return f"https://{self.environment.value}.authservices.satispay.com"

    @property
    def is_sandbox(self) -> bool:
        return self.environment == Environment.STAGING

    @property
    def version(self) -> str:
        return __version__

    @property
    def user_agent(self) -> str:
        return f"{self.user_agent_name}/{__version__}"

    def with_credentials(self, credentials: Credentials) -> 'ApiConfig':
        """Copy of this config using other credentials"""
        return replace(self, credentials=credentials)

    def with_environment(self, environment: Union[str, Environment]) -> 'ApiConfig':
        """Copy of this config targeting another environment"""
        return replace(self, environment=environment)

    def with_sandbox(self, enabled: bool = True) -> 'ApiConfig':
        """Copy of this config on staging (enabled) or production"""
        return self.with_environment(Environment.STAGING if enabled else Environment.PRODUCTION)

    def to_dict(self) -> Dict[str, Any]:
        """Serializable view of the configuration without key material"""
        data = asdict(self)
        data['environment'] = self.environment.value
        data['credentials'] = {'key_id': self.credentials.key_id}
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'ApiConfig':
        """
        Build configuration from a mapping.

        Credential fields may be given flat (private_key, public_key, key_id)
        or nested under 'credentials'.

        Raises:
            ConfigurationError: If the mapping is invalid
        """
        if not isinstance(data, Mapping):
            raise ConfigurationError("Configuration must be a JSON object", "INVALID_FORMAT")

        values = dict(data)
        creds = dict(values.pop('credentials', None) or {})
        for key in ('private_key', 'public_key', 'key_id'):
            if key in values:
                creds[key] = values.pop(key)

        known = {f for f in cls.__dataclass_fields__ if f != 'credentials'}
        unknown = set(values) - known
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration keys: {', '.join(sorted(unknown))}",
                "INVALID_FORMAT"
            )

        credentials = Credentials(
            private_key=_unescape_pem(creds.get('private_key')),
            public_key=_unescape_pem(creds.get('public_key')),
            key_id=creds.get('key_id'),
        )
        return cls(credentials=credentials, **values)

    @classmethod
    def from_json(cls, json_string: str) -> 'ApiConfig':
        """Load configuration from a JSON string"""
        try:
            data = json.loads(json_string)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Failed to parse configuration JSON: {e}", "PARSE_ERROR") from e
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, file_path: Union[str, Path]) -> 'ApiConfig':
        """Load configuration from a JSON file"""
        try:
            with open(Path(file_path), 'r', encoding='utf-8') as f:
                json_string = f.read()
        except OSError as e:
            raise ConfigurationError(f"Failed to read configuration file: {e}", "FILE_ERROR") from e
        return cls.from_json(json_string)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'ApiConfig':
        """
        Load configuration from environment variables.

        Reads SATISPAY_ENV, SATISPAY_PRIVATE_KEY, SATISPAY_PUBLIC_KEY,
        SATISPAY_KEY_ID and SATISPAY_TIMEOUT. Literal '\\n' sequences in the
        keys are turned into newlines.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Raises:
            ConfigurationError: If a value is invalid
        """
        if environ is None:
            environ = os.environ

        timeout = DEFAULT_TIMEOUT
        raw_timeout = environ.get(ENV_TIMEOUT)
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ConfigurationError(
                    f"{ENV_TIMEOUT} must be a number, got '{raw_timeout}'",
                    "INVALID_TIMEOUT"
                ) from None

        credentials = Credentials(
            private_key=_unescape_pem(environ.get(ENV_PRIVATE_KEY)) or None,
            public_key=_unescape_pem(environ.get(ENV_PUBLIC_KEY)) or None,
            key_id=environ.get(ENV_KEY_ID) or None,
        )

        return cls(
            environment=environ.get(ENV_ENVIRONMENT) or Environment.PRODUCTION,
            credentials=credentials,
            timeout=timeout,
        )
