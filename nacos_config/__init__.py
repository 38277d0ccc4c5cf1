"""Typed application config from Nacos, with KMS-encrypted passwords."""
from .config.domains.errors import (
    Base64DecodeError,
    ConfigParseError,
    EnvVarError,
    KmsError,
    NacosConfigError,
    NacosConnectionError,
    NacosError,
    Utf8Error,
)
from .config.domains.kms_client import KMSClient, decrypt_password
from .config.workflows.config_operations import from_nacos

__all__ = [
    "from_nacos",
    "decrypt_password",
    "KMSClient",
    "NacosError",
    "EnvVarError",
    "NacosConnectionError",
    "NacosConfigError",
    "KmsError",
    "ConfigParseError",
    "Base64DecodeError",
    "Utf8Error",
]
