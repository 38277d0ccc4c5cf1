"""Read Nacos settings from environment variables."""
import os
import logging
from typing import Mapping, Optional

from .errors import EnvVarError
from .models import NacosSettings

logger = logging.getLogger(__name__)

NACOS_ADDR = "NACOS_ADDR"
NACOS_GROUP = "NACOS_GROUP"
NACOS_NAMESPACE = "NACOS_NAMESPACE"
NACOS_USERNAME = "NACOS_USERNAME"
NACOS_PASSWORD = "NACOS_PASSWORD"
NACOS_DATA_ID = "NACOS_DATA_ID"
KMS_KEY_ID = "KMS_KEY_ID"

# Read order matters: the first missing one is the one reported.
REQUIRED_VARS = (
    NACOS_ADDR,
    NACOS_GROUP,
    NACOS_NAMESPACE,
    NACOS_USERNAME,
    NACOS_PASSWORD,
    NACOS_DATA_ID,
)


def require_env(name: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """
    Get a required environment variable.

    An empty value counts as set; only an absent variable is an error.

    Raises:
        EnvVarError: If the variable is not set
    """
    if environ is None:
        environ = os.environ
    value = environ.get(name)
    if value is None:
        raise EnvVarError(f"{name} not set")
    return value


def load_settings(environ: Optional[Mapping[str, str]] = None) -> NacosSettings:
    """
    Load Nacos settings from the environment.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        NacosSettings with the raw, possibly encrypted, password

    Raises:
        EnvVarError: Naming the first required variable that is missing
    """
    if environ is None:
        environ = os.environ

    values = {name: require_env(name, environ) for name in REQUIRED_VARS}

    settings = NacosSettings(
        server_addr=values[NACOS_ADDR],
        group=values[NACOS_GROUP],
        namespace=values[NACOS_NAMESPACE],
        username=values[NACOS_USERNAME],
        password=values[NACOS_PASSWORD],
        data_id=values[NACOS_DATA_ID],
        kms_key_id=environ.get(KMS_KEY_ID),
    )
    logger.debug(
        f"Loaded Nacos settings: addr={settings.server_addr}, namespace={settings.namespace}, "
        f"data_id={settings.data_id}, group={settings.group}"
    )
    return settings
