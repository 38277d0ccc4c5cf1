"""Workflow for retrieving a typed config from Nacos."""
import logging
from typing import Mapping, Optional, Type, TypeVar

from ..domains.integrity import validate_document
from ..domains.kms_client import Decryptor, decrypt_password
from ..domains.nacos_client import Connector, fetch_config
from ..domains.parser import parse_config
from ..domains.settings import load_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


def from_nacos(
    target_type: Type[T],
    *,
    environ: Optional[Mapping[str, str]] = None,
    kms_client: Optional[Decryptor] = None,
    connector: Optional[Connector] = None,
) -> T:
    """
    Get configuration from Nacos.

    Args:
        target_type: Type to deserialize the document into
        environ: Environment mapping (defaults to os.environ)
        kms_client: KMS decryptor for ENC(...) passwords (defaults to KMSClient())
        connector: Nacos client factory (defaults to nacos_client.connect)

    Returns:
        The parsed config

    Raises:
        NacosError: The first failure of any step; nothing is retried

    Behavior:
        1. Reads NACOS_* settings from the environment
        2. Decrypts the password through KMS if it is ENC(...)
        3. Fetches the document with the decrypted password
        4. Validates namespace, data id, group and md5 of the response
        5. Parses the content into target_type
    """
    settings = load_settings(environ)

    password = decrypt_password(settings.password, settings.kms_key_id, kms_client)
    document = fetch_config(settings.with_password(password), connector)

    validate_document(document, settings)

    config = parse_config(document.content, target_type, document.config_type)
    logger.info(f"Loaded config {settings.data_id} ({settings.group}) from Nacos namespace {settings.namespace}")
    return config
