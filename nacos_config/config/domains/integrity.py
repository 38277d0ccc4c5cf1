"""Check that a fetched document is the one that was requested."""
import hashlib
import logging

from .errors import NacosConfigError
from .models import ConfigDocument, NacosSettings

logger = logging.getLogger(__name__)


def compute_md5(content: str) -> str:
    """Hex MD5 of the UTF-8 content, the checksum Nacos reports."""
    return hashlib.md5(content.encode("utf-8"), usedforsecurity=False).hexdigest()


def validate_document(document: ConfigDocument, settings: NacosSettings) -> None:
    """
    Validate document identity and checksum against the requested settings.

    Fields are compared in order (namespace, data_id, group, md5) with exact
    string equality and the first mismatch is reported.

    Raises:
        NacosConfigError: On the first mismatching field
    """
    md5 = compute_md5(document.content)

    if document.namespace != settings.namespace:
        raise NacosConfigError(
            f"nacos_namespace unmatched: expected {settings.namespace!r}, got {document.namespace!r}"
        )
    if document.data_id != settings.data_id:
        raise NacosConfigError(
            f"nacos_data_id unmatched: expected {settings.data_id!r}, got {document.data_id!r}"
        )
    if document.group != settings.group:
        raise NacosConfigError(
            f"nacos_group unmatched: expected {settings.group!r}, got {document.group!r}"
        )
    if document.md5 != md5:
        raise NacosConfigError(
            f"config md5 checksum unmatched: reported {document.md5!r}, computed {md5!r}"
        )

    logger.debug(f"Config {document.data_id} passed integrity checks (md5={md5})")
