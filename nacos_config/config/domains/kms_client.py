"""AWS KMS client wrapper and ENC(...) password decryption."""
import base64
import binascii
import logging
from typing import Optional, Protocol

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .errors import Base64DecodeError, EnvVarError, KmsError, Utf8Error

logger = logging.getLogger(__name__)

ENC_PREFIX = "ENC("
ENC_SUFFIX = ")"

# Used when neither an explicit region nor the boto3 default chain gives one.
DEFAULT_KMS_REGION = "ap-southeast-1"


class Decryptor(Protocol):
    def decrypt(self, ciphertext_blob: bytes, key_id: str) -> Optional[bytes]:
        ...


def resolve_region(region_name: Optional[str] = None) -> str:
    """
    Resolve the KMS region.

    Priority order:
    1. Explicit region_name argument
    2. boto3 default chain (AWS_DEFAULT_REGION, profile config)
    3. DEFAULT_KMS_REGION
    """
    if region_name:
        return region_name

    session_region = boto3.Session().region_name
    if session_region:
        logger.debug(f"Using KMS region from AWS environment: {session_region}")
        return session_region

    logger.debug(f"No AWS region configured, falling back to {DEFAULT_KMS_REGION}")
    return DEFAULT_KMS_REGION


class KMSClient:
    """Wrapper around the boto3 KMS client."""

    def __init__(self, region_name: Optional[str] = None):
        self.region_name = region_name
        self._client = None

    @property
    def client(self):
        """Lazy-initialize client."""
        if self._client is None:
            self._client = boto3.client("kms", region_name=resolve_region(self.region_name))
        return self._client

    def decrypt(self, ciphertext_blob: bytes, key_id: str) -> Optional[bytes]:
        """
        Decrypt a ciphertext blob with the given key.

        Returns:
            Plaintext bytes, or None if the response carries no plaintext

        Raises:
            KmsError: If the KMS call fails
        """
        try:
            response = self.client.decrypt(CiphertextBlob=ciphertext_blob, KeyId=key_id)
        except (BotoCoreError, ClientError) as e:
            raise KmsError(f"Failed to decrypt blob from kms: {e}") from e
        return response.get("Plaintext")


def is_encrypted(password: str) -> bool:
    """Check whether a password uses the ENC(...) wrapper."""
    return password.startswith(ENC_PREFIX)


def _decode_ciphertext(raw_password: str) -> bytes:
    try:
        return base64.b64decode(raw_password, validate=True)
    except (binascii.Error, ValueError) as e:
        raise Base64DecodeError(f"Failed to decode base64: {raw_password}: {e}") from e


def decrypt_password(
    password: str,
    key_id: Optional[str] = None,
    kms_client: Optional[Decryptor] = None,
) -> str:
    """
    Decrypt the Nacos password if it is wrapped in ENC(...).

    Plaintext passwords are returned unchanged without touching KMS.

    Args:
        password: Plaintext password or ENC(<base64 ciphertext>)
        key_id: KMS key id, required for encrypted passwords
        kms_client: Object with decrypt(blob, key_id); defaults to KMSClient()

    Returns:
        The plaintext password

    Raises:
        EnvVarError: If the password is encrypted and key_id is missing
        Base64DecodeError: If the wrapped payload is not valid base64
        KmsError: If the decrypt call fails or returns no plaintext
        Utf8Error: If the plaintext is not valid UTF-8
    """
    if not is_encrypted(password):
        return password

    if key_id is None:
        raise EnvVarError("KMS_KEY_ID not set")

    raw_password = password[len(ENC_PREFIX):].rstrip(ENC_SUFFIX)
    blob = _decode_ciphertext(raw_password)

    if kms_client is None:
        kms_client = KMSClient()

    logger.info(f"Decrypting Nacos password with KMS key {key_id}")
    plaintext = kms_client.decrypt(blob, key_id)
    if plaintext is None:
        raise KmsError("Failed to get plaintext from kms's response")

    try:
        return plaintext.decode("utf-8")
    except UnicodeDecodeError as e:
        raise Utf8Error(f"Could not convert to UTF-8: {e}") from e
