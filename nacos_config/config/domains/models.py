"""Domain models for config retrieval."""
from dataclasses import dataclass, field, replace
from typing import Optional


@dataclass(frozen=True)
class NacosSettings:
    """Connection and document settings read from the environment."""
    server_addr: str
    group: str
    namespace: str
    username: str
    password: str = field(repr=False)  # plaintext or ENC(...)
    data_id: str
    kms_key_id: Optional[str] = None

    def with_password(self, password: str) -> "NacosSettings":
        """Return a copy carrying a different (usually decrypted) password."""
        return replace(self, password=password)


@dataclass(frozen=True)
class ConfigDocument:
    """A config document as returned by Nacos."""
    content: str
    namespace: str
    data_id: str
    group: str
    md5: str
    config_type: Optional[str] = None
