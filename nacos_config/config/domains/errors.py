"""Error types raised while retrieving configuration from Nacos."""


class NacosError(Exception):
    """Base class for every failure of the retrieval pipeline."""

    prefix = "Nacos error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.prefix}: {self.message}"


class EnvVarError(NacosError):
    """A required environment variable is not set."""
    prefix = "Environment variable error"


class NacosConnectionError(NacosError):
    """The Nacos client could not be created or could not log in."""
    prefix = "Nacos connection error"


class NacosConfigError(NacosError):
    """The config request failed, or the response did not match the request."""
    prefix = "Nacos config error"


class KmsError(NacosError):
    """The KMS decrypt call failed or returned no plaintext."""
    prefix = "AWS KMS error"


class ConfigParseError(NacosError):
    """The fetched content could not be deserialized.

    The message includes the raw config content so the parser diagnostic
    can be read in context.
    """
    prefix = "Config parsing error"


class Base64DecodeError(NacosError):
    """The ENC(...) payload is not valid base64."""
    prefix = "Base64 decoding error"


class Utf8Error(NacosError):
    """Decrypted plaintext bytes are not valid UTF-8."""
    prefix = "UTF-8 conversion error"
