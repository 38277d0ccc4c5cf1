"""Nacos config service client over the Nacos open API."""
import logging
from typing import Callable, Optional

import requests

from .errors import NacosConfigError, NacosConnectionError
from .models import ConfigDocument, NacosSettings

logger = logging.getLogger(__name__)

LOGIN_PATH = "/nacos/v1/auth/login"
CONFIGS_PATH = "/nacos/v1/cs/configs"


def normalize_server_addr(server_addr: str) -> str:
    """Strip a leading http:// or https:// so only host:port remains."""
    return server_addr.removeprefix("http://").removeprefix("https://")


def _describe_failure(error: Exception) -> str:
    """Describe a request failure without echoing the request URL."""
    if isinstance(error, requests.HTTPError) and error.response is not None:
        return f"{error.response.status_code} {error.response.reason}"
    return str(error)


class NacosConfigClient:
    """Authenticated client for one Nacos server and namespace.

    Sessions created by the client are closed by close(); an injected
    session belongs to the caller.
    """

    def __init__(self, server_addr: str, namespace: str, session: Optional[requests.Session] = None):
        self.server_addr = server_addr
        self.namespace = namespace
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()
        self._access_token: Optional[str] = None

    def __enter__(self) -> "NacosConfigClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    @property
    def base_url(self) -> str:
        return f"http://{self.server_addr}"

    def _auth_headers(self) -> dict:
        # Header, not query string, so the token never shows up in a URL
        if self._access_token:
            return {"Authorization": f"Bearer {self._access_token}"}
        return {}

    def login(self, username: str, password: str) -> None:
        """
        Log in and keep the access token for later requests.

        Raises:
            NacosConnectionError: If the login request fails or returns no token
        """
        try:
            response = self.session.post(
                f"{self.base_url}{LOGIN_PATH}",
                data={"username": username, "password": password},
            )
            response.raise_for_status()
            token = response.json().get("accessToken")
        except (requests.RequestException, ValueError, AttributeError) as e:
            raise NacosConnectionError(
                f"Failed to connect to nacos: {self.server_addr}: {_describe_failure(e)}"
            ) from e

        if not token:
            raise NacosConnectionError(
                f"Failed to connect to nacos: {self.server_addr}: "
                f"login response has no accessToken"
            )
        self._access_token = token
        logger.info(f"Logged in to Nacos at {self.server_addr} as {username}")

    def get_config(self, data_id: str, group: str) -> ConfigDocument:
        """
        Fetch a config document with its metadata.

        Args:
            data_id: Nacos data id
            group: Nacos group

        Returns:
            ConfigDocument carrying the identity and md5 reported by the server

        Raises:
            NacosConfigError: If the request fails or the response is malformed
        """
        params = {
            "dataId": data_id,
            "group": group,
            "tenant": self.namespace,
            "show": "all",
        }

        try:
            response = self.session.get(
                f"{self.base_url}{CONFIGS_PATH}",
                params=params,
                headers=self._auth_headers(),
            )
            response.raise_for_status()
            body = response.json()
            document = ConfigDocument(
                content=body["content"],
                namespace=body.get("tenant") or "",
                data_id=body["dataId"],
                group=body["group"],
                md5=body["md5"],
                config_type=body.get("type"),
            )
        except (requests.RequestException, ValueError, KeyError, TypeError) as e:
            raise NacosConfigError(
                f"Failed to get config from nacos, data_id: {data_id}, group: {group}: {_describe_failure(e)}"
            ) from e

        logger.info(f"Fetched config data_id={data_id}, group={group} from {self.server_addr}")
        return document


def connect(
    server_addr: str,
    namespace: str,
    username: str,
    password: str,
    session: Optional[requests.Session] = None,
) -> NacosConfigClient:
    """
    Create an authenticated NacosConfigClient.

    Raises:
        NacosConnectionError: If the client cannot be created or log in
    """
    server_addr = normalize_server_addr(server_addr)
    client = NacosConfigClient(server_addr, namespace, session=session)
    try:
        client.login(username, password)
    except NacosConnectionError:
        client.close()
        raise
    return client


Connector = Callable[[str, str, str, str], NacosConfigClient]


def fetch_config(settings: NacosSettings, connector: Optional[Connector] = None) -> ConfigDocument:
    """
    Fetch the configured document from Nacos.

    Args:
        settings: Settings whose password is already decrypted
        connector: Callable building a client from (addr, namespace, username, password)

    Returns:
        The raw ConfigDocument, not yet validated
    """
    if connector is None:
        connector = connect
    with connector(settings.server_addr, settings.namespace, settings.username, settings.password) as client:
        return client.get_config(settings.data_id, settings.group)
