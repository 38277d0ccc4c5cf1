"""Shared fixtures: fake KMS and Nacos collaborators, sample environments."""
import base64
import json

import pytest

from nacos_config.config.domains.integrity import compute_md5
from nacos_config.config.domains.models import ConfigDocument


class FakeKMS:
    """KMS stand-in mapping ciphertext blobs to plaintext bytes."""

    def __init__(self, plaintexts=None):
        self.plaintexts = plaintexts or {}
        self.calls = []

    def decrypt(self, ciphertext_blob, key_id):
        self.calls.append((ciphertext_blob, key_id))
        return self.plaintexts.get(ciphertext_blob)


class FakeNacosClient:
    def __init__(self, document):
        self.document = document
        self.requests = []
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        self.closed = True

    def get_config(self, data_id, group):
        self.requests.append((data_id, group))
        return self.document


class FakeConnector:
    """Records connect() arguments and hands out a FakeNacosClient."""

    def __init__(self, document):
        self.client = FakeNacosClient(document)
        self.calls = []

    def __call__(self, server_addr, namespace, username, password):
        self.calls.append((server_addr, namespace, username, password))
        return self.client


CIPHERTEXT = b"\x01\x02\x03kms-ciphertext"
ENCRYPTED_PASSWORD = f"ENC({base64.b64encode(CIPHERTEXT).decode()})"


@pytest.fixture
def base_environ():
    """A complete environment with a plaintext password."""
    return {
        "NACOS_ADDR": "http://nacos.internal:8848",
        "NACOS_GROUP": "DEFAULT_GROUP",
        "NACOS_NAMESPACE": "ns1",
        "NACOS_USERNAME": "nacos",
        "NACOS_PASSWORD": "plain-secret",
        "NACOS_DATA_ID": "app.json",
    }


@pytest.fixture
def encrypted_environ(base_environ):
    environ = dict(base_environ)
    environ["NACOS_PASSWORD"] = ENCRYPTED_PASSWORD
    environ["KMS_KEY_ID"] = "alias/nacos"
    return environ


@pytest.fixture
def fake_kms():
    return FakeKMS({CIPHERTEXT: b"decrypted-secret"})


@pytest.fixture
def app_content():
    return json.dumps({"name": "orders", "port": 8080, "debug": False})


def make_document(content, namespace="ns1", data_id="app.json", group="DEFAULT_GROUP", md5=None, config_type="json"):
    return ConfigDocument(
        content=content,
        namespace=namespace,
        data_id=data_id,
        group=group,
        md5=compute_md5(content) if md5 is None else md5,
        config_type=config_type,
    )


@pytest.fixture
def good_document(app_content):
    return make_document(app_content)
