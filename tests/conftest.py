import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from fruit_company.config import Credentials
from helpers import APP_ID, KEY_ID, TEAM_ID, FakeClock


@pytest.fixture(scope="session")
def private_key():
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def private_key_pem(private_key) -> str:
    return private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")


@pytest.fixture(scope="session")
def public_key_pem(private_key) -> str:
    return private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("ascii")


@pytest.fixture
def credentials(private_key_pem) -> Credentials:
    return Credentials(app_id=APP_ID, team_id=TEAM_ID, key_id=KEY_ID, private_key=private_key_pem)


@pytest.fixture
def key_file(tmp_path, private_key_pem):
    path = tmp_path / "AuthKey.p8"
    path.write_text(private_key_pem, encoding="utf-8")
    return path


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
