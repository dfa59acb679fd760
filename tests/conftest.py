import base64
import struct
from datetime import datetime, timedelta, timezone

import pytest
from cryptography import x509
from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import constant_time, hashes, hmac, padding, serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.hazmat.primitives.asymmetric import padding as asym_padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.x509.oid import NameOID

from glocal_jose.contracts import TokenConfig

SMALL_RSA_PUBLIC_PEM = """-----BEGIN PUBLIC KEY-----
MFwwDQYJKoZIhvcNAQEBBQADSwAwSAJBAOf2mQRbT88x/bxDZARXdpMX4d6027kF
NAkTf1OwK2gQ+nS0VCW6Px4YL6puClWpOy2uiqsVzwAjLfHKciazbFsCAwEAAQ==
-----END PUBLIC KEY-----
"""


def b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(value: str) -> bytes:
    return base64.urlsafe_b64decode(value + "=" * (-len(value) % 4))


def _self_signed_certificate(key) -> str:
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "glocal-test")])
    now = datetime.now(timezone.utc)
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(days=1))
        .not_valid_after(now + timedelta(days=30))
        .sign(key, hashes.SHA256())
    )
    return cert.public_bytes(serialization.Encoding.PEM).decode("ascii")


@pytest.fixture(scope="session")
def rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def other_rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def pems(rsa_key):
    """The test key pair in every supported PEM format."""
    public_key = rsa_key.public_key()
    return {
        "pkcs1": rsa_key.private_bytes(
            serialization.Encoding.PEM,
            serialization.PrivateFormat.TraditionalOpenSSL,
            serialization.NoEncryption(),
        ).decode("ascii"),
        "pkcs8": rsa_key.private_bytes(
            serialization.Encoding.PEM,
            serialization.PrivateFormat.PKCS8,
            serialization.NoEncryption(),
        ).decode("ascii"),
        "spki": public_key.public_bytes(
            serialization.Encoding.PEM,
            serialization.PublicFormat.SubjectPublicKeyInfo,
        ).decode("ascii"),
        "pkcs1_public": public_key.public_bytes(
            serialization.Encoding.PEM,
            serialization.PublicFormat.PKCS1,
        ).decode("ascii"),
        "certificate": _self_signed_certificate(rsa_key),
    }


@pytest.fixture(scope="session")
def ec_certificate_pem():
    return _self_signed_certificate(ec.generate_private_key(ec.SECP256R1()))


@pytest.fixture
def token_config(pems):
    return TokenConfig(
        merchant_id="testmerchant",
        public_key_id="kid-public-1",
        private_key_id="kid-private-1",
        recipient_public_key_pem=pems["spki"],
        sender_private_key_pem=pems["pkcs8"],
    )


def decrypt_compact_jwe(token: str, private_key) -> bytes:
    """Decrypt an RSA-OAEP-256 / A128CBC-HS256 compact JWE."""
    header_b64, ek_b64, iv_b64, ct_b64, tag_b64 = token.split(".")
    cek = private_key.decrypt(
        b64url_decode(ek_b64),
        asym_padding.OAEP(
            mgf=asym_padding.MGF1(algorithm=hashes.SHA256()),
            algorithm=hashes.SHA256(),
            label=None,
        ),
    )
    mac_key, enc_key = cek[:16], cek[16:]
    aad = header_b64.encode("ascii")
    iv, ciphertext, tag = (b64url_decode(s) for s in (iv_b64, ct_b64, tag_b64))

    h = hmac.HMAC(mac_key, hashes.SHA256())
    h.update(aad + iv + ciphertext + struct.pack(">Q", len(aad) * 8))
    if not constant_time.bytes_eq(h.finalize()[:16], tag):
        raise InvalidTag()

    decryptor = Cipher(algorithms.AES(enc_key), modes.CBC(iv)).decryptor()
    padded = decryptor.update(ciphertext) + decryptor.finalize()
    unpadder = padding.PKCS7(128).unpadder()
    return unpadder.update(padded) + unpadder.finalize()


@pytest.fixture
def decrypt_jwe(rsa_key):
    return lambda token: decrypt_compact_jwe(token, rsa_key)


@pytest.fixture
def small_public_key_pem():
    """A 512-bit RSA key, too short for RSA-OAEP-256 to wrap a 256-bit CEK."""
    return SMALL_RSA_PUBLIC_PEM
