import datetime
import logging

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.x509.oid import NameOID

from certsigalg import logger as logger_module


def _self_signed(key, hash_algorithm):
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "certsigalg test")])
    now = datetime.datetime.now(datetime.timezone.utc)
    return (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now)
        .not_valid_after(now + datetime.timedelta(days=1))
        .sign(key, hash_algorithm)
    )


@pytest.fixture(scope="session")
def rsa_cert():
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    return _self_signed(key, hashes.SHA256())


@pytest.fixture(scope="session")
def ecdsa_cert():
    key = ec.generate_private_key(ec.SECP384R1())
    return _self_signed(key, hashes.SHA384())


@pytest.fixture
def cert_files(tmp_path, rsa_cert, ecdsa_cert):
    """Write the test certificates to disk as PEM and DER."""
    paths = {}
    for label, cert in (("rsa", rsa_cert), ("ecdsa", ecdsa_cert)):
        pem = tmp_path / f"{label}.pem"
        pem.write_bytes(cert.public_bytes(serialization.Encoding.PEM))
        der = tmp_path / f"{label}.der"
        der.write_bytes(cert.public_bytes(serialization.Encoding.DER))
        paths[label] = {"PEM": str(pem), "DER": str(der)}
    return paths


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers `get_logger()` attached, they point at captured streams."""
    yield
    logger_module.set_verbose_mode(False)
    package_logger = logging.getLogger(logger_module.LOGGER_NAME)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
