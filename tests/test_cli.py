import hashlib

import pytest
from cryptography.hazmat.primitives import serialization

from certsigalg.cli import main, parse_arguments

SHA256_RSA_HEX = "300d06092a864886f70d01010b0500"
ECDSA_SHA256_NULL_HEX = "300c06082a8648ce3d0403020500"


@pytest.fixture(autouse=True)
def no_color(monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")


def test_algid_recognized(capsys):
    assert main(["--algid", SHA256_RSA_HEX]) == 0
    out = capsys.readouterr().out
    assert f"✓ {SHA256_RSA_HEX}: rsa_pkcs1_sha256" in out
    assert "tls-server-end-point: sha256" in out


def test_algid_rejected_prints_diagnostics(capsys):
    assert main(["-v", "--algid", ECDSA_SHA256_NULL_HEX]) == 1
    out = capsys.readouterr().out
    assert "unrecognized signature algorithm" in out
    assert "ERROR: Unknown signature algorithm" in out
    assert "oid: 2a8648ce3d040302" in out
    assert "params: 0500" in out
    assert "algorithm: ecdsa-with-SHA256 (1.2.840.10045.4.3.2)" in out


def test_algid_malformed(capsys):
    assert main(["-v", "--algid", "3000"]) == 1
    assert "malformed AlgorithmIdentifier" in capsys.readouterr().out


def test_dsa_has_no_channel_binding(capsys):
    assert main(["--algid", "300906072a8648ce380403"]) == 0
    out = capsys.readouterr().out
    assert "dsa_sha1" in out
    assert "tls-server-end-point: none" in out


@pytest.mark.parametrize("file_format", ["PEM", "DER"])
def test_certificate_files(capsys, cert_files, file_format):
    paths = [cert_files["rsa"][file_format], cert_files["ecdsa"][file_format]]
    assert main(["-f", file_format] + paths) == 0
    out = capsys.readouterr().out
    assert f"{paths[0]}: rsa_pkcs1_sha256" in out
    assert f"{paths[1]}: ecdsa_sha384" in out
    assert "tls-server-end-point: sha384" in out


def test_verbose_prints_channel_binding(capsys, cert_files, ecdsa_cert):
    assert main(["-v", "-f", "DER", cert_files["ecdsa"]["DER"]]) == 0
    expected = hashlib.sha384(ecdsa_cert.public_bytes(serialization.Encoding.DER)).hexdigest()
    assert f"channel binding: {expected}" in capsys.readouterr().out


def test_mixed_results_fail(capsys, cert_files):
    assert main(["--algid", ECDSA_SHA256_NULL_HEX, cert_files["rsa"]["PEM"]]) == 1


def test_unreadable_file_does_not_stop_the_batch(capsys, tmp_path, cert_files):
    missing = str(tmp_path / "missing.pem")
    assert main([missing, cert_files["rsa"]["PEM"]]) == 1
    out = capsys.readouterr().out
    assert f"✗ {missing}: " in out
    assert "No such file or directory" in out
    assert f"{cert_files['rsa']['PEM']}: rsa_pkcs1_sha256" in out


def test_wrong_format_is_reported_per_file(capsys, cert_files):
    der_file = cert_files["rsa"]["DER"]
    assert main(["-f", "PEM", der_file, cert_files["ecdsa"]["PEM"]]) == 1
    out = capsys.readouterr().out
    assert f"✗ {der_file}: " in out
    assert "ecdsa_sha384" in out


def test_invalid_hex_is_a_usage_error():
    with pytest.raises(SystemExit) as exc:
        parse_arguments(["--algid", "zz"])
    assert exc.value.code == 2


def test_nothing_to_classify_is_a_usage_error():
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 2


def test_default_format_is_pem():
    args = parse_arguments(["cert.pem"])
    assert args.format == "PEM"
    assert args.algid == []
