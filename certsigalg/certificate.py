"""
Certificate front end.

This module loads X.509 certificates, pulls out the two signature
AlgorithmIdentifiers a certificate carries and classifies them, and computes
the RFC 5929 tls-server-end-point channel binding value.

    Certificate  ::=  SEQUENCE  {
         tbsCertificate       TBSCertificate,
         signatureAlgorithm   AlgorithmIdentifier,
         signatureValue       BIT STRING  }

    TBSCertificate  ::=  SEQUENCE  {
         version         [0]  EXPLICIT Version DEFAULT v1,
         serialNumber         CertificateSerialNumber,
         signature            AlgorithmIdentifier,
         ... }
"""

import logging
from collections import namedtuple

from cryptography import x509
from cryptography.hazmat.primitives import serialization

from certsigalg import der
from certsigalg.cert_errors import FAILED_PARSING_CERTIFICATE, SIGNATURE_ALGORITHM_MISMATCH
from certsigalg.signature_algorithm import (
    get_tls_server_endpoint_digest_algorithm,
    parse_signature_algorithm,
)

logger = logging.getLogger(__name__)

CertificateAlgorithms = namedtuple(
    "CertificateAlgorithms", ["tbs_signature", "signature_algorithm"]
)


def load_cert_der(file_format, file_name):
    """
    Load an X.509 certificate from a file.

    Args:
        file_format (str): Format of the certificate ('pem' or 'der')
        file_name (str): Path to the certificate file

    Returns:
        bytes: DER encoding of the certificate

    Raises:
        ValueError: If the file does not hold a certificate
    """
    with open(file_name, "rb") as f:
        file_data = f.read()

    if file_format.lower() == "pem":
        cert = x509.load_pem_x509_certificate(file_data)
        return cert.public_bytes(serialization.Encoding.DER)

    # Loading validates the file, the bytes on disk are what gets classified
    x509.load_der_x509_certificate(file_data)
    return file_data


def _read_sequence_tlv(parser):
    if parser.peek_tag() != der.SEQUENCE:
        return None
    return parser.read_raw_tlv()


def parse_certificate_algorithms(cert_der):
    """
    Extract the raw signature AlgorithmIdentifiers of a certificate.

    Args:
        cert_der (bytes): DER-encoded certificate

    Returns:
        CertificateAlgorithms: (tbs_signature, signature_algorithm) raw TLVs,
        or None if the certificate structure is invalid
    """
    parser = der.Parser(cert_der)
    cert_parser = parser.read_sequence()
    if cert_parser is None or parser.has_more():
        return None

    tbs_certificate = _read_sequence_tlv(cert_parser)
    if tbs_certificate is None:
        return None

    signature_algorithm = _read_sequence_tlv(cert_parser)
    if signature_algorithm is None:
        return None

    if cert_parser.read_tag(der.BIT_STRING) is None or cert_parser.has_more():
        return None

    tbs_parser = der.Parser(tbs_certificate).read_sequence()
    if tbs_parser is None:
        return None

    if tbs_parser.read_optional_tag(der.context_specific_constructed(0)) is None:
        return None
    if not tbs_parser.skip_tag(der.INTEGER):
        return None

    tbs_signature = _read_sequence_tlv(tbs_parser)
    if tbs_signature is None:
        return None

    return CertificateAlgorithms(tbs_signature, signature_algorithm)


def classify_certificate(cert_der, errors=None):
    """
    Classify the signature algorithm of a certificate.

    RFC 5280 section 4.1.1.2 requires Certificate.signatureAlgorithm and
    TBSCertificate.signature to be identical; certificates where they differ
    are rejected.

    Args:
        cert_der (bytes): DER-encoded certificate
        errors (CertErrors, optional): Receives the reason for a rejection

    Returns:
        SignatureAlgorithm: The algorithm or None if rejected
    """
    algorithms = parse_certificate_algorithms(cert_der)
    if algorithms is None:
        logger.debug("Failed parsing Certificate")
        if errors is not None:
            errors.add_error(FAILED_PARSING_CERTIFICATE)
        return None

    if algorithms.tbs_signature != algorithms.signature_algorithm:
        logger.debug("Certificate signature algorithms differ")
        if errors is not None:
            errors.add_error(SIGNATURE_ALGORITHM_MISMATCH)
        return None

    return parse_signature_algorithm(algorithms.signature_algorithm, errors)


def tls_server_end_point(cert_der, algorithm):
    """
    Compute the tls-server-end-point channel binding value (RFC 5929).

    Args:
        cert_der (bytes): DER-encoded server certificate
        algorithm (SignatureAlgorithm): The certificate's signature algorithm

    Returns:
        bytes: Hash of the certificate, or None if channel binding is not
        defined for `algorithm`
    """
    digest = get_tls_server_endpoint_digest_algorithm(algorithm)
    if digest is None:
        return None
    return digest.digest(bytes(cert_der))
