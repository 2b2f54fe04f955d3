"""
X.509 Signature Algorithm Classification

This module identifies the signature algorithm named by a DER-encoded
AlgorithmIdentifier, as found in Certificate.signatureAlgorithm,
TBSCertificate.signature, OCSP responses or PKCS structures, and checks its
parameters against the profiles accepted for certificate path validation.

Functions:
    parse_signature_algorithm(algorithm_identifier, errors=None):
        Classifies an AlgorithmIdentifier as a SignatureAlgorithm.

    parse_rsa_pss(params):
        Decodes RSASSA-PSS-params, restricted to the TLS 1.3 combinations.

    parse_mask_gen_algorithm(data):
        Decodes an MGF1 MaskGenAlgorithm and returns its hash.

    get_tls_server_endpoint_digest_algorithm(algorithm):
        Selects the RFC 5929 tls-server-end-point digest for an algorithm.

Supported Algorithms:
    - RSASSA-PKCS1-v1_5 with MD2, MD4, MD5, SHA-1, SHA-256, SHA-384, SHA-512
    - ECDSA with SHA-1, SHA-256, SHA-384, SHA-512
    - DSA with SHA-1, SHA-256
    - RSASSA-PSS with SHA-256, SHA-384, SHA-512 (matching MGF1 hash and salt)

Note:
    Malformed input, unknown OIDs and disallowed parameters are all reported
    the same way, by returning None. Nothing here raises for untrusted input.
"""

import enum
import logging

from certsigalg import der, oids
from certsigalg.algorithm_identifier import parse_algorithm_identifier
from certsigalg.cert_errors import UNKNOWN_SIGNATURE_ALGORITHM, create_cert_error_params_2_der
from certsigalg.digest import DigestAlgorithm, parse_hash_algorithm

logger = logging.getLogger(__name__)


class SignatureAlgorithm(enum.Enum):
    RSA_PKCS1_MD2 = "rsa_pkcs1_md2"
    RSA_PKCS1_MD4 = "rsa_pkcs1_md4"
    RSA_PKCS1_MD5 = "rsa_pkcs1_md5"
    RSA_PKCS1_SHA1 = "rsa_pkcs1_sha1"
    RSA_PKCS1_SHA256 = "rsa_pkcs1_sha256"
    RSA_PKCS1_SHA384 = "rsa_pkcs1_sha384"
    RSA_PKCS1_SHA512 = "rsa_pkcs1_sha512"
    ECDSA_SHA1 = "ecdsa_sha1"
    ECDSA_SHA256 = "ecdsa_sha256"
    ECDSA_SHA384 = "ecdsa_sha384"
    ECDSA_SHA512 = "ecdsa_sha512"
    DSA_SHA1 = "dsa_sha1"
    DSA_SHA256 = "dsa_sha256"
    RSA_PSS_SHA256 = "rsa_pss_sha256"
    RSA_PSS_SHA384 = "rsa_pss_sha384"
    RSA_PSS_SHA512 = "rsa_pss_sha512"


def parse_mask_gen_algorithm(data):
    """
    Decode a MaskGenAlgorithm (RFC 5912):

        mgf1SHA1 MaskGenAlgorithm ::= {
            algorithm id-mgf1,
            parameters HashAlgorithm : sha1Identifier
        }

    MGF1 is the only mask generation function defined by RFC 4055, and the
    only one supported.

    Args:
        data (bytes): DER-encoded MaskGenAlgorithm

    Returns:
        DigestAlgorithm: The MGF1 hash or None if invalid
    """
    algorithm_identifier = parse_algorithm_identifier(data)
    if algorithm_identifier is None:
        return None
    oid, parameters = algorithm_identifier

    if oid != oids.MGF1:
        logger.debug(f"Unsupported mask generation function: {oids.describe_oid(oid)}")
        return None

    return parse_hash_algorithm(parameters)


_RSA_PSS_PROFILES = {
    (DigestAlgorithm.SHA256, 32): SignatureAlgorithm.RSA_PSS_SHA256,
    (DigestAlgorithm.SHA384, 48): SignatureAlgorithm.RSA_PSS_SHA384,
    (DigestAlgorithm.SHA512, 64): SignatureAlgorithm.RSA_PSS_SHA512,
}


def parse_rsa_pss(params):
    """
    Decode the parameters of id-RSASSA-PSS (RFC 5912):

        RSASSA-PSS-params  ::=  SEQUENCE  {
            hashAlgorithm     [0] HashAlgorithm DEFAULT sha1Identifier,
            maskGenAlgorithm  [1] MaskGenAlgorithm DEFAULT mgf1SHA1,
            saltLength        [2] INTEGER DEFAULT 20,
            trailerField      [3] INTEGER DEFAULT 1
        }

    The defaults of the first three fields describe SHA-1, which is not
    supported with RSASSA-PSS, so those fields are required here. DER forbids
    encoding a default value, so trailerField can never legitimately appear
    and is rejected like any other trailing data. Only the combinations
    representable in TLS 1.3 (RFC 8446) are accepted.

    Args:
        params (bytes): Raw parameters TLV of the AlgorithmIdentifier

    Returns:
        SignatureAlgorithm: One of the RSA_PSS_* members or None if invalid
    """
    parser = der.Parser(params)
    params_parser = parser.read_sequence()
    if params_parser is None:
        return None

    # The parameters are a single SEQUENCE
    if parser.has_more():
        return None

    field = params_parser.read_tag(der.context_specific_constructed(0))
    if field is None:
        return None
    hash_algorithm = parse_hash_algorithm(field)
    if hash_algorithm is None:
        return None

    field = params_parser.read_tag(der.context_specific_constructed(1))
    if field is None:
        return None
    mgf1_hash = parse_mask_gen_algorithm(field)
    if mgf1_hash is None:
        return None

    salt_length_parser = params_parser.read_constructed(der.context_specific_constructed(2))
    if salt_length_parser is None:
        return None
    salt_length = salt_length_parser.read_uint64()
    if salt_length is None or salt_length_parser.has_more():
        return None

    if params_parser.has_more():
        return None

    # TLS 1.3 always uses the message hash for MGF1
    if hash_algorithm != mgf1_hash:
        logger.debug(f"RSASSA-PSS hash {hash_algorithm.value} != MGF1 hash {mgf1_hash.value}")
        return None

    algorithm = _RSA_PSS_PROFILES.get((hash_algorithm, salt_length))
    if algorithm is None:
        logger.debug(f"Unsupported RSASSA-PSS profile: {hash_algorithm.value}, salt length {salt_length}")
    return algorithm


def _null_or_absent(algorithm):
    # RFC 5912 requires NULL for RSA PKCS#1 v1.5, but absent parameters are
    # also seen from non-compliant encoders (notably OCSP responders).
    def rule(parameters):
        if not parameters or der.is_null(parameters):
            return algorithm
        return None
    return rule


def _absent(algorithm):
    # RFC 5912: "PARAMS TYPE NULL ARE absent"
    def rule(parameters):
        if not parameters:
            return algorithm
        return None
    return rule


# OID -> rule mapping the raw parameters TLV to a SignatureAlgorithm or None
_SIGNATURE_ALGORITHM_RULES = {
    oids.SHA1_WITH_RSA_ENCRYPTION: _null_or_absent(SignatureAlgorithm.RSA_PKCS1_SHA1),
    oids.SHA1_WITH_RSA_SIGNATURE: _null_or_absent(SignatureAlgorithm.RSA_PKCS1_SHA1),
    oids.SHA256_WITH_RSA_ENCRYPTION: _null_or_absent(SignatureAlgorithm.RSA_PKCS1_SHA256),
    oids.SHA384_WITH_RSA_ENCRYPTION: _null_or_absent(SignatureAlgorithm.RSA_PKCS1_SHA384),
    oids.SHA512_WITH_RSA_ENCRYPTION: _null_or_absent(SignatureAlgorithm.RSA_PKCS1_SHA512),
    oids.MD2_WITH_RSA_ENCRYPTION: _null_or_absent(SignatureAlgorithm.RSA_PKCS1_MD2),
    oids.MD4_WITH_RSA_ENCRYPTION: _null_or_absent(SignatureAlgorithm.RSA_PKCS1_MD4),
    oids.MD5_WITH_RSA_ENCRYPTION: _null_or_absent(SignatureAlgorithm.RSA_PKCS1_MD5),
    oids.ECDSA_WITH_SHA1: _absent(SignatureAlgorithm.ECDSA_SHA1),
    oids.ECDSA_WITH_SHA256: _absent(SignatureAlgorithm.ECDSA_SHA256),
    oids.ECDSA_WITH_SHA384: _absent(SignatureAlgorithm.ECDSA_SHA384),
    oids.ECDSA_WITH_SHA512: _absent(SignatureAlgorithm.ECDSA_SHA512),
    oids.RSASSA_PSS: parse_rsa_pss,
    # RFC 5912 wants these absent, NULL is tolerated
    oids.DSA_WITH_SHA1: _null_or_absent(SignatureAlgorithm.DSA_SHA1),
    oids.DSA_WITH_SHA256: _null_or_absent(SignatureAlgorithm.DSA_SHA256),
}


def parse_signature_algorithm(algorithm_identifier, errors=None):
    """
    Classify a DER-encoded signature AlgorithmIdentifier.

    Args:
        algorithm_identifier (bytes): Exactly one DER AlgorithmIdentifier
        errors (CertErrors, optional): Receives an "Unknown signature
            algorithm" error with the raw OID and parameters on failure

    Returns:
        SignatureAlgorithm: The algorithm or None if it is malformed,
        unknown or carries parameters outside the accepted profile
    """
    decoded = parse_algorithm_identifier(algorithm_identifier)
    if decoded is None:
        logger.debug("Malformed AlgorithmIdentifier")
        return None
    oid, parameters = decoded

    rule = _SIGNATURE_ALGORITHM_RULES.get(oid)
    if rule is not None:
        algorithm = rule(parameters)
        if algorithm is not None:
            return algorithm

    logger.debug(f"Unknown signature algorithm: oid={oid.hex()} params={parameters.hex()}")
    if errors is not None:
        errors.add_error(
            UNKNOWN_SIGNATURE_ALGORITHM,
            create_cert_error_params_2_der("oid", oid, "params", parameters),
        )
    return None


# RFC 5929 section 4.1. Every SignatureAlgorithm must appear here.
_TLS_SERVER_END_POINT_DIGESTS = {
    # MD5 and SHA-1 are replaced by SHA-256
    SignatureAlgorithm.RSA_PKCS1_MD5: DigestAlgorithm.SHA256,
    SignatureAlgorithm.RSA_PKCS1_SHA1: DigestAlgorithm.SHA256,
    SignatureAlgorithm.ECDSA_SHA1: DigestAlgorithm.SHA256,

    SignatureAlgorithm.RSA_PKCS1_SHA256: DigestAlgorithm.SHA256,
    SignatureAlgorithm.ECDSA_SHA256: DigestAlgorithm.SHA256,

    SignatureAlgorithm.RSA_PKCS1_SHA384: DigestAlgorithm.SHA384,
    SignatureAlgorithm.ECDSA_SHA384: DigestAlgorithm.SHA384,

    SignatureAlgorithm.RSA_PKCS1_SHA512: DigestAlgorithm.SHA512,
    SignatureAlgorithm.ECDSA_SHA512: DigestAlgorithm.SHA512,

    # PSS with a matching MGF1 hash uses that single hash
    SignatureAlgorithm.RSA_PSS_SHA256: DigestAlgorithm.SHA256,
    SignatureAlgorithm.RSA_PSS_SHA384: DigestAlgorithm.SHA384,
    SignatureAlgorithm.RSA_PSS_SHA512: DigestAlgorithm.SHA512,

    # Legacy algorithms have no channel binding
    SignatureAlgorithm.DSA_SHA1: None,
    SignatureAlgorithm.DSA_SHA256: None,
    SignatureAlgorithm.RSA_PKCS1_MD2: None,
    SignatureAlgorithm.RSA_PKCS1_MD4: None,
}


def get_tls_server_endpoint_digest_algorithm(algorithm):
    """
    Return the digest used for tls-server-end-point channel binding.

    RFC 5929 picks the digest out of the certificate's signature algorithm,
    which not every signature algorithm has a single answer for, so callers
    get that decision from here rather than conditioning on algorithms.

    Args:
        algorithm (SignatureAlgorithm): Certificate signature algorithm

    Returns:
        DigestAlgorithm: The binding digest or None if channel binding is
        not defined for the algorithm

    Raises:
        KeyError: If `algorithm` is not a SignatureAlgorithm member
    """
    return _TLS_SERVER_END_POINT_DIGESTS[algorithm]
