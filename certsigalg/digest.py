"""
Digest algorithms and the digest OID resolver.

DigestAlgorithm lists the hashes accepted inside RSASSA-PSS and MGF1
parameters, and the hashes used for TLS channel binding. parse_hash_algorithm
maps a HashAlgorithm AlgorithmIdentifier onto it.
"""

import enum
import logging

from cryptography.hazmat.primitives import hashes

from certsigalg import der, oids
from certsigalg.algorithm_identifier import parse_algorithm_identifier

logger = logging.getLogger(__name__)


class DigestAlgorithm(enum.Enum):
    SHA1 = "sha1"
    SHA256 = "sha256"
    SHA384 = "sha384"
    SHA512 = "sha512"

    def hash_algorithm(self):
        """Return the matching `cryptography` hash object."""
        return _HASH_ALGORITHMS[self]()

    def digest(self, data):
        """
        Hash `data` with this algorithm.

        Args:
            data (bytes): Message to hash

        Returns:
            bytes: The digest
        """
        hash_obj = hashes.Hash(self.hash_algorithm())
        hash_obj.update(data)
        return hash_obj.finalize()


_HASH_ALGORITHMS = {
    DigestAlgorithm.SHA1: hashes.SHA1,
    DigestAlgorithm.SHA256: hashes.SHA256,
    DigestAlgorithm.SHA384: hashes.SHA384,
    DigestAlgorithm.SHA512: hashes.SHA512,
}

_DIGEST_OIDS = {
    oids.SHA1: DigestAlgorithm.SHA1,
    oids.SHA256: DigestAlgorithm.SHA256,
    oids.SHA384: DigestAlgorithm.SHA384,
    oids.SHA512: DigestAlgorithm.SHA512,
}

# Recognised, but never accepted
_UNSUPPORTED_DIGEST_OIDS = frozenset([oids.MD2, oids.MD4, oids.MD5, oids.SHA224])


def parse_hash_algorithm(data):
    """
    Resolve a HashAlgorithm AlgorithmIdentifier to a DigestAlgorithm.

    Only SHA-1, SHA-256, SHA-384 and SHA-512 are supported. The parameters,
    if present, must be NULL; both forms are seen in practice.

    Args:
        data (bytes): DER-encoded AlgorithmIdentifier of a digest

    Returns:
        DigestAlgorithm: The digest or None if invalid or unsupported
    """
    algorithm_identifier = parse_algorithm_identifier(data)
    if algorithm_identifier is None:
        return None
    oid, parameters = algorithm_identifier

    if parameters and not der.is_null(parameters):
        return None

    digest = _DIGEST_OIDS.get(oid)
    if digest is None:
        if oid in _UNSUPPORTED_DIGEST_OIDS:
            logger.debug(f"Unsupported digest algorithm: {oids.describe_oid(oid)}")
        return None

    return digest
