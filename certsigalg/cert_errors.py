"""
Certificate Diagnostics

This module provides the collector that certificate-processing code writes
structured diagnostics to. Classification results never depend on it; it
only records why something was rejected.

Classes:
    CertErrorId: Names one kind of error.
    CertErrorParams2Der: Two named raw DER values attached to an error.
    CertError: One recorded error or warning.
    CertErrors: Ordered collection of CertError records.

Usage:
    errors = CertErrors()
    if parse_signature_algorithm(data, errors) is None:
        print(errors.to_debug_string())
"""

import enum
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class CertErrorId:
    name: str

    def __str__(self):
        return self.name


UNKNOWN_SIGNATURE_ALGORITHM = CertErrorId("Unknown signature algorithm")
FAILED_PARSING_CERTIFICATE = CertErrorId("Failed parsing Certificate")
SIGNATURE_ALGORITHM_MISMATCH = CertErrorId(
    "Certificate.signatureAlgorithm != TBSCertificate.signature"
)


class Severity(enum.Enum):
    WARNING = "WARNING"
    ERROR = "ERROR"


@dataclass(frozen=True)
class CertErrorParams2Der:
    """Two named DER blobs, rendered as hex."""
    name1: str
    der1: bytes
    name2: str
    der2: bytes

    def to_debug_string(self):
        return f"{self.name1}: {bytes(self.der1).hex()}\n{self.name2}: {bytes(self.der2).hex()}"


@dataclass(frozen=True)
class CertError:
    severity: Severity
    id: CertErrorId
    params: Optional[CertErrorParams2Der] = None

    def to_debug_string(self):
        lines = [f"{self.severity.value}: {self.id}"]
        if self.params is not None:
            for line in self.params.to_debug_string().splitlines():
                lines.append(f"  {line}")
        return "\n".join(lines) + "\n"


def create_cert_error_params_2_der(name1, der1, name2, der2):
    """Attach two raw DER values (copied) to an error."""
    return CertErrorParams2Der(name1, bytes(der1), name2, bytes(der2))


class CertErrors:
    """Ordered collection of diagnostics for one certificate or operation."""

    def __init__(self):
        self._nodes: List[CertError] = []

    def add(self, severity, error_id, params=None):
        self._nodes.append(CertError(severity, error_id, params))

    def add_error(self, error_id, params=None):
        self.add(Severity.ERROR, error_id, params)

    def add_warning(self, error_id, params=None):
        self.add(Severity.WARNING, error_id, params)

    def contains_error(self, error_id):
        """Return True if an error (not a warning) with `error_id` was recorded."""
        return any(
            node.severity is Severity.ERROR and node.id == error_id
            for node in self._nodes
        )

    def contains_any_error_with_severity(self, severity):
        return any(node.severity is severity for node in self._nodes)

    def to_debug_string(self):
        return "".join(node.to_debug_string() for node in self._nodes)

    def __iter__(self):
        return iter(self._nodes)

    def __len__(self):
        return len(self._nodes)
