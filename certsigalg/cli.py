#!/usr/bin/env python3
from certsigalg.algorithm_identifier import parse_algorithm_identifier
from certsigalg.cert_errors import CertErrors
from certsigalg.certificate import classify_certificate, load_cert_der, tls_server_end_point
from certsigalg.colors import Colors, colored
from certsigalg.logger import set_verbose_mode, get_logger
from certsigalg.oids import describe_oid
from certsigalg.signature_algorithm import (
    get_tls_server_endpoint_digest_algorithm,
    parse_signature_algorithm,
)

import sys
import argparse


def _hex_bytes(value):
    try:
        return bytes.fromhex(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a hex string: {value!r}") from None


def parse_arguments(argv=None):
    """Parse command line arguments using argparse."""
    parser = argparse.ArgumentParser(
        prog="classify-cert",
        description="Classify the signature algorithm of certificates and "
                    "DER-encoded AlgorithmIdentifiers",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        "-f", "--format",
        choices=["DER", "PEM"],
        default="PEM",
        help="Certificate format (DER or PEM, default PEM)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output"
    )

    parser.add_argument(
        "--algid",
        action="append",
        default=[],
        type=_hex_bytes,
        metavar="HEX",
        help="Hex-encoded AlgorithmIdentifier to classify (repeatable)"
    )

    parser.add_argument(
        "certificates",
        nargs="*",
        help="Certificate files to classify"
    )

    args = parser.parse_args(argv)
    if not args.certificates and not args.algid:
        parser.error("nothing to classify: give certificate files or --algid")
    return args


def _report(label, algorithm, errors):
    """Print one result line. Returns True if the algorithm was recognized."""
    if algorithm is None:
        print(colored(f"✗ {label}: unrecognized signature algorithm", Colors.RED, sys.stdout))
        for line in errors.to_debug_string().splitlines():
            print(f"  {line}")
        return False

    digest = get_tls_server_endpoint_digest_algorithm(algorithm)
    print(colored(f"✓ {label}: {algorithm.value}", Colors.GREEN, sys.stdout))
    print(f"  tls-server-end-point: {digest.value if digest is not None else 'none'}")
    return True


def classify_algid(algorithm_identifier, verbose=False):
    errors = CertErrors()
    algorithm = parse_signature_algorithm(algorithm_identifier, errors)
    recognized = _report(algorithm_identifier.hex(), algorithm, errors)

    if verbose and not recognized:
        decoded = parse_algorithm_identifier(algorithm_identifier)
        if decoded is None:
            print("  malformed AlgorithmIdentifier")
        else:
            print(f"  algorithm: {describe_oid(decoded.oid)}")
    return recognized


def classify_file(file_format, file_name, verbose=False):
    try:
        cert_der = load_cert_der(file_format, file_name)
    except (OSError, ValueError) as e:
        print(colored(f"✗ {file_name}: {e}", Colors.RED, sys.stdout))
        return False

    errors = CertErrors()
    algorithm = classify_certificate(cert_der, errors)
    recognized = _report(file_name, algorithm, errors)

    if verbose and recognized:
        binding = tls_server_end_point(cert_der, algorithm)
        if binding is not None:
            print(f"  channel binding: {binding.hex()}")
    return recognized


def main(argv=None):
    """Main entry point for the signature algorithm classifier."""
    args = parse_arguments(argv)

    try:
        # Set global verbose mode and get a logger for this module
        set_verbose_mode(args.verbose)
        logger = get_logger()

        if args.verbose:
            logger.debug(f"Running with format: {args.format}")
            logger.debug(f"Certificates to classify: {args.certificates}")

        results = [classify_algid(algid, args.verbose) for algid in args.algid]
        results += [
            classify_file(args.format, file_name, args.verbose)
            for file_name in args.certificates
        ]

        return 0 if all(results) else 1

    except Exception as e:
        print(colored(f"Error: {str(e)}", Colors.RED, sys.stdout))
        return 1


if __name__ == "__main__":
    sys.exit(main())
