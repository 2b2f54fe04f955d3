"""
AlgorithmIdentifier Decoder

Splits a DER-encoded AlgorithmIdentifier into its OID and its raw parameters:

    AlgorithmIdentifier  ::=  SEQUENCE  {
         algorithm               OBJECT IDENTIFIER,
         parameters              ANY DEFINED BY algorithm OPTIONAL  }

The parameters are returned as a single raw TLV and are not interpreted here.
"""

from collections import namedtuple

from certsigalg import der

AlgorithmIdentifier = namedtuple("AlgorithmIdentifier", ["oid", "parameters"])
AlgorithmIdentifier.__doc__ = """\
Decoded AlgorithmIdentifier.

oid holds the OID content octets; parameters holds the full parameters TLV,
or b"" when the field was not encoded at all."""


def parse_algorithm_identifier(data):
    """
    Decode a DER-encoded AlgorithmIdentifier.

    Args:
        data (bytes): Exactly one AlgorithmIdentifier, nothing after it

    Returns:
        AlgorithmIdentifier: (oid, parameters) or None if invalid
    """
    parser = der.Parser(data)

    algorithm_identifier_parser = parser.read_sequence()
    if algorithm_identifier_parser is None:
        return None

    # The input is expected to be a single AlgorithmIdentifier
    if parser.has_more():
        return None

    oid = algorithm_identifier_parser.read_tag(der.OID)
    if oid is None:
        return None

    # Parameters are at most one TLV (NULL, a SEQUENCE, ...). RFC 5912 gives
    # AlgorithmIdentifier no extension point after them.
    parameters = b""
    if algorithm_identifier_parser.has_more():
        parameters = algorithm_identifier_parser.read_raw_tlv()
        if parameters is None:
            return None

    if algorithm_identifier_parser.has_more():
        return None

    return AlgorithmIdentifier(oid, parameters)
