"""
Object identifiers used by signature algorithm classification.

Each constant holds the DER content octets of the OID (the bytes after the
06 tag and length), which is what `Parser.read_tag(OID)` returns.
"""

# --- RSASSA-PKCS1-v1_5 ---

# md2WithRSAEncryption, 1.2.840.113549.1.1.2
MD2_WITH_RSA_ENCRYPTION = bytes.fromhex("2a864886f70d010102")

# md4WithRSAEncryption, 1.2.840.113549.1.1.3
MD4_WITH_RSA_ENCRYPTION = bytes.fromhex("2a864886f70d010103")

# md5WithRSAEncryption, 1.2.840.113549.1.1.4
MD5_WITH_RSA_ENCRYPTION = bytes.fromhex("2a864886f70d010104")

# sha1WithRSAEncryption, 1.2.840.113549.1.1.5 (RFC 5912)
SHA1_WITH_RSA_ENCRYPTION = bytes.fromhex("2a864886f70d010105")

# sha1WithRSASignature, 1.3.14.3.2.29
# Deprecated OIW equivalent of sha1WithRSAEncryption, still emitted by
# Microsoft's makecert.exe.
SHA1_WITH_RSA_SIGNATURE = bytes.fromhex("2b0e03021d")

# sha256WithRSAEncryption, 1.2.840.113549.1.1.11
SHA256_WITH_RSA_ENCRYPTION = bytes.fromhex("2a864886f70d01010b")

# sha384WithRSAEncryption, 1.2.840.113549.1.1.12
SHA384_WITH_RSA_ENCRYPTION = bytes.fromhex("2a864886f70d01010c")

# sha512WithRSAEncryption, 1.2.840.113549.1.1.13
SHA512_WITH_RSA_ENCRYPTION = bytes.fromhex("2a864886f70d01010d")

# --- ECDSA ---

# ecdsa-with-SHA1, 1.2.840.10045.4.1
ECDSA_WITH_SHA1 = bytes.fromhex("2a8648ce3d0401")

# ecdsa-with-SHA256, 1.2.840.10045.4.3.2
ECDSA_WITH_SHA256 = bytes.fromhex("2a8648ce3d040302")

# ecdsa-with-SHA384, 1.2.840.10045.4.3.3
ECDSA_WITH_SHA384 = bytes.fromhex("2a8648ce3d040303")

# ecdsa-with-SHA512, 1.2.840.10045.4.3.4
ECDSA_WITH_SHA512 = bytes.fromhex("2a8648ce3d040304")

# --- RSASSA-PSS ---

# id-RSASSA-PSS, 1.2.840.113549.1.1.10
RSASSA_PSS = bytes.fromhex("2a864886f70d01010a")

# id-mgf1, 1.2.840.113549.1.1.8
MGF1 = bytes.fromhex("2a864886f70d010108")

# --- DSA ---

# dsa-with-sha1, 1.2.840.10040.4.3
DSA_WITH_SHA1 = bytes.fromhex("2a8648ce380403")

# dsa-with-sha256, 2.16.840.1.101.3.4.3.2
DSA_WITH_SHA256 = bytes.fromhex("608648016503040302")

# --- Digests ---

# id-md2, 1.2.840.113549.2.2
MD2 = bytes.fromhex("2a864886f70d0202")

# id-md4, 1.2.840.113549.2.4
MD4 = bytes.fromhex("2a864886f70d0204")

# id-md5, 1.2.840.113549.2.5
MD5 = bytes.fromhex("2a864886f70d0205")

# id-sha1, 1.3.14.3.2.26
SHA1 = bytes.fromhex("2b0e03021a")

# id-sha224, 2.16.840.1.101.3.4.2.4
SHA224 = bytes.fromhex("608648016503040204")

# id-sha256, 2.16.840.1.101.3.4.2.1
SHA256 = bytes.fromhex("608648016503040201")

# id-sha384, 2.16.840.1.101.3.4.2.2
SHA384 = bytes.fromhex("608648016503040202")

# id-sha512, 2.16.840.1.101.3.4.2.3
SHA512 = bytes.fromhex("608648016503040203")


OID_NAMES = {
    MD2_WITH_RSA_ENCRYPTION: "md2WithRSAEncryption",
    MD4_WITH_RSA_ENCRYPTION: "md4WithRSAEncryption",
    MD5_WITH_RSA_ENCRYPTION: "md5WithRSAEncryption",
    SHA1_WITH_RSA_ENCRYPTION: "sha1WithRSAEncryption",
    SHA1_WITH_RSA_SIGNATURE: "sha1WithRSASignature",
    SHA256_WITH_RSA_ENCRYPTION: "sha256WithRSAEncryption",
    SHA384_WITH_RSA_ENCRYPTION: "sha384WithRSAEncryption",
    SHA512_WITH_RSA_ENCRYPTION: "sha512WithRSAEncryption",
    ECDSA_WITH_SHA1: "ecdsa-with-SHA1",
    ECDSA_WITH_SHA256: "ecdsa-with-SHA256",
    ECDSA_WITH_SHA384: "ecdsa-with-SHA384",
    ECDSA_WITH_SHA512: "ecdsa-with-SHA512",
    RSASSA_PSS: "id-RSASSA-PSS",
    MGF1: "id-mgf1",
    DSA_WITH_SHA1: "dsa-with-sha1",
    DSA_WITH_SHA256: "dsa-with-sha256",
    MD2: "id-md2",
    MD4: "id-md4",
    MD5: "id-md5",
    SHA1: "id-sha1",
    SHA224: "id-sha224",
    SHA256: "id-sha256",
    SHA384: "id-sha384",
    SHA512: "id-sha512",
}


def oid_to_dotted(oid):
    """
    Convert OID content octets to dotted notation.

    Args:
        oid (bytes): DER content octets of an OBJECT IDENTIFIER

    Returns:
        str: Dotted representation such as "1.2.840.113549.1.1.11",
        or None if the octets are not a valid encoding
    """
    oid = bytes(oid)
    if not oid:
        return None

    arcs = []
    value = 0
    pending = False
    for octet in oid:
        # 0x80 as the first octet of an arc would be a non-minimal encoding
        if not pending and octet == 0x80:
            return None
        value = (value << 7) | (octet & 0x7F)
        if octet & 0x80:
            pending = True
            continue
        arcs.append(value)
        value = 0
        pending = False

    if pending:
        return None

    # The first subidentifier packs the first two arcs
    first = arcs[0]
    if first < 40:
        head = [0, first]
    elif first < 80:
        head = [1, first - 40]
    else:
        head = [2, first - 80]

    return ".".join(str(arc) for arc in head + arcs[1:])


def describe_oid(oid):
    """Return a readable label for `oid`, its name when known, else dotted form."""
    oid = bytes(oid)
    name = OID_NAMES.get(oid)
    dotted = oid_to_dotted(oid)
    if dotted is None:
        return f"<invalid OID {oid.hex()}>"
    if name is None:
        return dotted
    return f"{name} ({dotted})"
