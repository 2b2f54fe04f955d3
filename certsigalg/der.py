"""
Strict DER Reader

This module provides a small reader for DER-encoded data, walking one
tag-length-value (TLV) unit at a time over an immutable byte string.

Classes:
    Parser(data):
        Reads consecutive TLVs from a byte string. Every read either returns
        the decoded piece and advances, or returns None and leaves the
        position untouched.

Functions:
    is_null(data):
        Checks that a byte string holds exactly one DER NULL.

    context_specific_constructed(number):
        Builds the tag byte for a constructed [number] field.

The reader only accepts the subset of BER that DER allows: single-byte tags,
definite and minimally encoded lengths, and minimally encoded integers.
Anything else is treated as invalid input rather than an error, so callers
can reject untrusted data without catching exceptions.
"""

# Universal tags
INTEGER = 0x02
BIT_STRING = 0x03
OCTET_STRING = 0x04
NULL = 0x05
OID = 0x06
SEQUENCE = 0x30

CONSTRUCTED = 0x20
CONTEXT_SPECIFIC = 0x80

# Tag numbers of 31 and above need the multi-byte form, which is not supported.
_TAG_NUMBER_MASK = 0x1F

_MAX_LENGTH_OCTETS = 4
_MAX_UINT64 = (1 << 64) - 1


def context_specific_constructed(number):
    """Return the tag byte for an EXPLICIT [number] field."""
    return CONTEXT_SPECIFIC | CONSTRUCTED | number


class Parser:
    """
    Sequential reader over DER-encoded bytes.

    Args:
        data (bytes): DER-encoded data, possibly holding several TLVs
    """

    def __init__(self, data=b""):
        self._data = bytes(data)
        self._pos = 0

    def has_more(self):
        """Return True if unread bytes remain."""
        return self._pos < len(self._data)

    def _parse_header(self):
        """
        Decode the TLV header at the current position.

        Returns:
            tuple: (tag, value_start, value_end) or None if invalid
        """
        data = self._data
        pos = self._pos

        if pos >= len(data):
            return None
        tag = data[pos]
        if tag & _TAG_NUMBER_MASK == _TAG_NUMBER_MASK:
            return None
        pos += 1

        if pos >= len(data):
            return None
        first = data[pos]
        pos += 1

        if first < 0x80:
            length = first
        else:
            count = first & 0x7F
            # 0x80 is the indefinite form, never valid in DER
            if count == 0 or count > _MAX_LENGTH_OCTETS:
                return None
            if pos + count > len(data):
                return None
            length_octets = data[pos:pos + count]
            if length_octets[0] == 0:
                return None
            length = int.from_bytes(length_octets, byteorder='big')
            # The short form must be used when it can hold the length
            if length < 0x80:
                return None
            pos += count

        end = pos + length
        if end > len(data):
            return None
        return tag, pos, end

    def peek_tag(self):
        """Return the tag of the next TLV without consuming it, or None."""
        header = self._parse_header()
        if header is None:
            return None
        return header[0]

    def read_tag_and_value(self):
        """
        Read the next TLV.

        Returns:
            tuple: (tag, value) or None if invalid
        """
        header = self._parse_header()
        if header is None:
            return None
        tag, start, end = header
        self._pos = end
        return tag, self._data[start:end]

    def read_raw_tlv(self):
        """Read the next TLV and return its full encoding, or None."""
        start = self._pos
        if self.read_tag_and_value() is None:
            return None
        return self._data[start:self._pos]

    def read_tag(self, tag):
        """Read the next TLV if it carries `tag` and return its value, or None."""
        header = self._parse_header()
        if header is None or header[0] != tag:
            return None
        _, start, end = header
        self._pos = end
        return self._data[start:end]

    def read_optional_tag(self, tag):
        """
        Read the next TLV only if it carries `tag`.

        Returns:
            tuple: (present, value), or None if the input is invalid.
            When the tag does not match, (False, b"") is returned and
            nothing is consumed.
        """
        if not self.has_more():
            return False, b""
        header = self._parse_header()
        if header is None:
            return None
        if header[0] != tag:
            return False, b""
        _, start, end = header
        self._pos = end
        return True, self._data[start:end]

    def skip_tag(self, tag):
        """Skip the next TLV if it carries `tag`. Returns True on success."""
        return self.read_tag(tag) is not None

    def read_constructed(self, tag):
        """Read a constructed TLV with `tag` and return a Parser over its value."""
        if not tag & CONSTRUCTED:
            return None
        value = self.read_tag(tag)
        if value is None:
            return None
        return Parser(value)

    def read_sequence(self):
        """Read a SEQUENCE and return a Parser over its contents, or None."""
        return self.read_constructed(SEQUENCE)

    def read_uint64(self):
        """
        Read an INTEGER holding an unsigned 64-bit value.

        Returns:
            int: The decoded value or None if the encoding is invalid,
            negative or too large
        """
        header = self._parse_header()
        if header is None or header[0] != INTEGER:
            return None
        _, start, end = header
        value = self._data[start:end]

        if not value:
            return None
        if len(value) > 1:
            # Leading 0x00 or 0xff octets are only allowed to fix the sign
            if value[0] == 0x00 and value[1] < 0x80:
                return None
            if value[0] == 0xFF and value[1] >= 0x80:
                return None
        if value[0] & 0x80:
            return None

        number = int.from_bytes(value, byteorder='big')
        if number > _MAX_UINT64:
            return None

        self._pos = end
        return number


def is_null(data):
    """
    Check that `data` is exactly one DER NULL (05 00) and nothing else.

    Args:
        data (bytes): Encoded data to check

    Returns:
        bool: True if the whole input is a NULL value
    """
    parser = Parser(data)
    value = parser.read_tag(NULL)
    if value is None:
        return False

    # NULL is TLV encoded, the value itself must be empty
    if value:
        return False

    return not parser.has_more()
