from certsigalg import der

from der_builder import integer, seq, tlv


def test_read_tag_and_value_short_form():
    parser = der.Parser(bytes.fromhex("0403aabbcc"))
    assert parser.read_tag_and_value() == (der.OCTET_STRING, b"\xaa\xbb\xcc")
    assert not parser.has_more()


def test_read_tag_long_form_length():
    content = b"\x00" * 200
    parser = der.Parser(b"\x04\x81\xc8" + content)
    assert parser.read_tag(der.OCTET_STRING) == content
    assert not parser.has_more()


def test_rejects_non_minimal_long_form_length():
    # 5 encoded with the long form
    assert der.Parser(bytes.fromhex("048105") + b"\x00" * 5).read_tag_and_value() is None
    # Leading zero length octet
    assert der.Parser(b"\x04\x82\x00\xc8" + b"\x00" * 200).read_tag_and_value() is None


def test_rejects_indefinite_length():
    assert der.Parser(bytes.fromhex("30800500 0000")).read_tag_and_value() is None


def test_rejects_multi_byte_tag():
    assert der.Parser(bytes.fromhex("1f810100")).read_tag_and_value() is None


def test_rejects_truncated_values():
    assert der.Parser(b"").read_tag_and_value() is None
    assert der.Parser(b"\x30").read_tag_and_value() is None
    assert der.Parser(bytes.fromhex("0405aabb")).read_tag_and_value() is None
    assert der.Parser(bytes.fromhex("0482")).read_tag_and_value() is None


def test_read_tag_mismatch_does_not_advance():
    parser = der.Parser(bytes.fromhex("0500"))
    assert parser.read_tag(der.OID) is None
    assert parser.read_tag(der.NULL) == b""


def test_read_raw_tlv_returns_whole_encoding():
    parser = der.Parser(bytes.fromhex("0500") + bytes.fromhex("020101"))
    assert parser.read_raw_tlv() == bytes.fromhex("0500")
    assert parser.read_raw_tlv() == bytes.fromhex("020101")
    assert parser.read_raw_tlv() is None


def test_read_sequence_returns_inner_parser():
    parser = der.Parser(seq(integer(5), integer(7)))
    inner = parser.read_sequence()
    assert inner.read_uint64() == 5
    assert inner.read_uint64() == 7
    assert not inner.has_more()


def test_read_constructed_requires_constructed_tag():
    assert der.Parser(bytes.fromhex("0500")).read_constructed(der.NULL) is None


def test_read_optional_tag():
    tag = der.context_specific_constructed(0)
    parser = der.Parser(tlv(tag, integer(2)) + integer(9))
    assert parser.read_optional_tag(tag) == (True, integer(2))
    assert parser.read_optional_tag(tag) == (False, b"")
    assert parser.read_uint64() == 9
    assert parser.read_optional_tag(tag) == (False, b"")


def test_read_uint64_values():
    assert der.Parser(integer(0)).read_uint64() == 0
    assert der.Parser(integer(32)).read_uint64() == 32
    assert der.Parser(integer(128)).read_uint64() == 128
    assert der.Parser(integer(2 ** 64 - 1)).read_uint64() == 2 ** 64 - 1


def test_read_uint64_rejects_invalid_integers():
    # empty
    assert der.Parser(bytes.fromhex("0200")).read_uint64() is None
    # negative
    assert der.Parser(bytes.fromhex("0201ff")).read_uint64() is None
    # non-minimal
    assert der.Parser(bytes.fromhex("02020020")).read_uint64() is None
    assert der.Parser(bytes.fromhex("0202ff80")).read_uint64() is None
    # too large
    assert der.Parser(integer(2 ** 64)).read_uint64() is None
    # not an INTEGER
    assert der.Parser(bytes.fromhex("0a0120")).read_uint64() is None


def test_is_null():
    assert der.is_null(bytes.fromhex("0500"))
    assert not der.is_null(b"")
    assert not der.is_null(bytes.fromhex("050100"))
    assert not der.is_null(bytes.fromhex("050000"))
    assert not der.is_null(bytes.fromhex("3000"))


def test_context_specific_constructed():
    assert der.context_specific_constructed(0) == 0xA0
    assert der.context_specific_constructed(2) == 0xA2
