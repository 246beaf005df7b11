import pytest

from srm_dex.core.utils.bcs import (
    BcsDecodeError,
    StructTag,
    UnsupportedTypeError,
    VectorTag,
    decode_value,
    encode_address,
    encode_bool,
    encode_bytes,
    encode_u64,
    parse_type_tag,
    to_type_tag,
)

SUI_FRAMEWORK = "0x" + "0" * 63 + "2"


def u64(value: int) -> bytes:
    return value.to_bytes(8, "little")


class TestEncoding:
    def test_u64_little_endian(self):
        assert encode_u64(1) == b"\x01" + b"\x00" * 7
        assert encode_u64(2**64 - 1) == b"\xff" * 8

    def test_u64_out_of_range(self):
        with pytest.raises(ValueError):
            encode_u64(2**64)
        with pytest.raises(ValueError):
            encode_u64(-1)

    def test_u64_rejects_bool(self):
        with pytest.raises(TypeError):
            encode_u64(True)

    def test_bool(self):
        assert encode_bool(True) == b"\x01"
        assert encode_bool(False) == b"\x00"
        with pytest.raises(TypeError):
            encode_bool(1)  # type: ignore[arg-type]

    def test_address_is_fixed_width(self):
        assert encode_address("0x2") == bytes.fromhex(SUI_FRAMEWORK[2:])

    def test_bytes_are_length_prefixed(self):
        assert encode_bytes(b"abc") == b"\x03abc"
        with pytest.raises(TypeError):
            encode_bytes("abc")  # type: ignore[arg-type]


class TestTypeTags:
    def test_primitive(self):
        assert parse_type_tag("u64") == "u64"
        assert to_type_tag("u64").serialize() == b"\x02"

    def test_vector(self):
        assert parse_type_tag("vector<u8>") == VectorTag("u8")
        assert to_type_tag(VectorTag("u8")).serialize() == b"\x06\x01"

    def test_struct(self):
        tag = parse_type_tag("0x2::sui::SUI")
        assert tag == StructTag(SUI_FRAMEWORK, "sui", "SUI")
        assert to_type_tag(tag).serialize() == (
            b"\x07" + bytes.fromhex(SUI_FRAMEWORK[2:]) + b"\x03sui\x03SUI\x00"
        )

    def test_nested_generics(self):
        tag = parse_type_tag("0xabc::pool::LP<0x2::sui::SUI, vector<u8>>")
        assert isinstance(tag, StructTag)
        assert tag.name == "LP"
        assert tag.type_params == (
            StructTag(SUI_FRAMEWORK, "sui", "SUI"),
            VectorTag("u8"),
        )
        sui = b"\x07" + bytes.fromhex(SUI_FRAMEWORK[2:]) + b"\x03sui\x03SUI\x00"
        assert to_type_tag(tag).serialize().endswith(b"\x02LP\x02" + sui + b"\x06\x01")

    def test_malformed(self):
        with pytest.raises(ValueError, match="Malformed type tag"):
            parse_type_tag("not a type")


class TestDecodeValue:
    def test_u64_from_bytes_and_byte_list(self):
        assert decode_value("u64", u64(1000)) == 1000
        assert decode_value("u64", list(u64(2**64 - 1))) == 2**64 - 1

    def test_u256(self):
        assert decode_value("u256", (2**200).to_bytes(32, "little")) == 2**200

    def test_vector_of_u64(self):
        data = b"\x02" + u64(5) + u64(6)
        assert decode_value("vector<u64>", data) == [5, 6]

    def test_vector_of_u8_is_bytes(self):
        assert decode_value("vector<u8>", b"\x02\xaa\xbb") == b"\xaa\xbb"

    def test_address(self):
        assert decode_value("address", bytes(31) + b"\x07") == "0x" + "0" * 62 + "07"

    def test_string(self):
        assert decode_value("0x1::string::String", b"\x03abc") == "abc"

    def test_option(self):
        assert decode_value("0x1::option::Option<u64>", b"\x00") is None
        assert decode_value("0x1::option::Option<u64>", b"\x01" + u64(9)) == 9

    def test_bool_rejects_invalid_byte(self):
        with pytest.raises(BcsDecodeError):
            decode_value("bool", b"\x02")

    def test_trailing_bytes(self):
        with pytest.raises(BcsDecodeError, match="Trailing bytes"):
            decode_value("u8", b"\x01\x02")

    @pytest.mark.parametrize(
        "type_str,data",
        [
            ("u64", b"\x01"),
            ("u64", [1, 2, 3]),
            ("address", bytes(5)),
            ("vector<u64>", b"\x02" + u64(5)),
            ("0x1::string::String", b"\x05ab"),
        ],
    )
    def test_truncated(self, type_str, data):
        with pytest.raises(BcsDecodeError):
            decode_value(type_str, data)

    def test_decode_errors_are_value_errors(self):
        assert issubclass(BcsDecodeError, ValueError)

    def test_unknown_struct(self):
        with pytest.raises(UnsupportedTypeError):
            decode_value("0xabc::pool::Pool", b"\x00")
