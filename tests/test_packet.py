import pytest

from valhalla.packet import PacketReader, PacketUnderflowError, PacketWriter


def test_integer_round_trip():
    writer = PacketWriter()
    writer.write_byte(200).write_int8(-5).write_int16(-1234).write_int32(9200000)
    writer.write_uint32(4000000000).write_int64(-(2**40)).write_uint64(2**63)
    reader = PacketReader(writer.to_bytes())
    assert reader.read_byte() == 200
    assert reader.read_int8() == -5
    assert reader.read_int16() == -1234
    assert reader.read_int32() == 9200000
    assert reader.read_uint32() == 4000000000
    assert reader.read_int64() == -(2**40)
    assert reader.read_bytes(8) == (2**63).to_bytes(8, "little")
    assert reader.remaining == 0


def test_little_endian_layout():
    assert PacketWriter().write_int16(1).to_bytes() == b"\x01\x00"


def test_opcode_is_first_byte():
    writer = PacketWriter(0x9F)
    writer.write_int32(9200000)
    data = bytes(writer)
    assert data[0] == 0x9F
    assert len(writer) == 5
    assert PacketReader(data[1:]).read_int32() == 9200000


def test_string_round_trip():
    writer = PacketWriter().write_string("cody").write_bool(True).write_bool(False)
    reader = PacketReader(writer.to_bytes())
    length = reader.read_int16()
    assert length == len("cody")
    assert reader.read_string(length) == "cody"
    assert reader.read_bool() is True
    assert reader.read_bool() is False


def test_padded_string_fills_field():
    data = PacketWriter().write_padded_string("cody", 13).to_bytes()
    assert len(data) == 13
    assert data.startswith(b"cody")
    assert data[4:] == bytes(9)


def test_padded_string_truncates():
    data = PacketWriter().write_padded_string("abcdefgh", 3).to_bytes()
    assert data == b"abc"


def test_out_of_range_value_raises():
    with pytest.raises(ValueError):
        PacketWriter().write_byte(256)
    with pytest.raises(ValueError):
        PacketWriter().write_int16(40000)


def test_underflow_raises():
    reader = PacketReader(b"\x01\x02")
    with pytest.raises(PacketUnderflowError):
        reader.read_int32()


def test_rest_does_not_consume_and_skip_advances():
    reader = PacketReader(b"\x01\x02\x03\x04\x05")
    reader.skip(2)
    assert reader.rest() == b"\x03\x04\x05"
    assert reader.position == 2
    assert reader.read_byte() == 3
    with pytest.raises(PacketUnderflowError):
        reader.skip(5)