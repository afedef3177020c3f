import struct

import pytest

FIL_HEADER = struct.Struct('>IIIIQHQI')
FIL_TRAILER = struct.Struct('>II')


def build_page(type_code=0, offset=0, prev=0xFFFFFFFF, next=0xFFFFFFFF, lsn=0,
               checksum=0, flush_lsn=0, space_id=0, size=16384, trailer=(0, 0)):
    data = bytearray(size)
    FIL_HEADER.pack_into(data, 0, checksum, offset, prev, next, lsn, type_code, flush_lsn, space_id)
    FIL_TRAILER.pack_into(data, size - FIL_TRAILER.size, *trailer)
    return bytes(data)


@pytest.fixture
def page_bytes():
    return build_page
