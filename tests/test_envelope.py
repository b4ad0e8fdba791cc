from __future__ import annotations

import gzip
import zlib

import msgpack
import pytest

from vector_api.core.errors import PayloadDecodeError
from vector_api.services.envelope import load_result, unpack_payload, unwrap_payload


def test_unwrap_payload_leaves_plain_msgpack_alone(packed_result: dict) -> None:
    body = msgpack.packb(packed_result)
    assert unwrap_payload(body) == body


def test_unwrap_payload_gzip(packed_result: dict) -> None:
    body = msgpack.packb(packed_result)
    assert unwrap_payload(gzip.compress(body)) == body


def test_unwrap_payload_zlib(packed_result: dict) -> None:
    body = msgpack.packb(packed_result)
    assert unwrap_payload(zlib.compress(body)) == body


def test_unwrap_payload_truncated_gzip_raises() -> None:
    body = gzip.compress(b"x" * 1000)[:12]

    with pytest.raises(PayloadDecodeError) as excinfo:
        unwrap_payload(body)

    assert excinfo.value.code == "payload_decode_error"


def test_unpack_payload_rejects_garbage() -> None:
    with pytest.raises(PayloadDecodeError) as excinfo:
        unpack_payload(b"\xc1\xc1\xc1")

    assert excinfo.value.code == "payload_decode_error"


def test_unpack_payload_rejects_non_map() -> None:
    with pytest.raises(PayloadDecodeError):
        unpack_payload(msgpack.packb([1, 2, 3]))


def test_load_result_from_compressed_payload(packed_result: dict) -> None:
    result = load_result(gzip.compress(msgpack.packb(packed_result)))

    assert result.file_name == "drawing.pdf"
    assert len(result.pages) == 2


def test_load_result_flat_revision() -> None:
    packed = {
        "fileName": "legacy.pdf",
        "pages": [
            {
                "groups": [
                    {
                        "lineWidth": 1,
                        "points": [],
                        "paths": [[[0, 0], False, [[[1, 1], None, None]]]],
                    }
                ]
            }
        ],
    }

    result = load_result(msgpack.packb(packed), "flat")

    curve = result.pages[0].groups[0].paths[0].curves[0]
    assert curve.steps[0].end_point.x == 1
