from __future__ import annotations

import gzip
import logging
import zlib
from typing import Any

import msgpack

from vector_api.core.errors import PayloadDecodeError
from vector_api.schemas.vectors import VectorResult
from vector_api.services.compact_codec import PathRevision, decode_result

logger = logging.getLogger("vector_api.envelope")

GZIP_MAGIC = b"\x1f\x8b"


def _looks_like_zlib(body: bytes) -> bool:
    if len(body) < 2:
        return False
    cmf, flg = body[0], body[1]
    return cmf & 0x0F == 8 and cmf >> 4 <= 7 and (cmf << 8 | flg) % 31 == 0


def unwrap_payload(body: bytes) -> bytes:
    """Strip a gzip or zlib wrapper from a result body, if there is one.

    Bodies sent with an HTTP ``Content-Encoding`` are already inflated by
    httpx; this handles payloads compressed inside the response itself.
    """
    try:
        if body.startswith(GZIP_MAGIC):
            logger.debug("result payload is gzip wrapped bytes=%s", len(body))
            return gzip.decompress(body)
        if _looks_like_zlib(body):
            logger.debug("result payload is zlib wrapped bytes=%s", len(body))
            return zlib.decompress(body)
    except (OSError, EOFError, zlib.error) as exc:
        raise PayloadDecodeError(
            code="payload_decode_error",
            message="Result payload could not be decompressed",
            details={"error": exc.__class__.__name__, "bytes": len(body)},
        ) from exc
    return body


def unpack_payload(body: bytes) -> dict[str, Any]:
    raw = unwrap_payload(body)
    try:
        packed = msgpack.unpackb(raw, raw=False, strict_map_key=False)
    except ValueError as exc:
        raise PayloadDecodeError(
            code="payload_decode_error",
            message="Result payload is not valid msgpack",
            details={"error": exc.__class__.__name__, "bytes": len(raw)},
        ) from exc
    if not isinstance(packed, dict):
        raise PayloadDecodeError(
            code="payload_decode_error",
            message="Result payload is not a map",
            details={"type": type(packed).__name__},
        )
    return packed


def load_result(body: bytes, revision: PathRevision = "nested") -> VectorResult:
    result = decode_result(unpack_payload(body), revision)
    logger.info("vector result decoded file=%s pages=%s", result.file_name, len(result.pages))
    return result
