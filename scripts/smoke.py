from __future__ import annotations

import json
import os
import sys
import tempfile
from pathlib import Path

import fitz

from vector_api.services.vector_client import VectorClient
from vector_api.settings import get_settings


def _make_smoke_pdf() -> bytes:
    doc = fitz.open()
    page = doc.new_page(width=400, height=400)
    page.draw_rect(fitz.Rect(50, 50, 350, 200), color=(0.1, 0.3, 0.6), fill=(0.1, 0.3, 0.6))
    page.draw_bezier(
        fitz.Point(60, 300),
        fitz.Point(120, 240),
        fitz.Point(280, 360),
        fitz.Point(340, 300),
        color=(0.8, 0.2, 0.2),
        width=2,
    )
    payload = doc.tobytes()
    doc.close()
    return payload


def main() -> int:
    settings = get_settings()
    if not settings.API_KEY:
        print("API_KEY is required for the smoke test", file=sys.stderr)
        return 1
    timeout_s = float(os.getenv("VECTOR_SMOKE_TIMEOUT_S", "120"))

    with tempfile.TemporaryDirectory() as tmp_dir:
        pdf_path = Path(tmp_dir) / "smoke.pdf"
        pdf_path.write_bytes(_make_smoke_pdf())
        with VectorClient(settings) as client:
            token = client.upload_pdf(pdf_path)
            result = client.wait_for_result(token, timeout=timeout_s)

    if result.file_name != "smoke.pdf" or len(result.pages) != 1:
        raise RuntimeError(f"Unexpected result for smoke.pdf: {result.file_name} pages={len(result.pages)}")
    curves = sum(len(path.curves) for group in result.pages[0].groups for path in group.paths)
    if curves == 0:
        raise RuntimeError("Smoke result has no curves")

    print(json.dumps({"status": "ok", "token": token, "groups": len(result.pages[0].groups), "curves": curves}))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
