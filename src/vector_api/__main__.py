from __future__ import annotations

from vector_api.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
