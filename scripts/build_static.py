from __future__ import annotations

import sys
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

sys.path.insert(0, str(BASE_DIR))

from blogfeed.build_static import main  # noqa: E402


if __name__ == "__main__":
    main()
