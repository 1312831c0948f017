# audioprobe/common/path/safe.py
from __future__ import annotations

import os
from pathlib import Path


def path_exists(path: Path | str) -> bool:
    """
    True unless the path is definitely absent. Only "no such file" style
    errors count as missing; e.g. a permission error on stat() is left for the
    caller's next step to report.
    """
    try:
        os.stat(path)
    except (FileNotFoundError, NotADirectoryError):
        return False
    except ValueError:
        # embedded NUL byte; nothing by that name can exist
        return False
    except OSError:
        return True
    return True
