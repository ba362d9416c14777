import posixpath
import re
from typing import Optional

_DRIVE = re.compile(r"^[A-Za-z]:")


# --- Helper: safe path normalize & reject traversal/abs paths ---
def _safe_normalize(p: str) -> Optional[str]:
    """
    Return a clean relative POSIX path, or None when the path is empty,
    absolute (including Windows drive paths) or escapes its root.
    """
    if not isinstance(p, str) or p.strip() == "":
        return None
    p = p.replace("\\", "/")
    # disallow absolute paths
    if p.startswith("/") or _DRIVE.match(p):
        return None
    clean = posixpath.normpath(p)
    if clean == "." or clean == ".." or clean.startswith("../"):
        return None
    return clean
