import os

def norm_abs_path(p: str) -> str:
    return os.path.abspath(os.path.normpath(p))

def ensure_parent(path: str) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)

def nearest_existing_dir(path: str) -> str:
    # Walk up from the containing directory until something exists
    d = os.path.dirname(norm_abs_path(path))
    while not os.path.isdir(d):
        parent = os.path.dirname(d)
        if parent == d:
            break
        d = parent
    return d

def file_size(path: str) -> int | None:
    try:
        return os.path.getsize(path)
    except OSError:
        return None
