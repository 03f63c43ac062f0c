import shutil
from stream_io.path_utils import ensure_parent

SNAPSHOT_CHUNK = 1024 * 1024

def snapshot_file(src: str, dst: str, chunk_bytes: int = SNAPSHOT_CHUNK) -> int:
    """Verbatim chunked copy of src into dst, keeping src's timestamps.

    Used for <destination>.backup snapshots; any existing dst is replaced.
    """
    ensure_parent(dst)
    copied = 0
    with open(src, "rb") as fsrc, open(dst, "wb") as fdst:
        for buf in iter(lambda: fsrc.read(chunk_bytes), b""):
            fdst.write(buf)
            copied += len(buf)
    shutil.copystat(src, dst, follow_symlinks=False)
    return copied
