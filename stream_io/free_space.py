import shutil

from stream_io.path_utils import nearest_existing_dir

def free_bytes(path: str) -> int:
    usage = shutil.disk_usage(path)
    return int(usage.free)

def free_bytes_for(dest_path: str) -> int:
    """Free space on the volume that will hold dest_path (which may not exist yet)."""
    return free_bytes(nearest_existing_dir(dest_path))
