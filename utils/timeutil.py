import time

def now_stamp() -> str:
    return time.strftime("%Y-%m-%d %H:%M:%S")

def elapsed_ms(start: float, end: float | None = None) -> float:
    """Milliseconds between two time.perf_counter() readings (end defaults to now)."""
    if end is None:
        end = time.perf_counter()
    return (end - start) * 1000.0
