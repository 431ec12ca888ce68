import time

import fire

from rawstr import RawStr


def log_duration(name: str, func: callable):
    a = time.time_ns()
    func()
    b = time.time_ns()
    secs = (b - a) / 1e9
    print(f"{name}: took {secs:} seconds")


def log_functionality(pattern: str, pythonic_bytes: bytes, raw_str: RawStr):
    needle = pattern.encode("utf-8")

    log_duration("Find match in bytes", lambda: needle in pythonic_bytes)
    log_duration("Find match in RawStr", lambda: raw_str.contains(pattern))
    log_duration("Find raw match in RawStr", lambda: raw_str.contains_raw(needle))

    log_duration("Count matches in bytes", lambda: pythonic_bytes.count(needle))
    log_duration("Count matches in RawStr", lambda: raw_str.count(pattern))

    log_duration("Split bytes", lambda: pythonic_bytes.split(needle))
    log_duration("Split RawStr", lambda: list(raw_str.split(pattern)))
    log_duration("Reverse split RawStr", lambda: list(raw_str.rsplit(pattern)))

    log_duration("Decode lossy bytes", lambda: pythonic_bytes.decode("utf-8", "replace"))
    log_duration("Partition RawStr into sections", lambda: list(raw_str.utf8_sections()))


def bench(path: str, pattern: str):
    """Compares `bytes` built-ins with their `RawStr` counterparts on the contents of `path`."""
    with open(path, "rb") as f:
        pythonic_bytes: bytes = f.read()
    raw_str = RawStr(pythonic_bytes, encoding="posix")

    log_functionality(pattern, pythonic_bytes, raw_str)


if __name__ == "__main__":
    fire.Fire(bench)
