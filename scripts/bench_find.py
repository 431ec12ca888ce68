# /// script
# dependencies = [
#   "rawstr"
# ]
# ///
"""
RawStr find operations benchmark script.

This script benchmarks search operations over platform strings using different backends:
- Python's built-in `bytes.find()` and `bytes.rfind()`, blind to UTF-8 validity
- RawStr's `match_indices()` and `rmatch_indices()`, searching inside valid UTF-8 sections only
- Regular expressions with `re.finditer()` over the lossily decoded text
- RawStr's character-set patterns

The haystack can be salted with invalid bytes to measure the cost of sectioning.

Example usage via UV:

    # Benchmark with a file
    uv run --no-project scripts/bench_find.py --haystack-path leipzig1M.txt

    # Benchmark with synthetic data, one invalid byte every 1000
    uv run --no-project scripts/bench_find.py --haystack-pattern "hello world " --haystack-length 1000000 --invalid-every 1000
"""

import argparse
import re
import random
import time
from typing import List

from rawstr import RawStr


def log(name: str, haystack, patterns, operator: callable):
    a = time.time_ns()
    for pattern in patterns:
        operator(haystack, pattern)
    b = time.time_ns()
    bytes_length = len(haystack) * len(patterns)
    secs = (b - a) / 1e9
    gb_per_sec = bytes_length / (1e9 * secs)
    print(f"{name}: took {secs:.4f} seconds ~ {gb_per_sec:.3f} GB/s")


def find_all(haystack: bytes, pattern: str) -> int:
    needle = pattern.encode("utf-8")
    count, start = 0, 0
    while True:
        index = haystack.find(needle, start)
        if index == -1:
            break
        count += 1
        start = index + 1
    return count


def rfind_all(haystack: bytes, pattern: str) -> int:
    needle = pattern.encode("utf-8")
    count, start = 0, len(haystack) - 1
    while True:
        index = haystack.rfind(needle, 0, start + 1)
        if index == -1:
            break
        count += 1
        start = index - 1
    return count


def match_all(haystack: RawStr, pattern) -> int:
    return sum(1 for _ in haystack.match_indices(pattern))


def rmatch_all(haystack: RawStr, pattern) -> int:
    return sum(1 for _ in haystack.rmatch_indices(pattern))


def find_all_regex(haystack: str, characters: str) -> int:
    regex_matcher = re.compile(f"[{characters}]")
    count = 0
    for _ in re.finditer(regex_matcher, haystack):
        count += 1
    return count


def log_functionality(tokens: List[str], pythonic_bytes: bytes, raw_str: RawStr):
    # Read-only search
    log("bytes.find", pythonic_bytes, tokens, find_all)
    log("RawStr.match_indices", raw_str, tokens, match_all)
    log("bytes.rfind", pythonic_bytes, tokens, rfind_all)
    log("RawStr.rmatch_indices", raw_str, tokens, rmatch_all)

    # Character sets
    whitespace = " \t\n\r"
    log("re.finditer", pythonic_bytes.decode("utf-8", "replace"), [whitespace], find_all_regex)
    log("RawStr.match_indices(set)", raw_str, [frozenset(whitespace)], match_all)
    log("RawStr.match_indices(str.isspace)", raw_str, [str.isspace], match_all)


def salt(data: bytes, invalid_every: int) -> bytes:
    """Replaces every `invalid_every`-th byte with a stray continuation byte."""
    salted = bytearray(data)
    for offset in range(invalid_every - 1, len(salted), invalid_every):
        salted[offset] = 0x80
    return bytes(salted)


def bench(
    haystack_path: str = None,
    haystack_pattern: str = None,
    haystack_length: int = None,
    invalid_every: int = None,
):
    """Run raw string search benchmarks."""
    if haystack_path:
        with open(haystack_path, "rb") as f:
            pythonic_bytes: bytes = f.read()
    else:
        haystack_length = int(haystack_length)
        repetitions = haystack_length // len(haystack_pattern)
        pythonic_bytes: bytes = (haystack_pattern * repetitions).encode("utf-8")

    if invalid_every:
        pythonic_bytes = salt(pythonic_bytes, invalid_every)

    raw_str = RawStr(pythonic_bytes, encoding="posix")
    sections = sum(1 for _ in raw_str.utf8_sections())
    tokens = pythonic_bytes.decode("utf-8", "replace").split()
    tokens = [token for token in tokens if "�" not in token]
    total_tokens = len(tokens)
    mean_token_length = sum(len(t) for t in tokens) / total_tokens

    print(f"Prepared {total_tokens:,} tokens of {mean_token_length:.2f} mean length in {sections:,} sections!")

    tokens = random.sample(tokens, min(100, total_tokens))
    log_functionality(tokens, pythonic_bytes, raw_str)


_main_epilog = """
Examples:

  # Benchmark with a file
  %(prog)s --haystack-path leipzig1M.txt

  # Benchmark with synthetic data
  %(prog)s --haystack-pattern "hello world " --haystack-length 1000000
"""


def main():
    """Main entry point with argument parsing."""
    parser = argparse.ArgumentParser(
        description="Benchmark RawStr find operations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=_main_epilog,
    )

    parser.add_argument("--haystack-path", help="Path to input file")
    parser.add_argument("--haystack-pattern", help="Pattern to repeat for synthetic data")
    parser.add_argument("--haystack-length", type=int, help="Length of synthetic haystack")
    parser.add_argument("--invalid-every", type=int, help="Salt the haystack with one invalid byte every N bytes")

    args = parser.parse_args()

    if args.haystack_path:
        if args.haystack_pattern or args.haystack_length:
            parser.error("Cannot specify both --haystack-path and synthetic options")
    else:
        if not (args.haystack_pattern and args.haystack_length):
            parser.error("Must specify either --haystack-path or both --haystack-pattern and --haystack-length")

    bench(args.haystack_path, args.haystack_pattern, args.haystack_length, args.invalid_every)


if __name__ == "__main__":
    main()
