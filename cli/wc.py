#!/usr/bin/env python3

import sys, os
import argparse

import rawstr
from rawstr import RawStr


def parse_arguments():
    parser = argparse.ArgumentParser(
        description="Print newline, word, and byte counts for each FILE, and a total line if more than one FILE is \
        specified. A word is a non-zero-length sequence of characters delimited by white space. Invalid UTF-8 bytes \
        count as one character each."
    )
    parser.add_argument("files", nargs="*", default=["-"], help="Files to process")
    parser.add_argument("-c", "--bytes", action="store_true", help="print the byte counts")
    parser.add_argument("-m", "--chars", action="store_true", help="print the character counts")
    parser.add_argument("-l", "--lines", action="store_true", help="print the newline counts")
    parser.add_argument(
        "-L",
        "--max-line-length",
        action="store_true",
        help="print the maximum display width",
    )
    parser.add_argument("-w", "--words", action="store_true", help="print the word counts")
    parser.add_argument(
        "--files0-from",
        metavar="filename",
        help="Read input from the files specified by NUL-terminated names in file F;"
        " If F is - then read names from standard input",
    )

    parser.add_argument("--version", action="version", version=rawstr.__version__)
    return parser.parse_args()


def count_chars(contents: RawStr) -> int:
    """Characters of the valid sections, plus one per invalid byte between them."""
    chars = valid_bytes = 0
    for section in contents.utf8_sections():
        chars += len(section.text)
        valid_bytes += section.end - section.offset
    return chars + len(contents) - valid_bytes


def count_words(contents: RawStr) -> int:
    return sum(1 for piece in contents.split(str.isspace) if piece)


def wc(file_path, args):
    if file_path == "-":
        contents = RawStr(sys.stdin.buffer.read(), encoding="posix")
    else:
        try:
            with open(file_path, "rb") as f:
                contents = RawStr(f.read(), encoding="posix")
        except FileNotFoundError:
            return f"No such file: {file_path}", False

    counts = {}
    if args.lines:
        counts["line_count"] = contents.count("\n")
    if args.words:
        counts["word_count"] = count_words(contents)
    if args.chars:
        counts["char_count"] = count_chars(contents)
    if args.max_line_length:
        counts["max_line_length"] = max(count_chars(line) for line in contents.split("\n"))
    if args.bytes:
        counts["byte_count"] = len(contents)

    return counts, True


def format_output(counts, args, just):
    selected_counts = []
    if args.lines:
        selected_counts.append(counts["line_count"])
    if args.words:
        selected_counts.append(counts["word_count"])
    if args.chars:
        selected_counts.append(counts["char_count"])
    if args.bytes:
        selected_counts.append(counts["byte_count"])
    if args.max_line_length:
        selected_counts.append(counts.get("max_line_length", 0))

    return " ".join(str(count).rjust(just) for count in selected_counts)


def get_files_from(fn):
    with open(fn, "rb") as f:
        names = RawStr(f.read(), encoding="posix")
    return [os.fsdecode(bytes(name)) for name in names.split_terminator("\0") if os.path.isfile(bytes(name))]


def main():
    args = parse_arguments()
    total_counts = {
        "line_count": 0,
        "word_count": 0,
        "char_count": 0,
        "max_line_length": 0,
        "byte_count": 0,
    }
    if not any([args.lines, args.words, args.chars, args.bytes, args.max_line_length]):
        args.lines = True
        args.words = True
        args.bytes = True

    if args.files0_from:
        if args.files[0] == "-":
            args.files = get_files_from(args.files0_from)
            if len(args.files) == 0:
                sys.exit(0)

    # wc uses the file size to determine column width when printing
    just = max(len(str(os.stat(fn).st_size)) if os.path.isfile(fn) else 1 for fn in args.files)

    for file_path in args.files:
        counts, success = wc(file_path, args)
        if success:
            for key in total_counts.keys():
                if key == "max_line_length":
                    total_counts[key] = max(total_counts[key], counts.get(key, 0))
                else:
                    total_counts[key] += counts.get(key, 0)
            print(format_output(counts, args, just) + f" {file_path}")
        else:
            print(counts)

    if len(args.files) > 1:
        print(format_output(total_counts, args, just) + " total")


if __name__ == "__main__":
    main()
