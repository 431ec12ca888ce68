#!/usr/bin/env python3

import argparse
import sys

import rawstr
from rawstr import RawStr


def parse_arguments():
    parser = argparse.ArgumentParser(
        description="Output pieces of FILE to PREFIX0, PREFIX1, ...; default size is 1000 lines, and default PREFIX is 'x'. "
        "The file does not have to be valid UTF-8."
    )
    parser.add_argument("file", nargs="?", default="-", help='File to process, "-" for standard input')
    parser.add_argument("prefix", nargs="?", default="x", help='Output file prefix, default is "x"')
    parser.add_argument(
        "-l",
        "--lines",
        type=int,
        default=1000,
        help="Number of lines per output file, default is 1000",
    )
    parser.add_argument(
        "-t",
        "--separator",
        default="\n",
        help="Use SEP instead of newline as the record separator; '\\0' (zero) specifies the NUL character",
    )
    parser.add_argument(
        "-n",
        "--number",
        type=int,
        default=None,
        help="Generate N output files based on size of input",
    )
    parser.add_argument("--version", action="version", version=rawstr.__version__)
    return parser.parse_args()


def read_contents(file_path) -> bytes:
    if file_path == "-":
        return sys.stdin.buffer.read()
    with open(file_path, "rb") as f:
        return f.read()


def record_boundaries(contents: RawStr, separator: str, lines_per_file: int):
    """Yields the byte offset just past every `lines_per_file`-th separator, then the end of the contents."""
    seen = 0
    for match in contents.match_indices(separator):
        seen += 1
        if seen == lines_per_file:
            seen = 0
            yield match.offset + len(match.text.encode("utf-8"))
    yield len(contents)


def write_piece(data: bytes, start: int, end: int, output_path: str):
    with open(output_path, "wb") as f:
        f.write(data[start:end])


def split_file(file_path, lines_per_file, output_prefix, separator, number_of_files):
    try:
        if separator == "\\0":
            separator = "\0"
        if not separator:
            raise ValueError("The separator must not be empty")
        if lines_per_file <= 0:
            raise ValueError(f"Invalid number of lines: {lines_per_file}")
        if number_of_files is not None and number_of_files <= 0:
            raise ValueError(f"Invalid number of files: {number_of_files}")
        data = read_contents(file_path)
        contents = RawStr(data, encoding="posix")

        if number_of_files is not None:
            total_length = len(contents)
            chunk_size = total_length // number_of_files
            for file_part in range(number_of_files):
                start = file_part * chunk_size
                end = start + chunk_size if file_part < number_of_files - 1 else total_length
                write_piece(data, start, end, f"{output_prefix}{file_part}")
            return

        file_part = 0
        current_position = 0
        for boundary in record_boundaries(contents, separator, lines_per_file):
            if boundary > current_position:
                write_piece(data, current_position, boundary, f"{output_prefix}{file_part}")
                file_part += 1
                current_position = boundary

    except FileNotFoundError:
        print(f"No such file: {file_path}")
    except (OSError, ValueError) as e:
        print(f"An error occurred: {e}")
        print("Usage example: rawstr_split [-l LINES] [file] [prefix]")


def main():
    args = parse_arguments()
    split_file(args.file, args.lines, args.prefix, args.separator, args.number)


if __name__ == "__main__":
    main()
