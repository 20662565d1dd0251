#!/usr/bin/env python3
"""
BinScribe CLI - convert text files to binary 0/1 tokens and back.

    binscribe --encode input.txt output.bin
    binscribe --decode input.bin output.txt
    binscribe --menu
"""

import argparse
import os
import sys
from dataclasses import dataclass
from typing import Optional

from binary_codec import decode, encode

APPNAME = "BinScribe CLI"
VERSION = "0.1"
DESCRIPTION = "Lightweight cross-platform CLI utility that converts text <-> binary (0s and 1s)."
COPYRIGHT = "© 2025 Dalibor Klobučarić"
LICENSE = "MIT"

QUIET_ENV = "BINSCRIBE_QUIET"

USAGE = f"""{APPNAME} v{VERSION}

Usage:
  binscribe --about
  binscribe --encode <input.txt> <output.bin>
  binscribe --decode <input.bin> <output.txt>
  binscribe --menu

Description:
  --about    Show version and credits
  --encode   Read plain text and write binary (space-separated 8-bit chunks)
  --decode   Read binary 0/1 chunks and write plain text
  --menu     Start the interactive menu"""

MENU = """
  1) Encode a file
  2) Decode a file
  3) About
  4) Quit"""


class ConverterIOError(Exception):
    """Base for file-layer failures"""

    def __init__(self, path, reason=None):
        super().__init__(path)
        self.path = path
        self.reason = reason


class SourceReadError(ConverterIOError):
    pass


class SinkWriteError(ConverterIOError):
    pass


@dataclass
class ConversionResult:
    """Outcome of a file conversion, ready to be shown to the user"""
    ok: bool
    message: str
    detail: Optional[str] = None


def read_source(path):
    """Read a whole file into memory."""
    try:
        with open(path, 'rb') as f:
            return f.read()
    except OSError as e:
        raise SourceReadError(path, e.strerror) from e


def write_sink(path, data):
    """Write data to a file, replacing whatever was there."""
    try:
        with open(path, 'wb') as f:
            f.write(data)
    except OSError as e:
        raise SinkWriteError(path, e.strerror) from e


def encode_file(input_file, output_file):
    """Encode a text file to a binary token file."""
    try:
        payload = read_source(input_file)
        write_sink(output_file, encode(payload).encode('ascii'))
    except SourceReadError as e:
        return ConversionResult(False, f"Cannot read input file: {e.path}", e.reason)
    except SinkWriteError as e:
        return ConversionResult(False, f"Cannot write output file: {e.path}", e.reason)
    return ConversionResult(True, f"Encoded {input_file} -> {output_file}")


def decode_file(input_file, output_file):
    """Decode a binary token file to a text file. Nothing is written on bad input."""
    try:
        result = decode(read_source(input_file))
        if not result.ok:
            return ConversionResult(False, "Input is not valid 8-bit binary chunks.", result.message)
        write_sink(output_file, result.payload)
    except SourceReadError as e:
        return ConversionResult(False, f"Cannot read input file: {e.path}", e.reason)
    except SinkWriteError as e:
        return ConversionResult(False, f"Cannot write output file: {e.path}", e.reason)
    return ConversionResult(True, f"Decoded {input_file} -> {output_file}")


def _emit(text, out):
    # the stream may not cover the non-ASCII characters in COPYRIGHT or in paths
    encoding = getattr(out, "encoding", None) or "utf-8"
    print(text.encode(encoding, errors="replace").decode(encoding), file=out)


def report(result, quiet=False, out=None, err=None):
    """Print a conversion result and return the matching exit status."""
    out = out or sys.stdout
    err = err or sys.stderr
    if result.ok:
        if not quiet:
            _emit(f"[OK] {result.message}", out)
        return 0
    _emit(f"[ERROR] {result.message}", err)
    if result.detail:
        _emit(f"        {result.detail}", err)
    return 1


def print_about(out=None):
    _emit(
        f"{APPNAME} v{VERSION}\n"
        f"{DESCRIPTION}\n"
        f"{COPYRIGHT}\n"
        f"License: {LICENSE}",
        out or sys.stdout,
    )


def print_usage(out=None):
    print(USAGE, file=out or sys.stdout)


def _prompt(stdin, stdout, text):
    stdout.write(text)
    stdout.flush()
    line = stdin.readline()
    if not line:
        raise EOFError
    return line.strip()


def run_menu(stdin=None, stdout=None, quiet=False):
    """Interactive loop: pick an action, answer the path prompts, repeat."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    actions = {'1': encode_file, '2': decode_file}

    print(f"{APPNAME} v{VERSION}", file=stdout)
    try:
        while True:
            print(MENU, file=stdout)
            choice = _prompt(stdin, stdout, "> ").lower()
            if choice in actions:
                input_file = _prompt(stdin, stdout, "Input file: ")
                output_file = _prompt(stdin, stdout, "Output file: ")
                if not input_file or not output_file:
                    print("[ERROR] Missing arguments.", file=stdout)
                    continue
                report(actions[choice](input_file, output_file), quiet, out=stdout, err=stdout)
            elif choice == '3':
                print_about(stdout)
            elif choice in ('4', 'q', 'quit'):
                break
            else:
                print(f"[ERROR] Unknown choice: {choice}", file=stdout)
    except EOFError:
        print(file=stdout)
    return 0


def build_parser():
    parser = argparse.ArgumentParser(
        prog='binscribe',
        description="Encode TXT to space-separated 8-bit binary or decode it back",
    )
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--about', action='store_true', help="Show version and credits")
    group.add_argument('--encode', nargs='*', metavar='FILE', help="Encode <input> to <output>")
    group.add_argument('--decode', nargs='*', metavar='FILE', help="Decode <input> to <output>")
    group.add_argument('--menu', action='store_true', help="Start the interactive menu")
    return parser


def main(argv=None):
    parser = build_parser()
    args, unknown = parser.parse_known_args(argv)
    if unknown:
        _emit(f"[ERROR] Unknown command: {unknown[0]}\n", sys.stderr)
        print_usage(sys.stderr)
        return 1
    quiet = os.environ.get(QUIET_ENV, "0") == "1"

    if args.about:
        print_about()
        return 0
    if args.menu:
        return run_menu(quiet=quiet)

    if args.encode is not None:
        paths, convert = args.encode, encode_file
    elif args.decode is not None:
        paths, convert = args.decode, decode_file
    else:
        print_usage()
        return 0

    if len(paths) < 2:
        print("[ERROR] Missing arguments.\n", file=sys.stderr)
        print_usage(sys.stderr)
        return 1
    if len(paths) > 2:
        print(f"[ERROR] Unexpected arguments: {' '.join(paths[2:])}\n", file=sys.stderr)
        print_usage(sys.stderr)
        return 1

    return report(convert(paths[0], paths[1]), quiet)


if __name__ == "__main__":
    sys.exit(main())
