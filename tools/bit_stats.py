#!/usr/bin/env python3
"""
Bit statistics for binary token files.

Decodes a file of 0/1 tokens and plots how often each bit position is set
and how the byte values are distributed.
"""

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path

import matplotlib
import numpy as np

from binary_codec import TOKEN_WIDTH, decode


@dataclass
class BitStats:
    """Per-position set frequency (MSB first) and byte histogram"""
    byte_count: int
    bit_frequency: np.ndarray
    histogram: np.ndarray


def compute_stats(payload: bytes) -> BitStats:
    data = np.frombuffer(payload, dtype=np.uint8)
    if data.size == 0:
        return BitStats(0, np.zeros(TOKEN_WIDTH), np.zeros(256, dtype=np.int64))

    bits = np.unpackbits(data).reshape(-1, TOKEN_WIDTH)
    return BitStats(
        byte_count=int(data.size),
        bit_frequency=bits.mean(axis=0),
        histogram=np.bincount(data, minlength=256),
    )


def plot_stats(stats: BitStats, title: str):
    import matplotlib.pyplot as plt

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(14, 5))
    fig.suptitle(f'{title} ({stats.byte_count} bytes)', fontsize=14, fontweight='bold')

    # 1. set frequency per bit position
    x_pos = np.arange(TOKEN_WIDTH)
    ax1.bar(x_pos, stats.bit_frequency, alpha=0.7, color='steelblue')
    ax1.set_xlabel('Bit position')
    ax1.set_ylabel('Fraction set')
    ax1.set_title('Bit Frequency')
    ax1.set_xticks(x_pos)
    ax1.set_xticklabels([f'b{7 - i}' for i in x_pos])
    ax1.set_ylim(0, 1)
    ax1.grid(axis='y', alpha=0.3)

    # 2. byte value histogram
    ax2.bar(np.arange(256), stats.histogram, width=1.0, color='orange')
    ax2.set_xlabel('Byte value')
    ax2.set_ylabel('Count')
    ax2.set_title('Byte Histogram')
    ax2.set_xlim(-0.5, 255.5)
    ax2.grid(alpha=0.3)

    plt.tight_layout()
    return fig


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Plot bit statistics of a binary token file")
    parser.add_argument('input', help="Token file produced by --encode")
    parser.add_argument('-o', '--output', help="PNG path (default: <input>.png)")
    parser.add_argument('--show', action='store_true', help="Open the plot window")
    args = parser.parse_args(argv)

    if not args.show:
        matplotlib.use('Agg')

    try:
        text = Path(args.input).read_bytes()
    except OSError as e:
        print(f"[ERROR] Cannot read input file: {args.input} ({e.strerror})", file=sys.stderr)
        return 1

    result = decode(text)
    if not result.ok:
        print(f"[ERROR] Input is not valid 8-bit binary chunks: {result.message}", file=sys.stderr)
        return 1

    stats = compute_stats(result.payload)
    print(f"Bytes: {stats.byte_count}")
    print("Bit frequency (b7..b0): " + " ".join(f"{f:.3f}" for f in stats.bit_frequency))

    fig = plot_stats(stats, Path(args.input).name)
    plot_file = args.output or f"{args.input}.png"
    fig.savefig(plot_file, dpi=150, bbox_inches='tight')
    print(f"📊 Plot saved to: {plot_file}")

    if args.show:
        import matplotlib.pyplot as plt
        plt.show()
    return 0


if __name__ == "__main__":
    sys.exit(main())
