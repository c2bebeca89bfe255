"""Time tokenize() and suggest() the way the palette calls them: once per
keystroke, for every prefix of every sample line.

Usage: python tools/bench_parse.py [--file samples.txt] [--today 2024-06-12]
"""
from __future__ import annotations
import argparse
import sys
import time
from datetime import date
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from quickadd.suggestions import suggest  # noqa: E402
from quickadd.tokenizer import tokenize  # noqa: E402

DEFAULT_SAMPLES = [
    'Ship report #work @dev d/fri https://x.co',
    'renew license next week',
    'call mom next monday',
    'dentist 21st june #health',
    'pay rent d/tom tomorrow',
    'read https://example.com/page#section later',
]


def keystroke_prefixes(line: str) -> list[str]:
    return [line[:i] for i in range(1, len(line) + 1)]


def pctile(arr, p):
    arr = sorted(arr)
    return arr[min(int(len(arr) * p), len(arr) - 1)]


def bench(lines: list[str], today: date, iterations: int = 1) -> dict:
    parse_times = []
    suggest_times = []
    for _ in range(iterations):
        for line in lines:
            for prefix in keystroke_prefixes(line):
                t0 = time.perf_counter()
                tokenize(prefix, today=today)
                t1 = time.perf_counter()
                # the schedule palette only sees the last word typed
                suggest(prefix.split(' ')[-1], today=today)
                t2 = time.perf_counter()
                parse_times.append(t1 - t0)
                suggest_times.append(t2 - t1)
    return {
        'calls': len(parse_times),
        'parse_median': pctile(parse_times, 0.5) if parse_times else 0.0,
        'parse_p99': pctile(parse_times, 0.99) if parse_times else 0.0,
        'suggest_median': pctile(suggest_times, 0.5) if suggest_times else 0.0,
        'suggest_p99': pctile(suggest_times, 0.99) if suggest_times else 0.0,
    }


if __name__ == '__main__':
    p = argparse.ArgumentParser()
    p.add_argument('--file', help='one sample input per line (default: built-in samples)')
    p.add_argument('--today', type=date.fromisoformat, default=date.today())
    p.add_argument('--iterations', type=int, default=20)
    args = p.parse_args()
    if args.file:
        with open(args.file, 'r', encoding='utf-8') as f:
            lines = [l.rstrip('\n') for l in f if l.strip()]
    else:
        lines = DEFAULT_SAMPLES
    print(f'Loaded {len(lines)} sample lines')
    res = bench(lines, args.today, args.iterations)
    print(f"{res['calls']} keystrokes")
    print(f"tokenize median {res['parse_median'] * 1e6:.1f}us  p99 {res['parse_p99'] * 1e6:.1f}us")
    print(f"suggest  median {res['suggest_median'] * 1e6:.1f}us  p99 {res['suggest_p99'] * 1e6:.1f}us")
