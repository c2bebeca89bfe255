import importlib.util
import pathlib

TOOL = pathlib.Path(__file__).resolve().parents[1] / 'tools' / 'bench_parse.py'


def _load():
    spec = importlib.util.spec_from_file_location('bench_parse', TOOL)
    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)
    return mod


def test_keystroke_prefixes():
    mod = _load()
    assert mod.keystroke_prefixes('tom') == ['t', 'to', 'tom']


def test_bench_counts_every_keystroke(now):
    mod = _load()
    res = mod.bench(['ab', 'mon'], now, iterations=2)
    assert res['calls'] == 2 * (2 + 3)
    assert res['parse_p99'] >= res['parse_median'] >= 0
