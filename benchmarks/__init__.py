"""
Benchmark suite for jsonsink.

Compares parsing and writing against other JSON libraries:
- Python standard library json
- orjson (C-optimized)
- ujson (ultra-fast JSON)

Also measures lenient parsing, streaming reformatting and peak memory.
"""
