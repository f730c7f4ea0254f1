"""Core IR, clock codec, normalizer and lowering engine.

WHY: The core package is the dialect-neutral heart of the converter.
Every dialect module depends on it; it depends on no dialect.

HOW: ir.py defines the playlist tree, clock.py the duration grammars,
normalizer.py the structural clean-up pass, capabilities.py and
lowering.py the capability-checked export algorithm.

RULES:
- Pure, synchronous transformations; no I/O and no logging here
- IR dataclasses are the contract between importers and exporters
"""
