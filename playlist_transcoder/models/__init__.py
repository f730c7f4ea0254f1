"""Typed object models, one module per playlist dialect.

WHY: Importers and exporters should reason about entries, repeats and
durations, not about XML nodes. Each dialect gets a dataclass graph
that mirrors its schema, with the dialect's own string codecs (duration
grammar, repeat encoding) next to the fields that use them.

RULES:
- Models are independent of the IR and of each other
- Models hold no parent pointers
- XML marshalling lives in playlist_transcoder.adapters, not here
"""
