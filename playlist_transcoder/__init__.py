"""Playlist Transcoder: convert between XML playlist dialects.

WHY: ASX, SMIL, WPL, RMP and Hypetape playlists all describe "play
these items, in this order, maybe repeated", yet every player reads a
different XML dialect with different expressive power. Converting pair
by pair would need twenty converters; converting through one generic
tree needs five importers and five exporters.

HOW: lxml binds XML text to a typed model per dialect. Importers turn
a model into the IR tree; exporters lower the normalized tree into the
target model, checked against the target's capability table.

RULES:
- Every conversion passes through the IR in core/ir.py
- Adding a dialect = one model module, one XML adapter, one dialect
  class registered in dialects/__init__.py; no core changes
- A construct the target cannot express fails the conversion loudly
"""

__version__ = "0.1.0"
