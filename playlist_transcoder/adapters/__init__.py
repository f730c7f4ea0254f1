"""XML adapters: text ↔ dialect model, one module per dialect.

All adapters share xml_binding for decoding, ampersand repair, parsing
with clear errors and serialization. Each exposes read_<dialect>(data,
encoding=None) and write_<dialect>(model, encoding=None, indent=None).
"""
