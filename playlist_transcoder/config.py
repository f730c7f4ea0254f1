"""Configuration constants and .env loading.

WHY: Output encoding, indentation and the generator name written into
exported playlists are deployment choices, not code. Keeping them as
plain module-level values makes them easy to find and to override.

HOW: python-dotenv loads the .env file on import. Each setting reads an
environment variable with a hard-coded default.

RULES:
- DEFAULT_ENCODING applies when a caller passes no encoding (read and write)
- XML_INDENT controls pretty-printing of serialized playlists
- GENERATOR is written into RMP provider info and the WPL Generator meta
- All defaults can be overridden via environment variables
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

from playlist_transcoder import __version__

# Load .env from the project root (where the script is run from)
load_dotenv()

DEFAULT_ENCODING = os.getenv("PLAYLIST_DEFAULT_ENCODING", "UTF-8")
XML_INDENT = os.getenv("PLAYLIST_XML_INDENT", "true").lower() == "true"

GENERATOR_NAME = os.getenv("PLAYLIST_GENERATOR_NAME", "playlist_transcoder")
GENERATOR = "{} v{}".format(GENERATOR_NAME, __version__)
"""Human-readable producer string, e.g. "playlist_transcoder v0.1.0"."""

GENERATOR_URL = os.getenv("PLAYLIST_GENERATOR_URL", "")

# ---------------------------------------------------------------------------
# Dialect constants
# ---------------------------------------------------------------------------

ASX_PLAYLIST_EXTENSIONS: tuple[str, ...] = (".asx", ".wmx", ".wvx", ".wax")
"""Locators ending with these are written as ASX <entryref> elements."""

RMP_DEFAULT_LOCATION = "%f"
"""RMP server location template used when a package has no server info."""

RMP_DEFAULT_ACTION = "import,replace"
