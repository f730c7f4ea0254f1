"""Shared test fixtures for the playlist_transcoder test suite.

WHY: Importer, exporter and pipeline tests all need the same small but
realistic documents: mixed-case ASX with a bare ampersand, namespaced
SMIL with unknown elements, an RMP package with a location template.
Keeping them here means every module tests against the same inputs.

HOW: Module-level byte strings for the documents, plus fixtures that
return the IR trees those documents import to.

RULES:
- Documents are bytes, as read from disk
- Expected IR trees are rebuilt per test, so tests may not share state
"""

import pytest

from playlist_transcoder.core.ir import Media, Parallel, Sequence


# ---------------------------------------------------------------------------
# Sample documents
# ---------------------------------------------------------------------------

ASX_SAMPLE = b"""<ASX version="3.0">
  <Title>Road Trip</Title>
  <Param name="genre" value="rock"/>
  <Entry>
    <Ref HREF="http://example.com/a.mp3"/>
    <Duration value="00:03:25.5"/>
  </Entry>
  <Entry ClientSkip="no">
    <Ref href=""/>
    <Ref href="http://example.com/zero.mp3"><Duration value="00:00:00"/></Ref>
    <Ref href="http://example.com/b.mp3?x=1&y=2"/>
  </Entry>
  <Repeat count="2">
    <Entry><Ref href="c.wma"/></Entry>
  </Repeat>
  <Repeat>
    <EntryRef href="http://example.com/more.asx"/>
  </Repeat>
</ASX>
"""

SMIL_SAMPLE = b"""<?xml version="1.0" encoding="UTF-8"?>
<smil xmlns="http://www.w3.org/ns/SMIL">
  <head>
    <meta name="title" content="Demo"/>
    <layout>
      <region id="main" width="640" height="480"/>
      <region id="side"/>
    </layout>
  </head>
  <body region="main">
    <video src="intro.mp4" dur="90s" type="video/mp4"/>
    <seq repeatCount="2">
      <audio src="song.mp3" dur="media"/>
      <img src="slide.png" dur="5s" region="side"/>
    </seq>
    <par>
      <ref src="a.mp3" repeatCount="indefinite"/>
      <text src="caption.txt" dur="1:00:00"/>
    </par>
    <animate attributeName="x"/>
  </body>
</smil>
"""

WPL_SAMPLE = b"""<?wpl version="1.0"?>
<smil>
  <head>
    <meta name="Generator" content="Microsoft Windows Media Player -- 12.0"/>
    <meta name="ItemCount" content="2"/>
    <title>Favourites</title>
  </head>
  <body>
    <seq>
      <media src="..\\Music\\one.wma" tid="{A1}"/>
      <media src="two.mp3"/>
    </seq>
  </body>
</smil>
"""

RMP_SAMPLE = b"""<?xml version="1.0"?>
<PACKAGE>
  <TITLE>Mix</TITLE>
  <ACTION>import</ACTION>
  <TARGET>42</TARGET>
  <SERVER>
    <NETNAME>media.example.com</NETNAME>
    <LOCATION>/lists/%lid/%fid/%f</LOCATION>
  </SERVER>
  <TRACKLIST>
    <LISTID>7</LISTID>
    <TRACK>
      <TRACKID>1</TRACKID>
      <TITLE>One</TITLE>
      <FILENAME>one.rm</FILENAME>
      <SIZE>1024</SIZE>
      <DURATION>215</DURATION>
    </TRACK>
    <TRACK>
      <TRACKID>2</TRACKID>
      <FILENAME>two.rm</FILENAME>
      <IS_STREAMING>yes</IS_STREAMING>
    </TRACK>
  </TRACKLIST>
</PACKAGE>
"""

HYPETAPE_SAMPLE = b"""<playlist>
  <track id="1" name="First" mp3="http://example.com/first.mp3"/>
  <track id="2" name="No file"/>
  <track id="3" name="Second" mp3="http://example.com/second.mp3"/>
</playlist>
"""


# ---------------------------------------------------------------------------
# Expected IR trees
# ---------------------------------------------------------------------------

@pytest.fixture
def asx_sample_playlist():
    """IR imported from ASX_SAMPLE."""
    return Sequence(children=[
        Media("http://example.com/a.mp3", duration_ms=205500),
        Media("http://example.com/b.mp3?x=1&y=2"),
        Sequence(children=[Media("c.wma")], repeat_count=3),
        Sequence(children=[Media("http://example.com/more.asx")], repeat_count=-1),
    ])


@pytest.fixture
def smil_sample_playlist():
    """IR imported from SMIL_SAMPLE."""
    return Sequence(children=[
        Media("intro.mp4", duration_ms=90000, content_type="video/mp4"),
        Sequence(children=[
            Media("song.mp3"),
            Media("slide.png", duration_ms=5000),
        ], repeat_count=2),
        Parallel(children=[
            Media("a.mp3", repeat_count=-1),
            Media("caption.txt", duration_ms=3600000),
        ]),
    ])


@pytest.fixture
def flat_playlist():
    """Three untimed tracks, the shape every dialect can express."""
    return Sequence(children=[Media("one.mp3"), Media("two.mp3"), Media("three.mp3")])
