"""Shared pytest fixtures and sample tool output for ffmeta tests."""

from __future__ import annotations

import os
from collections.abc import Iterator
from unittest import mock

import pytest

from ffmeta.env_settings import clear_env_settings_cache

SAMPLE_METADATA = """\
;FFMETADATA1
major_brand=M4A
minor_version=512
compatible_brands=M4A isomiso2
title=The Long Road
artist=Jane Author
album_artist=Jane Author
album=The Long Road
composer=Jane Author
genre=Fantasy
date=2021
disc=1/1
track=1/1
description=A journey across\\
the mountains.
encoder=Lavf58.76.100
[CHAPTER]
TIMEBASE=1/1000
START=0
END=61500
title=Opening Credits
[CHAPTER]
TIMEBASE=1/1000
START=61500
END=1200000
title=Chapter 1
[CHAPTER]
TIMEBASE=1/1000
START=1200000
END=2400250
title=Chapter 2
"""

SAMPLE_STREAM_INFO = """\
Input #0, mov,mp4,m4a,3gp,3g2,mj2, from 'book.m4b':
  Metadata:
    major_brand     : M4A
    title           : The Long Road
  Duration: 00:40:00.25, start: 0.000000, bitrate: 128 kb/s
    Chapter #0:0: start 0.000000, end 61.500000
    Stream #0:0(und): Audio: aac (LC) (mp4a / 0x6134706D), 44100 Hz, stereo, fltp, 127 kb/s (default)
Output #0, ffmetadata, to 'book.txt':
size=       1kB time=00:39:59.98 bitrate=N/A speed= 900x
frame=    1 fps=0.0 q=-0.0 Lsize=N/A time=00:40:00.20 bitrate=N/A speed=1.2e+03x
"""


@pytest.fixture
def sample_metadata() -> str:
    return SAMPLE_METADATA


@pytest.fixture
def sample_stream_info() -> str:
    return SAMPLE_STREAM_INFO


@pytest.fixture(autouse=True)
def clean_env_settings() -> Iterator[None]:
    """Isolate tests from FFMETA_* / LOG_LEVEL in the caller's environment."""
    env = {k: v for k, v in os.environ.items() if not k.startswith("FFMETA_") and k != "LOG_LEVEL"}
    with mock.patch.dict(os.environ, env, clear=True):
        clear_env_settings_cache()
        yield
    clear_env_settings_cache()
