"""
Projection of global metadata properties onto a Tag.

Each Tag field reads from an ordered chain of property names; the first name
present in the properties wins, even if its value is empty.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from ffmeta.models import Tag

# Tag field -> ffmetadata property names, in priority order
TAG_PROPERTY_MAP: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "album": ("album",),
        "sort_album": ("sort_album",),
        "sort_title": ("sort_name",),
        "sort_artist": ("sort_artist",),
        "writer": ("writer", "composer"),
        "genre": ("genre",),
        "copyright": ("copyright",),
        "encoded_by": ("encoded_by",),
        "title": ("title",),
        "language": ("language",),
        "artist": ("artist",),
        "album_artist": ("album_artist",),
        "performer": ("performer",),
        "disk": ("disc",),
        "publisher": ("publisher",),
        "track": ("track",),
        "encoder": ("encoder",),
        "lyrics": ("lyrics",),
        "year": ("date",),
        "description": ("description",),
        "long_description": ("longdesc", "synopsis"),
    }
)


def lookup(properties: Mapping[str, str], names: tuple[str, ...]) -> str | None:
    """First value among ``names`` present in ``properties``."""
    for name in names:
        if name in properties:
            return properties[name]
    return None


def project_tag(properties: Mapping[str, str]) -> Tag:
    """Build a Tag from lower-cased metadata properties."""
    return Tag(**{field: lookup(properties, names) for field, names in TAG_PROPERTY_MAP.items()})
