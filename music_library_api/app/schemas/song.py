"""
Pydantic schemas for songs.

A song carries the performing group, its title, a free‑form release
date, the full lyric text (verses separated by newlines) and an
external link.  Release dates and links are stored as given; no
format is enforced.
"""

from typing import List

from pydantic import BaseModel, Field


class SongIn(BaseModel):
    """Schema for creating or fully replacing a song.

    Omitted fields default to the empty string, so an update always
    overwrites every field.  Any ``id`` in the payload is ignored.
    """

    group: str = Field("", description="Group or artist name")
    song: str = Field("", description="Song title")
    release_date: str = Field("", description="Release date, free form")
    text: str = Field("", description="Lyrics, one verse per line")
    link: str = Field("", description="External link to the song")


class SongRead(SongIn):
    """Schema for reading a song."""

    id: int


class LyricsPage(BaseModel):
    """A page of verses from a song's lyrics."""

    lyrics: List[str]


class Message(BaseModel):
    message: str
