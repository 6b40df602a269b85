"""
Song endpoints for API v1.

These routes expose a CRUD API over the music library together with a
paginated view of a song's lyrics.  The ``SongService`` is taken from
the application state through a dependency, so handlers never reach
for a global database handle.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from pydantic import ValidationError

from music_library_api.app.core.pagination import DEFAULT_LIMIT, DEFAULT_OFFSET, parse_int
from music_library_api.app.schemas.song import LyricsPage, Message, SongIn, SongRead
from music_library_api.app.services.song_service import SongService

router = APIRouter()

SONG_NOT_FOUND = "Song not found"
INVALID_INPUT = "Invalid input"


def get_song_service(request: Request) -> SongService:
    """Return the service bound to this application's store."""
    return request.app.state.song_service


async def read_song_body(request: Request) -> SongIn:
    """Parse the request body into ``SongIn`` or fail with HTTP 400."""
    raw = await request.body()
    try:
        return SongIn.model_validate_json(raw)
    except ValidationError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_INPUT)


@router.get("", response_model=List[SongRead])
async def list_songs(
    group: Optional[str] = Query(None, description="Exact group name"),
    song: Optional[str] = Query(None, description="Exact song title"),
    limit: Optional[str] = Query(None, description="Maximum number of songs (default 10)"),
    offset: Optional[str] = Query(None, description="Number of songs to skip (default 0)"),
    service: SongService = Depends(get_song_service),
) -> List[SongRead]:
    """Return a filtered, paginated list of songs.

    ``group`` and ``song`` match exactly and are ignored when empty.
    Unparseable ``limit``/``offset`` values fall back to their defaults
    instead of failing the request.
    """
    return await service.list_songs(
        group=group,
        song=song,
        limit=parse_int(limit, DEFAULT_LIMIT),
        offset=parse_int(offset, DEFAULT_OFFSET),
    )


@router.get("/{song_id}/lyrics", response_model=LyricsPage)
async def get_song_lyrics(
    song_id: int,
    page: int = Query(..., ge=1, description="Page number, starting at 1"),
    per_page: int = Query(..., ge=1, description="Verses per page"),
    service: SongService = Depends(get_song_service),
) -> LyricsPage:
    """Return one page of a song's verses.

    Returns HTTP 404 if the song does not exist.
    """
    verses = await service.get_lyrics(song_id, page, per_page)
    if verses is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=SONG_NOT_FOUND)
    return LyricsPage(lyrics=verses)


@router.post("", response_model=SongRead, status_code=status.HTTP_201_CREATED)
async def create_song(
    song_in: SongIn,
    service: SongService = Depends(get_song_service),
) -> SongRead:
    """Add a new song to the library."""
    return await service.create_song(song_in)


@router.put(
    "/{song_id}",
    response_model=SongRead,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": SongIn.model_json_schema()}},
        }
    },
)
async def update_song(
    song_id: int,
    request: Request,
    service: SongService = Depends(get_song_service),
) -> SongRead:
    """Replace every field of an existing song.

    The song must exist (HTTP 404) before the body is validated
    (HTTP 400).  Omitted fields are overwritten with empty strings.
    """
    if await service.get_song(song_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=SONG_NOT_FOUND)
    song_in = await read_song_body(request)
    song = await service.update_song(song_id, song_in)
    if song is None:
        # Deleted between the lookup and the update.
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=SONG_NOT_FOUND)
    return song


@router.delete("/{song_id}", response_model=Message)
async def delete_song(
    song_id: int,
    service: SongService = Depends(get_song_service),
) -> Message:
    """Delete a song.  Succeeds whether or not the song existed."""
    await service.delete_song(song_id)
    return Message(message="Song deleted")
