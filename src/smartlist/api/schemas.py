"""Pydantic models for GraphQL payloads.

Responses are validated on the way in and mutation inputs on the way out.
Field names are snake_case in Python and camelCase on the wire.
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from smartlist.domain.playlists.seeds import SeedTrack


class AlbumRef(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str = ""
    cover_art_url: Optional[str] = None


class ArtistRef(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str = ""


class TrackResult(BaseModel):
    """One row of a seed-track search."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str
    duration_ms: int = 0
    formatted_duration: str = ""
    genres: list[str] = Field(default_factory=list)
    album: Optional[AlbumRef] = None
    artist: Optional[ArtistRef] = None

    def to_seed_track(self) -> SeedTrack:
        """Flatten into the display record cached by the seed selector."""
        return SeedTrack(
            id=self.id,
            title=self.title,
            artist_name=self.artist.name if self.artist else "",
            album_title=self.album.title if self.album else "",
            cover_art_url=self.album.cover_art_url if self.album else None,
            duration_ms=self.duration_ms,
            formatted_duration=self.formatted_duration,
            genres=tuple(self.genres),
        )


class SmartPlaylistRuleInput(BaseModel):
    field: str
    operator: str
    value: Any = None


class SmartPlaylistRulesInput(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    match_mode: Literal["all", "any"]
    rules: list[SmartPlaylistRuleInput] = Field(min_length=1)
    limit: int = Field(ge=1)
    sort_by: Optional[str] = None
    sort_order: Literal["asc", "desc"] = "desc"


class CreatePlaylistInput(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = Field(min_length=1)
    description: Optional[str] = None
    is_public: bool = False
    playlist_type: Literal["Smart"] = "Smart"
    smart_rules: SmartPlaylistRulesInput


class CreatePlaylistResult(BaseModel):
    """Playlist returned by the createPlaylist mutation."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    description: Optional[str] = None
    is_public: bool = False
    playlist_type: str = "Smart"
    track_count: Optional[int] = None


class UpdatePlaylistInput(BaseModel):
    """Input for updatePlaylist. Only the keys that were set are sent."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    is_public: Optional[bool] = None
    smart_rules: Optional[SmartPlaylistRulesInput] = None


class UpdatePlaylistResult(CreatePlaylistResult):
    """Playlist returned by the updatePlaylist mutation."""

    updated_at: Optional[str] = None


class RefreshPlaylistResult(BaseModel):
    """Re-materialized track list summary from refreshSmartPlaylist."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    track_count: Optional[int] = None
    total_duration_ms: Optional[int] = None
    formatted_duration: Optional[str] = None
    updated_at: Optional[str] = None


class SmartPlaylistDetail(BaseModel):
    """Saved playlist with its rules, as loaded back into the editor.

    smart_rules stays in wire form; serialization.rule_set_from_dict parses it.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    description: Optional[str] = None
    is_public: bool = False
    playlist_type: str = "Smart"
    track_count: Optional[int] = None
    updated_at: Optional[str] = None
    smart_rules: Optional[dict[str, Any]] = None
