"""
GraphQL API client.

Handles seed-track search and creating, loading, updating and refreshing
smart playlists against the configured endpoint.
"""

from typing import Any, Optional

import requests
from loguru import logger
from pydantic import ValidationError

from smartlist.core.config import ApiConfig
from smartlist.domain.playlists.rules import SmartRuleSet
from smartlist.domain.playlists.seeds import SeedTrack
from smartlist.domain.playlists.serialization import (
    create_playlist_input,
    rule_set_from_dict,
    update_playlist_input,
)

from .exceptions import (
    APIConnectionError,
    AuthenticationError,
    GraphQLError,
    ResponseValidationError,
    SmartlistAPIError,
)
from .queries import (
    CREATE_PLAYLIST_MUTATION,
    PLAYLIST_SMART_RULES_QUERY,
    REFRESH_SMART_PLAYLIST_MUTATION,
    SEARCH_TRACKS_FOR_SEEDS_QUERY,
    UPDATE_PLAYLIST_MUTATION,
)
from .schemas import (
    CreatePlaylistInput,
    CreatePlaylistResult,
    RefreshPlaylistResult,
    SmartPlaylistDetail,
    TrackResult,
    UpdatePlaylistInput,
    UpdatePlaylistResult,
)


class GraphQLClient:
    """Thin GraphQL client over a requests Session."""

    def __init__(
        self, config: ApiConfig, session: Optional[requests.Session] = None
    ) -> None:
        self.endpoint = config.endpoint
        self.timeout = config.timeout_seconds
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})
        if config.token:
            self.session.headers["Authorization"] = f"Bearer {config.token}"

    def execute(
        self, document: str, variables: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """Run a GraphQL document and return its data object.

        Raises:
            APIConnectionError: Network failure, timeout or unusable endpoint URL
            AuthenticationError: Endpoint answered 401/403
            GraphQLError: Response carried an errors list
            ResponseValidationError: Response body is not GraphQL JSON
            SmartlistAPIError: Any other HTTP error status
        """
        payload = {"query": document, "variables": variables or {}}
        try:
            response = self.session.post(
                self.endpoint, json=payload, timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.warning(f"API request to {self.endpoint} failed: {e}")
            raise APIConnectionError(f"Could not reach {self.endpoint}: {e}") from e

        if response.status_code in (401, 403):
            raise AuthenticationError(
                f"API rejected credentials (HTTP {response.status_code})"
            )

        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            logger.error(f"API returned HTTP {response.status_code}: {response.text[:200]}")
            raise SmartlistAPIError(f"HTTP {response.status_code} from API") from e

        try:
            body = response.json()
        except ValueError as e:
            raise ResponseValidationError("API response is not valid JSON") from e

        if not isinstance(body, dict):
            raise ResponseValidationError("API response is not a JSON object")

        errors = body.get("errors")
        if errors:
            messages = [
                err.get("message", str(err)) if isinstance(err, dict) else str(err)
                for err in errors
            ]
            logger.warning(f"GraphQL errors: {messages}")
            raise GraphQLError(messages)

        data = body.get("data")
        if not isinstance(data, dict):
            raise ResponseValidationError("API response has no data object")
        return data

    def search_tracks(self, query: str, limit: int = 10) -> list[TrackResult]:
        """Search the library for tracks to use as similarity seeds."""
        data = self.execute(
            SEARCH_TRACKS_FOR_SEEDS_QUERY, {"query": query, "limit": limit}
        )
        rows = data.get("searchTracks")
        if not isinstance(rows, list):
            raise ResponseValidationError("searchTracks did not return a list")
        try:
            results = [TrackResult.model_validate(row) for row in rows]
        except ValidationError as e:
            raise ResponseValidationError(f"Malformed track in search results: {e}") from e
        logger.debug(f"Seed search {query!r} returned {len(results)} tracks")
        return results

    def search_seed_tracks(self, query: str, limit: int = 10) -> list[SeedTrack]:
        return [result.to_seed_track() for result in self.search_tracks(query, limit)]

    def create_smart_playlist(
        self,
        name: str,
        description: str,
        is_public: bool,
        rule_set: SmartRuleSet,
    ) -> CreatePlaylistResult:
        """Submit a smart playlist to the matching engine."""
        payload = create_playlist_input(name, description, is_public, rule_set)
        try:
            playlist_input = CreatePlaylistInput.model_validate(payload)
        except ValidationError as e:
            # Editor output that fails here is a bug, not user error
            raise ValueError(f"Invalid playlist input: {e}") from e

        variables = {
            "input": playlist_input.model_dump(by_alias=True, exclude_unset=True)
        }
        data = self.execute(CREATE_PLAYLIST_MUTATION, variables)
        try:
            result = CreatePlaylistResult.model_validate(data.get("createPlaylist"))
        except ValidationError as e:
            raise ResponseValidationError(f"Malformed createPlaylist result: {e}") from e

        logger.info(f"Created smart playlist {result.name!r} (id={result.id})")
        return result

    def get_smart_playlist(
        self, playlist_id: str
    ) -> tuple[SmartPlaylistDetail, SmartRuleSet]:
        """Load a saved smart playlist and parse its rules for editing.

        Raises:
            ResponseValidationError: Playlist missing, not a smart playlist,
                or its saved rules are malformed
        """
        data = self.execute(PLAYLIST_SMART_RULES_QUERY, {"id": playlist_id})
        raw = data.get("playlist")
        if raw is None:
            raise ResponseValidationError(f"Playlist {playlist_id} not found")
        try:
            detail = SmartPlaylistDetail.model_validate(raw)
        except ValidationError as e:
            raise ResponseValidationError(f"Malformed playlist: {e}") from e

        if detail.playlist_type != "Smart" or detail.smart_rules is None:
            raise ResponseValidationError(
                f"Playlist {playlist_id} is not a smart playlist"
            )
        try:
            rule_set = rule_set_from_dict(detail.smart_rules)
        except ValueError as e:
            raise ResponseValidationError(f"Saved rules are malformed: {e}") from e

        logger.debug(f"Loaded {len(rule_set.rules)} rule(s) for playlist {playlist_id}")
        return detail, rule_set

    def update_smart_playlist(
        self,
        playlist_id: str,
        rule_set: SmartRuleSet,
        name: Optional[str] = None,
        description: Optional[str] = None,
        is_public: Optional[bool] = None,
    ) -> UpdatePlaylistResult:
        """Save edited rules (and optionally metadata) of a smart playlist."""
        payload = update_playlist_input(rule_set, name, description, is_public)
        try:
            playlist_input = UpdatePlaylistInput.model_validate(payload)
        except ValidationError as e:
            raise ValueError(f"Invalid playlist update: {e}") from e

        variables = {
            "id": playlist_id,
            "input": playlist_input.model_dump(by_alias=True, exclude_unset=True),
        }
        data = self.execute(UPDATE_PLAYLIST_MUTATION, variables)
        try:
            result = UpdatePlaylistResult.model_validate(data.get("updatePlaylist"))
        except ValidationError as e:
            raise ResponseValidationError(f"Malformed updatePlaylist result: {e}") from e

        logger.info(f"Updated smart playlist {result.name!r} (id={result.id})")
        return result

    def refresh_smart_playlist(self, playlist_id: str) -> RefreshPlaylistResult:
        """Re-evaluate a smart playlist's rules against the current library."""
        data = self.execute(REFRESH_SMART_PLAYLIST_MUTATION, {"id": playlist_id})
        try:
            result = RefreshPlaylistResult.model_validate(
                data.get("refreshSmartPlaylist")
            )
        except ValidationError as e:
            raise ResponseValidationError(
                f"Malformed refreshSmartPlaylist result: {e}"
            ) from e

        logger.info(f"Refreshed smart playlist {result.id} ({result.track_count} tracks)")
        return result
