"""GraphQL documents used by the client."""

SEARCH_TRACKS_FOR_SEEDS_QUERY = """
query SearchTracksForSeeds($query: String!, $limit: Int) {
  searchTracks(query: $query, limit: $limit) {
    id
    title
    durationMs
    formattedDuration
    genres
    album {
      id
      title
      coverArtUrl
    }
    artist {
      id
      name
    }
  }
}
""".strip()

CREATE_PLAYLIST_MUTATION = """
mutation CreatePlaylist($input: CreatePlaylistInput!) {
  createPlaylist(input: $input) {
    id
    name
    description
    isPublic
    playlistType
    trackCount
  }
}
""".strip()

PLAYLIST_SMART_RULES_QUERY = """
query PlaylistWithSmartRules($id: ID!) {
  playlist(id: $id) {
    id
    name
    description
    isPublic
    playlistType
    trackCount
    updatedAt
    smartRules {
      matchMode
      rules {
        field
        operator
        value
      }
      limit
      sortBy
      sortOrder
    }
  }
}
""".strip()

UPDATE_PLAYLIST_MUTATION = """
mutation UpdatePlaylist($id: ID!, $input: UpdatePlaylistInput!) {
  updatePlaylist(id: $id, input: $input) {
    id
    name
    description
    isPublic
    playlistType
    trackCount
    updatedAt
  }
}
""".strip()

REFRESH_SMART_PLAYLIST_MUTATION = """
mutation RefreshSmartPlaylist($id: ID!) {
  refreshSmartPlaylist(id: $id) {
    id
    trackCount
    totalDurationMs
    formattedDuration
    updatedAt
  }
}
""".strip()
