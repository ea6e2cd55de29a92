"""Interactive seed-track picker on a blessed terminal."""

from blessed import Terminal
from loguru import logger

from smartlist.core.config import Config
from smartlist.domain.playlists.search import SeedSearchBackend, SeedSearchController
from smartlist.domain.playlists.seeds import (
    SeedSelectionState,
    dropdown_visible,
    is_max_reached,
    selected_tracks,
)
from smartlist.domain.playlists.values import SimilarityValue
from smartlist.ui.keys.utils import parse_key


def render_lines(state: SeedSelectionState, config: Config) -> list[str]:
    """Plain-text frame for the picker (no terminal styling)."""
    limits = config.limits
    lines = [f"Seed tracks ({len(state.track_ids)}/{limits.max_seed_tracks})"]

    chips = selected_tracks(state)
    if chips:
        lines.extend(f"  • {t.title} - {t.artist_name}" for t in chips)
    else:
        lines.append("  (none selected)")
    lines.append("")

    if is_max_reached(state, limits):
        lines.append(f"Maximum of {limits.max_seed_tracks} seed tracks reached")
    lines.append(f"Search: {state.query}")

    if state.status_message:
        lines.append(f"  {state.status_message}")
    elif dropdown_visible(state, config.search.min_query_length):
        if state.is_loading and not state.results:
            lines.append("  Searching...")
        elif not state.results:
            lines.append(f"  No tracks found for '{state.search_query}'")
        for index, track in enumerate(state.results):
            marker = ">" if index == state.focused_index else " "
            taken = " ✓" if track.id in state.track_ids else ""
            lines.append(
                f"  {marker} {track.title} - {track.artist_name}"
                f" [{track.formatted_duration}]{taken}"
            )

    lines.append("")
    lines.append("↑/↓ move  Enter add  Backspace remove last  Esc clear  Ctrl+C done")
    return lines


def run_seed_picker(client: SeedSearchBackend, config: Config) -> SimilarityValue:
    """Run the picker until Ctrl+C and return the chosen seeds."""
    term = Terminal()
    controller = SeedSearchController(client, config.search, config.limits)
    last_frame: list[str] = []

    try:
        with term.fullscreen(), term.cbreak(), term.hidden_cursor():
            while True:
                state = controller.tick()
                frame = render_lines(state, config)
                if frame != last_frame:
                    print(term.home + term.clear + "\n".join(frame), end="", flush=True)
                    last_frame = frame

                key = term.inkey(timeout=0.05)
                if not key:
                    continue
                event = parse_key(key)
                if event["type"] == "ctrl_c":
                    break
                controller.handle_key(event)
    except KeyboardInterrupt:
        logger.debug("Seed picker interrupted")
    finally:
        controller.close()

    return controller.value
