"""Tests for the smartlist command line."""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from smartlist import cli
from smartlist.api.exceptions import APIConnectionError, ResponseValidationError
from smartlist.api.schemas import (
    CreatePlaylistResult,
    RefreshPlaylistResult,
    SmartPlaylistDetail,
    TrackResult,
    UpdatePlaylistResult,
)
from smartlist.core.config import ApiConfig, Config, LimitsConfig


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.delenv("SMARTLIST_API_URL", raising=False)
    monkeypatch.delenv("SMARTLIST_API_TOKEN", raising=False)


@pytest.fixture
def rules_file(tmp_path: Path) -> Path:
    path = tmp_path / "rules.json"
    path.write_text(
        json.dumps(
            {
                "matchMode": "all",
                "rules": [{"field": "genre", "operator": "contains", "value": "ambient"}],
                "limit": 25,
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def config() -> Config:
    return Config()


class TestValidate:
    def test_valid_file_prints_payload(self, rules_file, config, capsys):
        assert cli.run_validate(rules_file, config) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["limit"] == 25
        assert "sortBy" not in payload

    def test_invalid_rule(self, tmp_path, config, capsys):
        path = tmp_path / "bad.json"
        path.write_text(
            json.dumps({"rules": [{"field": "genre", "operator": "contains", "value": ""}]}),
            encoding="utf-8",
        )
        assert cli.run_validate(path, config) == 1
        assert "rules.0.value" in capsys.readouterr().err

    def test_not_json(self, tmp_path, config, capsys):
        path = tmp_path / "bad.json"
        path.write_text("{nope", encoding="utf-8")
        assert cli.run_validate(path, config) == 1
        assert "JSON" in capsys.readouterr().err

    def test_non_string_sort_field(self, tmp_path, config, capsys):
        path = tmp_path / "bad.json"
        path.write_text(
            json.dumps(
                {
                    "rules": [{"field": "genre", "operator": "contains", "value": "x"}],
                    "sortBy": ["title"],
                }
            ),
            encoding="utf-8",
        )
        assert cli.run_validate(path, config) == 1
        assert "sortBy" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, config):
        assert cli.run_validate(tmp_path / "missing.json", config) == 1

    def test_configured_limits_apply(self, rules_file):
        config = Config(limits=LimitsConfig(max_playlist_limit=10, default_playlist_limit=5))
        assert cli.run_validate(rules_file, config) == 1


class TestFields:
    def test_lists_fields(self, capsys):
        assert cli.run_fields() == 0
        out = capsys.readouterr().out
        assert "genre" in out
        assert "Similarity" in out


class TestSearch:
    def test_short_query_rejected(self, config):
        assert cli.run_search("a", config) == 1

    def test_prints_results(self, config, capsys):
        client = MagicMock()
        client.search_tracks.return_value = [TrackResult(id="t1", title="Olson")]
        with patch.object(cli, "GraphQLClient", return_value=client):
            assert cli.run_search("olson", config) == 0
        client.search_tracks.assert_called_once_with("olson", 10)
        assert "Olson" in capsys.readouterr().out

    def test_api_failure(self, config, capsys):
        client = MagicMock()
        client.search_tracks.side_effect = APIConnectionError("down")
        with patch.object(cli, "GraphQLClient", return_value=client):
            assert cli.run_search("olson", config) == 1
        assert "Search failed" in capsys.readouterr().err

    def test_bad_endpoint_url(self, capsys):
        config = Config(api=ApiConfig(endpoint="localhost:8080/graphql"))
        assert cli.run_search("olson", config) == 1
        assert "Search failed" in capsys.readouterr().err


class TestSubmit:
    def test_creates_playlist(self, rules_file, config, capsys):
        client = MagicMock()
        client.create_smart_playlist.return_value = CreatePlaylistResult(
            id="p1", name="Drift", track_count=25
        )
        with patch.object(cli, "GraphQLClient", return_value=client):
            code = cli.run_submit(rules_file, config, name="Drift", is_public=True)
        assert code == 0
        name, description, is_public, rule_set = client.create_smart_playlist.call_args.args
        assert (name, description, is_public) == ("Drift", "", True)
        assert rule_set.limit == 25
        assert "Drift" in capsys.readouterr().out

    def test_blank_name_never_submitted(self, rules_file, config):
        with patch.object(cli, "GraphQLClient") as client_cls:
            assert cli.run_submit(rules_file, config, name="  ") == 1
        client_cls.assert_not_called()

    def test_api_failure(self, rules_file, config):
        client = MagicMock()
        client.create_smart_playlist.side_effect = APIConnectionError("down")
        with patch.object(cli, "GraphQLClient", return_value=client):
            assert cli.run_submit(rules_file, config, name="Drift") == 1


class TestMain:
    def test_no_subcommand_exits_1(self):
        with pytest.raises(SystemExit) as exc_info:
            cli.main([])
        assert exc_info.value.code == 1

    def test_validate_exit_code(self, rules_file, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["--config", str(tmp_path / "none.toml"), "validate", str(rules_file)])
        assert exc_info.value.code == 0

    def test_submit_requires_name(self, rules_file):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["submit", str(rules_file)])
        assert exc_info.value.code == 2

    def test_update_visibility_flags(self):
        parser = cli.build_parser()
        assert parser.parse_args(["update", "p1", "f.json"]).is_public is None
        assert parser.parse_args(["update", "p1", "f.json", "--public"]).is_public is True
        assert parser.parse_args(["update", "p1", "f.json", "--private"]).is_public is False


class TestPull:
    def test_prints_rules(self, rules_file, config, capsys):
        client = MagicMock()
        client.get_smart_playlist.return_value = (
            SmartPlaylistDetail(id="p1", name="Drift"),
            cli.load_rule_set(rules_file),
        )
        with patch.object(cli, "GraphQLClient", return_value=client):
            assert cli.run_pull("p1", config) == 0
        client.get_smart_playlist.assert_called_once_with("p1")
        payload = json.loads(capsys.readouterr().out)
        assert payload["rules"] == [{"field": "genre", "operator": "contains", "value": "ambient"}]
        assert payload["limit"] == 25

    def test_writes_file_that_validates(self, rules_file, tmp_path, config):
        client = MagicMock()
        client.get_smart_playlist.return_value = (
            SmartPlaylistDetail(id="p1", name="Drift"),
            cli.load_rule_set(rules_file),
        )
        output = tmp_path / "pulled.json"
        with patch.object(cli, "GraphQLClient", return_value=client):
            assert cli.run_pull("p1", config, output=output) == 0
        assert cli.run_validate(output, config) == 0

    def test_api_failure(self, config, capsys):
        client = MagicMock()
        client.get_smart_playlist.side_effect = ResponseValidationError("Playlist p1 not found")
        with patch.object(cli, "GraphQLClient", return_value=client):
            assert cli.run_pull("p1", config) == 1
        assert "not found" in capsys.readouterr().err


class TestUpdate:
    def test_saves_rules(self, rules_file, config, capsys):
        client = MagicMock()
        client.update_smart_playlist.return_value = UpdatePlaylistResult(id="p1", name="Drift")
        with patch.object(cli, "GraphQLClient", return_value=client):
            code = cli.run_update("p1", rules_file, config, is_public=False)
        assert code == 0
        playlist_id, rule_set, name, description, is_public = (
            client.update_smart_playlist.call_args.args
        )
        assert (playlist_id, name, description, is_public) == ("p1", None, None, False)
        assert rule_set.limit == 25
        assert "Updated" in capsys.readouterr().out

    def test_invalid_rules_never_sent(self, tmp_path, config):
        path = tmp_path / "bad.json"
        path.write_text(
            json.dumps({"rules": [{"field": "genre", "operator": "contains", "value": ""}]}),
            encoding="utf-8",
        )
        with patch.object(cli, "GraphQLClient") as client_cls:
            assert cli.run_update("p1", path, config) == 1
        client_cls.assert_not_called()

    def test_blank_name_never_sent(self, rules_file, config):
        with patch.object(cli, "GraphQLClient") as client_cls:
            assert cli.run_update("p1", rules_file, config, name=" ") == 1
        client_cls.assert_not_called()

    def test_api_failure(self, rules_file, config):
        client = MagicMock()
        client.update_smart_playlist.side_effect = APIConnectionError("down")
        with patch.object(cli, "GraphQLClient", return_value=client):
            assert cli.run_update("p1", rules_file, config) == 1


class TestRefresh:
    def test_reports_track_count(self, config, capsys):
        client = MagicMock()
        client.refresh_smart_playlist.return_value = RefreshPlaylistResult(id="p1", track_count=12)
        with patch.object(cli, "GraphQLClient", return_value=client):
            assert cli.run_refresh("p1", config) == 0
        assert "12 tracks" in capsys.readouterr().out

    def test_api_failure(self, config):
        client = MagicMock()
        client.refresh_smart_playlist.side_effect = APIConnectionError("down")
        with patch.object(cli, "GraphQLClient", return_value=client):
            assert cli.run_refresh("p1", config) == 1
