import json

from paginated_table.services.view_config import (
    VIEW_CONFIG_VERSION,
    ViewConfig,
    load_view_config,
    save_view_config,
)


def test_defaults_apply_for_missing_keys():
    cfg = ViewConfig()
    assert cfg.get_int("pageSize", 10) == 25
    assert cfg.get_str("filterPresets") == "[]"
    assert cfg.get_bool("stickyHeader", False) is True
    assert cfg.get_list("filterableColumns") == []
    assert cfg.get("unknown", "fallback") == "fallback"


def test_typed_getters_parse_host_values():
    cfg = ViewConfig(
        {
            "pageSize": "50",
            "showFilterBar": "false",
            "stickyHeader": "true",
            "filterableColumns": ["status", "owner"],
            "columnOrder": '["b", "a"]',
        }
    )
    assert cfg.get_int("pageSize", 25) == 50
    assert cfg.get_bool("showFilterBar", True) is False
    assert cfg.get_bool("stickyHeader", False) is True
    assert cfg.get_list("filterableColumns") == ["status", "owner"]
    assert cfg.get_list("columnOrder") == ["b", "a"]


def test_unparseable_values_fall_back():
    cfg = ViewConfig({"pageSize": "lots", "columnOrder": "b, a"})
    assert cfg.get_int("pageSize", 25) == 25
    assert cfg.get_list("columnOrder") == ["b", "a"]


def test_set_notifies_writer():
    writes = []
    cfg = ViewConfig(on_write=lambda k, v: writes.append((k, v)))
    cfg.set("pageSize", "10")
    assert writes == [("pageSize", "10")]
    assert cfg.has("pageSize")


def test_persistence_round_trip(tmp_path):
    cfg = ViewConfig({"pageSize": "100", "columnOrder": ["x", "y"]})
    path = save_view_config(cfg, tmp_path)
    assert json.loads(path.read_text(encoding="utf-8"))["version"] == VIEW_CONFIG_VERSION
    loaded = load_view_config(tmp_path)
    assert loaded.get_int("pageSize", 25) == 100
    assert loaded.get_list("columnOrder") == ["x", "y"]


def test_corrupt_or_incompatible_file_loads_defaults(tmp_path):
    path = tmp_path / "table_view.json"
    path.write_text("{ not json", encoding="utf-8")
    assert load_view_config(tmp_path).to_dict()["values"] == {}
    path.write_text(json.dumps({"version": 99, "values": {"pageSize": "5"}}), encoding="utf-8")
    assert not load_view_config(tmp_path).has("pageSize")
    assert not load_view_config(tmp_path / "missing").has("pageSize")


def test_data_dir_env_override(tmp_path, monkeypatch):
    monkeypatch.setenv("PAGINATED_TABLE_DATA_DIR", str(tmp_path / "store"))
    path = save_view_config(ViewConfig({"pageSize": "10"}))
    assert path == tmp_path / "store" / "table_view.json"
    assert load_view_config().get_int("pageSize", 25) == 10
