import json

from paginated_table.services.json_store import read_document, store_path, write_document


def test_write_then_read(tmp_path):
    path = write_document(store_path("nested.json", tmp_path / "a" / "b"), {"version": 2, "x": 1})
    assert path == tmp_path / "a" / "b" / "nested.json"
    assert read_document(path, version=2) == {"version": 2, "x": 1}
    assert not path.with_name("nested.json.tmp").exists()


def test_read_is_fail_soft(tmp_path):
    path = tmp_path / "doc.json"
    assert read_document(path) is None
    path.write_text("{ broken", encoding="utf-8")
    assert read_document(path) is None
    path.write_text(json.dumps([1, 2]), encoding="utf-8")
    assert read_document(path) is None
    path.write_text(json.dumps({"version": 1}), encoding="utf-8")
    assert read_document(path, version=2) is None
    assert read_document(path) == {"version": 1}


def test_store_path_follows_env(tmp_path, monkeypatch):
    monkeypatch.setenv("PAGINATED_TABLE_DATA_DIR", str(tmp_path))
    assert store_path("x.json") == tmp_path / "x.json"
    assert store_path("x.json", tmp_path / "explicit") == tmp_path / "explicit" / "x.json"
