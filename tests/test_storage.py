import json
import threading

import pytest

from shopcommon.storage import JsonListStore, MemoryListStore, ParseError, StoreError


def seed():
    return [{"id": "1", "name": "Widget"}, {"id": "2", "name": "Gadget"}]


def test_ensure_creates_directory_and_seeds(tmp_path):
    path = tmp_path / "nested" / "data" / "products.json"
    store = JsonListStore(path, seed=seed)
    store.ensure()
    assert path.exists()
    assert json.loads(path.read_text(encoding="utf-8")) == seed()


def test_ensure_does_not_overwrite_existing_file(tmp_path):
    path = tmp_path / "products.json"
    path.write_text('[{"id": "9"}]', encoding="utf-8")
    store = JsonListStore(path, seed=seed)
    store.ensure()
    store.ensure()
    assert store.load() == [{"id": "9"}]


def test_seed_accepts_plain_sequence(tmp_path):
    store = JsonListStore(tmp_path / "products.json", seed=seed())
    assert store.load() == seed()


def test_missing_seed_writes_empty_array(tmp_path):
    store = JsonListStore(tmp_path / "products.json")
    assert store.load() == []


def test_round_trip_preserves_order_and_fields(tmp_path):
    path = tmp_path / "products.json"
    store = JsonListStore(path)
    items = [
        {"id": "b", "name": "Café Crème", "price": 3.5, "inventory": 2},
        {"id": "a", "name": "Tea", "price": 2.0, "inventory": 0, "imageUrl": ""},
    ]
    store.save(items)
    assert store.load() == items

    raw = path.read_text(encoding="utf-8")
    assert "Café Crème" in raw
    assert raw.startswith("[\n  {")
    assert not path.with_suffix(".json.tmp").exists()


def test_invalid_json_raises_parse_error(tmp_path):
    path = tmp_path / "products.json"
    path.write_text("{corrupt", encoding="utf-8")
    with pytest.raises(ParseError):
        JsonListStore(path).load()


@pytest.mark.parametrize("payload", ['{"bad": true}', "[1, 2]", '"text"'])
def test_wrong_shape_raises_parse_error(tmp_path, payload):
    path = tmp_path / "products.json"
    path.write_text(payload, encoding="utf-8")
    with pytest.raises(ParseError):
        JsonListStore(path).load()


def test_empty_file_raises_parse_error(tmp_path):
    path = tmp_path / "products.json"
    path.write_text("", encoding="utf-8")
    store = JsonListStore(path, seed=seed)
    with pytest.raises(ParseError):
        store.load()
    with pytest.raises(ParseError):
        store.mutate(lambda items: items + [{"id": "3"}])
    assert path.read_text(encoding="utf-8") == ""


@pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
def test_non_finite_numbers_are_not_written(tmp_path, value):
    path = tmp_path / "products.json"
    store = JsonListStore(path, seed=seed)
    store.ensure()
    before = path.read_bytes()
    with pytest.raises(StoreError):
        store.save([{"id": "1", "price": value}])
    assert path.read_bytes() == before
    assert not path.with_suffix(".json.tmp").exists()


def test_unwritable_location_raises_store_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    store = JsonListStore(blocker / "products.json", seed=seed)
    with pytest.raises(StoreError):
        store.load()


def test_mutate_returning_none_skips_write(tmp_path):
    path = tmp_path / "products.json"
    store = JsonListStore(path, seed=seed)
    store.ensure()
    before = path.read_bytes()
    store.mutate(lambda items: None)
    assert path.read_bytes() == before


def test_mutate_replaces_collection(tmp_path):
    store = JsonListStore(tmp_path / "products.json", seed=seed)
    result = store.mutate(lambda items: [item for item in items if item["id"] != "1"])
    assert result == [{"id": "2", "name": "Gadget"}]
    assert store.load() == result


def test_mutations_are_serialised(tmp_path):
    store = JsonListStore(tmp_path / "products.json")

    def append(n):
        def mutator(items):
            items.append({"id": str(n)})
            return items

        store.mutate(mutator)

    threads = [threading.Thread(target=append, args=(n,)) for n in range(20)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert sorted(int(item["id"]) for item in store.load()) == list(range(20))


def test_memory_store_hands_out_copies():
    store = MemoryListStore(seed())
    loaded = store.load()
    loaded[0]["name"] = "Changed"
    loaded.append({"id": "3"})
    assert store.load() == seed()

    store.save(loaded)
    assert len(store.load()) == 3
