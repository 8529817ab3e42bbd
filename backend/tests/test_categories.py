import json

from petitbac.config import Config
from petitbac.game.categories import DEFAULT_CATEGORIES, CategorySource, clean_categories, pick_random


def test_without_file_pool_is_defaults():
    source = CategorySource()
    assert source.pool() == DEFAULT_CATEGORIES
    assert source.default_list() == DEFAULT_CATEGORIES


def test_missing_or_broken_file_falls_back(tmp_path):
    assert CategorySource(tmp_path / "nope.json").pool() == DEFAULT_CATEGORIES

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    assert CategorySource(broken).pool() == DEFAULT_CATEGORIES

    empty = tmp_path / "empty.json"
    empty.write_text(json.dumps({"categories": []}), encoding="utf-8")
    assert CategorySource(empty).pool() == DEFAULT_CATEGORIES


def test_reads_array_and_object_forms(tmp_path):
    bare = tmp_path / "bare.json"
    bare.write_text(json.dumps(["Pays", "Ville", "Pays", 3, " "]), encoding="utf-8")
    assert CategorySource(bare).pool() == ["Pays", "Ville"]

    wrapped = tmp_path / "wrapped.json"
    wrapped.write_text(json.dumps({"categories": ["Métier", "Couleur"]}), encoding="utf-8")
    assert CategorySource(wrapped).pool() == ["Métier", "Couleur"]


def test_pool_is_cached(tmp_path):
    path = tmp_path / "pool.json"
    path.write_text(json.dumps(["Pays"]), encoding="utf-8")
    source = CategorySource(path)
    assert source.pool() == ["Pays"]

    path.write_text(json.dumps(["Ville"]), encoding="utf-8")
    assert source.pool() == ["Pays"]


def test_sample_is_capped_and_without_replacement():
    source = CategorySource(defaults=["A", "B", "C"])
    picked = source.sample(6)
    assert sorted(picked) == ["A", "B", "C"]
    assert pick_random(["A", "B"], -1) == []


def test_clean_categories():
    assert clean_categories([" Fruit ", "", "Fruit", None, "Arme"]) == ["Fruit", "Arme"]
    assert clean_categories("Fruit") == []


def test_bundled_pool_is_larger_than_defaults():
    pool = CategorySource(Config.CATEGORIES_FILE).pool()
    assert len(pool) > len(DEFAULT_CATEGORIES)
    assert len(pool) == len(set(pool))
