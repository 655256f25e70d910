import json
import logging

from bookstore.config import Config
from bookstore.utils import load_settings, normalize_id, to_object_id
from bson import ObjectId


def test_defaults_when_file_missing(tmp_path):
    config = Config.initialize(str(tmp_path / "missing.json"))
    assert config['db_name'] == 'plp_bookstore'
    assert Config.get_db_params() == ('mongodb', 'mongodb://localhost:27017', 'plp_bookstore', 'books')


def test_file_overrides_defaults(tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({'db_name': 'shop', 'log_level': 'debug'}), encoding="utf-8")
    Config.initialize(str(config_file))
    assert Config.get('db_name') == 'shop'
    assert Config.get('collection') == 'books'
    assert Config.log_level() == logging.DEBUG


def test_unknown_log_level_falls_back_to_info(tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({'log_level': 'chatty'}), encoding="utf-8")
    Config.initialize(str(config_file))
    assert Config.log_level() == logging.INFO


def test_load_settings_bad_json(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text("not json", encoding="utf-8")
    assert load_settings(bad) == {}


def test_id_helpers():
    oid = ObjectId()
    assert normalize_id(oid) == str(oid)
    assert normalize_id(None) is None
    assert to_object_id(str(oid)) == oid
    assert to_object_id("custom-id") == "custom-id"
