import importlib.util
import json
from pathlib import Path

from finance_tracker.config import BUDGETS_KEY, TRANSACTIONS_KEY
from finance_tracker.storage import JsonFileKeyValueStore

SCRIPT_PATH = Path(__file__).resolve().parents[1] / 'scripts' / 'validate_store.py'


def _load_script_module():
    spec = importlib.util.spec_from_file_location('validate_store_test', SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_valid_store_passes(tmp_path):
    module = _load_script_module()
    path = tmp_path / 'store.json'
    kv = JsonFileKeyValueStore(path)
    kv.set_item(TRANSACTIONS_KEY, json.dumps([{
        'id': '1', 'amount': 5, 'date': '2024-03-01',
        'description': 'Tea', 'category': 'food', 'type': 'expense',
    }]))
    kv.set_item(BUDGETS_KEY, json.dumps([{'category': 'food', 'amount': 50, 'spent': 5}]))
    assert module.main([str(path)]) == 0


def test_malformed_records_are_reported(tmp_path, capsys):
    module = _load_script_module()
    path = tmp_path / 'store.json'
    kv = JsonFileKeyValueStore(path)
    kv.set_item(TRANSACTIONS_KEY, 'not json')
    kv.set_item(BUDGETS_KEY, json.dumps([{'category': 'food'}]))

    assert module.main([str(path)]) == 1
    output = capsys.readouterr().out
    assert TRANSACTIONS_KEY in output
    assert 'record 0' in output


def test_missing_store_file(tmp_path):
    module = _load_script_module()
    assert module.main([str(tmp_path / 'absent.json')]) == 1
