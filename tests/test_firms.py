"""Tests for loading the firm registry."""

import json
from pathlib import Path

import pytest

REGISTRY_PATH = Path(__file__).resolve().parent.parent / "data" / "vc_firms.json"


class TestLoadFirms:

    def test_starter_registry(self):
        from src.config.firms import load_firms

        firms = load_firms(REGISTRY_PATH)

        assert len(firms) == 24
        assert firms[0].id == "a16z"
        assert firms[0].name == "Andreessen Horowitz"
        assert len({f.id for f in firms}) == len(firms)

    def test_missing_file(self, tmp_path):
        from src.config.firms import FirmRegistryError, load_firms

        with pytest.raises(FirmRegistryError):
            load_firms(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        from src.config.firms import FirmRegistryError, load_firms

        path = tmp_path / "firms.json"
        path.write_text("[{not json", encoding="utf-8")

        with pytest.raises(FirmRegistryError):
            load_firms(path)

    @pytest.mark.parametrize("payload", [[], {}, {"id": "a16z"}, "firms"])
    def test_empty_or_non_list(self, tmp_path, payload):
        from src.config.firms import FirmRegistryError, load_firms

        path = tmp_path / "firms.json"
        path.write_text(json.dumps(payload), encoding="utf-8")

        with pytest.raises(FirmRegistryError, match="empty or invalid"):
            load_firms(path)

    def test_entry_missing_name(self):
        from src.config.firms import FirmRegistryError, parse_firms

        with pytest.raises(FirmRegistryError):
            parse_firms([{"id": "a16z", "name": "Andreessen Horowitz"}, {"id": "nameless"}])

    def test_fields_normalized(self):
        from src.config.firms import parse_firms

        firm = parse_firms([{"id": " acme ", "name": "Acme Ventures", "hq_city": "Boston", "hq_state": "ma"}])[0]

        assert firm.id == "acme"
        assert firm.hq_state == "MA"

    def test_hq_optional(self):
        from src.config.firms import parse_firms

        firm = parse_firms([{"id": "acme", "name": "Acme Ventures"}])[0]

        assert (firm.hq_city, firm.hq_state) == ("", "")
