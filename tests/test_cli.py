import json

import nearstock.cli as cli
from nearstock.core.errors import GeocodeNotFoundError

from conftest import JODHPUR_LOCATION, NEAR_JODHPUR, product_payload


class _StubGeocoder:
    def __init__(self, settings):
        pass

    def resolve(self, pincode):
        if pincode == "000000":
            raise GeocodeNotFoundError(pincode)
        return NEAR_JODHPUR


class _StubCommerce:
    def __init__(self, settings):
        pass

    def fetch_product(self, product_id):
        return product_payload([(JODHPUR_LOCATION, 4)])


def _patch(monkeypatch):
    monkeypatch.setattr(cli, "configure_logging", lambda: None)
    monkeypatch.setattr(cli, "GeocodingClient", _StubGeocoder)
    monkeypatch.setattr(cli, "CommerceClient", _StubCommerce)


def test_check_json_output(monkeypatch, capsys):
    _patch(monkeypatch)

    code = cli.main(["check", "--pincode", "342003", "--product-id", "p", "--json"])

    assert code == 0
    out = json.loads(capsys.readouterr().out)
    assert out["status"] == 200
    assert out["body"]["warehouse"] == JODHPUR_LOCATION


def test_check_failure_exits_nonzero(monkeypatch, capsys):
    _patch(monkeypatch)

    code = cli.main(["check", "--pincode", "000000", "--product-id", "p"])

    assert code == 1
    assert "[500] Server error" in capsys.readouterr().out


def test_nearest_prints_postal_code(monkeypatch, capsys):
    _patch(monkeypatch)

    assert cli.main(["nearest", "--pincode", "342003"]) == 0
    assert "nearest warehouse: 342001" in capsys.readouterr().out


def test_warehouses_lists_registry(monkeypatch, capsys):
    _patch(monkeypatch)

    assert cli.main(["warehouses"]) == 0
    out = capsys.readouterr().out
    assert "342001" in out and "313001" in out
    assert "Udaipur Warehouse" in out
