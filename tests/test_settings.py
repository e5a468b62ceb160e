import pytest
from pydantic import ValidationError

from nearstock.config.settings import WarehouseSettings, load_settings
from nearstock.core.geo import GeoPoint


def test_packaged_defaults_define_two_consistent_warehouses(monkeypatch):
    monkeypatch.delenv("SHOPIFY_API_KEY", raising=False)
    settings = load_settings()

    assert list(settings.warehouses.registry) == ["342001", "313001"]
    assert settings.warehouses.registry["342001"] == GeoPoint(latitude=26.2389, longitude=73.0243)
    assert settings.warehouses.consistency_problems() == []
    assert settings.geocoding.country == "India"
    assert not hasattr(settings.commerce, "quantity_name")
    assert settings.errors.geocode_miss_as_not_found is False


def test_env_overrides_credential_and_log_level(monkeypatch):
    monkeypatch.setenv("SHOPIFY_API_KEY", "shpat_test")
    monkeypatch.setenv("NEARSTOCK_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("NEARSTOCK_COMMERCE_API_URL", "https://shop.test/graphql.json")

    settings = load_settings()

    assert settings.commerce.access_token == "shpat_test"
    assert settings.commerce.api_url == "https://shop.test/graphql.json"
    assert settings.app.log_level == "DEBUG"


def test_external_config_file_replaces_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv("SHOPIFY_API_KEY", raising=False)
    path = tmp_path / "nearstock.yaml"
    path.write_text(
        "\n".join(
            [
                "commerce:",
                "  api_url: https://other.test/graphql.json",
                "warehouses:",
                "  registry:",
                '    "110001": {latitude: 28.6328, longitude: 77.2197}',
                "  location_map:",
                '    "Delhi Hub": "110001"',
            ]
        ),
        encoding="utf-8",
    )

    settings = load_settings(path)

    assert list(settings.warehouses.registry) == ["110001"]
    assert settings.commerce.access_token is None


def test_consistency_problems_report_both_directions():
    warehouses = WarehouseSettings(
        registry={"342001": GeoPoint(latitude=26.2, longitude=73.0)},
        location_map={"Udaipur Warehouse": "313001"},
    )
    problems = warehouses.consistency_problems()
    assert len(problems) == 2
    assert any("342001" in p for p in problems)
    assert any("Udaipur Warehouse" in p for p in problems)


def test_commerce_url_is_required(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("app:\n  log_level: INFO\n", encoding="utf-8")
    with pytest.raises(ValidationError):
        load_settings(path)


def test_config_cannot_redirect_inventory_to_another_bucket(tmp_path, monkeypatch):
    from nearstock.ingestion.commerce_client import build_query

    monkeypatch.delenv("SHOPIFY_API_KEY", raising=False)
    path = tmp_path / "nearstock.yaml"
    path.write_text(
        "commerce:\n  api_url: https://shop.test/graphql.json\n  quantity_name: on_hand\n",
        encoding="utf-8",
    )

    query = build_query(load_settings(path))

    assert 'quantities(names: ["available"])' in query
    assert "on_hand" not in query
