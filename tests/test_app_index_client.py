"""Tests for the app index client."""

import pytest

from flp_preview_cli.app_index import APP_INDEX_PATH
from flp_preview_cli.app_index import AppIndexClient
from flp_preview_cli.app_index import AppIndexError
from flp_preview_cli.app_index import LibraryLocation
from flp_preview_cli.app_index import build_params


def test_build_params_joins_sorted_ids():
    assert build_params({"z.lib", "a.lib", "m.lib"}) == {"id": "a.lib,m.lib,z.lib"}


def test_build_params_sap_client():
    assert build_params(["a"], "001") == {"id": "a", "sap-client": "001"}
    assert build_params(["a"], "01") == {"id": "a"}


def test_library_location_from_wire_format():
    location = LibraryLocation.model_validate(
        {"componentId": "my.custom.lib", "url": "https://x/y", "type": "UI5LIB", "extra": 1}
    )
    assert location.identifier == "my.custom.lib"
    assert location.path_key == "my/custom/lib"
    assert location.is_registrable()


def test_library_location_kinds():
    assert not LibraryLocation(identifier="c", servable_url="https://c", kind="UI5COMP").is_registrable()
    assert not LibraryLocation(identifier="c", servable_url="", kind="UI5LIB").is_registrable()


def test_path_key_requires_identifier():
    with pytest.raises(ValueError, match="without componentId"):
        LibraryLocation(servable_url="https://x", kind="UI5LIB").path_key


@pytest.mark.anyio
async def test_fetch_app_info_preserves_response_order(make_client):
    client = make_client({APP_INDEX_PATH: {"second": {"dependencies": []}, "first": None}})
    async with client:
        app_info = await AppIndexClient(client).fetch_app_info(["x"])

    assert list(app_info) == ["second", "first"]
    assert app_info["second"].dependencies == []
    assert app_info["first"] is None


@pytest.mark.anyio
async def test_fetch_app_info_error_carries_url(make_client):
    client = make_client({APP_INDEX_PATH: ["bad"]})
    async with client:
        with pytest.raises(AppIndexError) as exc_info:
            await AppIndexClient(client).fetch_app_info(["my.lib"])

    assert APP_INDEX_PATH in exc_info.value.url
