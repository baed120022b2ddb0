"""Tests for manifest dependency collection."""

import httpx
import pytest

from flp_preview_cli.dependencies import CustomDependencySet
from flp_preview_cli.dependencies import collect_custom_dependencies
from flp_preview_cli.dependencies import extract_custom_dependencies
from flp_preview_cli.dependencies.collector import manifest_url

pytestmark = pytest.mark.anyio


class TestExtractCustomDependencies:
    def test_reads_all_three_sections(self, manifest):
        doc = manifest(libs=["sap.m", "my.lib"], components=["my.component"], usages=["my.reuse"])
        assert extract_custom_dependencies(doc) == {"my.lib", "my.component", "my.reuse"}

    def test_missing_sections_are_valid(self, manifest):
        assert extract_custom_dependencies({}) == set()
        assert extract_custom_dependencies({"sap.app": {"id": "x"}}) == set()
        assert extract_custom_dependencies(manifest()) == set()
        assert extract_custom_dependencies(manifest(usages=["my.reuse"])) == {"my.reuse"}

    def test_non_mapping_sections_are_ignored(self):
        doc = {"sap.ui5": {"dependencies": {"libs": ["my.lib"], "components": None}, "componentUsages": "x"}}
        assert extract_custom_dependencies(doc) == set()
        assert extract_custom_dependencies({"sap.ui5": []}) == set()

    def test_platform_only_manifest(self, manifest):
        doc = manifest(libs=["sap.m", "sap.ui.core", "sap.f"], components=["sap.ushell.components.x"])
        assert extract_custom_dependencies(doc) == set()


def test_manifest_url():
    assert manifest_url("/apps/travel") == "/apps/travel/manifest.json"
    assert manifest_url("/apps/travel/") == "/apps/travel/manifest.json"
    assert manifest_url("http://host/app") == "http://host/app/manifest.json"


async def test_union_across_manifests(make_client, manifest):
    """Shared ids appear once and platform ids are excluded."""
    client = make_client(
        {
            "/a/manifest.json": manifest(libs=["sap.m", "my.custom.lib"]),
            "/b/manifest.json": manifest(libs=["my.custom.lib", "other.custom"]),
        }
    )
    async with client:
        result = await collect_custom_dependencies(["/a", "/b"], client)

    assert isinstance(result, CustomDependencySet)
    assert result == {"my.custom.lib", "other.custom"}
    assert len(result) == 2
    assert "sap.m" not in result
    assert result.skipped == []


async def test_fetches_each_manifest_once(make_client, manifest, requests):
    client = make_client({f"/app{i}/manifest.json": manifest(libs=[f"lib{i}"]) for i in range(5)})
    async with client:
        result = await collect_custom_dependencies([f"/app{i}" for i in range(5)], client)

    assert result == {f"lib{i}" for i in range(5)}
    assert sorted(r.url.path for r in requests) == sorted(f"/app{i}/manifest.json" for i in range(5))


async def test_all_platform_dependencies_give_empty_set(make_client, manifest):
    client = make_client({"/a/manifest.json": manifest(libs=["sap.m"], components=["sap.ui.comp"])})
    async with client:
        result = await collect_custom_dependencies(["/a"], client)
    assert result == set()
    assert not result


async def test_no_applications(make_client):
    client = make_client({})
    async with client:
        result = await collect_custom_dependencies([], client)
    assert result == set()


async def test_failed_retrievals_are_isolated(make_client, manifest):
    """Unreachable or malformed manifests are skipped; the rest still count."""
    client = make_client(
        {
            "/good/manifest.json": manifest(libs=["my.lib"]),
            "/broken/manifest.json": httpx.Response(200, text="<html>not json</html>"),
            "/array/manifest.json": ["not", "an", "object"],
            "/down/manifest.json": httpx.ConnectError("connection refused"),
            "/error/manifest.json": httpx.Response(500, text="boom"),
        }
    )
    urls = ["/good", "/missing", "/broken", "/array", "/down", "/error"]
    async with client:
        result = await collect_custom_dependencies(urls, client)

    assert result == {"my.lib"}
    assert [s.url for s in result.skipped] == ["/missing", "/broken", "/array", "/down", "/error"]
    assert all(s.reason for s in result.skipped)


async def test_unexpected_errors_propagate(make_client):
    client = make_client({"/a/manifest.json": RuntimeError("bug")})
    async with client:
        with pytest.raises(RuntimeError, match="bug"):
            await collect_custom_dependencies(["/a"], client)


async def test_creates_client_from_settings_when_none_given(make_client, manifest, monkeypatch):
    client = make_client({"/a/manifest.json": manifest(libs=["my.lib"])})
    monkeypatch.setattr("flp_preview_cli.dependencies.collector.create_http_client", lambda: client)

    result = await collect_custom_dependencies(["/a"])

    assert result == {"my.lib"}
    assert client.is_closed


async def test_malformed_app_url_is_skipped(make_client, manifest):
    client = make_client({"/good/manifest.json": manifest(libs=["my.lib"])})
    async with client:
        result = await collect_custom_dependencies(["/good", "http://[::1"], client)

    assert result == {"my.lib"}
    assert [s.url for s in result.skipped] == ["http://[::1"]
