"""
Tests for the icon registry.
"""

import pytest

from saas_admin_core.utils.icon_registry import (
    DEFAULT_ICON,
    ICON_NAMES,
    ICON_REGISTRY,
    IconHandle,
    component_name,
    is_known_icon,
    resolve_icon,
    search_icons,
)


@pytest.mark.parametrize(
    "name, expected",
    [("package", "Package"), ("file-text", "FileText"), ("edit-2", "Edit2"), ("user-check", "UserCheck")],
)
def test_component_name(name, expected):
    assert component_name(name) == expected


def test_registry_covers_every_name():
    assert set(ICON_REGISTRY) == set(ICON_NAMES)
    assert DEFAULT_ICON in ICON_REGISTRY


class TestResolveIcon:
    def test_known_icon(self):
        assert resolve_icon("database") == IconHandle("database", "Database")

    def test_name_is_normalized(self):
        assert resolve_icon("  Cloud ").name == "cloud"

    @pytest.mark.parametrize("name", [None, "", "not-an-icon"])
    def test_unknown_falls_back_to_default(self, name):
        assert resolve_icon(name).name == DEFAULT_ICON


def test_is_known_icon():
    assert is_known_icon("key") is True
    assert is_known_icon("unicorn") is False
    assert is_known_icon(None) is False


class TestSearchIcons:
    def test_empty_term_returns_all(self):
        assert search_icons("") == list(ICON_NAMES)

    def test_substring_case_insensitive(self):
        results = search_icons("USER")
        assert "users" in results
        assert "user-check" in results
        assert all("user" in name for name in results)
