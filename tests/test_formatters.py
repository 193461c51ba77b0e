"""
Unit tests for content negotiation and XML output.
"""

import xml.etree.ElementTree as ET

import pytest

from users_api.app.core.errors import NotAcceptableError
from users_api.app.core.formatters import XSI_NAMESPACE, select_media_type, to_xml


class TestSelectMediaType:
    """Tests for Accept header negotiation."""

    @pytest.mark.parametrize("accept", [None, "", "*/*", "application/*", "application/json"])
    def test_defaults_to_json(self, accept):
        """Test that JSON wins when the client has no preference."""
        assert select_media_type(accept) == "application/json"

    def test_xml(self):
        """Test explicit XML."""
        assert select_media_type("application/xml") == "application/xml"

    def test_quality_order(self):
        """Test that higher quality wins over header order."""
        accept = "application/json;q=0.5, application/xml"

        assert select_media_type(accept) == "application/xml"

    def test_skips_unsupported(self):
        """Test that unsupported ranges fall through to later ones."""
        assert select_media_type("text/html, application/xml;q=0.9") == "application/xml"

    def test_zero_quality_excluded(self):
        """Test that q=0 refuses a type."""
        assert select_media_type("application/json;q=0, */*;q=0.1") == "application/xml"

    def test_not_acceptable(self):
        """Test that nothing supported raises."""
        with pytest.raises(NotAcceptableError):
            select_media_type("text/plain")


class TestToXml:
    """Tests for XML serialisation."""

    def test_object(self):
        """Test PascalCase elements and nil values."""
        root = ET.fromstring(to_xml({"fullName": "Ivan Ivanov", "currentGameId": None}, "UserDto"))

        assert root.tag == "UserDto"
        assert root.find("FullName").text == "Ivan Ivanov"
        assert root.find("CurrentGameId").get(f"{{{XSI_NAMESPACE}}}nil") == "true"

    def test_list(self):
        """Test the ArrayOf wrapper for sequences."""
        root = ET.fromstring(to_xml([{"login": "a"}, {"login": "b"}], "UserDto"))

        assert root.tag == "ArrayOfUserDto"
        assert [item.find("Login").text for item in root.findall("UserDto")] == ["a", "b"]

    def test_scalar(self):
        """Test a bare value."""
        root = ET.fromstring(to_xml("abc", "guid"))

        assert root.tag == "guid"
        assert root.text == "abc"

    def test_invalid_keys_become_valid_names(self):
        """Test that keys such as JSON pointers are turned into element names."""
        root = ET.fromstring(to_xml({"/password": ["a"], "/login/0": ["b"], "1st": ["c"]}, "SerializableError"))

        assert [child.tag for child in root] == ["Password", "Login_0", "_1st"]
        assert root.find("Password").find("string").text == "a"
