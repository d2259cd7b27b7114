"""
Unit tests - Base URL normalization and page URL construction.
"""

from urllib.parse import parse_qs, urlparse

from resilient_client.urls import build_page_url, normalize_base_url


class TestNormalizeBaseUrl:
    """resilient_client.urls.normalize_base_url - standalone URL normalization."""

    def test_whitespace_stripped(self):
        assert normalize_base_url("  https://api.example.com/patients  ") == "https://api.example.com/patients"

    def test_scheme_and_host_lowered(self):
        assert normalize_base_url("HTTPS://API.Example.COM/Patients") == "https://api.example.com/Patients"

    def test_default_port_removed(self):
        assert normalize_base_url("https://api.example.com:443/patients") == "https://api.example.com/patients"

    def test_non_default_port_kept(self):
        assert ":8080" in normalize_base_url("http://localhost:8080/patients")

    def test_trailing_slash_removed(self):
        assert normalize_base_url("https://api.example.com/patients/") == "https://api.example.com/patients"

    def test_ipv6_host_keeps_brackets(self):
        assert normalize_base_url("http://[::1]:8080/patients/") == "http://[::1]:8080/patients"

    def test_fragment_dropped(self):
        assert normalize_base_url("https://api.example.com/patients#top") == "https://api.example.com/patients"

    def test_empty_string(self):
        assert normalize_base_url("   ") == ""


class TestBuildPageUrl:
    """resilient_client.urls.build_page_url - page/limit query construction."""

    def test_page_and_limit_appended(self):
        assert build_page_url("https://api.example.com/patients", 3, 10) == (
            "https://api.example.com/patients?page=3&limit=10"
        )

    def test_existing_query_preserved(self):
        url = build_page_url("https://api.example.com/patients?status=active", 1, 20)
        query = parse_qs(urlparse(url).query)
        assert query == {"status": ["active"], "page": ["1"], "limit": ["20"]}

    def test_existing_page_and_limit_replaced(self):
        url = build_page_url("https://api.example.com/patients?page=9&limit=99", 2, 5)
        query = parse_qs(urlparse(url).query)
        assert query == {"page": ["2"], "limit": ["5"]}

    def test_trailing_slash_kept(self):
        assert build_page_url("https://api.example.com/patients/", 1, 10) == (
            "https://api.example.com/patients/?page=1&limit=10"
        )

    def test_ipv6_host_keeps_brackets(self):
        assert build_page_url("http://[::1]:8080/patients", 1, 10) == (
            "http://[::1]:8080/patients?page=1&limit=10"
        )

    def test_host_case_and_default_port_untouched(self):
        assert build_page_url("https://API.example.com:443/Patients", 2, 5) == (
            "https://API.example.com:443/Patients?page=2&limit=5"
        )
