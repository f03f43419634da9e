"""Tests for URL composition."""

from datetime import datetime, timezone

import pytest

from bungie_client.application.exceptions import UrlConstructionError
from bungie_client.infrastructure.api_models import (
    BungieMembershipType,
    DestinyComponentType,
)
from bungie_client.infrastructure.url_builder import build_url, format_value


class TestFormatValue:
    """Test textual rendering of path and query values."""

    def test_booleans_are_lowercase(self):
        assert format_value(True) == "true"
        assert format_value(False) == "false"

    def test_int_enums_use_numeric_value(self):
        assert format_value(BungieMembershipType.TIGER_STEAM) == "3"
        assert format_value(BungieMembershipType.ALL) == "-1"

    def test_sequences_are_comma_joined_in_order(self):
        components = [
            DestinyComponentType.CHARACTERS,
            DestinyComponentType.PROFILES,
            DestinyComponentType.ITEM_SOCKETS,
        ]
        assert format_value(components) == "200,100,305"

    def test_datetimes_are_iso_formatted(self):
        moment = datetime(2024, 2, 27, 17, 0, tzinfo=timezone.utc)
        assert format_value(moment) == "2024-02-27T17:00:00+00:00"

    def test_plain_values_use_str(self):
        assert format_value(4611686018467284386) == "4611686018467284386"
        assert format_value("en") == "en"


class TestBuildUrl:
    """Test path interpolation and optional query parameters."""

    def test_without_query_params_has_no_query_string(self):
        url = build_url("/GetAvailableLocales/")

        assert str(url) == "https://www.bungie.net/Platform/GetAvailableLocales/"
        assert url.query == b""

    def test_absent_query_values_are_omitted(self):
        url = build_url("/GlobalAlerts/", [("includestreaming", None)])

        assert "?" not in str(url)

    def test_present_query_value_appears_exactly_once(self):
        url = build_url("/GlobalAlerts/", [("includestreaming", True)])

        assert str(url).endswith("/GlobalAlerts/?includestreaming=true")
        assert url.params.get_list("includestreaming") == ["true"]

    def test_query_keeps_insertion_order(self):
        url = build_url(
            "/Content/Search/{locale}/",
            [("ctype", "news"), ("currentpage", None), ("head", False), ("tag", "x")],
            locale="en",
        )

        assert url.params.multi_items() == [
            ("ctype", "news"),
            ("head", "false"),
            ("tag", "x"),
        ]

    def test_multi_valued_query_is_one_key(self):
        url = build_url(
            "/Destiny2/Vendors/",
            [("components", [DestinyComponentType.VENDORS, DestinyComponentType.VENDOR_SALES])],
        )

        assert url.params.get_list("components") == ["400,402"]

    def test_path_values_are_formatted(self):
        url = build_url(
            "/Destiny2/{membership_type}/Profile/{destiny_membership_id}/",
            membership_type=BungieMembershipType.TIGER_PSN,
            destiny_membership_id=4611686018467284386,
        )

        assert url.path == "/Platform/Destiny2/2/Profile/4611686018467284386/"

    def test_spaces_in_path_are_percent_encoded(self):
        url = build_url(
            "/User/Search/Prefix/{display_name_prefix}/{page}/",
            display_name_prefix="Some Guardian",
            page=0,
        )

        assert url.raw_path == b"/Platform/User/Search/Prefix/Some%20Guardian/0/"

    def test_control_characters_fail_before_sending(self):
        with pytest.raises(UrlConstructionError):
            build_url("/GroupV2/Name/{group_name}/1/", group_name="bad\nname")

    @pytest.mark.parametrize("search_term", ["what?now", "Guardian#12", "a/b"])
    def test_route_delimiters_in_path_values_fail(self, search_term):
        with pytest.raises(UrlConstructionError):
            build_url(
                "/Destiny2/Armory/Search/{type}/{search_term}/",
                [("page", 1)],
                type="DestinyInventoryItemDefinition",
                search_term=search_term,
            )

    def test_missing_path_value_fails(self):
        with pytest.raises(UrlConstructionError):
            build_url("/GroupV2/{group_id}/")

    def test_plain_http_is_refused(self):
        with pytest.raises(UrlConstructionError):
            build_url("/Settings/", base="http://www.bungie.net/Platform")

    def test_other_hosts_are_refused(self):
        with pytest.raises(UrlConstructionError):
            build_url("/Settings/", base="https://example.com/Platform")
