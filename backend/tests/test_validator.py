# =============================================================================
# tests/test_validator.py - Query Parameter Validation Tests
# =============================================================================

import pytest
from pydantic import ValidationError

from geosearch.core.exceptions import InvalidParameter
from geosearch.models.search_model import SearchRequest
from geosearch.services.validator import parse_search_request


class TestRequiredCoordinates:

    def test_parses_valid_coordinates(self):
        request = parse_search_request("30.27", "-97.74", "5000")

        assert request.latitude == 30.27
        assert request.longitude == -97.74
        assert request.radius_meters == 5000

    @pytest.mark.parametrize("lat", [None, "", "   "])
    def test_missing_lat_is_rejected(self, lat):
        with pytest.raises(InvalidParameter) as exc_info:
            parse_search_request(lat, "-97.74", "5000")

        assert exc_info.value.field == "lat"
        assert exc_info.value.reason == InvalidParameter.MISSING
        assert exc_info.value.status_code == 400

    def test_missing_lng_is_rejected(self):
        with pytest.raises(InvalidParameter) as exc_info:
            parse_search_request("30.27", None)

        assert exc_info.value.field == "lng"
        assert exc_info.value.reason == InvalidParameter.MISSING

    def test_missing_lat_wins_over_bad_radius(self):
        with pytest.raises(InvalidParameter) as exc_info:
            parse_search_request(None, "-97.74", "abc")

        assert exc_info.value.field == "lat"

    @pytest.mark.parametrize("value", ["abc", "30,27", "nan", "inf", "1_0", "0x1A"])
    def test_non_numeric_lat_is_rejected(self, value):
        with pytest.raises(InvalidParameter) as exc_info:
            parse_search_request(value, "-97.74")

        assert exc_info.value.field == "lat"
        assert exc_info.value.reason == InvalidParameter.NOT_A_NUMBER
        assert value in exc_info.value.message

    @pytest.mark.parametrize("lat,lng,field", [("90.5", "0", "lat"), ("-91", "0", "lat"), ("0", "180.01", "lng")])
    def test_out_of_range_coordinates_are_rejected(self, lat, lng, field):
        with pytest.raises(InvalidParameter) as exc_info:
            parse_search_request(lat, lng)

        assert exc_info.value.field == field
        assert exc_info.value.reason == InvalidParameter.OUT_OF_RANGE

    def test_accepts_exponent_and_surrounding_whitespace(self):
        request = parse_search_request(" 3.027e1 ", "-97.74 ")

        assert request.latitude == pytest.approx(30.27)
        assert request.longitude == -97.74


class TestRadius:

    @pytest.mark.parametrize("radius", [None, "", "  "])
    def test_defaults_when_absent_or_empty(self, radius):
        request = parse_search_request("30.27", "-97.74", radius)

        assert request.radius_meters == 10000

    def test_default_can_be_overridden(self):
        request = parse_search_request("30.27", "-97.74", None, default_radius=2500)

        assert request.radius_meters == 2500

    @pytest.mark.parametrize("radius", ["abc", "10.5", "1e4", "1_000"])
    def test_non_integer_radius_is_rejected_not_defaulted(self, radius):
        with pytest.raises(InvalidParameter) as exc_info:
            parse_search_request("30.27", "-97.74", radius)

        assert exc_info.value.field == "radius"
        assert exc_info.value.reason == InvalidParameter.NOT_A_NUMBER

    def test_negative_radius_is_rejected(self):
        with pytest.raises(InvalidParameter) as exc_info:
            parse_search_request("30.27", "-97.74", "-5")

        assert exc_info.value.reason == InvalidParameter.OUT_OF_RANGE

    def test_radius_beyond_32_bits_is_accepted(self):
        request = parse_search_request("30.27", "-97.74", "3000000000")

        assert request.radius_meters == 3_000_000_000

    def test_zero_and_signed_radius_are_accepted(self):
        assert parse_search_request("30.27", "-97.74", "0").radius_meters == 0
        assert parse_search_request("30.27", "-97.74", "+750").radius_meters == 750


class TestSearchRequestModel:

    def test_radius_has_no_model_default(self):
        with pytest.raises(ValidationError):
            SearchRequest(latitude=30.27, longitude=-97.74)
