"""
Campaign label parsing tests.
"""
from utils.campaign_names import extract_id, extract_parameter, resolve_id, strip_id_prefix


LABEL = "992833 - [28/09] FR [BR:SAMSUNG] [MAX:12.5]"


def test_extract_id_from_label():
    assert extract_id(LABEL) == "992833"


def test_extract_id_needs_trailing_whitespace():
    assert extract_id("992833-FR") is None
    assert extract_id("FR campaign") is None
    assert extract_id("") is None


def test_resolve_id_falls_back_to_row_id():
    assert resolve_id("No number here", 4411) == "4411"
    assert resolve_id(LABEL, 4411) == "992833"
    assert resolve_id("No number here") is None


def test_strip_id_prefix():
    assert strip_id_prefix(LABEL) == "[28/09] FR [BR:SAMSUNG] [MAX:12.5]"
    assert strip_id_prefix("  plain title  ") == "plain title"


def test_strip_id_prefix_only_once():
    assert strip_id_prefix("1 - 2 - title") == "2 - title"


def test_extract_parameter_decimal_and_integer():
    assert extract_parameter(LABEL, "MAX") == "12.5"
    assert extract_parameter("FR [MAX:7]", "MAX") == "7"


def test_extract_parameter_absent_or_malformed():
    assert extract_parameter(LABEL, "MIN") is None
    assert extract_parameter("FR [MAX:abc]", "MAX") is None
    assert extract_parameter("FR [max:5]", "MAX") is None


def test_extract_parameter_zero_is_not_absent():
    assert extract_parameter("FR [MAX:0]", "MAX") == "0"
