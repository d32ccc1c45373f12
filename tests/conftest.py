import pytest

from metar_decoder.parser import MetarParser

KJFK_BODY = "250251Z 08006KT 10SM BKN043 BKN095 BKN250 19/09 A3034 RMK AO2 SLP273 T01890094 50001"


@pytest.fixture
def kjfk_metar() -> str:
    """Routine KJFK observation with sky, temperature and remarks groups."""
    return f"METAR KJFK {KJFK_BODY}"


@pytest.fixture
def kjfk_speci() -> str:
    return f"SPECI KJFK {KJFK_BODY}"


@pytest.fixture
def kjfk_unlabelled() -> str:
    return f"KJFK {KJFK_BODY}"


@pytest.fixture
def sample_lines() -> list:
    """Mixed batch of report lines, one of them malformed."""
    return [
        "METAR KJFK 250251Z 08006KT 10SM",
        "SPECI KJFK 250320Z 21018G29KT 180V240 2SM +TSRA BR",
        "METAR KBOS 250254Z AUTO 00000KT 1/4SM FG",
        "",
        "METAR KORD 250251Z COR VRB04KT 1 1/2SM -SN",
        "METAR KLAX 2502Z 27010KT 10SM",
        "METAR KDEN 242353Z 32025G38KT 5SM BLSN",
    ]


@pytest.fixture
def sample_reports(sample_lines):
    return MetarParser.parse_many(sample_lines)
