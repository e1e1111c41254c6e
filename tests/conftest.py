import pytest

# What the modem sends back, position by position. Anything not listed is junk
#   that the decoder must ignore.
MODEM_FIELDS = {
    0: "100.64.12.34",
    1: "00:A0:BC:12:34:56",
    2: "UT_3.7.8.9.5",
    3: "HW 2.1",
    4: "Online",
    5: "12,345,678",
    6: "9,876,543,210",
    7: "1,234",
    8: "5,678,901",
    9: "3 days 04:05:06",
    10: "7",
    11: "12.5",
    12: "55%",
    13: "SB2-0012345",
    14: "-45.3",
    15: "45%",
    16: "21.4",
    17: "30%",
    18: "OK",
    19: "9.6",
    20: "64%",
    21: "RG6",
    22: "1234567-001",
    23: "Online (5/5)",
    24: "Beam is ORANGE",
    26: "Enabled",
    27: "Healthy",
    30: "1.2 s",
    32: "10,000,000",
    40: "BDT 42",
    46: "ViaSat",
    50: "52,000,000",
    51: "8PSK",
}

TRIA_FIELDS = {
    4: "Normal",
    5: "Circular RIGHT hand",
    7: "-12.5",
    9: "RG6",
    10: "41",
    16: "TRIA-998877",
    17: "30.25",
    24: "TRIA_1.2.3",
    25: "89%",
    26: "61%",
    29: "green",
    81: "ViaSat",
}


def build_page(fields: dict[int, str], count: int, filler: str = "") -> str:
    return "##".join(fields.get(i, filler) for i in range(count))


@pytest.fixture
def modem_page() -> str:
    # Junk in the unused positions to prove they are skipped
    return build_page(MODEM_FIELDS, 81, filler="reserved")


@pytest.fixture
def tria_page() -> str:
    return build_page(TRIA_FIELDS, 84, filler="x")


@pytest.fixture
def page_builder():
    return build_page
