import pytest
from bs4 import BeautifulSoup

from tide_pipeline.domain.models import HalfDayTide
from tide_pipeline.parser import MissingTodayDataError, TodayTableParser

DATA_ROW = ["73", "03h49 1,17 m", "10h12 6,45 m", "75", "16h02 1,20 m", "22h30 6,50 m"]


def _parse(html, label="jeudi 4 décembre 2025"):
    parser = TodayTableParser()
    soup = BeautifulSoup(html, "html.parser")
    return parser.parse_table(parser.find_table(soup), label)


def test_parses_morning_and_afternoon(make_table_html):
    day = _parse(make_table_html([DATA_ROW]))

    assert day.label == "jeudi 4 décembre 2025"
    assert day.morning == HalfDayTide(
        coefficient=73,
        low_time="03h49",
        low_height="1,17 m",
        high_time="10h12",
        high_height="6,45 m",
    )
    assert day.afternoon == HalfDayTide(
        coefficient=75,
        low_time="16h02",
        low_height="1,20 m",
        high_time="22h30",
        high_height="6,50 m",
    )


def test_uses_last_row_with_six_cells(make_table_html):
    older = ["10", "01h00 1,00 m", "07h00 5,00 m", "11", "13h00 1,00 m", "19h00 5,00 m"]
    day = _parse(make_table_html([older, DATA_ROW, ["note"]]))

    assert day.morning.coefficient == 73
    assert day.afternoon.high_time == "22h30"


def test_malformed_cells_become_sentinels(make_table_html):
    day = _parse(make_table_html([["?", "-", "10h12", "75", "1,20 m", ""]]))

    assert day.morning.coefficient == 0
    assert day.morning.low_time == "--"
    assert day.morning.low_height == "-- m"
    assert day.morning.high_time == "10h12"
    assert day.morning.high_height == "-- m"
    assert day.afternoon.low_time == "--"
    assert day.afternoon.low_height == "1,20 m"


def test_markup_inside_cells_is_flattened():
    html = (
        '<div id="i_donnesJour"><table class="tableau"><tr>'
        "<td><strong>73</strong></td>"
        "<td><strong>03h49</strong><br /> 1,17 m</td>"
        "<td><strong>10h12</strong><br />6,45 m</td>"
        "<td><b>75</b></td>"
        "<td><strong>16h02</strong><br /> 1,20 m</td>"
        "<td><strong>22h30</strong><br /> 6,50 m</td>"
        "</tr></table></div>"
    )
    day = _parse(html)

    assert day.morning.high_height == "6,45 m"
    assert day.afternoon.coefficient == 75


def test_raises_when_no_row_has_six_cells(make_table_html):
    with pytest.raises(MissingTodayDataError) as excinfo:
        _parse(make_table_html([["73", "03h49 1,17 m", "10h12 6,45 m"]]))

    assert excinfo.value.expected == 6
    assert excinfo.value.found == 3
    assert "found 3" in str(excinfo.value)


def test_raises_when_table_is_absent():
    with pytest.raises(MissingTodayDataError) as excinfo:
        _parse("<html><body><p>maintenance</p></body></html>")

    assert excinfo.value.found == 0
