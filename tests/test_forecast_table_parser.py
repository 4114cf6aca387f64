from bs4 import BeautifulSoup

from tide_pipeline.parser import ForecastTableParser


def _parse(html):
    parser = ForecastTableParser()
    soup = BeautifulSoup(html, "html.parser")
    return parser.parse_table(parser.find_table(soup))


def _row(label, coeff_am=70, coeff_pm=72):
    return [label, str(coeff_am), "04h31 1,05 m", "10h55 6,60 m",
            str(coeff_pm), "16h45 1,02 m", "23h12 6,62 m"]


def test_keeps_document_order_and_skips_short_rows(make_table_html):
    rows = [
        ["Coeff.", "Basse mer", "Pleine mer", "Coeff.", "Basse mer", "Pleine mer"],
        _row("Demain vendredi 5 décembre", 78),
        _row("samedi 6 décembre", 83),
        _row("dimanche 7 décembre", 86),
    ]
    days = _parse(make_table_html(rows, container_id="i_donnesLongue"))

    assert [d.label for d in days] == [
        "vendredi 5 décembre",
        "samedi 6 décembre",
        "dimanche 7 décembre",
    ]
    assert [d.morning.coefficient for d in days] == [78, 83, 86]
    assert days[0].afternoon.high_time == "23h12"
    assert days[0].afternoon.high_height == "6,62 m"


def test_tomorrow_prefix_is_case_insensitive(make_table_html):
    days = _parse(make_table_html([_row("  DEMAIN   vendredi")], container_id="i_donnesLongue"))
    assert days[0].label == "vendredi"


def test_other_markers_are_kept(make_table_html):
    days = _parse(make_table_html([_row("Aujourd'hui jeudi")], container_id="i_donnesLongue"))
    assert days[0].label == "Aujourd'hui jeudi"


def test_no_qualifying_rows_returns_empty_list(make_table_html):
    rows = [["a", "b"], ["1", "2", "3", "4", "5", "6"]]
    assert _parse(make_table_html(rows, container_id="i_donnesLongue")) == []


def test_missing_table_returns_empty_list():
    assert _parse("<html><body></body></html>") == []


def test_does_not_limit_number_of_rows(make_table_html):
    rows = [_row(f"jour {i}") for i in range(12)]
    assert len(_parse(make_table_html(rows, container_id="i_donnesLongue"))) == 12


def test_duplicates_are_not_removed(make_table_html):
    rows = [_row("samedi"), _row("samedi")]
    assert len(_parse(make_table_html(rows, container_id="i_donnesLongue"))) == 2
