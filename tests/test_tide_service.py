import pytest

from tide_pipeline.domain.models import TideDay, TideReport
from tide_pipeline.domain.services.tide_service import TideReportService
from tide_pipeline.fetcher import DocumentFetchError
from tide_pipeline.parser import MissingTodayDataError


class StubFetcher:
    def __init__(self, html=None, error=None):
        self.html = html
        self.error = error
        self.calls = []

    def fetch(self, force_refresh=False):
        self.calls.append(force_refresh)
        if self.error:
            raise self.error
        return self.html


def test_get_report_parses_fetched_page(tide_page_html):
    fetcher = StubFetcher(tide_page_html)
    service = TideReportService(fetcher)

    report = service.get_report()

    assert report.today.morning.coefficient == 73
    assert len(report.upcoming_days) == 5
    assert fetcher.calls == [False]


def test_get_report_windows_days_and_forwards_refresh(tide_page_html):
    fetcher = StubFetcher(tide_page_html)
    service = TideReportService(fetcher)

    report = service.get_report(force_refresh=True, days=2)

    assert [d.label for d in report.upcoming_days] == ["vendredi 5 décembre", "samedi 6 décembre"]
    assert fetcher.calls == [True]


def test_get_report_propagates_fetch_errors():
    service = TideReportService(StubFetcher(error=DocumentFetchError("http://x", 503)))

    with pytest.raises(DocumentFetchError):
        service.get_report()


def test_get_report_propagates_missing_today_data():
    service = TideReportService(StubFetcher("<html></html>"))

    with pytest.raises(MissingTodayDataError):
        service.get_report()


def test_custom_extractor_is_used():
    expected = TideReport("", TideDay(""))
    seen = []

    def extractor(html):
        seen.append(html)
        return expected

    service = TideReportService(StubFetcher("<html/>"), extractor=extractor)

    assert service.get_report() is expected
    assert seen == ["<html/>"]
