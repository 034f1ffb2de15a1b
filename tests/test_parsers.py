from unittest.mock import MagicMock, patch

import pytest
import requests
from bs4 import BeautifulSoup

from scripts.extractors.errors import (
    ColumnMappingError,
    ColumnMismatchError,
    DuplicatePollError,
    ExtractionError,
    FetchError,
    HeaderNotFoundError,
)
from scripts.extractors.parsers import (
    ColumnMapping,
    DistrictPageParser,
    decode_rows,
    fetch_html,
    map_columns,
    parse_vote_count,
)
from scripts.extractors.registry import get_district

from html_pages import CANDIDATES, district_page


def soup_for(html):
    return BeautifulSoup(html, "html.parser")


class TestMapColumns:
    def test_maps_header_order_to_parties(self, page):
        mapping = map_columns(soup_for(page), district=1)
        assert mapping.width == 3
        assert mapping.parties == {0: "Green", 1: "Liberal", 2: "PC"}
        assert mapping.unmapped == []

    def test_order_follows_the_page_not_the_alphabet(self):
        html = district_page(
            [("PC", "A", "ADAMS"), ("NDP", "B", "BAKER"), ("Green", "C", "CLARK")],
            [],
        )
        assert map_columns(soup_for(html)).labels() == ["PC", "NDP", "Green"]

    def test_cell_without_label_is_left_unmapped(self, caplog):
        html = (
            '<table><tr class="summaryheader">'
            '<td class="districtheadertext">0 of 1</td>'
            '<td><span>(Green)<br /></span><span>KARLA<br /></span></td>'
            '<td><span>RICHARD<br /></span><b>BROWN</b></td>'
            "</tr></table>"
        )
        mapping = map_columns(soup_for(html), district=5)
        assert mapping.width == 2
        assert mapping.parties == {0: "Green"}
        assert mapping.unmapped == [1]
        assert "no party label" in caplog.text

    def test_missing_header_raises(self):
        with pytest.raises(HeaderNotFoundError):
            map_columns(soup_for("<table></table>"), district=3)

    def test_two_header_rows_raise(self, page):
        doubled = page.replace("</table>", '<tr class="summaryheader"></tr></table>')
        with pytest.raises(HeaderNotFoundError):
            map_columns(soup_for(doubled))

    def test_duplicate_party_raises(self):
        html = district_page([("Green", "A", "B"), ("Green", "C", "D")], [])
        with pytest.raises(ColumnMappingError):
            map_columns(soup_for(html), district=2)


class TestDecodeRows:
    def test_decodes_example_row(self):
        html = district_page(CANDIDATES, [("A", ["365", "467", "684"])])
        soup = soup_for(html)
        polls = decode_rows(soup, map_columns(soup), district=1)

        assert len(polls) == 1
        assert polls[0].poll == "A"
        assert polls[0].votes == {"Green": 365, "Liberal": 467, "PC": 684}

    def test_zero_padded_polls_and_counts_are_integers(self, page):
        soup = soup_for(page)
        polls = decode_rows(soup, map_columns(soup), district=1)

        assert [result.poll for result in polls] == ["A", 1, 2, 3]
        assert polls[1].votes == {"Green": 84, "Liberal": 53, "PC": 114}

    def test_every_poll_has_the_header_party_set(self, page):
        soup = soup_for(page)
        mapping = map_columns(soup)
        for result in decode_rows(soup, mapping, district=1):
            assert set(result.votes) == set(mapping.labels())

    def test_row_width_mismatch_raises(self):
        html = district_page(CANDIDATES, [("1", ["10", "20"])])
        soup = soup_for(html)
        with pytest.raises(ColumnMismatchError, match="poll 1 has 2 result columns"):
            decode_rows(soup, map_columns(soup), district=7)

    def test_duplicate_poll_raises(self):
        html = district_page(CANDIDATES, [("1", ["1", "2", "3"]), ("001", ["4", "5", "6"])])
        soup = soup_for(html)
        with pytest.raises(DuplicatePollError):
            decode_rows(soup, map_columns(soup), district=1)

    def test_non_numeric_count_raises(self):
        html = district_page(CANDIDATES, [("1", ["1", "n/a", "3"])])
        soup = soup_for(html)
        with pytest.raises(ExtractionError, match="column 1"):
            decode_rows(soup, map_columns(soup), district=1)

    def test_unmapped_column_is_dropped(self):
        soup = soup_for(district_page(CANDIDATES, [("1", ["1", "2", "3"])]))
        mapping = ColumnMapping(width=3, parties={0: "Green", 2: "PC"})
        polls = decode_rows(soup, mapping, district=1)
        assert polls[0].votes == {"Green": 1, "PC": 3}

    def test_page_without_poll_rows(self):
        soup = soup_for(district_page(CANDIDATES, []))
        assert decode_rows(soup, map_columns(soup), district=9) == []


def test_parse_vote_count():
    assert parse_vote_count(" 0042 ") == 42
    assert parse_vote_count("1,204") == 1204
    with pytest.raises(ValueError):
        parse_vote_count("-3")


class TestFetch:
    def test_fetch_html_returns_text(self):
        response = MagicMock(text="<html></html>")
        with patch("scripts.extractors.parsers.requests.get", return_value=response) as get:
            assert fetch_html("http://example.test/district1.html", timeout=5) == "<html></html>"

        get.assert_called_once()
        assert get.call_args.kwargs["timeout"] == 5
        response.raise_for_status.assert_called_once()

    def test_network_error_becomes_fetch_error(self):
        with patch(
            "scripts.extractors.parsers.requests.get",
            side_effect=requests.ConnectionError("refused"),
        ):
            with pytest.raises(FetchError, match="refused"):
                fetch_html("http://example.test/district1.html")

    def test_http_error_becomes_fetch_error(self):
        response = MagicMock()
        response.raise_for_status.side_effect = requests.HTTPError("404 Client Error")
        with patch("scripts.extractors.parsers.requests.get", return_value=response):
            with pytest.raises(FetchError, match="404"):
                fetch_html("http://example.test/district1.html")


class TestDistrictPageParser:
    def test_parse_saved_page(self, tmp_path, page):
        (tmp_path / "district1.html").write_text(page)
        config = get_district(1, source_dir=str(tmp_path))
        parser = DistrictPageParser()

        polls = parser.parse(parser.source_for(config), config)
        assert [result.distpoll for result in polls] == ["1-A", "1-1", "1-2", "1-3"]

    def test_missing_saved_page_names_district(self, tmp_path):
        config = get_district(4, source_dir=str(tmp_path))
        parser = DistrictPageParser()

        with pytest.raises(FetchError) as excinfo:
            parser.parse(parser.source_for(config), config)
        assert excinfo.value.district == 4
        assert str(excinfo.value).startswith("District 4:")

    def test_source_defaults_to_results_url(self):
        config = get_district(12)
        assert DistrictPageParser().source_for(config).endswith("/district12.html")

    def test_rejects_unsupported_source(self):
        config = get_district(1)
        with pytest.raises(FetchError):
            DistrictPageParser().parse("results.pdf", config)
