"""Tests for corpus parsing."""

from conftest import ANALYST_CORPUS

from medcorpus.engine.core import parse_corpus


class TestSections:
    def test_sections_in_source_order(self):
        corpus = parse_corpus(ANALYST_CORPUS)

        assert corpus.total_sections == 3
        assert [s.name for s in corpus.sections] == ["CBC Report", "Metabolic Panel", "Thyroid Panel"]
        assert corpus.document_names == ("CBC Report", "Metabolic Panel", "Thyroid Panel")

    def test_line_spans(self):
        corpus = parse_corpus(ANALYST_CORPUS)
        spans = [(s.start_line, s.end_line) for s in corpus.sections]

        assert spans == [(0, 6), (7, 11), (12, 15)]
        # last section ends on the final line of the input
        assert spans[-1][1] == len(ANALYST_CORPUS.split("\n")) - 1

    def test_content_is_stripped(self):
        section = parse_corpus(ANALYST_CORPUS).sections[1]
        assert section.content == (
            "Date: 2020-06-10\n| Glucose | 105 | 70-100 | mg/dL |\n| HbA1c | 5.7 | 4.0-5.6 | % |"
        )

    def test_page_numbers(self):
        raw = "## [Lab Report] - Page 1\nfirst\n## [Lab Report] - Page 2\nsecond\n## [Notes]\nthird"
        corpus = parse_corpus(raw)

        assert [s.page_number for s in corpus.sections] == [1, 2, None]
        assert corpus.sections[1].label == "Lab Report - Page 2"
        assert corpus.sections[2].label == "Notes"
        assert corpus.document_names == ("Lab Report", "Notes")

    def test_page_suffix_whitespace_tolerant(self):
        corpus = parse_corpus("## [Scan]-Page 3\ntext")
        assert corpus.sections[0].page_number == 3

    def test_preamble_discarded(self):
        corpus = parse_corpus("Extraction log 2024-01-01\n## [A]\nbody")

        assert corpus.total_sections == 1
        assert corpus.sections[0].content == "body"
        assert corpus.timeline_events == ()

    def test_no_headers(self):
        raw = "plain text without any headers 2024-01-01"
        corpus = parse_corpus(raw)

        assert corpus.sections == ()
        assert corpus.document_names == ()
        assert corpus.total_characters == len(raw)
        assert corpus.date_range is None

    def test_sections_never_overlap(self):
        corpus = parse_corpus(ANALYST_CORPUS)
        for earlier, later in zip(corpus.sections, corpus.sections[1:]):
            assert earlier.start_line <= earlier.end_line < later.start_line


class TestTemporalIndex:
    def test_date_range(self):
        corpus = parse_corpus(ANALYST_CORPUS)

        assert corpus.date_range.earliest == "2020-06-10"
        assert corpus.date_range.latest == "2024-03-15"
        assert corpus.date_range.years == 5

    def test_two_document_scenario(self):
        raw = "## [CBC Report]\nDate: 2024-03-15\n## [Metabolic Panel]\nDate: 2020-06-10"
        date_range = parse_corpus(raw).date_range

        assert (date_range.earliest, date_range.latest, date_range.years) == (
            "2020-06-10",
            "2024-03-15",
            5,
        )

    def test_timeline_sorted_and_attributed(self):
        events = parse_corpus(ANALYST_CORPUS).timeline_events

        assert [e.date for e in events] == ["2020-06-10", "2022-09-01", "2024-03-15"]
        assert [e.document for e in events] == ["Metabolic Panel", "Thyroid Panel", "CBC Report"]

    def test_documents_by_year(self):
        corpus = parse_corpus(ANALYST_CORPUS)

        assert corpus.documents_by_year == {
            2020: ["Metabolic Panel"],
            2022: ["Thyroid Panel"],
            2024: ["CBC Report"],
        }
        assert corpus.years_with_data() == [2020, 2022, 2024]

    def test_documents_by_year_deduplicated(self):
        raw = "## [Lab] - Page 1\n2021-01-01\n2021-02-01\n## [Lab] - Page 2\n2021-03-01"
        assert parse_corpus(raw).documents_by_year == {2021: ["Lab"]}

    def test_month_only_dates_are_events(self):
        corpus = parse_corpus("## [Note]\nSeen March 2019")

        assert [e.date for e in corpus.timeline_events] == ["2019-03"]
        assert corpus.date_range.years == 1


class TestProperties:
    def test_total_characters(self):
        assert parse_corpus(ANALYST_CORPUS).total_characters == len(ANALYST_CORPUS)
        assert parse_corpus("").total_characters == 0

    def test_parsing_is_deterministic(self):
        assert parse_corpus(ANALYST_CORPUS) == parse_corpus(ANALYST_CORPUS)
