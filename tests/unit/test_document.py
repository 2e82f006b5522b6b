"""Unit tests for the QueueDocument entity and the markdown codec."""

from datetime import date

import pytest

from review_queue.domain.document import QueueDocument
from review_queue.domain.markdown import (
    join_document,
    parse_table_rows,
    render_table,
    split_document,
    split_row,
)
from review_queue.errors import ParseError
from review_queue.models.row import AFactorRow, IterationRow, SimpleRow
from review_queue.utils.validation import EPOCH

TODAY = date(2024, 6, 1)
PAST = date(2024, 5, 1)
FUTURE = date(2024, 7, 1)


def _links(document: QueueDocument) -> list[str]:
    return [row.link for row in document]


class TestMarkdownCodec:
    """Tests for splitting and rendering document text."""

    def test_split_document(self) -> None:
        text = '---\nscheduler: "simple"\n---\n\n| a |\n'
        front_matter, body = split_document(text)
        assert front_matter == 'scheduler: "simple"'
        assert body == [(4, ""), (5, "| a |")]

    def test_split_without_front_matter(self) -> None:
        front_matter, body = split_document("| a |\n| b |")
        assert front_matter is None
        assert body == [(1, "| a |"), (2, "| b |")]

    def test_split_row(self) -> None:
        assert split_row("| [[A]] | 10 |  | 2 | 2024-01-01 |") == [
            "[[A]]",
            "10",
            "",
            "2",
            "2024-01-01",
        ]

    def test_parse_table_rows_skips_preamble(self) -> None:
        body = [(4, ""), (5, "| Link |"), (6, "| :--- |"), (7, "| [[A]] |"), (8, "  ")]
        assert parse_table_rows(body) == [(7, ["[[A]]"])]

    def test_render_table(self) -> None:
        table = render_table(("Name", "N"), [("alpha", "7")], ("l", "r"))
        assert table == "| Name  |   N |\n| :---- | --: |\n| alpha |   7 |"

    def test_join_document(self) -> None:
        assert join_document("---\n---", "| a |") == "---\n---\n\n| a |"


class TestParse:
    """Tests for QueueDocument.parse."""

    def test_parse_afactor_document(self, afactor_document_text: str) -> None:
        document = QueueDocument.parse(afactor_document_text, AFactorRow)
        assert _links(document) == ["Reading/Paper", "Reading/Book", "Reading/Blog"]
        paper = document.rows[0]
        assert isinstance(paper, AFactorRow)
        assert paper.priority == 40
        assert paper.notes == "skim methods"
        assert paper.interval == 2
        assert paper.next_rep_date == date(2020, 1, 1)

    def test_parse_iteration_document(self) -> None:
        text = (
            '---\nscheduler: "iteration"\niteration: "W1"\n---\n\n'
            "| Link | Priority | Notes | Interval | Next Rep |\n"
            "| :--- | ---: | :--- | ---: | ---: |\n"
            "| [[Essay]] | 12.5 | draft | W0 | 2024-02-03 |\n"
        )
        document = QueueDocument.parse(text, IterationRow)
        assert document.rows == [
            IterationRow(
                link="Essay",
                priority=12.5,
                notes="draft",
                iteration="W0",
                last_read_date=date(2024, 2, 3),
            )
        ]

    def test_parse_empty_table(self) -> None:
        assert not QueueDocument.parse('---\nscheduler: "simple"\n---\n\n', SimpleRow).has_reps

    def test_parse_error_reports_line(self) -> None:
        text = (
            '---\nscheduler: "simple"\n---\n\n'
            "| Link | Priority | Notes | Interval | Next Rep |\n"
            "| :--- | ---: | :--- | ---: | ---: |\n"
            "| [[A]] | 10 |  | 1 | 2024-01-01 |\n"
            "| [[B]] | 10 | 1 | 2024-01-01 |\n"
        )
        with pytest.raises(ParseError) as exc_info:
            QueueDocument.parse(text, SimpleRow)
        assert exc_info.value.line_number == 8
        assert str(exc_info.value).startswith("line 8:")

    def test_invalid_cells_replaced(self) -> None:
        text = (
            "| Link | Priority | Notes | Interval | Next Rep |\n"
            "| :--- | ---: | :--- | ---: | ---: |\n"
            "| [[A]] | lots |  | -1 | whenever |\n"
        )
        row = QueueDocument.parse(text, AFactorRow).rows[0]
        assert isinstance(row, AFactorRow)
        assert (row.priority, row.interval, row.next_rep_date) == (30, 1, EPOCH)


class TestOrdering:
    """Tests for sorting and current/next selection."""

    def _document(self) -> QueueDocument:
        return QueueDocument(
            rows=[
                SimpleRow(link="A", priority=50, next_rep_date=PAST),
                SimpleRow(link="B", priority=10, next_rep_date=FUTURE),
                SimpleRow(link="C", priority=20, next_rep_date=PAST),
                SimpleRow(link="D", priority=5, next_rep_date=FUTURE),
            ]
        )

    def test_due_rows_first_then_priority(self) -> None:
        document = self._document()
        document.sort_reps(TODAY)
        assert _links(document) == ["C", "A", "D", "B"]

    def test_sort_is_stable_for_equal_priority(self) -> None:
        document = QueueDocument(
            rows=[
                SimpleRow(link="first", priority=10, next_rep_date=PAST),
                SimpleRow(link="second", priority=10, next_rep_date=PAST),
            ]
        )
        document.sort_reps(TODAY)
        assert _links(document) == ["first", "second"]

    def test_current_and_next(self) -> None:
        document = self._document()
        current = document.current_rep(TODAY)
        upcoming = document.next_rep(TODAY)
        assert current is not None and current.link == "C"
        assert upcoming is not None and upcoming.link == "A"

    def test_current_is_not_due_when_nothing_is(self) -> None:
        document = QueueDocument(rows=[SimpleRow(link="B", next_rep_date=FUTURE)])
        current = document.current_rep(TODAY)
        assert current is not None
        assert not current.is_due(TODAY)
        assert document.next_rep(TODAY) is None

    def test_empty_document(self) -> None:
        document = QueueDocument()
        assert document.current_rep(TODAY) is None
        assert document.next_rep(TODAY) is None
        assert document.remove_current_rep(TODAY) is None

    def test_remove_current_rep(self) -> None:
        document = self._document()
        removed = document.remove_current_rep(TODAY)
        assert removed is not None and removed.link == "C"
        assert len(document) == 3
        assert not document.has_row_with_link("C")


class TestMutation:
    """Tests for pruning, lookup and priority spreading."""

    def test_prune_deleted(self) -> None:
        document = QueueDocument(rows=[SimpleRow(link="A"), SimpleRow(link="B")])
        removed = document.prune_deleted(lambda link: link != "B")
        assert removed == 1
        assert document.pruned_any
        assert _links(document) == ["A"]

    def test_prune_nothing(self) -> None:
        document = QueueDocument(rows=[SimpleRow(link="A")])
        assert document.prune_deleted(lambda link: True) == 0
        assert not document.pruned_any

    def test_find_ignores_brackets(self) -> None:
        document = QueueDocument(rows=[SimpleRow(link="Reading/Paper")])
        assert document.has_row_with_link("[[Reading/Paper]]")
        assert document.find("Reading/Other") is None

    def test_replace_row(self) -> None:
        old = SimpleRow(link="A")
        document = QueueDocument(rows=[SimpleRow(link="Z"), old])
        new = old.replace(notes="edited")
        document.replace_row(old, new)
        assert document.rows[1] is new

    def test_replace_missing_row(self) -> None:
        document = QueueDocument(rows=[SimpleRow(link="A")])
        with pytest.raises(ValueError):
            document.replace_row(SimpleRow(link="A"), SimpleRow(link="B"))

    def test_spread_priorities(self) -> None:
        document = QueueDocument(
            rows=[SimpleRow(link="A", priority=90), SimpleRow(link="B"), SimpleRow(link="C")]
        )
        document.spread_priorities()
        assert [row.priority for row in document] == [33.3, 66.6, 99.9]
        assert _links(document) == ["A", "B", "C"]


class TestSerialize:
    """Tests for QueueDocument.serialize."""

    def test_empty_document(self) -> None:
        assert QueueDocument().serialize() == ""

    def test_single_row(self) -> None:
        document = QueueDocument(rows=[AFactorRow(link="Paper")])
        assert document.serialize() == (
            "| Link      | Priority | Notes | Interval |   Next Rep |\n"
            "| :-------- | -------: | :---- | -------: | ---------: |\n"
            "| [[Paper]] |       30 |       |        1 | 1970-01-01 |"
        )

    def test_parse_serialize_round_trip(self, afactor_document_text: str) -> None:
        document = QueueDocument.parse(afactor_document_text, AFactorRow)
        reparsed = QueueDocument.parse(document.serialize(), AFactorRow)
        assert reparsed.rows == document.rows

    def test_simple_round_trip(self) -> None:
        document = QueueDocument(
            rows=[
                SimpleRow(link="Essay", priority=12.5, notes="  padded  ", next_rep_date=PAST),
                SimpleRow(link="Reading/Paper", interval=7, next_rep_date=FUTURE),
            ]
        )
        reparsed = QueueDocument.parse(document.serialize(), SimpleRow)
        assert reparsed.rows == document.rows
        assert reparsed.rows[0].notes == "padded"

    def test_iteration_round_trip(self) -> None:
        document = QueueDocument(
            rows=[
                IterationRow(link="Essay", priority=33.3, iteration="Week 2", last_read_date=PAST),
                IterationRow(link="Reading/Book", notes="ch. 4", iteration=""),
            ]
        )
        reparsed = QueueDocument.parse(document.serialize(), IterationRow)
        assert reparsed.rows == document.rows
