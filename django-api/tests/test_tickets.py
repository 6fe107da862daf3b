"""Tests for ticket rendering and ticket history.

Run with: pytest tests/test_tickets.py -v
"""

import re
import uuid
from datetime import UTC, datetime

import pytest

from tests.fakes import InMemoryTicketStore
from theater.domain import AccountId, PurchaseId, TicketRecord
from theater.domain.errors import InvalidTicketIdError, TicketRenderError
from theater.services.ticket_service import TicketIssuer, TicketService, format_showtime


def svg_size(svg: str) -> int:
    return int(re.search(r'width="(\d+)"', svg).group(1))


class TestTicketIssuer:
    """Tests for TicketIssuer.render."""

    def test_output_is_deterministic(self):
        """The same identifier always yields the same document."""
        identifier = str(uuid.uuid4())
        issuer = TicketIssuer()
        assert issuer.render(identifier) == issuer.render(identifier)
        assert TicketIssuer().render(identifier) == issuer.render(identifier)

    def test_distinct_identifiers_differ(self):
        issuer = TicketIssuer()
        assert issuer.render(str(uuid.uuid4())) != issuer.render(str(uuid.uuid4()))

    def test_svg_is_square_and_at_least_min_size(self):
        svg = TicketIssuer().render(str(uuid.uuid4()))
        assert svg.startswith("<svg")
        assert svg.endswith("</svg>")
        size = svg_size(svg)
        assert size >= 400
        assert f'height="{size}"' in svg

    def test_smallest_box_size_reaching_min_size(self):
        """A version 1 code is 21 modules plus an 8 module quiet zone."""
        svg = TicketIssuer().render("abc")
        assert svg_size(svg) == 29 * 14
        assert 'viewBox="0 0 406 406"' in svg
        assert svg.count("<path") == 1

    def test_honors_larger_min_size(self):
        assert svg_size(TicketIssuer(min_size=1000).render("abc")) >= 1000

    def test_palette(self):
        """Dark modules on a light background."""
        svg = TicketIssuer().render("abc")
        assert 'fill="#ffffff"' in svg
        assert 'fill="#000000"' in svg

    def test_custom_palette(self):
        svg = TicketIssuer(dark_color="#112233", light_color="#fafafa").render("abc")
        assert 'fill="#112233"' in svg
        assert 'fill="#fafafa"' in svg

    def test_empty_identifier(self):
        with pytest.raises(InvalidTicketIdError):
            TicketIssuer().render("")

    def test_oversized_identifier(self):
        """Data beyond the largest QR version cannot be rendered."""
        with pytest.raises(TicketRenderError):
            TicketIssuer().render("x" * 4000)


class TestTicketService:
    """Tests for TicketService listing and search."""

    @pytest.fixture
    def account_id(self):
        return AccountId(uuid.uuid4())

    @pytest.fixture
    def store(self, account_id):
        store = InMemoryTicketStore()
        store.add(
            account_id,
            TicketRecord(
                purchase_id=PurchaseId(uuid.UUID("11111111-1111-4111-8111-111111111111")),
                movie_name="Dune",
                starts_at=datetime(2026, 3, 14, 19, 30, tzinfo=UTC),
                seat_number=12,
            ),
        )
        store.add(
            account_id,
            TicketRecord(
                purchase_id=PurchaseId(uuid.UUID("22222222-2222-4222-8222-222222222222")),
                movie_name="Arrival",
                starts_at=datetime(2026, 3, 13, 21, 0, tzinfo=UTC),
                seat_number=3,
            ),
        )
        return store

    @pytest.fixture
    def service(self, store):
        return TicketService(store, TicketIssuer())

    def test_list_tickets_ordered_by_showtime(self, service, account_id):
        tickets = service.list_tickets(account_id)
        assert [t.movie for t in tickets] == ["Arrival", "Dune"]
        assert tickets[0].svg == TicketIssuer().render(tickets[0].id)

    def test_list_tickets_other_account(self, service):
        assert service.list_tickets(AccountId(uuid.uuid4())) == []

    def test_time_uses_display_format(self, service, account_id):
        ticket = service.list_tickets(account_id)[1]
        assert ticket.time == format_showtime(ticket.starts_at) == "19:30, 14 Mar 2026"

    @pytest.mark.parametrize(
        "query,movies",
        [
            ("dune", ["Dune"]),
            ("  ARR  ", ["Arrival"]),
            ("12", ["Dune"]),
            ("3", ["Arrival", "Dune"]),
            ("14 Mar", ["Dune"]),
            ("22222222", ["Arrival"]),
            ("Gattaca", []),
        ],
    )
    def test_search(self, service, account_id, query, movies):
        """Matches on movie name, display time, seat number or purchase id."""
        assert [t.movie for t in service.search_tickets(account_id, query)] == movies
