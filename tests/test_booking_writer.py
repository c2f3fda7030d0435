from decimal import Decimal
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import InternalError, NotFound, SeatConflict, ValidationError
from app.models import Booking, BookingSeat, MovieBookingSeat
from app.services import booking_writer
from app.services.booking_writer import (
    EventBookingRequest,
    EventSeatLine,
    MovieBookingRequest,
    MovieSeatLine,
    create_booking,
    list_user_bookings,
)
from app.services.inventory import price_for


def _event_request(user_id, event, seats, total=None, prices=None):
    prices = prices or [price_for(s, event) for s in seats]
    lines = [EventSeatLine(seat_id=s.id, price=p) for s, p in zip(seats, prices)]
    return EventBookingRequest(
        user_id=user_id,
        event_id=event.id,
        total_amount=total if total is not None else sum(prices, Decimal("0")),
        seats=lines,
    )


@pytest.fixture()
def stage(make):
    user = make.user()
    venue = make.venue()
    event = make.event(venue)
    vip = make.seat(venue, row="A", seat_number="1")
    premium = make.seat(
        venue, row="F", seat_number="1", section="Premium",
        seat_type="premium", price_multiplier=Decimal("1.50"),
    )
    return user, venue, event, vip, premium


def test_event_booking_persists_booking_and_lines(db, stage):
    user, venue, event, vip, premium = stage

    booking = create_booking(db, _event_request(user.id, event, [vip, premium]))

    assert booking.status == "confirmed"
    assert booking.kind == "event"
    assert booking.total_amount == Decimal("269.97") + Decimal("161.98")
    assert {bs.seat_id for bs in booking.seats} == {vip.id, premium.id}
    assert {bs.price for bs in booking.seats} == {Decimal("269.97"), Decimal("161.98")}
    assert booking.event.venue.name == venue.name
    assert all(bs.event_id == event.id for bs in booking.seats)


def test_second_booking_of_same_seat_is_a_conflict(db, make, stage):
    user, venue, event, vip, premium = stage
    other = make.user("user-2")
    create_booking(db, _event_request(user.id, event, [vip]))

    with pytest.raises(SeatConflict) as exc_info:
        create_booking(db, _event_request(other.id, event, [premium, vip]))

    assert exc_info.value.unavailable_seat_ids == [str(vip.id)]
    assert db.query(Booking).count() == 1
    assert db.query(BookingSeat).count() == 1


def test_unique_constraint_catches_a_writer_that_missed_the_check(db, make, stage, monkeypatch):
    user, venue, event, vip, premium = stage
    other = make.user("user-2")
    create_booking(db, _event_request(user.id, event, [vip]))

    # Simulate a concurrent writer whose availability read happened before the first commit
    monkeypatch.setattr(booking_writer, "booked_seat_ids", lambda db, event_id: set())

    with pytest.raises(SeatConflict):
        create_booking(db, _event_request(other.id, event, [vip]))

    assert db.query(Booking).count() == 1
    assert db.query(Booking).filter(Booking.user_id == other.id).count() == 0


def test_seat_from_another_venue_is_rejected(db, make, stage):
    user, venue, event, vip, premium = stage
    elsewhere = make.venue(name="Hollywood Bowl", city="Los Angeles", state="CA")
    foreign_seat = make.seat(elsewhere, row="A", seat_number="1")

    with pytest.raises(ValidationError) as exc_info:
        create_booking(db, _event_request(
            user.id, event, [foreign_seat], prices=[Decimal("269.97")],
        ))

    assert exc_info.value.errors[0]["loc"] == ["body", "seats", 0, "seatId"]
    assert db.query(Booking).count() == 0


def test_unknown_seat_is_rejected(db, stage):
    user, venue, event, vip, premium = stage
    request = EventBookingRequest(
        user_id=user.id,
        event_id=event.id,
        total_amount=Decimal("10.00"),
        seats=[EventSeatLine(seat_id=uuid4(), price=Decimal("10.00"))],
    )

    with pytest.raises(ValidationError):
        create_booking(db, request)


def test_submitted_price_must_match_seat_price(db, stage):
    user, venue, event, vip, premium = stage

    # Whole-unit display price is not the bookable price
    with pytest.raises(ValidationError) as exc_info:
        create_booking(db, _event_request(user.id, event, [vip], prices=[Decimal("270")]))

    assert exc_info.value.errors[0]["loc"] == ["body", "seats", 0, "price"]
    assert exc_info.value.errors[0]["msg"].startswith("Price for this seat is 269.97")
    assert f"/events/{event.id}/seats" in exc_info.value.errors[0]["msg"]


def test_total_must_match_sum_of_seat_prices(db, stage):
    user, venue, event, vip, premium = stage

    with pytest.raises(ValidationError) as exc_info:
        create_booking(db, _event_request(user.id, event, [vip], total=Decimal("1.00")))

    assert exc_info.value.errors[0]["loc"] == ["body", "totalAmount"]
    assert db.query(Booking).count() == 0


def test_duplicate_seats_in_one_request_are_rejected(db, stage):
    user, venue, event, vip, premium = stage

    with pytest.raises(ValidationError):
        create_booking(db, _event_request(user.id, event, [vip, vip]))


def test_unknown_event_is_not_found(db, stage):
    user = stage[0]
    request = EventBookingRequest(
        user_id=user.id,
        event_id=uuid4(),
        total_amount=Decimal("10.00"),
        seats=[EventSeatLine(seat_id=uuid4(), price=Decimal("10.00"))],
    )

    with pytest.raises(NotFound):
        create_booking(db, request)


def test_failed_write_leaves_no_orphaned_booking(db, stage):
    user, venue, event, vip, premium = stage

    # Unknown user violates the users foreign key when the booking row is flushed
    with pytest.raises(InternalError) as exc_info:
        create_booking(db, _event_request("ghost", event, [vip]))

    assert isinstance(exc_info.value.__cause__, IntegrityError)

    assert db.query(Booking).count() == 0
    assert db.query(BookingSeat).count() == 0


def test_movie_booking_persists_seat_numbers(db, make):
    user = make.user()
    showtime = make.showtime(make.movie(), make.theater())

    booking = create_booking(db, MovieBookingRequest(
        user_id=user.id,
        showtime_id=showtime.id,
        total_amount=Decimal("25.98"),
        seats=[
            MovieSeatLine(seat_number="F7", price=Decimal("12.99")),
            MovieSeatLine(seat_number="F8", price=Decimal("12.99")),
        ],
    ))

    assert booking.kind == "movie"
    assert booking.event_id is None
    assert sorted(ms.seat_number for ms in booking.movie_seats) == ["F7", "F8"]
    assert booking.showtime.movie.title == "Dune: Part Two"


def test_movie_seat_number_cannot_be_booked_twice(db, make):
    user = make.user()
    other = make.user("user-2")
    showtime = make.showtime(make.movie(), make.theater())

    def request(user_id):
        return MovieBookingRequest(
            user_id=user_id,
            showtime_id=showtime.id,
            total_amount=Decimal("12.99"),
            seats=[MovieSeatLine(seat_number="F7", price=Decimal("12.99"))],
        )

    create_booking(db, request(user.id))
    with pytest.raises(SeatConflict) as exc_info:
        create_booking(db, request(other.id))

    assert exc_info.value.unavailable_seat_numbers == ["F7"]
    assert db.query(MovieBookingSeat).count() == 1


def test_movie_booking_cannot_exceed_theater_seats(db, make):
    user = make.user()
    showtime = make.showtime(make.movie(), make.theater(total_seats=1))

    with pytest.raises(SeatConflict):
        create_booking(db, MovieBookingRequest(
            user_id=user.id,
            showtime_id=showtime.id,
            total_amount=Decimal("25.98"),
            seats=[
                MovieSeatLine(seat_number="A1", price=Decimal("12.99")),
                MovieSeatLine(seat_number="A2", price=Decimal("12.99")),
            ],
        ))


def test_unknown_showtime_is_not_found(db, make):
    user = make.user()

    with pytest.raises(NotFound):
        create_booking(db, MovieBookingRequest(
            user_id=user.id,
            showtime_id=uuid4(),
            total_amount=Decimal("12.99"),
            seats=[MovieSeatLine(seat_number="A1", price=Decimal("12.99"))],
        ))


def test_list_user_bookings_only_returns_own_bookings(db, make, stage):
    user, venue, event, vip, premium = stage
    other = make.user("user-2")
    create_booking(db, _event_request(user.id, event, [vip]))
    create_booking(db, _event_request(other.id, event, [premium]))

    bookings = list_user_bookings(db, user.id)

    assert len(bookings) == 1
    assert bookings[0].user_id == user.id


def test_blank_movie_seat_number_is_rejected(db, make):
    user = make.user()
    showtime = make.showtime(make.movie(), make.theater())

    with pytest.raises(ValidationError) as exc_info:
        create_booking(db, MovieBookingRequest(
            user_id=user.id,
            showtime_id=showtime.id,
            total_amount=Decimal("25.98"),
            seats=[
                MovieSeatLine(seat_number="F7", price=Decimal("12.99")),
                MovieSeatLine(seat_number="   ", price=Decimal("12.99")),
            ],
        ))

    assert exc_info.value.errors[0]["loc"] == ["body", "seats", 1, "seatNumber"]
    assert db.query(Booking).count() == 0
    assert db.query(MovieBookingSeat).count() == 0
