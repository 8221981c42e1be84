"""Tests for the sneaker service."""
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from models.brand import Brand
from models.sneaker import Sneaker
from models.user import User
from schemas.sneaker import SneakerCreate
from services import sneaker_service


@pytest.fixture
async def alice(make_user: Callable[..., Awaitable[User]]) -> User:
    """Owner with a distinctive name."""
    return await make_user("alice", given_name="Alice", family_name="Liddell")


@pytest.fixture
async def nike(make_brand: Callable[..., Awaitable[Brand]]) -> Brand:
    """A brand."""
    return await make_brand("Nike")


class TestGetYearInSneakers:
    """Tests for the year-range query."""

    @pytest.fixture
    async def boundary_sneakers(
        self,
        alice: User,
        nike: Brand,
        make_sneaker: Callable[..., Awaitable[Sneaker]],
    ) -> dict[str, Sneaker]:
        """Sneakers on Jan 1st, mid-year, Dec 31st and the next Jan 1st."""
        return {
            "jan": await make_sneaker(alice, nike, datetime(2021, 1, 1, tzinfo=UTC)),
            "jun": await make_sneaker(alice, nike, datetime(2021, 6, 15, 12, tzinfo=UTC)),
            "dec": await make_sneaker(alice, nike, datetime(2021, 12, 31, tzinfo=UTC)),
            "next": await make_sneaker(alice, nike, datetime(2022, 1, 1, tzinfo=UTC)),
        }

    async def test__ascending__returns_year_only(
        self,
        db_session: AsyncSession,
        boundary_sneakers: dict[str, Sneaker],
    ) -> None:
        """Only sneakers inside the year are returned, oldest first."""
        result = await sneaker_service.get_year_in_sneakers(db_session, 2021, order="asc")

        assert [s.id for s in result] == [
            boundary_sneakers["jan"].id,
            boundary_sneakers["jun"].id,
            boundary_sneakers["dec"].id,
        ]

    async def test__descending__reverses_order(
        self,
        db_session: AsyncSession,
        boundary_sneakers: dict[str, Sneaker],
    ) -> None:
        """order='desc' returns newest first."""
        result = await sneaker_service.get_year_in_sneakers(db_session, 2021, order="desc")

        assert [s.id for s in result] == [
            boundary_sneakers["dec"].id,
            boundary_sneakers["jun"].id,
            boundary_sneakers["jan"].id,
        ]

    async def test__defaults_to_ascending(
        self,
        db_session: AsyncSession,
        boundary_sneakers: dict[str, Sneaker],
    ) -> None:
        """Without an order the result is oldest first."""
        result = await sneaker_service.get_year_in_sneakers(db_session, 2021)

        assert result[0].id == boundary_sneakers["jan"].id

    async def test__late_december_31__is_included(
        self,
        db_session: AsyncSession,
        alice: User,
        nike: Brand,
        make_sneaker: Callable[..., Awaitable[Sneaker]],
    ) -> None:
        """The whole of December 31st belongs to the year."""
        late = await make_sneaker(alice, nike, datetime(2021, 12, 31, 23, 30, tzinfo=UTC))

        result = await sneaker_service.get_year_in_sneakers(db_session, 2021)

        assert [s.id for s in result] == [late.id]

    async def test__includes_owner_names(
        self,
        db_session: AsyncSession,
        boundary_sneakers: dict[str, Sneaker],  # noqa: ARG002
    ) -> None:
        """Each sneaker carries its owner's given and family name."""
        result = await sneaker_service.get_year_in_sneakers(db_session, 2021)

        assert {(s.user.given_name, s.user.family_name) for s in result} == {
            ("Alice", "Liddell"),
        }

    async def test__includes_every_owner(
        self,
        db_session: AsyncSession,
        alice: User,
        nike: Brand,
        make_user: Callable[..., Awaitable[User]],
        make_sneaker: Callable[..., Awaitable[Sneaker]],
    ) -> None:
        """The query is not scoped to a single user."""
        bob = await make_user("bob")
        await make_sneaker(alice, nike, datetime(2021, 3, 1, tzinfo=UTC))
        await make_sneaker(bob, nike, datetime(2021, 4, 1, tzinfo=UTC))

        result = await sneaker_service.get_year_in_sneakers(db_session, 2021)

        assert [s.user_id for s in result] == [alice.id, bob.id]

    async def test__empty_year__returns_empty_list(
        self,
        db_session: AsyncSession,
        boundary_sneakers: dict[str, Sneaker],  # noqa: ARG002
    ) -> None:
        """A year with no purchases is an empty result, not an error."""
        assert await sneaker_service.get_year_in_sneakers(db_session, 1999) == []

    async def test__time_zone_moves_boundary(
        self,
        db_session: AsyncSession,
        alice: User,
        nike: Brand,
        make_sneaker: Callable[..., Awaitable[Sneaker]],
    ) -> None:
        """New Year's Eve evening in New York is already next year in UTC."""
        new_york = ZoneInfo("America/New_York")
        eve = await make_sneaker(alice, nike, datetime(2021, 12, 31, 21, tzinfo=new_york))

        utc_2021 = await sneaker_service.get_year_in_sneakers(db_session, 2021, tz=UTC)
        utc_2022 = await sneaker_service.get_year_in_sneakers(db_session, 2022, tz=UTC)
        ny_2021 = await sneaker_service.get_year_in_sneakers(db_session, 2021, tz=new_york)

        assert utc_2021 == []
        assert [s.id for s in utc_2022] == [eve.id]
        assert [s.id for s in ny_2021] == [eve.id]

    @pytest.mark.parametrize(
        ("year", "zone"),
        [(1, "Asia/Tokyo"), (9999, "America/New_York")],
    )
    async def test__edge_years_in_offset_zone__query_runs(
        self,
        db_session: AsyncSession,
        boundary_sneakers: dict[str, Sneaker],  # noqa: ARG002
        year: int,
        zone: str,
    ) -> None:
        """Years whose local bounds fall outside UTC's range still query cleanly."""
        result = await sneaker_service.get_year_in_sneakers(db_session, year, tz=ZoneInfo(zone))

        assert result == []

    async def test__rejects_unknown_order(self, db_session: AsyncSession) -> None:
        """Only 'asc' and 'desc' are valid."""
        with pytest.raises(ValueError, match="order"):
            await sneaker_service.get_year_in_sneakers(db_session, 2021, order="sideways")


class TestCreateSneaker:
    """Tests for logging purchases."""

    async def test__create_sneaker__persists_fields(
        self,
        db_session: AsyncSession,
        alice: User,
        nike: Brand,
    ) -> None:
        """All purchase fields are stored and sold defaults to False."""
        sneaker = await sneaker_service.create_sneaker(
            db_session,
            alice.id,
            SneakerCreate(
                brand_id=nike.id,
                model="Dunk Low",
                colorway="Panda",
                price=16000,
                retail_price=11000,
                purchase_date=datetime(2022, 6, 4, 12, tzinfo=UTC),
                size=Decimal("10"),
            ),
        )

        assert sneaker.id is not None
        assert sneaker.user_id == alice.id
        assert sneaker.sold is False
        assert sneaker.sold_price is None

    async def test__create_sneaker__unknown_brand_fails(
        self,
        db_session: AsyncSession,
        alice: User,
    ) -> None:
        """A sneaker must reference an existing brand."""
        with pytest.raises(IntegrityError):
            await sneaker_service.create_sneaker(
                db_session,
                alice.id,
                SneakerCreate(
                    brand_id=999_999,
                    model="Ghost",
                    colorway="None",
                    price=1,
                    retail_price=1,
                    purchase_date=datetime(2022, 6, 4, tzinfo=UTC),
                    size=Decimal("9"),
                ),
            )


class TestGetSneakersForBrand:
    """Tests for browsing by brand."""

    async def test__returns_brand_sneakers_newest_first(
        self,
        db_session: AsyncSession,
        alice: User,
        nike: Brand,
        make_brand: Callable[..., Awaitable[Brand]],
        make_sneaker: Callable[..., Awaitable[Sneaker]],
    ) -> None:
        """Only the brand's sneakers are listed, newest purchase first."""
        adidas = await make_brand("adidas")
        older = await make_sneaker(alice, nike, datetime(2020, 1, 1, tzinfo=UTC))
        newer = await make_sneaker(alice, nike, datetime(2021, 1, 1, tzinfo=UTC))
        await make_sneaker(alice, adidas, datetime(2021, 2, 1, tzinfo=UTC))

        result = await sneaker_service.get_sneakers_for_brand(db_session, "nike")

        assert [s.id for s in result] == [newer.id, older.id]

    async def test__unknown_brand__returns_none(self, db_session: AsyncSession) -> None:
        """A slug with no brand is distinguishable from a brand with no sneakers."""
        assert await sneaker_service.get_sneakers_for_brand(db_session, "nope") is None

    async def test__brand_without_sneakers__returns_empty(
        self,
        db_session: AsyncSession,
        nike: Brand,  # noqa: ARG002
    ) -> None:
        """An existing brand with no sneakers yields an empty list."""
        assert await sneaker_service.get_sneakers_for_brand(db_session, "nike") == []
