"""Seed script to populate the local dev database with a demo sneaker collection.

Usage:
    PYTHONPATH=backend/src python backend/scripts/seed_data.py populate
    PYTHONPATH=backend/src python backend/scripts/seed_data.py populate --force
    PYTHONPATH=backend/src python backend/scripts/seed_data.py clear
"""

import argparse
import asyncio
import logging
from datetime import datetime, tzinfo
from decimal import Decimal

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import get_settings
from db.session import create_engine_from_settings, create_session_factory
from models import Brand, Sneaker, User
from schemas.brand import BrandCreate
from schemas.sneaker import SneakerCreate
from schemas.user import UserCreate
from services import brand_service, sneaker_service, user_service

DEMO_USERNAME = 'demo'

BRAND_NAMES = ['Nike', 'Jordan', 'adidas', 'New Balance', 'ASICS', 'Converse']

SNEAKERS = [
    {'brand': 'Jordan', 'model': 'Air Jordan 1 Retro High OG', 'colorway': 'Chicago',
     'price': 17000, 'retail_price': 17000, 'purchase_date': '2019-11-02', 'size': '10'},
    {'brand': 'Nike', 'model': 'Air Max 1', 'colorway': 'Anniversary Red',
     'price': 14000, 'retail_price': 14000, 'purchase_date': '2020-03-26', 'size': '10'},
    {'brand': 'adidas', 'model': 'Samba OG', 'colorway': 'Cloud White / Core Black',
     'price': 10000, 'retail_price': 10000, 'purchase_date': '2020-07-14', 'size': '9.5'},
    {'brand': 'New Balance', 'model': '990v5', 'colorway': 'Grey',
     'price': 17500, 'retail_price': 17500, 'purchase_date': '2020-12-31', 'size': '10'},
    {'brand': 'ASICS', 'model': 'GEL-Kayano 14', 'colorway': 'Cream / Pure Silver',
     'price': 15000, 'retail_price': 15000, 'purchase_date': '2021-01-01', 'size': '10.5'},
    {'brand': 'Jordan', 'model': 'Air Jordan 4 Retro', 'colorway': 'Bred',
     'price': 21000, 'retail_price': 21000, 'purchase_date': '2021-05-29', 'size': '10',
     'sold': True, 'sold_date': '2022-02-10', 'sold_price': 32500},
    {'brand': 'Converse', 'model': 'Chuck 70 Hi', 'colorway': 'Parchment',
     'price': 8500, 'retail_price': 8500, 'purchase_date': '2021-09-18', 'size': '9'},
    {'brand': 'Nike', 'model': 'Dunk Low', 'colorway': 'Panda',
     'price': 16000, 'retail_price': 11000, 'purchase_date': '2022-06-04', 'size': '10'},
]


def _date(value: str | None, tz: tzinfo) -> datetime | None:
    if value is None:
        return None
    return datetime.fromisoformat(value).replace(hour=12, tzinfo=tz)


async def create_demo_user(session: AsyncSession) -> User:
    """Create the demo user."""
    user = await user_service.create_user(
        session,
        UserCreate(
            email='demo@example.com',
            username=DEMO_USERNAME,
            given_name='Demo',
            family_name='Collector',
            password='not-a-real-password',
        ),
    )
    print(f'  Created user "{user.username}"')
    return user


async def create_brands(session: AsyncSession) -> dict[str, Brand]:
    """Create seed brands, reusing any that already exist."""
    brand_map: dict[str, Brand] = {}
    for name in BRAND_NAMES:
        existing = await session.scalar(select(Brand).where(Brand.name == name))
        brand_map[name] = existing or await brand_service.create_brand(
            session, BrandCreate(name=name),
        )
    print(f'  Ensured {len(brand_map)} brands')
    return brand_map


async def create_sneakers(
    session: AsyncSession, user: User, brand_map: dict[str, Brand], tz: tzinfo,
) -> None:
    """Create seed sneakers spread over several years."""
    for data in SNEAKERS:
        await sneaker_service.create_sneaker(
            session,
            user.id,
            SneakerCreate(
                brand_id=brand_map[data['brand']].id,
                model=data['model'],
                colorway=data['colorway'],
                price=data['price'],
                retail_price=data['retail_price'],
                purchase_date=_date(data['purchase_date'], tz),
                size=Decimal(data['size']),
                sold=data.get('sold', False),
                sold_date=_date(data.get('sold_date'), tz),
                sold_price=data.get('sold_price'),
            ),
        )
    years = sorted({data['purchase_date'][:4] for data in SNEAKERS})
    print(f'  Created {len(SNEAKERS)} sneakers ({", ".join(years)})')


async def clear_data(session: AsyncSession) -> None:
    """Delete the demo user; their sneakers go with them. Brands are kept."""
    count = await session.scalar(
        select(func.count()).select_from(Sneaker).join(User).where(User.username == DEMO_USERNAME),
    )
    await session.execute(delete(User).where(User.username == DEMO_USERNAME))
    print(f'  Deleted demo user and {count} sneakers')


async def populate(force: bool = False) -> None:
    """Populate the database with demo data."""
    settings = get_settings()
    engine = create_engine_from_settings(settings)
    session_factory = create_session_factory(engine)

    async with session_factory() as session:
        try:
            existing = await user_service.get_user_by_username(session, DEMO_USERNAME)
            if existing is not None:
                if not force:
                    print('Demo user already exists. Use --force to recreate.')
                    return
                await clear_data(session)

            user = await create_demo_user(session)
            brand_map = await create_brands(session)
            await create_sneakers(session, user, brand_map, settings.tzinfo)
            await session.commit()
            print('Seed data created successfully.')
        except Exception:
            await session.rollback()
            raise
        finally:
            await engine.dispose()


async def clear() -> None:
    """Clear demo user data."""
    settings = get_settings()
    engine = create_engine_from_settings(settings)
    session_factory = create_session_factory(engine)

    async with session_factory() as session:
        try:
            await clear_data(session)
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await engine.dispose()


def main() -> None:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )
    settings = get_settings()
    if not settings.dev_mode:
        print(
            'ERROR: Seed script requires DEV_MODE=true.\n'
            'This script modifies data directly and must only run against a local dev database.'
        )
        raise SystemExit(1)

    parser = argparse.ArgumentParser(description='Seed the dev database with a demo collection.')
    subparsers = parser.add_subparsers(dest='command', required=True)

    populate_parser = subparsers.add_parser('populate', help='Populate database with demo data')
    populate_parser.add_argument(
        '--force', action='store_true',
        help='Clear existing demo data before populating',
    )

    subparsers.add_parser('clear', help='Remove demo user data')

    args = parser.parse_args()

    if args.command == 'populate':
        asyncio.run(populate(force=args.force))
    elif args.command == 'clear':
        asyncio.run(clear())


if __name__ == '__main__':
    main()
