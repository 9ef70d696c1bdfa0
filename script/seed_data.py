#!/usr/bin/env python3
"""
Database Seed Script
Populate demo users and events into PostgreSQL

Features:
1. Create Users - one attendee and one gate operator
2. Create Events - a paid concert and a free meetup

Tickets are not seeded; book them through POST /api/ticket/book so capacity,
payments and notifications go through the normal path.
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy import select

from src.platform.database.orm_db_setting import create_db_and_tables, get_engine, get_session_maker
from src.service.admission.driven_adapter.model.event_model import EventModel
from src.service.admission.driven_adapter.model.user_model import UserModel


@dataclass
class EventConfig:
    name: str
    location: str
    days_ahead: int
    capacity: int
    ticket_price: Decimal


DEMO_USERS = [
    ('Demo Attendee', 'attendee@example.com'),
    ('Gate Operator', 'gate@example.com'),
]

DEMO_EVENTS = [
    EventConfig('Demo Concert', 'Main Hall', days_ahead=7, capacity=100, ticket_price=Decimal('500.00')),
    EventConfig('Community Meetup', 'Room 2', days_ahead=14, capacity=30, ticket_price=Decimal('0')),
]


async def seed_users() -> None:
    async with get_session_maker()() as session:
        existing = set((await session.scalars(select(UserModel.email))).all())
        for name, email in DEMO_USERS:
            if email in existing:
                print(f'   ⏭️  User {email} already exists')
                continue
            session.add(UserModel(name=name, email=email))
            print(f'   ✅ User {email} created')
        await session.commit()


async def seed_events() -> None:
    now = datetime.now(timezone.utc)
    async with get_session_maker()() as session:
        existing = set((await session.scalars(select(EventModel.name))).all())
        for config in DEMO_EVENTS:
            if config.name in existing:
                print(f'   ⏭️  Event "{config.name}" already exists')
                continue
            start = now + timedelta(days=config.days_ahead)
            session.add(
                EventModel(
                    name=config.name,
                    location=config.location,
                    start_date=start,
                    end_date=start + timedelta(hours=3),
                    capacity=config.capacity,
                    tickets_sold=0,
                    ticket_price=config.ticket_price,
                )
            )
            print(f'   ✅ Event "{config.name}" created (capacity {config.capacity})')
        await session.commit()


async def main() -> None:
    print('🌱 Seeding demo data...')
    try:
        await create_db_and_tables()
        print('👤 Users')
        await seed_users()
        print('🎫 Events')
        await seed_events()
        print('✅ Seed completed!')
    except Exception as e:
        print(f'❌ Seed failed: {e}')
        raise SystemExit(1)
    finally:
        await get_engine().dispose()


if __name__ == '__main__':
    asyncio.run(main())
