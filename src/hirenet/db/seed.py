from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from hirenet.db.models import Category, City, Country, State

DEFAULT_CATEGORIES: list[dict[str, str]] = [
    {"name": "Engineering", "description": "Software, hardware and infrastructure roles"},
    {"name": "Data & Analytics", "description": "Data science, analytics and BI"},
    {"name": "Design", "description": "Product, UX and visual design"},
    {"name": "Product Management", "description": "Product and program management"},
    {"name": "Sales", "description": "Account executives, business development"},
    {"name": "Marketing", "description": "Growth, content and brand"},
    {"name": "Operations", "description": "Operations, logistics and support"},
    {"name": "Finance", "description": "Accounting, finance and audit"},
    {"name": "Human Resources", "description": "Recruiting and people operations"},
]

GEOGRAPHY: list[dict[str, object]] = [
    {
        "name": "United States",
        "code": "US",
        "states": [
            {"name": "California", "code": "CA", "cities": ["Los Angeles", "San Diego", "San Francisco", "San Jose"]},
            {"name": "Texas", "code": "TX", "cities": ["Austin", "Dallas", "Houston", "San Antonio"]},
            {"name": "New York", "code": "NY", "cities": ["Albany", "Buffalo", "New York City"]},
            {"name": "Washington", "code": "WA", "cities": ["Bellevue", "Redmond", "Seattle"]},
            {"name": "Illinois", "code": "IL", "cities": ["Chicago", "Naperville"]},
        ],
    },
    {
        "name": "India",
        "code": "IN",
        "states": [
            {"name": "Karnataka", "code": "KA", "cities": ["Bengaluru", "Mysuru"]},
            {"name": "Maharashtra", "code": "MH", "cities": ["Mumbai", "Pune"]},
            {"name": "Telangana", "code": "TG", "cities": ["Hyderabad"]},
            {"name": "Tamil Nadu", "code": "TN", "cities": ["Chennai", "Coimbatore"]},
        ],
    },
    {
        "name": "Canada",
        "code": "CA",
        "states": [
            {"name": "Ontario", "code": "ON", "cities": ["Ottawa", "Toronto", "Waterloo"]},
            {"name": "British Columbia", "code": "BC", "cities": ["Vancouver", "Victoria"]},
            {"name": "Quebec", "code": "QC", "cities": ["Montreal", "Quebec City"]},
        ],
    },
    {
        "name": "United Kingdom",
        "code": "GB",
        "states": [
            {"name": "England", "code": "ENG", "cities": ["London", "Manchester", "Cambridge"]},
            {"name": "Scotland", "code": "SCT", "cities": ["Edinburgh", "Glasgow"]},
        ],
    },
]


def seed_categories(session: Session) -> int:
    existing = set(session.scalars(select(Category.name)).all())
    inserted = 0
    for item in DEFAULT_CATEGORIES:
        if item["name"] in existing:
            continue
        session.add(Category(name=item["name"], description=item["description"]))
        inserted += 1
    session.commit()
    return inserted


def seed_geography(session: Session) -> int:
    existing = set(session.scalars(select(Country.code)).all())
    inserted = 0
    for country_item in GEOGRAPHY:
        if country_item["code"] in existing:
            continue
        country = Country(name=country_item["name"], code=country_item["code"])
        session.add(country)
        session.flush()
        for state_item in country_item["states"]:
            state = State(country_id=country.id, name=state_item["name"], code=state_item["code"])
            session.add(state)
            session.flush()
            for city_name in state_item["cities"]:
                session.add(City(state_id=state.id, name=city_name))
        inserted += 1
    session.commit()
    return inserted
