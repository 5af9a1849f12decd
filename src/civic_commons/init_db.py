"""Create the database schema and optionally load sample civic data.

Usage::

    python -m civic_commons.init_db [--seed]
"""

from __future__ import annotations

import argparse
import logging
from datetime import timedelta

from civic_commons.core.logging import configure_logging
from civic_commons.core.settings import settings
from civic_commons.db.session import create_tables
from civic_commons.db.time import utcnow
from civic_commons.models import Event, Forum, Petition, Representative, User
from civic_commons.storage import Storage
from civic_commons.storage.sql import session_scope

logger = logging.getLogger(__name__)

SAMPLE_USER_ID = "sample-user"


def seed_sample_data(storage: Storage) -> bool:
    """Insert sample forums, events, petitions and representatives.

    Counters start at zero because no ledger rows are seeded. Returns
    ``False`` without writing anything when forums already exist.
    """
    if storage.list_forums():
        logger.info("Database already contains forums; skipping sample data")
        return False

    now = utcnow()
    with storage.transaction():
        storage.upsert_user(User(id=SAMPLE_USER_ID, first_name="Sample", last_name="Organizer"))

        for forum in (
            Forum(
                name="Downtown Community",
                description="Discussions about downtown development, events, and local business",
                type="location",
                location="Downtown",
            ),
            Forum(
                name="Riverside District",
                description="Community updates and discussions for the Riverside neighborhood",
                type="location",
                location="Riverside",
            ),
            Forum(
                name="Education & Schools",
                description="Share thoughts on local education policies and school board decisions",
                type="topic",
            ),
            Forum(
                name="Transportation",
                description="Discuss public transit, bike lanes, and traffic improvements",
                type="topic",
            ),
        ):
            storage.create_forum(forum)

        for event in (
            Event(
                title="Town Hall Meeting - Infrastructure Updates",
                description=(
                    "Join us for an important discussion about upcoming infrastructure "
                    "improvements including road repairs and new bike lanes."
                ),
                location="City Hall, Main Auditorium",
                start_time=now + timedelta(days=7),
                end_time=now + timedelta(days=7, hours=2),
                organizer_id=SAMPLE_USER_ID,
                category="town_hall",
            ),
            Event(
                title="Community Clean-up Day",
                description=(
                    "Volunteer to help clean up our local parks and waterways. "
                    "Supplies provided!"
                ),
                location="Riverside Park",
                start_time=now + timedelta(days=14),
                end_time=now + timedelta(days=14, hours=4),
                organizer_id=SAMPLE_USER_ID,
                category="volunteer",
            ),
            Event(
                title="Budget Planning Workshop",
                description=(
                    "Learn about the city budget process and provide input on spending "
                    "priorities."
                ),
                start_time=now + timedelta(days=10),
                end_time=now + timedelta(days=10, minutes=90),
                organizer_id=SAMPLE_USER_ID,
                category="workshop",
                is_virtual=True,
                meeting_url="https://meet.example.com/budget-workshop",
            ),
        ):
            storage.create_event(event)

        for petition in (
            Petition(
                title="Install Better Lighting in Central Park",
                description=(
                    "Central Park needs improved lighting for safety during evening hours. "
                    "Installing LED lighting would make the park safer and more accessible "
                    "to all community members."
                ),
                target_signatures=500,
                creator_id=SAMPLE_USER_ID,
                category="safety",
                deadline=now + timedelta(days=30),
            ),
            Petition(
                title="Support Local Business Recovery Program",
                description=(
                    "This petition calls for the city to create a small business recovery "
                    "grant program to help our community's economic backbone."
                ),
                target_signatures=1000,
                creator_id=SAMPLE_USER_ID,
                category="other",
                deadline=now + timedelta(days=45),
            ),
            Petition(
                title="Create More Bike-Friendly Streets",
                description=(
                    "We need protected bike lanes and better cycling infrastructure to "
                    "encourage eco-friendly transportation and improve air quality."
                ),
                target_signatures=750,
                creator_id=SAMPLE_USER_ID,
                category="transportation",
                deadline=now + timedelta(days=60),
            ),
        ):
            storage.create_petition(petition)

        for representative in (
            Representative(
                name="Maria Rodriguez",
                title="Mayor",
                level="local",
                email="mayor@cityexample.gov",
                phone="(555) 123-4567",
                biography=(
                    "Mayor Rodriguez has served our community for over 8 years, focusing "
                    "on sustainable development and community engagement."
                ),
                party="Independent",
                website="https://www.cityexample.gov/mayor",
            ),
            Representative(
                name="James Thompson",
                title="City Council Member - District 3",
                level="local",
                electorate="District 3",
                email="jthompson@citycouncil.gov",
                phone="(555) 234-5678",
                biography=(
                    "Council Member Thompson represents District 3 and chairs the "
                    "Transportation Committee."
                ),
                website="https://www.cityexample.gov/council/thompson",
            ),
            Representative(
                name="Sarah Chen",
                title="State Representative - District 42",
                level="state",
                electorate="District 42",
                email="sarah.chen@statehouse.gov",
                phone="(555) 345-6789",
                biography=(
                    "Representative Chen focuses on education funding and environmental "
                    "protection at the state level."
                ),
                party="Democrat",
                website="https://statehouse.gov/representatives/chen",
            ),
        ):
            storage.create_representative(representative)

    logger.info("Database seeded successfully with sample data")
    return True


def init_db(seed: bool = False) -> None:
    """Initialize the database by creating all tables."""
    create_tables()
    logger.info("Created tables on %s", settings.effective_database_url)
    if seed:
        with session_scope() as storage:
            seed_sample_data(storage)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Create the Civic Commons database schema.")
    parser.add_argument("--seed", action="store_true", help="load sample civic data")
    args = parser.parse_args(argv)

    configure_logging(settings.log_level)
    init_db(seed=args.seed)


if __name__ == "__main__":
    main()
