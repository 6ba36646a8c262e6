"""Seed demo data on first startup.

Creates two users, the standard tags and four rooms with a handful of
folders so a fresh install has something to click through. Idempotent:
skips if any user already exists. Disabled with ``SEED_DEMO_DATA=false``
and refused in production by ``Settings.validate_production_config``.
"""

import logging

from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "demo-password"

DEMO_USERS = [
    {"email": "owner@example.com", "name": "Demo Owner"},
    {"email": "reviewer@example.com", "name": "Demo Reviewer"},
]

DEMO_TAGS = {
    "Financial": "#10B981",
    "Legal": "#3B82F6",
    "Tax": "#F59E0B",
    "Business": "#8B5CF6",
}

DEMO_ROOMS = [
    {
        "name": "Financial",
        "description": "Financial statements, budgets and economic analyses",
        "tags": ["Financial"],
        "folders": ["1.1 General Information", "1.2 Income Statement", "1.3 Balance Sheet"],
        "reviewer_role": "Viewer",
    },
    {
        "name": "Legal",
        "description": "Contracts, corporate documents and compliance",
        "tags": ["Legal"],
        "folders": ["2.1 Corporate", "2.2 Contracts"],
        "reviewer_role": "Editor",
    },
    {
        "name": "Tax",
        "description": "Tax filings and correspondence",
        "tags": ["Tax", "Financial"],
        "folders": ["3.1 Filings"],
        "reviewer_role": "Contributor",
    },
    {
        "name": "Business",
        "description": "Customers, suppliers and operations",
        "tags": ["Business"],
        "folders": [],
        "reviewer_role": None,
    },
]


def seed_demo_data(db: Session) -> int:
    """Load the demo data set if the database has no users.

    Args:
        db: An open SQLAlchemy session.

    Returns:
        Number of rooms seeded (0 if skipped).
    """
    from ..models import Role, User
    from ..schemas.folder import FolderCreate
    from ..schemas.room import RoomCreate
    from ..schemas.user import UserCreate
    from ..services import FolderService, RoomService, permission_service, tag_service, user_service

    existing = db.query(User).count()
    if existing > 0:
        logger.debug("Database has %d users, skipping seed", existing)
        return 0

    owner, reviewer = [
        user_service.create_user(db, UserCreate(password=DEMO_PASSWORD, **data))
        for data in DEMO_USERS
    ]

    for name, color in DEMO_TAGS.items():
        tag_service.find_or_create(db, name, color)
    db.commit()

    rooms = RoomService(db)
    folders = FolderService(db)
    for room_data in DEMO_ROOMS:
        room = rooms.create_room(
            RoomCreate(
                name=room_data["name"],
                description=room_data["description"],
                tags=room_data["tags"],
                creator_id=owner.id,
            )
        )
        for folder_name in room_data["folders"]:
            folders.create_folder(room.id, FolderCreate(name=folder_name, created_by=owner.id))
        if room_data["reviewer_role"]:
            permission_service.grant_access(
                db,
                room_id=room.id,
                user_id=reviewer.id,
                role=Role(room_data["reviewer_role"]),
                granted_by=owner.id,
            )

    logger.info(
        "Demo data seeded",
        extra={"rooms": len(DEMO_ROOMS), "users": len(DEMO_USERS), "tags": len(DEMO_TAGS)},
    )
    return len(DEMO_ROOMS)
