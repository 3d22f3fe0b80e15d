"""Demo accounts and catalog for local development."""

import logging
from threading import Lock

from sqlalchemy.orm import Session

from portal.auth.passwords import hash_password
from portal.auth.principal import first_active_tool_per_category
from portal.models.selection import Selection
from portal.models.tool import Tool
from portal.models.user import User

logger = logging.getLogger(__name__)

DEMO_USERS = [
    ('Admin User', 'admin@example.com', 'AdminPass123!', 'admin'),
    ('Regular User', 'user@example.com', 'UserPass123!', 'user'),
]
DEMO_REGULAR_USER_EMAIL = 'user@example.com'

DEMO_TOOLS = [
    ('ReliefWeb', 'KNOWLEDGE', 'https://reliefweb.int', 'Humanitarian updates and analysis.', '🌍'),
    ('World Bank Data', 'KNOWLEDGE', 'https://data.worldbank.org', 'Global development indicators.', '📊'),
    ('Coursera', 'LEARNING_SPACE', 'https://www.coursera.org', 'Online courses for professional growth.', '🎓'),
    ('Khan Academy', 'LEARNING_SPACE', 'https://www.khanacademy.org', 'Free educational content and lessons.', '📘'),
    ('Trello', 'MY_WORK_SPACE', 'https://trello.com', 'Task management and collaboration boards.', '✅'),
    ('Google Drive', 'MY_WORK_SPACE', 'https://drive.google.com', 'Cloud file storage and collaboration.', '🗂️'),
    ('Slack', 'COMMUNITY', 'https://slack.com', 'Community and team communication.', '💬'),
    ('LinkedIn Groups', 'COMMUNITY', 'https://www.linkedin.com/groups', 'Professional networking communities.', '🤝'),
    ('Devex Funding', 'NEW_FUNDS_AND_TALENTS', 'https://www.devex.com/funding', 'Development funding opportunities.', '💡'),
    ('Impactpool', 'NEW_FUNDS_AND_TALENTS', 'https://www.impactpool.org', 'Social impact jobs and talent portal.', '🚀'),
]

_seed_lock = Lock()


def seed_demo_data(db: Session) -> None:
    with _seed_lock:
        if db.query(User.id).first() is None:
            for name, email, password, role in DEMO_USERS:
                db.add(User(name=name, email=email, password_hash=hash_password(password), role=role))
            logger.info('Seeded %d demo users.', len(DEMO_USERS))

        if db.query(Tool.id).first() is None:
            for name, category, url, description, icon in DEMO_TOOLS:
                db.add(Tool(name=name, category=category, url=url, description=description, icon=icon, is_active=True))
            logger.info('Seeded %d demo tools.', len(DEMO_TOOLS))

        db.flush()

        regular_user = db.query(User).filter(User.email == DEMO_REGULAR_USER_EMAIL).first()
        if regular_user is not None:
            has_selections = db.query(Selection.id).filter(Selection.user_id == regular_user.id).first()
            if has_selections is None:
                for tool_id in first_active_tool_per_category(db):
                    db.add(Selection(user_id=regular_user.id, tool_id=tool_id))

        db.commit()
