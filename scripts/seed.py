from app.core.config import settings
from app.core.logging import setup_logging
from app.db.session import open_session, init_db

from app.db.seed import seed_all


def run_seed():
    setup_logging(settings.LOG_LEVEL)
    init_db()
    with open_session() as session:
        seed_all(session=session, seed_path=settings.SEED_PATH)


if __name__ == "__main__":
    run_seed()
