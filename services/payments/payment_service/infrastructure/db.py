from sqlalchemy import create_engine, select
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from payment_service.core_settings import get_settings
from payment_service.domain.models import Base, Status, DEFAULT_STATUSES

def _engine_options(url: str) -> dict:
    if not url.startswith("sqlite"):
        return {}
    options = {"connect_args": {"check_same_thread": False}}
    # In-memory SQLite lives on a single connection
    if url in ("sqlite://", "sqlite:///:memory:"):
        options["poolclass"] = StaticPool
    return options

settings = get_settings()
DATABASE_URL = settings.database_url
engine = create_engine(DATABASE_URL, echo=False, future=True, **_engine_options(DATABASE_URL))
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)

def get_db() -> Session:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def seed_statuses(db: Session) -> int:
    """Insert the default payment statuses that are missing. Returns how many were added."""
    existing = set(db.scalars(select(Status.status_id)).all())
    missing = [Status(status_id=sid, description=desc) for sid, desc in DEFAULT_STATUSES if sid not in existing]
    if missing:
        db.add_all(missing)
        db.commit()
    return len(missing)

def init_models():
    Base.metadata.create_all(engine)
    with SessionLocal() as db:
        seed_statuses(db)
