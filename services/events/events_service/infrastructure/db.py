from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from events_service.core_settings import get_settings
from events_service.domain.models import Base

settings = get_settings()
DATABASE_URL = settings.database_url

connect_options = {}
if DATABASE_URL.startswith("sqlite"):
    connect_options["connect_args"] = {"check_same_thread": False}
    if DATABASE_URL in ("sqlite://", "sqlite:///:memory:"):
        connect_options["poolclass"] = StaticPool

engine = create_engine(DATABASE_URL, echo=False, future=True, **connect_options)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)

def get_db() -> Session:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_models():
    Base.metadata.create_all(engine)
