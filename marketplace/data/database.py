# marketplace/data/database.py
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from marketplace.utils.settings import DATABASE_URL

Base = declarative_base()


def make_engine(url: str = DATABASE_URL):
    if url.startswith("sqlite"):
        # sqlite w pamieci: jedno polaczenie dzielone przez watki
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url, pool_pre_ping=True)


def make_session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


def init_db(engine):
    # import modeli zeby zarejestrowac tabele w Base.metadata
    import marketplace.data.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
