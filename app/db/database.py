# /app/db/database.py

import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Get the database URL from the environment.
# The second argument is a default value for local, single-user use.
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./records.db")

# Create the SQLAlchemy engine.
# The 'check_same_thread' argument is only needed for SQLite.
engine_args = {"connect_args": {"check_same_thread": False}} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, **engine_args)

# Create a SessionLocal class. Each instance of this class will be a database session.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind=None) -> None:
    """Creates the storage tables if they do not exist yet."""
    # Importing the registry makes every model known to the metadata.
    from .base import Base
    Base.metadata.create_all(bind=bind or engine)

