"""
Seed the configured database with the sample Mathematics and Computer Science
catalogue. Existing courses and modules are removed first unless --keep is given.
"""
import sys

from coursemap.core.config import settings
from coursemap.core.database import SessionLocal, engine
from coursemap.core.logging import configure_logging
from coursemap.models.base import Base
from coursemap.services.sample_data import load_sample_data
import coursemap.models  # noqa: F401

configure_logging(settings.log_level)
Base.metadata.create_all(bind=engine)

db = SessionLocal()
try:
    modules, courses = load_sample_data(db, replace="--keep" not in sys.argv[1:])
finally:
    db.close()

print(f"Loaded {modules} modules and {courses} courses into {settings.database_url}")
