from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Every model in jobtrack.db.models subclasses Base; importing that package
# registers all tables on Base.metadata (init_db, alembic env, tests).
