# SQLAlchemy models and the note colour palette
