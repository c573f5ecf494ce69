import os

# The web app builds its store at import time; point it at an in-memory database.
os.environ.setdefault("REPAYMENT_DATABASE_URL", "sqlite://")
