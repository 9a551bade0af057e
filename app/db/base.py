# app/db/base.py
from sqlalchemy.orm import declarative_base

# Single declarative Base shared by every model module
Base = declarative_base()
