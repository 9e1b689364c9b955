from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
import os
from dotenv import load_dotenv

load_dotenv()


def build_database_url() -> str:
    """DATABASE_URL tiene prioridad; si no, se arma con las variables DB_*"""
    url = os.getenv("DATABASE_URL")
    if url:
        # Supabase entrega URLs postgres:// o postgresql://; el driver es psycopg 3
        if url.startswith("postgres://"):
            url = "postgresql://" + url[len("postgres://"):]
        if url.startswith("postgresql://"):
            url = "postgresql+psycopg://" + url[len("postgresql://"):]
        return url
    return (
        f"postgresql+psycopg://{os.getenv('DB_USER')}:{os.getenv('DB_PASSWORD')}"
        f"@{os.getenv('DB_HOST')}:{os.getenv('DB_PORT', '5432')}/{os.getenv('DB_NAME')}"
    )


DATABASE_URL = build_database_url()

# Engine sincrónico; el esquema lo administra el almacén remoto
engine = create_engine(DATABASE_URL, pool_pre_ping=True)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

# NO hay create_all: las tablas y vistas ya existen en el almacén


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
