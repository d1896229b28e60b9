from sqlalchemy import TIMESTAMP, Column, Integer, Text, func, text

from app.database import Base


class User(Base):
    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column("usuario", Text, nullable=False, unique=True)
    email = Column(Text, nullable=False, unique=True)
    password_digest = Column("contrasena", Text, nullable=False)
    created_at = Column("fecha_creacion", TIMESTAMP, server_default=func.current_timestamp())
    active = Column("activo", Integer, default=1, server_default=text("1"))
