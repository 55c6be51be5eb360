from sqlalchemy import Column, String

from designboard.db.base import BaseModel, JSONType


class User(BaseModel):
    __tablename__ = "users"

    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(100), nullable=False)
    password_hash = Column(String(255), nullable=True)  # пусто у пользователей без пароля
    image = Column(String(2048), nullable=True)
    preferences = Column(JSONType, nullable=False, default=dict)
