from sqlalchemy import BigInteger, Boolean, Column, Integer, String

from petring.db.session import Base


class Member(Base):
    __tablename__ = "members"
    # ids define ring order and must never be handed out twice
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String, unique=True, index=True, nullable=False)
    discord_id = Column(BigInteger, unique=True, index=True, nullable=False)
    url = Column(String, unique=True, nullable=False)
    verified = Column(Boolean, nullable=False, default=False)
    created_at = Column(String, nullable=False)
    edited_at = Column(String, nullable=False, default="")
    verified_at = Column(String, nullable=False, default="")
