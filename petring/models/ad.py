from sqlalchemy import BigInteger, Boolean, Column, Integer, String

from petring.db.session import Base


class Ad(Base):
    __tablename__ = "ads"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String, unique=True, index=True, nullable=False)  # owning member
    discord_id = Column(BigInteger, unique=True, index=True, nullable=False)
    image_url = Column(String, unique=True, nullable=False)
    ad_url = Column(String, nullable=False)
    verified = Column(Boolean, nullable=False, default=False)
    created_at = Column(String, nullable=False)
    edited_at = Column(String, nullable=False, default="")
    verified_at = Column(String, nullable=False, default="")
