"""SQLAlchemy models defining User, Post and PostTag for the blog."""
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from database import Base


def utcnow():
    return datetime.now(timezone.utc)


class User(Base):
    """Registered author. Only the password hash is stored."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(20), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    posts = relationship("Post", back_populates="owner")


class Post(Base):
    """Blog post. ``username`` is a snapshot of the author's name at creation."""
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(Text, nullable=False)
    body = Column(Text, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    username = Column(String(20), index=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    owner = relationship("User", back_populates="posts")
    tag_links = relationship("PostTag",
                             order_by="PostTag.position",
                             cascade="all, delete-orphan",
                             back_populates="post")

    @property
    def tags(self):
        return [link.name for link in self.tag_links]

    @tags.setter
    def tags(self, names):
        self.tag_links = [PostTag(name=name, position=i) for i, name in enumerate(names)]

    @property
    def user(self):
        return {"id": self.user_id, "username": self.username}


class PostTag(Base):
    """One tag of a post; ``position`` keeps the order the author gave."""
    __tablename__ = "post_tags"

    id = Column(Integer, primary_key=True)
    post_id = Column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), index=True, nullable=False)
    position = Column(Integer, nullable=False)
    name = Column(String(255), index=True, nullable=False)

    post = relationship("Post", back_populates="tag_links")
