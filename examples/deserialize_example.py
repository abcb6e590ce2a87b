"""Example: deserialize a compound JSON:API document into SQLAlchemy models.

Run with:
    python examples/deserialize_example.py
"""
from __future__ import annotations

import logging

from sqlalchemy import Column, ForeignKey, Integer, String, create_engine
from sqlalchemy.orm import Session, declarative_base, relationship

from jsonapi_deserializer import JSONAPIErrorBuilder, ModelRegistry, deserialize
from jsonapi_deserializer.core.errors import DeserializationError
from jsonapi_deserializer.sqlalchemy import SQLAlchemyModelDefinition

DATABASE_URL = "sqlite:///:memory:"

Base = declarative_base()


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    articles = relationship("Article", back_populates="author")
    comments = relationship("Comment", back_populates="author")


class Article(Base):
    __tablename__ = "articles"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    body = Column(String, nullable=False)
    author_id = Column(Integer, ForeignKey("users.id"))
    author = relationship("User", back_populates="articles")
    comments = relationship("Comment", back_populates="article")


class Comment(Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True)
    body = Column(String, nullable=False)
    article_id = Column(Integer, ForeignKey("articles.id"))
    author_id = Column(Integer, ForeignKey("users.id"))
    article = relationship("Article", back_populates="comments")
    author = relationship("User", back_populates="comments")


registry = ModelRegistry(
    [
        SQLAlchemyModelDefinition(User),
        SQLAlchemyModelDefinition(Article),
        SQLAlchemyModelDefinition(Comment),
    ]
)

DOCUMENT = {
    "data": {
        "type": "articles",
        "id": "1",
        "attributes": {
            "title": "Nested includes explained",
            "body": "How include=comments.author expands related resources.",
        },
        "relationships": {
            "author": {"data": {"type": "users", "id": "1"}},
            "comments": {"data": [{"type": "comments", "id": "1"}]},
        },
    },
    "included": [
        {
            "type": "users",
            "id": "1",
            "attributes": {"name": "Jane Doe", "email": "jane.doe@example.com"},
        },
        {
            "type": "comments",
            "id": "1",
            "attributes": {"body": "Great article!"},
            "relationships": {"author": {"data": {"type": "users", "id": "2"}}},
        },
        {
            "type": "users",
            "id": "2",
            "attributes": {"name": "John Smith", "email": "john.smith@example.com"},
        },
    ],
}


def main() -> None:
    logging.basicConfig(level=logging.DEBUG)
    engine = create_engine(DATABASE_URL, echo=False)
    Base.metadata.create_all(engine)

    article = deserialize(registry, DOCUMENT, "articles")
    with Session(engine) as session:
        session.add(article)
        session.commit()
        print(article.title, "by", article.author.name)
        for comment in article.comments:
            print(" -", comment.body, "by", comment.author.name)

    try:
        deserialize(registry, {"data": {"type": "users", "id": "1"}}, "articles")
    except DeserializationError as exc:
        builder = JSONAPIErrorBuilder()
        print(exc.status, builder.document_from_exception(exc))


if __name__ == "__main__":
    main()
