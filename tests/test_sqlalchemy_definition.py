"""Tests for jsonapi_deserializer.sqlalchemy.definition."""
from __future__ import annotations

import pytest
from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import declarative_base, relationship

from jsonapi_deserializer import ModelRegistry, deserialize
from jsonapi_deserializer.core.errors import TypeMismatchError
from jsonapi_deserializer.sqlalchemy import SQLAlchemyModelDefinition

Base = declarative_base()


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    articles = relationship("Article", back_populates="author")


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
    article = relationship("Article", back_populates="comments")


@pytest.fixture()
def registry() -> ModelRegistry:
    return ModelRegistry(
        [
            SQLAlchemyModelDefinition(User),
            SQLAlchemyModelDefinition(Article),
            SQLAlchemyModelDefinition(Comment),
        ]
    )


def _article(relationships: dict | None = None) -> dict:
    resource = {
        "type": "articles",
        "id": "1",
        "attributes": {"title": "JSON:API paints my bikeshed!", "body": "...", "views": 3},
    }
    if relationships:
        resource["relationships"] = relationships
    return resource


def test_names_default_to_class_and_table() -> None:
    definition = SQLAlchemyModelDefinition(Article)
    assert definition.singular == "article"
    assert definition.plural == "articles"


def test_fields_default_to_non_key_columns() -> None:
    assert SQLAlchemyModelDefinition(Article).fields == ("title", "body", "author_id")


def test_builds_orm_instance_with_coerced_id(registry: ModelRegistry) -> None:
    article = deserialize(registry, {"data": _article()}, "articles")
    assert isinstance(article, Article)
    assert article.id == 1
    assert article.type == "articles"
    assert article.title == "JSON:API paints my bikeshed!"
    assert not hasattr(article, "views")


def test_attaches_included_orm_instances(registry: ModelRegistry) -> None:
    document = {
        "data": _article(
            {
                "author": {"data": {"type": "users", "id": "9"}},
                "comments": {
                    "data": [
                        {"type": "comments", "id": "5"},
                        {"type": "comments", "id": "12"},
                    ]
                },
            }
        ),
        "included": [
            {"type": "users", "id": "9", "attributes": {"name": "Dan"}},
            {"type": "comments", "id": "5", "attributes": {"body": "First!"}},
            {"type": "comments", "id": "12", "attributes": {"body": "I like XML better"}},
        ],
    }
    article = deserialize(registry, document, "article")
    assert isinstance(article.author, User)
    assert article.author.id == 9
    assert article.author.name == "Dan"
    assert [comment.id for comment in article.comments] == [5, 12]
    assert all(comment.article is article for comment in article.comments)


def test_unresolved_to_one_sets_foreign_key(registry: ModelRegistry) -> None:
    document = {"data": _article({"author": {"data": {"type": "users", "id": "9"}}})}
    article = deserialize(registry, document, "articles")
    assert article.author_id == 9
    assert article.author is None


def test_unresolved_to_many_is_skipped(registry: ModelRegistry) -> None:
    document = {
        "data": _article({"comments": {"data": [{"type": "comments", "id": "5"}]}})
    }
    article = deserialize(registry, document, "articles")
    assert list(article.comments) == []


def test_client_generated_resource_has_no_id(registry: ModelRegistry) -> None:
    document = {"data": {"type": "users", "attributes": {"name": "Jane"}}}
    user = deserialize(registry, document, "users", require_id=False)
    assert user.id is None
    assert user.name == "Jane"


def test_type_mismatch_against_orm_names(registry: ModelRegistry) -> None:
    with pytest.raises(TypeMismatchError):
        deserialize(registry, {"data": {"type": "users", "id": "1"}}, "articles")
