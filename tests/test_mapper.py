"""
Tests for SimpleCrud operations against an in-memory MongoDB.

These tests cover:
- get / get_by / get_list / get_list_df
- insert and identity handling
- delete_one / delete_many
- update / update_by
"""

import pandas as pd
import pytest
from bson import ObjectId

from mongo_crud import MappingError, MissingIdentityError
from tests.entities import Badge, Comment, Employee, Invoice, Order, Person, Tag, Ticket


class TestInsertAndGet:
    """Tests for insert followed by reads."""

    def test_insert_uses_pluralized_collection(self, crud, raw_db):
        crud.insert(Person(name="Ann", age=30))
        assert raw_db["people"].count_documents({"name": "Ann"}) == 1

    def test_get_by_field(self, crud):
        crud.insert(Person(name="Ann", age=30))
        p = crud.get_by(Person, "name", "Ann")
        assert p.name == "Ann"
        assert p.age == 30

    def test_insert_returns_identity_usable_by_get(self, crud):
        original = Person(name="Ann", age=30)
        object_id = crud.insert(original)

        assert ObjectId.is_valid(object_id)
        fetched = crud.get(Person, object_id)
        assert fetched == Person(id=object_id, name="Ann", age=30)

    def test_get_matches_get_by_identity(self, crud):
        object_id = crud.insert(Order(sku="A-1", quantity=2))
        assert crud.get(Order, object_id) == crud.get_by(Order, "_id", object_id)

    def test_empty_key_means_identity(self, crud):
        object_id = crud.insert(Order(sku="A-1"))
        assert crud.get_by(Order, "", object_id) == crud.get(Order, object_id)
        assert crud.get_by(Order, None, object_id).sku == "A-1"

    def test_get_missing_returns_none(self, crud):
        assert crud.get(Person, str(ObjectId())) is None
        assert crud.get_by(Person, "name", "Nobody") is None

    def test_insert_with_own_string_identity(self, crud):
        assert crud.insert(Person(id="ann", name="Ann")) == "ann"
        assert crud.get(Person, "ann").name == "Ann"

    def test_pydantic_round_trip(self, crud):
        object_id = crud.insert(Invoice(number="INV-7", total=12.5))
        inv = crud.get(Invoice, object_id)
        assert inv.id == object_id
        assert inv.number == "INV-7"
        assert inv.total == 12.5

    def test_lowercase_document_maps_onto_title_case_type(self, crud, raw_db):
        raw_db["employees"].insert_one({"name": "Bob", "age": 40, "badge": "x"})
        e = crud.get_by(Employee, "name", "Bob")
        assert e.Name == "Bob"
        assert e.Age == 40
        assert not hasattr(e, "badge")

    def test_undecodable_document(self, crud, raw_db):
        raw_db["badges"].insert_one({"code": "B1"})
        with pytest.raises(MappingError):
            crud.get_by(Badge, "code", "B1")

    def test_plain_class_without_default_constructor(self, crud, raw_db):
        raw_db["tickets"].insert_one({"title": "Broken login"})
        with pytest.raises(MappingError):
            crud.get_by(Ticket, "title", "Broken login")

    def test_insert_returns_own_identity_not_a_reference(self, crud):
        owner = ObjectId()
        object_id = crud.insert(Comment(author_id=owner, text="hi"))

        assert object_id != str(owner)
        fetched = crud.get(Comment, object_id)
        assert fetched == Comment(id=object_id, author_id=owner, text="hi")

    def test_hex_string_identity_stored_as_string(self, crud, raw_db):
        hex_id = str(ObjectId())
        raw_db["people"].insert_one({"_id": hex_id, "name": "Ann", "age": 30})

        p = crud.get(Person, hex_id)
        assert p == Person(id=hex_id, name="Ann", age=30)
        assert crud.delete_one(Person, None, hex_id) is True


class TestGetList:
    """Tests for multi-document reads."""

    def test_returns_every_match(self, crud):
        for name in ("Ann", "Bob", "Cid"):
            crud.insert(Person(name=name, age=30))
        crud.insert(Person(name="Dee", age=40))

        people = crud.get_list(Person, "age", 30)
        assert sorted(p.name for p in people) == ["Ann", "Bob", "Cid"]

    def test_no_match_is_empty_list(self, crud):
        assert crud.get_list(Person, "name", "Nobody") == []

    def test_dataframe(self, crud):
        crud.insert(Tag(label="red"))
        crud.insert(Tag(label="red"))
        df = crud.get_list_df(Tag, "label", "red")
        assert isinstance(df, pd.DataFrame)
        assert list(df.columns) == ["label"]
        assert len(df) == 2

    def test_dataframe_with_identity(self, crud):
        object_id = crud.insert(Person(name="Ann", age=30))
        df = crud.get_list_df(Person, "name", "Ann", include_id=True)
        assert list(df.columns) == ["_id", "name", "age"]
        assert df.loc[0, "_id"] == object_id

    def test_empty_dataframe_keeps_columns(self, crud):
        df = crud.get_list_df(Person, "name", "Nobody")
        assert df.empty
        assert list(df.columns) == ["name", "age"]


class TestDelete:
    """Tests for delete_one / delete_many."""

    def test_delete_one_missing(self, crud):
        assert crud.delete_one(Person, "name", "NoSuchName") is False

    def test_delete_many_missing(self, crud):
        assert crud.delete_many(Person, "name", "NoSuchName") == 0

    def test_delete_one_by_identity(self, crud):
        object_id = crud.insert(Person(name="Ann"))
        assert crud.delete_one(Person, None, object_id) is True
        assert crud.get(Person, object_id) is None

    def test_delete_many_then_list_is_empty(self, crud):
        for _ in range(3):
            crud.insert(Person(name="Ann"))
        assert crud.delete_many(Person, "name", "Ann") == 3
        assert crud.get_list(Person, "name", "Ann") == []


class TestUpdate:
    """Tests for update / update_by."""

    def test_update_by_field(self, crud, raw_db):
        crud.insert(Person(name="Ann", age=30))
        crud.update_by(Person(name="Ann", age=31), "name", "Ann")
        assert raw_db["people"].find_one({"name": "Ann"})["age"] == 31

    def test_update_by_identity(self, crud):
        object_id = crud.insert(Person(name="Ann", age=30))
        p = crud.get(Person, object_id)
        p.age = 31
        assert crud.update(p) is True
        assert crud.get(Person, object_id).age == 31

    def test_update_without_identity_is_noop(self, crud, raw_db):
        crud.insert(Person(name="Ann", age=30))
        assert crud.update(Person(name="Ann", age=99)) is False
        assert raw_db["people"].find_one({"name": "Ann"})["age"] == 30

    def test_update_without_identity_strict(self, crud):
        with pytest.raises(MissingIdentityError):
            crud.update(Person(name="Ann"), strict=True)

    def test_single_set_by_default(self, mock_crud):
        mock_crud.update_by(Person(name="Ann", age=31), "name", "Ann")
        col = mock_crud.db["people"]
        col.update_one.assert_called_once_with({"name": "Ann"}, {"$set": {"name": "Ann", "age": 31}})

    def test_per_field_writes(self, mock_crud):
        mock_crud.update_by(Person(name="Ann", age=31), "name", "Ann", per_field=True)
        col = mock_crud.db["people"]
        calls = [c.args for c in col.update_one.call_args_list]
        assert calls == [
            ({"name": "Ann"}, {"$set": {"name": "Ann"}}),
            ({"name": "Ann"}, {"$set": {"age": 31}}),
        ]

    def test_identity_is_never_set(self, mock_crud):
        object_id = str(ObjectId())
        mock_crud.update(Person(id=object_id, name="Ann", age=31))
        col = mock_crud.db["people"]
        filt, update = col.update_one.call_args.args
        assert filt == {"_id": ObjectId(object_id)}
        assert "_id" not in update["$set"]
