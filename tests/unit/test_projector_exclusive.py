import pytest

from objectprojector import (
    MemberKind,
    MemberNotFoundError,
    NullValueBehavior,
    Projector,
    create_projection,
)
from tests.models import Pair, Row, Shadowed, User


def test_default_projector_produces_empty_projection(user) -> None:
    assert Projector().create_projection(user) == {}


def test_static_create_projection_returns_requested_members(user) -> None:
    projection = create_projection(user, ["user_id", "name", "display_name"])

    assert projection == {"user_id": 7, "name": "Ada", "display_name": "ADA"}


def test_static_create_projection_accepts_single_name(user) -> None:
    assert create_projection(user, "name") == {"name": "Ada"}


def test_null_members_are_skipped_by_default(user) -> None:
    projector = Projector()
    projector.include_members(["user_id", "email"])

    projection = projector.create_projection(user)

    assert projection == {"user_id": 7}
    assert "email" not in projection


def test_null_members_are_kept_when_nulls_included(user) -> None:
    projector = Projector()
    projector.include_members(["user_id", "email"])
    projector.null_value_behavior = NullValueBehavior.INCLUDE_NULLS

    assert projector.create_projection(user) == {"user_id": 7, "email": None}


def test_include_as_renames_output_key() -> None:
    source = {"UserId": 7}
    projector = Projector()
    projector.include_as("UserId", "id")

    assert projector.create_projection(source) == {"id": 7}


def test_rename_applies_to_property_and_field_rules(user) -> None:
    projector = Projector()
    projector.include_property("display_name")
    projector.include_field("user_id")
    projector.rename_as("display_name", "label")
    projector.rename_as("user_id", "id")

    assert projector.create_projection(user) == {"label": "ADA", "id": 7}


def test_unknown_member_raises(user) -> None:
    projector = Projector()
    projector.include_member("Nonexistent")

    with pytest.raises(MemberNotFoundError, match="User has no readable member named 'Nonexistent'") as info:
        projector.create_projection(user)

    assert info.value.name == "Nonexistent"
    assert info.value.kind is None
    assert info.value.source_type is User


def test_property_rule_does_not_resolve_fields(user) -> None:
    projector = Projector()
    projector.include_property("user_id")

    with pytest.raises(MemberNotFoundError) as info:
        projector.create_projection(user)
    assert info.value.kind is MemberKind.PROPERTY


def test_field_rule_does_not_resolve_properties(user) -> None:
    projector = Projector()
    projector.include_field("display_name")

    with pytest.raises(MemberNotFoundError, match="no readable field"):
        projector.create_projection(user)


def test_private_and_write_only_members_are_not_resolvable(user) -> None:
    for name in ("_password_hash", "password", "greet"):
        projector = Projector()
        projector.include_member(name)
        with pytest.raises(MemberNotFoundError):
            projector.create_projection(user)


def test_member_rule_prefers_property_over_field() -> None:
    projector = Projector()
    projector.include_member("code")

    assert projector.create_projection(Shadowed()) == {"code": "property"}


def test_field_pass_overwrites_earlier_passes() -> None:
    projector = Projector()
    projector.include_member("code")
    projector.include_field("code")

    assert projector.create_projection(Shadowed()) == {"code": "field"}


def test_property_pass_overwrites_member_pass_on_renamed_collision(user) -> None:
    projector = Projector()
    projector.include_as("name", "label")
    projector.include_property("display_name")
    projector.rename_as("display_name", "label")

    assert projector.create_projection(user) == {"label": "ADA"}


def test_exclusions_are_ignored_in_exclusive_mode(user) -> None:
    projector = Projector()
    projector.include_member("name")
    projector.exclude_member("name")
    projector.exclude_field("name")

    assert projector.create_projection(user) == {"name": "Ada"}


def test_including_twice_is_idempotent(user) -> None:
    once = Projector()
    once.include_member("name")
    twice = Projector()
    twice.include_member("name")
    twice.include_member("name")

    assert twice.included_member_names == ("name",)
    assert once.create_projection(user) == twice.create_projection(user)


def test_repeated_projection_is_stable_and_fresh(user) -> None:
    projector = Projector(user)
    projector.include(["user_id", "name"])

    first = projector.create_projection()
    second = projector.create_projection()

    assert first == second
    assert first is not second


def test_projection_follows_registration_order(user) -> None:
    projector = Projector()
    projector.include(["name", "user_id", "display_name"])

    assert list(projector.create_projection(user)) == ["name", "user_id", "display_name"]


def test_getter_errors_propagate() -> None:
    class Broken:
        @property
        def value(self):
            raise RuntimeError("boom")

    projector = Projector()
    projector.include_member("value")

    with pytest.raises(RuntimeError, match="boom"):
        projector.create_projection(Broken())


def test_member_not_found_keeps_its_attributes(user) -> None:
    projector = Projector()
    projector.include_field("missing_field")

    with pytest.raises(AttributeError) as info:
        projector.create_projection(user)

    assert info.value.name == "missing_field"
    assert info.value.kind is MemberKind.FIELD


def test_named_tuple_members_are_projected() -> None:
    assert create_projection(Pair(1, 2), ["x"]) == {"x": 1}
    assert create_projection(Row(1, "a"), ["name", "label"]) == {"name": "a", "label": "1:a"}


def test_mapping_keys_with_leading_underscore_are_projected() -> None:
    assert create_projection({"_id": 5, "name": "Ada"}, ["_id"]) == {"_id": 5}


def test_batch_property_and_field_inclusion(user) -> None:
    projector = Projector()
    projector.include_properties(["display_name", "nickname"])
    projector.include_fields(["user_id", "salt"])

    assert projector.included_property_names == ("display_name", "nickname")
    assert projector.included_field_names == ("user_id", "salt")
    assert projector.create_projection(user) == {
        "display_name": "ADA",
        "user_id": 7,
        "salt": b"\x01\x02",
    }
