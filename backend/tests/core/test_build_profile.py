"""Profile Builder — skills parsing, empty-field skipping, social links."""

import pytest

from devconnector.core.build_profile import build_profile_fields, split_skills
from devconnector.core.errors import PayloadValidationError


def test_skills_string_split_and_trimmed():
    assert split_skills("a, b, c") == ["a", "b", "c"]


def test_skills_drops_blank_items():
    assert split_skills(" python ,, ,go ") == ["python", "go"]


def test_skills_list_items_trimmed():
    assert split_skills([" a", "b "]) == ["a", "b"]


def test_empty_fields_are_not_included():
    fields = build_profile_fields({"status": "Dev", "company": "", "bio": None})
    assert "company" not in fields
    assert "bio" not in fields
    assert fields["status"] == "Dev"


def test_social_links_collected():
    fields = build_profile_fields({
        "status": "Dev", "skills": "x", "twitter": "t", "linkedin": "",
    })
    assert fields["social"] == {"twitter": "t"}
    assert fields["skills"] == ["x"]


def test_social_always_present():
    assert build_profile_fields({"status": "Dev"})["social"] == {}


def test_skills_that_split_to_nothing_are_rejected():
    with pytest.raises(PayloadValidationError) as exc:
        build_profile_fields({"status": "Dev", "skills": ", ,"})
    assert exc.value.to_response() == {
        "errors": [{"msg": "skills is required", "param": "skills"}],
    }
