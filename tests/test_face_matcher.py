import pytest

from services.errors import ValidationError
from services.face_matcher import match_face, recognize_face


def test_empty_gallery_never_matches():
    assert match_face([0.1, 0.2, 0.3], []) is None


def test_match_just_inside_threshold():
    match = match_face([0.59, 0.0, 0.0], [("alice", [0.0, 0.0, 0.0])], threshold=0.6)

    assert match.identity == "alice"
    assert match.distance == pytest.approx(0.59)


def test_distance_equal_to_threshold_is_no_match():
    assert match_face([0.6, 0.0, 0.0], [("alice", [0.0, 0.0, 0.0])], threshold=0.6) is None


def test_nearest_entry_wins():
    gallery = [
        ("far", [0.5, 0.0]),
        ("near", [0.1, 0.0]),
        ("middle", [0.3, 0.0]),
    ]
    match = match_face([0.0, 0.0], gallery)
    assert match.identity == "near"
    assert match.distance == pytest.approx(0.1)


def test_tie_goes_to_first_entry():
    gallery = [("first", [0.2, 0.0]), ("second", [-0.2, 0.0])]
    assert match_face([0.0, 0.0], gallery).identity == "first"


def test_length_mismatch_is_rejected():
    with pytest.raises(ValidationError):
        match_face([0.0, 0.0], [("alice", [0.0, 0.0, 0.0])])


def test_non_numeric_probe_is_rejected():
    with pytest.raises(ValidationError):
        match_face(["a", "b"], [("alice", [0.0, 0.0])])


def test_recognize_face_result():
    class Person:
        name = "Alice"

    alice = Person()
    result = recognize_face([0.0, 0.1], [(alice, [0.0, 0.0])])
    assert result["success"] is True
    assert result["user"] is alice
    assert result["message"] == "Welcome, Alice!"

    result = recognize_face([5.0, 5.0], [(alice, [0.0, 0.0])])
    assert result == {
        "success": False,
        "message": "Face not recognized. Please try again or register first.",
    }
