import pytest
from common.changes import UNSET, ProfileChanges
from owner.services import OwnerProfileChanges


def test_absent_fields_are_unset_and_null_is_kept():
    changes = OwnerProfileChanges.from_data({"short_bio": None, "full_name": "Asha"})

    assert changes.short_bio is None
    assert changes.full_name == "Asha"
    assert changes.email is UNSET
    assert changes.provided(("short_bio", "full_name", "gst_number")) == {"short_bio": None, "full_name": "Asha"}


def test_unknown_fields_are_rejected():
    with pytest.raises(TypeError):
        ProfileChanges.from_data({"short_bio": "owners only"})


@pytest.mark.parametrize("token, expected", [(UNSET, False), (None, False), ("", False), ("abc", True)])
def test_has_phone_token(token, expected):
    assert ProfileChanges(phone_verification_token=token).has_phone_token is expected


def test_unset_is_falsy_singleton():
    assert not UNSET
    assert type(UNSET)() is UNSET
    assert repr(UNSET) == "UNSET"
