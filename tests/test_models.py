from datetime import datetime, timezone

import pytest

from api_key_manager.models import KeyRecord, KeyStatus


def test_key_record_defaults():
    record = KeyRecord()
    assert record.issuee is None
    assert record.is_active is True
    assert record.expiry_date is None


def test_to_dict_omits_unset_fields():
    assert KeyRecord(issuee="alice").to_dict() == {"issuee": "alice", "isActive": True}
    assert KeyRecord().to_dict() == {"isActive": True}


def test_to_dict_serializes_expiry_as_utc_iso():
    record = KeyRecord(issuee="alice", expiry_date=datetime(2030, 1, 2, 3, 4, 5))
    assert record.to_dict()["expiryDate"] == "2030-01-02T03:04:05+00:00"


def test_from_dict_parses_stored_shape():
    record = KeyRecord.from_dict(
        {"issuee": "bob", "isActive": False, "expiryDate": "2030-01-02T03:04:05+00:00"}
    )
    assert record == KeyRecord(
        issuee="bob",
        is_active=False,
        expiry_date=datetime(2030, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
    )


def test_from_dict_empty_is_issuee_less():
    record = KeyRecord.from_dict({})
    assert record.issuee is None
    assert record.is_active is True


def test_from_dict_accepts_datetime_and_record():
    expiry = datetime(2030, 1, 1, tzinfo=timezone.utc)
    assert KeyRecord.from_dict({"issuee": "a", "expiryDate": expiry}).expiry_date == expiry

    record = KeyRecord(issuee="a")
    assert KeyRecord.from_dict(record) is record


def test_no_expiry_distinct_from_epoch():
    epoch = KeyRecord.from_dict({"issuee": "a", "expiryDate": "1970-01-01T00:00:00+00:00"})
    assert epoch.expiry_date is not None
    assert KeyRecord.from_dict({"issuee": "a"}).expiry_date is None


def test_key_status_values():
    assert [s.name for s in KeyStatus] == ["DOES_NOT_EXIST", "INACTIVE", "EXPIRED", "VALID"]
    assert KeyStatus.VALID.value == 3


def test_from_dict_accepts_trailing_z():
    record = KeyRecord.from_dict({"issuee": "a", "expiryDate": "2030-01-02T03:04:05.000Z"})
    assert record.expiry_date == datetime(2030, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "value, error",
    [
        ("garbage", TypeError),
        (["issuee"], TypeError),
        ({"issuee": 42}, TypeError),
        ({"issuee": "a", "expiryDate": 1700000000000}, TypeError),
        ({"issuee": "a", "expiryDate": "not-a-date"}, ValueError),
    ],
)
def test_from_dict_rejects_malformed(value, error):
    with pytest.raises(error):
        KeyRecord.from_dict(value)
