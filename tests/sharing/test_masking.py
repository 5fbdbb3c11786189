"""Tests for contact masking: preview never exposes the real value."""
import pytest

from app.sharing.masking import mask_contact, mask_person, masked_contact, full_contact
from app.sharing.models import GatedItem


def test_mobile_masked_exactly():
    assert mask_contact("13812345678") == "138****5678"


def test_mobile_with_spaces_is_stripped():
    assert mask_contact(" 13912345678 ") == "139****5678"


def test_landline_keeps_area_and_last_two():
    assert mask_contact("010-12345678") == "010-******78"


def test_landline_branch_requires_digits():
    # «abc-defgh» не телефон: общая маска, а не исходная строка
    assert mask_contact("abc-defgh") == "ab*****gh"


def test_generic_contact_keeps_edges_and_length():
    masked = mask_contact("wechat_id_abc")
    assert masked == "we*********bc"
    assert len(masked) == len("wechat_id_abc")


@pytest.mark.parametrize("value", ["1234", "ab", "x"])
def test_short_values_fully_starred(value):
    assert mask_contact(value) == "*" * len(value)


@pytest.mark.parametrize(
    "value, expected",
    [("12345", "****5"), ("abcdef", "*****f"), ("abcdefg", "ab***fg")],
)
def test_mid_length_values_show_at_most_one_char(value, expected):
    assert mask_contact(value) == expected


@pytest.mark.parametrize("value", ["", None])
def test_empty_contact(value):
    assert mask_contact(value) == ""


def test_mask_person():
    assert mask_person("张三丰") == "张**"
    assert mask_person("李") == "*"
    assert mask_person(None) == ""


def test_masked_contact_detail():
    item = GatedItem(
        id="j1",
        publish_day="2024-01-01",
        contact="13812345678",
        contact_person="王师傅",
        contact_time="9:00-18:00",
    )
    detail = masked_contact(item)
    assert detail.masked is True
    assert detail.contact == "138****5678"
    assert detail.contact_person == "王**"
    assert detail.contact_time == "9:00-18:00"
    assert "13812345678" not in detail.model_dump_json()


def test_full_contact_detail():
    item = GatedItem(id="j1", publish_day="2024-01-01", contact="13812345678", contact_person="王师傅")
    detail = full_contact(item)
    assert detail.masked is False
    assert detail.contact == "13812345678"
    assert detail.contact_person == "王师傅"
