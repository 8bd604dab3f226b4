import pytest

from src.Services.sections import SectionGroup, classify_section, normalize_section


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("PRISM", SectionGroup.PRISM),
        ("prism", SectionGroup.PRISM),
        ("HiSecOS", SectionGroup.HISECOS),
        (" hi sec os ", SectionGroup.HISECOS),
        ("HISECOS\t", SectionGroup.HISECOS),
        ("manual", SectionGroup.MANUAL),
        ("Manual ", SectionGroup.MANUAL),
        ("REGRESSION", SectionGroup.REGRESSION),
        ("re gression", SectionGroup.REGRESSION),
    ],
)
def test_known_sections_are_matched_ignoring_case_and_whitespace(raw, expected) -> None:
    assert classify_section(raw) is expected


@pytest.mark.parametrize("raw", ["", None, "   ", "sandbox", "prism-2", "manual testing"])
def test_unknown_sections_fall_back_to_other(raw) -> None:
    assert classify_section(raw) is SectionGroup.OTHER


def test_normalize_section() -> None:
    assert normalize_section("  Hi SecOS ") == "hisecos"
    assert normalize_section(None) == ""


def test_enum_values_are_display_labels() -> None:
    assert [g.value for g in SectionGroup] == ["PRISM", "HiSecOS", "Manual", "Regression", "Other"]
