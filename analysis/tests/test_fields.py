from patent_analysis.fields import normalize_classification, split_classifications, split_values


def test_split_values_on_all_separators() -> None:
    assert split_values("A Corp; B Inc,C Ltd\nD KK") == ["A Corp", "B Inc", "C Ltd", "D KK"]


def test_split_values_drops_blank_tokens() -> None:
    assert split_values(" ; ,\n") == []
    assert split_values("") == []
    assert split_values(None) == []
    assert split_values("A Corp;;  ") == ["A Corp"]


def test_six_character_code_is_unchanged() -> None:
    assert normalize_classification("G06F16") == "G06F16"


def test_long_code_is_truncated() -> None:
    assert normalize_classification("G06F16/30") == "G06F16"


def test_trailing_mark_is_stripped_after_truncation() -> None:
    assert normalize_classification("H01M4/13") == "H01M4"
    assert normalize_classification("A61K8-02") == "A61K8"


def test_short_code_keeps_trailing_mark() -> None:
    assert normalize_classification("H01M4/") == "H01M4/"


def test_split_classifications() -> None:
    assert split_classifications("G06F16/30, H04L9/32;  ") == ["G06F16", "H04L9"]
