import uuid

from resume_review.analysis.identifiers import is_valid_id, new_id


class TestNewId:
    def test_returns_uuid_string(self) -> None:
        value = new_id()
        assert isinstance(value, str)
        assert str(uuid.UUID(value)) == value

    def test_unique_across_ten_thousand_generations(self) -> None:
        ids = [new_id() for _ in range(10_000)]
        assert len(set(ids)) == 10_000


class TestIsValidId:
    def test_accepts_non_empty_string(self) -> None:
        assert is_valid_id("abc")

    def test_rejects_empty_and_blank(self) -> None:
        assert not is_valid_id("")
        assert not is_valid_id("   ")

    def test_rejects_non_string(self) -> None:
        assert not is_valid_id(None)
        assert not is_valid_id(123)
